"""
Admin edit commands.

Each command is a tagged record whose ``kind`` names the SyncController
method that applies it; ``Command`` is the discriminated union accepted by
``SyncController.apply`` and the admin command route.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field

from schemas import Post, PostDraft, Profile, Project, ProjectDraft, Skill, TimelineDraft, TimelineItem


class SetProfile(BaseModel):
    kind: Literal["set_profile"] = "set_profile"
    profile: Profile


class SetSkills(BaseModel):
    kind: Literal["set_skills"] = "set_skills"
    skills: List[Skill]


class AddSkill(BaseModel):
    kind: Literal["add_skill"] = "add_skill"
    name: str
    category: str


class DeleteSkill(BaseModel):
    kind: Literal["delete_skill"] = "delete_skill"
    name: str


class SetProjects(BaseModel):
    kind: Literal["set_projects"] = "set_projects"
    projects: List[Project]


class AddProject(BaseModel):
    kind: Literal["add_project"] = "add_project"
    project: ProjectDraft


class UpdateProject(BaseModel):
    kind: Literal["update_project"] = "update_project"
    project: Project


class DeleteProject(BaseModel):
    kind: Literal["delete_project"] = "delete_project"
    project_id: int


class SetTimeline(BaseModel):
    kind: Literal["set_timeline"] = "set_timeline"
    timeline: List[TimelineItem]


class AddTimelineItem(BaseModel):
    kind: Literal["add_timeline_item"] = "add_timeline_item"
    item: TimelineDraft


class UpdateTimelineItem(BaseModel):
    kind: Literal["update_timeline_item"] = "update_timeline_item"
    item: TimelineItem


class DeleteTimelineItem(BaseModel):
    kind: Literal["delete_timeline_item"] = "delete_timeline_item"
    item_id: int


class SetPosts(BaseModel):
    kind: Literal["set_posts"] = "set_posts"
    posts: List[Post]


class AddPost(BaseModel):
    kind: Literal["add_post"] = "add_post"
    post: PostDraft


class UpdatePost(BaseModel):
    kind: Literal["update_post"] = "update_post"
    post: Post


class DeletePost(BaseModel):
    kind: Literal["delete_post"] = "delete_post"
    slug: str


Command = Annotated[
    Union[
        SetProfile,
        SetSkills,
        AddSkill,
        DeleteSkill,
        SetProjects,
        AddProject,
        UpdateProject,
        DeleteProject,
        SetTimeline,
        AddTimelineItem,
        UpdateTimelineItem,
        DeleteTimelineItem,
        SetPosts,
        AddPost,
        UpdatePost,
        DeletePost,
    ],
    Field(discriminator="kind"),
]


class CommandEnvelope(BaseModel):
    command: Command
