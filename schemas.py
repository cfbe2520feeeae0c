"""
Content schemas for the portfolio.

The whole site is one aggregate document (profile, skills, projects,
timeline, posts). Wire keys are camelCase, attributes are snake_case;
either spelling is accepted on input.
"""

import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ContentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def split_csv(value):
    """Editor fields arrive as "a, b, c"; stored as ["a", "b", "c"]."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(v).strip() for v in value if str(v).strip()]


# Content
class Profile(ContentModel):
    name: str
    full_name: str = ""
    title: str = ""
    bio: str = ""
    email: str = ""
    linkedin: str = ""
    github: str = ""
    profile_image_url: str = ""
    resume_url: str = ""


class Skill(ContentModel):
    name: str
    category: str


class ProjectFields(ContentModel):
    """Editable project fields; tech/tags also accept "a, b" from the editor."""

    title: str
    short_description: str = ""
    image_url: str = ""
    tech: List[str] = []
    tags: List[str] = []

    @field_validator("tech", "tags", mode="before")
    @classmethod
    def split_lists(cls, value):
        return split_csv(value)


class Project(ProjectFields):
    id: int


class TimelineItem(ContentModel):
    id: int
    type: Literal["work", "education", "certification"]
    title: str
    organization: str = ""
    date: str = ""  # free text, e.g. "May 2024 - Present"
    description: str = ""


class Post(ContentModel):
    slug: str
    title: str
    date: str
    excerpt: str = ""
    content: str = ""


# Editor input (no identity assigned yet)
class ProjectDraft(ProjectFields):
    pass


class TimelineDraft(ContentModel):
    type: Literal["work", "education", "certification"] = "work"
    title: str
    organization: str = ""
    date: str = ""
    description: str = ""


class PostDraft(ContentModel):
    title: str
    date: str = Field(default_factory=lambda: datetime.date.today().isoformat())
    excerpt: str = ""
    content: str = ""


# Aggregate
class Aggregate(ContentModel):
    profile: Profile = Field(alias="personalInfo")
    skills: List[Skill]
    projects: List[Project]
    timeline: List[TimelineItem]
    posts: List[Post]


class StoredDocument(ContentModel):
    """What a gateway read returns: any field may be missing."""

    profile: Optional[Profile] = Field(default=None, alias="personalInfo")
    skills: Optional[List[Skill]] = None
    projects: Optional[List[Project]] = None
    timeline: Optional[List[TimelineItem]] = None
    posts: Optional[List[Post]] = None


# Widgets
class ContactForm(BaseModel):
    name: str
    email: str
    message: str


class ChatRequest(BaseModel):
    message: str


class ChatReply(BaseModel):
    reply: str
    session_id: str


class LoginRequest(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
