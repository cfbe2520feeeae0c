"""
In-process owner of the portfolio content.

SyncController holds the five aggregate fields, loads them from the gateway
on startup (seeding the store with built-in content when it is empty) and
writes the whole aggregate back after a quiet period following the last
edit. Every edit goes through one of its methods, or through ``apply`` with
a command from ``commands``.
"""

import asyncio
import logging
import re
import time
from typing import Callable, List, Optional, Set

import settings
from database import GatewayError
from defaults import default_aggregate
from schemas import (
    Aggregate,
    Post,
    PostDraft,
    Profile,
    Project,
    ProjectDraft,
    Skill,
    StoredDocument,
    TimelineDraft,
    TimelineItem,
)

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def slugify(text: str) -> str:
    text = text.lower()
    text = re.sub(r"[^a-z0-9\s-]", "", text)
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text.strip("-")


class DuplicateSkillError(ValueError):
    pass


class Scheduler:
    """Delayed callbacks on the running loop; the returned handle cancels."""

    def schedule(self, delay: float, task: Callable[[], None]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, task)


class SyncController:
    def __init__(
        self,
        gateway,
        delay: Optional[float] = None,
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.gateway = gateway
        self.delay = settings.SAVE_DELAY_SECONDS if delay is None else delay
        self.scheduler = scheduler or Scheduler()
        self.clock = clock

        self._assign(default_aggregate())
        self.loading = False
        self.settled = False
        self._pending: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()

    # =========
    # Lifecycle
    # =========
    async def start(self) -> None:
        if self.settled:
            return
        self.loading = True
        try:
            document = await self.gateway.load()
            if document is None:
                self._assign(default_aggregate())
                self._spawn(self._seed(self.aggregate))
            else:
                self._assign_document(document)
        except GatewayError as e:
            logger.error("Could not load content, using built-in defaults: %s", e)
        finally:
            self.loading = False
            self.settled = True

    async def flush(self) -> bool:
        """Save right away instead of waiting out the debounce window."""
        self._cancel_pending()
        return await self._persist(self.aggregate)

    async def aclose(self) -> None:
        self._cancel_pending()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    @property
    def pending(self) -> bool:
        return self._pending is not None

    # ====
    # Read
    # ====
    @property
    def aggregate(self) -> Aggregate:
        return Aggregate(
            profile=self.profile,
            skills=self.skills,
            projects=self.projects,
            timeline=self.timeline,
            posts=self.posts,
        ).model_copy(deep=True)

    def project_tags(self) -> List[str]:
        tags = ["All"]
        for project in self.projects:
            for tag in project.tags:
                if tag not in tags:
                    tags.append(tag)
        return tags

    def projects_by_tag(self, tag: str = "All") -> List[Project]:
        if tag == "All":
            return list(self.projects)
        return [p for p in self.projects if tag in p.tags]

    def find_post(self, slug: str) -> Optional[Post]:
        return next((p for p in self.posts if p.slug == slug), None)

    # =========
    # Mutations
    # =========
    def apply(self, command):
        fields = {name: getattr(command, name) for name in type(command).model_fields if name != "kind"}
        return getattr(self, command.kind)(**fields)

    def set_profile(self, profile: Profile) -> None:
        self.profile = profile
        self._changed()

    def set_skills(self, skills: List[Skill]) -> None:
        self.skills = list(skills)
        self._changed()

    def add_skill(self, name: str, category: str) -> Optional[Skill]:
        name, category = name.strip(), category.strip()
        if not name or not category:
            return None
        if any(s.name == name for s in self.skills):
            raise DuplicateSkillError(f"Skill '{name}' already exists")
        skill = Skill(name=name, category=category)
        self.skills.append(skill)
        self._changed()
        return skill

    def delete_skill(self, name: str) -> int:
        kept = [s for s in self.skills if s.name != name]
        removed = len(self.skills) - len(kept)
        if removed:
            self.skills = kept
            self._changed()
        return removed

    def set_projects(self, projects: List[Project]) -> None:
        self.projects = list(projects)
        self._changed()

    def add_project(self, project) -> Project:
        if not isinstance(project, ProjectDraft):
            project = ProjectDraft.model_validate(project)
        created = Project(id=self._next_id(self.projects), **project.model_dump())
        self.projects.append(created)
        self._changed()
        return created

    def update_project(self, project: Project) -> bool:
        return self._replace(self.projects, "id", project)

    def delete_project(self, project_id: int) -> bool:
        return self._remove("projects", "id", project_id)

    def set_timeline(self, timeline: List[TimelineItem]) -> None:
        self.timeline = list(timeline)
        self._changed()

    def add_timeline_item(self, item) -> TimelineItem:
        if not isinstance(item, TimelineDraft):
            item = TimelineDraft.model_validate(item)
        created = TimelineItem(id=self._next_id(self.timeline), **item.model_dump())
        # newest-created first, not by the free-text date
        self.timeline = sorted(self.timeline + [created], key=lambda t: t.id, reverse=True)
        self._changed()
        return created

    def update_timeline_item(self, item: TimelineItem) -> bool:
        return self._replace(self.timeline, "id", item)

    def delete_timeline_item(self, item_id: int) -> bool:
        return self._remove("timeline", "id", item_id)

    def set_posts(self, posts: List[Post]) -> None:
        self.posts = list(posts)
        self._changed()

    def add_post(self, post) -> Post:
        if not isinstance(post, PostDraft):
            post = PostDraft.model_validate(post)
        stamp = self.clock()
        base = slugify(post.title)
        while self.find_post(f"{base}-{stamp}"):
            stamp += 1
        created = Post(slug=f"{base}-{stamp}", **post.model_dump())
        self.posts.insert(0, created)
        self._changed()
        return created

    def update_post(self, post: Post) -> bool:
        return self._replace(self.posts, "slug", post)

    def delete_post(self, slug: str) -> bool:
        return self._remove("posts", "slug", slug)

    # =========
    # Internals
    # =========
    def _assign(self, aggregate: Aggregate) -> None:
        self.profile = aggregate.profile
        self.skills = list(aggregate.skills)
        self.projects = list(aggregate.projects)
        self.timeline = list(aggregate.timeline)
        self.posts = list(aggregate.posts)

    def _assign_document(self, document: StoredDocument) -> None:
        fallback = default_aggregate()
        for name in Aggregate.model_fields:
            value = getattr(document, name)
            if value is None:
                logger.info("Stored document has no '%s', using built-in content", name)
                value = getattr(fallback, name)
            setattr(self, name, value if name == "profile" else list(value))

    def _next_id(self, items) -> int:
        candidate = self.clock()
        existing = {item.id for item in items}
        if candidate in existing:
            candidate = max(existing) + 1
        return candidate

    def _replace(self, items: list, key: str, updated) -> bool:
        matched = False
        for i, item in enumerate(items):
            if getattr(item, key) == getattr(updated, key):
                items[i] = updated
                matched = True
        if matched:
            self._changed()
        return matched

    def _remove(self, field: str, key: str, value) -> bool:
        items = getattr(self, field)
        kept = [item for item in items if getattr(item, key) != value]
        if len(kept) == len(items):
            return False
        setattr(self, field, kept)
        self._changed()
        return True

    def _changed(self) -> None:
        if self.loading or not self.settled:
            return
        self._cancel_pending()
        self._pending = self.scheduler.schedule(self.delay, self._fire)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _fire(self) -> None:
        self._pending = None
        self._spawn(self._persist(self.aggregate))

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _persist(self, aggregate: Aggregate) -> bool:
        try:
            await self.gateway.save(aggregate)
        except GatewayError as e:
            logger.error("Could not save content: %s", e)
            return False
        logger.debug("Content saved")
        return True

    async def _seed(self, aggregate: Aggregate) -> None:
        if await self._persist(aggregate):
            logger.info("Seeded empty store with built-in content")
