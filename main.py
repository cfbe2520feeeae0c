import logging
from contextlib import asynccontextmanager
from typing import List, Optional

import httpx
from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

import settings
from commands import CommandEnvelope
from database import LocalStorageGateway, RemoteDocumentGateway
from schemas import (
    ChatReply,
    ChatRequest,
    ContactForm,
    LoginRequest,
    Post,
    PostDraft,
    Profile,
    Project,
    ProjectDraft,
    Skill,
    TimelineDraft,
    TimelineItem,
    Token,
)
from session import CredentialVerifier, decode_access_token, issue_admin_token
from storage import KeyValueStorage
from sync import DuplicateSkillError, SyncController
from widgets import CHAT_UNAVAILABLE, ChatClient, ContactClient, WidgetError

logger = logging.getLogger(__name__)

# =====================
# Auth / Security Setup
# =====================
verifier = CredentialVerifier.from_settings()


def build_http_client() -> httpx.AsyncClient:
    """Shared pool for the document store, chat webhook and contact form."""
    return httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)


def build_gateway(client: httpx.AsyncClient):
    if settings.STORAGE_BACKEND == "local":
        return LocalStorageGateway(KeyValueStorage(settings.LOCAL_STORAGE_PATH or None))
    return RemoteDocumentGateway(settings.DOCUMENT_URL, client)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: load (or seed) content. Shutdown: drop pending writes, close the pool."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    client = build_http_client()
    controller = SyncController(build_gateway(client))
    app.state.controller = controller
    app.state.chat = ChatClient(settings.CHAT_WEBHOOK_URL, client)
    app.state.contact = ContactClient(settings.CONTACT_FORM_URL, client)

    await controller.start()
    logger.info("Portfolio API started (storage=%s)", settings.STORAGE_BACKEND)

    yield

    await controller.aclose()
    await client.aclose()
    logger.info("Portfolio API stopped")


# ==================
# FastAPI app config
# ==================
app = FastAPI(title="Portfolio API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =========
# Utilities
# =========


def get_controller(request: Request) -> SyncController:
    return request.app.state.controller


def get_current_admin(authorization: Optional[str] = Header(None)):
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated")
    token = authorization.split(" ", 1)[1]
    payload = decode_access_token(token)
    if payload is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    if payload["sub"] != verifier.username:
        raise HTTPException(status_code=403, detail="Forbidden")
    return {"username": payload["sub"], "role": payload["role"]}


def wire(items) -> List[dict]:
    return [item.to_wire() for item in items]


# ======
# Routes
# ======
@app.get("/")
async def root():
    return {"status": "ok", "service": "portfolio-api"}


@app.get("/api/status")
async def status(controller: SyncController = Depends(get_controller)):
    return {
        "backend": "running",
        "storage": settings.STORAGE_BACKEND,
        "loading": controller.loading,
        "pending_save": controller.pending,
    }


# Auth
@app.post("/api/auth/login", response_model=Token)
async def login(data: LoginRequest):
    if not verifier.verify(data.username, data.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return Token(access_token=issue_admin_token(verifier.username))


# Content (public)
@app.get("/api/content")
async def get_content(controller: SyncController = Depends(get_controller)):
    return controller.aggregate.to_wire()


@app.get("/api/profile")
async def get_profile(controller: SyncController = Depends(get_controller)):
    return controller.profile.to_wire()


@app.get("/api/skills")
async def list_skills(controller: SyncController = Depends(get_controller)):
    return wire(controller.skills)


@app.get("/api/projects")
async def list_projects(tag: str = "All", controller: SyncController = Depends(get_controller)):
    return wire(controller.projects_by_tag(tag))


@app.get("/api/projects/tags")
async def list_project_tags(controller: SyncController = Depends(get_controller)):
    return controller.project_tags()


@app.get("/api/timeline")
async def list_timeline(controller: SyncController = Depends(get_controller)):
    return wire(controller.timeline)


@app.get("/api/posts")
async def list_posts(controller: SyncController = Depends(get_controller)):
    return wire(controller.posts)


@app.get("/api/posts/{slug}")
async def get_post(slug: str, controller: SyncController = Depends(get_controller)):
    post = controller.find_post(slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Not found")
    return post.to_wire()


# Profile & skills (admin)
@app.put("/api/profile")
async def update_profile(profile: Profile, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    controller.set_profile(profile)
    return profile.to_wire()


@app.put("/api/skills")
async def replace_skills(skills: List[Skill], controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    controller.set_skills(skills)
    return wire(controller.skills)


@app.post("/api/skills")
async def create_skill(skill: Skill, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    try:
        created = controller.add_skill(skill.name, skill.category)
    except DuplicateSkillError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if created is None:
        raise HTTPException(status_code=422, detail="Skill name and category are required")
    return created.to_wire()


@app.delete("/api/skills/{name:path}")
async def delete_skill(name: str, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    return {"deleted": controller.delete_skill(name)}


# Projects (admin)
@app.post("/api/projects")
async def create_project(project: ProjectDraft, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    return controller.add_project(project).to_wire()


@app.put("/api/projects/{project_id}")
async def update_project(project_id: int, project: Project, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    project = project.model_copy(update={"id": project_id})
    if not controller.update_project(project):
        raise HTTPException(status_code=404, detail="Not found")
    return {"ok": True}


@app.delete("/api/projects/{project_id}")
async def delete_project(project_id: int, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    return {"deleted": int(controller.delete_project(project_id))}


# Timeline (admin)
@app.post("/api/timeline")
async def create_timeline_item(item: TimelineDraft, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    return controller.add_timeline_item(item).to_wire()


@app.put("/api/timeline/{item_id}")
async def update_timeline_item(item_id: int, item: TimelineItem, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    item = item.model_copy(update={"id": item_id})
    if not controller.update_timeline_item(item):
        raise HTTPException(status_code=404, detail="Not found")
    return {"ok": True}


@app.delete("/api/timeline/{item_id}")
async def delete_timeline_item(item_id: int, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    return {"deleted": int(controller.delete_timeline_item(item_id))}


# Blog (admin)
@app.post("/api/posts")
async def create_post(post: PostDraft, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    return controller.add_post(post).to_wire()


@app.put("/api/posts/{slug}")
async def update_post(slug: str, post: Post, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    # slug is immutable, the path wins
    post = post.model_copy(update={"slug": slug})
    if not controller.update_post(post):
        raise HTTPException(status_code=404, detail="Not found")
    return {"ok": True}


@app.delete("/api/posts/{slug}")
async def delete_post(slug: str, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    return {"deleted": int(controller.delete_post(slug))}


# Generic command entry point (admin)
@app.post("/api/admin/commands")
async def apply_command(envelope: CommandEnvelope, controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    try:
        result = controller.apply(envelope.command)
    except DuplicateSkillError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if hasattr(result, "to_wire"):
        result = result.to_wire()
    return {"kind": envelope.command.kind, "result": result}


@app.post("/api/admin/flush")
async def flush(controller: SyncController = Depends(get_controller), _: dict = Depends(get_current_admin)):
    return {"saved": await controller.flush()}


# Widgets
@app.post("/api/chat", response_model=ChatReply)
async def chat(data: ChatRequest, request: Request):
    if not data.message.strip():
        raise HTTPException(status_code=400, detail="Message is empty")
    chat_client: ChatClient = request.app.state.chat
    try:
        reply = await chat_client.send(data.message)
    except WidgetError as e:
        logger.error("Chat failed: %s", e)
        raise HTTPException(status_code=502, detail=CHAT_UNAVAILABLE)
    return ChatReply(reply=reply, session_id=chat_client.session_id)


@app.post("/api/contact")
async def contact(form: ContactForm, request: Request):
    ok = await request.app.state.contact.submit(form)
    return {"status": "success" if ok else "error"}
