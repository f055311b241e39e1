from __future__ import annotations

import logging
import os
from dataclasses import asdict

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import EVENT_QUIZ_COMPLETED, get_events, record_event
from .auth.dependencies import SESSION_USER_KEY, require_admin, require_user
from .auth.models import LoginRequest, RegisterRequest
from .auth.users import authenticate, register
from .blog.drafts import build_draft
from .blog.models import BlogDraft, BlogPost, BlogPostIn, BlogPostUpdate, DraftRequest
from .blog.store import (
    PostNotFoundError,
    create_post,
    delete_post,
    get_published_by_slug,
    list_posts,
    list_published,
    update_post,
)
from .catalog.data_store import (
    create_entry,
    delete_entry,
    get_catalog,
    get_entry,
    seed_sample_entries,
    update_entry,
)
from .catalog.display import MAX_COMPARE, catalog_metadata, compare, filter_entries, trending
from .catalog.exceptions import CatalogUnavailableError, EntryNotFoundError
from .catalog.grouping import group_by_name, sort_flat
from .catalog.models import (
    CatalogEntry,
    CatalogEntryBase,
    CatalogEntryUpdate,
    CatalogListResponse,
    CompareResponse,
    RecommendationRequest,
    RecommendationResponse,
    SeedResponse,
    TrendingItem,
)
from .catalog.recommend import get_recommendations, recommend
from .quiz.models import (
    QuizAction,
    QuizAnswers,
    QuizResult,
    QuizState,
    SubscribeRequest,
    SubscribeResponse,
)
from .quiz.questions import QUESTIONS
from .quiz.reducer import can_proceed, current_question_id, initial_state, progress, reduce
from .quiz.responses import QuizStateResponse
from .quiz.subscribers import get_subscribers, record_subscription

logger = logging.getLogger(__name__)

app = FastAPI(title="CAD Software Guide API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "cad-guide-secret-change-in-production"),
)


# ── Error mapping ────────────────────────────────────────────────────────


@app.exception_handler(CatalogUnavailableError)
def catalog_unavailable(request: Request, exc: CatalogUnavailableError) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": "Catalog unavailable"})


@app.exception_handler(EntryNotFoundError)
def entry_not_found(request: Request, exc: EntryNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": f"Software {exc} not found"})


@app.exception_handler(PostNotFoundError)
def post_not_found(request: Request, exc: PostNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": f"Post {exc} not found"})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return catalog_metadata(get_catalog(include_inactive=False))


@app.get("/software", response_model=CatalogListResponse)
def list_software(
    grouped: bool = False,
    category: str | None = None,
    platform: str | None = None,
) -> CatalogListResponse:
    entries = filter_entries(get_catalog(), category=category, platform=platform)
    return CatalogListResponse(
        software=sort_flat(entries),
        groups=group_by_name(entries) if grouped else None,
        total=len(entries),
    )


@app.get("/software/trending", response_model=list[TrendingItem])
def trending_software(limit: int = Query(default=5, ge=1, le=20)) -> list[TrendingItem]:
    return trending(get_catalog(), limit=limit)


def _active_entry(entry_id: str) -> CatalogEntry:
    """Inactive entries are hidden from public views."""
    entry = get_entry(entry_id)
    if not entry.is_active:
        raise EntryNotFoundError(entry_id)
    return entry


@app.get("/software/{entry_id}", response_model=CatalogEntry)
def software_detail(entry_id: str) -> CatalogEntry:
    return _active_entry(entry_id)


@app.get("/compare", response_model=CompareResponse)
def compare_software(ids: str = Query(..., min_length=1)) -> CompareResponse:
    wanted = list(dict.fromkeys(i.strip() for i in ids.split(",") if i.strip()))
    if not wanted:
        raise HTTPException(status_code=400, detail="No software ids given")
    if len(wanted) > MAX_COMPARE:
        raise HTTPException(
            status_code=400, detail=f"At most {MAX_COMPARE} tools can be compared",
        )
    entries = [_active_entry(i) for i in wanted]
    return compare(entries)


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    return get_recommendations(body)


# ── Quiz ─────────────────────────────────────────────────────────────────


def _load_quiz_state(request: Request) -> QuizState:
    raw_state = request.session.get("quiz_state")
    if raw_state:
        try:
            return QuizState.model_validate(raw_state)
        except ValidationError:
            logger.warning("Discarding unreadable quiz state from session")
    raw_previous = request.session.get("quiz_answers")
    previous = None
    if raw_previous:
        try:
            previous = QuizAnswers.model_validate(raw_previous)
        except ValidationError:
            previous = None
    return initial_state(previous)


def _quiz_response(
    state: QuizState,
    results: RecommendationResponse | None = None,
) -> QuizStateResponse:
    return QuizStateResponse(
        state=state,
        question_id=current_question_id(state),
        progress=progress(state),
        can_proceed=can_proceed(state),
        results=results,
    )


@app.get("/quiz/questions")
def quiz_questions() -> list[dict]:
    return [asdict(q) for q in QUESTIONS]


@app.get("/quiz/state", response_model=QuizStateResponse)
def quiz_state(request: Request) -> QuizStateResponse:
    return _quiz_response(_load_quiz_state(request))


@app.post("/quiz/action", response_model=QuizStateResponse)
def quiz_action(body: QuizAction, request: Request) -> QuizStateResponse:
    state = _load_quiz_state(request)
    try:
        new_state = reduce(state, body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    request.session["quiz_state"] = new_state.model_dump(mode="json")

    results = None
    if new_state.completed and not state.completed:
        # Cache the answers so the next quiz starts pre-filled
        request.session["quiz_answers"] = new_state.answers.model_dump(mode="json")
        record_event(EVENT_QUIZ_COMPLETED, new_state.result.model_dump())
        results = recommend(new_state.result)

    return _quiz_response(new_state, results)


@app.post("/quiz/subscribe", response_model=SubscribeResponse)
def quiz_subscribe(body: SubscribeRequest, request: Request) -> SubscribeResponse:
    raw_answers = request.session.get("quiz_answers")
    result: QuizResult | None = None
    if raw_answers:
        result = QuizAnswers.model_validate(raw_answers).finalize()
    record_subscription(body.email, result)
    return SubscribeResponse(status="subscribed", total_subscribers=len(get_subscribers()))


# ── Blog ─────────────────────────────────────────────────────────────────


@app.get("/blog", response_model=list[BlogPost])
def blog_posts(limit: int | None = Query(default=None, ge=1, le=50)) -> list[BlogPost]:
    return list_published(limit)


@app.get("/blog/{slug}", response_model=BlogPost)
def blog_post(slug: str) -> BlogPost:
    return get_published_by_slug(slug)


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session[SESSION_USER_KEY] = user
    return {"status": "ok", "user": user}


@app.post("/auth/register", status_code=201)
def register_account(body: RegisterRequest, request: Request) -> dict:
    user = register(body.username, body.password)
    if not user:
        raise HTTPException(status_code=409, detail="Username already taken")
    request.session[SESSION_USER_KEY] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.pop(SESSION_USER_KEY, None)
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/admin/stats")
def admin_stats(user: dict = Depends(require_admin)) -> dict:
    entries = get_catalog()
    categories = {c for e in entries for c in e.categories}
    posts = list_posts()
    return {
        "software_count": len(entries),
        "active_software_count": sum(1 for e in entries if e.is_active),
        "family_count": len(group_by_name(entries)),
        "categories_count": len(categories),
        "blog_count": len(posts),
        "published_blog_count": sum(1 for p in posts if p.status == "published"),
        "subscribers": len(get_subscribers()),
    }


@app.get("/admin/software", response_model=list[CatalogEntry])
def admin_list_software(user: dict = Depends(require_admin)) -> list[CatalogEntry]:
    return sort_flat(get_catalog())


@app.post("/admin/software", response_model=CatalogEntry, status_code=201)
def admin_create_software(
    body: CatalogEntryBase,
    user: dict = Depends(require_admin),
) -> CatalogEntry:
    return create_entry(body)


@app.post("/admin/software/seed", response_model=SeedResponse)
def admin_seed_software(user: dict = Depends(require_admin)) -> SeedResponse:
    added = seed_sample_entries()
    return SeedResponse(added=added, total=len(get_catalog()))


@app.put("/admin/software/{entry_id}", response_model=CatalogEntry)
def admin_update_software(
    entry_id: str,
    body: CatalogEntryUpdate,
    user: dict = Depends(require_admin),
) -> CatalogEntry:
    try:
        return update_entry(entry_id, body)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))


@app.delete("/admin/software/{entry_id}")
def admin_delete_software(entry_id: str, user: dict = Depends(require_admin)) -> dict:
    delete_entry(entry_id)
    return {"status": "deleted", "id": entry_id}


@app.get("/admin/blog", response_model=list[BlogPost])
def admin_list_posts(user: dict = Depends(require_admin)) -> list[BlogPost]:
    return list_posts()


@app.post("/admin/blog", response_model=BlogPost, status_code=201)
def admin_create_post(body: BlogPostIn, user: dict = Depends(require_admin)) -> BlogPost:
    return create_post(body, author=user.get("username"))


@app.post("/admin/blog/draft", response_model=BlogDraft)
def admin_draft_post(body: DraftRequest, user: dict = Depends(require_admin)) -> BlogDraft:
    return build_draft(body.topic)


@app.put("/admin/blog/{post_id}", response_model=BlogPost)
def admin_update_post(
    post_id: str,
    body: BlogPostUpdate,
    user: dict = Depends(require_admin),
) -> BlogPost:
    return update_post(post_id, body)


@app.delete("/admin/blog/{post_id}")
def admin_delete_post(post_id: str, user: dict = Depends(require_admin)) -> dict:
    delete_post(post_id)
    return {"status": "deleted", "id": post_id}


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())
