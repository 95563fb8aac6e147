"""
api/routes/v1/projects.py -- Portfolio project routes.

Public (published projects only):
  GET    /projects                 -- paged list; ?category= matches a technology
  GET    /projects/{id_or_slug}    -- single project by numeric id or slug

Admin (require_admin on the router):
  GET    /admin/projects           -- paged list of every project; sortable
  POST   /admin/projects           -- create (slug derived from title)
  GET    /admin/projects/{id}      -- single project, any status
  PATCH  /admin/projects/{id}      -- partial update
  DELETE /admin/projects/{id}      -- delete; 204

A slug that cannot be claimed raises SlugConflictError, which api/main.py
turns into 409 slug_conflict.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from api.models import (
    ContentStatusEnum,
    ErrorDetail,
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
    SortOrderEnum,
)
from auth.dependencies import require_admin
from content.models import Project
from content.store import ContentStore

# Auth policy:
# - router:       public -- only published projects are ever returned
# - admin_router: requires admin (router-level dependency)
router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=ErrorDetail(code="not_found", message="Project not found.").model_dump(),
    )


def _page(projects: list[Project], total: int, page: int, limit: int) -> ProjectListResponse:
    return ProjectListResponse(
        data=[ProjectResponse.from_domain(p) for p in projects],
        **ProjectListResponse.meta(total, page, limit),
    )


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------


@router.get("/projects", response_model=ProjectListResponse)
def list_published_projects(
    request: Request,
    category: Optional[str] = Query(default=None, max_length=100),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> ProjectListResponse:
    """Return published projects ordered by display order, newest first within an order."""
    store: ContentStore = request.app.state.content_store
    projects, total = store.list_projects(category=category, published_only=True, page=page, limit=limit)
    return _page(projects, total, page, limit)


@router.get("/projects/{id_or_slug}", response_model=ProjectResponse)
def get_published_project(request: Request, id_or_slug: str) -> ProjectResponse:
    """Return one published project.

    A numeric value is tried as an id first, then as a slug (a title such as
    "2048" produces an all-digit slug).
    """
    store: ContentStore = request.app.state.content_store
    project = None
    if id_or_slug.isdigit():
        project = store.get_project(int(id_or_slug), published_only=True)
    if project is None:
        project = store.get_project_by_slug(id_or_slug, published_only=True)
    if project is None:
        raise _not_found()
    return ProjectResponse.from_domain(project)


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@admin_router.get("/projects", response_model=ProjectListResponse)
def list_all_projects(
    request: Request,
    status: Optional[ContentStatusEnum] = None,
    sort_by: str = Query(default="created_at", max_length=50),
    sort_order: SortOrderEnum = SortOrderEnum.desc,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> ProjectListResponse:
    """Return projects in any status. Unknown sort_by values fall back to created_at."""
    store: ContentStore = request.app.state.content_store
    projects, total = store.list_projects(
        status=status.value if status else None,
        sort_by=sort_by,
        sort_order=sort_order.value,
        page=page,
        limit=limit,
    )
    return _page(projects, total, page, limit)


@admin_router.post("/projects", response_model=ProjectResponse, status_code=201)
def create_project(request: Request, body: ProjectCreate) -> ProjectResponse:
    store: ContentStore = request.app.state.content_store
    project = Project(
        title=body.title,
        short_summary=body.short_summary,
        description=body.description,
        technologies=body.technologies,
        role=body.role,
        challenges=body.challenges,
        live_demo_url=body.live_demo_url or None,
        source_code_url=body.source_code_url or None,
        images=[image.model_dump() for image in body.images],
        status=body.status.value,
        order=body.order,
        featured=body.featured,
    )
    project_id = store.create_project(project)
    return ProjectResponse.from_domain(store.get_project(project_id))


@admin_router.get("/projects/{project_id}", response_model=ProjectResponse)
def get_project(request: Request, project_id: int) -> ProjectResponse:
    store: ContentStore = request.app.state.content_store
    project = store.get_project(project_id)
    if project is None:
        raise _not_found()
    return ProjectResponse.from_domain(project)


@admin_router.patch("/projects/{project_id}", response_model=ProjectResponse)
def update_project(request: Request, project_id: int, body: ProjectUpdate) -> ProjectResponse:
    """Apply a partial update. The slug changes only when the title does, or when set explicitly."""
    store: ContentStore = request.app.state.content_store
    changes = body.changes()
    if not changes:
        raise HTTPException(
            status_code=400,
            detail=ErrorDetail(code="no_changes", message="No fields to update.").model_dump(),
        )
    updated = store.update_project(project_id, **changes)
    if updated is None:
        raise _not_found()
    return ProjectResponse.from_domain(updated)


@admin_router.delete("/projects/{project_id}", status_code=204)
def delete_project(request: Request, project_id: int) -> Response:
    store: ContentStore = request.app.state.content_store
    if not store.delete_project(project_id):
        raise _not_found()
    return Response(status_code=204)
