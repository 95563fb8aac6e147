"""
api/routes/v1/blog.py -- Blog post routes.

Public (published posts only):
  GET    /blog                -- paged list; ?tag= exact tag, ?search= substring
  GET    /blog/tags           -- distinct tags across published posts
  GET    /blog/{slug}         -- single post by slug

Authenticated (any role):
  POST   /blog                -- create; the caller becomes the author

Admin (require_admin on the router):
  GET    /admin/blog          -- paged list of every post; sortable
  GET    /admin/blog/{id}     -- single post, any status
  PATCH  /admin/blog/{id}     -- partial update (slug + published_at rules in the store)
  DELETE /admin/blog/{id}     -- delete; 204

Every post read carries author {id, name, email}, resolved from the user store.

Route order: /blog/tags is registered before /blog/{slug} so "tags" is never
captured as a slug.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from api.models import (
    BlogPostCreate,
    BlogPostListResponse,
    BlogPostResponse,
    BlogPostUpdate,
    ContentStatusEnum,
    ErrorDetail,
    SortOrderEnum,
)
from auth.dependencies import get_current_user, require_admin
from auth.models import User
from auth.store import UserStore
from content.models import BlogPost
from content.store import ContentStore

logger = logging.getLogger("portfolio.api.blog")

# Auth policy:
# - GET  /blog, /blog/tags, /blog/{slug}: public -- published posts only
# - POST /blog:                           requires auth (get_current_user)
# - admin_router:                         requires admin (router-level dependency)
router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=ErrorDetail(code="not_found", message="Blog post not found.").model_dump(),
    )


def _to_response(
    request: Request,
    post: BlogPost,
    authors: Optional[dict[int, Optional[User]]] = None,
) -> BlogPostResponse:
    """Attach the author (name, email) to a post. authors caches lookups across a page."""
    if authors is None:
        authors = {}
    if post.author_id not in authors:
        user_store: UserStore = request.app.state.user_store
        authors[post.author_id] = user_store.get_by_id(post.author_id)
    return BlogPostResponse.from_domain(post, authors[post.author_id])


def _page(request: Request, posts: list[BlogPost], total: int, page: int, limit: int) -> BlogPostListResponse:
    authors: dict[int, Optional[User]] = {}
    return BlogPostListResponse(
        data=[_to_response(request, p, authors) for p in posts],
        **BlogPostListResponse.meta(total, page, limit),
    )


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------


@router.get("/blog", response_model=BlogPostListResponse)
def list_published_posts(
    request: Request,
    tag: Optional[str] = Query(default=None, max_length=100),
    search: Optional[str] = Query(default=None, max_length=200),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> BlogPostListResponse:
    """Return published posts, most recently published first."""
    store: ContentStore = request.app.state.content_store
    posts, total = store.list_blog_posts(tag=tag, search=search, published_only=True, page=page, limit=limit)
    return _page(request, posts, total, page, limit)


@router.get("/blog/tags", response_model=list[str])
def list_tags(request: Request) -> list[str]:
    store: ContentStore = request.app.state.content_store
    return store.list_published_tags()


@router.get("/blog/{slug}", response_model=BlogPostResponse)
def get_published_post(request: Request, slug: str) -> BlogPostResponse:
    store: ContentStore = request.app.state.content_store
    post = store.get_blog_post_by_slug(slug, published_only=True)
    if post is None:
        raise _not_found()
    return _to_response(request, post)


# ---------------------------------------------------------------------------
# Authenticated
# ---------------------------------------------------------------------------


@router.post("/blog", response_model=BlogPostResponse, status_code=201)
def create_post(
    request: Request,
    body: BlogPostCreate,
    current_user: User = Depends(get_current_user),
) -> BlogPostResponse:
    """Create a blog post authored by the caller.

    Posts created as published get published_at = now unless one is supplied.
    """
    store: ContentStore = request.app.state.content_store
    post = BlogPost(
        title=body.title,
        content=body.content,
        author_id=current_user.id,
        tags=body.tags,
        status=body.status.value,
        featured_image=body.featured_image or None,
        seo=body.seo.model_dump(),
        published_at=body.published_at.isoformat() if body.published_at else None,
    )
    post_id = store.create_blog_post(post)
    logger.info("Blog post %d created by user %d", post_id, current_user.id)
    return _to_response(request, store.get_blog_post(post_id))


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@admin_router.get("/blog", response_model=BlogPostListResponse)
def list_all_posts(
    request: Request,
    status: Optional[ContentStatusEnum] = None,
    tag: Optional[str] = Query(default=None, max_length=100),
    search: Optional[str] = Query(default=None, max_length=200),
    sort_by: str = Query(default="created_at", max_length=50),
    sort_order: SortOrderEnum = SortOrderEnum.desc,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> BlogPostListResponse:
    """Return posts in any status. Unknown sort_by values fall back to created_at."""
    store: ContentStore = request.app.state.content_store
    posts, total = store.list_blog_posts(
        status=status.value if status else None,
        tag=tag,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order.value,
        page=page,
        limit=limit,
    )
    return _page(request, posts, total, page, limit)


@admin_router.get("/blog/{post_id}", response_model=BlogPostResponse)
def get_post(request: Request, post_id: int) -> BlogPostResponse:
    store: ContentStore = request.app.state.content_store
    post = store.get_blog_post(post_id)
    if post is None:
        raise _not_found()
    return _to_response(request, post)


@admin_router.patch("/blog/{post_id}", response_model=BlogPostResponse)
def update_post(request: Request, post_id: int, body: BlogPostUpdate) -> BlogPostResponse:
    store: ContentStore = request.app.state.content_store
    changes = body.changes()
    if not changes:
        raise HTTPException(
            status_code=400,
            detail=ErrorDetail(code="no_changes", message="No fields to update.").model_dump(),
        )
    updated = store.update_blog_post(post_id, **changes)
    if updated is None:
        raise _not_found()
    return _to_response(request, updated)


@admin_router.delete("/blog/{post_id}", status_code=204)
def delete_post(request: Request, post_id: int) -> Response:
    store: ContentStore = request.app.state.content_store
    if not store.delete_blog_post(post_id):
        raise _not_found()
    return Response(status_code=204)
