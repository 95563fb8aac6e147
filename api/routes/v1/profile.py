"""
api/routes/v1/profile.py -- Site owner profile routes.

Routes:
  GET   /profile         -- public; 404 until the profile is first saved
  PATCH /admin/profile   -- admin; partial update, creates the profile on first use

The profile is a single record. There is no create or delete endpoint.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from api.models import ErrorDetail, ProfileResponse, ProfileUpdate
from auth.dependencies import require_admin
from content.store import ContentStore

# Auth policy:
# - GET /profile:          public
# - PATCH /admin/profile:  requires admin (router-level dependency)
router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/profile", response_model=ProfileResponse)
def get_profile(request: Request) -> ProfileResponse:
    store: ContentStore = request.app.state.content_store
    profile = store.get_profile()
    if profile is None:
        raise HTTPException(
            status_code=404,
            detail=ErrorDetail(code="not_found", message="Profile not found.").model_dump(),
        )
    return ProfileResponse.from_domain(profile)


@admin_router.patch("/profile", response_model=ProfileResponse)
def update_profile(request: Request, body: ProfileUpdate) -> ProfileResponse:
    """Update profile fields. Omitted fields are left as they are."""
    store: ContentStore = request.app.state.content_store
    changes = body.changes()
    if not changes:
        raise HTTPException(
            status_code=400,
            detail=ErrorDetail(code="no_changes", message="No fields to update.").model_dump(),
        )
    return ProfileResponse.from_domain(store.upsert_profile(**changes))
