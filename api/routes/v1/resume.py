"""
api/routes/v1/resume.py -- Resume link and upload routes.

Routes:
  GET  /resume/url            -- public; 404 when no resume is set
  PUT  /admin/resume/url      -- admin; point the resume at an external http(s) URL
  POST /admin/resume/upload   -- admin; multipart PDF upload stored on local disk

Both admin routes write profile.resume_url (creating the profile if needed).

File uploads:
  Only PDFs are accepted: the declared content type must be application/pdf
  and the body must start with the %PDF- signature. Size is capped at
  MAX_RESUME_BYTES (20 MB by default); the body is read up to cap + 1 bytes
  so an oversized upload is rejected without buffering all of it.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile

from api.models import ErrorDetail, ResumeUrlResponse, ResumeUrlUpdate
from auth.dependencies import require_admin
from content.store import ContentStore
from content.uploads import looks_like_pdf, save_resume
from core.config import get_settings

logger = logging.getLogger("portfolio.api.resume")

# Auth policy:
# - GET /resume/url:   public
# - admin_router:      requires admin (router-level dependency)
router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/resume/url", response_model=ResumeUrlResponse)
def get_resume_url(request: Request) -> ResumeUrlResponse:
    store: ContentStore = request.app.state.content_store
    profile = store.get_profile()
    if profile is None or not profile.resume_url:
        raise HTTPException(
            status_code=404,
            detail=ErrorDetail(code="not_found", message="Resume not found.").model_dump(),
        )
    return ResumeUrlResponse(resume_url=profile.resume_url)


@admin_router.put("/resume/url", response_model=ResumeUrlResponse)
def set_resume_url(request: Request, body: ResumeUrlUpdate) -> ResumeUrlResponse:
    store: ContentStore = request.app.state.content_store
    profile = store.upsert_profile(resume_url=body.resume_url)
    return ResumeUrlResponse(resume_url=profile.resume_url)


@admin_router.post("/resume/upload", response_model=ResumeUrlResponse, status_code=201)
async def upload_resume(request: Request, file: UploadFile) -> ResumeUrlResponse:
    """Store an uploaded PDF and make it the current resume."""
    max_bytes = get_settings().max_resume_bytes

    if file.content_type != "application/pdf":
        raise HTTPException(
            status_code=400,
            detail=ErrorDetail(
                code="invalid_file_type",
                message="Resume must be a PDF file.",
                detail=f"Got content type {file.content_type!r}.",
            ).model_dump(),
        )

    # Size guard -- read up to the cap + 1 byte; reject if over limit
    raw = await file.read(max_bytes + 1)
    if len(raw) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=ErrorDetail(
                code="file_too_large",
                message=f"Resume must be {max_bytes // (1024 * 1024)} MB or smaller.",
            ).model_dump(),
        )
    if not raw:
        raise HTTPException(
            status_code=400,
            detail=ErrorDetail(code="empty_file", message="No file content received.").model_dump(),
        )
    if not looks_like_pdf(raw):
        raise HTTPException(
            status_code=400,
            detail=ErrorDetail(code="invalid_file_type", message="Resume must be a PDF file.").model_dump(),
        )

    url = save_resume(raw)
    store: ContentStore = request.app.state.content_store
    profile = store.upsert_profile(resume_url=url)
    logger.info("Resume replaced with upload %s", url)
    return ResumeUrlResponse(resume_url=profile.resume_url)
