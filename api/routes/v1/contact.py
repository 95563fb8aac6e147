"""
api/routes/v1/contact.py -- Contact form and submission inbox routes.

Routes:
  POST   /contact                                   -- public, rate-limited
  GET    /admin/contact-submissions                 -- admin; paged, newest first
  PATCH  /admin/contact-submissions/{id}/status     -- admin; mark read/unread
  DELETE /admin/contact-submissions/{id}            -- admin; 204

Submission flow: store first, then notify. The admin gets a notification at
ADMIN_EMAIL and the sender gets a confirmation when EMAIL_FROM_ADDRESS is
set. Mail failures never fail the request; the response reports whether the
admin notification went out.

Security:
  POST /contact is rate-limited per IP (CONTACT_RATE_LIMIT).
  Every user-supplied value is HTML-escaped before it is placed in an email body.
"""

import logging
from html import escape

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from api.limiter import contact_rate_limit, limiter
from api.models import (
    ContactCreate,
    ContactCreatedResponse,
    ContactStatusUpdate,
    ContactSubmissionListResponse,
    ContactSubmissionResponse,
    ErrorDetail,
)
from auth.dependencies import require_admin
from content.models import ContactSubmission
from content.store import ContentStore
from core.config import get_settings
from core.mailer import send_email

logger = logging.getLogger("portfolio.api.contact")

# Auth policy:
# - POST /contact:  public -- anonymous visitors submit the form
# - admin_router:   requires admin (router-level dependency)
router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])

_NO_SUBJECT = "(No subject provided)"


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=ErrorDetail(code="not_found", message="Contact submission not found.").model_dump(),
    )


# ---------------------------------------------------------------------------
# Notification emails
# ---------------------------------------------------------------------------


def _notify_admin(submission_id: int, body: ContactCreate) -> bool:
    settings = get_settings()
    if not settings.admin_email:
        logger.warning("ADMIN_EMAIL is not configured; skipping contact notification")
        return False
    subject = f"New Contact Form Submission: {body.subject}" if body.subject else "New Contact Form Submission"
    html = (
        "<h1>New Contact Form Submission</h1>"
        f"<p><strong>Name:</strong> {escape(body.name)}</p>"
        f"<p><strong>Email:</strong> {escape(body.email)}</p>"
        f"<p><strong>Subject:</strong> {escape(body.subject or _NO_SUBJECT)}</p>"
        f"<p><strong>Message:</strong></p><p>{escape(body.message)}</p>"
        f"<hr><p><em>Submission ID: {submission_id}</em></p>"
    )
    text = (
        "New Contact Form Submission:\n"
        f"Name: {body.name}\nEmail: {body.email}\nSubject: {body.subject or _NO_SUBJECT}\n"
        f"Message: {body.message}\nSubmission ID: {submission_id}"
    )
    return send_email(settings.admin_email, subject, html, text)


def _confirm_to_sender(body: ContactCreate) -> None:
    settings = get_settings()
    if not settings.email_from_address:
        return
    html = (
        f"<h1>Thank You, {escape(body.name)}!</h1>"
        "<p>We have received your message and will get back to you shortly if a response is needed.</p>"
        f"<p><strong>Subject:</strong> {escape(body.subject or _NO_SUBJECT)}</p>"
        f"<p><strong>Message:</strong></p><p>{escape(body.message)}</p>"
        f"<hr><p><em>{escape(settings.email_from_name)}</em></p>"
    )
    text = (
        f"Thank You, {body.name}!\n"
        "We have received your message and will get back to you shortly if a response is needed.\n"
        f"Subject: {body.subject or _NO_SUBJECT}\nMessage: {body.message}"
    )
    send_email(body.email, "Thank you for your message", html, text)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------


@limiter.limit(contact_rate_limit)  # must be ABOVE @router to preserve FastAPI introspection
@router.post("/contact", response_model=ContactCreatedResponse, status_code=201)
def submit_contact_form(request: Request, body: ContactCreate) -> ContactCreatedResponse:
    """Store a contact form submission, then send notification emails."""
    store: ContentStore = request.app.state.content_store
    submission_id = store.create_contact_submission(
        ContactSubmission(name=body.name, email=body.email, subject=body.subject or None, message=body.message)
    )
    logger.info("Contact submission %d stored", submission_id)

    notified = _notify_admin(submission_id, body)
    _confirm_to_sender(body)

    return ContactCreatedResponse(
        id=submission_id,
        message="Thank you for your message. It has been received.",
        notification_sent=notified,
    )


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@admin_router.get("/contact-submissions", response_model=ContactSubmissionListResponse)
def list_submissions(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> ContactSubmissionListResponse:
    store: ContentStore = request.app.state.content_store
    submissions, total = store.list_contact_submissions(page=page, limit=limit)
    return ContactSubmissionListResponse(
        data=[ContactSubmissionResponse.from_domain(s) for s in submissions],
        **ContactSubmissionListResponse.meta(total, page, limit),
    )


@admin_router.patch("/contact-submissions/{submission_id}/status", response_model=ContactSubmissionResponse)
def update_submission_status(
    request: Request,
    submission_id: int,
    body: ContactStatusUpdate,
) -> ContactSubmissionResponse:
    store: ContentStore = request.app.state.content_store
    updated = store.set_contact_read(submission_id, body.is_read)
    if updated is None:
        raise _not_found()
    return ContactSubmissionResponse.from_domain(updated)


@admin_router.delete("/contact-submissions/{submission_id}", status_code=204)
def delete_submission(request: Request, submission_id: int) -> Response:
    store: ContentStore = request.app.state.content_store
    if not store.delete_contact_submission(submission_id):
        raise _not_found()
    return Response(status_code=204)
