"""
api/routes/v1/dashboard.py -- Aggregated counts for the admin dashboard.

This is a read-only aggregate route -- no mutations here.
"""

from fastapi import APIRouter, Depends, Request

from api.models import DashboardStatsResponse
from auth.dependencies import require_admin
from content.store import ContentStore

# Auth policy:
# - GET /api/v1/admin/dashboard/stats: requires admin
# Router-level dependency enforces auth; the single handler does not repeat it.
admin_router = APIRouter(dependencies=[Depends(require_admin)])


@admin_router.get("/dashboard/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(request: Request) -> DashboardStatsResponse:
    """Return content totals.

    Response:
      total_projects             -- projects in any status
      total_published_posts      -- blog posts with status "published"
      total_draft_posts          -- blog posts with status "draft"
      total_contact_submissions  -- all stored contact submissions
    """
    store: ContentStore = request.app.state.content_store
    return DashboardStatsResponse(
        total_projects=store.count_projects(),
        total_published_posts=store.count_blog_posts(status="published"),
        total_draft_posts=store.count_blog_posts(status="draft"),
        total_contact_submissions=store.count_contact_submissions(),
    )
