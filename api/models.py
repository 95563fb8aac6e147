"""
API request and response models for the portfolio REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in content/models.py and
auth/models.py, which own the internal domain representation. Route handlers
map between the two.

Separation of concerns: content/ models = domain truth; api/ models = API contract.

Partial updates: every *Update model is sent with PATCH semantics. Route
handlers call .changes(), which keeps only the fields the client actually
sent and drops explicit nulls for columns that cannot be null.
"""

import math
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from auth.models import User
from content.models import BlogPost, ContactSubmission, Profile, Project
from core.slugs import SLUG_PATTERN

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
HTTP_URL_PATTERN = r"^https?://\S+$"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ContentStatusEnum(str, Enum):
    published = "published"
    draft = "draft"


class SortOrderEnum(str, Enum):
    asc = "asc"
    desc = "desc"


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str


class _PartialUpdate(BaseModel):
    """Base for PATCH bodies."""

    model_config = ConfigDict(str_strip_whitespace=True)

    # Fields that may legitimately be cleared with an explicit null.
    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    def changes(self) -> dict:
        """Return the fields the client sent, minus nulls for non-nullable fields."""
        return {
            key: value
            for key, value in self.model_dump(mode="json", exclude_unset=True).items()
            if value is not None or key in self.nullable_fields
        }


class _Page(BaseModel):
    """Paging metadata shared by every list response."""

    model_config = ConfigDict(frozen=True)

    total: int
    page: int
    limit: int
    total_pages: int

    @staticmethod
    def meta(total: int, page: int, limit: int) -> dict:
        return {
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": math.ceil(total / limit) if limit else 0,
        }


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Request body for POST /api/v1/auth/login."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    # bcrypt only hashes the first 72 bytes.
    password: str = Field(min_length=1, max_length=72)


class UserInfo(BaseModel):
    """Public view of a principal. Never includes the password hash."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    name: str
    role: str

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(id=user.id, email=user.email, name=user.name, role=user.role)


class LoginResponse(BaseModel):
    """Response for a successful POST /api/v1/auth/login."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserInfo


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class ProjectImage(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    url: str = Field(min_length=1, max_length=2048)
    alt_text: str = Field(min_length=1, max_length=255)
    is_thumbnail: bool = False


class ProjectCreate(BaseModel):
    """Request body for POST /api/v1/admin/projects. The slug is derived from title."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=150)
    short_summary: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    technologies: list[str] = Field(min_length=1, max_length=50)
    role: str = Field(min_length=1, max_length=255)
    challenges: str = Field(min_length=1)
    live_demo_url: Optional[str] = Field(default=None, max_length=2048)
    source_code_url: Optional[str] = Field(default=None, max_length=2048)
    images: list[ProjectImage] = Field(default_factory=list, max_length=30)
    status: ContentStatusEnum = ContentStatusEnum.draft
    order: int = Field(default=0, ge=0)
    featured: bool = False

    @field_validator("technologies")
    @classmethod
    def no_blank_technologies(cls, values: list[str]) -> list[str]:
        cleaned = [v.strip() for v in values]
        if any(not v for v in cleaned):
            raise ValueError("Technology entries cannot be empty")
        return cleaned


class ProjectUpdate(_PartialUpdate):
    """Request body for PATCH /api/v1/admin/projects/{id}.

    Changing title re-derives the slug. An explicit slug overrides that and
    must not be owned by another project.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"live_demo_url", "source_code_url"})

    title: Optional[str] = Field(default=None, min_length=1, max_length=150)
    slug: Optional[str] = Field(default=None, max_length=200, pattern=SLUG_PATTERN.pattern)
    short_summary: Optional[str] = Field(default=None, min_length=1, max_length=300)
    description: Optional[str] = Field(default=None, min_length=1)
    technologies: Optional[list[str]] = Field(default=None, min_length=1, max_length=50)
    role: Optional[str] = Field(default=None, min_length=1, max_length=255)
    challenges: Optional[str] = Field(default=None, min_length=1)
    live_demo_url: Optional[str] = Field(default=None, max_length=2048)
    source_code_url: Optional[str] = Field(default=None, max_length=2048)
    images: Optional[list[ProjectImage]] = Field(default=None, max_length=30)
    status: Optional[ContentStatusEnum] = None
    order: Optional[int] = Field(default=None, ge=0)
    featured: Optional[bool] = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    slug: str
    short_summary: str
    description: str
    technologies: list[str]
    role: str
    challenges: str
    live_demo_url: Optional[str]
    source_code_url: Optional[str]
    images: list[dict]
    status: str
    order: int
    featured: bool
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            title=project.title,
            slug=project.slug,
            short_summary=project.short_summary,
            description=project.description,
            technologies=project.technologies,
            role=project.role,
            challenges=project.challenges,
            live_demo_url=project.live_demo_url,
            source_code_url=project.source_code_url,
            images=project.images,
            status=project.status,
            order=project.order,
            featured=project.featured,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ProjectListResponse(_Page):
    data: list[ProjectResponse]


# ---------------------------------------------------------------------------
# Blog posts
# ---------------------------------------------------------------------------


class SEOMetadata(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    seo_title: Optional[str] = Field(default=None, max_length=70)
    seo_description: Optional[str] = Field(default=None, max_length=160)
    seo_keywords: list[str] = Field(default_factory=list, max_length=30)


class BlogPostCreate(BaseModel):
    """Request body for POST /api/v1/blog. The caller becomes the author."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list, max_length=30)
    status: ContentStatusEnum = ContentStatusEnum.draft
    featured_image: Optional[str] = Field(default=None, max_length=2048)
    seo: SEOMetadata = Field(default_factory=SEOMetadata)
    published_at: Optional[datetime] = None


class BlogPostUpdate(_PartialUpdate):
    """Request body for PATCH /api/v1/admin/blog/{id}.

    published_at: an explicit value wins over the automatic stamp applied
    when status moves to "published"; null clears it.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"featured_image", "published_at"})

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=250, pattern=SLUG_PATTERN.pattern)
    content: Optional[str] = Field(default=None, min_length=1)
    tags: Optional[list[str]] = Field(default=None, max_length=30)
    status: Optional[ContentStatusEnum] = None
    featured_image: Optional[str] = Field(default=None, max_length=2048)
    seo: Optional[SEOMetadata] = None
    published_at: Optional[datetime] = None


class BlogAuthor(BaseModel):
    """Author shown on a blog post. No role, no password hash."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "BlogAuthor":
        return cls(id=user.id, email=user.email, name=user.name)


class BlogPostResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    slug: str
    content: str
    author_id: int
    # None when the author account no longer exists.
    author: Optional[BlogAuthor] = None
    tags: list[str]
    status: str
    featured_image: Optional[str]
    seo: dict
    published_at: Optional[str]
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, post: BlogPost, author: Optional[User] = None) -> "BlogPostResponse":
        return cls(
            id=post.id,
            title=post.title,
            slug=post.slug,
            content=post.content,
            author_id=post.author_id,
            author=BlogAuthor.from_user(author) if author is not None else None,
            tags=post.tags,
            status=post.status,
            featured_image=post.featured_image,
            seo=post.seo,
            published_at=post.published_at,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class BlogPostListResponse(_Page):
    data: list[BlogPostResponse]


# ---------------------------------------------------------------------------
# Profile and resume
# ---------------------------------------------------------------------------


class SkillGroup(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    category: str = Field(min_length=1, max_length=100)
    items: list[str] = Field(min_length=1)


class EducationEntry(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    institution: str = Field(min_length=1, max_length=255)
    degree: str = Field(min_length=1, max_length=255)
    field_of_study: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class WorkExperienceEntry(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    company: str = Field(min_length=1, max_length=255)
    position: str = Field(min_length=1, max_length=255)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None
    responsibilities: list[str] = Field(default_factory=list)


class SocialLink(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    platform: str = Field(min_length=1, max_length=100)
    url: str = Field(pattern=HTTP_URL_PATTERN, max_length=2048)


class ProfileUpdate(_PartialUpdate):
    """Request body for PATCH /api/v1/admin/profile (creates the profile on first use)."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"profile_picture_url"})

    biography: Optional[str] = None
    contact_email: Optional[str] = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    skills: Optional[list[SkillGroup]] = None
    education: Optional[list[EducationEntry]] = None
    work_experience: Optional[list[WorkExperienceEntry]] = None
    social_links: Optional[list[SocialLink]] = None
    profile_picture_url: Optional[str] = Field(default=None, max_length=2048)


class ProfileResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    biography: str
    contact_email: str
    skills: list[dict]
    education: list[dict]
    work_experience: list[dict]
    social_links: list[dict]
    profile_picture_url: Optional[str]
    resume_url: Optional[str]
    updated_at: str

    @classmethod
    def from_domain(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            biography=profile.biography,
            contact_email=profile.contact_email,
            skills=profile.skills,
            education=profile.education,
            work_experience=profile.work_experience,
            social_links=profile.social_links,
            profile_picture_url=profile.profile_picture_url,
            resume_url=profile.resume_url,
            updated_at=profile.updated_at,
        )


class ResumeUrlUpdate(BaseModel):
    """Request body for PUT /api/v1/admin/resume/url."""

    model_config = ConfigDict(str_strip_whitespace=True)

    resume_url: str = Field(pattern=HTTP_URL_PATTERN, max_length=2048)


class ResumeUrlResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    resume_url: Optional[str]


# ---------------------------------------------------------------------------
# Contact
# ---------------------------------------------------------------------------


class ContactCreate(BaseModel):
    """Request body for POST /api/v1/contact."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    subject: Optional[str] = Field(default=None, max_length=200)
    message: str = Field(min_length=1, max_length=5000)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class ContactCreatedResponse(BaseModel):
    """Response for POST /api/v1/contact.

    notification_sent is False when mail is not configured or delivery failed;
    the submission is stored either way.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    message: str
    notification_sent: bool


class ContactStatusUpdate(BaseModel):
    """Request body for PATCH /api/v1/admin/contact-submissions/{id}/status."""

    is_read: bool


class ContactSubmissionResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    email: str
    subject: Optional[str]
    message: str
    is_read: bool
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, submission: ContactSubmission) -> "ContactSubmissionResponse":
        return cls(
            id=submission.id,
            name=submission.name,
            email=submission.email,
            subject=submission.subject,
            message=submission.message,
            is_read=submission.is_read,
            created_at=submission.created_at,
            updated_at=submission.updated_at,
        )


class ContactSubmissionListResponse(_Page):
    data: list[ContactSubmissionResponse]


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


class DashboardStatsResponse(BaseModel):
    """Response for GET /api/v1/admin/dashboard/stats."""

    model_config = ConfigDict(frozen=True)

    total_projects: int
    total_published_posts: int
    total_draft_posts: int
    total_contact_submissions: int
