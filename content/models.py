"""
content/models.py -- Domain dataclasses for portfolio content.

These are pure data containers with zero logic. Slug resolution, publishing
rules and persistence live in content/store.py.

Nested values (images, SEO metadata, profile sections) stay plain dicts and
lists: they are stored as JSON text and validated at the API boundary by the
pydantic models in api/models.py.

id is None before a record is written to the database.
"""

from dataclasses import dataclass, field
from typing import Optional

PROJECT_STATUSES = ("published", "draft")
BLOG_POST_STATUSES = ("draft", "published")


@dataclass
class Project:
    """A portfolio project.

    slug is derived from title by the store on insert and whenever the title
    changes; any value set here before create_project() is ignored.
    images holds {"url", "alt_text", "is_thumbnail"} dicts.
    """

    title: str
    short_summary: str
    description: str
    technologies: list[str]
    role: str
    challenges: str
    slug: str = ""
    live_demo_url: Optional[str] = None
    source_code_url: Optional[str] = None
    images: list[dict] = field(default_factory=list)
    status: str = "draft"  # "published" | "draft"
    order: int = 0
    featured: bool = False
    id: Optional[int] = None
    created_at: str = ""  # ISO 8601, set by store on insert
    updated_at: str = ""


@dataclass
class BlogPost:
    """A blog post written by a principal (author_id -> users.id).

    seo holds {"seo_title", "seo_description", "seo_keywords"}.
    published_at is stamped by the store when the post first goes live.
    """

    title: str
    content: str
    author_id: int
    slug: str = ""
    tags: list[str] = field(default_factory=list)
    status: str = "draft"  # "draft" | "published"
    featured_image: Optional[str] = None
    seo: dict = field(default_factory=dict)
    published_at: Optional[str] = None  # ISO 8601
    id: Optional[int] = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class ContactSubmission:
    """A message left through the public contact form."""

    name: str
    email: str
    message: str
    subject: Optional[str] = None
    is_read: bool = False
    id: Optional[int] = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class Profile:
    """The site owner's profile -- a single record, never a collection."""

    biography: str = ""
    contact_email: str = ""
    skills: list[dict] = field(default_factory=list)
    education: list[dict] = field(default_factory=list)
    work_experience: list[dict] = field(default_factory=list)
    social_links: list[dict] = field(default_factory=list)
    profile_picture_url: Optional[str] = None
    resume_url: Optional[str] = None
    updated_at: str = ""
