"""
content/store.py -- SQLAlchemy-backed persistence layer for portfolio content.

Uses SQLAlchemy Core (not ORM) so the dataclasses in content/models.py remain
the authoritative domain representation. Swapping SQLite for PostgreSQL is a
connection string change, not a rewrite.

Pattern: Repository + Data Mapper. ContentStore is the repository (one clean
interface per entity). The _row_to_* functions are the mappers. Route
handlers never touch SQL directly.

Slugs:
  Projects and blog posts carry a slug unique within their own table
  (uq_projects_slug, uq_blog_posts_slug). core.slugs.resolve_slug() probes
  for a free candidate, but probing is check-then-act: two concurrent saves
  of "My Post" can both see "my-post" as free. The unique index is the final
  arbiter. When a write trips it, the losing candidate is remembered as taken
  and resolution runs again, which lands on the next suffix. After
  _MAX_SLUG_WRITE_ATTEMPTS lost races the store gives up with
  SlugConflictError (HTTP 409).

  A slug is resolved on insert and again only when the title actually
  changes. The update-path probe excludes the record's own id, so renaming
  "My Post" to "My  Post" keeps "my-post".

Profile:
  A single-row table (CHECK id = 1). upsert_profile() is the only writer and
  creates the row with defaults on first use.

Security: all queries use bound parameters. LIKE patterns built from user
input are escaped.

Usage:
    store = ContentStore()                               # SQLite default
    store = ContentStore("postgresql://user:pw@host/db") # PostgreSQL
    project_id = store.create_project(project)
    store.update_project(project_id, title="New title")
    store.close()
"""

import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from sqlalchemy import (
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    create_engine,
    event,
    func,
    or_,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from content.models import BlogPost, ContactSubmission, Profile, Project
from core.slugs import resolve_slug

logger = logging.getLogger("portfolio.content")

_DEFAULT_DB_URL = f"sqlite:///{Path(__file__).parent / 'portfolio_content.db'}"

# Lost write races tolerated per save before surfacing a conflict.
_MAX_SLUG_WRITE_ATTEMPTS = 3


class SlugConflictError(Exception):
    """A slug could not be claimed: explicit slug taken, or repeated lost write races."""


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_projects = Table(
    "projects",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(150), nullable=False),
    Column("slug", String(200), nullable=False),
    Column("short_summary", String(300), nullable=False),
    Column("description", Text, nullable=False),
    Column("technologies", Text, nullable=False),  # JSON array
    Column("role", String(255), nullable=False),
    Column("challenges", Text, nullable=False),
    Column("live_demo_url", Text),
    Column("source_code_url", Text),
    Column("images", Text, nullable=False),  # JSON array of {url, alt_text, is_thumbnail}
    Column("status", String(20), nullable=False, server_default="draft"),
    Column("display_order", Integer, nullable=False, server_default="0"),
    Column("featured", Integer, nullable=False, server_default="0"),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
    UniqueConstraint("slug", name="uq_projects_slug"),
    Index("ix_projects_status_order", "status", "display_order", "created_at"),
)

_blog_posts = Table(
    "blog_posts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(200), nullable=False),
    Column("slug", String(250), nullable=False),
    Column("content", Text, nullable=False),
    Column("author_id", Integer, nullable=False),
    Column("tags", Text, nullable=False),  # JSON array, lowercased
    Column("status", String(20), nullable=False, server_default="draft"),
    Column("featured_image", Text),
    Column("seo", Text, nullable=False),  # JSON object
    Column("published_at", String(32)),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
    UniqueConstraint("slug", name="uq_blog_posts_slug"),
    Index("ix_blog_posts_status_published", "status", "published_at"),
)

_contact_submissions = Table(
    "contact_submissions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("subject", String(255)),
    Column("message", Text, nullable=False),
    Column("is_read", Integer, nullable=False, server_default="0"),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
)

_profile = Table(
    "profile",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("biography", Text, nullable=False, server_default=""),
    Column("contact_email", String(255), nullable=False, server_default=""),
    Column("skills", Text, nullable=False),
    Column("education", Text, nullable=False),
    Column("work_experience", Text, nullable=False),
    Column("social_links", Text, nullable=False),
    Column("profile_picture_url", Text),
    Column("resume_url", Text),
    Column("updated_at", String(32), nullable=False),
    CheckConstraint("id = 1", name="ck_profile_single_row"),
)

_PROFILE_ID = 1

# Columns an admin list may be sorted by. Anything else falls back to created_at.
_PROJECT_SORT_COLUMNS = {
    "title": _projects.c.title,
    "slug": _projects.c.slug,
    "short_summary": _projects.c.short_summary,
    "status": _projects.c.status,
    "order": _projects.c.display_order,
    "featured": _projects.c.featured,
    "created_at": _projects.c.created_at,
    "updated_at": _projects.c.updated_at,
}

_BLOG_SORT_COLUMNS = {
    "title": _blog_posts.c.title,
    "slug": _blog_posts.c.slug,
    "status": _blog_posts.c.status,
    "published_at": _blog_posts.c.published_at,
    "created_at": _blog_posts.c.created_at,
    "updated_at": _blog_posts.c.updated_at,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _to_iso(value: Any) -> Optional[str]:
    """Normalize a datetime (or ISO string, or None) to a UTC ISO 8601 string."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _is_slug_violation(exc: IntegrityError) -> bool:
    """True when the IntegrityError came from a slug unique index.

    SQLite reports "UNIQUE constraint failed: projects.slug"; PostgreSQL names
    the constraint (uq_projects_slug). Both mention "slug".
    """
    return "slug" in str(exc.orig).lower()


def _normalize_tags(tags: list[str]) -> list[str]:
    return [t.strip().lower() for t in tags if t and t.strip()]


def _sort_clause(columns: dict, sort_by: str, sort_order: str):
    column = columns.get(sort_by, columns["created_at"])
    return column.asc() if sort_order == "asc" else column.desc()


# Fields whose Python value is a list/dict and is stored as JSON text.
_PROJECT_JSON_FIELDS = {"technologies", "images"}
_BLOG_JSON_FIELDS = {"tags", "seo"}
_PROFILE_JSON_FIELDS = {"skills", "education", "work_experience", "social_links"}


def _project_values(fields: dict) -> dict:
    values = dict(fields)
    for key in _PROJECT_JSON_FIELDS & values.keys():
        values[key] = json.dumps(values[key])
    if "order" in values:
        values["display_order"] = values.pop("order")
    if "featured" in values:
        values["featured"] = 1 if values["featured"] else 0
    return values


def _blog_values(fields: dict) -> dict:
    values = dict(fields)
    if "tags" in values:
        values["tags"] = _normalize_tags(values["tags"])
    for key in _BLOG_JSON_FIELDS & values.keys():
        values[key] = json.dumps(values[key])
    if "published_at" in values:
        values["published_at"] = _to_iso(values["published_at"])
    return values


def _profile_values(fields: dict) -> dict:
    values = dict(fields)
    for key in _PROFILE_JSON_FIELDS & values.keys():
        values[key] = json.dumps(values[key])
    if values.get("contact_email"):
        values["contact_email"] = values["contact_email"].strip().lower()
    return values


# ---------------------------------------------------------------------------
# WAL mode
# ---------------------------------------------------------------------------


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode for concurrent read safety.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ContentStore:
    def __init__(self, db_url: str = _DEFAULT_DB_URL) -> None:
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            # The same engine is used from FastAPI's threadpool workers.
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _set_wal_mode)
        metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # Slug plumbing
    # ------------------------------------------------------------------

    def _slug_taken(self, table: Table, candidate: str, exclude_id: Optional[int] = None) -> bool:
        """Return True if another record in table already owns candidate."""
        query = select(table.c.id).where(table.c.slug == candidate)
        if exclude_id is not None:
            query = query.where(table.c.id != exclude_id)
        with self.engine.connect() as conn:
            return conn.execute(query.limit(1)).first() is not None

    def _write_with_slug(
        self,
        table: Table,
        title: str,
        write: Callable[[str], Any],
        exclude_id: Optional[int] = None,
    ) -> Any:
        """Resolve a free slug for title and run write(slug), retrying lost races.

        write() must perform exactly one INSERT or UPDATE that sets the slug
        column. Its return value is passed through.
        """
        lost: set[str] = set()

        def exists(candidate: str) -> bool:
            return candidate in lost or self._slug_taken(table, candidate, exclude_id)

        for attempt in range(1, _MAX_SLUG_WRITE_ATTEMPTS + 1):
            slug = resolve_slug(title, exists)
            try:
                return write(slug)
            except IntegrityError as exc:
                if not _is_slug_violation(exc):
                    raise
                lost.add(slug)
                logger.warning(
                    "Slug %r in %s was claimed concurrently (attempt %d/%d)",
                    slug,
                    table.name,
                    attempt,
                    _MAX_SLUG_WRITE_ATTEMPTS,
                )
        raise SlugConflictError(f"Could not claim a unique slug for {title!r} in {table.name}.")

    def _claim_explicit_slug(self, table: Table, record_id: int, slug: str, values: dict) -> None:
        """Set a caller-chosen slug, failing if any other record owns it."""
        if self._slug_taken(table, slug, exclude_id=record_id):
            raise SlugConflictError(f"Slug {slug!r} is already in use.")
        try:
            self._update_row(table, record_id, {**values, "slug": slug})
        except IntegrityError as exc:
            if not _is_slug_violation(exc):
                raise
            raise SlugConflictError(f"Slug {slug!r} is already in use.") from exc

    def _insert_row(self, table: Table, values: dict) -> int:
        with self.engine.connect() as conn:
            result = conn.execute(table.insert().values(**values))
            conn.commit()
            return result.inserted_primary_key[0]

    def _update_row(self, table: Table, record_id: int, values: dict) -> bool:
        with self.engine.connect() as conn:
            result = conn.execute(table.update().where(table.c.id == record_id).values(**values))
            conn.commit()
        return result.rowcount > 0

    def _delete_row(self, table: Table, record_id: int) -> bool:
        with self.engine.connect() as conn:
            result = conn.execute(table.delete().where(table.c.id == record_id))
            conn.commit()
        return result.rowcount > 0

    def _page(self, table: Table, conditions: list, order_by: list, page: int, limit: int) -> tuple[list, int]:
        """Return (rows, total) for one page of table filtered by conditions."""
        with self.engine.connect() as conn:
            total = conn.execute(select(func.count()).select_from(table).where(*conditions)).scalar() or 0
            rows = conn.execute(
                table.select()
                .where(*conditions)
                .order_by(*order_by)
                .offset((page - 1) * limit)
                .limit(limit)
            ).fetchall()
        return rows, total

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def create_project(self, project: Project) -> int:
        """Insert a project with a freshly resolved slug and return its ID."""
        now = _now_iso()
        values = _project_values(
            {
                "title": project.title,
                "short_summary": project.short_summary,
                "description": project.description,
                "technologies": project.technologies,
                "role": project.role,
                "challenges": project.challenges,
                "live_demo_url": project.live_demo_url,
                "source_code_url": project.source_code_url,
                "images": project.images,
                "status": project.status,
                "order": project.order,
                "featured": project.featured,
            }
        )
        values["created_at"] = now
        values["updated_at"] = now
        return self._write_with_slug(
            _projects,
            project.title,
            lambda slug: self._insert_row(_projects, {**values, "slug": slug}),
        )

    def get_project(self, project_id: int, published_only: bool = False) -> Optional[Project]:
        """Fetch a project by ID. Returns None if not found (or not published when published_only)."""
        query = _projects.select().where(_projects.c.id == project_id)
        if published_only:
            query = query.where(_projects.c.status == "published")
        with self.engine.connect() as conn:
            row = conn.execute(query).fetchone()
        return _row_to_project(row) if row is not None else None

    def get_project_by_slug(self, slug: str, published_only: bool = False) -> Optional[Project]:
        query = _projects.select().where(_projects.c.slug == slug)
        if published_only:
            query = query.where(_projects.c.status == "published")
        with self.engine.connect() as conn:
            row = conn.execute(query).fetchone()
        return _row_to_project(row) if row is not None else None

    def list_projects(
        self,
        *,
        status: Optional[str] = None,
        category: Optional[str] = None,
        published_only: bool = False,
        sort_by: Optional[str] = None,
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Project], int]:
        """Return one page of projects and the total match count.

        category matches any technology containing it, case-insensitively.
        Without sort_by the public ordering applies: order ascending, newest
        first within the same order.
        """
        conditions = []
        if published_only:
            conditions.append(_projects.c.status == "published")
        elif status:
            conditions.append(_projects.c.status == status)
        if category:
            conditions.append(_projects.c.technologies.ilike(f"%{_escape_like(category)}%", escape="\\"))
        if sort_by is None:
            order_by = [_projects.c.display_order.asc(), _projects.c.created_at.desc()]
        else:
            order_by = [_sort_clause(_PROJECT_SORT_COLUMNS, sort_by, sort_order)]
        rows, total = self._page(_projects, conditions, order_by, page, limit)
        return [_row_to_project(r) for r in rows], total

    def update_project(self, project_id: int, **fields) -> Optional[Project]:
        """Apply a partial update. Returns the updated project, or None if not found.

        The slug is re-resolved only when the title changes. An explicit
        slug in fields replaces it directly and raises SlugConflictError if
        another project owns it.
        """
        current = self.get_project(project_id)
        if current is None:
            return None
        explicit_slug = fields.pop("slug", None)
        values = _project_values(fields)
        values["updated_at"] = _now_iso()
        title = fields.get("title", current.title)

        if explicit_slug:
            self._claim_explicit_slug(_projects, project_id, explicit_slug, values)
        elif title != current.title or not current.slug:
            self._write_with_slug(
                _projects,
                title,
                lambda slug: self._update_row(_projects, project_id, {**values, "slug": slug}),
                exclude_id=project_id,
            )
        else:
            self._update_row(_projects, project_id, values)
        return self.get_project(project_id)

    def delete_project(self, project_id: int) -> bool:
        """Delete a project. Returns True if deleted, False if not found."""
        return self._delete_row(_projects, project_id)

    def count_projects(self) -> int:
        with self.engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(_projects)).scalar() or 0

    # ------------------------------------------------------------------
    # Blog posts
    # ------------------------------------------------------------------

    def create_blog_post(self, post: BlogPost) -> int:
        """Insert a blog post with a freshly resolved slug and return its ID.

        Posts created as published are stamped with published_at = now unless
        the caller supplied one.
        """
        now = _now_iso()
        published_at = post.published_at
        if post.status == "published" and not published_at:
            published_at = now
        values = _blog_values(
            {
                "title": post.title,
                "content": post.content,
                "author_id": post.author_id,
                "tags": post.tags,
                "status": post.status,
                "featured_image": post.featured_image,
                "seo": post.seo,
                "published_at": published_at,
            }
        )
        values["created_at"] = now
        values["updated_at"] = now
        return self._write_with_slug(
            _blog_posts,
            post.title,
            lambda slug: self._insert_row(_blog_posts, {**values, "slug": slug}),
        )

    def get_blog_post(self, post_id: int) -> Optional[BlogPost]:
        with self.engine.connect() as conn:
            row = conn.execute(_blog_posts.select().where(_blog_posts.c.id == post_id)).fetchone()
        return _row_to_blog_post(row) if row is not None else None

    def get_blog_post_by_slug(self, slug: str, published_only: bool = False) -> Optional[BlogPost]:
        query = _blog_posts.select().where(_blog_posts.c.slug == slug)
        if published_only:
            query = query.where(_blog_posts.c.status == "published")
        with self.engine.connect() as conn:
            row = conn.execute(query).fetchone()
        return _row_to_blog_post(row) if row is not None else None

    def list_blog_posts(
        self,
        *,
        status: Optional[str] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
        published_only: bool = False,
        sort_by: Optional[str] = None,
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[BlogPost], int]:
        """Return one page of blog posts and the total match count.

        tag is an exact (case-insensitive) tag match; search is a substring
        match over title, content and tags. Without sort_by, posts are
        ordered newest-published first.
        """
        conditions = []
        if published_only:
            conditions.append(_blog_posts.c.status == "published")
        elif status:
            conditions.append(_blog_posts.c.status == status)
        if tag:
            quoted = _escape_like(json.dumps(tag.strip().lower()))
            conditions.append(_blog_posts.c.tags.like(f"%{quoted}%", escape="\\"))
        if search:
            pattern = f"%{_escape_like(search)}%"
            conditions.append(
                or_(
                    _blog_posts.c.title.ilike(pattern, escape="\\"),
                    _blog_posts.c.content.ilike(pattern, escape="\\"),
                    _blog_posts.c.tags.ilike(pattern, escape="\\"),
                )
            )
        if sort_by is None:
            order_by = [_blog_posts.c.published_at.desc(), _blog_posts.c.created_at.desc()]
        else:
            order_by = [_sort_clause(_BLOG_SORT_COLUMNS, sort_by, sort_order)]
        rows, total = self._page(_blog_posts, conditions, order_by, page, limit)
        return [_row_to_blog_post(r) for r in rows], total

    def update_blog_post(self, post_id: int, **fields) -> Optional[BlogPost]:
        """Apply a partial update. Returns the updated post, or None if not found.

        Slug rules match update_project(). Publishing rules:
          - status changing to "published" stamps published_at = now when it
            is unset or in the future;
          - an explicit published_at in fields always wins (None clears it).
        A partial seo dict is merged into the stored one key by key.
        """
        current = self.get_blog_post(post_id)
        if current is None:
            return None
        explicit_slug = fields.pop("slug", None)
        now = _now_iso()

        new_status = fields.get("status")
        if new_status == "published" and current.status != "published" and "published_at" not in fields:
            if current.published_at is None or current.published_at > now:
                fields["published_at"] = now

        if "seo" in fields:
            fields["seo"] = {**current.seo, **(fields["seo"] or {})}

        values = _blog_values(fields)
        values["updated_at"] = now
        title = fields.get("title", current.title)

        if explicit_slug:
            self._claim_explicit_slug(_blog_posts, post_id, explicit_slug, values)
        elif title != current.title or not current.slug:
            self._write_with_slug(
                _blog_posts,
                title,
                lambda slug: self._update_row(_blog_posts, post_id, {**values, "slug": slug}),
                exclude_id=post_id,
            )
        else:
            self._update_row(_blog_posts, post_id, values)
        return self.get_blog_post(post_id)

    def delete_blog_post(self, post_id: int) -> bool:
        return self._delete_row(_blog_posts, post_id)

    def list_published_tags(self) -> list[str]:
        """Return the sorted distinct tags used by published posts."""
        with self.engine.connect() as conn:
            rows = conn.execute(select(_blog_posts.c.tags).where(_blog_posts.c.status == "published")).fetchall()
        tags: set[str] = set()
        for row in rows:
            tags.update(json.loads(row.tags or "[]"))
        return sorted(tags)

    def count_blog_posts(self, status: Optional[str] = None) -> int:
        query = select(func.count()).select_from(_blog_posts)
        if status:
            query = query.where(_blog_posts.c.status == status)
        with self.engine.connect() as conn:
            return conn.execute(query).scalar() or 0

    # ------------------------------------------------------------------
    # Contact submissions
    # ------------------------------------------------------------------

    def create_contact_submission(self, submission: ContactSubmission) -> int:
        now = _now_iso()
        return self._insert_row(
            _contact_submissions,
            {
                "name": submission.name,
                "email": submission.email.strip().lower(),
                "subject": submission.subject,
                "message": submission.message,
                "is_read": 1 if submission.is_read else 0,
                "created_at": now,
                "updated_at": now,
            },
        )

    def get_contact_submission(self, submission_id: int) -> Optional[ContactSubmission]:
        with self.engine.connect() as conn:
            row = conn.execute(
                _contact_submissions.select().where(_contact_submissions.c.id == submission_id)
            ).fetchone()
        return _row_to_contact(row) if row is not None else None

    def list_contact_submissions(self, page: int = 1, limit: int = 10) -> tuple[list[ContactSubmission], int]:
        """Return one page of submissions, newest first, and the total count."""
        order_by = [_contact_submissions.c.created_at.desc(), _contact_submissions.c.id.desc()]
        rows, total = self._page(_contact_submissions, [], order_by, page, limit)
        return [_row_to_contact(r) for r in rows], total

    def set_contact_read(self, submission_id: int, is_read: bool) -> Optional[ContactSubmission]:
        """Mark a submission read/unread. Returns the updated record or None if not found."""
        updated = self._update_row(
            _contact_submissions,
            submission_id,
            {"is_read": 1 if is_read else 0, "updated_at": _now_iso()},
        )
        return self.get_contact_submission(submission_id) if updated else None

    def delete_contact_submission(self, submission_id: int) -> bool:
        return self._delete_row(_contact_submissions, submission_id)

    def count_contact_submissions(self) -> int:
        with self.engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(_contact_submissions)).scalar() or 0

    # ------------------------------------------------------------------
    # Profile (single record)
    # ------------------------------------------------------------------

    def get_profile(self) -> Optional[Profile]:
        """Return the profile, or None if it has never been written."""
        with self.engine.connect() as conn:
            row = conn.execute(_profile.select().where(_profile.c.id == _PROFILE_ID)).fetchone()
        return _row_to_profile(row) if row is not None else None

    def upsert_profile(self, **fields) -> Profile:
        """Update the profile, creating it with defaults first if needed.

        Update is tried first; only when no row exists is an INSERT issued.
        A concurrent first write loses on the primary key and falls back to
        the update.
        """
        values = _profile_values(fields)
        values["updated_at"] = _now_iso()
        if not self._update_row(_profile, _PROFILE_ID, values):
            defaults = _profile_values(
                {"skills": [], "education": [], "work_experience": [], "social_links": []}
            )
            try:
                self._insert_row(_profile, {**defaults, **values, "id": _PROFILE_ID})
            except IntegrityError:
                self._update_row(_profile, _PROFILE_ID, values)
        profile = self.get_profile()
        assert profile is not None  # row exists after a successful upsert
        return profile

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_project(row) -> Project:
    return Project(
        id=row.id,
        title=row.title,
        slug=row.slug,
        short_summary=row.short_summary,
        description=row.description,
        technologies=json.loads(row.technologies or "[]"),
        role=row.role,
        challenges=row.challenges,
        live_demo_url=row.live_demo_url,
        source_code_url=row.source_code_url,
        images=json.loads(row.images or "[]"),
        status=row.status,
        order=row.display_order,
        featured=bool(row.featured),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _row_to_blog_post(row) -> BlogPost:
    return BlogPost(
        id=row.id,
        title=row.title,
        slug=row.slug,
        content=row.content,
        author_id=row.author_id,
        tags=json.loads(row.tags or "[]"),
        status=row.status,
        featured_image=row.featured_image,
        seo=json.loads(row.seo or "{}"),
        published_at=row.published_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _row_to_contact(row) -> ContactSubmission:
    return ContactSubmission(
        id=row.id,
        name=row.name,
        email=row.email,
        subject=row.subject,
        message=row.message,
        is_read=bool(row.is_read),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _row_to_profile(row) -> Profile:
    return Profile(
        biography=row.biography,
        contact_email=row.contact_email,
        skills=json.loads(row.skills or "[]"),
        education=json.loads(row.education or "[]"),
        work_experience=json.loads(row.work_experience or "[]"),
        social_links=json.loads(row.social_links or "[]"),
        profile_picture_url=row.profile_picture_url,
        resume_url=row.resume_url,
        updated_at=row.updated_at,
    )
