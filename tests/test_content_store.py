"""Unit tests for content/store.py -- the content repository.

Covers:
- slug assignment on insert, suffixing within a collection, independence across collections
- re-saving without a title change keeps the slug; renaming re-derives it
- explicit slug on update, and SlugConflictError when another record owns it
- lost write races: a stale probe falls through to the next suffix; repeated losses raise
- blog publishing rules for published_at
- list filters, paging and sort whitelist
- contact submissions and the profile singleton upsert
"""

from datetime import datetime, timedelta, timezone

import pytest

from content.models import BlogPost, ContactSubmission, Project
from content.store import _MAX_SLUG_WRITE_ATTEMPTS, SlugConflictError


def _project(title: str = "My Project", **overrides) -> Project:
    fields = dict(
        title=title,
        short_summary="Summary",
        description="Description",
        technologies=["Python", "FastAPI"],
        role="Developer",
        challenges="None worth mentioning",
    )
    fields.update(overrides)
    return Project(**fields)


def _post(title: str = "My Post", **overrides) -> BlogPost:
    fields = dict(title=title, content="Body text", author_id=1)
    fields.update(overrides)
    return BlogPost(**fields)


# ---------------------------------------------------------------------------
# Slugs
# ---------------------------------------------------------------------------


class TestSlugAssignment:
    def test_insert_assigns_slug(self, content_store) -> None:
        project_id = content_store.create_project(_project("Hello World"))
        assert content_store.get_project(project_id).slug == "hello-world"

    def test_duplicate_titles_get_suffixes(self, content_store) -> None:
        slugs = [content_store.get_blog_post(content_store.create_blog_post(_post("My Post"))).slug for _ in range(3)]
        assert slugs == ["my-post", "my-post-1", "my-post-2"]

    def test_collections_are_independent(self, content_store) -> None:
        project = content_store.get_project(content_store.create_project(_project("Shared Title")))
        post = content_store.get_blog_post(content_store.create_blog_post(_post("Shared Title")))
        assert project.slug == post.slug == "shared-title"

    def test_unsluggable_title(self, content_store) -> None:
        post = content_store.get_blog_post(content_store.create_blog_post(_post("???")))
        assert post.slug == "untitled"

    def test_resave_without_title_change_keeps_slug(self, content_store) -> None:
        first = content_store.create_blog_post(_post("My Post"))
        content_store.create_blog_post(_post("My Post"))
        updated = content_store.update_blog_post(first, title="My Post", content="Edited")
        assert updated.slug == "my-post"
        assert updated.content == "Edited"

    def test_field_update_keeps_slug(self, content_store) -> None:
        project_id = content_store.create_project(_project("Stable"))
        updated = content_store.update_project(project_id, short_summary="New summary", featured=True)
        assert updated.slug == "stable"
        assert updated.featured is True

    def test_rename_rederives_slug(self, content_store) -> None:
        project_id = content_store.create_project(_project("Old Name"))
        content_store.create_project(_project("New Name"))
        updated = content_store.update_project(project_id, title="New Name")
        assert updated.slug == "new-name-1"

    def test_rename_to_equivalent_title_keeps_own_slug(self, content_store) -> None:
        post_id = content_store.create_blog_post(_post("My Post"))
        assert content_store.update_blog_post(post_id, title="My  Post!").slug == "my-post"

    def test_explicit_slug(self, content_store) -> None:
        post_id = content_store.create_blog_post(_post("Draft Title"))
        assert content_store.update_blog_post(post_id, slug="custom-url").slug == "custom-url"

    def test_explicit_slug_owned_by_another_record(self, content_store) -> None:
        content_store.create_blog_post(_post("Taken"))
        other = content_store.create_blog_post(_post("Other"))
        with pytest.raises(SlugConflictError):
            content_store.update_blog_post(other, slug="taken")
        assert content_store.get_blog_post(other).slug == "other"


class TestSlugWriteRace:
    def test_stale_probe_moves_to_next_suffix(self, content_store, monkeypatch) -> None:
        """Two creators both see "my-post" as free; the unique index sends the second to my-post-1."""
        content_store.create_blog_post(_post("My Post"))

        real_taken = content_store._slug_taken
        stale = {"my-post"}

        def racing_probe(table, candidate, exclude_id=None):
            # The probe ran before the competing insert committed.
            if candidate in stale:
                return False
            return real_taken(table, candidate, exclude_id)

        monkeypatch.setattr(content_store, "_slug_taken", racing_probe)

        post_id = content_store.create_blog_post(_post("My Post"))
        assert content_store.get_blog_post(post_id).slug == "my-post-1"

    def test_repeated_losses_raise_conflict(self, content_store, monkeypatch) -> None:
        for _ in range(_MAX_SLUG_WRITE_ATTEMPTS):
            content_store.create_project(_project("Busy"))

        monkeypatch.setattr(content_store, "_slug_taken", lambda table, candidate, exclude_id=None: False)

        with pytest.raises(SlugConflictError):
            content_store.create_project(_project("Busy"))
        _, total = content_store.list_projects(limit=50)
        assert total == _MAX_SLUG_WRITE_ATTEMPTS


# ---------------------------------------------------------------------------
# Publishing rules
# ---------------------------------------------------------------------------


class TestPublishing:
    def test_create_published_stamps_published_at(self, content_store) -> None:
        post = content_store.get_blog_post(content_store.create_blog_post(_post(status="published")))
        assert post.published_at is not None

    def test_create_draft_leaves_published_at_unset(self, content_store) -> None:
        post = content_store.get_blog_post(content_store.create_blog_post(_post()))
        assert post.published_at is None

    def test_publishing_a_draft_stamps_now(self, content_store) -> None:
        post_id = content_store.create_blog_post(_post())
        before = datetime.now(timezone.utc)
        post = content_store.update_blog_post(post_id, status="published")
        assert datetime.fromisoformat(post.published_at) >= before - timedelta(seconds=1)

    def test_future_published_at_is_pulled_to_now(self, content_store) -> None:
        future = datetime.now(timezone.utc) + timedelta(days=30)
        post_id = content_store.create_blog_post(_post(published_at=future.isoformat()))
        post = content_store.update_blog_post(post_id, status="published")
        assert datetime.fromisoformat(post.published_at) < future

    def test_past_published_at_is_kept(self, content_store) -> None:
        past = datetime(2020, 5, 1, tzinfo=timezone.utc)
        post_id = content_store.create_blog_post(_post(published_at=past.isoformat()))
        post = content_store.update_blog_post(post_id, status="published")
        assert datetime.fromisoformat(post.published_at) == past

    def test_explicit_published_at_wins(self, content_store) -> None:
        post_id = content_store.create_blog_post(_post())
        chosen = "2023-01-02T03:04:05+00:00"
        post = content_store.update_blog_post(post_id, status="published", published_at=chosen)
        assert post.published_at == chosen

    def test_explicit_none_clears(self, content_store) -> None:
        post_id = content_store.create_blog_post(_post(status="published"))
        assert content_store.update_blog_post(post_id, published_at=None).published_at is None

    def test_partial_seo_merges(self, content_store) -> None:
        seo = {"seo_title": "Title", "seo_description": "Desc", "seo_keywords": ["a", "b"]}
        post_id = content_store.create_blog_post(_post(seo=seo))
        post = content_store.update_blog_post(post_id, seo={"seo_description": "New desc"})
        assert post.seo == {"seo_title": "Title", "seo_description": "New desc", "seo_keywords": ["a", "b"]}


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


class TestListing:
    def test_published_only_and_paging(self, content_store) -> None:
        for i in range(5):
            content_store.create_project(_project(f"Published {i}", status="published", order=i))
        content_store.create_project(_project("Hidden draft"))

        page_one, total = content_store.list_projects(published_only=True, page=1, limit=2)
        page_three, _ = content_store.list_projects(published_only=True, page=3, limit=2)
        assert total == 5
        assert [p.title for p in page_one] == ["Published 0", "Published 1"]
        assert [p.title for p in page_three] == ["Published 4"]

    def test_category_matches_technology(self, content_store) -> None:
        content_store.create_project(_project("Py", technologies=["Python"], status="published"))
        content_store.create_project(_project("Go", technologies=["Go"], status="published"))
        items, total = content_store.list_projects(category="python", published_only=True)
        assert total == 1
        assert items[0].title == "Py"

    def test_unknown_sort_key_falls_back(self, content_store) -> None:
        content_store.create_project(_project("A"))
        items, total = content_store.list_projects(sort_by="id; DROP TABLE projects", sort_order="asc")
        assert total == 1
        assert items[0].title == "A"

    def test_sort_by_title(self, content_store) -> None:
        for title in ("Banana", "Apple", "Cherry"):
            content_store.create_project(_project(title))
        items, _ = content_store.list_projects(sort_by="title", sort_order="asc")
        assert [p.title for p in items] == ["Apple", "Banana", "Cherry"]

    def test_blog_tag_and_search(self, content_store) -> None:
        content_store.create_blog_post(_post("FastAPI tips", tags=[" Python ", "Web"], status="published"))
        content_store.create_blog_post(_post("Gardening", tags=["outdoors"], status="published"))
        content_store.create_blog_post(_post("Secret python draft", tags=["python"]))

        tagged, total = content_store.list_blog_posts(tag="PYTHON", published_only=True)
        assert total == 1
        assert tagged[0].tags == ["python", "web"]

        found, _ = content_store.list_blog_posts(search="garden", published_only=True)
        assert [p.title for p in found] == ["Gardening"]

        assert content_store.list_published_tags() == ["outdoors", "python", "web"]

    def test_search_treats_wildcards_literally(self, content_store) -> None:
        content_store.create_blog_post(_post("Plain", status="published"))
        _, total = content_store.list_blog_posts(search="%", published_only=True)
        assert total == 0


# ---------------------------------------------------------------------------
# Contact submissions and profile
# ---------------------------------------------------------------------------


class TestContactSubmissions:
    def test_lifecycle(self, content_store) -> None:
        first = content_store.create_contact_submission(ContactSubmission(name="A", email="A@Example.com", message="hi"))
        second = content_store.create_contact_submission(ContactSubmission(name="B", email="b@example.com", message="yo"))

        items, total = content_store.list_contact_submissions()
        assert total == 2
        assert [s.id for s in items] == [second, first]
        assert items[1].email == "a@example.com"

        marked = content_store.set_contact_read(first, True)
        assert marked.is_read is True
        assert content_store.set_contact_read(9999, True) is None

        assert content_store.delete_contact_submission(first) is True
        assert content_store.delete_contact_submission(first) is False
        assert content_store.count_contact_submissions() == 1


class TestProfile:
    def test_absent_until_first_write(self, content_store) -> None:
        assert content_store.get_profile() is None

    def test_upsert_creates_then_updates(self, content_store) -> None:
        created = content_store.upsert_profile(biography="Hello")
        assert created.biography == "Hello"
        assert created.skills == []

        updated = content_store.upsert_profile(
            skills=[{"category": "Languages", "items": ["Python"]}],
            contact_email="Me@Example.com",
        )
        assert updated.biography == "Hello"
        assert updated.skills == [{"category": "Languages", "items": ["Python"]}]
        assert updated.contact_email == "me@example.com"

    def test_resume_url(self, content_store) -> None:
        assert content_store.upsert_profile(resume_url="https://cdn.example.com/cv.pdf").resume_url == (
            "https://cdn.example.com/cv.pdf"
        )


class TestCounts:
    def test_counts(self, content_store) -> None:
        content_store.create_project(_project())
        content_store.create_blog_post(_post("One", status="published"))
        content_store.create_blog_post(_post("Two"))
        content_store.create_blog_post(_post("Three"))
        assert content_store.count_projects() == 1
        assert content_store.count_blog_posts() == 3
        assert content_store.count_blog_posts(status="published") == 1
        assert content_store.count_blog_posts(status="draft") == 2
