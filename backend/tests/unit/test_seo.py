"""Unit tests for page metadata, JSON-LD and sitemap generation."""

from datetime import datetime, timezone

import pytest

from app.application.services.seo_metadata import (
    generate_category_metadata,
    generate_metadata,
    generate_post_metadata,
    generate_search_metadata,
)
from app.application.services.sitemap import (
    build_robots_txt,
    build_sitemap,
    is_excluded,
    sitemap_entries,
    SitemapEntry,
)
from app.application.services.structured_data import (
    article_structured_data,
    breadcrumb_structured_data,
    organization_structured_data,
    website_structured_data,
)
from app.domain.entities import Author, Category, Post, PostStatus, SiteProfile, Tag

SITE = SiteProfile(
    name="Dev Blog",
    url="https://blog.example.com/",
    description="Notes on building things",
    author="Dev Team",
    twitter_handle="@devblog",
    keywords=("dev", "blog"),
)
PUBLISHED = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
UPDATED = datetime(2024, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def post() -> Post:
    return Post(
        id="p-1",
        title="Async SQLAlchemy",
        slug="async-sqlalchemy",
        content="One two three four five",
        author_id="u-1",
        author=Author(id="u-1", name="Alice", email="alice@example.com"),
        category=Category(name="Python", slug="python", id="c-1"),
        tags=[Tag(name="ORM", slug="orm"), Tag(name="asyncio", slug="asyncio")],
        status=PostStatus.PUBLISHED,
        published=True,
        published_at=PUBLISHED,
        updated_at=UPDATED,
    )


# ── Metadata ──


def test_title_gets_site_suffix_except_for_site_name():
    assert generate_metadata(SITE, title="About", description="d")["title"] == "About | Dev Blog"
    assert generate_metadata(SITE, title="Dev Blog", description="d")["title"] == "Dev Blog"


def test_relative_urls_are_resolved_against_site():
    meta = generate_metadata(SITE, title="About", description="d", url="/about", image="img/a.png")

    assert meta["canonical"] == "https://blog.example.com/about"
    assert meta["open_graph"]["images"][0]["url"] == "https://blog.example.com/img/a.png"
    assert meta["twitter"]["images"] == ["https://blog.example.com/img/a.png"]
    assert "published_time" not in meta["open_graph"]


def test_post_metadata_is_an_article(post: Post):
    meta = generate_post_metadata(SITE, post)
    og = meta["open_graph"]

    assert og["type"] == "article"
    assert og["published_time"] == PUBLISHED.isoformat()
    assert og["modified_time"] == UPDATED.isoformat()
    assert og["authors"] == ["Alice"]
    assert meta["description"] == "Read Async SQLAlchemy by Alice"
    assert meta["keywords"] == "dev, blog, Python, ORM, asyncio"
    assert meta["canonical"] == "https://blog.example.com/blog/async-sqlalchemy"
    assert og["images"][0]["url"] == "https://blog.example.com/og-image.png"


def test_category_and_search_metadata():
    category = Category(name="Web Dev", slug="web-dev")
    assert generate_category_metadata(SITE, category)["title"] == "Web Dev Posts | Dev Blog"

    found = generate_search_metadata(SITE, "next js", 4)
    assert found["title"] == 'Search results for "next js" | Dev Blog'
    assert found["description"] == 'Found 4 posts matching "next js"'
    assert found["canonical"] == "https://blog.example.com/blog?q=next%20js"

    empty = generate_search_metadata(SITE, "  ", 0)
    assert empty["title"] == "Search Posts | Dev Blog"
    assert empty["canonical"] == "https://blog.example.com/blog"


# ── Structured data ──


def test_article_structured_data(post: Post):
    data = article_structured_data(SITE, post)

    assert data["@type"] == "Article"
    assert data["description"] == "One two three four five"
    assert data["wordCount"] == 5
    assert data["articleSection"] == "Python"
    assert data["keywords"] == "ORM, asyncio"
    assert data["author"] == {"@type": "Person", "name": "Alice", "email": "alice@example.com"}
    assert data["datePublished"] == PUBLISHED.isoformat()
    assert data["mainEntityOfPage"]["@id"] == "https://blog.example.com/blog/async-sqlalchemy"


def test_article_structured_data_fallbacks(post: Post):
    post.published_at = None
    post.category = None
    post.author = Author(id="u-1", name="Alice")
    post.content = "x" * 500

    data = article_structured_data(SITE, post)

    assert data["datePublished"] == UPDATED.isoformat()
    assert len(data["description"]) == 160
    assert "articleSection" not in data
    assert "email" not in data["author"]


def test_breadcrumb_positions_start_at_one():
    data = breadcrumb_structured_data(SITE, [("Home", "/"), ("Blog", "/blog")])
    items = data["itemListElement"]

    assert [i["position"] for i in items] == [1, 2]
    assert items[1]["item"] == "https://blog.example.com/blog"


def test_website_and_organization():
    website = website_structured_data(SITE)
    assert website["potentialAction"]["target"]["urlTemplate"] == (
        "https://blog.example.com/blog?q={search_term_string}"
    )
    assert organization_structured_data(SITE)["sameAs"] == ["https://twitter.com/devblog"]


# ── Sitemap / robots ──


def test_sitemap_priorities_and_exclusions(post: Post):
    now = datetime(2024, 4, 1, tzinfo=timezone.utc)
    entries = sitemap_entries([post], now=now)
    entries.append(SitemapEntry("/dashboard/posts", now))

    xml = build_sitemap(SITE, entries)

    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<loc>https://blog.example.com/</loc>" in xml
    assert "<priority>1.0</priority>" in xml
    assert "<priority>0.9</priority>" in xml
    assert "<loc>https://blog.example.com/blog/async-sqlalchemy</loc>" in xml
    assert f"<lastmod>{UPDATED.isoformat()}</lastmod>" in xml
    assert "dashboard" not in xml


@pytest.mark.parametrize(
    "path, excluded",
    [("/api", True), ("/api/v1/posts", True), ("/login", True), ("/apiary", False), ("/blog", False)],
)
def test_is_excluded(path, excluded):
    assert is_excluded(path) is excluded


def test_robots_txt():
    robots = build_robots_txt(SITE)

    assert "Disallow: /dashboard" in robots
    assert "Disallow: /register" in robots
    assert "Sitemap: https://blog.example.com/sitemap.xml" in robots
