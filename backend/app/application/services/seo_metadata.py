"""Page metadata (title, description, Open Graph, Twitter card, canonical URL).

Every function is pure: it takes the :class:`SiteProfile` plus page data and
returns a JSON-serialisable dict the frontend drops into its <head>.
"""

from datetime import datetime
from typing import Any
from urllib.parse import quote

from app.domain.entities import Category, Post, SiteProfile

OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def generate_metadata(
    site: SiteProfile,
    *,
    title: str,
    description: str,
    keywords: list[str] | None = None,
    image: str | None = None,
    url: str | None = None,
    page_type: str = "website",
    published_time: str | None = None,
    modified_time: str | None = None,
    author: str | None = None,
) -> dict[str, Any]:
    """Build the metadata block for one page.

    ``url`` is a site-relative path; ``image`` may be relative or absolute.
    Article-only Open Graph fields are emitted only for ``page_type="article"``.
    """
    full_title = title if title == site.name else f"{title} | {site.name}"
    full_url = f"{site.base_url}{url}" if url else site.base_url
    full_image = site.absolute(image or site.default_image)
    author_name = author or site.author

    open_graph: dict[str, Any] = {
        "type": page_type,
        "locale": "en_US",
        "url": full_url,
        "site_name": site.name,
        "title": full_title,
        "description": description,
        "images": [
            {
                "url": full_image,
                "width": OG_IMAGE_WIDTH,
                "height": OG_IMAGE_HEIGHT,
                "alt": title,
            }
        ],
    }
    if page_type == "article":
        open_graph.update(
            published_time=published_time,
            modified_time=modified_time,
            authors=[author_name],
        )

    return {
        "title": full_title,
        "description": description,
        "keywords": ", ".join([*site.keywords, *(keywords or [])]),
        "authors": [{"name": author_name}],
        "creator": author_name,
        "publisher": site.name,
        "robots": {
            "index": True,
            "follow": True,
            "googlebot": {
                "index": True,
                "follow": True,
                "max-video-preview": -1,
                "max-image-preview": "large",
                "max-snippet": -1,
            },
        },
        "open_graph": open_graph,
        "twitter": {
            "card": "summary_large_image",
            "title": full_title,
            "description": description,
            "images": [full_image],
            "creator": site.twitter_handle,
            "site": site.twitter_handle,
        },
        "canonical": full_url,
    }


def generate_post_metadata(site: SiteProfile, post: Post, url: str | None = None) -> dict[str, Any]:
    author_name = post.author.name if post.author else site.author
    keywords = ([post.category.name] if post.category else []) + [tag.name for tag in post.tags]

    return generate_metadata(
        site,
        title=post.title,
        description=post.excerpt or f"Read {post.title} by {author_name}",
        keywords=keywords,
        image=post.featured_image,
        url=url or f"/blog/{post.slug}",
        page_type="article",
        published_time=_iso(post.published_at),
        modified_time=_iso(post.updated_at),
        author=author_name,
    )


def generate_category_metadata(
    site: SiteProfile, category: Category, url: str | None = None
) -> dict[str, Any]:
    return generate_metadata(
        site,
        title=f"{category.name} Posts",
        description=category.description or f"Browse all posts in the {category.name} category",
        keywords=[category.name.lower(), "category", "posts"],
        url=url or f"/blog?category={quote(category.slug)}",
    )


def generate_search_metadata(
    site: SiteProfile, query: str | None, total_results: int
) -> dict[str, Any]:
    query = (query or "").strip()
    if query:
        return generate_metadata(
            site,
            title=f'Search results for "{query}"',
            description=f'Found {total_results} posts matching "{query}"',
            keywords=[query, "search", "results"],
            url=f"/blog?q={quote(query, safe='')}",
        )
    return generate_metadata(
        site,
        title="Search Posts",
        description="Search through all blog posts",
        keywords=["search", "posts"],
        url="/blog",
    )
