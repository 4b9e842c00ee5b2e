"""schema.org JSON-LD documents for posts and the site itself."""

from typing import Any

from app.domain.entities import Post, SiteProfile

SCHEMA_CONTEXT = "https://schema.org"
DESCRIPTION_FALLBACK_LENGTH = 160
LOGO_SIZE = 60


def _logo(site: SiteProfile) -> dict[str, Any]:
    return {
        "@type": "ImageObject",
        "url": site.absolute(site.logo),
        "width": LOGO_SIZE,
        "height": LOGO_SIZE,
    }


def _publisher(site: SiteProfile) -> dict[str, Any]:
    return {
        "@type": "Organization",
        "name": site.name,
        "logo": _logo(site),
        "url": site.base_url,
    }


def article_structured_data(site: SiteProfile, post: Post) -> dict[str, Any]:
    published = post.published_at or post.updated_at
    data: dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
        "headline": post.title,
        "description": post.excerpt or post.content[:DESCRIPTION_FALLBACK_LENGTH],
        "image": [site.absolute(post.featured_image or site.default_image)],
        "datePublished": published.isoformat(),
        "dateModified": post.updated_at.isoformat(),
        "author": {
            "@type": "Person",
            "name": post.author.name if post.author else site.author,
        },
        "publisher": _publisher(site),
        "mainEntityOfPage": {
            "@type": "WebPage",
            "@id": f"{site.base_url}/blog/{post.slug}",
        },
        "keywords": ", ".join(tag.name for tag in post.tags),
        "wordCount": len(post.content.split()),
        "articleBody": post.content,
    }
    if post.author and post.author.email:
        data["author"]["email"] = post.author.email
    if post.category:
        data["articleSection"] = post.category.name
    return data


def breadcrumb_structured_data(site: SiteProfile, items: list[tuple[str, str]]) -> dict[str, Any]:
    """``items`` is an ordered list of ``(name, site-relative url)`` pairs."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": [
            {
                "@type": "ListItem",
                "position": position,
                "name": name,
                "item": site.absolute(url),
            }
            for position, (name, url) in enumerate(items, start=1)
        ],
    }


def website_structured_data(site: SiteProfile) -> dict[str, Any]:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "WebSite",
        "name": site.name,
        "description": site.description,
        "url": site.base_url,
        "inLanguage": "en-US",
        "potentialAction": {
            "@type": "SearchAction",
            "target": {
                "@type": "EntryPoint",
                "urlTemplate": f"{site.base_url}/blog?q={{search_term_string}}",
            },
            "query-input": "required name=search_term_string",
        },
        "publisher": {"@type": "Organization", "name": site.author, "url": site.base_url},
        "keywords": ", ".join(site.keywords),
    }


def blog_structured_data(site: SiteProfile, authors: list[str] | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Blog",
        "name": site.name,
        "description": site.description,
        "url": f"{site.base_url}/blog",
        "inLanguage": "en-US",
        "publisher": _publisher(site),
        "keywords": ", ".join(site.keywords),
    }
    if authors:
        data["author"] = [{"@type": "Person", "name": name} for name in authors]
    return data


def organization_structured_data(site: SiteProfile) -> dict[str, Any]:
    data: dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Organization",
        "name": site.name,
        "description": site.description,
        "url": site.base_url,
        "logo": _logo(site),
    }
    if site.twitter_handle:
        data["sameAs"] = [f"https://twitter.com/{site.twitter_handle.lstrip('@')}"]
    return data
