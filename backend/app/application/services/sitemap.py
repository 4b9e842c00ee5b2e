"""sitemap.xml and robots.txt generation."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from xml.etree import ElementTree

from app.domain.entities import Post, SiteProfile

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
EXCLUDED_PATHS = ("/dashboard", "/api", "/login", "/register")


@dataclass(frozen=True)
class SitemapEntry:
    path: str
    lastmod: datetime
    changefreq: str = "weekly"
    priority: float = 0.7


def is_excluded(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in EXCLUDED_PATHS)


def entry_for_path(path: str, lastmod: datetime) -> SitemapEntry:
    """Home and the blog index change daily; everything else weekly."""
    if path == "/":
        return SitemapEntry(path, lastmod, "daily", 1.0)
    if path == "/blog":
        return SitemapEntry(path, lastmod, "daily", 0.9)
    return SitemapEntry(path, lastmod)


def sitemap_entries(posts: Iterable[Post], now: datetime | None = None) -> list[SitemapEntry]:
    now = now or datetime.now(timezone.utc)
    entries = [entry_for_path("/", now), entry_for_path("/blog", now)]
    entries.extend(entry_for_path(f"/blog/{post.slug}", post.updated_at) for post in posts)
    return entries


def build_sitemap(site: SiteProfile, entries: Iterable[SitemapEntry]) -> str:
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NAMESPACE)
    for entry in entries:
        if is_excluded(entry.path):
            continue
        url = ElementTree.SubElement(urlset, "url")
        ElementTree.SubElement(url, "loc").text = site.absolute(entry.path)
        ElementTree.SubElement(url, "lastmod").text = entry.lastmod.isoformat()
        ElementTree.SubElement(url, "changefreq").text = entry.changefreq
        ElementTree.SubElement(url, "priority").text = f"{entry.priority:.1f}"

    body = ElementTree.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'


def build_robots_txt(site: SiteProfile) -> str:
    lines = ["User-agent: *", "Allow: /", ""]
    lines.append("User-agent: *")
    lines.extend(f"Disallow: {path}" for path in EXCLUDED_PATHS)
    lines.extend(["", f"Host: {site.base_url}", f"Sitemap: {site.base_url}/sitemap.xml", ""])
    return "\n".join(lines)
