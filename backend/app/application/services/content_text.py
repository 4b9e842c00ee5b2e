"""Text helpers for post content: slugs, snippets and search highlighting."""

import html
import re
import unicodedata


def slugify(text: str) -> str:
    """Generate a lowercase, URL-safe slug from a title or name."""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = normalized.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s_]+", "-", slug)
    return slug.strip("-")


def truncate_content(content: str, max_length: int = 200) -> str:
    """Cut ``content`` to ``max_length`` at the last word boundary, adding an ellipsis."""
    if len(content) <= max_length:
        return content

    truncated = content[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        return truncated[:last_space] + "..."
    return truncated + "..."


def highlight_search_term(text: str, term: str) -> str:
    """HTML-escape ``text`` and wrap case-insensitive matches of ``term`` in <mark>."""
    escaped_text = html.escape(text)
    needle = term.strip()
    if not needle:
        return escaped_text

    pattern = re.compile(f"({re.escape(html.escape(needle))})", re.IGNORECASE)
    return pattern.sub(r"<mark>\1</mark>", escaped_text)
