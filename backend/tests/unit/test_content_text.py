"""Unit tests for slug, snippet and highlight helpers."""

from app.application.services.content_text import (
    highlight_search_term,
    slugify,
    truncate_content,
)


def test_slugify():
    assert slugify("Getting Started with Next.js 14!") == "getting-started-with-nextjs-14"
    assert slugify("  Café  au   lait ") == "cafe-au-lait"
    assert slugify("a_b--c") == "a-b-c"
    assert slugify("!!!") == ""


def test_truncate_content_cuts_at_word_boundary():
    text = "word " * 60
    result = truncate_content(text, 20)
    assert result == "word word word word..."
    assert truncate_content("short", 20) == "short"


def test_truncate_content_without_spaces():
    assert truncate_content("x" * 30, 10) == "x" * 10 + "..."


def test_highlight_is_case_insensitive_and_escapes_html():
    result = highlight_search_term("Learn <b>React</b> and react hooks", "REACT")
    assert result == (
        "Learn &lt;b&gt;<mark>React</mark>&lt;/b&gt; and <mark>react</mark> hooks"
    )


def test_highlight_treats_term_literally():
    assert highlight_search_term("Next.js vs Nextjs", "next.js") == (
        "<mark>Next.js</mark> vs Nextjs"
    )
    assert highlight_search_term("nothing", "  ") == "nothing"
