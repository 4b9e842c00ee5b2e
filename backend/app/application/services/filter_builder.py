"""Filter builder: turns raw, untrusted search parameters into a PostPredicate.

The builder never touches the store. Public surfaces always get the
``published == True AND status == PUBLISHED`` constraint; management
surfaces (already cleared by the authorization gate) may see any status.
"""

from datetime import date, datetime, time, timezone

from app.domain.entities import (
    FilterOperator,
    PostField,
    PostFilter,
    PostPredicate,
    PostSearchCriteria,
    PostStatus,
)
from app.domain.exceptions import ValidationError

_TEXT_SEARCH_FIELDS = (PostField.TITLE, PostField.EXCERPT, PostField.CONTENT)

PUBLIC_FILTERS: tuple[PostFilter, ...] = (
    PostFilter(PostField.PUBLISHED, True),
    PostFilter(PostField.STATUS, PostStatus.PUBLISHED),
)


def _clean(raw: str | None) -> str | None:
    """Strip whitespace; blank strings count as absent."""
    if raw is None:
        return None
    text = raw.strip()
    return text or None


def parse_date_param(raw: str, field: str) -> datetime:
    """Parse an ISO date or datetime; date-only and naive values are UTC."""
    text = raw.strip()
    try:
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), time.min, tzinfo=timezone.utc)
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Invalid date for {field}: '{raw}'", field=field)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build_post_predicate(
    criteria: PostSearchCriteria,
    *,
    public: bool = True,
) -> PostPredicate:
    """Build the predicate for ``criteria``.

    Raises:
        ValidationError: ``date_from`` or ``date_to`` is not a valid date.
    """
    filters: list[PostFilter] = []

    if public:
        filters.extend(PUBLIC_FILTERS)
    else:
        # Unknown status values are ignored on listing surfaces.
        status = PostStatus.parse(_clean(criteria.status))
        if status is not None:
            filters.append(PostFilter(PostField.STATUS, status))
        category_id = _clean(criteria.category_id)
        if category_id:
            filters.append(PostFilter(PostField.CATEGORY_ID, category_id))
        author_id = _clean(criteria.author_id)
        if author_id:
            filters.append(PostFilter(PostField.AUTHOR_ID, author_id))

    category = _clean(criteria.category)
    if category:
        filters.append(PostFilter(PostField.CATEGORY_SLUG, category))

    author = _clean(criteria.author)
    if author:
        filters.append(PostFilter(PostField.AUTHOR_NAME, author, FilterOperator.CONTAINS))

    date_from = _clean(criteria.date_from)
    if date_from:
        filters.append(
            PostFilter(
                PostField.PUBLISHED_AT,
                parse_date_param(date_from, "date_from"),
                FilterOperator.GTE,
            )
        )

    date_to = _clean(criteria.date_to)
    if date_to:
        filters.append(
            PostFilter(
                PostField.PUBLISHED_AT,
                parse_date_param(date_to, "date_to"),
                FilterOperator.LTE,
            )
        )

    any_of: tuple[PostFilter, ...] = ()
    query = _clean(criteria.query)
    if query:
        any_of = tuple(
            PostFilter(field_name, query, FilterOperator.CONTAINS)
            for field_name in _TEXT_SEARCH_FIELDS
        )

    return PostPredicate(filters=tuple(filters), any_of=any_of)


def related_posts_predicate(slug: str) -> PostPredicate:
    """Public posts other than the one identified by ``slug``."""
    return PostPredicate(
        filters=PUBLIC_FILTERS
        + (PostFilter(PostField.SLUG, slug, FilterOperator.NOT_EQUALS),),
    )
