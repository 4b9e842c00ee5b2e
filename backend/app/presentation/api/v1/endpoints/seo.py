"""SEO endpoints: page metadata, JSON-LD, sitemap.xml and robots.txt."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import PlainTextResponse

from app.application.services import PostQueryService
from app.application.services.seo_metadata import (
    generate_category_metadata,
    generate_metadata,
    generate_post_metadata,
    generate_search_metadata,
)
from app.application.services.sitemap import build_robots_txt, build_sitemap, sitemap_entries
from app.application.services.structured_data import (
    article_structured_data,
    blog_structured_data,
    breadcrumb_structured_data,
    organization_structured_data,
    website_structured_data,
)
from app.domain.entities import PostSearchCriteria, SiteProfile
from app.domain.exceptions import EntityNotFoundError, ValidationError
from app.infrastructure.dependencies import get_post_query_service, get_site_profile

router = APIRouter(prefix="/seo", tags=["SEO"])


@router.get("/site")
async def site_seo(
    site: SiteProfile = Depends(get_site_profile),
    service: PostQueryService = Depends(get_post_query_service),
) -> dict[str, Any]:
    """Home page metadata plus the WebSite, Blog and Organization documents."""
    _, authors = await service.get_facets()
    return {
        "metadata": generate_metadata(site, title=site.name, description=site.description),
        "structured_data": [
            website_structured_data(site),
            blog_structured_data(site, [a.name for a in authors]),
            organization_structured_data(site),
        ],
    }


@router.get("/posts/{slug}")
async def post_seo(
    slug: str,
    site: SiteProfile = Depends(get_site_profile),
    service: PostQueryService = Depends(get_post_query_service),
) -> dict[str, Any]:
    try:
        post, _ = await service.get_published_post(slug)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return {
        "metadata": generate_post_metadata(site, post),
        "structured_data": [
            article_structured_data(site, post),
            breadcrumb_structured_data(
                site,
                [("Home", "/"), ("Blog", "/blog"), (post.title, f"/blog/{post.slug}")],
            ),
        ],
    }


@router.get("/categories/{slug}")
async def category_seo(
    slug: str,
    site: SiteProfile = Depends(get_site_profile),
    service: PostQueryService = Depends(get_post_query_service),
) -> dict[str, Any]:
    """Metadata and breadcrumbs for a category listing page."""
    categories, _ = await service.get_facets()
    category = next((c for c in categories if c.slug == slug), None)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

    url = f"/blog?category={category.slug}"
    return {
        "metadata": generate_category_metadata(site, category),
        "structured_data": [
            breadcrumb_structured_data(
                site, [("Home", "/"), ("Blog", "/blog"), (category.name, url)]
            ),
        ],
    }


@router.get("/search")
async def search_seo(
    q: str | None = None,
    site: SiteProfile = Depends(get_site_profile),
    service: PostQueryService = Depends(get_post_query_service),
) -> dict[str, Any]:
    try:
        result = await service.search_posts(PostSearchCriteria(query=q), page=1, limit=1)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"metadata": generate_search_metadata(site, q, result.pagination.total_count)}


@router.get("/sitemap.xml")
async def sitemap(
    site: SiteProfile = Depends(get_site_profile),
    service: PostQueryService = Depends(get_post_query_service),
) -> Response:
    posts = await service.list_sitemap_posts()
    return Response(content=build_sitemap(site, sitemap_entries(posts)), media_type="application/xml")


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots(site: SiteProfile = Depends(get_site_profile)) -> str:
    return build_robots_txt(site)
