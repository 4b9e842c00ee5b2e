"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from app.presentation.api.v1.endpoints.health import router as health_router
from app.presentation.api.v1.endpoints.auth import router as auth_router
from app.presentation.api.v1.endpoints.search import router as search_router
from app.presentation.api.v1.endpoints.blog import router as blog_router
from app.presentation.api.v1.endpoints.posts import router as posts_router
from app.presentation.api.v1.endpoints.categories import router as categories_router
from app.presentation.api.v1.endpoints.tags import router as tags_router
from app.presentation.api.v1.endpoints.upload import router as upload_router
from app.presentation.api.v1.endpoints.seo import router as seo_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(auth_router)
router.include_router(search_router)
router.include_router(blog_router)
router.include_router(posts_router)
router.include_router(categories_router)
router.include_router(tags_router)
router.include_router(upload_router)
router.include_router(seo_router)
