"""API routes."""

from fastapi import APIRouter

from app.api.routes import articles, comments, health, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/user", tags=["user"])
router.include_router(articles.router, prefix="/article", tags=["article"])
router.include_router(comments.router, prefix="/comment", tags=["comment"])
