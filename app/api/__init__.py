"""API routes, one router per role area."""

from fastapi import APIRouter

from app.api import admin, auth, health, store_owner, user

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(user.router, prefix="/user", tags=["user"])
router.include_router(store_owner.router, prefix="/store-owner", tags=["store-owner"])
