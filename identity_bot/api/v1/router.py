"""Main router for API v1."""

from fastapi import APIRouter

from identity_bot.api.v1.routes.test import router as test_router
from identity_bot.api.v1.routes.webhook import router as webhook_router

api_router = APIRouter()

api_router.include_router(webhook_router, tags=["webhook"])
# Manual dialogue checks.
api_router.include_router(test_router, tags=["test"])
