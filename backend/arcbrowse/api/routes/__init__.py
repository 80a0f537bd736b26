"""API route registration."""

from fastapi import APIRouter

from arcbrowse.api.routes import browse

api_router = APIRouter()

# Catch-all; owns the whole URL namespace, so it is the only router
api_router.include_router(browse.router, tags=["browse"])
