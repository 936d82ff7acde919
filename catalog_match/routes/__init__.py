"""API routes."""

from fastapi import APIRouter

from catalog_match.routes import admin, offers, review, ui

api_router = APIRouter()

# UI read endpoints (dashboard, queues, products)
api_router.include_router(ui.router, prefix="/v1/ui", tags=["ui"])

# Offer ingestion and manual product creation
api_router.include_router(offers.router, prefix="/v1/offers", tags=["offers"])

# Review decisions
api_router.include_router(review.router, prefix="/v1/matches", tags=["review"])

# Admin endpoints (catalog management)
api_router.include_router(admin.router, prefix="/v1/admin", tags=["admin"])
