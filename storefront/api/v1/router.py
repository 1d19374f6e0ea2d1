"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from storefront.api.v1 import callbacks, payments

api_router = APIRouter()

# Payments
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])

# Provider return redirects
api_router.include_router(callbacks.router, prefix="/payments/callback", tags=["Callbacks"])
