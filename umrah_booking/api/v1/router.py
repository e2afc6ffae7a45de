"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from umrah_booking.api.v1 import bookings, inquiries, packages, payments, webhooks

api_router = APIRouter()

# Packages
api_router.include_router(packages.router, prefix="/packages", tags=["Packages"])

# Booking wizard
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])

# Inquiries
api_router.include_router(inquiries.router, prefix="/inquiries", tags=["Inquiries"])

# Payments
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])

# Webhooks
api_router.include_router(webhooks.router, prefix="/webhooks", tags=["Webhooks"])
