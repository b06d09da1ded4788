"""API v1 router composition."""

from fastapi import APIRouter

from shared_lunch.api.v1.endpoints import menu, orders, settings, telegram, users

api_router: APIRouter = APIRouter()
api_router.include_router(menu.router, tags=["menu"])
api_router.include_router(users.router, prefix="/allowed-users", tags=["users"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(settings.router, prefix="/order-settings", tags=["settings"])
api_router.include_router(telegram.router, prefix="/telegram", tags=["telegram"])
