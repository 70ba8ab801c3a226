"""API v1 router composition."""

from fastapi import APIRouter

from weekly_orders.api.v1.endpoints import admin, carts, categories, dishes, menu, orders

api_router: APIRouter = APIRouter()
api_router.include_router(menu.router, prefix="/menu", tags=["menu"])
api_router.include_router(dishes.router, prefix="/dishes", tags=["dishes"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(carts.router, prefix="/carts", tags=["carts"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
