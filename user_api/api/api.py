from fastapi import APIRouter

from user_api.api.routes_health import router as health_router
from user_api.api.routes_users import router as users_router


api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(users_router)
