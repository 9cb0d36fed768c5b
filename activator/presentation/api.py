from fastapi import APIRouter

from activator.presentation.routers.v1.cafe import router as cafe_router
from activator.presentation.routers.v1.users import router as users_router
from activator.presentation.routes.health import router as health_router

api = APIRouter()

# Add all v1 routers here
routers = (users_router, cafe_router)
for router in routers:
    api.include_router(router, prefix="/v1")

api.include_router(health_router)
