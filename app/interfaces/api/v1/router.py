from fastapi import APIRouter

from app.config import settings
from app.interfaces.api.v1.routes.auth import router as auth_router
from app.interfaces.api.v1.routes.ping import router as ping_router
from app.interfaces.api.v1.routes.schools import router as schools_router

api_router = APIRouter(prefix=settings.api_prefix)
api_router.include_router(auth_router)
api_router.include_router(ping_router)
api_router.include_router(schools_router)
