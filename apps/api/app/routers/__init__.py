"""API routers."""

from app.routers.auth import router as auth_router
from app.routers.forms import router as forms_router
from app.routers.responses import router as responses_router

__all__ = [
    "auth_router",
    "forms_router",
    "responses_router",
]
