"""API routers."""

from app.routers.auth import router as auth_router
from app.routers.coaching import router as coaching_router
from app.routers.contact import router as contact_router
from app.routers.saved_advice import router as saved_advice_router
from app.routers.user import router as user_router

__all__ = ["auth_router", "user_router", "coaching_router", "saved_advice_router", "contact_router"]
