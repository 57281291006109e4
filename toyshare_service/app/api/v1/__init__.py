from fastapi import APIRouter

from .admin import router as admin_router
from .auth import router as auth_router
from .contact import router as contact_router
from .favorites import router as favorites_router
from .messages import router as messages_router
from .metrics import router as metrics_router
from .reports import router as reports_router
from .requests import router as requests_router
from .toys import router as toys_router
from .users import router as users_router
from .wishes import router as wishes_router

api_router = APIRouter()
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(toys_router, prefix="/toys", tags=["toys"])
api_router.include_router(requests_router, prefix="/requests", tags=["requests"])
api_router.include_router(favorites_router, prefix="/favorites", tags=["favorites"])
api_router.include_router(
    messages_router, tags=["messages"]
)  # /messages, /conversations 두 경로를 모두 가지므로 prefix 없이 등록
api_router.include_router(wishes_router, tags=["wishes"])
api_router.include_router(contact_router, prefix="/contact", tags=["contact"])
api_router.include_router(
    metrics_router, prefix="/community-metrics", tags=["community_metrics"]
)
api_router.include_router(reports_router, prefix="/reports", tags=["reports"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
