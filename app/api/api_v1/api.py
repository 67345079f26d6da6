from fastapi import APIRouter
from app.api.api_v1.endpoints import user, admin, stylist

router = APIRouter()

# Include all routers
router.include_router(user.router, prefix="/user", tags=["User"])
router.include_router(admin.router, prefix="/admin", tags=["Admin"])
router.include_router(stylist.router, prefix="/stylist", tags=["Stylist"])
