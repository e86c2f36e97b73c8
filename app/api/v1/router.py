from fastapi import APIRouter
from api.v1.routes.push_notifications import router as push_notifications_router


router = APIRouter()
router.include_router(push_notifications_router)
