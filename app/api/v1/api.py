# Router aggregator
from fastapi import APIRouter
from app.api.v1.endpoints.auth import auth_router
from app.api.v1.endpoints.update_password import update_password
from app.api.v1.endpoints.applications import application_router
from app.api.v1.endpoints.notices import notice_router
from app.api.v1.endpoints.users import user_router
from app.api.v1.endpoints.upload import upload_router
from app.api.v1.endpoints.push_notifications import push_router
from app.api.v1.endpoints.rate_limit import rate_limit_router


api_router = APIRouter()

api_router.include_router(auth_router.router)
api_router.include_router(update_password.router)
api_router.include_router(application_router.router)
api_router.include_router(notice_router.router)
api_router.include_router(user_router.router)
api_router.include_router(upload_router.router)
api_router.include_router(push_router.router)
api_router.include_router(rate_limit_router.router)
