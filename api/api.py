from fastapi import APIRouter
from api.pages_api import router as pages_router
from api.vote_api import router as vote_router
from api.admin_api import router as admin_router


api_router = APIRouter()
api_router.include_router(pages_router, tags=["pages"])
api_router.include_router(vote_router, tags=["vote"])
api_router.include_router(admin_router, tags=["admin"])
