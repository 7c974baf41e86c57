from fastapi import APIRouter

from intake.api import messages

api_router = APIRouter()
api_router.include_router(messages.router)
