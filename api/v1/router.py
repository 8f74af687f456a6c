# api/v1/router.py
from fastapi import APIRouter

from . import advice

api_router = APIRouter()

api_router.include_router(advice.router, prefix="/advice", tags=["Advice"])
