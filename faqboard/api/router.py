"""Agregador de routers de la API."""
from fastapi import APIRouter

from faqboard.api.routers import admin, questions

api_router = APIRouter()
api_router.include_router(questions.router)
api_router.include_router(admin.router)
