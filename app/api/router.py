from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.api.v1.dashboard import router as dashboard_router
from app.api.v1.workouts import router as workouts_router
from app.api.v1.nutrition import router as nutrition_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(workouts_router, prefix="/workouts", tags=["workouts"])
api_router.include_router(nutrition_router, prefix="/nutrition", tags=["nutrition"])
