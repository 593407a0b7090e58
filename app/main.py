import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import settings
from app.core.database import init_database
from app.core.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="FitTrack - workouts, nutrition and progress dashboard")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    await init_database()
    logger.info("Приложение запущено!")


@app.get("/")
async def root():
    base_url = "http://localhost:8000"

    return {
        "app": "FitTrack",
        "message": "Track workouts and nutrition, see your progress",
        "links": {
            "Dashboard": f"{base_url}/api/v1/dashboard",
            "Workouts": f"{base_url}/api/v1/workouts",
            "Nutrition": f"{base_url}/api/v1/nutrition",
            "Docs": f"{base_url}/docs",
            "ReDoc": f"{base_url}/redoc"
        }
    }


@app.get("/health")
async def health():
    return {"status": "ok"}
