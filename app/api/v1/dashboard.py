from fastapi import APIRouter, Depends, Query, Response

from app.core.config import settings
from app.core.dependencies import get_current_user_id, get_dashboard_assembler
from app.schemas.dashboard import DashboardResponse
from app.services.dashboard_service import DashboardAssembler

router = APIRouter(tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    response: Response,
    days: int = Query(settings.DASHBOARD_DEFAULT_DAYS, ge=1, le=settings.DASHBOARD_MAX_DAYS),
    user_id: int = Depends(get_current_user_id),
    assembler: DashboardAssembler = Depends(get_dashboard_assembler),
):
    """Все данные для главного дашборда за последние days дней"""
    dashboard = await assembler.assemble(user_id, days)
    response.headers["Cache-Control"] = settings.CACHE_CONTROL
    return dashboard
