import asyncio
import logging
from typing import Optional

from fastapi import HTTPException

from app.core.config import settings
from app.core.exceptions import AuthorizationError, UnexpectedError, ValidationError
from app.repositories.nutrition_repository import NutritionRepository
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.dashboard import DashboardResponse, DashboardStats, RecentActivity
from app.schemas.nutrition import NutritionSummary
from app.schemas.user import UserRead
from app.schemas.workout import WorkoutSummary
from app.services.statistics_service import StatisticsAggregator
from app.services.suggestion_service import generate_suggestions

logger = logging.getLogger(__name__)


class DashboardAssembler:
    """
    Собирает ответ дашборда: профиль, сводки за окно, последние записи,
    график за неделю и рекомендации. Независимые запросы идут параллельно,
    любая ошибка прерывает сборку целиком (частичный ответ не возвращается).
    """

    def __init__(
        self,
        session_factory,
        statistics: Optional[StatisticsAggregator] = None,
        user_repository=UserRepository,
        workout_repository=WorkoutRepository,
        nutrition_repository=NutritionRepository,
        recent_limit: Optional[int] = None,
    ):
        self._session_factory = session_factory
        self._user_repository = user_repository
        self._workout_repository = workout_repository
        self._nutrition_repository = nutrition_repository
        self.statistics = statistics or StatisticsAggregator(
            session_factory,
            workout_repository=workout_repository,
            nutrition_repository=nutrition_repository,
        )
        self.recent_limit = recent_limit or settings.DASHBOARD_RECENT_LIMIT

    async def _user_profile(self, user_id: int):
        return await self.statistics.run(self._user_repository, lambda repo: repo.get_by_id(user_id))

    async def _recent_workouts(self, user_id: int):
        return await self.statistics.run(
            self._workout_repository, lambda repo: repo.find(user_id, limit=self.recent_limit)
        )

    async def _recent_nutrition(self, user_id: int):
        return await self.statistics.run(
            self._nutrition_repository, lambda repo: repo.find(user_id, limit=self.recent_limit)
        )

    async def assemble(self, user_id: int, days: int) -> DashboardResponse:
        if days < 1:
            raise ValidationError("days must be a positive integer")

        try:
            (
                user,
                workout_stats,
                nutrition_stats,
                recent_workouts,
                recent_nutrition,
                type_counts,
                chart_data,
            ) = await asyncio.gather(
                self._user_profile(user_id),
                self.statistics.workout_summary(user_id, days),
                self.statistics.nutrition_summary(user_id, days),
                self._recent_workouts(user_id),
                self._recent_nutrition(user_id),
                self.statistics.workout_type_counts(user_id),
                self.statistics.daily_series(user_id),
            )

            if user is None:
                # Токен валиден, но пользователя уже нет
                raise AuthorizationError()

            profile = UserRead.model_validate(user)
            suggestions = generate_suggestions(
                workout_stats.total_workouts,
                type_counts,
                profile.goals,
            )

            return DashboardResponse(
                user_profile=profile,
                stats=DashboardStats(workout=workout_stats, nutrition=nutrition_stats),
                recent_activity=RecentActivity(
                    workouts=[WorkoutSummary.model_validate(w) for w in recent_workouts],
                    nutrition=[NutritionSummary.model_validate(n) for n in recent_nutrition],
                ),
                chart_data=chart_data,
                suggestions=suggestions,
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("Dashboard assembly failed for user %s", user_id)
            raise UnexpectedError(e) from e
