"""
Рекомендации по тренировкам на основе распределения типов и целей пользователя.

Детерминированная таблица правил: правила проверяются в фиксированном порядке,
в ответ попадают первые limit сработавших.
"""
from typing import Mapping, List, Optional

from app.core.config import settings
from app.schemas.dashboard import Suggestion
from app.schemas.user import Goals


CARDIO_SUGGESTION = Suggestion(
    type="cardio",
    title="Add More Cardio",
    description="Try running, cycling, or swimming for heart health",
    reason="Cardio helps improve cardiovascular endurance",
)

STRENGTH_SUGGESTION = Suggestion(
    type="strength",
    title="Incorporate Strength Training",
    description="Try weightlifting or bodyweight exercises",
    reason="Strength training builds muscle and boosts metabolism",
)

FLEXIBILITY_SUGGESTION = Suggestion(
    type="flexibility",
    title="Try Flexibility Training",
    description="Yoga or stretching can improve mobility",
    reason="Flexibility exercises reduce injury risk",
)


def frequency_suggestion(weekly_workouts: int) -> Suggestion:
    return Suggestion(
        type="goal",
        title="Increase Workout Frequency",
        description=f"You're targeting {weekly_workouts} workouts per week",
        reason="Stay consistent to reach your goals",
    )


def _underrepresented(type_counts: Mapping[str, int], workout_type: str, total_workouts: int, min_share: float) -> bool:
    count = type_counts.get(workout_type)
    return not count or count < total_workouts * min_share


def generate_suggestions(
    total_workouts: int,
    type_counts: Mapping[str, int],
    goals: Optional[Goals] = None,
    min_share: Optional[float] = None,
    weeks_per_window: Optional[int] = None,
    limit: Optional[int] = None,
) -> List[Suggestion]:
    min_share = settings.SUGGESTION_MIN_TYPE_SHARE if min_share is None else min_share
    weeks_per_window = settings.SUGGESTION_WEEKS_PER_WINDOW if weeks_per_window is None else weeks_per_window
    limit = settings.SUGGESTION_LIMIT if limit is None else limit

    suggestions = []

    if _underrepresented(type_counts, "cardio", total_workouts, min_share):
        suggestions.append(CARDIO_SUGGESTION)

    if _underrepresented(type_counts, "strength", total_workouts, min_share):
        suggestions.append(STRENGTH_SUGGESTION)

    if not type_counts.get("flexibility"):
        suggestions.append(FLEXIBILITY_SUGGESTION)

    weekly_workouts = goals.weekly_workouts if goals else None
    if weekly_workouts and total_workouts < weekly_workouts * weeks_per_window:
        suggestions.append(frequency_suggestion(weekly_workouts))

    return suggestions[:limit]
