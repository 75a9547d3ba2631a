"""Goals, regimen, meal plans and normalized analysis."""

from dataclasses import dataclass

from health_tracker.domain.analysis import NormalizedAnalysis, normalize_analysis
from health_tracker.services.store import HealthStore

GOALS_KEY = "goals"
REGIMEN_KEY = "regimen"


@dataclass
class GoalsService:
    """Read side for analysis results and planning data."""

    store: HealthStore

    async def get_analysis(self, day: str) -> NormalizedAnalysis | None:
        payload = await self.store.get_analysis(day)
        if payload is None:
            return None
        return normalize_analysis(payload)

    async def get_analysis_range(self, start: str, end: str) -> list[NormalizedAnalysis]:
        return [
            normalize_analysis(payload)
            for payload in await self.store.get_analysis_range(start, end)
        ]

    async def get_goals(self) -> dict[str, object]:
        goals = await self.store.get_profile(GOALS_KEY)
        return goals if isinstance(goals, dict) else {}

    async def set_goals(self, goals: dict[str, object]) -> None:
        await self.store.set_profile(GOALS_KEY, goals)

    async def get_regimen(self) -> object | None:
        return await self.store.get_profile(REGIMEN_KEY)

    async def save_regimen(self, regimen: object) -> None:
        await self.store.set_profile(REGIMEN_KEY, regimen)

    async def get_meal_plan(self) -> dict[str, object] | None:
        return await self.store.get_meal_plan()
