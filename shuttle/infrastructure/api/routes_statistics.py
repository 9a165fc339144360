"""Statistics endpoint — dashboard counters."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from shuttle.application.use_cases.statistics import StatisticsUseCase
from shuttle.infrastructure.api.dependencies import get_statistics_uc
from shuttle.infrastructure.api.serializers import serialize_statistics

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("")
async def statistics(stats_uc: StatisticsUseCase = Depends(get_statistics_uc)):
    """Totals and assignment efficiency (percent of employees with a route)."""
    return serialize_statistics(await stats_uc.execute())
