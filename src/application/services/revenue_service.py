"""Revenue service - reports money received over a period."""

from datetime import date

import structlog

from src.application.dto import RevenueSummaryResponse
from src.domain.exceptions import ValidationException
from src.domain.interfaces import RevenueRepository

logger = structlog.get_logger(__name__)


class RevenueService:
    """Application service for revenue summaries."""

    def __init__(self, revenue_repository: RevenueRepository):
        self._revenue_repo = revenue_repository

    async def summarize(self, start: date, end: date) -> RevenueSummaryResponse:
        """
        Revenue recorded between two dates, inclusive.

        Raises:
            ValidationException: If start is after end
        """
        if start > end:
            raise ValidationException("start must not be after end")

        transactions = await self._revenue_repo.list_between(start, end)

        logger.info(
            "revenue_summarized",
            start=start.isoformat(),
            end=end.isoformat(),
            count=len(transactions),
        )

        return RevenueSummaryResponse.from_entities(start, end, transactions)
