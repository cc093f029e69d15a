"""Weather forecast custom list query and its handler.

WeatherForecastListQuery pins the list to one location.  It derives from
ListQueryBase (not ListQuery), so the broker routes it through the custom
handler registry instead of the generic list handler.  The handler reuses
the generic paging algorithm and only contributes the location predicate.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import and_

from src.domain.models.cancellation import CancellationToken
from src.domain.models.requests import ListQueryBase, request_fields
from src.domain.models.results import ListProviderResult
from src.infrastructure.persistence.handlers.lists import SqlListQueryHandler
from src.infrastructure.persistence.models.weather import DvoWeatherForecast

logger = logging.getLogger(__name__)


class WeatherForecastListQuery(ListQueryBase):
    """Forecasts for a single weather location."""

    record_type: type = DvoWeatherForecast
    weather_location_id: UUID

    @classmethod
    def create(
        cls,
        weather_location_id: UUID,
        *,
        start_index: int = 0,
        page_size: int = 0,
        sort_expression: Any = None,
        sort_descending: bool = False,
        filter_expression: Any = None,
        transaction_id: UUID | None = None,
        cancellation_token: CancellationToken | None = None,
    ) -> WeatherForecastListQuery:
        return cls(
            weather_location_id=weather_location_id,
            start_index=start_index,
            page_size=page_size,
            sort_expression=sort_expression,
            sort_descending=sort_descending,
            filter_expression=filter_expression,
            **request_fields(transaction_id, cancellation_token),
        )


class WeatherForecastListQueryHandler(SqlListQueryHandler):
    """Serves WeatherForecastListQuery for DvoWeatherForecast.

    Any other list query for the same record type is rejected with a
    failed result.
    """

    def build_filter(self, query: WeatherForecastListQuery) -> Any:
        location = DvoWeatherForecast.weather_location_id == query.weather_location_id
        if query.filter_expression is None:
            return location
        return and_(location, query.filter_expression)

    async def handle(self, request: ListQueryBase) -> ListProviderResult[Any]:
        if not isinstance(request, WeatherForecastListQuery):
            logger.warning(
                "%s rejected %s", type(self).__name__, type(request).__name__
            )
            return ListProviderResult.failure("Query is not a WeatherForecastListQuery")
        return await super().handle(request)
