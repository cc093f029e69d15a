"""Fixtures for store-backed tests.

Each test gets its own SQLite database file (aiosqlite driver) with the
weather tables and views created by create_schema().  A file rather than
:memory: is used so that every store handle opens its own connection, the
same way handles behave against PostgreSQL.
"""

from datetime import date, timedelta
from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.infrastructure.database import create_schema
from src.infrastructure.persistence.broker import get_data_broker
from src.infrastructure.persistence.models import (
    DboWeatherForecast,
    DboWeatherLocation,
    DboWeatherSummary,
)
from src.infrastructure.persistence.store import SqlStore

LOCATIONS = ["Brisbane", "Cairns", "Darwin", "Hobart"]
SUMMARIES = ["Chilly", "Mild", "Warm", "Scorching"]
FORECASTS_PER_LOCATION = 100
FIRST_FORECAST_DATE = date(2026, 1, 1)


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'broker.db'}", echo=False)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def store(session_factory):
    return SqlStore(session_factory)


@pytest.fixture
async def broker(session_factory):
    return get_data_broker(session_factory)


@pytest.fixture
async def seeded(session_factory):
    """4 locations x 100 forecasts, spread across 4 summaries.

    Forecast n for a location is dated FIRST_FORECAST_DATE + n days and has
    temperature_c == n.
    """
    locations = [DboWeatherLocation(location=name) for name in LOCATIONS]
    summaries = [DboWeatherSummary(summary=name) for name in SUMMARIES]
    forecasts = [
        DboWeatherForecast(
            weather_summary_id=summaries[n % len(summaries)].uid,
            weather_location_id=location.uid,
            forecast_date=FIRST_FORECAST_DATE + timedelta(days=n),
            temperature_c=n,
        )
        for location in locations
        for n in range(FORECASTS_PER_LOCATION)
    ]
    async with session_factory() as session:
        session.add_all([*locations, *summaries, *forecasts])
        await session.commit()
    return SimpleNamespace(locations=locations, summaries=summaries, forecasts=forecasts)
