"""Weather records: forecast, location and summary tables plus read views.

Dbo* classes map writable tables.  DvoWeatherForecast maps a view that joins
each forecast with its summary and location names; it has no primary key of
its own in the database, which is why record lookups on it go through the
uid predicate rather than key lookup.  Fk* classes map {id, name} views used
to populate selection lists.
"""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.models.records import FkListItem, HasUid
from src.infrastructure.database import Base

NIL_UUID = uuid.UUID(int=0)


class DboWeatherLocation(Base, HasUid):
    __tablename__ = "weather_locations"

    uid: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default_factory=uuid.uuid4)
    location: Mapped[str] = mapped_column(Text, nullable=False, default="")


class DboWeatherSummary(Base):
    """Summary lookup table.  Not HasUid: lookups use the primary key."""

    __tablename__ = "weather_summaries"

    uid: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default_factory=uuid.uuid4)
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")


class DboWeatherForecast(Base, HasUid):
    __tablename__ = "weather_forecasts"

    uid: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default_factory=uuid.uuid4)
    weather_summary_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("weather_summaries.uid"), nullable=False, default=NIL_UUID
    )
    weather_location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("weather_locations.uid"), nullable=False, default=NIL_UUID
    )
    forecast_date: Mapped[date] = mapped_column(nullable=False, default_factory=date.today)
    temperature_c: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class DvoWeatherForecast(Base, HasUid):
    """Forecast joined with its summary text and location name (read-only view)."""

    __tablename__ = "dvo_weather_forecasts"
    __table_args__ = {"info": {"is_view": True}}

    uid: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default_factory=uuid.uuid4)
    weather_summary_id: Mapped[uuid.UUID] = mapped_column(Uuid, default=NIL_UUID)
    weather_location_id: Mapped[uuid.UUID] = mapped_column(Uuid, default=NIL_UUID)
    forecast_date: Mapped[date] = mapped_column(default_factory=date.today)
    temperature_c: Mapped[int] = mapped_column(Integer, default=0)
    summary: Mapped[str] = mapped_column(Text, default="")
    location: Mapped[str] = mapped_column(Text, default="")


class FkWeatherSummary(Base, FkListItem):
    __tablename__ = "fk_weather_summaries"
    __table_args__ = {"info": {"is_view": True}}

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default_factory=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, default="")


class FkWeatherLocation(Base, FkListItem):
    __tablename__ = "fk_weather_locations"
    __table_args__ = {"info": {"is_view": True}}

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default_factory=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, default="")


VIEW_DEFINITIONS: dict[str, str] = {
    "dvo_weather_forecasts": (
        "CREATE VIEW dvo_weather_forecasts AS "
        "SELECT f.uid, f.weather_summary_id, f.weather_location_id, "
        "f.forecast_date, f.temperature_c, "
        "s.summary AS summary, l.location AS location "
        "FROM weather_forecasts f "
        "LEFT JOIN weather_summaries s ON s.uid = f.weather_summary_id "
        "LEFT JOIN weather_locations l ON l.uid = f.weather_location_id"
    ),
    "fk_weather_summaries": (
        "CREATE VIEW fk_weather_summaries AS "
        "SELECT uid AS id, summary AS name FROM weather_summaries"
    ),
    "fk_weather_locations": (
        "CREATE VIEW fk_weather_locations AS "
        "SELECT uid AS id, location AS name FROM weather_locations"
    ),
}
