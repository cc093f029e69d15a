"""Record registry — imports every record module so each mapper class is
registered with Base.metadata before create_schema() or SQLAlchemy runs.

VIEW_DEFINITIONS maps each view name to the DDL that creates it; views are
created after the tables they select from.
"""

from src.infrastructure.persistence.models.weather import (
    VIEW_DEFINITIONS,
    DboWeatherForecast,
    DboWeatherLocation,
    DboWeatherSummary,
    DvoWeatherForecast,
    FkWeatherLocation,
    FkWeatherSummary,
)

__all__ = [
    # Tables
    "DboWeatherForecast",
    "DboWeatherLocation",
    "DboWeatherSummary",
    # Views
    "DvoWeatherForecast",
    "FkWeatherLocation",
    "FkWeatherSummary",
    "VIEW_DEFINITIONS",
]
