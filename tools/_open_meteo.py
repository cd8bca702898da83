"""Shared pieces for the Open-Meteo weather tools."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from toolkit.contract import CallerContext, InputSchema


class Coordinates(InputSchema):
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")


class CurrentConditions(BaseModel):
    temperature_2m: float
    wind_speed_10m: float


class HourlySeries(BaseModel):
    time: List[str] = []
    temperature_2m: List[Optional[float]] = []
    relative_humidity_2m: List[Optional[float]] = []
    wind_speed_10m: List[Optional[float]] = []


class ForecastResponse(BaseModel):
    current: Optional[CurrentConditions] = None
    hourly: Optional[HourlySeries] = None


def fetch_forecast(caller: CallerContext, coords: Coordinates, **series: str) -> Any:
    params: Dict[str, Any] = {"latitude": coords.latitude, "longitude": coords.longitude}
    params.update(series)
    return caller.get_json(caller.settings.require("WEATHER_API_URL"), params)
