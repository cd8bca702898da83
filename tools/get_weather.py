"""Tool: get-weather

Current temperature and wind speed for a coordinate pair from Open-Meteo.
"""
from pydantic import Field

from toolkit import render
from toolkit.contract import CallerContext, Schema, ToolResult, define
from toolkit.errors import UpstreamFailure
from toolkit.http import parse

from tools._open_meteo import Coordinates, ForecastResponse, fetch_forecast


class WeatherOutput(Schema):
    temperature: float = Field(..., description="Current temperature in Celsius")
    wind_speed: float = Field(..., description="Current wind speed in km/h")


def get_weather(params: Coordinates, caller: CallerContext) -> ToolResult:
    body = fetch_forecast(caller, params, current="temperature_2m,wind_speed_10m")
    forecast = parse(ForecastResponse, body)
    if forecast.current is None:
        raise UpstreamFailure("Open-Meteo response has no current conditions")

    current = forecast.current
    text = (
        f"The current temperature is {current.temperature_2m}°C "
        f"with wind speed of {current.wind_speed_10m} km/h"
    )
    ui = render.card(
        f"Weather at {params.latitude}, {params.longitude}",
        f"Temperature: {current.temperature_2m}°C\nWind speed: {current.wind_speed_10m} km/h",
    )
    return ToolResult.success(
        text,
        WeatherOutput(temperature=current.temperature_2m, wind_speed=current.wind_speed_10m),
        ui,
    )


TOOL = define({
    "id": "get-weather",
    "name": "Get Weather",
    "description": "Fetches current weather for a latitude/longitude pair",
    "input": Coordinates,
    "output": WeatherOutput,
    "pricing": {"pricePerUse": 0, "currency": "USD"},
    "handler": get_weather,
    "usage": {"latitude": 40.0, "longitude": -75.0},
    "failure_text": "Sorry, I couldn't get the current weather for that location right now.",
})
