"""Tool: get-weather-forecast

Hourly temperature, humidity and wind forecast for a coordinate pair.
"""
from typing import List, Optional

from pydantic import Field

from toolkit import render
from toolkit.contract import CallerContext, Schema, ToolResult, define
from toolkit.errors import UpstreamFailure
from toolkit.http import parse

from tools._open_meteo import Coordinates, ForecastResponse, fetch_forecast

# Rows shown in the table hint; the data carries the full series.
PREVIEW_HOURS = 24


class ForecastOutput(Schema):
    times: List[str] = Field(..., description="Forecast times")
    temperatures: List[Optional[float]] = Field(..., description="Temperature forecasts in Celsius")
    wind_speeds: List[Optional[float]] = Field(..., description="Wind speed forecasts in km/h")
    humidity: List[Optional[float]] = Field(..., description="Relative humidity forecasts in %")


def get_weather_forecast(params: Coordinates, caller: CallerContext) -> ToolResult:
    body = fetch_forecast(
        caller, params, hourly="temperature_2m,relative_humidity_2m,wind_speed_10m"
    )
    forecast = parse(ForecastResponse, body)
    hourly = forecast.hourly
    if hourly is None or not hourly.time:
        raise UpstreamFailure(
            "Open-Meteo response has no hourly forecast",
            user_message="No forecast is available for that location.",
        )

    rows = [
        {"time": time, "temperature": temp, "humidity": humidity, "windSpeed": wind}
        for time, temp, humidity, wind in zip(
            hourly.time[:PREVIEW_HOURS],
            hourly.temperature_2m,
            hourly.relative_humidity_2m,
            hourly.wind_speed_10m,
        )
    ]
    ui = render.table(
        [
            ("time", "Time", "text"),
            ("temperature", "Temperature (°C)", "number"),
            ("humidity", "Humidity (%)", "number"),
            ("windSpeed", "Wind (km/h)", "number"),
        ],
        rows,
    )
    output = ForecastOutput(
        times=hourly.time,
        temperatures=hourly.temperature_2m,
        wind_speeds=hourly.wind_speed_10m,
        humidity=hourly.relative_humidity_2m,
    )
    return ToolResult.success(
        f"Weather forecast available for the next {len(hourly.time)} hours", output, ui
    )


TOOL = define({
    "id": "get-weather-forecast",
    "name": "Get Weather Forecast",
    "description": "Fetches the hourly weather forecast for a latitude/longitude pair",
    "input": Coordinates,
    "output": ForecastOutput,
    "pricing": {"pricePerUse": 0, "currency": "USD"},
    "handler": get_weather_forecast,
    "usage": {"latitude": 51.5, "longitude": -0.12},
    "failure_text": "Sorry, I couldn't get a forecast for that location right now.",
})
