"""
Current-conditions lookup against the Open-Meteo forecast API.
"""

from __future__ import annotations

import functools
import json
import logging
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict

from llm_relay.tools.base import Tool, ToolKind

logger = logging.getLogger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"


class WeatherArgs(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    latitude: float
    longitude: float


async def get_weather(
    args: WeatherArgs,
    *,
    client: Optional[httpx.AsyncClient] = None,
    url: str = OPEN_METEO_URL,
) -> str:
    """
    Return the JSON-encoded ``current`` block (temperature in celsius, wind speed).

    Args:
        args: Coordinates to look up.
        client: Shared HTTP client; a short-lived one is opened when omitted.
        url: Forecast endpoint.
    """
    params = {
        "latitude": args.latitude,
        "longitude": args.longitude,
        "current": "temperature_2m,wind_speed_10m",
    }
    if client is None:
        async with httpx.AsyncClient(timeout=15.0) as own_client:
            response = await own_client.get(url, params=params)
    else:
        response = await client.get(url, params=params)

    response.raise_for_status()
    current = response.json()["current"]
    logger.debug("Weather at (%s, %s): %s", args.latitude, args.longitude, current)
    return json.dumps(current)


def weather_tool(client: Optional[httpx.AsyncClient] = None, *, url: str = OPEN_METEO_URL) -> Tool:
    return Tool(
        kind=ToolKind.GET_WEATHER,
        description="Get current temperature for provided coordinates in celsius.",
        parameters={
            "type": "object",
            "properties": {
                "latitude": {"type": "number"},
                "longitude": {"type": "number"},
            },
            "required": ["latitude", "longitude"],
            "additionalProperties": False,
        },
        args_model=WeatherArgs,
        handler=functools.partial(get_weather, client=client, url=url),
    )
