# agrimandi/services/weather.py
from typing import Any, Dict, Optional

import httpx

from agrimandi.core.config import settings
from agrimandi.core.errors import UpstreamFailure
from agrimandi.core.logger import logger

WEATHER_FAILURE_MESSAGE = "Failed to fetch weather data."


class WeatherClient:
    """
    Thin passthrough to OpenWeatherMap's current-weather endpoint.

    Every failure (no key, timeout, transport error, bad status, odd payload)
    surfaces as UpstreamFailure with a fixed message.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.OPENWEATHER_API_KEY
        self.base_url = base_url or settings.OPENWEATHER_URL
        self.timeout = timeout if timeout is not None else settings.WEATHER_TIMEOUT_SECONDS
        self.transport = transport

    def current(self, lat: float, lon: float) -> Dict[str, Any]:
        if not self.api_key:
            logger.error("OPENWEATHER_API_KEY is not set")
            raise UpstreamFailure(WEATHER_FAILURE_MESSAGE)

        params = {"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.get(self.base_url, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error(f"Weather provider returned {exc.response.status_code}")
            raise UpstreamFailure(WEATHER_FAILURE_MESSAGE) from exc
        except httpx.HTTPError as exc:
            logger.error(f"Weather provider unreachable: {exc.__class__.__name__}")
            raise UpstreamFailure(WEATHER_FAILURE_MESSAGE) from exc
        except ValueError as exc:
            logger.error("Weather provider sent a non-JSON body")
            raise UpstreamFailure(WEATHER_FAILURE_MESSAGE) from exc

        return simplify(data)


def simplify(data: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return {
            "location": data.get("name"),
            "temperature": data["main"]["temp"],
            "condition": data["weather"][0]["main"],
            "humidity": data["main"]["humidity"],
            "wind_speed": data["wind"]["speed"],
        }
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        logger.error("Weather provider payload missing fields")
        raise UpstreamFailure(WEATHER_FAILURE_MESSAGE) from exc


def get_weather_client() -> WeatherClient:
    return WeatherClient()
