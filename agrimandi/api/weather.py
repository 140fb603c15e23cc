from fastapi import APIRouter, Depends, Query
from typing import Optional

from agrimandi.core.errors import InvalidInput
from agrimandi.schemas.weather import WeatherReport
from agrimandi.services.weather import WeatherClient, get_weather_client

router = APIRouter()

@router.get("", response_model=WeatherReport)
def read_weather(
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
    client: WeatherClient = Depends(get_weather_client),
):
    if lat is None or lon is None:
        raise InvalidInput("Latitude and longitude are required.")
    return client.current(lat, lon)
