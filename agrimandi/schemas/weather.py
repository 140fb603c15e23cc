from typing import Optional
from agrimandi.schemas.base import BaseSchema


class WeatherReport(BaseSchema):
    location: Optional[str] = None
    temperature: float
    condition: str
    humidity: float
    wind_speed: float
