"""
Pydantic models for city data.
"""

from pydantic import Field

from .common import CamelModel


class CityRead(CamelModel):
    """A city as returned by the lookup endpoints and nested in routes."""

    id: str = Field(..., examples=["city_lhr"])
    name: str = Field(..., examples=["Lahore"])
