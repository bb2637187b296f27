"""Geocoded location model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float
    name: str
    country: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.name}, {self.country}" if self.country else self.name
