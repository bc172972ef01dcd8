from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PropertyType(str, Enum):
    FIVE_STAR = "5_star"
    FOUR_STAR = "4_star"
    BOUTIQUE = "boutique"
    HOSTEL = "hostel"
    FINCA_CAFETERA = "finca_cafetera"


class MarketClass(str, Enum):
    COFFEE_REGION = "coffee_region"  # extreme seasonality overlay
    DEFAULT = "default"


# Nightly base rates in COP.
BASE_ADR: dict[PropertyType, int] = {
    PropertyType.FIVE_STAR: 450_000,
    PropertyType.FOUR_STAR: 280_000,
    PropertyType.BOUTIQUE: 320_000,
    PropertyType.HOSTEL: 60_000,
    PropertyType.FINCA_CAFETERA: 220_000,
}

DEFAULT_PROPERTY_TYPE = PropertyType.FOUR_STAR

COFFEE_REGION_NAMES: tuple[str, ...] = (
    "salento",
    "filandia",
    "armenia",
    "pereira",
    "manizales",
    "quindio",
    "quindío",
    "risaralda",
    "caldas",
    "eje cafetero",
    "santa rosa de cabal",
)


@dataclass(frozen=True, slots=True)
class MarketProfile:
    location: str
    property_type: PropertyType
    market_class: MarketClass
    base_adr: int

    @property
    def extreme_seasonality(self) -> bool:
        return self.market_class is MarketClass.COFFEE_REGION


def parse_property_type(value: PropertyType | str) -> PropertyType:
    if isinstance(value, PropertyType):
        return value
    try:
        return PropertyType(value.strip().lower())
    except ValueError:
        return DEFAULT_PROPERTY_TYPE


def market_class_for(location: str) -> MarketClass:
    needle = location.lower()
    if any(name in needle for name in COFFEE_REGION_NAMES):
        return MarketClass.COFFEE_REGION
    return MarketClass.DEFAULT


def resolve_market(location: str, property_type: PropertyType | str) -> MarketProfile:
    """Look up pricing anchors for a request. Unknown inputs get defaults."""
    ptype = parse_property_type(property_type)
    return MarketProfile(
        location=location,
        property_type=ptype,
        market_class=market_class_for(location),
        base_adr=BASE_ADR[ptype],
    )
