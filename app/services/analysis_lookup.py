"""
Property analysis lookup.

Combines geospatial, listing (REA) and sales/zoning (CoreLogic) data for an
address. The upstream providers are simulated with fixed sample data until
the data licences are in place.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    """Provider payloads use camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(CamelModel):
    lat: float
    lng: float


class GeospatialData(CamelModel):
    coordinates: Coordinates
    lot_number: str
    cadastral_description: str


class ListingEvent(CamelModel):
    date: str
    event: str
    price: Optional[float] = None


class ReaData(CamelModel):
    estimated_value: float
    listing_history: List[ListingEvent]


class ComparableSale(CamelModel):
    address: str
    date: str
    price: float
    beds: Optional[int] = None
    baths: Optional[int] = None
    car: Optional[int] = None


class CoreLogicData(CamelModel):
    zoning: str
    land_size_sqm: float
    last_sale_date: Optional[str] = None
    comparables: List[ComparableSale]


class PropertyAnalysis(BaseModel):
    """Combined lookup result for one address."""

    address: str
    geo: GeospatialData
    rea: ReaData
    corelogic: CoreLogicData


def fetch_geospatial(address: str) -> GeospatialData:
    return GeospatialData(
        coordinates=Coordinates(lat=-33.865143, lng=151.2099),
        lot_number="Lot 12",
        cadastral_description="Rectangular parcel with 12.5m frontage and 32m depth",
    )


def fetch_rea(address: str) -> ReaData:
    return ReaData(
        estimated_value=1525000,
        listing_history=[
            ListingEvent(date="2023-09-18", event="Listed", price=1590000),
            ListingEvent(date="2023-11-02", event="Price update", price=1550000),
            ListingEvent(date="2024-02-14", event="Withdrawn"),
        ],
    )


def fetch_corelogic(address: str) -> CoreLogicData:
    return CoreLogicData(
        zoning="R2 Low Density Residential",
        land_size_sqm=405,
        last_sale_date="2018-07-21",
        comparables=[
            ComparableSale(
                address="12 Sample St", date="2025-06-03", price=1610000,
                beds=3, baths=2, car=1,
            ),
            ComparableSale(
                address="8 Example Ave", date="2025-05-28", price=1480000,
                beds=3, baths=2, car=2,
            ),
            ComparableSale(
                address="22 Test Rd", date="2025-04-12", price=1725000,
                beds=4, baths=2, car=2,
            ),
        ],
    )


def lookup_property(address: str) -> PropertyAnalysis:
    """
    Gather analysis data for an address.

    Args:
        address: Street address as entered by the user

    Returns:
        PropertyAnalysis with data from each provider
    """
    logger.info(f"Property analysis lookup for {address!r}")
    return PropertyAnalysis(
        address=address,
        geo=fetch_geospatial(address),
        rea=fetch_rea(address),
        corelogic=fetch_corelogic(address),
    )
