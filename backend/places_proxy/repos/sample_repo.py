"""
Static sample listings shown when the page runs without live data.
"""
from typing import List

from places_proxy.models.places_model import SampleListing, Geometry, LatLng

_SAMPLES = [
    {
        "name": "Premium Heights Residences",
        "vicinity": "East Legon, Accra",
        "lat": 5.6501,
        "lng": -0.1615,
        "price": "GH₵ 450,000",
        "type": "3 Bedroom Townhouse",
        "rating": 4.5
    },
    {
        "name": "Cantonments Garden Estate",
        "vicinity": "Cantonments, Accra",
        "lat": 5.5695,
        "lng": -0.1936,
        "price": "GH₵ 850,000",
        "type": "4 Bedroom Villa",
        "rating": 4.8
    },
    {
        "name": "Airport Residential Complex",
        "vicinity": "Airport Hills, Accra",
        "lat": 5.6057,
        "lng": -0.1719,
        "price": "GH₵ 320,000",
        "type": "2 Bedroom Apartment",
        "rating": 4.2
    },
]


class SampleListingsRepository:
    """Read-only repository over the built-in sample properties."""

    def list_samples(self) -> List[SampleListing]:
        return [
            SampleListing(
                name=sample["name"],
                vicinity=sample["vicinity"],
                geometry=Geometry(location=LatLng(lat=sample["lat"], lng=sample["lng"])),
                price=sample["price"],
                type=sample["type"],
                rating=sample["rating"]
            )
            for sample in _SAMPLES
        ]
