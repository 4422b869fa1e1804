from decimal import Decimal
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

# --- Search constraints ---
ALLOWED_PLACE_TYPES = ("real_estate_agency", "establishment", "point_of_interest")
DEFAULT_PLACE_TYPE = "real_estate_agency"
MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0
MIN_RADIUS, MAX_RADIUS = 1, 50000


def format_coordinate(value: float) -> str:
    """
    Renders a coordinate the way the map page prints numbers:
    5.0 -> "5", -0.1870 -> "-0.187", 1e-07 -> "1e-7", 0.00001 -> "0.00001".
    Uses the shortest round-trip digits and switches to exponent notation
    only below 1e-6 or from 1e21 up.
    """
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    prefix = "-" if sign else ""
    k = len(digits)
    n = exponent + k  # position of the decimal point relative to the digits

    if k <= n <= 21:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= 21:
        return prefix + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return prefix + "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{prefix}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


class CamelModel(BaseModel):
    """Serializes with camelCase keys, accepts snake_case names in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Geometry ---
class LatLng(BaseModel):
    lat: float
    lng: float

class Viewport(BaseModel):
    northeast: LatLng
    southwest: LatLng

class Geometry(BaseModel):
    location: LatLng
    viewport: Optional[Viewport] = None


# --- Query ---
class SearchQuery(BaseModel):
    """Canonical, range-checked form of the inbound parameters."""
    latitude: float
    longitude: float
    radius_meters: int
    place_type: str = DEFAULT_PLACE_TYPE

    @property
    def location(self) -> str:
        return f"{format_coordinate(self.latitude)},{format_coordinate(self.longitude)}"

    def to_upstream_params(self, api_key: str) -> Dict[str, str]:
        return {
            "location": self.location,
            "radius": str(self.radius_meters),
            "type": self.place_type,
            "key": api_key
        }


# --- Normalized results ---
class PlaceResult(CamelModel):
    place_id: Optional[str] = None
    name: Optional[str] = None
    vicinity: Optional[str] = None
    formatted_address: Optional[str] = None
    geometry: Optional[Geometry] = None
    rating: Optional[float] = None
    price_level: Optional[int] = None
    types: Optional[List[str]] = None
    opening_hours_now: Optional[bool] = None

    @classmethod
    def from_upstream(cls, record: Dict[str, Any]) -> "PlaceResult":
        """
        Projects a raw upstream record onto the allow-listed fields.
        Anything not named here is dropped, and so is any named field
        whose value does not fit its type.
        """
        candidates = {
            "place_id": record.get("place_id"),
            "name": record.get("name"),
            "vicinity": record.get("vicinity"),
            "formatted_address": record.get("formatted_address"),
            "geometry": record.get("geometry"),
            "rating": record.get("rating"),
            "price_level": record.get("price_level"),
            "types": record.get("types"),
        }

        opening_hours = record.get("opening_hours")
        if isinstance(opening_hours, dict):
            candidates["opening_hours_now"] = opening_hours.get("open_now")

        fields = {}
        for name, value in candidates.items():
            if value is None:
                continue
            try:
                fields[name] = _PLACE_FIELD_ADAPTERS[name].validate_python(value)
            except ValidationError:
                continue
        return cls(**fields)

    def to_json(self) -> Dict[str, Any]:
        # Absent upstream fields are omitted, not sent as null
        return self.model_dump(by_alias=True, exclude_none=True)


_PLACE_FIELD_ADAPTERS = {
    name: TypeAdapter(field.annotation) for name, field in PlaceResult.model_fields.items()
}


# --- Envelope ---
class QueryMetadata(BaseModel):
    location: str
    radius: int
    type: str

class ResponseMetadata(CamelModel):
    query: QueryMetadata
    timestamp_iso: str
    result_count: int

class PlacesProxyResponse(CamelModel):
    status: str
    results: List[PlaceResult] = []
    next_page_token: Optional[str] = None
    metadata: ResponseMetadata

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Static samples ---
class SampleListing(BaseModel):
    name: str
    vicinity: str
    geometry: Geometry
    price: str
    type: str  # Property description, e.g. "4 Bedroom Villa"
    rating: float

class SamplesResponse(BaseModel):
    results: List[SampleListing]
    source: str  # always "static"
