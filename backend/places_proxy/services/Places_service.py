import httpx
import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Union

from places_proxy.core.config import Settings
from places_proxy.core.logger import logs, redact
from places_proxy.models.base_model import ErrorKind, ProxyError, ProxyResult
from places_proxy.models.places_model import (
    ALLOWED_PLACE_TYPES, DEFAULT_PLACE_TYPE,
    MIN_LATITUDE, MAX_LATITUDE, MIN_LONGITUDE, MAX_LONGITUDE, MIN_RADIUS, MAX_RADIUS,
    PlaceResult, PlacesProxyResponse, QueryMetadata, ResponseMetadata, SearchQuery
)
from places_proxy.repos.places_repo import GooglePlacesRepository

REQUIRED_PARAMS = ("lat", "lng", "radius")
SUCCESS_STATUSES = ("OK", "ZERO_RESULTS")

UPSTREAM_STATUS_MESSAGES = {
    "OVER_QUERY_LIMIT": "API quota exceeded. Please try again later.",
    "REQUEST_DENIED": "API request denied. Please check API key configuration.",
    "INVALID_REQUEST": "Invalid request parameters.",
}


def _client_error(message: str) -> ProxyError:
    return ProxyError(kind=ErrorKind.CLIENT_INPUT, error=message)


# --- Validation steps (each returns a value or a ProxyError) ---

# Leading numeric prefixes, read the way the map page's parseFloat/parseInt read them
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")
_HEX_PREFIX = re.compile(r"\s*([+-]?)0[xX]([0-9a-fA-F]*)")
# int() refuses longer digit strings; a prefix this long is out of range anyway
_INT_PREFIX = re.compile(r"\s*([+-]?\d{1,4000})")

def _parse_float(raw: str) -> Optional[float]:
    """Reads the leading number ("5.6abc" gives 5.6); None when there is none."""
    match = _FLOAT_PREFIX.match(raw)
    if match is None:
        return None
    return float(match.group(1))

def _parse_int(raw: str) -> Optional[int]:
    """Reads the leading integer ("3000.5" and "3000m" give 3000); a 0x prefix is hex."""
    hex_match = _HEX_PREFIX.match(raw)
    if hex_match is not None:
        sign, digits = hex_match.groups()
        if not digits:
            return None
        return int(sign + digits, 16)

    match = _INT_PREFIX.match(raw)
    if match is None:
        return None
    return int(match.group(1))

def parse_search_query(params: Mapping[str, str]) -> Union[SearchQuery, ProxyError]:
    """
    Turns raw query parameters into a SearchQuery.
    Checks run in a fixed order and the first failure is returned.
    """
    if not params:
        return _client_error("Missing query parameters. Required: lat, lng, radius")

    if not all(params.get(name) for name in REQUIRED_PARAMS):
        return _client_error("Missing required parameters. Required: lat, lng, radius")

    latitude = _parse_float(params["lat"])
    longitude = _parse_float(params["lng"])
    radius = _parse_int(params["radius"])
    if latitude is None or longitude is None or radius is None:
        return _client_error(
            "Invalid parameter format. lat and lng must be numbers, radius must be an integer."
        )

    if not MIN_LATITUDE <= latitude <= MAX_LATITUDE:
        return _client_error("Invalid latitude. Must be between -90 and 90.")
    if not MIN_LONGITUDE <= longitude <= MAX_LONGITUDE:
        return _client_error("Invalid longitude. Must be between -180 and 180.")
    if not MIN_RADIUS <= radius <= MAX_RADIUS:
        return _client_error("Invalid radius. Must be between 1 and 50000 meters.")

    place_type = params.get("type", DEFAULT_PLACE_TYPE)
    if place_type not in ALLOWED_PLACE_TYPES:
        return _client_error(f"Invalid type. Allowed types: {', '.join(ALLOWED_PLACE_TYPES)}")

    return SearchQuery(
        latitude=latitude,
        longitude=longitude,
        radius_meters=radius,
        place_type=place_type
    )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PlacesProxyService:
    def __init__(
        self,
        repo: GooglePlacesRepository,
        settings: Settings,
        clock: Callable[[], datetime] = _utc_now
    ):
        self.repo = repo
        self.settings = settings
        self.clock = clock

    async def handle(self, method: str, params: Mapping[str, str]) -> ProxyResult:
        """
        Produces exactly one response per call. Nothing raised inside the
        pipeline escapes; it becomes a 500 instead.
        """
        try:
            return await self._handle(method.upper(), params)
        except Exception as e:
            logs.log(logging.ERROR, f"Function error: {str(e)}", exc_info=True)
            message = "An unexpected error occurred" if self.settings.is_production else str(e)
            return ProxyError(
                kind=ErrorKind.INTERNAL, error="Internal server error", message=message
            ).to_result()

    async def _handle(self, method: str, params: Mapping[str, str]) -> ProxyResult:
        # 1. CORS preflight
        if method == "OPTIONS":
            return ProxyResult(status_code=200)

        # 2. Method
        if method != "GET":
            return ProxyError(
                kind=ErrorKind.METHOD_NOT_ALLOWED, error="Method not allowed. Use GET."
            ).to_result()

        # 3. Credential
        api_key = self.settings.GOOGLE_MAPS_API_KEY
        if not api_key:
            logs.log(logging.ERROR, "GOOGLE_MAPS_API_KEY environment variable not set")
            return ProxyError(
                kind=ErrorKind.SERVER_CONFIGURATION,
                error="Server configuration error. API key not found."
            ).to_result()

        # 4-7. Parameters
        query = parse_search_query(params)
        if isinstance(query, ProxyError):
            logs.log(logging.INFO, f"Rejected places query: {query.error}")
            return query.to_result()

        # 8-10. Upstream
        data = await self._fetch(query, api_key)
        if isinstance(data, ProxyError):
            return data.to_result()

        # 11-12. Normalize and respond
        return ProxyResult(status_code=200, body=self._build_response(query, data).to_json())

    async def _fetch(self, query: SearchQuery, api_key: str) -> Union[Dict[str, Any], ProxyError]:
        try:
            response = await self.repo.nearby_search(query, api_key)
        except httpx.RequestError as e:
            logs.log(logging.ERROR, f"Google Places API request failed: {redact(str(e), api_key)}")
            return ProxyError(
                kind=ErrorKind.UPSTREAM_TRANSPORT,
                error="Google Places API error: network failure"
            )

        if not response.is_success:
            logs.log(
                logging.ERROR,
                f"Google Places API error: {response.status_code} {response.reason_phrase}"
            )
            return ProxyError(
                kind=ErrorKind.UPSTREAM_TRANSPORT,
                error=f"Google Places API error: {response.status_code}"
            )

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Google Places API returned a non-object payload")

        status = data.get("status")
        if status not in SUCCESS_STATUSES:
            upstream_message = data.get("error_message")
            logs.log(
                logging.ERROR,
                f"Google Places API returned status: {status}",
                extra={"error_message": redact(str(upstream_message), api_key)} if upstream_message else None
            )
            details = upstream_message or status
            if isinstance(details, str):
                details = redact(details, api_key)
            return ProxyError(
                kind=ErrorKind.UPSTREAM_SEMANTIC,
                error=UPSTREAM_STATUS_MESSAGES.get(status, f"Google Places API error: {status}"),
                details=details
            )

        return data

    def _build_response(self, query: SearchQuery, data: Dict[str, Any]) -> PlacesProxyResponse:
        raw_results = data.get("results") or []
        results = [PlaceResult.from_upstream(record) for record in raw_results if isinstance(record, dict)]

        logs.log(
            logging.INFO,
            f"Successfully fetched {len(results)} places for location ({query.location}) "
            f"with radius {query.radius_meters}m"
        )

        return PlacesProxyResponse(
            status=data["status"],
            results=results,
            next_page_token=data.get("next_page_token"),
            metadata=ResponseMetadata(
                query=QueryMetadata(
                    location=query.location,
                    radius=query.radius_meters,
                    type=query.place_type
                ),
                timestamp_iso=self._timestamp(),
                result_count=len(results)
            )
        )

    def _timestamp(self) -> str:
        now = self.clock().astimezone(timezone.utc)
        return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
