import httpx
import logging
from typing import Optional

from places_proxy.models.places_model import SearchQuery
from places_proxy.core.logger import logs, redact

class GooglePlacesRepository:
    """
    Thin client for the Google Places nearby-search endpoint.
    Issues exactly one GET per call: no retries, library default timeout.
    """
    def __init__(self, api_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_url = api_url
        # Tests inject an httpx.MockTransport here
        self.transport = transport

    async def nearby_search(self, query: SearchQuery, api_key: str) -> httpx.Response:
        """
        Raises httpx.RequestError on network failure; any HTTP status is returned as-is.
        """
        params = query.to_upstream_params(api_key)
        url = httpx.URL(self.api_url, params=params)
        logs.log(logging.INFO, f"Making request to Google Places API: {redact(str(url), api_key)}")

        async with httpx.AsyncClient(transport=self.transport) as client:
            return await client.get(url)
