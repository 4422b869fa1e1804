from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from places_proxy.core.config import Settings, get_settings
from places_proxy.core.cors import cors_headers
from places_proxy.models.base_model import ProxyResult
from places_proxy.repos.places_repo import GooglePlacesRepository
from places_proxy.services.Places_service import PlacesProxyService

router = APIRouter()

# Every method is routed here so non-GET requests get the JSON 405 body with CORS headers
PROXY_METHODS = ["GET", "OPTIONS", "HEAD", "POST", "PUT", "PATCH", "DELETE"]

# --- Dependency Injection ---
def get_places_repo(settings: Settings = Depends(get_settings)) -> GooglePlacesRepository:
    return GooglePlacesRepository(settings.PLACES_API_URL)

def get_places_service(
    repo: GooglePlacesRepository = Depends(get_places_repo),
    settings: Settings = Depends(get_settings)
) -> PlacesProxyService:
    return PlacesProxyService(repo, settings)

def to_response(result: ProxyResult) -> Response:
    if result.body is None:
        return Response(content="", status_code=result.status_code, headers=cors_headers())
    return JSONResponse(content=result.body, status_code=result.status_code, headers=cors_headers())

# The map page calls the Netlify function path
@router.api_route("/.netlify/functions/placesProxy", methods=PROXY_METHODS, include_in_schema=False)
@router.api_route("/placesProxy", methods=PROXY_METHODS)
async def places_proxy_endpoint(
    request: Request,
    service: PlacesProxyService = Depends(get_places_service)
):
    """
    Validates lat/lng/radius/type, queries Google Places nearby search
    and returns the normalized results.
    """
    result = await service.handle(request.method, request.query_params)
    return to_response(result)
