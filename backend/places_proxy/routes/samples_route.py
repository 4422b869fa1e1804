from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from places_proxy.core.cors import cors_headers
from places_proxy.models.places_model import SamplesResponse
from places_proxy.repos.sample_repo import SampleListingsRepository

router = APIRouter()

def get_sample_repo() -> SampleListingsRepository:
    return SampleListingsRepository()

@router.get("/samples", response_model=SamplesResponse)
async def get_samples_endpoint(repo: SampleListingsRepository = Depends(get_sample_repo)):
    response = SamplesResponse(results=repo.list_samples(), source="static")
    return JSONResponse(content=response.model_dump(), headers=cors_headers())
