"""
api/plants.py
=============
Read-only catalog endpoints backing the country and plant pages:

  GET /api/countries               — sorted country list
  GET /api/countries/{country}     — one country's record (default country
                                     substituted for unknown names)
  GET /api/plants/search?q=...     — plants whose name or type matches
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, Request

from backend.schemas.response import CountryResponse, PlantMatch, PlantSearchResponse
from plant_data.catalog import Catalog, get_all_countries, get_country_plant_data, search_plants

router = APIRouter()


def _catalog(request: Request) -> Catalog:
    return request.app.state.catalog()


@router.get("/api/countries", response_model=List[str])
async def list_countries(request: Request):
    return get_all_countries(_catalog(request))


@router.get("/api/countries/{country}", response_model=CountryResponse)
async def country_detail(country: str, request: Request):
    resolved, record = get_country_plant_data(_catalog(request), country)
    return CountryResponse(country=resolved, fallback=resolved != country, record=record)


@router.get("/api/plants/search", response_model=PlantSearchResponse)
async def plant_search(request: Request, q: str = Query("", description="Plant name or type")):
    matches = search_plants(_catalog(request), q)
    return PlantSearchResponse(
        query   = q,
        results = [PlantMatch(country=m["country"], plant=m["plant"]) for m in matches],
    )
