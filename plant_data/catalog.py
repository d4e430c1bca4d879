"""
catalog.py
==========
Load the country-wise plant dataset and answer simple lookups over it.

The dataset ships with the package as ``plants.json``; point
``PLANT_DATA_PATH`` at another file to override it.  The catalog is read
once and never mutated.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from plant_data.records import CountryRecord, PlantInfo

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "plants.json"
DEFAULT_COUNTRY = "United States"

Catalog = Dict[str, CountryRecord]


class CatalogError(RuntimeError):
    """Raised when the plant dataset cannot be read or validated."""


def load_catalog(path: Optional[Union[str, Path]] = None) -> Catalog:
    """
    Read and validate the plant dataset.

    Parameters
    ----------
    path : dataset file; defaults to the packaged ``plants.json``

    Returns
    -------
    Mapping of country name → CountryRecord, in file order.
    """
    data_file = Path(path) if path else DEFAULT_DATA_FILE
    try:
        with open(data_file, "r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except FileNotFoundError as exc:
        raise CatalogError(f"Plant dataset not found: {data_file}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Plant dataset is not valid JSON: {data_file} ({exc})") from exc

    if not isinstance(payload, dict):
        raise CatalogError(f"Plant dataset must be a JSON object keyed by country: {data_file}")

    catalog: Catalog = {}
    for country, raw in payload.items():
        try:
            catalog[str(country)] = CountryRecord.model_validate(raw or {})
        except ValidationError as exc:
            raise CatalogError(f"Invalid record for country '{country}': {exc}") from exc

    logger.info("Loaded plant catalog from %s (%d countries).", data_file, len(catalog))
    return catalog


def get_country_plant_data(catalog: Catalog, country: str) -> Tuple[str, CountryRecord]:
    """Exact-match lookup, falling back to the default country when unknown."""
    if country in catalog:
        return country, catalog[country]
    if DEFAULT_COUNTRY not in catalog:
        raise CatalogError(f"Unknown country '{country}' and no default country in dataset.")
    return DEFAULT_COUNTRY, catalog[DEFAULT_COUNTRY]


def get_all_countries(catalog: Catalog) -> List[str]:
    return sorted(catalog)


def search_plants(catalog: Catalog, term: str) -> List[Dict[str, Any]]:
    """Case-insensitive substring search over plant names and types."""
    needle = (term or "").strip().lower()
    if not needle:
        return []

    results: List[Dict[str, Any]] = []
    for country, record in catalog.items():
        for plant in record.common_plants:
            if _plant_matches(plant, needle):
                results.append({"country": country, "plant": plant})
    return results


def _plant_matches(plant: PlantInfo, needle: str) -> bool:
    return needle in (plant.name or "").lower() or needle in (plant.type or "").lower()
