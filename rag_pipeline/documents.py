"""
documents.py
============
Turn the country → plant catalog into flat, retrievable text documents.

One document per country.  Sub-lists are truncated (10 plants, 6 problems,
10 care-guide lines) so that a retrieved document never blows up the prompt;
plants beyond the cut-off remain browsable through the catalog endpoints
but are not retrievable for chat grounding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from plant_data.records import CountryRecord, PlantInfo, PlantProblem

MAX_PLANTS   = 10
MAX_PROBLEMS = 6
MAX_GUIDE    = 10

_MISSING = "N/A"


@dataclass(frozen=True)
class Document:
    id: str
    text: str
    embedding: Optional[Tuple[float, ...]] = None

    def with_embedding(self, embedding: List[float]) -> "Document":
        return Document(id=self.id, text=self.text, embedding=tuple(float(x) for x in embedding))


def build_documents(catalog: Mapping[str, CountryRecord]) -> List[Document]:
    """Build one un-embedded Document per country, in catalog order."""
    return [
        Document(id=f"country-{country}", text=compose_text(country, record))
        for country, record in catalog.items()
    ]


def compose_text(country: str, record: CountryRecord) -> str:
    plants   = " ".join(_plant_summary(p) for p in record.common_plants[:MAX_PLANTS])
    problems = " ".join(_problem_summary(p) for p in record.common_problems[:MAX_PROBLEMS])
    guide    = " ".join(record.care_guide[:MAX_GUIDE])

    return (
        f"Country: {country}. "
        f"Climate: {record.climate or _MISSING}. "
        f"Plants: {plants} "
        f"Problems: {problems} "
        f"Care Guide: {guide}"
    )


def _plant_summary(plant: PlantInfo) -> str:
    return (
        f"{_or_missing(plant.name)} ({_or_missing(plant.type)}): {_or_missing(plant.care)} "
        f"Water: {_or_missing(plant.water_freq)}. Light: {_or_missing(plant.light)}."
    )


def _problem_summary(problem: PlantProblem) -> str:
    return (
        f"{_or_missing(problem.problem)} - Causes: {_or_missing(problem.causes)}. "
        f"Solution: {_or_missing(problem.solution)}."
    )


def _or_missing(value: Optional[str]) -> str:
    return value if value else _MISSING
