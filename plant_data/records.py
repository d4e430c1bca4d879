"""
records.py
==========
Explicit schema for the country → plant care dataset.

The raw dataset is loosely structured: any section of a country record
may be missing.  These pydantic models default every absent field so the
document builder never has to reason about absence ad hoc.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class PlantInfo(_Record):
    name: Optional[str] = None
    type: Optional[str] = None
    care: Optional[str] = None
    water_freq: Optional[str] = Field(None, alias="waterFreq")
    light: Optional[str] = None


class PlantProblem(_Record):
    problem: Optional[str] = None
    causes: Optional[str] = None
    solution: Optional[str] = None


class CountryRecord(_Record):
    climate: Optional[str] = None
    common_plants: List[PlantInfo] = Field(default_factory=list, alias="commonPlants")
    common_problems: List[PlantProblem] = Field(default_factory=list, alias="commonProblems")
    care_guide: List[str] = Field(default_factory=list, alias="careGuide")
