"""Shared fixtures for the plant-care backend tests."""

import math
from typing import List

import pytest

from plant_data.catalog import load_catalog
from plant_data.records import CountryRecord
from rag_pipeline.documents import Document


class KeywordEmbedder:
    """Deterministic embedder: one dimension per vocabulary word."""

    VOCAB = ("snake", "orchid", "cactus", "fern")

    def __init__(self):
        self.calls: List[str] = []

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        lowered = text.lower()
        return [float(lowered.count(word)) for word in self.VOCAB]


class EchoGenerator:
    """Records prompts and answers with a fixed reply."""

    def __init__(self, reply: str = "stub reply"):
        self.reply = reply
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


def unit_vector(cosine: float) -> List[float]:
    """2-d unit vector whose cosine with [1, 0] equals *cosine*."""
    return [cosine, math.sqrt(1.0 - cosine * cosine)]


@pytest.fixture
def catalog():
    """The packaged country → plant dataset."""
    return load_catalog()


@pytest.fixture
def sample_record() -> CountryRecord:
    return CountryRecord.model_validate({
        "climate": "Tropical",
        "commonPlants": [{
            "name": "Snake Plant",
            "type": "Succulent",
            "care": "Hardy.",
            "waterFreq": "Every 4-6 weeks",
            "light": "Low",
        }],
        "commonProblems": [{
            "problem": "Root Rot",
            "causes": "Overwatering",
            "solution": "Repot",
        }],
        "careGuide": ["WATER: less.", "LIGHT: more."],
    })


@pytest.fixture
def grounded_documents() -> List[Document]:
    """Three embedded documents in KeywordEmbedder's vector space."""
    return [
        Document(
            id="country-United States",
            text="Country: United States. Plants: Snake Plant (Succulent): Hardy. Water: Every 4-6 weeks.",
            embedding=(1.0, 0.0, 0.0, 0.0),
        ),
        Document(
            id="country-Japan",
            text="Country: Japan. Plants: Orchid (Epiphyte): Humid. Water: Weekly.",
            embedding=(0.0, 1.0, 0.0, 0.0),
        ),
        Document(
            id="country-Australia",
            text="Country: Australia. Plants: Cactus (Succulent): Dry. Water: Monthly.",
            embedding=(0.0, 0.0, 1.0, 0.0),
        ),
    ]


@pytest.fixture
def keyword_embedder() -> KeywordEmbedder:
    return KeywordEmbedder()


@pytest.fixture
def echo_generator() -> EchoGenerator:
    return EchoGenerator()
