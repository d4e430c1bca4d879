"""
End-to-end tests for the HTTP surface.

The app is built with injected collaborators so no real Ollama server is
needed; the generation endpoint is stubbed at the transport level where the
wire behaviour matters.
"""

import asyncio
import time

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.config import Settings
from backend.main import create_app
from rag_pipeline.knowledge_base import KnowledgeBase
from rag_pipeline.llm_engine import OllamaGenerator

from tests.conftest import KeywordEmbedder


def _context_section(prompt: str) -> str:
    return prompt.split("Context:\n", 1)[1].split("\n\nUser:", 1)[0]


@pytest.fixture
def settings():
    return Settings(ollama_base_url="http://ollama.test:11434")


class TestChatEndpoint:
    """POST /chat."""

    def test_grounded_reply(self, settings, grounded_documents, keyword_embedder, echo_generator):
        app = create_app(
            settings,
            knowledge_base=KnowledgeBase(grounded_documents),
            embedder=keyword_embedder,
            generator=echo_generator,
            populate_on_startup=False,
        )
        with TestClient(app) as client:
            response = client.post("/chat", json={"message": "How do I care for a snake plant?"})

        assert response.status_code == 200
        assert response.json() == {"reply": "stub reply"}
        context = _context_section(echo_generator.prompts[0])
        assert "Snake Plant" in context
        assert "Every 4-6 weeks" in context

    def test_api_alias(self, settings, keyword_embedder, echo_generator):
        app = create_app(settings, embedder=keyword_embedder, generator=echo_generator, populate_on_startup=False)
        with TestClient(app) as client:
            response = client.post("/api/chat", json={"message": "hi"})

        assert response.status_code == 200
        assert response.json() == {"reply": "stub reply"}

    @pytest.mark.parametrize("body", [{"message": ""}, {"message": "   "}, {}])
    def test_empty_message_is_rejected_without_outbound_calls(self, settings, grounded_documents, body):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"response": "should not happen"})

        embedder = KeywordEmbedder()
        generator = OllamaGenerator(settings.ollama_base_url, "tinyllama", transport=httpx.MockTransport(handler))
        app = create_app(
            settings,
            knowledge_base=KnowledgeBase(grounded_documents),
            embedder=embedder,
            generator=generator,
            populate_on_startup=False,
        )
        with TestClient(app) as client:
            response = client.post("/chat", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}
        assert calls == []
        assert embedder.calls == []

    def test_missing_body_is_rejected(self, settings, keyword_embedder, echo_generator):
        app = create_app(settings, embedder=keyword_embedder, generator=echo_generator, populate_on_startup=False)
        with TestClient(app) as client:
            response = client.post("/chat")

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}
        assert echo_generator.prompts == []

    @pytest.mark.parametrize(
        "request_kwargs",
        [
            {"json": {"message": 42}},
            {"json": {"message": ["a"]}},
            {"json": "hello"},
            {"content": b"not json", "headers": {"content-type": "application/json"}},
        ],
        ids=["number", "list", "json-string", "invalid-json"],
    )
    def test_malformed_body_is_rejected_as_missing_message(
        self, settings, grounded_documents, keyword_embedder, echo_generator, request_kwargs
    ):
        app = create_app(
            settings,
            knowledge_base=KnowledgeBase(grounded_documents),
            embedder=keyword_embedder,
            generator=echo_generator,
            populate_on_startup=False,
        )
        with TestClient(app) as client:
            response = client.post("/chat", **request_kwargs)

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}
        assert keyword_embedder.calls == []
        assert echo_generator.prompts == []

    def test_generation_failure_is_generic(self, settings, grounded_documents, keyword_embedder):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "model 'tinyllama' not found"})

        generator = OllamaGenerator(settings.ollama_base_url, "tinyllama", transport=httpx.MockTransport(handler))
        app = create_app(
            settings,
            knowledge_base=KnowledgeBase(grounded_documents),
            embedder=keyword_embedder,
            generator=generator,
            populate_on_startup=False,
        )
        with TestClient(app) as client:
            response = client.post("/chat", json={"message": "snake plant?"})

        assert response.status_code == 500
        assert response.json() == {"error": "Ollama not responding"}


class TestStartupPopulation:
    """Knowledge base population runs in the background."""

    def test_population_completes_after_startup(self, settings, catalog, keyword_embedder, echo_generator):
        app = create_app(
            settings,
            catalog_loader=lambda: catalog,
            embedder=keyword_embedder,
            generator=echo_generator,
        )
        with TestClient(app) as client:
            deadline = time.monotonic() + 5
            health = client.get("/api/health").json()
            while not health["knowledge_base_ready"] and time.monotonic() < deadline:
                time.sleep(0.02)
                health = client.get("/api/health").json()

            assert health["knowledge_base_ready"] is True
            assert health["knowledge_base_documents"] == 6

            response = client.post("/chat", json={"message": "How do I care for a snake plant?"})

        assert response.status_code == 200
        assert "Country: United States." in _context_section(echo_generator.prompts[-1])

    def test_requests_are_served_while_population_is_pending(self, settings, catalog, echo_generator):
        class HangingEmbedder:
            async def embed(self, text):
                await asyncio.sleep(3600)

        app = create_app(
            settings,
            catalog_loader=lambda: catalog,
            embedder=HangingEmbedder(),
            generator=echo_generator,
        )
        with TestClient(app) as client:
            response = client.post("/chat", json={"message": "hello"})
            health = client.get("/api/health").json()

        assert response.status_code == 200
        assert health["knowledge_base_ready"] is False
        assert _context_section(echo_generator.prompts[0]) == "(no context available)"


class TestHealthAndCatalog:
    """GET endpoints."""

    @pytest.fixture
    def client(self, settings, catalog, keyword_embedder, echo_generator):
        app = create_app(
            settings,
            catalog_loader=lambda: catalog,
            embedder=keyword_embedder,
            generator=echo_generator,
            populate_on_startup=False,
        )
        with TestClient(app) as client:
            yield client

    def test_health(self, client):
        body = client.get("/api/health").json()
        assert body["status"] == "ok"
        assert body["knowledge_base_ready"] is False
        assert body["chat_model"] == "tinyllama"
        assert body["embedding_model"] == "nomic-embed-text"

    def test_countries(self, client, catalog):
        assert client.get("/api/countries").json() == sorted(catalog)

    def test_country_detail_uses_wire_names(self, client):
        body = client.get("/api/countries/India").json()
        assert body["country"] == "India"
        assert body["fallback"] is False
        assert "commonPlants" in body["record"]
        assert "waterFreq" in body["record"]["commonPlants"][0]

    def test_unknown_country_falls_back(self, client):
        body = client.get("/api/countries/Atlantis").json()
        assert body["country"] == "United States"
        assert body["fallback"] is True

    def test_plant_search(self, client):
        body = client.get("/api/plants/search", params={"q": "snake"}).json()
        assert body["query"] == "snake"
        assert body["results"][0]["country"] == "United States"
        assert body["results"][0]["plant"]["name"] == "Snake Plant"

    def test_catalog_unavailable(self, settings, keyword_embedder, echo_generator, tmp_path):
        app = create_app(
            Settings(plant_data_path=str(tmp_path / "missing.json")),
            embedder=keyword_embedder,
            generator=echo_generator,
            populate_on_startup=False,
        )
        with TestClient(app) as client:
            response = client.get("/api/countries")

        assert response.status_code == 503
        assert response.json() == {"error": "Plant catalog unavailable"}
