"""
backend — FastAPI application package.

Routers: api/chat.py, api/health.py, api/plants.py
Schemas: schemas/response.py
Entry point: main.py → run with `uvicorn backend.main:app --reload`
"""
