"""backend.api — FastAPI routers."""
