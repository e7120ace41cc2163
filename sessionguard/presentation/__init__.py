"""Presentation layer (FastAPI routers)."""
