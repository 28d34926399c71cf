"""ASGI entry point: ``uvicorn page_pipeline.demo.main:app``."""

from page_pipeline.demo.app import create_app

app = create_app()
