"""Notes + users demo application built on the pipeline."""

from page_pipeline.demo.app import (
    build_dispatcher,
    build_router,
    create_app,
    open_store,
)

__all__ = ["build_dispatcher", "build_router", "create_app", "open_store"]
