"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Request

from packing.catalog import Catalog


def get_catalog(request: Request) -> Catalog:
    """The catalog built at start-up (see ``create_app``)."""
    return request.app.state.catalog
