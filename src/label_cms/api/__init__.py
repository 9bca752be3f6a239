"""HTTP API routers."""

from label_cms.api.router import api_router

__all__ = ["api_router"]
