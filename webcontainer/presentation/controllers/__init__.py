"""
Controllers Package - Presentation Layer

FastAPI routers registered with the DI container and served inside each
webapp through the front-controller filter.
"""

from .echo_controller import router as echo_router
from .status_controller import router as status_router

__all__ = ["echo_router", "status_router"]
