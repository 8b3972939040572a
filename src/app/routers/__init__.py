# Routers package
from . import (
    paddle_router,
    public_router,
)

__all__ = [
    "paddle_router",
    "public_router",
]
