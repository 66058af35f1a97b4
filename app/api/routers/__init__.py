"""
app/api/routers package marker.
"""

from app.api.routers.graph_router import router as graph_router
from app.api.routers.metrics_router import router as metrics_router

__all__ = [
    "graph_router",
    "metrics_router",
]
