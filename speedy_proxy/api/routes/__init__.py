"""FastAPI route modules.

Exports all route modules for inclusion in the main application.
"""

from speedy_proxy.api.routes import labels, locations, shipments

__all__ = [
    "labels",
    "locations",
    "shipments",
]
