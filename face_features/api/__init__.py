"""
face_features/api
FastAPI 應用程式模組
"""

from face_features import __version__

from . import schemas
from . import services
from . import routers
from . import middleware

__all__ = [
    "schemas",
    "services",
    "routers",
    "middleware",
    "__version__",
]
