"""
Model configurations, the registry that owns them, and the request router.
"""

from .profiles import ModelConfig
from .registry import ModelRegistry
from .router import RequestRouter, NO_MODEL_CONTENT

__all__ = [
    "ModelConfig",
    "ModelRegistry",
    "RequestRouter",
    "NO_MODEL_CONTENT",
]
