"""Runtime module - Bootstrap and lifecycle management"""

from .bootstrap import (
    LaunchSettings,
    RuntimeComponents,
    bootstrap,
)

__all__ = [
    "bootstrap",
    "LaunchSettings",
    "RuntimeComponents",
]
