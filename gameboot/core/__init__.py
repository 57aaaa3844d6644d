# Core package exports

from .lifecycle import LifecycleController

__all__ = [
    "LifecycleController",
]
