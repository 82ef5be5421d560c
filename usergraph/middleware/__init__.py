from .debug import DebugMiddleware

__all__ = [
    "DebugMiddleware",
]
