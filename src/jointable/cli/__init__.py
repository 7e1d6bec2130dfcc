from .base import jointablecli
from .describe import describe

__all__ = [
    "jointablecli",
    "describe",
]
