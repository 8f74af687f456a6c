"""Re-export individual schema modules for easy imports."""

from .advice import AdviceStateOut

__all__ = [
    "AdviceStateOut",
]
