from .DiffFormatter import DiffFormatter
from .EnclosingContext import enclosing_context
from .languages import FENCE_LANGUAGES, fence_language


__all__ = [
    "DiffFormatter",
    "enclosing_context",
    "FENCE_LANGUAGES",
    "fence_language",
]
