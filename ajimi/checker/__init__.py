from .BookLint import (
    allowed_block_languages,
    check_block_languages,
    check_image_captions,
)
from .ConsistencyChecker import BookReference, ConsistencyChecker, extract_change_ids


__all__ = [
    "allowed_block_languages",
    "check_block_languages",
    "check_image_captions",
    "BookReference",
    "ConsistencyChecker",
    "extract_change_ids",
]
