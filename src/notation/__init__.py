"""
Notation normalization for recognized LaTeX.

Corrects one recognizer ambiguity only: a comparison operator followed by a
subscripted summation or set payload in HINT documents. No general math
parsing is attempted.
"""

from .contracts import BatchItem, DocumentRole, MissingTranscriptionError, interleaved_items
from .normalizer import (
    cleanup_expression,
    correct_hint,
    extract_latex_expression,
    normalize_transcriptions,
    unescape_commas,
)

__all__ = [
    "BatchItem",
    "DocumentRole",
    "MissingTranscriptionError",
    "cleanup_expression",
    "correct_hint",
    "extract_latex_expression",
    "interleaved_items",
    "normalize_transcriptions",
    "unescape_commas",
]
