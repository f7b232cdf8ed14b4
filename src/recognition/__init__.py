"""
Recognition stage (perception only).

- Input: ordered document sequence numbers
- Output: raw recognizer output text per document, in input order
- Constraints: no LaTeX extraction or correction here; a single failed
  invocation aborts the batch

All filesystem access goes through the explicitly passed `RecognitionConfig`.
"""

from .contracts import (
    RecognitionConfig,
    RecognitionEngineName,
    RecognitionError,
    RecognitionFailure,
    RecognitionResult,
)
from .dispatcher import dispatch_recognition
from .module import make_engine_recognizer, run_recognition_on_document

__all__ = [
    "RecognitionConfig",
    "RecognitionEngineName",
    "RecognitionError",
    "RecognitionFailure",
    "RecognitionResult",
    "dispatch_recognition",
    "make_engine_recognizer",
    "run_recognition_on_document",
]
