from __future__ import annotations

from abc import ABC, abstractmethod

from ..contracts import RecognitionConfig, RecognitionResult


class RecognitionEngine(ABC):
    """
    Interface for handwriting-math recognition engines.

    IMPORTANT:
    - Engines must return the backend's raw textual output.
    - Engines must NOT extract, rewrite or normalize the recognized expression.
    """

    @abstractmethod
    def run_on_document(self, *, config: RecognitionConfig, doc_id: int) -> RecognitionResult:
        raise NotImplementedError
