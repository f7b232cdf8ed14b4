from __future__ import annotations

from typing import Callable

from .contracts import (
    RecognitionConfig,
    RecognitionEngineName,
    RecognitionFailure,
    RecognitionResult,
)
from .engines.seshat_cli import SeshatCliEngine


def _get_engine(engine: RecognitionEngineName):
    if engine == RecognitionEngineName.SESHAT_CLI:
        return SeshatCliEngine()
    raise ValueError(f"Unsupported recognition engine: {engine}")


def run_recognition_on_document(*, config: RecognitionConfig, doc_id: int) -> RecognitionResult:
    """
    Run the configured recognizer once for the document numbered `doc_id`.
    """

    engine = _get_engine(config.engine)
    return engine.run_on_document(config=config, doc_id=doc_id)


def make_engine_recognizer(config: RecognitionConfig) -> Callable[[int], str]:
    """
    Adapt the configured engine to the `recognize(doc_id) -> str` seam used by
    the dispatcher. A failed result is raised as `RecognitionFailure`.
    """

    def recognize(doc_id: int) -> str:
        result = run_recognition_on_document(config=config, doc_id=doc_id)
        if not result.ok:
            raise RecognitionFailure(
                f"Recognition failed for document {doc_id}", errors=result.errors
            )
        return result.stdout

    return recognize
