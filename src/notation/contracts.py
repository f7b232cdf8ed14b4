from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class DocumentRole(str, Enum):
    """
    Role of a document inside a recognition batch.

    A HINT document carries the operator + bracket payload used to
    disambiguate its sibling PRIMARY document; only hints are corrected.
    """

    PRIMARY = "primary"
    HINT = "hint"


@dataclass(frozen=True, slots=True)
class BatchItem:
    doc_id: int
    role: DocumentRole = DocumentRole.PRIMARY


class MissingTranscriptionError(ValueError):
    """
    Recognizer output has no `LaTeX:` line to extract an expression from.
    """


def interleaved_items(doc_ids: Iterable[int]) -> list[BatchItem]:
    """
    Default batch layout: callers interleave primary and hint documents, so
    even positions (0-based) are PRIMARY and odd positions are HINT.
    """

    return [
        BatchItem(doc_id=doc_id, role=DocumentRole.HINT if i % 2 else DocumentRole.PRIMARY)
        for i, doc_id in enumerate(doc_ids)
    ]
