from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from recognition.contracts import RecognitionConfig


@dataclass(frozen=True, slots=True)
class BatchError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class BatchResult:
    """
    Outcome of one recognition + merge batch.

    All-or-nothing: when `ok` is False, `expressions` is empty and the
    error list says which side failed (recognition vs. trace data).
    """

    ok: bool
    doc_ids: list[int]
    expressions: list[str]  # one per input doc id, input order
    merged_inkml_file: str | None
    errors: list[BatchError]
    meta: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class BatchConfig:
    """
    Batch configuration. The per-document InkML read for the merge is the
    recognizer output under `recognition.output_dir`.
    """

    recognition: RecognitionConfig
    merged_out_file: Path

    def __post_init__(self) -> None:
        if not isinstance(self.merged_out_file, Path):
            raise TypeError("merged_out_file must be a pathlib.Path")
