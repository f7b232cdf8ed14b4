from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class RecognitionEngineName(str, Enum):
    """
    Handwriting-math recognition backends supported by this module.
    """

    SESHAT_CLI = "seshat_cli"


@dataclass(frozen=True, slots=True)
class RecognitionError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class RecognitionResult:
    """
    Raw output of one recognizer invocation.

    `stdout` is exactly what the backend printed; no LaTeX extraction or
    correction happens at this level.
    """

    ok: bool
    engine: RecognitionEngineName
    doc_id: int
    stdout: str
    errors: list[RecognitionError]
    meta: dict[str, Any]


class RecognitionFailure(Exception):
    """
    A recognizer invocation failed. The whole batch is aborted.
    """

    def __init__(self, message: str, *, errors: list[RecognitionError] | None = None) -> None:
        super().__init__(message)
        self.errors: list[RecognitionError] = list(errors or [])


@dataclass(frozen=True, slots=True)
class RecognitionConfig:
    """
    Recognition module configuration.

    `seshat_root` is the working directory of the recognizer install; the
    per-document input/output InkML files live in subdirectories of it.
    This module does not read environment variables.
    """

    seshat_root: Path
    engine: RecognitionEngineName = RecognitionEngineName.SESHAT_CLI
    executable: str = "./seshat"
    config_relpath: str = "Config/CONFIG"
    input_dirname: str = "temp"
    output_dirname: str = "out"
    timeout_s: float = 120.0
    max_workers: int | None = None  # None => one worker per document

    def __post_init__(self) -> None:
        if not isinstance(self.seshat_root, Path):
            raise TypeError("seshat_root must be a pathlib.Path")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

    @property
    def input_dir(self) -> Path:
        return self.seshat_root / self.input_dirname

    @property
    def output_dir(self) -> Path:
        return self.seshat_root / self.output_dirname

    def input_file(self, doc_id: int) -> Path:
        return self.input_dir / f"temp{doc_id}.inkml"
