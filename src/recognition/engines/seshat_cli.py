from __future__ import annotations

import logging
import subprocess
from typing import Any

from ..contracts import (
    RecognitionConfig,
    RecognitionEngineName,
    RecognitionError,
    RecognitionResult,
)
from .base import RecognitionEngine

logger = logging.getLogger(__name__)


def _failure(*, doc_id: int, error: RecognitionError, meta: dict[str, Any], stdout: str = "") -> RecognitionResult:
    return RecognitionResult(
        ok=False,
        engine=RecognitionEngineName.SESHAT_CLI,
        doc_id=doc_id,
        stdout=stdout,
        errors=[error],
        meta=meta,
    )


class SeshatCliEngine(RecognitionEngine):
    """
    Seshat handwritten math expression recognizer via its CLI.

    Seshat reads `temp/temp{n}.inkml`, writes the recognized InkML to
    `out/out{n}.inkml` and prints a report whose `LaTeX:` line carries the
    transcription. Anything written to stderr is treated as a failure.
    """

    def build_command(self, *, config: RecognitionConfig, doc_id: int) -> list[str]:
        # Render/dot outputs are per document so concurrent runs never share a file.
        return [
            config.executable,
            "-c",
            config.config_relpath,
            "-i",
            f"{config.input_dirname}/temp{doc_id}.inkml",
            "-o",
            f"{config.output_dirname}/out{doc_id}.inkml",
            "-r",
            f"render{doc_id}.pgm",
            "-d",
            f"out{doc_id}.dot",
        ]

    def run_on_document(self, *, config: RecognitionConfig, doc_id: int) -> RecognitionResult:
        cmd = self.build_command(config=config, doc_id=doc_id)
        meta: dict[str, Any] = {
            "backend": "seshat",
            "backend_mode": "cli",
            "command": cmd,
            "timeout_s": config.timeout_s,
        }

        input_file = config.input_file(doc_id)
        if not input_file.exists():
            return _failure(
                doc_id=doc_id,
                error=RecognitionError(
                    code="RECOGNITION_INPUT_NOT_FOUND",
                    message="Input InkML file not found",
                    detail={"input_relpath": f"{config.input_dirname}/{input_file.name}"},
                ),
                meta=meta,
            )

        config.output_dir.mkdir(parents=True, exist_ok=True)

        try:
            proc = subprocess.run(
                cmd,
                cwd=config.seshat_root,
                check=False,
                capture_output=True,
                text=True,
                timeout=config.timeout_s,
            )
        except FileNotFoundError:
            return _failure(
                doc_id=doc_id,
                error=RecognitionError(
                    code="RECOGNITION_BACKEND_NOT_INSTALLED",
                    message="seshat executable not found",
                    detail={"expected_command": config.executable},
                ),
                meta=meta,
            )
        except subprocess.TimeoutExpired:
            return _failure(
                doc_id=doc_id,
                error=RecognitionError(
                    code="RECOGNITION_TIMEOUT",
                    message="Recognition backend timed out",
                    detail={"timeout_s": config.timeout_s},
                ),
                meta=meta,
            )

        if proc.returncode != 0:
            return _failure(
                doc_id=doc_id,
                error=RecognitionError(
                    code="RECOGNITION_BACKEND_ERROR",
                    message="Recognition backend returned a non-zero exit code",
                    detail={"returncode": proc.returncode, "stderr": proc.stderr[-4000:]},
                ),
                meta=meta,
                stdout=proc.stdout,
            )

        if proc.stderr:
            logger.error("stderr from seshat for document %s: %s", doc_id, proc.stderr.strip())
            return _failure(
                doc_id=doc_id,
                error=RecognitionError(
                    code="RECOGNITION_STDERR",
                    message="Recognition backend wrote to stderr",
                    detail={"stderr": proc.stderr[-4000:]},
                ),
                meta=meta,
                stdout=proc.stdout,
            )

        return RecognitionResult(
            ok=True,
            engine=RecognitionEngineName.SESHAT_CLI,
            doc_id=doc_id,
            stdout=proc.stdout,
            errors=[],
            meta=meta,
        )
