from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .contracts import BatchResult


def serialize_batch_result(result: BatchResult) -> str:
    """
    Stable JSON serialization for audit artifacts.
    """

    payload: dict[str, Any] = result.to_dict()
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_batch_json_artifact(*, result: BatchResult, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_batch_result(result), encoding="utf-8")
