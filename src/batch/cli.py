from __future__ import annotations

import argparse
import logging
from pathlib import Path

from notation.contracts import interleaved_items
from recognition.contracts import RecognitionConfig

from .artifacts import serialize_batch_result, write_batch_json_artifact
from .contracts import BatchConfig
from .logging_config import setup_logging
from .module import run_batch


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ink-batch",
        description=(
            "Recognize a batch of handwritten InkML documents, normalize the LaTeX "
            "expressions, and merge the documents into one InkML file."
        ),
    )
    p.add_argument(
        "--seshat-root",
        required=True,
        type=Path,
        help="Seshat install directory (holds temp/ inputs and out/ outputs).",
    )
    p.add_argument(
        "--doc-id",
        dest="doc_ids",
        required=True,
        type=int,
        action="append",
        help="Document sequence number; repeat in order (primary, hint, primary, hint, ...).",
    )
    p.add_argument(
        "--merged-out",
        required=True,
        type=Path,
        help="Output path of the merged InkML file.",
    )
    p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Optional JSON artifact path for the batch result (default: print to stdout).",
    )
    p.add_argument(
        "--timeout-s",
        type=float,
        default=120.0,
        help="Per-document recognizer timeout in seconds.",
    )
    p.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Concurrent recognizer processes (default: one per document).",
    )
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO).",
    )
    p.add_argument(
        "--log-file",
        default=None,
        help="Optional log file path.",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    config = BatchConfig(
        recognition=RecognitionConfig(
            seshat_root=args.seshat_root,
            timeout_s=args.timeout_s,
            max_workers=args.max_workers,
        ),
        merged_out_file=args.merged_out,
    )

    result = run_batch(config=config, items=interleaved_items(args.doc_ids))

    if args.out is not None:
        write_batch_json_artifact(result=result, out_file=args.out)
    else:
        print(serialize_batch_result(result), end="")

    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
