from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Sequence

from .contracts import RecognitionError, RecognitionFailure

logger = logging.getLogger(__name__)


def dispatch_recognition(
    doc_ids: Sequence[int],
    *,
    recognize: Callable[[int], str],
    max_workers: int | None = None,
) -> list[str]:
    """
    Invoke `recognize` once per document id, concurrently, and return the raw
    outputs in input order (`result[i]` belongs to `doc_ids[i]`).

    All-or-nothing: every invocation is issued and awaited; if any of them
    failed, a single `RecognitionFailure` is raised and no results are returned.
    """

    ids = list(doc_ids)
    if not ids:
        return []

    workers = max_workers or len(ids)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="recognize") as pool:
        futures = [pool.submit(recognize, doc_id) for doc_id in ids]
        wait(futures)

    results: list[str] = []
    errors: list[RecognitionError] = []
    failed: list[int] = []
    for doc_id, fut in zip(ids, futures):
        exc = fut.exception()
        if exc is None:
            results.append(fut.result())
            continue

        failed.append(doc_id)
        logger.error("Recognition of document %s failed: %s", doc_id, exc)
        if isinstance(exc, RecognitionFailure):
            errors.extend(exc.errors)
        else:
            errors.append(
                RecognitionError(
                    code="RECOGNITION_INVOCATION_ERROR",
                    message=str(exc) or type(exc).__name__,
                    detail={"doc_id": doc_id},
                )
            )

    if failed:
        raise RecognitionFailure(
            f"Recognition failed for {len(failed)} of {len(ids)} documents", errors=errors
        )

    logger.debug("Recognized %d documents", len(results))
    return results
