from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Sequence

from inkml.contracts import InkDocument, InkmlReadError, MergedInk, TraceIntegrityError
from inkml.reader import load_ink_documents
from inkml.unifier import unify_documents
from inkml.writer import write_merged_inkml
from notation.contracts import BatchItem, MissingTranscriptionError
from notation.normalizer import normalize_transcriptions
from recognition.contracts import RecognitionFailure
from recognition.dispatcher import dispatch_recognition
from recognition.module import make_engine_recognizer

from .contracts import BatchConfig, BatchError, BatchResult

logger = logging.getLogger(__name__)

Recognize = Callable[[int], str]
LoadDocuments = Callable[[list[int]], list[InkDocument]]
Persist = Callable[[MergedInk], Path]


def _failed(*, doc_ids: list[int], error: BatchError, meta: dict[str, Any]) -> BatchResult:
    return BatchResult(
        ok=False,
        doc_ids=doc_ids,
        expressions=[],
        merged_inkml_file=None,
        errors=[error],
        meta=meta,
    )


def _default_loader(config: BatchConfig) -> LoadDocuments:
    def load(ids: list[int]) -> list[InkDocument]:
        return load_ink_documents(ink_dir=config.recognition.output_dir, doc_ids=ids)

    return load


def _default_persister(config: BatchConfig) -> Persist:
    def persist(merged: MergedInk) -> Path:
        return write_merged_inkml(merged=merged, out_file=config.merged_out_file)

    return persist


def run_batch(
    *,
    config: BatchConfig,
    items: Sequence[BatchItem],
    recognize: Recognize | None = None,
    load_documents: LoadDocuments | None = None,
    persist: Persist | None = None,
) -> BatchResult:
    """
    Recognize every document, normalize the expressions, and merge the
    documents' traces into one InkML file.

    The three collaborators default to the Seshat CLI, the InkML reader over
    the recognizer's output directory, and the InkML writer; tests inject
    fakes instead.
    """

    doc_ids = [item.doc_id for item in items]
    roles = [item.role for item in items]
    meta: dict[str, Any] = {"roles": [role.value for role in roles]}

    if not items:
        return _failed(
            doc_ids=doc_ids,
            error=BatchError(code="BATCH_EMPTY", message="No document ids given"),
            meta=meta,
        )

    if recognize is None:
        recognize = make_engine_recognizer(config.recognition)
    if load_documents is None:
        load_documents = _default_loader(config)
    if persist is None:
        persist = _default_persister(config)

    try:
        raw_results = dispatch_recognition(
            doc_ids, recognize=recognize, max_workers=config.recognition.max_workers
        )
        expressions = normalize_transcriptions(raw_results, roles)
    except (RecognitionFailure, MissingTranscriptionError) as e:
        logger.error("Recognition batch %s failed: %s", doc_ids, e)
        return _failed(
            doc_ids=doc_ids,
            error=BatchError(code="RECOGNITION_FAILED", message="Recognition failed"),
            meta=meta,
        )

    logger.info("Results: %s", expressions)

    try:
        merged = unify_documents(load_documents(doc_ids))
    except InkmlReadError as e:
        logger.error("Reading recognized InkML failed: %s", e)
        return _failed(
            doc_ids=doc_ids,
            error=BatchError(code="INKML_READ_ERROR", message=str(e)),
            meta=meta,
        )
    except TraceIntegrityError as e:
        logger.error("Trace data cannot be merged: %s", e)
        return _failed(
            doc_ids=doc_ids,
            error=BatchError(code="TRACE_INTEGRITY_ERROR", message=str(e), detail=e.detail),
            meta=meta,
        )

    try:
        out_file = persist(merged)
    except OSError as e:
        logger.error("Writing merged InkML failed: %s", e)
        return _failed(
            doc_ids=doc_ids,
            error=BatchError(code="MERGED_INKML_WRITE_ERROR", message=str(e)),
            meta=meta,
        )

    return BatchResult(
        ok=True,
        doc_ids=doc_ids,
        expressions=expressions,
        merged_inkml_file=str(out_file),
        errors=[],
        meta={**meta, "trace_count": len(merged.traces), "group_count": len(merged.groups)},
    )
