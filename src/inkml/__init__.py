"""
InkML trace data: per-document reading, batch-wide id unification, and
writing of the merged document.

Unification contract:
- every trace gets a unique global id, dense from 1
- every traceDataRef is rewritten to the renumbered trace it pointed at
- within-document order of traces and groups is preserved
- documents are folded in ascending sequence number (deterministic ids)
"""

from .contracts import (
    DanglingTraceReferenceError,
    DuplicateDocumentIdError,
    DuplicateTraceIdError,
    InkDocument,
    InkmlReadError,
    MergedInk,
    Trace,
    TraceGroup,
    TraceIntegrityError,
)
from .reader import load_ink_documents, read_ink_document
from .unifier import TraceIdSession, unify_documents
from .writer import write_merged_inkml

__all__ = [
    "DanglingTraceReferenceError",
    "DuplicateDocumentIdError",
    "DuplicateTraceIdError",
    "InkDocument",
    "InkmlReadError",
    "MergedInk",
    "Trace",
    "TraceGroup",
    "TraceIdSession",
    "TraceIntegrityError",
    "load_ink_documents",
    "read_ink_document",
    "unify_documents",
    "write_merged_inkml",
]
