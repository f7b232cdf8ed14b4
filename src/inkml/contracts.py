from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Trace:
    """
    One pen stroke. `data` is the raw point text and is never inspected.
    """

    trace_id: str
    data: str


@dataclass(frozen=True, slots=True)
class TraceGroup:
    """
    A recognized symbol: an ordered list of trace references (traceDataRefs).

    `label` and `href` are carried through untouched.
    """

    group_id: str
    trace_refs: list[str]
    label: str | None = None
    href: str | None = None


@dataclass(frozen=True, slots=True)
class InkDocument:
    doc_id: int  # batch sequence number
    traces: list[Trace]
    groups: list[TraceGroup]


@dataclass(frozen=True, slots=True)
class MergedInk:
    """
    All documents of a batch under one global trace/group id space.
    """

    source_doc_ids: list[int]
    traces: list[Trace]
    groups: list[TraceGroup]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class TraceIntegrityError(Exception):
    """
    Per-document trace data breaks the id/reference invariants needed to merge.
    """

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.detail: dict[str, Any] = dict(detail or {})


class DanglingTraceReferenceError(TraceIntegrityError):
    pass


class DuplicateTraceIdError(TraceIntegrityError):
    pass


class DuplicateDocumentIdError(TraceIntegrityError):
    pass


class InkmlReadError(Exception):
    pass
