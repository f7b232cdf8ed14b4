from __future__ import annotations

import logging
from typing import Iterable

from .contracts import (
    DanglingTraceReferenceError,
    DuplicateDocumentIdError,
    DuplicateTraceIdError,
    InkDocument,
    MergedInk,
    Trace,
    TraceGroup,
)

logger = logging.getLogger(__name__)


class TraceIdSession:
    """
    Global id space for one merge: a trace counter and a group counter, both
    starting at 1 and only ever advanced by `fold`.

    Documents must be folded one at a time in a fixed order; the counters make
    every assignment depend on all previous documents.
    """

    def __init__(self, *, trace_counter: int = 1, group_counter: int = 1) -> None:
        if trace_counter < 1 or group_counter < 1:
            raise ValueError("id counters start at 1")
        self.trace_counter = trace_counter
        self.group_counter = group_counter

    def fold(self, document: InkDocument) -> InkDocument:
        """
        Return a copy of `document` with traces and groups renumbered into the
        global id space and every group's trace refs rewritten to match.

        The session counters only advance once the whole document has been
        validated; a rejected document leaves the session unchanged.
        """

        next_trace = self.trace_counter
        next_group = self.group_counter

        id_map: dict[str, str] = {}
        traces: list[Trace] = []
        for trace in document.traces:
            if trace.trace_id in id_map:
                raise DuplicateTraceIdError(
                    f"Document {document.doc_id} has duplicate trace id {trace.trace_id!r}",
                    detail={"doc_id": document.doc_id, "trace_id": trace.trace_id},
                )
            new_trace = Trace(trace_id=str(next_trace), data=trace.data)
            next_trace += 1
            id_map[trace.trace_id] = new_trace.trace_id
            traces.append(new_trace)

        # The old -> new map is complete before any reference is rewritten.
        groups: list[TraceGroup] = []
        for group in document.groups:
            refs: list[str] = []
            for ref in group.trace_refs:
                new_ref = id_map.get(ref)
                if new_ref is None:
                    raise DanglingTraceReferenceError(
                        f"Group {group.group_id!r} in document {document.doc_id} "
                        f"references unknown trace {ref!r}",
                        detail={"doc_id": document.doc_id, "group_id": group.group_id, "trace_ref": ref},
                    )
                refs.append(new_ref)
            groups.append(
                TraceGroup(
                    group_id=str(next_group),
                    trace_refs=refs,
                    label=group.label,
                    href=group.href,
                )
            )
            next_group += 1

        self.trace_counter = next_trace
        self.group_counter = next_group
        return InkDocument(
            doc_id=document.doc_id,
            traces=traces,
            groups=groups,
        )


def unify_documents(documents: Iterable[InkDocument]) -> MergedInk:
    """
    Merge independently numbered documents into one id space.

    Documents are folded in ascending `doc_id` order regardless of the order
    they are given in, so identical input always yields identical ids.
    """

    ordered = sorted(documents, key=lambda d: d.doc_id)
    doc_ids = [d.doc_id for d in ordered]
    if len(set(doc_ids)) != len(doc_ids):
        raise DuplicateDocumentIdError(
            f"Duplicate document ids in merge: {doc_ids}",
            detail={"doc_ids": doc_ids},
        )

    session = TraceIdSession()
    traces: list[Trace] = []
    groups: list[TraceGroup] = []
    for document in ordered:
        folded = session.fold(document)
        traces.extend(folded.traces)
        groups.extend(folded.groups)

    logger.info(
        "Unified %d documents into %d traces and %d groups", len(ordered), len(traces), len(groups)
    )
    return MergedInk(source_doc_ids=doc_ids, traces=traces, groups=groups)
