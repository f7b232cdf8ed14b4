from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable

from .contracts import InkDocument, InkmlReadError, Trace, TraceGroup

logger = logging.getLogger(__name__)

INK_NS = "http://www.w3.org/2003/InkML"
XML_ID = "{http://www.w3.org/XML/1998/namespace}id"


def _local(tag: str) -> str:
    # "{namespace}trace" -> "trace"
    return tag.rsplit("}", 1)[-1]


def _element_id(el: ET.Element) -> str | None:
    return el.get(XML_ID) or el.get("id")


def _parse_group(el: ET.Element, position: int) -> TraceGroup | None:
    refs: list[str] = []
    label: str | None = None
    href: str | None = None
    for child in el:
        name = _local(child.tag)
        if name == "traceView":
            ref = child.get("traceDataRef")
            if ref is not None:
                refs.append(ref)
        elif name == "annotation" and child.get("type") == "truth" and label is None:
            label = (child.text or "").strip()
        elif name == "annotationXML" and href is None:
            href = child.get("href")

    # Segmentation wrappers only hold other groups.
    if not refs:
        return None
    return TraceGroup(
        group_id=_element_id(el) or str(position),
        trace_refs=refs,
        label=label,
        href=href,
    )


def parse_ink_document(root: ET.Element, *, doc_id: int) -> InkDocument:
    """
    Collect traces and trace groups from a parsed `<ink>` element.

    Traces and groups keep document order; nested groups are flattened.
    """

    traces: list[Trace] = []
    groups: list[TraceGroup] = []
    for el in root.iter():
        name = _local(el.tag)
        if name == "trace":
            trace_id = _element_id(el)
            if trace_id is None:
                raise InkmlReadError(f"Document {doc_id}: <trace> element without an id")
            traces.append(Trace(trace_id=trace_id, data=(el.text or "").strip()))
        elif name == "traceGroup":
            group = _parse_group(el, position=len(groups))
            if group is not None:
                groups.append(group)

    return InkDocument(doc_id=doc_id, traces=traces, groups=groups)


def read_ink_document(path: Path, *, doc_id: int) -> InkDocument:
    try:
        tree = ET.parse(path)
    except FileNotFoundError as e:
        raise InkmlReadError(f"InkML file not found: {path.name}") from e
    except ET.ParseError as e:
        raise InkmlReadError(f"Malformed InkML in {path.name}: {e}") from e

    document = parse_ink_document(tree.getroot(), doc_id=doc_id)
    logger.debug(
        "Read %s: %d traces, %d groups", path.name, len(document.traces), len(document.groups)
    )
    return document


def load_ink_documents(
    *, ink_dir: Path, doc_ids: Iterable[int], filename_template: str = "out{doc_id}.inkml"
) -> list[InkDocument]:
    """
    Read the recognized InkML of every distinct document id, ascending.
    """

    return [
        read_ink_document(ink_dir / filename_template.format(doc_id=doc_id), doc_id=doc_id)
        for doc_id in sorted(set(doc_ids))
    ]
