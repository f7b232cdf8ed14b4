from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from .contracts import MergedInk
from .reader import INK_NS, XML_ID

logger = logging.getLogger(__name__)

ET.register_namespace("", INK_NS)


def _q(name: str) -> str:
    return f"{{{INK_NS}}}{name}"


def build_merged_element(merged: MergedInk) -> ET.Element:
    root = ET.Element(_q("ink"))

    for trace in merged.traces:
        el = ET.SubElement(root, _q("trace"), {"id": trace.trace_id})
        el.text = trace.data

    segmentation = ET.SubElement(root, _q("traceGroup"))
    ET.SubElement(segmentation, _q("annotation"), {"type": "truth"}).text = "Segmentation"
    for group in merged.groups:
        group_el = ET.SubElement(segmentation, _q("traceGroup"), {XML_ID: group.group_id})
        if group.label is not None:
            ET.SubElement(group_el, _q("annotation"), {"type": "truth"}).text = group.label
        for ref in group.trace_refs:
            ET.SubElement(group_el, _q("traceView"), {"traceDataRef": ref})
        if group.href is not None:
            ET.SubElement(group_el, _q("annotationXML"), {"href": group.href})

    return root


def serialize_merged_inkml(merged: MergedInk) -> str:
    root = build_merged_element(merged)
    ET.indent(root)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root, encoding="unicode") + "\n"


def write_merged_inkml(*, merged: MergedInk, out_file: Path) -> Path:
    """
    Write the merged document as a single InkML file.
    """

    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_merged_inkml(merged), encoding="utf-8")
    logger.info("Wrote merged InkML for documents %s to %s", merged.source_doc_ids, out_file)
    return out_file
