"""Annex IV XML document assembly."""

from annex_iv.serialization.xml_utils import escape_xml, tag, format_value, format_number
from annex_iv.serialization.builder import (
    XmlNode,
    XmlElement,
    XmlLeaf,
    XmlComment,
    element,
    node,
    comment,
    render_document,
)
from annex_iv.serialization.serializer import (
    serialize_annex_iv_to_xml,
    serialize_aggregate_annex_iv_to_xml,
    build_report_tree,
    reporting_period_labels,
    reporting_code,
)

__all__ = [
    # XML utilities
    "escape_xml",
    "tag",
    "format_value",
    "format_number",
    # Builder
    "XmlNode",
    "XmlElement",
    "XmlLeaf",
    "XmlComment",
    "element",
    "node",
    "comment",
    "render_document",
    # Serializer
    "serialize_annex_iv_to_xml",
    "serialize_aggregate_annex_iv_to_xml",
    "build_report_tree",
    "reporting_period_labels",
    "reporting_code",
]
