"""Composable XML element tree.

Documents are assembled as a tree of nodes and rendered in one pass, so the
element order is fixed by the tree and not by string concatenation. ``None``
children are dropped, which lets optional sections be written inline as
``node(...) if condition else None``.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from annex_iv.serialization.xml_utils import escape_xml, format_attrs, format_value, tag

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


class XmlNode:
    """Base class for renderable nodes."""

    def render(self, depth: int, indent: str) -> list[str]:
        raise NotImplementedError


@dataclass
class XmlLeaf(XmlNode):
    """Element holding a scalar value, rendered on one line."""

    name: str
    value: Any = None
    attrs: dict = field(default_factory=dict)

    def render(self, depth: int, indent: str) -> list[str]:
        return [f"{indent * depth}{tag(self.name, self.value, self.attrs)}"]


def comment_text(text: str) -> str:
    """Make text safe inside a comment: no ``--`` and no trailing ``-``."""
    while "--" in text:
        text = text.replace("--", "- -")
    if text.endswith("-"):
        text += " "
    return text


@dataclass
class XmlComment(XmlNode):
    """Comment line."""

    text: str

    def render(self, depth: int, indent: str) -> list[str]:
        return [f"{indent * depth}<!-- {comment_text(self.text)} -->"]


@dataclass
class XmlElement(XmlNode):
    """Element with child nodes; always rendered as an open/close pair."""

    name: str
    children: list[XmlNode] = field(default_factory=list)
    attrs: dict = field(default_factory=dict)
    attrs_on_separate_lines: bool = False

    def add(self, *children: "Child") -> "XmlElement":
        self.children.extend(_flatten(children))
        return self

    def _open_tag(self, depth: int, indent: str) -> list[str]:
        prefix = indent * depth
        if not self.attrs_on_separate_lines or not self.attrs:
            return [f"{prefix}<{self.name}{format_attrs(self.attrs)}>"]
        lines = [f"{prefix}<{self.name}"]
        items = list(self.attrs.items())
        for i, (key, val) in enumerate(items):
            closing = ">" if i == len(items) - 1 else ""
            lines.append(
                f'{prefix}{indent}{key}="{escape_xml(format_value(val))}"{closing}'
            )
        return lines

    def render(self, depth: int, indent: str) -> list[str]:
        lines = self._open_tag(depth, indent)
        for child in self.children:
            lines.extend(child.render(depth + 1, indent))
        lines.append(f"{indent * depth}</{self.name}>")
        return lines


Child = Union[XmlNode, None, Iterable[Optional[XmlNode]]]


def _flatten(children: Iterable[Child]) -> list[XmlNode]:
    flat: list[XmlNode] = []
    for child in children:
        if child is None:
            continue
        if isinstance(child, XmlNode):
            flat.append(child)
        else:
            flat.extend(c for c in child if c is not None)
    return flat


def element(name: str, value: Any, attrs: Optional[dict] = None) -> XmlLeaf:
    """Build a scalar element; ``None`` renders self-closing."""
    return XmlLeaf(name, value, dict(attrs or {}))


def node(name: str, *children: Child, attrs: Optional[dict] = None) -> XmlElement:
    """Build a container element, dropping ``None`` children."""
    return XmlElement(name, _flatten(children), dict(attrs or {}))


def comment(text: str) -> XmlComment:
    return XmlComment(text)


def render_document(root: XmlElement, indent: str = "  ") -> str:
    """Render a complete document with its XML declaration.

    The output has no trailing newline.
    """
    return "\n".join([XML_DECLARATION] + root.render(0, indent))
