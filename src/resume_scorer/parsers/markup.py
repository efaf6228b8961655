"""Parse WordprocessingML into a plain attributed tree.

lxml does the actual parsing; the result is copied into ``MarkupNode`` objects
so downstream code deals with prefixed names (``w:p``, ``w:left``) and an
ordered child list where text nodes sit between elements exactly as written.
Whitespace is never stripped: run-level text concatenation decides where
word boundaries fall.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Union

from lxml import etree

from resume_scorer.exceptions import MarkupMalformedError

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

Child = Union["MarkupNode", str]


@dataclass
class MarkupNode:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Child] = field(default_factory=list)

    def elements(self) -> Iterator[MarkupNode]:
        for child in self.children:
            if isinstance(child, MarkupNode):
                yield child

    def find_children(self, tag: str) -> list[MarkupNode]:
        return [child for child in self.elements() if child.tag == tag]

    def find_child(self, tag: str) -> MarkupNode | None:
        for child in self.elements():
            if child.tag == tag:
                return child
        return None

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)

    def text(self) -> str:
        """Concatenation of this node's direct text children."""
        return "".join(child for child in self.children if isinstance(child, str))

    def iter_text(self) -> Iterator[str]:
        """All descendant text nodes in document order."""
        stack = [iter(self.children)]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
            elif isinstance(child, str):
                yield child
            else:
                stack.append(iter(child.children))


def _parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_blank_text=False,
        remove_comments=False,
        huge_tree=True,
    )


def _qualify(clark_name: str, nsmap: dict[str | None, str]) -> str:
    """Turn ``{uri}local`` into ``prefix:local`` using the element's nsmap."""
    qname = etree.QName(clark_name)
    if qname.namespace is None:
        return qname.localname
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    for prefix, uri in nsmap.items():
        if uri == qname.namespace and prefix:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _new_node(element: etree._Element) -> MarkupNode:
    nsmap = element.nsmap
    return MarkupNode(
        tag=_qualify(element.tag, nsmap),
        attributes={_qualify(name, nsmap): value for name, value in element.attrib.items()},
    )


def _convert(root: etree._Element) -> MarkupNode:
    # Explicit stack: nesting depth is bounded by libxml2, not the Python call stack
    tree = _new_node(root)
    pending = [(root, tree)]
    while pending:
        element, node = pending.pop()
        if element.text is not None:
            node.children.append(element.text)
        for child in element:
            # Comments and processing instructions carry no tag name; keep their tail text
            if isinstance(child.tag, str):
                child_node = _new_node(child)
                node.children.append(child_node)
                pending.append((child, child_node))
            if child.tail is not None:
                node.children.append(child.tail)
    return tree


def parse_markup(markup: str | bytes) -> MarkupNode:
    """Parse a markup document and return its root node.

    Raises:
        MarkupMalformedError: the input is empty or not well-formed.
    """
    data = markup.encode("utf-8") if isinstance(markup, str) else markup
    if not data.strip():
        raise MarkupMalformedError("Markup is empty")

    try:
        root = etree.fromstring(data, _parser())
    except etree.XMLSyntaxError as exc:
        snippet = data[:200].decode("utf-8", errors="replace")
        raise MarkupMalformedError(
            f"Malformed markup: {exc.msg}", line=exc.lineno, snippet=snippet
        ) from exc
    except ValueError as exc:
        raise MarkupMalformedError(f"Malformed markup: {exc}") from exc

    tree = _convert(root)
    logger.debug("Parsed markup root <%s>", tree.tag)
    return tree
