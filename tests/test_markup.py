"""Tests for the markup parser."""

import pytest

from resume_scorer.exceptions import MarkupError, MarkupMalformedError
from resume_scorer.parsers.markup import MarkupNode, parse_markup

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def _doc(body: str) -> str:
    return f'<w:document xmlns:w="{W_NS}"><w:body>{body}</w:body></w:document>'


class TestParseMarkup:
    def test_qualified_tag_names(self):
        tree = parse_markup(_doc("<w:p/>"))
        assert tree.tag == "w:document"
        body = tree.find_child("w:body")
        assert body is not None
        assert [child.tag for child in body.elements()] == ["w:p"]

    def test_qualified_attribute_names(self):
        tree = parse_markup(_doc('<w:p><w:pPr><w:ind w:left="720" w:hanging="360"/></w:pPr></w:p>'))
        ind = tree.find_child("w:body").find_child("w:p").find_child("w:pPr").find_child("w:ind")
        assert ind.attributes == {"w:left": "720", "w:hanging": "360"}
        assert ind.get("w:left") == "720"
        assert ind.get("w:right") is None

    def test_attribute_order_preserved(self):
        tree = parse_markup('<root z="1" a="2" m="3"/>')
        assert list(tree.attributes) == ["z", "a", "m"]

    def test_xml_namespace_attribute(self):
        tree = parse_markup(_doc('<w:p><w:r><w:t xml:space="preserve"> x </w:t></w:r></w:p>'))
        t = tree.find_child("w:body").find_child("w:p").find_child("w:r").find_child("w:t")
        assert t.get("xml:space") == "preserve"

    def test_whitespace_is_not_trimmed(self):
        tree = parse_markup(_doc('<w:p><w:r><w:t xml:space="preserve">  Built  APIs </w:t></w:r></w:p>'))
        t = tree.find_child("w:body").find_child("w:p").find_child("w:r").find_child("w:t")
        assert t.text() == "  Built  APIs "

    def test_mixed_content_order(self):
        tree = parse_markup("<a>x<b/>y<c>inner</c>z</a>")
        kinds = [c if isinstance(c, str) else c.tag for c in tree.children]
        assert kinds == ["x", "b", "y", "c", "z"]
        assert "".join(tree.iter_text()) == "xyinnerz"
        assert tree.text() == "xyz"

    def test_whitespace_only_text_nodes_kept(self):
        tree = parse_markup("<a>\n  <b/>\n</a>")
        assert tree.children[0] == "\n  "
        assert isinstance(tree.children[1], MarkupNode)
        assert tree.children[2] == "\n"

    def test_sibling_order(self):
        tree = parse_markup(_doc("<w:p>1</w:p><w:tbl/><w:p>2</w:p><w:p>3</w:p>"))
        body = tree.find_child("w:body")
        assert [c.tag for c in body.elements()] == ["w:p", "w:tbl", "w:p", "w:p"]
        assert [p.text() for p in body.find_children("w:p")] == ["1", "2", "3"]

    def test_comment_skipped_but_tail_kept(self):
        tree = parse_markup("<a>x<!-- note -->y</a>")
        assert tree.children == ["x", "y"]

    def test_accepts_bytes_with_declaration(self):
        data = b'<?xml version="1.0" encoding="UTF-8"?><root>caf\xc3\xa9</root>'
        assert parse_markup(data).text() == "café"

    def test_accepts_str_with_declaration(self):
        tree = parse_markup('<?xml version="1.0" encoding="UTF-8" standalone="yes"?><root>ok</root>')
        assert tree.text() == "ok"

    def test_deep_nesting(self):
        depth = 1500
        tree = parse_markup("<a>" * depth + "x" + "</a>" * depth)
        node, levels = tree, 1
        while node.find_child("a") is not None:
            node = node.find_child("a")
            levels += 1
        assert levels == depth
        assert node.text() == "x"
        assert list(tree.iter_text()) == ["x"]

    def test_iter_text_document_order(self):
        tree = parse_markup("<a>1<b>2<c>3</c>4</b>5<d>6</d></a>")
        assert "".join(tree.iter_text()) == "123456"


class TestMalformedMarkup:
    def test_unclosed_tag(self):
        with pytest.raises(MarkupMalformedError):
            parse_markup(_doc("<w:p>"))

    def test_empty_input(self):
        with pytest.raises(MarkupMalformedError, match="empty"):
            parse_markup("   ")

    def test_plain_text(self):
        with pytest.raises(MarkupError):
            parse_markup("not markup at all")

    def test_error_carries_line(self):
        with pytest.raises(MarkupMalformedError) as exc_info:
            parse_markup("<a>\n<b>\n</a>")
        assert exc_info.value.line is not None
