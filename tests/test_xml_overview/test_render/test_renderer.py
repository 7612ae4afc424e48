"""Tests for overview text rendering."""

from xml_overview.render import OverviewRenderer, render
from xml_overview.tokenization import scan
from xml_overview.tree import Graph, build_graph, minimize


def overview_of(text: str, **kwargs) -> str:
    graph = build_graph(scan(text))
    minimize(graph)
    return render(graph, **kwargs)


class TestElements:
    """Test element and attribute output."""

    def test_single_element(self) -> None:
        """Test the smallest document renders with the root wrapper."""
        assert overview_of("<x/>") == "<><x/></>"

    def test_empty_graph(self) -> None:
        """Test a childless root renders as a self-closed empty tag."""
        assert render(Graph()) == "</>"

    def test_attribute_values_are_blanked(self) -> None:
        """Test attributes are written as name="" in declared order."""
        assert overview_of('<a k="1" j="two">t</a>') == '<><a k="" j="">t</a></>'

    def test_element_with_children(self) -> None:
        """Test nested elements keep open and close tags."""
        assert overview_of("<a><b><c/></b></a>") == "<><a><b><c/></b></a></>"

    def test_empty_pair_becomes_self_closing(self) -> None:
        """Test an element without any children is self-closed."""
        assert overview_of("<a></a>") == "<><a/></>"

    def test_closing_tag_uses_open_name(self) -> None:
        """Test a mismatched closing tag is written with the element's name."""
        assert overview_of("<a>x</b>") == "<><a>x</a></>"

    def test_declaration(self) -> None:
        """Test an XML declaration renders as a self-closed element."""
        text = '<?xml version="1.0"?>\n<r><i/><i/></r>\n'
        assert overview_of(text) == '<><?xml version=""/>\n<r><i/></r>\n</>'


class TestLeaves:
    """Test text, whitespace, newline and comment output."""

    def test_text_is_verbatim(self) -> None:
        """Test text content is written unchanged."""
        assert overview_of("<a>one\ntwo &amp; three</a>") == "<><a>one\ntwo &amp; three</a></>"

    def test_each_whitespace_is_one_space(self) -> None:
        """Test tabs and spaces each become a single space."""
        assert overview_of("<a>\t <b/></a>") == "<><a>  <b/></a></>"

    def test_consecutive_newlines_collapse(self) -> None:
        """Test a newline is only written if the output does not end with one."""
        assert overview_of("<a>\n\n\n<b/>\n\n</a>") == "<><a>\n<b/>\n</a></>"

    def test_comments_dropped_by_default(self) -> None:
        """Test comments vanish but still make the element non-empty."""
        assert overview_of("<a><!-- note --></a>") == "<><a></a></>"

    def test_comments_kept_when_verbose(self) -> None:
        """Test verbose rendering keeps comments."""
        assert overview_of("<a><!-- note --></a>", verbose=True) == "<><a><!-- note --></a></>"

    def test_stray_attribute_tokens_are_hidden(self) -> None:
        """Test keys and values outside any tag never reach the output."""
        assert overview_of('x="secret"<a/>') == "<><a/></>"


class TestCollapsedSiblings:
    """Test output of minimized documents."""

    def test_collapsed_siblings_leave_their_layout(self) -> None:
        """Test indentation of dropped siblings remains."""
        text = "<r>\n  <i/>\n  <i/>\n</r>"
        assert overview_of(text) == "<><r>\n  <i/>\n  \n</r></>"

    def test_omitted_count_when_verbose(self) -> None:
        """Test representatives note how many siblings they absorbed."""
        assert (
            overview_of("<p><i/><i/></p>", verbose=True)
            == "<><p><i/><!-- 1 more <i> omitted --></p></>"
        )

    def test_omitted_count_after_closing_tag(self) -> None:
        """Test the note follows the representative's closing tag."""
        assert (
            overview_of("<p><i>a</i><i>b</i><i>c</i></p>", verbose=True)
            == "<><p><i>a</i><!-- 2 more <i> omitted --></p></>"
        )

    def test_omitted_count_hidden_by_default(self) -> None:
        """Test compact output has no annotations."""
        assert overview_of("<p><i/><i/></p>") == "<><p><i/></p></>"


class TestMaxDepth:
    """Test depth-limited rendering."""

    def test_depth_one(self) -> None:
        """Test top-level elements are self-closed at depth one."""
        assert overview_of("<a><b><c/></b></a>", max_depth=1) == "<><a/></>"

    def test_depth_two(self) -> None:
        """Test second-level elements are self-closed at depth two."""
        assert overview_of("<a><b><c/></b></a>", max_depth=2) == "<><a><b/></a></>"

    def test_depth_beyond_document(self) -> None:
        """Test a limit deeper than the document changes nothing."""
        assert overview_of("<a><b/></a>", max_depth=10) == "<><a><b/></a></>"

    def test_truncation_note_when_verbose(self) -> None:
        """Test verbose output says how many children were not shown."""
        assert (
            overview_of("<a><b/><c/></a>", max_depth=1, verbose=True)
            == "<><a/><!-- 2 child elements below depth 1 not shown --></>"
        )

    def test_truncation_note_singular(self) -> None:
        """Test a single hidden child is not pluralized."""
        assert (
            overview_of("<a><b><c/></b></a>", max_depth=1, verbose=True)
            == "<><a/><!-- 1 child element below depth 1 not shown --></>"
        )

    def test_no_truncation_note_for_text_only_elements(self) -> None:
        """Test hiding only text content does not add a note."""
        assert overview_of("<a><b>text</b></a>", max_depth=2, verbose=True) == "<><a><b/></a></>"


class TestOverviewRenderer:
    """Test renderer instances."""

    def test_renderer_is_reusable(self) -> None:
        """Test one renderer can render several graphs."""
        renderer = OverviewRenderer(correlation_id="test-123")
        assert renderer.render(build_graph(scan("<a/>"))) == "<><a/></>"
        assert renderer.render(build_graph(scan("<b/>"))) == "<><b/></>"

    def test_deep_nesting(self) -> None:
        """Test deep documents render without recursion."""
        depth = 5000
        rendered = overview_of("<n>" * depth + "</n>" * depth)

        assert rendered.startswith("<><n><n>")
        assert rendered.count("<n>") == depth - 1
        assert rendered.count("<n/>") == 1
        assert rendered.count("</n>") == depth - 1
