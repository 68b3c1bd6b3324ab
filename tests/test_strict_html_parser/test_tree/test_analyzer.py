"""Tests for structural analysis of parsed trees."""

import pytest

from strict_html_parser.grammar import parse_element
from strict_html_parser.shared.errors import TagMismatchError
from strict_html_parser.tree.analyzer import (
    AnalysisResult,
    StructureAnalyzer,
    analyze_children,
    analyze_tree,
)
from strict_html_parser.tree.nodes import (
    ElementWithChildren,
    EndTag,
    SelfClosingElement,
    StartTag,
    Text,
)


def tree(text: str):
    return parse_element(text)[1]


class TestAnalyzeTree:
    """Test the recursive start/end tag name check."""

    def test_matching_document(self) -> None:
        assert analyze_tree(tree("<div><h1>Title</h1><div/></div>")) is None

    def test_self_closing_always_passes(self) -> None:
        analyze_tree(tree("<n/>"))
        analyze_tree(tree("<n attr='v'/>"))

    @pytest.mark.parametrize("text", ["<DIV>x</div>", "<Div>x</dIV>", "<h1>x</H1>"])
    def test_names_compared_case_insensitively(self, text: str) -> None:
        analyze_tree(tree(text))

    def test_mismatch_names_both_tags(self) -> None:
        with pytest.raises(TagMismatchError) as exc_info:
            analyze_tree(tree("<div>This works as well!</other>"))
        error = exc_info.value
        assert error.start_name == "div"
        assert error.end_name == "other"
        assert str(error) == "Start and end tag are not equal. Start tag: div, end tag: other"

    def test_nested_mismatch(self) -> None:
        with pytest.raises(TagMismatchError) as exc_info:
            analyze_tree(tree("<a>text<b>x</c></a>"))
        assert (exc_info.value.start_name, exc_info.value.end_name) == ("b", "c")

    def test_first_mismatch_wins(self) -> None:
        with pytest.raises(TagMismatchError) as exc_info:
            analyze_tree(tree("<a><b></c><d></e></a>"))
        assert (exc_info.value.start_name, exc_info.value.end_name) == ("b", "c")

    def test_outer_mismatch_reported_before_children(self) -> None:
        with pytest.raises(TagMismatchError) as exc_info:
            analyze_tree(tree("<a><b></c></z>"))
        assert (exc_info.value.start_name, exc_info.value.end_name) == ("a", "z")

    def test_depth_first_order(self) -> None:
        with pytest.raises(TagMismatchError) as exc_info:
            analyze_tree(tree("<a><b><c></x></b><d></y></a>"))
        assert exc_info.value.end_name == "x"

    def test_analyze_children_ignores_text(self) -> None:
        analyze_children((Text("a"), SelfClosingElement(StartTag("b")), Text("c")))

    def test_non_element_rejected(self) -> None:
        with pytest.raises(TypeError):
            analyze_tree(Text("x"))


class TestStructureAnalyzer:
    """Test the analyzer wrapper reporting AnalysisResult."""

    def test_success_result(self) -> None:
        result = StructureAnalyzer().analyze(tree("<a><b/><c>x</c></a>"))
        assert isinstance(result, AnalysisResult)
        assert result.success is True
        assert result.message is None
        assert result.elements_checked == 3
        assert result.processing_time_ms >= 0

    def test_mismatch_result(self) -> None:
        element = ElementWithChildren(StartTag("div"), (Text("x"),), EndTag("other"))
        result = StructureAnalyzer(correlation_id="abc").analyze(element)
        assert result.success is False
        assert result.start_name == "div"
        assert result.end_name == "other"
        assert "Start tag: div, end tag: other" in result.message

    def test_to_dict(self) -> None:
        result = StructureAnalyzer().analyze(tree("<a>x</b>"))
        data = result.to_dict()
        assert data["success"] is False
        assert data["start_name"] == "a"
        assert data["end_name"] == "b"
        assert data["elements_checked"] == 1
