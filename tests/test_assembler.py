"""Tests for drafthtml.assembler module."""
from typing import Any

import pytest

from drafthtml.assembler import Assembler, apply_ranges
from drafthtml.chunk_transform import ChunkTransformer
from drafthtml.default_rules import default_resolver
from drafthtml.errors import MalformedRangeError, UnresolvedEntityError, UnresolvedStyleError
from drafthtml.html_utils import is_well_nested, visible_text
from drafthtml.range_types import ChunkSpan, Entity, EntityRange, StyleRange
from drafthtml.tag_resolver import TagResolver

LINK_X = {"0": Entity("LINK", "MUTABLE", {"url": "http://x"})}
BOLD = '<span style="font-weight: bold;">'
ITALIC = '<span style="font-style: italic;">'


def _render(text: str, styles: list[Any], entities: list[Any], entity_map: Any = None, **kwargs: Any) -> str:
    return apply_ranges(
        text, styles, entities, entity_map or {}, None,
        resolver=kwargs.pop("resolver", default_resolver()),
        **kwargs,
    )


class TestNoRanges:
    def test_text_returned_verbatim(self) -> None:
        for text in ["", "Hello", "a < b & c", "ünïcödé"]:
            assert _render(text, [], []) == text


class TestStyles:
    def test_single_style(self) -> None:
        out = _render("Hello", [StyleRange(0, 5, "BOLD")], [])
        assert out == '<span style="font-weight: bold;">Hello</span>'

    def test_overlapping_styles_split(self) -> None:
        out = _render("abcdef", [StyleRange(0, 4, "BOLD"), StyleRange(2, 4, "ITALIC")], [])
        assert out == (
            f"{BOLD}ab</span>"
            '<span style="font-weight: bold; font-style: italic;">cd</span>'
            f"{ITALIC}ef</span>"
        )

    def test_uncovered_text_passes_through(self) -> None:
        out = _render("hello world", [StyleRange(6, 5, "BOLD")], [])
        assert out == f"hello {BOLD}world</span>"

    def test_gap_between_styles_gets_no_span(self) -> None:
        out = _render("ab--cd", [StyleRange(0, 2, "BOLD"), StyleRange(4, 2, "ITALIC")], [])
        assert out == f"{BOLD}ab</span>--{ITALIC}cd</span>"

    def test_unicode_offsets_are_code_points(self) -> None:
        out = _render("héllo wörld", [StyleRange(6, 5, "BOLD")], [])
        assert out == f"héllo {BOLD}wörld</span>"

    def test_context_reaches_style_rule(self) -> None:
        resolver = TagResolver({"COLOR": lambda style, ctx: f"color: {ctx['color']};"}, {})
        out = apply_ranges("hi", [StyleRange(0, 2, "COLOR")], [], {}, {"color": "red"}, resolver=resolver)
        assert out == '<span style="color: red;">hi</span>'


class TestEntities:
    def test_style_nested_inside_entity(self) -> None:
        out = _render("ab cd", [StyleRange(0, 2, "BOLD")], [EntityRange(0, 5, "0")], LINK_X)
        assert out == f'<a href="http://x">{BOLD}ab</span> cd</a>'

    def test_entity_and_style_same_span(self) -> None:
        out = _render("abc", [StyleRange(0, 3, "ITALIC")], [EntityRange(0, 3, "0")], LINK_X)
        assert out == f'<a href="http://x">{ITALIC}abc</span></a>'
        assert is_well_nested(out)

    def test_shared_finish_closes_latest_first(self) -> None:
        entity_map = {
            "0": Entity("LINK", data={"url": "http://a"}),
            "1": Entity("LINK", data={"url": "http://b"}),
        }
        out = _render("click here", [], [EntityRange(0, 10, "0"), EntityRange(6, 4, "1")], entity_map)
        assert out == '<a href="http://a">click <a href="http://b">here</a></a>'

    def test_shared_start_first_declared_outermost(self) -> None:
        resolver = default_resolver(extra_entities={"MENTION": lambda e, c: ("<b>", "</b>")})
        entity_map = {**LINK_X, "1": Entity("MENTION")}
        out = _render("abcd", [], [EntityRange(0, 4, "0"), EntityRange(0, 4, "1")], entity_map, resolver=resolver)
        assert out == '<a href="http://x"><b>abcd</b></a>'

    def test_raw_dict_input(self) -> None:
        out = _render(
            "ab cd",
            [{"offset": 0, "length": 2, "style": "BOLD"}],
            [{"offset": 0, "length": 5, "key": 0}],
            {0: {"type": "LINK", "mutability": "MUTABLE", "data": {"url": "http://x"}}},
        )
        assert out == f'<a href="http://x">{BOLD}ab</span> cd</a>'

    def test_zero_length_entity_emits_nothing(self) -> None:
        out = _render("abcdef", [StyleRange(0, 6, "BOLD")], [EntityRange(3, 0, "0")], LINK_X)
        assert out == f"{BOLD}abc</span>{BOLD}def</span>"
        assert visible_text(out) == "abcdef"


class TestContentTransform:
    def test_transform_shifts_later_segments(self) -> None:
        transformer = ChunkTransformer({"LINK": lambda content, span, ctx: f"[{content}]"})
        out = _render(
            "ab cd", [StyleRange(0, 2, "BOLD")], [EntityRange(0, 5, "0")], LINK_X,
            transformer=transformer,
        )
        assert out == f'<a href="http://x">{BOLD}[ab]</span>[ cd]</a>'

    def test_chunk_spans_relative_to_entity(self) -> None:
        spans: list[ChunkSpan] = []

        def record(content: str, span: ChunkSpan, ctx: object) -> None:
            spans.append(span)
            return None

        _render(
            "xab cd", [StyleRange(1, 2, "BOLD")], [EntityRange(1, 5, "0")], LINK_X,
            transformer=ChunkTransformer({"LINK": record}),
        )
        assert spans == [ChunkSpan(0, 2, 5), ChunkSpan(2, 5, 5)]

    def test_unmatched_rule_leaves_content(self) -> None:
        transformer = ChunkTransformer({"LINK": lambda content, span, ctx: None})
        plain = _render("ab cd", [StyleRange(0, 2, "BOLD")], [EntityRange(0, 5, "0")], LINK_X)
        out = _render(
            "ab cd", [StyleRange(0, 2, "BOLD")], [EntityRange(0, 5, "0")], LINK_X,
            transformer=transformer,
        )
        assert out == plain

    def test_multiple_entities_applied_in_order(self) -> None:
        resolver = default_resolver(extra_entities={"MENTION": lambda e, c: ("<b>", "</b>")})
        transformer = ChunkTransformer({
            "LINK": lambda content, span, ctx: content + "1",
            "MENTION": lambda content, span, ctx: content + "2",
        })
        entity_map = {**LINK_X, "1": Entity("MENTION")}
        out = _render(
            "abcd", [], [EntityRange(0, 4, "0"), EntityRange(0, 4, "1")], entity_map,
            resolver=resolver, transformer=transformer,
        )
        assert out == '<a href="http://x"><b>abcd12</b></a>'

    def test_partial_overlap_not_transformed(self) -> None:
        transformer = ChunkTransformer({"LINK": lambda content, span, ctx: content.upper()})
        out = _render(
            "abcdef", [StyleRange(0, 4, "BOLD")], [EntityRange(2, 4, "0")], LINK_X,
            transformer=transformer,
        )
        # [0, 2) lies outside the link and keeps its case
        assert out == f'{BOLD}ab</span><a href="http://x">{BOLD}CD</span>EF</a>'


class TestErrors:
    def test_unresolved_style(self) -> None:
        with pytest.raises(UnresolvedStyleError):
            _render("Hello", [StyleRange(0, 5, "BLINK")], [])

    def test_unresolved_entity_type(self) -> None:
        with pytest.raises(UnresolvedEntityError):
            _render("Hello", [], [EntityRange(0, 5, "0")], {"0": Entity("IMAGE")})

    def test_missing_entity_key(self) -> None:
        with pytest.raises(UnresolvedEntityError):
            _render("Hello", [], [EntityRange(0, 5, "7")], LINK_X)

    def test_range_past_end(self) -> None:
        with pytest.raises(MalformedRangeError):
            _render("Hello", [StyleRange(3, 5, "BOLD")], [])

    def test_raw_negative_length(self) -> None:
        with pytest.raises(MalformedRangeError):
            _render("Hello", [{"offset": 2, "length": -1, "style": "BOLD"}], [])


class TestAssembler:
    def test_reusable_across_calls(self) -> None:
        assembler = Assembler(default_resolver())
        assert assembler.apply_ranges("ab", [StyleRange(0, 2, "BOLD")], [], {}) == f"{BOLD}ab</span>"
        assert assembler.apply_ranges("cd", [], [], {}) == "cd"

    def test_output_preserves_visible_text(self) -> None:
        out = Assembler(default_resolver()).apply_ranges(
            "The quick brown fox",
            [StyleRange(0, 9, "BOLD"), StyleRange(4, 11, "ITALIC"), StyleRange(10, 9, "UNDERLINE")],
            [EntityRange(4, 5, "0")],
            LINK_X,
        )
        assert visible_text(out) == "The quick brown fox"
        assert is_well_nested(out)
