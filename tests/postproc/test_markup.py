"""Tests for prose markup parsing."""

from __future__ import annotations

from codeprose.postproc.markup import ANNOTATION, FILE_REF, SYMBOL, TEXT, ProseSegment, parse_prose


def test_paragraphs_split_on_blank_lines() -> None:
    paragraphs = parse_prose("First part.\n\n\nSecond part.\n", [])

    assert paragraphs == [
        [ProseSegment(kind=TEXT, text="First part.")],
        [ProseSegment(kind=TEXT, text="Second part.")],
    ]


def test_annotations_and_file_references() -> None:
    text = "It [[reads the config||load(path)]] using @src/config.ts and @missing.ts."

    (paragraph,) = parse_prose(text, ["src/config.ts"])

    assert paragraph == [
        ProseSegment(kind=TEXT, text="It "),
        ProseSegment(kind=ANNOTATION, text="reads the config", code="load(path)"),
        ProseSegment(kind=TEXT, text=" using "),
        ProseSegment(kind=FILE_REF, text="@src/config.ts", path="src/config.ts"),
        ProseSegment(kind=TEXT, text=" and "),
        ProseSegment(kind=TEXT, text="@missing.ts"),
        ProseSegment(kind=TEXT, text="."),
    ]


def test_annotation_with_empty_code_is_plain_text() -> None:
    (paragraph,) = parse_prose("A [[loose phrase|| ]] here", [])

    assert [segment.kind for segment in paragraph] == [TEXT, TEXT, TEXT]
    assert paragraph[1].text == "loose phrase"


def test_annotation_code_may_span_lines() -> None:
    (paragraph,) = parse_prose("See [[the loop||for x in y:\n    go(x)]].", [])

    assert paragraph[1].code == "for x in y:\n    go(x)"


def test_symbols_prefer_longest_name_and_skip_short_ones() -> None:
    symbols = {"load": "def load(): ...", "loadAll": "def loadAll(): ...", "id": "id = 1"}

    (paragraph,) = parse_prose("Calls loadAll, then load with id.", [], symbols)

    assert paragraph == [
        ProseSegment(kind=TEXT, text="Calls "),
        ProseSegment(kind=SYMBOL, text="loadAll", code="def loadAll(): ..."),
        ProseSegment(kind=TEXT, text=", then "),
        ProseSegment(kind=SYMBOL, text="load", code="def load(): ..."),
        ProseSegment(kind=TEXT, text=" with id."),
    ]


def test_symbols_are_not_matched_inside_annotations() -> None:
    (paragraph,) = parse_prose("[[loads users||load()]]", [], {"load": "def load(): ..."})

    assert paragraph == [ProseSegment(kind=ANNOTATION, text="loads users", code="load()")]
