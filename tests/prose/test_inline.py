"""Tests for statement-level inline notes."""

from __future__ import annotations

from codeprose.analyzers.structure import extract_structure
from codeprose.prose.inline import inline_notes, note_for

from tests._fixtures.samples import class_tree
from tests._fixtures.tree_builder import T, build_tree


def test_method_body_statements_get_notes() -> None:
    tree = class_tree()
    load = extract_structure(tree).declarations[0].children[1]

    notes = inline_notes(load, tree)

    assert [note.text for note in notes] == [
        "Check whether id > 0",
        "Repeat while a condition holds",
    ]
    assert tree.text[notes[0].start : notes[0].end].startswith("if (id > 0)")


def test_notes_for_statement_shapes() -> None:
    source = (
        "return computeTotal(items);\n"
        "await api.saveUser(user);\n"
        "const answer = 42;\n"
        "try { x(); } catch (e) {}\n"
        "switch (mode) {}\n"
        "x;"
    )
    tree = build_tree(
        source,
        "javascript",
        T("return_statement", "return computeTotal(items);"),
        T("expression_statement", "await api.saveUser(user);"),
        T("lexical_declaration", "const answer = 42;"),
        T("try_statement", "try { x(); } catch (e) {}"),
        T("switch_statement", "switch (mode) {}"),
        T("expression_statement", "x;"),
    )

    texts = [note_for(node, tree) for node in tree.root.children]

    assert [note.text if note else None for note in texts] == [
        "Send back computeTotal(items);",
        "Call api.save User",
        "Set up: const answer = 42;",
        "Try something that might fail",
        "Check multiple possible values",
        None,
    ]


def test_condition_without_parentheses_uses_text_fallback() -> None:
    source = "if count > 3:\n    pass"
    tree = build_tree(source, "python", T("if_statement", source), root_tag="module")

    note = note_for(tree.root.children[0], tree)

    assert note is not None and note.text == "Check whether count > 3"


def test_declarations_without_body_have_no_notes() -> None:
    source = "const a = 1;"
    tree = build_tree(
        source,
        "javascript",
        T(
            "lexical_declaration",
            source,
            T("variable_declarator", "a = 1", T("identifier", "a")),
        ),
    )
    declaration = extract_structure(tree).declarations[0]

    assert inline_notes(declaration, tree) == []


RUST_SOURCE = (
    "fn run(items: Vec<u8>) -> u8 { if items.is_empty() { return 0; } "
    "for i in items { go(i); } while ready() { tick(); } return 1; }"
)


def _rust_call(call: str) -> T:
    name = call.split("(")[0]
    return T(
        "expression_statement",
        f"{call};",
        T("call_expression", call, T("identifier", name), T("arguments", call[len(name) :])),
        T(";", ";"),
    )


def rust_tree():
    body = RUST_SOURCE[RUST_SOURCE.index("{") :]
    if_text = "if items.is_empty() { return 0; }"
    for_text = "for i in items { go(i); }"
    while_text = "while ready() { tick(); }"
    return build_tree(
        RUST_SOURCE,
        "rust",
        T(
            "function_item",
            RUST_SOURCE,
            T("fn", "fn"),
            T("identifier", "run"),
            T(
                "parameters",
                "(items: Vec<u8>)",
                T("(", "("),
                T(
                    "parameter",
                    "items: Vec<u8>",
                    T("identifier", "items"),
                    T(":", ":"),
                    T("generic_type", "Vec<u8>"),
                ),
                T(")", ")"),
            ),
            T("->", "->"),
            T("primitive_type", "u8"),
            T(
                "block",
                body,
                T("{", "{"),
                T(
                    "expression_statement",
                    if_text,
                    T(
                        "if_expression",
                        if_text,
                        T("if", "if"),
                        T(
                            "call_expression",
                            "items.is_empty()",
                            T("field_expression", "items.is_empty"),
                            T("arguments", "()"),
                        ),
                        T(
                            "block",
                            "{ return 0; }",
                            T("{", "{"),
                            T(
                                "expression_statement",
                                "return 0;",
                                T("return_expression", "return 0"),
                                T(";", ";"),
                            ),
                            T("}", "}"),
                        ),
                    ),
                ),
                T(
                    "expression_statement",
                    for_text,
                    T(
                        "for_expression",
                        for_text,
                        T("for", "for"),
                        T("identifier", "i"),
                        T("in", "in"),
                        T("identifier", "items"),
                        T("block", "{ go(i); }", T("{", "{"), _rust_call("go(i)"), T("}", "}")),
                    ),
                ),
                T(
                    "expression_statement",
                    while_text,
                    T(
                        "while_expression",
                        while_text,
                        T("while", "while"),
                        T("call_expression", "ready()", T("identifier", "ready"), T("arguments", "()")),
                        T("block", "{ tick(); }", T("{", "{"), _rust_call("tick()"), T("}", "}")),
                    ),
                ),
                T(
                    "expression_statement",
                    "return 1;",
                    T("return_expression", "return 1"),
                    T(";", ";"),
                ),
                T("}", "}"),
            ),
        ),
        root_tag="source_file",
    )


def test_rust_statements_are_seen_through_expression_statements() -> None:
    tree = rust_tree()
    run = extract_structure(tree).declarations[0]

    assert run.name == "run"
    assert [child.keyword for child in run.children] == [
        "if_expression",
        "for_expression",
        "while_expression",
    ]
    assert [note.text for note in inline_notes(run, tree)] == [
        "Check whether items.is_empty()",
        "Loop through items",
        "Repeat while a condition holds",
        "Send back 1",
    ]


def test_plain_call_statement_still_captions_the_call() -> None:
    source = "foo();"
    tree = build_tree(
        source,
        "javascript",
        T(
            "expression_statement",
            source,
            T("call_expression", "foo()", T("identifier", "foo"), T("arguments", "()")),
            T(";", ";"),
        ),
    )

    note = note_for(tree.root.children[0], tree)

    assert note is not None
    assert note.text == "Call foo"
    assert (note.start, note.end) == (0, len(source))
