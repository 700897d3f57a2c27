"""Tests for naming helpers."""

from __future__ import annotations

from codeprose.prose.naming import capitalize_first, humanize_name, kind_label, plural


def test_humanize_name() -> None:
    assert humanize_name("loginUser") == "login User"
    assert humanize_name("is_valid") == "is valid"
    assert humanize_name("kebab-case-name") == "kebab case name"
    assert humanize_name("  _private ") == "private"


def test_plural_and_labels() -> None:
    assert plural(1, "loop") == "1 loop"
    assert plural(2, "loop") == "2 loops"
    assert plural(3, "class") == "3 classes"
    assert plural(2, "property") == "2 properties"
    assert kind_label("control") == "control structure"
    assert kind_label("unknown") == "unknown"
    assert capitalize_first("foo bar") == "Foo bar"
