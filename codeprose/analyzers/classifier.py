"""Grammar tag tables and the tag -> kind / concept lookups built on them."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from ..models import CLASS, CONTROL, EXPORT, FUNCTION, IMPORT, TYPE, VARIABLE
from ..syntax.languages import DEFAULT_LANGUAGE


@dataclass(frozen=True)
class TagTable:
    """Grammar tags grouped by declaration kind for one language."""

    functions: Tuple[str, ...]
    classes: Tuple[str, ...]
    imports: Tuple[str, ...]
    exports: Tuple[str, ...]
    types: Tuple[str, ...]
    variables: Tuple[str, ...]
    names: Tuple[str, ...] = ("identifier",)
    type_tags: Tuple[str, ...] = ()
    wrappers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TemplateTable:
    """Tags of a markup template grammar that embeds a script grammar."""

    blocks: Mapping[str, str]
    components: Tuple[str, ...]
    component_names: Tuple[str, ...]
    script_containers: Tuple[str, ...]
    script_language: str


_JS = TagTable(
    functions=(
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "arrow_function",
        "method_definition",
    ),
    classes=("class_declaration", "abstract_class_declaration"),
    imports=("import_statement",),
    exports=("export_statement",),
    types=("type_alias_declaration", "interface_declaration", "enum_declaration"),
    variables=(
        "lexical_declaration",
        "variable_declaration",
        "public_field_definition",
        "field_definition",
    ),
    names=("identifier", "property_identifier"),
    wrappers=("ambient_declaration",),
)

_PYTHON = TagTable(
    functions=("function_definition",),
    classes=("class_definition",),
    imports=("import_statement", "import_from_statement", "future_import_statement"),
    exports=(),
    types=("type_alias_statement",),
    variables=("assignment",),
    names=("identifier",),
    type_tags=("type",),
    wrappers=("decorated_definition", "expression_statement"),
)

_RUST = TagTable(
    functions=("function_item", "function_signature_item"),
    classes=("struct_item", "enum_item", "trait_item", "impl_item", "union_item"),
    imports=("use_declaration", "extern_crate_declaration"),
    exports=(),
    types=("type_item",),
    variables=("let_declaration", "const_item", "static_item", "field_declaration"),
    names=("identifier", "field_identifier"),
    type_tags=(
        "primitive_type",
        "type_identifier",
        "generic_type",
        "reference_type",
        "scoped_type_identifier",
        "array_type",
        "tuple_type",
        "unit_type",
        "pointer_type",
        "function_type",
        "dynamic_type",
        "abstract_type",
    ),
    wrappers=("expression_statement",),
)

LANGUAGE_TABLES: Mapping[str, TagTable] = MappingProxyType(
    {
        "javascript": _JS,
        "typescript": _JS,
        "tsx": _JS,
        "python": _PYTHON,
        "rust": _RUST,
    }
)

TEMPLATE_TABLES: Mapping[str, TemplateTable] = MappingProxyType(
    {
        "svelte": TemplateTable(
            blocks=MappingProxyType(
                {
                    "if_statement": "if",
                    "each_statement": "each",
                    "await_statement": "await",
                    "key_statement": "key",
                }
            ),
            components=("start_tag", "self_closing_tag"),
            component_names=("tag_name",),
            script_containers=("script_element",),
            script_language="typescript",
        ),
    }
)

LOOP_TAGS: FrozenSet[str] = frozenset(
    {
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
        "for_expression",
        "while_expression",
        "loop_expression",
    }
)
CONDITION_TAGS: FrozenSet[str] = frozenset(
    {
        "if_statement",
        "switch_statement",
        "try_statement",
        "match_statement",
        "if_expression",
        "match_expression",
    }
)
CONTROL_TAGS: FrozenSet[str] = LOOP_TAGS | CONDITION_TAGS
RETURN_TAGS: FrozenSet[str] = frozenset({"return_statement", "return_expression"})
CALL_TAGS: FrozenSet[str] = frozenset({"call_expression", "new_expression", "call", "macro_invocation"})
FUNCTION_TAGS: FrozenSet[str] = frozenset(
    tag for table in LANGUAGE_TABLES.values() for tag in table.functions
)

# Shared structural tags, tried after the language-specific ones.
SHARED_NAME_TAGS: Tuple[str, ...] = ("identifier", "property_identifier", "field_identifier", "name")
DECLARATOR_TAGS: Tuple[str, ...] = ("variable_declarator",)
TYPE_IDENTIFIER_TAGS: Tuple[str, ...] = ("type_identifier",)
TYPE_ANNOTATION_TAGS: Tuple[str, ...] = ("type_annotation",)
PARAM_LIST_TAGS: Tuple[str, ...] = ("formal_parameters", "parameters", "lambda_parameters", "closure_parameters")
PARAM_SKIP_TAGS: FrozenSet[str] = frozenset(
    {"(", ")", ",", "...", "|", "comment", "keyword_separator", "positional_separator"}
)
BODY_TAGS: Tuple[str, ...] = (
    "statement_block",
    "block",
    "class_body",
    "declaration_list",
    "field_declaration_list",
    "enum_body",
    "enum_variant_list",
)
EXPORT_TOKEN = "export"


def table_for(language: str) -> TagTable:
    """Return the tag table for ``language``; unknown ids use the JavaScript table."""
    return LANGUAGE_TABLES.get(language) or LANGUAGE_TABLES[DEFAULT_LANGUAGE]


def template_table_for(language: str) -> Optional[TemplateTable]:
    return TEMPLATE_TABLES.get(language)


def classify(tag: str, language: str) -> Optional[str]:
    """Map a grammar tag to a declaration kind, or ``None`` when unrecognised."""
    table = table_for(language)
    if tag in table.functions:
        return FUNCTION
    if tag in table.classes:
        return CLASS
    if tag in table.imports:
        return IMPORT
    if tag in table.exports:
        return EXPORT
    if tag in table.types:
        return TYPE
    if tag in table.variables:
        return VARIABLE
    if tag in CONTROL_TAGS:
        return CONTROL
    return None


def is_export_wrapper(tag: str, language: str) -> bool:
    return tag in table_for(language).exports


def is_wrapper(tag: str, language: str) -> bool:
    return tag in table_for(language).wrappers


# --- Concept categories -------------------------------------------------

DECLARATION = "declaration"
IMPORT_EXPORT = "import-export"
CONTROL_FLOW = "control-flow"
CONTROL_JUMP = "control-jump"
INVOCATION = "invocation"
DATA_LITERAL = "data-literal"
PARAMETER = "parameter"
ASYNC = "async"
TEMPLATE_MARKUP = "template-markup"

CONCEPT_CATEGORIES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        DECLARATION: (
            # JavaScript / TypeScript
            "lexical_declaration",
            "variable_declaration",
            "function_declaration",
            "generator_function_declaration",
            "class_declaration",
            "abstract_class_declaration",
            "type_alias_declaration",
            "interface_declaration",
            "enum_declaration",
            # Python
            "function_definition",
            "class_definition",
            "decorated_definition",
            # Rust
            "let_declaration",
            "function_item",
            "struct_item",
            "enum_item",
            "trait_item",
            "impl_item",
            "type_item",
            "const_item",
            "static_item",
            "union_item",
            "mod_item",
        ),
        IMPORT_EXPORT: (
            "import_statement",
            "export_statement",
            "import_from_statement",
            "future_import_statement",
            "use_declaration",
            "extern_crate_declaration",
        ),
        CONTROL_FLOW: tuple(sorted(CONTROL_TAGS)),
        CONTROL_JUMP: (
            "return_statement",
            "throw_statement",
            "break_statement",
            "continue_statement",
            "raise_statement",
            "return_expression",
            "break_expression",
            "continue_expression",
        ),
        INVOCATION: ("call_expression", "new_expression", "call", "macro_invocation"),
        DATA_LITERAL: (
            "string",
            "template_string",
            "number",
            "true",
            "false",
            "regex",
            "array",
            "object",
            "integer",
            "float",
            "list",
            "dictionary",
            "string_literal",
            "raw_string_literal",
            "char_literal",
            "integer_literal",
            "float_literal",
            "boolean_literal",
            "tuple_expression",
        ),
        PARAMETER: ("formal_parameters", "parameters", "array_pattern", "object_pattern"),
        ASYNC: ("await_expression", "yield_expression", "await", "yield", "async_block"),
        TEMPLATE_MARKUP: ("jsx_element", "jsx_self_closing_element", "element"),
    }
)


def _index_concepts(categories: Mapping[str, Tuple[str, ...]]) -> Mapping[str, str]:
    index: Dict[str, str] = {}
    for category, tags in categories.items():
        for tag in tags:
            index.setdefault(tag, category)
    return MappingProxyType(index)


CONCEPT_MAP: Mapping[str, str] = _index_concepts(CONCEPT_CATEGORIES)


def concept_category(tag: str) -> Optional[str]:
    """Return the concept category for ``tag`` regardless of language."""
    return CONCEPT_MAP.get(tag)


__all__ = [
    "BODY_TAGS",
    "CALL_TAGS",
    "CONCEPT_CATEGORIES",
    "CONCEPT_MAP",
    "CONDITION_TAGS",
    "CONTROL_TAGS",
    "FUNCTION_TAGS",
    "LANGUAGE_TABLES",
    "LOOP_TAGS",
    "RETURN_TAGS",
    "TEMPLATE_TABLES",
    "TagTable",
    "TemplateTable",
    "classify",
    "concept_category",
    "is_export_wrapper",
    "is_wrapper",
    "table_for",
    "template_table_for",
]
