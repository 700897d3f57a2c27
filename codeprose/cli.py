"""CLI entrypoints for codeprose commands."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict

from .analyzers.concepts import display_category, concept_label, group_concepts
from .logging import configure_logging
from .orchestrator import Orchestrator
from .session import TRUNCATION_NOTE


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_file_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Source file to read.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codeprose",
        description="Explain source files as outlines, captions and book-style prose.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    outline_parser = subparsers.add_parser(
        "outline",
        help="Print the indented declaration outline with line ranges.",
    )
    _add_verbose_option(outline_parser, suppress_default=True)
    _add_file_argument(outline_parser)

    annotate_parser = subparsers.add_parser(
        "annotate",
        help="Print structure-only captions for every declaration.",
    )
    _add_verbose_option(annotate_parser, suppress_default=True)
    _add_file_argument(annotate_parser)
    annotate_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the annotated file as JSON.",
    )

    concepts_parser = subparsers.add_parser(
        "concepts",
        help="List programming concepts found in the file, grouped by category.",
    )
    _add_verbose_option(concepts_parser, suppress_default=True)
    _add_file_argument(concepts_parser)

    describe_parser = subparsers.add_parser(
        "describe",
        help="Ask the description service for a plain English section about the file.",
    )
    _add_verbose_option(describe_parser, suppress_default=True)
    _add_file_argument(describe_parser)
    describe_parser.add_argument(
        "--project-root",
        default=None,
        help="Project root used for @filename references (defaults to the file's directory).",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for codeprose commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "serve":
        from .service.app import run_service

        try:
            run_service(host=args.host, port=args.port)
        except RuntimeError as exc:
            parser.exit(1, f"{exc}\n")
        return

    orchestrator = Orchestrator()
    try:
        if args.command == "outline":
            print(orchestrator.outline(args.path).text)
        elif args.command == "annotate":
            _print_annotations(orchestrator, args.path, as_json=bool(args.json))
        elif args.command == "concepts":
            _print_concepts(orchestrator, args.path)
        elif args.command == "describe":
            result = orchestrator.describe(args.path, project_root=args.project_root)
            if result.error is not None:
                parser.exit(1, f"Could not generate description: {result.error}\n")
            if result.truncated:
                print(TRUNCATION_NOTE)
                print()
            print(result.text)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except RuntimeError as exc:
        parser.exit(1, f"codeprose {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _print_annotations(orchestrator: Orchestrator, path: str, *, as_json: bool) -> None:
    annotated = orchestrator.annotate(path)
    if as_json:
        print(json.dumps(asdict(annotated), indent=2))
        return
    print(annotated.file_summary)
    print()
    for line in annotated.outline:
        print(line)
    for node in annotated.nodes:
        print()
        print(node.summary)
        if node.detail:
            print(node.detail)
        for note in node.inline_notes:
            print(f"  - {note.text}")


def _print_concepts(orchestrator: Orchestrator, path: str) -> None:
    instances = orchestrator.concepts(path)
    for category, members in group_concepts(instances).items():
        print(f"{display_category(category)} ({len(members)})")
        for instance in members:
            print(f"  {instance.line}: {concept_label(instance)}")


if __name__ == "__main__":
    main(sys.argv[1:])
