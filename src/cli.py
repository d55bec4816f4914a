"""Command-line interface for classpath-audit."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

from errors import ConfigurationError, ResolutionError
from graph.format import format_tree
from graph.selectors import build_selector_pipeline
from project.loader import load_project
from resolution.collect import collect_tree
from rules.config import load_config
from rules.runner import CHECK_NAMES, run_all, run_check

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )
    parser.add_argument(
        "--project",
        default=None,
        help="Project description file (default: <root>/classpath-project.toml)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Audit configuration file (default: <root>/classpath-audit.toml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Emit debug logging",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="classpath-audit")
    subparsers = parser.add_subparsers(dest="command", required=True)

    helps = {
        "explicit-scope": "Require an explicit scope on every declared dependency",
        "provided": "Require provided dependencies on the runtime classpath",
        "transitive-provided": (
            "Require all transitive provided dependencies on the runtime classpath"
        ),
    }
    for name in CHECK_NAMES:
        check_parser = subparsers.add_parser(name, help=helps[name])
        _add_common_options(check_parser)
        _add_format_option(check_parser)

    all_parser = subparsers.add_parser("check", help="Run every enabled check")
    _add_common_options(all_parser)
    _add_format_option(all_parser)

    tree_parser = subparsers.add_parser(
        "tree", help="Print the dependency tree seen by the provided check"
    )
    _add_common_options(tree_parser)

    return parser


def _add_format_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Report format (default: text)",
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _resolve_file(value: str | None) -> Path | None:
    if value is None:
        return None
    return Path(value).expanduser().resolve()


def _handle_checks(args: argparse.Namespace, root: Path, names: list[str] | None) -> int:
    project_file = _resolve_file(args.project)
    project = load_project(project_file if project_file is not None else root)
    config = load_config(root, _resolve_file(args.config))

    if names is None:
        results = run_all(project, config)
    else:
        results = [run_check(name, project, config) for name in names]

    if args.format == "json":
        payload = [result.to_dict() for result in results]
        opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
        sys.stdout.write(orjson.dumps(payload, option=opts).decode("utf-8"))
        sys.stdout.write("\n")
    else:
        for result in results:
            if not result.ok:
                sys.stderr.write(f"{result.check}: {result.summary()}\n")

    if any(not result.ok for result in results):
        return EXIT_VIOLATIONS
    return EXIT_OK


def _handle_tree(args: argparse.Namespace, root: Path) -> int:
    project_file = _resolve_file(args.project)
    project = load_project(project_file if project_file is not None else root)
    config = load_config(root, _resolve_file(args.config))

    tree = collect_tree(
        project.artifact,
        build_selector_pipeline(config.provided.policy()),
        project.repositories,
        project.resolver(),
    )
    sys.stdout.write(format_tree(tree) + "\n")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    root = Path(args.root).expanduser().resolve()

    try:
        if args.command == "tree":
            return _handle_tree(args, root)
        if args.command == "check":
            return _handle_checks(args, root, None)
        return _handle_checks(args, root, [args.command])
    except ResolutionError as exc:
        sys.stderr.write(f"error: Could not retrieve dependency metadata: {exc.describe()}\n")
        return EXIT_ERROR
    except ConfigurationError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
