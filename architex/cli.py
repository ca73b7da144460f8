"""Command-line interface for Architex.

Each ``make-*`` subcommand maps onto one pattern generator; the created paths
are printed one per line.  Errors are reported on stderr and turn into exit
code 1.
"""

from __future__ import annotations

import argparse
import warnings
from pathlib import Path
from typing import Any, Sequence

from pydantic import ValidationError

from architex import __version__
from architex.config import ArchitexConfig
from architex.exceptions import ArchitexError, UnresolvedPlaceholderWarning
from architex.scaffolder import ArchitectureGenerator
from architex.utils import (
    print_error,
    print_paths,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

# subcommand -> (pattern key, fixed options)
_COMMANDS: dict[str, tuple[str, dict[str, Any]]] = {
    "make-repository": ("repository", {}),
    "make-service": ("service", {}),
    "make-cqrs": ("cqrs", {}),
    "make-command": ("cqrs", {"only": "command"}),
    "make-query": ("cqrs", {"only": "query"}),
    "make-event": ("event_bus", {}),
    "make-ddd": ("ddd", {}),
    "make-modular": ("modular", {}),
    "make-hexagonal": ("hexagonal", {}),
}

_MODULAR_FLAGS = ("tests", "migrations", "seeders", "routes", "config", "views", "assets")
_HEXAGONAL_FLAGS = ("tests", "migrations", "routes")


def _add_common(sub: argparse.ArgumentParser, name_help: str) -> None:
    sub.add_argument("name", help=name_help)
    sub.add_argument(
        "--force", action="store_true", help="Overwrite files that already exist"
    )
    sub.add_argument(
        "--dry-run", action="store_true", help="Print the paths without writing anything"
    )


def _add_module_options(sub: argparse.ArgumentParser, flags: Sequence[str]) -> None:
    sub.add_argument("--path", default=None, help="Module directory (relative to the root)")
    sub.add_argument("--namespace", default=None, help="Dotted package of the module")
    for flag in flags:
        sub.add_argument(
            f"--with-{flag}",
            dest=f"with_{flag}",
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Generate {flag} (default: from configuration)",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="architex",
        description="Architex -- scaffold architecture patterns from stub templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  architex make-repository User --service\n"
            "  architex make-cqrs CreateUser\n"
            "  architex make-modular Billing --no-with-seeders\n"
            "  architex --root ./project make-ddd Orders --layers domain,application\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="JSON configuration file")
    parser.add_argument(
        "--root", default=".", help="Output root for generated files (default: .)"
    )
    parser.add_argument(
        "--stub-path", default=None, help="Directory of stubs overriding the bundled ones"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    sub = subparsers.add_parser("make-repository", help="Repository interface + implementation")
    _add_common(sub, "Entity name, e.g. User")
    sub.add_argument("--model", default=None, help="Model class name (default: the entity)")
    sub.add_argument(
        "--service", dest="with_service", action="store_true", help="Also generate the service"
    )
    sub.add_argument(
        "--base",
        dest="with_base",
        action="store_true",
        default=None,
        help="Also generate the base repository when it is missing",
    )

    sub = subparsers.add_parser("make-service", help="Service class")
    _add_common(sub, "Entity name, e.g. User")

    sub = subparsers.add_parser("make-cqrs", help="Command, query and both handlers")
    _add_common(sub, "Action name, e.g. CreateUser")
    sub = subparsers.add_parser("make-command", help="Command and its handler")
    _add_common(sub, "Action name, e.g. CreateUser")
    sub = subparsers.add_parser("make-query", help="Query and its handler")
    _add_common(sub, "Action name, e.g. GetUser")

    sub = subparsers.add_parser("make-event", help="Event and its listener")
    _add_common(sub, "Event name, e.g. UserRegistered")

    sub = subparsers.add_parser("make-ddd", help="DDD layers for a module")
    _add_common(sub, "Module name, e.g. Orders")
    sub.add_argument(
        "--layers", default=None, help="Comma-separated layers (default: all configured)"
    )

    sub = subparsers.add_parser("make-modular", help="Self-contained module")
    _add_common(sub, "Module name, e.g. Billing")
    _add_module_options(sub, _MODULAR_FLAGS)

    sub = subparsers.add_parser("make-hexagonal", help="Ports and adapters module")
    _add_common(sub, "Module name, e.g. Payments")
    _add_module_options(sub, _HEXAGONAL_FLAGS)

    subparsers.add_parser("list-templates", help="List every available stub")
    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _load_config(args: argparse.Namespace) -> ArchitexConfig:
    config = ArchitexConfig.load(args.config) if args.config else ArchitexConfig.from_env()
    if args.stub_path:
        config.templates.stub_path = Path(args.stub_path)
    return config


def _options(args: argparse.Namespace, fixed: dict[str, Any]) -> dict[str, Any]:
    skip = {"command", "name", "config", "root", "stub_path", "dry_run"}
    options = {k: v for k, v in vars(args).items() if k not in skip}
    options.update(fixed)
    return options


def run(args: argparse.Namespace) -> tuple[str, list[str]]:
    """Execute a parsed ``make-*`` or ``list-templates`` command.

    Returns the label of the pattern that ran and the listed paths.
    """
    generator = ArchitectureGenerator(_load_config(args), root=args.root)
    if args.command == "list-templates":
        return "Templates", generator.list_templates()

    pattern, fixed = _COMMANDS[args.command]
    target = generator.generator_for(pattern)
    options = _options(args, fixed)
    if args.dry_run:
        return target.LABEL, [generated.path for generated in target.plan(args.name, options)]
    return target.LABEL, target.generate(args.name, options)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``architex`` and ``python -m architex``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", UnresolvedPlaceholderWarning)
            label, paths = run(args)
    except (ArchitexError, ValidationError, OSError) as exc:
        print_error(str(exc))
        return 1

    for warning in caught:
        print_warning(str(warning.message))
    print_paths(paths)
    if args.command == "list-templates":
        return 0
    if args.dry_run:
        print_summary_table(
            {
                "Pattern": label,
                "Root": str(Path(args.root).resolve()),
                "Files": str(len(paths)),
            },
            title="Dry run",
        )
    else:
        print_success(f"Created {len(paths)} {label} file(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
