# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from cistate.app import Operation, build_context, reconcile_project, reconcile_ssh_key
from cistate.config import ConfigurationError, configure_logging, parse_vcs_type
from cistate.domain.errors import MissingOrganizationError, ReconcileError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from cistate.domain.model import ResourceState

log = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--organization",
        type=str,
        help="Organization owning the project (defaults to CIRCLECI_ORGANIZATION)",
    )
    parser.add_argument("--project", type=str, help="Project (repository) name")
    parser.add_argument(
        "--identifier",
        type=str,
        help="Resource ID as returned by create, e.g. my-org.my-repo",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile CircleCI projects and SSH keys")
    parser.add_argument(
        "--vcs",
        type=str,
        help="VCS type of the project: github or bitbucket (defaults to CIRCLECI_VCS_TYPE)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    project = subparsers.add_parser("project", help="Manage followed projects")
    project_sub = project.add_subparsers(dest="operation", required=True)
    for operation in Operation:
        _add_common_arguments(project_sub.add_parser(operation.value))

    ssh_key = subparsers.add_parser("ssh-key", help="Manage project SSH keys")
    ssh_key_sub = ssh_key.add_subparsers(dest="operation", required=True)
    for operation in Operation:
        command = ssh_key_sub.add_parser(operation.value)
        _add_common_arguments(command)
        command.add_argument("--hostname", type=str, help="Host the key grants access to")
        command.add_argument(
            "--private-key-file",
            type=str,
            help="Path to an unencrypted private key, or - to read it from stdin",
        )

    return parser.parse_args(list(argv))


def _read_private_key(path: str | None) -> str | None:
    if path is None:
        return None
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).expanduser().read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read private key file {path}: {exc}") from exc


def _render(outcome: ResourceState[Any] | bool, args: argparse.Namespace) -> str:
    if isinstance(outcome, bool):
        return json.dumps({"command": args.command, "exists": outcome})
    return json.dumps(outcome.to_dict(), sort_keys=True)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        operation = Operation(parsed_args.operation)
        vcs = parse_vcs_type(parsed_args.vcs) if parsed_args.vcs else None
        private_key = (
            _read_private_key(parsed_args.private_key_file)
            if parsed_args.command == "ssh-key"
            else None
        )
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        context = build_context(organization=parsed_args.organization, vcs=vcs)
        if parsed_args.command == "project":
            outcome = reconcile_project(
                operation,
                context=context,
                project=parsed_args.project,
                organization=parsed_args.organization,
                identifier=parsed_args.identifier,
            )
        elif parsed_args.command == "ssh-key":
            outcome = reconcile_ssh_key(
                operation,
                context=context,
                project=parsed_args.project,
                hostname=parsed_args.hostname,
                private_key=private_key,
                organization=parsed_args.organization,
                identifier=parsed_args.identifier,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ValueError, TypeError, ConfigurationError, MissingOrganizationError) as exc:
        log.error("Invalid %s %s request: %s", parsed_args.command, operation, exc)  # noqa: TRY400
        sys.exit(2)
    except ReconcileError as exc:
        log.error("%s %s failed: %s", parsed_args.command, operation, exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)

    print(_render(outcome, parsed_args))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
