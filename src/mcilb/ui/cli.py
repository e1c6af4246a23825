from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from mcilb.app import (
    delete_load_balancer_url_map,
    ensure_load_balancer_url_map,
    get_load_balancer_status,
    list_load_balancer_statuses,
    remove_clusters,
)
from mcilb.config import ConfigurationError, configure_logging
from mcilb.domain.errors import UrlMapError, UrlMapNotFoundError
from mcilb.domain.status import encode_status

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the URL map of a multicluster ingress")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output, including URL map diffs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ensure = subparsers.add_parser("ensure", help="Create or update the URL map")
    ensure.add_argument("--lb-name", type=str, required=True, help="Load balancer name")
    ensure.add_argument(
        "--ip",
        type=str,
        required=True,
        help="IP address of the load balancer, recorded in its status",
    )
    ensure.add_argument(
        "--cluster",
        dest="clusters",
        action="append",
        default=[],
        help="Cluster participating in the load balancer (repeatable)",
    )
    ensure.add_argument(
        "--ingress",
        type=Path,
        required=True,
        help="Path to the Ingress manifest (YAML or JSON)",
    )
    ensure.add_argument(
        "--backends",
        type=Path,
        required=True,
        help="Path to the service name to backend service mapping (YAML or JSON)",
    )
    ensure.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing URL map that differs from the desired one",
    )

    delete = subparsers.add_parser("delete", help="Delete the URL map")
    delete.add_argument("--lb-name", type=str, required=True, help="Load balancer name")

    status = subparsers.add_parser("status", help="Print the status stored on the URL map")
    status.add_argument("--lb-name", type=str, required=True, help="Load balancer name")

    subparsers.add_parser("list", help="Print the status of every load balancer")

    remove = subparsers.add_parser(
        "remove-clusters",
        help="Remove clusters from the status stored on the URL map",
    )
    remove.add_argument("--lb-name", type=str, required=True, help="Load balancer name")
    remove.add_argument(
        "--cluster",
        dest="clusters",
        action="append",
        required=True,
        help="Cluster to remove (repeatable)",
    )

    return parser.parse_args(list(argv))


def _run(args: argparse.Namespace) -> None:
    if args.command == "ensure":
        self_link = ensure_load_balancer_url_map(
            lb_name=args.lb_name,
            ip_address=args.ip,
            clusters=args.clusters,
            ingress_path=args.ingress,
            backends_path=args.backends,
            force_update=args.force,
        )
        print(self_link)  # noqa: T201
    elif args.command == "delete":
        delete_load_balancer_url_map(lb_name=args.lb_name)
    elif args.command == "status":
        print(encode_status(get_load_balancer_status(lb_name=args.lb_name)))  # noqa: T201
    elif args.command == "list":
        for lb_status in list_load_balancer_statuses():
            print(encode_status(lb_status))  # noqa: T201
    elif args.command == "remove-clusters":
        remove_clusters(lb_name=args.lb_name, clusters=args.clusters)
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        _run(parsed_args)
    except UrlMapNotFoundError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except UrlMapError:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)
    except (ValueError, ConfigurationError):
        # Bad names, manifests and configuration are usage errors.
        log.exception("Invalid input")
        sys.exit(2)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
