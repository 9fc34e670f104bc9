"""CLI entrypoint for the cluster gatherer."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from cluster_gather import __version__
from cluster_gather.archive import write_records
from cluster_gather.config import get_settings
from cluster_gather.gather import ClusterVersionGatherer, GatherContext, GatherResult


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Gather anonymized ClusterVersion, operator pods and events from a cluster.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--namespace",
        "-n",
        default=None,
        help="Namespace of the cluster-version operator (default: from env or 'openshift-cluster-version')",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Trailing event window in seconds (default: from env or 2 hours)",
    )
    parser.add_argument(
        "--kubeconfig",
        type=Path,
        default=None,
        help="Path to kubeconfig (default: KUBECONFIG env or ~/.kube/config)",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubernetes context to use",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Deadline for the whole gather in seconds",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Directory to write records to; records are only listed if unset",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def print_result(result: GatherResult, console: Console | None = None) -> None:
    """Print gathered records, warnings and errors using Rich."""
    c = console or Console()
    table = Table(title="Gathered records")
    table.add_column("Record")
    table.add_column("Bytes", justify="right")
    for record in result.records:
        table.add_row(record.filename, str(len(record.marshal())))
    c.print(table)
    for w in result.warnings:
        c.print(f"[yellow]Warning[/yellow] ({w.step}): {w.message}")
    for e in result.errors:
        c.print(f"[bold red]Error:[/bold red] {e}")


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for cluster-gather CLI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    logger = logging.getLogger("cluster_gather")
    if not args.verbose:
        logger.setLevel(logging.WARNING)

    try:
        settings = get_settings()
        if args.namespace:
            settings.namespace = args.namespace
        if args.interval is not None:
            settings.events_interval = timedelta(seconds=args.interval)
        if args.kubeconfig:
            settings.kubeconfig = args.kubeconfig
        if args.context:
            settings.context = args.context
        if args.timeout is not None:
            settings.timeout_seconds = args.timeout
        if args.output:
            settings.output_dir = args.output

        gatherer = ClusterVersionGatherer(settings)
        result = gatherer.gather(GatherContext.with_timeout(settings.timeout_seconds))
        if settings.output_dir and result.records:
            write_records(result.records, settings.output_dir)
        print_result(result, Console())
        return 0 if result.ok else 1
    except Exception as e:
        logging.exception("Gather failed")
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
