"""
neweden Universe Commands

Build and inspect the space graph file used by the navigation commands.
"""

import argparse
import time
from collections import Counter
from pathlib import Path
from typing import Any

from ..core.config import get_settings
from ..core.formatters import get_utc_timestamp
from ..universe import SerializationError, UniverseBuildError, build_space_graph, load_universe
from ..universe.serialization import save_space_graph
from ..universe.sqlite import DatabaseBuilder


def cmd_build(args: argparse.Namespace) -> dict[str, Any]:
    """
    Build the space graph from a JSON cache or SQLite static dump.

    Creates a .universe file for fast navigation queries.
    """
    query_ts = get_utc_timestamp()
    settings = get_settings()

    output_path = Path(args.output) if args.output else settings.graph_path

    if output_path.exists() and not args.force:
        return {
            "error": "output_exists",
            "message": f"Output file exists: {output_path}",
            "hint": "Use --force to overwrite",
            "query_timestamp": query_ts,
        }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    start = time.perf_counter()
    try:
        if args.sqlite:
            graph = DatabaseBuilder(args.sqlite).build()
            save_space_graph(graph, output_path)
            source = args.sqlite
        else:
            cache_path = Path(args.cache) if args.cache else settings.cache_path
            graph = build_space_graph(cache_path, output_path)
            source = str(cache_path)
    except (UniverseBuildError, SerializationError) as e:
        return {
            "error": "build_failed",
            "message": f"Build failed: {e}",
            "query_timestamp": query_ts,
        }
    elapsed = time.perf_counter() - start

    return {
        "query_timestamp": query_ts,
        "status": "success",
        "message": f"Built space graph in {elapsed:.2f}s",
        "source": source,
        "graph": _graph_stats(graph),
        "output": {
            "path": str(output_path),
            "size_kb": round(output_path.stat().st_size / 1024, 1),
        },
        "build_time_seconds": round(elapsed, 2),
    }


def cmd_info(args: argparse.Namespace) -> dict[str, Any]:
    """Show statistics for the configured space graph."""
    query_ts = get_utc_timestamp()
    try:
        graph = load_universe()
    except UniverseBuildError as e:
        return {
            "error": "graph_not_available",
            "message": str(e),
            "hint": "Run 'neweden build' to generate the graph.",
            "query_timestamp": query_ts,
        }
    return {
        "version": graph.version,
        "graph": _graph_stats(graph),
        "query_timestamp": query_ts,
    }


def _graph_stats(graph) -> dict[str, Any]:
    security = Counter(s.security_class for s in graph.all_systems())
    kinds: Counter[str] = Counter()
    for connection in graph.connections():
        kinds["wormhole" if connection.is_wormhole else connection.kind.type.value] += 1
    return {
        "systems": graph.system_count,
        "connections": graph.connection_count,
        "highsec_systems": security["HIGH"],
        "lowsec_systems": security["LOW"],
        "nullsec_systems": security["NULL"],
        "connection_kinds": dict(sorted(kinds.items())),
    }


def register_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Register universe command parsers."""

    build_parser = subparsers.add_parser("build", help="Build space graph file")
    build_parser.add_argument("--cache", "-c", help="Path to universe_cache.json")
    build_parser.add_argument("--sqlite", help="Build from a SQLite static dump instead")
    build_parser.add_argument("--output", "-o", help="Output .universe path")
    build_parser.add_argument("--force", "-f", action="store_true", help="Overwrite existing output")
    build_parser.set_defaults(func=cmd_build)

    info_parser = subparsers.add_parser("info", help="Show space graph statistics")
    info_parser.set_defaults(func=cmd_info)
