"""
EcoTrack CLI entrypoint.

Handy for poking at the seed data and the ranking logic without a browser:

    ecotrack nearby --lat 40.7128 --lng -74.0060 --material metal --limit 2
    ecotrack materials
    ecotrack serve --port 8000
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from ecotrack.config.settings import get_settings
from ecotrack.core.logging import configure_logging
from ecotrack.recycling.query import find_nearby_centers, list_distinct_materials
from ecotrack.store.memory import build_store


def _cmd_nearby(args: argparse.Namespace) -> int:
    """Handle the `nearby` subcommand."""
    store = build_store(get_settings())
    ranked = find_nearby_centers(store, args.lat, args.lng, material=args.material, limit=args.limit)

    if args.json:
        print(json.dumps([r.model_dump(mode="json", by_alias=True) for r in ranked], ensure_ascii=False, indent=2))
        return 0

    if not ranked:
        print("No recycling centers match.")
        return 0
    for i, center in enumerate(ranked, start=1):
        print(f"{i:>2}. {center.name}  {center.distance:.2f} mi")
        print(f"    {center.address}")
        print(f"    accepts: {', '.join(center.accepted_materials)}")
        if center.operating_hours:
            print(f"    hours: {center.operating_hours}")
    return 0


def _cmd_materials(_: argparse.Namespace) -> int:
    store = build_store(get_settings())
    for material in list_distinct_materials(store):
        print(material)
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("ecotrack.api.app:app", host=args.host, port=args.port, log_config=None)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the EcoTrack CLI."""
    parser = argparse.ArgumentParser(prog="ecotrack")
    parser.add_argument("--log-level", default=None, help="Overrides ECOTRACK_LOG_LEVEL / settings")
    sub = parser.add_subparsers(dest="command", required=True)

    near = sub.add_parser("nearby", help="Rank recycling centers by distance from a point.")
    near.add_argument("--lat", required=True, type=float)
    near.add_argument("--lng", required=True, type=float)
    near.add_argument("--material", type=str, default=None, help="Only centers accepting this material")
    near.add_argument("--limit", type=int, default=None, help="Max results; <= 0 means no cap")
    near.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    near.set_defaults(func=_cmd_nearby)

    mat = sub.add_parser("materials", help="List every material accepted by some center.")
    mat.set_defaults(func=_cmd_materials)

    srv = sub.add_parser("serve", help="Run the HTTP API with uvicorn.")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.set_defaults(func=_cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m ecotrack.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
