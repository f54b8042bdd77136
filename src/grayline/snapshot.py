"""CLI entry point for a one-off overlay snapshot.

    uv run grayline-snapshot
    uv run grayline-snapshot --at 2024-06-20T20:51:00Z --out june.png --geojson june.geojson
"""

import argparse
import json
from datetime import datetime
from pathlib import Path

import structlog
from dotenv import load_dotenv

from grayline.compute import run
from grayline.config import load_settings
from grayline.ephemeris import load_ephemeris
from grayline.features import overlay_feature_collection
from grayline.log import setup_logging
from grayline.renderers.static import save_static_map

log = structlog.get_logger(__name__)


def _parse_instant(raw: str) -> datetime:
    try:
        return datetime.fromisoformat(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an ISO 8601 instant: {raw!r}") from e


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="grayline-snapshot", description="Render the day/night overlay for one instant."
    )
    p.add_argument(
        "--at", type=_parse_instant, default=None, help="UTC instant (ISO 8601). Default: now."
    )
    p.add_argument("--out", type=Path, default=None, help="PNG path. Default: results/.")
    p.add_argument("--geojson", type=Path, default=None, help="Also write a GeoJSON FeatureCollection.")
    p.add_argument("--no-png", action="store_true", help="Skip the PNG (use with --geojson).")
    return p


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    settings = load_settings()
    setup_logging(settings.log_level)

    ephemeris = load_ephemeris(settings)
    overlay = run(ephemeris, settings.bands, instant=args.at)

    if not args.no_png:
        path = save_static_map(overlay, args.out, night_color=settings.night_color)
        log.info("snapshot_saved", kind="png", path=str(path))
        print(f"Saved: {path}")

    if args.geojson is not None:
        args.geojson.parent.mkdir(parents=True, exist_ok=True)
        collection = overlay_feature_collection(overlay, settings.night_color)
        args.geojson.write_text(json.dumps(collection), encoding="utf-8")
        log.info("snapshot_saved", kind="geojson", path=str(args.geojson))
        print(f"Saved: {args.geojson}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
