"""Encode a build JSON file into a share token or share link.

The input may be any build variant; it is validated before encoding.

Usage examples:
    python -m scripts.encode_build --build-file build.json
    python -m scripts.encode_build --build-json '{"v":2,"n":"Spellsword",...}'
    python -m scripts.encode_build --build-file build.json --base-url https://planner.example/
    python -m scripts.encode_build --build-file build.json --variant compact --stats
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from sky_planner.codec.convert import calculate_compression_ratio
from sky_planner.codec.share import encode_build, is_default_build
from sky_planner.codec.validate import validate_build
from sky_planner.engine.share_config import ShareConfig
from sky_planner.models.build import AnyBuild, BuildVariant
from sky_planner.ui.controllers.url_sync_controller import rewrite_address


def _load_json_arg(raw_json: str | None, path: Path | None) -> Any:
    if raw_json is not None:
        return json.loads(raw_json)
    if path is not None:
        return json.loads(path.read_text(encoding="utf-8"))
    raise ValueError("Either --build-json or --build-file is required")


def _encode(build: AnyBuild, variant: BuildVariant, base_url: str | None = None) -> str:
    """Token for ``build``, or a full link when ``base_url`` is given."""
    if base_url is None:
        return encode_build(build, variant)
    return rewrite_address(base_url, build, ShareConfig(wire_variant=variant))


def main() -> None:
    parser = argparse.ArgumentParser(description="Encode build JSON into a share token")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--build-file", type=Path, help="Path to build JSON file.")
    source.add_argument("--build-json", type=str, help="Inline build JSON object.")
    parser.add_argument(
        "--variant",
        choices=[variant.value for variant in BuildVariant],
        default=BuildVariant.V2.value,
        help="Wire shape to encode in (default: v2).",
    )
    parser.add_argument("--base-url", type=str, help="Emit a share link on this address.")
    parser.add_argument("--stats", action="store_true", help="Print size savings of the V2 form.")
    parser.add_argument("--verbose", action="store_true", help="Log dropped entries.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    payload = _load_json_arg(args.build_json, args.build_file)
    build = validate_build(payload)
    if is_default_build(build):
        print("Warning: build is empty; links for it carry no token.")

    print(_encode(build, BuildVariant(args.variant), args.base_url))

    if args.stats:
        stats = calculate_compression_ratio(build)
        print(
            f"Size: {stats.original_size} -> {stats.compressed_size} bytes "
            f"({stats.savings} saved, {stats.savings_percentage:.1f}%)"
        )


if __name__ == "__main__":
    main()
