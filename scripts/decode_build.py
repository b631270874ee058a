"""Decode a build share token (or a whole share link) into JSON.

Usage examples:
    python -m scripts.decode_build eyJ2IjoyLCJuIjoi...
    python -m scripts.decode_build 'https://planner.example/#/?b=eyJ2IjoyLCJuIjoi...'
    python -m scripts.decode_build TOKEN --variant v2
    python -m scripts.decode_build TOKEN --raw
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from sky_planner.codec.convert import convert
from sky_planner.codec.schema import to_payload
from sky_planner.codec.share import decode_build, decode_payload
from sky_planner.engine.share_config import ShareConfig
from sky_planner.models.build import BuildVariant
from sky_planner.ui.controllers.url_sync_controller import find_token


def _extract_token(text: str, key: str) -> str | None:
    """Token from a share link, or ``text`` itself when it is a bare token."""
    text = text.strip()
    if "?" in text or "#" in text or "://" in text:
        token, _from_main_query = find_token(text, key)
        return token
    return text or None


def _decode(text: str, variant: BuildVariant, raw: bool = False, key: str = "b") -> dict[str, Any] | None:
    token = _extract_token(text, key)
    if token is None:
        return None
    if raw:
        payload = decode_payload(token)
        return dict(payload) if payload is not None else None
    build = decode_build(token)
    if build is None:
        return None
    return to_payload(convert(build, variant))


def main() -> None:
    config = ShareConfig()
    parser = argparse.ArgumentParser(description="Decode a build share token to JSON")
    parser.add_argument("token", help="Share token, or a share link carrying one.")
    parser.add_argument(
        "--variant",
        choices=[variant.value for variant in BuildVariant],
        default=BuildVariant.LEGACY.value,
        help="Wire shape to print the validated build in (default: legacy).",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the decoded payload as-is, without validation or conversion.",
    )
    parser.add_argument(
        "--param",
        default=config.token_param,
        help=f"Query key holding the token in links (default: {config.token_param}).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log dropped entries.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    payload = _decode(args.token, BuildVariant(args.variant), raw=args.raw, key=args.param)
    if payload is None:
        print("No build could be decoded from input.", file=sys.stderr)
        raise SystemExit(1)
    print(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
