"""Build <-> token, the two calls the rest of the planner uses."""

import logging
from typing import Any, Mapping

from sky_planner.codec.convert import convert, to_legacy
from sky_planner.codec.schema import is_supported_version, to_payload
from sky_planner.codec.token import decode_token, encode_token
from sky_planner.codec.validate import validate_build
from sky_planner.models.build import AnyBuild, BuildVariant, LegacyBuild


logger = logging.getLogger(__name__)


def encode_build(build: AnyBuild, variant: BuildVariant = BuildVariant.V2) -> str:
    """Token for ``build`` written in ``variant`` (V2 unless told otherwise)."""
    return encode_token(to_payload(convert(build, variant)))


def decode_payload(token: str) -> Mapping[str, Any] | None:
    """Decoded payload if ``token`` carries a build object we can read."""
    payload = decode_token(token)
    if payload is None:
        return None
    if not isinstance(payload, Mapping) or not is_supported_version(payload.get("v")):
        logger.warning("Ignoring build token without a supported schema version")
        return None
    return payload


def decode_build(token: str) -> LegacyBuild | None:
    """Validated Legacy build from ``token``; None when no build is present."""
    payload = decode_payload(token)
    if payload is None:
        return None
    return to_legacy(validate_build(payload))


def is_default_build(build: AnyBuild) -> bool:
    """True when ``build`` carries nothing a fresh build would not.

    Unlocks are ignored: the V2 variant never stores them.
    """
    if isinstance(build, LegacyBuild):
        perks_empty = build.perks.is_empty()
    else:
        perks_empty = not any(build.perks.values())
    return (
        build.name == ""
        and build.notes == ""
        and build.race is None
        and build.stone is None
        and build.religion is None
        and build.favorite_blessing is None
        and not build.traits.regular
        and not build.traits.bonus
        and build.trait_limits.is_default()
        and not build.skills.major
        and not build.skills.minor
        and not build.skill_levels
        and not build.equipment
        and not build.destiny_path
        and build.attribute_assignments.is_default()
        and perks_empty
    )
