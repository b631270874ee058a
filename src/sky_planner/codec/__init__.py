"""Build sharing: variants, conversion, validation and URL tokens."""

from sky_planner.codec.convert import to_compact, to_legacy, to_v2
from sky_planner.codec.schema import UnknownBuildFormatError, detect_variant
from sky_planner.codec.share import decode_build, encode_build, is_default_build
from sky_planner.codec.token import decode_token, encode_token
from sky_planner.codec.validate import validate_build

__all__ = [
    "UnknownBuildFormatError",
    "decode_build",
    "decode_token",
    "detect_variant",
    "encode_build",
    "encode_token",
    "is_default_build",
    "to_compact",
    "to_legacy",
    "to_v2",
    "validate_build",
]
