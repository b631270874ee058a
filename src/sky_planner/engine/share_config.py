"""Configuration knobs for share links.

Defaults match the links the public planner has always issued. Changing
``token_param`` or ``wire_variant`` only affects newly written links;
reading accepts every variant regardless.
"""

from dataclasses import dataclass

from sky_planner.models.build import BuildVariant


@dataclass(slots=True)
class ShareConfig:
    """Tuneable parameters for encoding builds into addresses."""

    token_param: str = "b"                          # Query key carrying the token
    wire_variant: BuildVariant = BuildVariant.V2    # Variant new links are written in
    default_hash_path: str = "#/"                   # Route used when the address has none
