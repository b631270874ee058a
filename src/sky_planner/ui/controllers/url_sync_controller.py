"""Controller keeping the address bar in step with the current build."""

import logging
from dataclasses import dataclass, field
from typing import Callable

from sky_planner.codec.schema import to_payload
from sky_planner.codec.share import decode_build, encode_build, is_default_build
from sky_planner.codec.token import to_json
from sky_planner.engine.share_config import ShareConfig
from sky_planner.models.build import AnyBuild
from sky_planner.ui.address import (
    compose,
    delete_param,
    ensure_hash_based_routing,
    get_param,
    hash_params,
    hash_path,
    main_query_params,
    set_param,
)
from sky_planner.ui.state import UiState


logger = logging.getLogger(__name__)


def find_token(url: str, key: str = "b") -> tuple[str | None, bool]:
    """Token in ``url`` and whether it came from the main query string.

    The hash query wins when both carry one.
    """
    token = get_param(hash_params(url), key)
    if token:
        return token, False
    token = get_param(main_query_params(url), key)
    if token:
        return token, True
    return None, False


def rewrite_address(url: str, build: AnyBuild, config: ShareConfig | None = None) -> str:
    """``url`` carrying ``build``, or carrying no token for a default build.

    The hash route and any other parameters are kept; main-query
    parameters are moved behind the hash.
    """
    config = config or ShareConfig()
    url = ensure_hash_based_routing(url, config.default_hash_path)
    path = hash_path(url, config.default_hash_path)
    params = hash_params(url)
    if is_default_build(build):
        params = delete_param(params, config.token_param)
    else:
        params = set_param(params, config.token_param, encode_build(build, config.wire_variant))
    return compose(url, path, params)


@dataclass(slots=True)
class UrlSyncController:
    """Owns reading the build from the address and writing it back.

    ``replace_url`` must swap the address without navigating or adding a
    history entry (``history.replaceState`` in a browser).
    """

    state: UiState
    get_url: Callable[[], str]
    replace_url: Callable[[str], None]
    config: ShareConfig = field(default_factory=ShareConfig)
    hydrated: bool = False
    last_written: str | None = None

    def attach(self) -> Callable[[], None]:
        """Hydrate, then follow every build change. Returns a detach hook."""
        self.hydrate()
        return self.state.subscribe(self.on_build_change)

    def hydrate(self) -> tuple[bool, str | None]:
        """Adopt the build carried by the address. Only the first call acts."""
        if self.hydrated:
            return False, "Already hydrated"

        url = self.get_url()
        token, from_main_query = find_token(url, self.config.token_param)
        if token is None:
            self.hydrated = True
            return False, "No build in address"

        if from_main_query:
            self.replace_url(ensure_hash_based_routing(url, self.config.default_hash_path))

        build = decode_build(token)
        if build is None:
            self.hydrated = True
            return False, "Build token could not be decoded"

        self.state.set_build(build)
        self.last_written = self._fingerprint(build)
        self.hydrated = True
        return True, None

    def on_build_change(self, build: AnyBuild) -> str | None:
        """Write ``build`` into the address; returns the new address if written."""
        if not self.hydrated:
            logger.debug("Ignoring build change before hydration")
            return None

        fingerprint = self._fingerprint(build)
        if fingerprint == self.last_written:
            return None

        url = rewrite_address(self.get_url(), build, self.config)
        self.replace_url(url)
        self.last_written = fingerprint
        return url

    @staticmethod
    def _fingerprint(build: AnyBuild) -> str:
        return to_json(to_payload(build))
