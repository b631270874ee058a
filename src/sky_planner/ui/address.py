"""Address helpers for hash-based routing.

The planner routes on the fragment, so its own query parameters live
after the hash: ``https://host/app/#/build?b=TOKEN&tab=perks``. Links
from older versions put them in the main query string instead
(``https://host/app/?b=TOKEN#/build``); ``ensure_hash_based_routing``
moves them across.
"""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


Params = list[tuple[str, str]]

DEFAULT_HASH_PATH = "#/"


def split_hash(fragment: str, default_path: str = DEFAULT_HASH_PATH) -> tuple[str, Params]:
    """Split ``#/path?a=1`` into ``("#/path", [("a", "1")])``."""
    if not fragment:
        return default_path, []
    if not fragment.startswith("#"):
        fragment = "#" + fragment
    path, _, query = fragment.partition("?")
    if path == "#":
        path = default_path
    return path, parse_qsl(query, keep_blank_values=True)


def _fragment(url: str) -> str:
    fragment = urlsplit(url).fragment
    return "#" + fragment if fragment else ""


def hash_path(url: str, default_path: str = DEFAULT_HASH_PATH) -> str:
    return split_hash(_fragment(url), default_path)[0]


def hash_params(url: str) -> Params:
    return split_hash(_fragment(url))[1]


def main_query_params(url: str) -> Params:
    return parse_qsl(urlsplit(url).query, keep_blank_values=True)


def has_main_query_params(url: str) -> bool:
    return bool(urlsplit(url).query)


def get_param(params: Params, key: str) -> str | None:
    for name, value in params:
        if name == key:
            return value
    return None


def set_param(params: Params, key: str, value: str) -> Params:
    """Replace the first ``key`` in place of all of them, or append it."""
    result: Params = []
    replaced = False
    for name, existing in params:
        if name != key:
            result.append((name, existing))
        elif not replaced:
            result.append((key, value))
            replaced = True
    if not replaced:
        result.append((key, value))
    return result


def delete_param(params: Params, key: str) -> Params:
    return [(name, value) for name, value in params if name != key]


def compose(url: str, path: str, params: Params) -> str:
    """``url`` with its main query dropped and the fragment set to ``path?params``."""
    parts = urlsplit(url)
    fragment = path[1:] if path.startswith("#") else path
    if params:
        fragment = f"{fragment}?{urlencode(params)}"
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", fragment))


def ensure_hash_based_routing(url: str, default_path: str = DEFAULT_HASH_PATH) -> str:
    """Move main-query parameters after the hash; other URLs pass through.

    Existing hash parameters keep their place, moved ones follow them.
    """
    if not has_main_query_params(url):
        return url
    path, params = split_hash(_fragment(url), default_path)
    return compose(url, path, params + main_query_params(url))
