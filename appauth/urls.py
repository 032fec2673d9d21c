from __future__ import annotations

import urllib.parse
from collections.abc import Mapping


def has_scheme(uri: str) -> bool:
    return bool(urllib.parse.urlparse(uri).scheme)


def append_query_params(url: str, params: Mapping[str, str]) -> str:
    """Add ``params`` to the query of ``url``, in the order given.

    Existing pairs keep their position unless ``params`` names the same key,
    in which case the new value replaces every old occurrence.
    """
    parsed = urllib.parse.urlsplit(url)
    kept = [
        (key, value)
        for key, value in urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
        if key not in params
    ]
    query = urllib.parse.urlencode(kept + list(params.items()))
    return urllib.parse.urlunsplit(parsed._replace(query=query))


def join_url_path(base_url: str, path: str) -> str:
    parsed = urllib.parse.urlparse(base_url)
    joined = parsed.path.rstrip("/") + "/" + path.lstrip("/")
    return urllib.parse.urlunparse(parsed._replace(path=joined, query="", fragment=""))
