"""
Rendering of path templates into request URLs.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Any, Mapping
from urllib.parse import quote, urlencode, urljoin, urlsplit

from .enums import to_wire
from .errors import ConfigError

__all__ = ["UrlFormatter", "encode_query_value", "render_path"]

_PATH_TOKEN = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def encode_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return to_wire(value)
    return str(value)


def render_path(template: str, path_params: Mapping[str, Any]) -> str:
    """
    Substitute every ``:name`` token that has a value in ``path_params``.

    Values are escaped as single path segments. Tokens without a value are
    left as they are.
    """

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in path_params:
            return match.group(0)
        return quote(encode_query_value(path_params[name]), safe="")

    return _PATH_TOKEN.sub(_replace, template)


class UrlFormatter:
    """
    Resolves rendered paths against ``base_url``.

    Resource templates are absolute (``/payments``), so any path on the base
    URL is replaced rather than extended: ``https://proxy/gc`` sends requests
    to ``https://proxy/payments``.
    """

    def __init__(self, base_url: str) -> None:
        parts = urlsplit(base_url or "")
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigError(f"Base URL '{base_url}' is not a valid absolute URL")
        if parts.path not in ("", "/"):
            logging.warning(
                "Base URL path '%s' is ignored for absolute request paths", parts.path
            )
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"

    def format_url(
        self,
        template: str,
        path_params: Mapping[str, Any],
        query_params: Mapping[str, Any],
    ) -> str:
        url = urljoin(self.base_url, render_path(template, path_params))
        if not query_params:
            return url
        query = urlencode(
            [(name, encode_query_value(value)) for name, value in query_params.items()]
        )
        separator = "&" if urlsplit(url).query else "?"
        return f"{url}{separator}{query}"
