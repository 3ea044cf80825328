# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import re
from functools import lru_cache
from typing import Iterable, Optional, Pattern, Tuple
from urllib.parse import urlsplit


class RemoteImagePattern:
    """One allowed image origin, parsed from a URL glob such as
    `https://cdn.example.com/wp-content/uploads/**`.

    `*` matches within a path segment, `**` across segments. An empty port
    matches the scheme's default port only.
    """

    def __init__(self, protocol: str, hostname: str, port: str, pathname: str):
        self.protocol = protocol
        self.hostname = hostname.lower()
        self.port = port
        self.pathname = pathname or "/**"
        self._path_re = _glob_to_regex(self.pathname)

    @staticmethod
    def parse(glob: str) -> "RemoteImagePattern":
        parts = urlsplit(glob)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ValueError(f"Invalid remote image pattern: {glob!r}")
        return RemoteImagePattern(
            protocol=parts.scheme,
            hostname=parts.hostname,
            port=str(parts.port) if parts.port else "",
            pathname=parts.path,
        )

    def matches(self, url: str) -> bool:
        parts = urlsplit(url)
        try:
            port = str(parts.port) if parts.port else ""
        except ValueError:
            return False
        return (
            parts.scheme == self.protocol
            and (parts.hostname or "") == self.hostname
            and port == self.port
            and self._path_re.fullmatch(parts.path or "/") is not None
        )

    def __repr__(self):
        port = f":{self.port}" if self.port else ""
        return f"<RemoteImagePattern {self.protocol}://{self.hostname}{port}{self.pathname}>"


def _glob_to_regex(pathname: str) -> Pattern:
    out = []
    i = 0
    while i < len(pathname):
        if pathname.startswith("**", i):
            out.append(".*")
            i += 2
        elif pathname[i] == "*":
            out.append("[^/]*")
            i += 1
        else:
            out.append(re.escape(pathname[i]))
            i += 1
    return re.compile("".join(out))


@lru_cache(maxsize=32)
def _compile(patterns: Tuple[str, ...]) -> Tuple[RemoteImagePattern, ...]:
    return tuple(RemoteImagePattern.parse(p) for p in patterns)


def is_allowed_image(url: Optional[str], patterns: Iterable[str]) -> bool:
    """Relative (same-site) URLs are always allowed; absolute ones must match a pattern."""
    if not url:
        return False
    if url.startswith("//"):
        url = "https:" + url
    parts = urlsplit(url)
    if not parts.scheme and not parts.netloc:
        return url.startswith("/")
    return any(p.matches(url) for p in _compile(tuple(patterns)))
