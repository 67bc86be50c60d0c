"""
Maps module specifiers to the relative file paths produced by the vendoring tool.

The layout mirrors the one `deno vendor` writes to disk, so trees vendored
independently by either tool stay interchangeable:

    https://example.com:8080/a/b.ts  ->  example.com_8080/a/b.ts
"""

import os
import pathlib
from typing import List, Optional
from urllib.parse import SplitResult, quote, urljoin, urlsplit
from urllib.request import url2pathname

from modvendor.modvendor_exceptions import InvalidSpecifierError
from modvendor.specifier_paths.sanitizer import sanitize_segment


# Ports a URL parser drops because they are implied by the scheme
DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}

SPECIAL_SCHEMES = frozenset(["ftp", "file", "http", "https", "ws", "wss"])

# Printable ASCII left unescaped in a URL path and query, as WHATWG URL parsers do.
# Everything else, including space and non-ASCII, is percent-encoded as UTF-8.
_PRINTABLE_ASCII = "".join(chr(c) for c in range(0x21, 0x7F))
PATH_SAFE_CHARS = "".join(c for c in _PRINTABLE_ASCII if c not in "\"#<>?`{}")
QUERY_SAFE_CHARS = "".join(c for c in _PRINTABLE_ASCII if c not in "\"#<>")
SPECIAL_QUERY_SAFE_CHARS = QUERY_SAFE_CHARS.replace("'", "")


def directory_file_url(directory: Optional[str] = None) -> str:
    """File URL of ``directory`` (the current working directory by default), ending with a slash."""
    uri = pathlib.Path(directory or os.getcwd()).resolve().as_uri()
    return uri if uri.endswith("/") else uri + "/"


def file_url_directory(base_url: Optional[str]) -> Optional[str]:
    """
    Local directory behind a ``file:`` base URL, or None for any other base.
    """
    if not base_url:
        return None
    parts = urlsplit(base_url)
    if parts.scheme != "file":
        return None
    return url2pathname(parts.path)


def resolve_specifier(specifier: str, base_url: Optional[str] = None) -> str:
    """
    Resolve ``specifier`` against ``base_url`` (the working directory by default).

    Absolute URLs are returned unchanged.
    """
    return urljoin(base_url or directory_file_url(), specifier)


def _host_component(parts: SplitResult) -> str:
    hostname = parts.hostname
    if not hostname:
        return ""

    if not hostname.isascii():
        try:
            hostname = hostname.encode("idna").decode("ascii")
        except UnicodeError as e:
            raise InvalidSpecifierError(f"Invalid hostname in module specifier {parts.geturl()}: {e}") from e

    # urlsplit strips the brackets of IPv6 literals, URL parsers keep them
    if "[" in parts.netloc:
        hostname = f"[{hostname}]"
    component = sanitize_segment(hostname)

    try:
        port = parts.port
    except ValueError as e:
        raise InvalidSpecifierError(f"Invalid port in module specifier {parts.geturl()}: {e}") from e

    if port is not None and port != DEFAULT_PORTS.get(parts.scheme):
        component += f"_{port}"
    return component


def _path_segments(path: str) -> List[str]:
    segments: List[str] = []
    for segment in path.split("/"):
        dots = segment.lower().replace("%2e", ".")
        if dots == "..":
            if segments:
                segments.pop()
        elif segment and dots != ".":
            segments.append(segment)
    return segments


def module_specifier_to_path(specifier: str, base_url: Optional[str] = None) -> str:
    """
    Convert a module specifier to the relative path the vendoring tool writes it to.

    Args:
        specifier: Absolute URL, or a path relative to ``base_url``
        base_url: Base to resolve relative specifiers against. Defaults to the
            file URL of the current working directory.

    Returns:
        Relative path joined with the platform separator. The first component
        is the sanitized hostname (plus ``_<port>`` for non-default ports) and
        is omitted for host-less specifiers such as ``file:`` URLs.

    Raises:
        InvalidSpecifierError: If the specifier is not a parsable URL or has a bad port
    """
    try:
        parts = urlsplit(resolve_specifier(specifier, base_url))
    except ValueError as e:
        raise InvalidSpecifierError(f"Invalid module specifier {specifier}: {e}") from e

    special = parts.scheme in SPECIAL_SCHEMES
    path = parts.path.replace("\\", "/") if special else parts.path
    segments = _path_segments(quote(path, safe=PATH_SAFE_CHARS))

    # The query stays attached to the last segment and is escaped with it.
    # An empty path maps to the host alone.
    if parts.query and segments:
        query_safe = SPECIAL_QUERY_SAFE_CHARS if special else QUERY_SAFE_CHARS
        segments[-1] += "?" + quote(parts.query, safe=query_safe)

    return os.path.join(_host_component(parts), *[sanitize_segment(s) for s in segments])
