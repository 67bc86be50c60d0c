"""
Module specifier to file path mapping.

This package handles:
1. Resolving module specifiers against the working directory
2. Escaping characters that are illegal in file names
3. Producing the relative path the vendoring tool writes a module to
"""

from .mapper import directory_file_url, file_url_directory, module_specifier_to_path, resolve_specifier
from .sanitizer import BANNED_SEGMENT_CHARS, sanitize_segment

__all__ = [
    "BANNED_SEGMENT_CHARS",
    "directory_file_url",
    "file_url_directory",
    "module_specifier_to_path",
    "resolve_specifier",
    "sanitize_segment",
]
