"""
Tests for mapping module specifiers to vendored file paths.
"""

import os

import pytest

from modvendor.modvendor_exceptions import InvalidSpecifierError
from modvendor.specifier_paths import (
    BANNED_SEGMENT_CHARS,
    directory_file_url,
    file_url_directory,
    module_specifier_to_path,
    resolve_specifier,
    sanitize_segment,
)
from modvendor.specifier_paths.sanitizer import is_banned_segment_char


def p(*parts: str) -> str:
    return os.path.join(*parts)


class TestSanitizeSegment:
    """Tests for escaping a single path segment."""

    def test_every_banned_char_is_replaced(self):
        assert sanitize_segment("a<b>c:d|e?f*g/h\\i") == "a_b_c_d_e_f_g_h_i"

    def test_each_banned_char_becomes_one_underscore(self):
        for c in BANNED_SEGMENT_CHARS:
            assert sanitize_segment(c) == "_"
            assert is_banned_segment_char(c)

    def test_plain_segment_is_unchanged(self):
        assert sanitize_segment("mod.ts") == "mod.ts"
        assert sanitize_segment("") == ""

    def test_length_preserved_for_multibyte_characters(self):
        text = "日本:語"
        result = sanitize_segment(text)
        assert result == "日本_語"
        assert len(result) == len(text)

    def test_astral_characters_are_not_split(self):
        """Characters outside the BMP survive intact next to replaced ones."""
        assert sanitize_segment("😀|😀") == "😀_😀"

    def test_no_other_normalization(self):
        """Case, whitespace and Unicode normalization form are left alone."""
        decomposed = "E\u0301cole"
        assert sanitize_segment(decomposed) == decomposed
        assert sanitize_segment(" MiXeD ") == " MiXeD "


class TestModuleSpecifierToPath:
    """Tests for module_specifier_to_path."""

    def test_hostname_then_path(self):
        assert module_specifier_to_path("https://example.com/a/b.ts") == p("example.com", "a", "b.ts")

    def test_explicit_port_is_appended(self):
        assert module_specifier_to_path("https://example.com:8080/x.ts") == p("example.com_8080", "x.ts")

    def test_banned_characters_in_path_and_query(self):
        assert module_specifier_to_path("https://example.com/a:b?c.ts") == p("example.com", "a_b_c.ts")

    def test_default_port_is_dropped(self):
        assert module_specifier_to_path("https://example.com:443/x.ts") == p("example.com", "x.ts")
        assert module_specifier_to_path("http://localhost:80/x.ts") == p("localhost", "x.ts")

    def test_non_default_port_for_scheme_is_kept(self):
        assert module_specifier_to_path("http://localhost:443/x.ts") == p("localhost_443", "x.ts")

    def test_hostname_is_lowercased(self):
        assert module_specifier_to_path("https://EXAMPLE.com/A.ts") == p("example.com", "A.ts")

    def test_ipv6_host_is_sanitized(self):
        assert module_specifier_to_path("http://[::1]:8000/mod.ts") == p("[__1]_8000", "mod.ts")

    def test_empty_path_yields_hostname_only(self):
        assert module_specifier_to_path("https://example.com") == "example.com"
        assert module_specifier_to_path("https://example.com/") == "example.com"

    def test_empty_segments_are_dropped(self):
        assert module_specifier_to_path("https://example.com//a///b.ts") == p("example.com", "a", "b.ts")

    def test_dot_segments_are_resolved(self):
        assert module_specifier_to_path("https://example.com/a/./c/../b.ts") == p("example.com", "a", "b.ts")
        assert module_specifier_to_path("https://example.com/../../b.ts") == p("example.com", "b.ts")

    def test_fragment_is_dropped(self):
        assert module_specifier_to_path("https://example.com/a.ts#frag") == p("example.com", "a.ts")

    def test_query_slashes_do_not_create_directories(self):
        assert module_specifier_to_path("https://example.com/a.ts?x=/y") == p("example.com", "a.ts_x=_y")

    def test_query_without_path_is_dropped(self):
        assert module_specifier_to_path("https://example.com/?v=1") == "example.com"
        assert module_specifier_to_path("https://example.com?v=1") == "example.com"

    def test_file_url_has_no_host_component(self):
        assert module_specifier_to_path("file:///home/user/mod.ts") == p("home", "user", "mod.ts")

    def test_relative_specifier_resolves_against_base(self):
        base = "file:///work/proj/"
        assert module_specifier_to_path("./lib/mod.ts", base) == p("work", "proj", "lib", "mod.ts")
        assert module_specifier_to_path("../x.ts", base) == p("work", "x.ts")

    def test_relative_specifier_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        expected_prefix = str(tmp_path.resolve()).lstrip(os.sep)
        assert module_specifier_to_path("mod.ts") == p(expected_prefix, "mod.ts")

    def test_non_ascii_path_segments_are_percent_encoded(self):
        assert module_specifier_to_path("https://example.com/ü.ts") == p("example.com", "%C3%BC.ts")
        assert module_specifier_to_path("https://example.com/ü:ñ/😀?.ts") == p(
            "example.com", "%C3%BC_%C3%B1", "%F0%9F%98%80_.ts"
        )

    def test_spaces_are_percent_encoded(self):
        assert module_specifier_to_path("https://example.com/a b.ts") == p("example.com", "a%20b.ts")
        assert module_specifier_to_path("https://example.com/a.ts?q=a b") == p("example.com", "a.ts_q=a%20b")

    def test_existing_escapes_are_kept(self):
        assert module_specifier_to_path("https://example.com/a%20b.ts") == p("example.com", "a%20b.ts")

    def test_backslash_is_a_path_separator(self):
        assert module_specifier_to_path("https://example.com/a\\b.ts") == p("example.com", "a", "b.ts")

    def test_encoded_dot_segments_are_resolved(self):
        assert module_specifier_to_path("https://example.com/a/%2e%2E/b.ts") == p("example.com", "b.ts")
        assert module_specifier_to_path("https://example.com/a/%2e/b.ts") == p("example.com", "a", "b.ts")

    def test_non_ascii_hostname_is_punycoded(self):
        assert module_specifier_to_path("https://bücher.example/x.ts") == p("xn--bcher-kva.example", "x.ts")

    def test_idempotent(self):
        specifier = "https://deno.land/std@0.150.0/path/mod.ts"
        assert module_specifier_to_path(specifier) == module_specifier_to_path(specifier)

    @pytest.mark.parametrize(
        "specifier",
        [
            "https://example.com:99999/x.ts",
            "https://example.com:abc/x.ts",
            "http://[::1/x.ts",
        ],
    )
    def test_invalid_specifier_raises(self, specifier):
        with pytest.raises(InvalidSpecifierError):
            module_specifier_to_path(specifier)

    def test_no_banned_characters_in_any_segment(self):
        specifiers = [
            "https://example.com/a<b>/c|d.ts",
            "https://example.com/a*b/c?d=e:f",
            "https://exa*mple.com/x.ts",
            "http://user:pw@example.com:8080/a\\b.ts",
            "https://example.com/%3A/x.ts?q=<>",
            "file:///C:/deps/mod.ts",
            "./rel:ative/mod?.ts",
        ]
        for specifier in specifiers:
            path = module_specifier_to_path(specifier, "file:///base/")
            for segment in path.split(os.sep):
                assert not any(c in BANNED_SEGMENT_CHARS for c in segment), (specifier, path)


class TestResolveSpecifier:
    """Tests for resolving specifiers against a base URL."""

    def test_absolute_url_unchanged(self):
        assert resolve_specifier("https://example.com/a.ts", "file:///work/") == "https://example.com/a.ts"

    def test_relative_path(self):
        assert resolve_specifier("lib/a.ts", "file:///work/") == "file:///work/lib/a.ts"

    def test_directory_file_url_ends_with_slash(self, tmp_path):
        url = directory_file_url(str(tmp_path))
        assert url.startswith("file://")
        assert url.endswith("/")

    def test_file_url_directory_round_trips(self, tmp_path):
        directory = file_url_directory(directory_file_url(str(tmp_path)))
        assert os.path.samefile(directory, tmp_path)

    def test_file_url_directory_of_other_bases(self):
        assert file_url_directory(None) is None
        assert file_url_directory("https://example.com/") is None
