"""Tests for language resolution."""

import pytest

from security_scan.languages import Language, LanguageResolver


class TestLanguageResolverHints:
    """Test resolution from caller hints."""

    @pytest.mark.parametrize(
        ("hint", "expected"),
        [
            ("javascript", Language.JAVASCRIPT),
            ("JavaScript", Language.JAVASCRIPT),
            ("js", Language.JAVASCRIPT),
            (".jsx", Language.JAVASCRIPT),
            ("server.mjs", Language.JAVASCRIPT),
            ("typescript", Language.TYPESCRIPT),
            ("ts", Language.TYPESCRIPT),
            (".tsx", Language.TYPESCRIPT),
            ("src/app.component.ts", Language.TYPESCRIPT),
        ],
    )
    def test_recognised_hints(self, hint: str, expected: Language) -> None:
        """Test names, aliases, extensions and file names."""
        resolver = LanguageResolver()

        assert resolver.resolve("x = 1", hint) == expected

    def test_hint_wins_over_content(self) -> None:
        """Test a recognised hint is not second-guessed by the content."""
        resolver = LanguageResolver()
        typescript_source = "interface User { name: string }"

        assert resolver.resolve(typescript_source, "js") == Language.JAVASCRIPT


class TestLanguageResolverContent:
    """Test content classification when the hint is not recognised."""

    def test_detects_typescript_constructs(self) -> None:
        """Test TypeScript-only syntax is classified as TypeScript."""
        resolver = LanguageResolver()
        source = "const count: number = 1;\nfunction f(a: string): void {}"

        assert resolver.resolve(source, "auto") == Language.TYPESCRIPT

    def test_detects_javascript(self) -> None:
        """Test plain JavaScript is classified as JavaScript."""
        resolver = LanguageResolver()
        source = "const handler = (req, res) => res.send('ok');"

        assert resolver.resolve(source, "python") == Language.JAVASCRIPT

    def test_unrecognised_content_resolves_to_unknown(self) -> None:
        """Test the explicit unknown tag instead of an exception."""
        resolver = LanguageResolver()

        assert resolver.resolve("SELECT 1;", "sql") == Language.UNKNOWN
        assert resolver.resolve("", None) == Language.UNKNOWN


class TestLanguageSupport:
    """Test the supported language set."""

    def test_only_javascript_and_typescript_are_supported(self) -> None:
        """Test is_supported."""
        resolver = LanguageResolver()

        assert resolver.is_supported(Language.JAVASCRIPT)
        assert resolver.is_supported(Language.TYPESCRIPT)
        assert not resolver.is_supported(Language.UNKNOWN)
