"""Language resolution from a caller hint and the source content."""

from __future__ import annotations

import logging
import re
from enum import Enum

logger = logging.getLogger(__name__)


class Language(str, Enum):
    """Languages the resolver can report."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    UNKNOWN = "unknown"


SUPPORTED_LANGUAGES = frozenset({Language.JAVASCRIPT, Language.TYPESCRIPT})

_HINT_MAP: dict[str, Language] = {
    "javascript": Language.JAVASCRIPT,
    "js": Language.JAVASCRIPT,
    "jsx": Language.JAVASCRIPT,
    "mjs": Language.JAVASCRIPT,
    "cjs": Language.JAVASCRIPT,
    "typescript": Language.TYPESCRIPT,
    "ts": Language.TYPESCRIPT,
    "tsx": Language.TYPESCRIPT,
    "mts": Language.TYPESCRIPT,
    "cts": Language.TYPESCRIPT,
}

_TYPESCRIPT_PATTERNS = tuple(
    re.compile(p)
    for p in (
        r"\binterface\s+\w+",
        r"\btype\s+\w+\s*=",
        r"\benum\s+\w+",
        r"\b(?:private|public|protected|readonly)\s+\w+",
        r"\b(?:const|let|var)\s+\w+\s*:\s*\w+",
        r"\)\s*:\s*\w+(?:\[\])?\s*[{=]",
        r"\bas\s+(?:string|number|boolean|any|unknown|const)\b",
        r"\w+<\w+(?:\[\])?>\s*\(",
    )
)

_JAVASCRIPT_PATTERNS = tuple(
    re.compile(p)
    for p in (
        r"\bfunction\s+\w+",
        r"\b(?:const|let|var)\s+\w+",
        r"\bclass\s+\w+",
        r"=>",
        r"\bimport\s+.*\bfrom\b",
        r"\bexport\s+(?:default|const|function|class)",
        r"\brequire\(\s*['\"]",
        r"\bdocument\.\w+",
    )
)


class LanguageResolver:
    """Resolves the language of a source text.

    The hint may be a language name, an alias or a file extension (with or
    without the leading dot). When the hint is not recognised the content is
    classified instead. Never raises: unrecognised input resolves to
    Language.UNKNOWN.
    """

    def resolve(self, text: str, hint: str | None = None) -> Language:
        """Resolve the language for text, preferring a recognised hint."""
        if hint:
            # "ts", ".ts" and "app.ts" all reduce to "ts"
            key = hint.strip().lower().rsplit(".", 1)[-1]
            if key in _HINT_MAP:
                return _HINT_MAP[key]

        language = self._detect_from_content(text)
        logger.debug(
            f"Resolved language from content: {language.value} (hint={hint!r})"
        )
        return language

    def is_supported(self, language: Language) -> bool:
        """Check whether a resolved language can be scanned."""
        return language in SUPPORTED_LANGUAGES

    def _detect_from_content(self, text: str) -> Language:
        if not text or not text.strip():
            return Language.UNKNOWN

        if any(p.search(text) for p in _TYPESCRIPT_PATTERNS):
            return Language.TYPESCRIPT
        if any(p.search(text) for p in _JAVASCRIPT_PATTERNS):
            return Language.JAVASCRIPT
        return Language.UNKNOWN
