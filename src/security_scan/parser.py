"""Line-indexed parsing of source text."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from security_scan.languages import Language

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token with its 1-indexed line and 0-indexed column."""

    type: str
    value: str
    line: int
    column: int


@dataclass(frozen=True)
class ParsedSource:
    """Source text split into lines, plus best-effort tokens.

    ``lines[i]`` is line ``i + 1`` of the source; empty lines are kept so
    indices always line up with reported line numbers.
    """

    raw: str
    lines: tuple[str, ...]
    tokens: tuple[Token, ...] = field(default=())
    language: Language = Language.UNKNOWN

    @property
    def line_count(self) -> int:
        """Number of lines in the source."""
        return len(self.lines)

    def line_text(self, line: int) -> str:
        """Return the text of a 1-indexed line, or "" when out of range."""
        if 1 <= line <= len(self.lines):
            return self.lines[line - 1]
        return ""


# Earlier entries win when two patterns start at the same column
_TOKEN_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("comment", re.compile(r"//.*$|/\*.*?\*/")),
    ("string", re.compile(r"([\"'`])(?:\\.|(?!\1).)*\1")),
    (
        "keyword",
        re.compile(
            r"\b(?:const|let|var|function|class|if|else|for|while|return|import"
            r"|export|async|await|try|catch|throw|new|this|super|extends"
            r"|implements|interface|type|enum|public|private|protected|static"
            r"|readonly)\b"
        ),
    ),
    ("number", re.compile(r"\b\d+(?:\.\d+)?\b")),
    ("identifier", re.compile(r"[a-zA-Z_$][a-zA-Z0-9_$]*")),
    ("operator", re.compile(r"[+\-*/%=<>!&|^~?:]+")),
    ("punctuation", re.compile(r"[{}()\[\];,.]")),
)


class SourceParser:
    """Splits source text into lines and tokens.

    parse() never raises; if tokenisation fails the line split is returned
    with an empty token tuple.
    """

    def parse(self, text: str, language: Language) -> ParsedSource:
        """Parse text for the given language."""
        lines = tuple(text.split("\n"))
        try:
            tokens = tuple(self._tokenise(lines))
        except Exception as e:
            logger.warning(f"Tokenisation failed for {language.value} source: {e}")
            tokens = ()
        return ParsedSource(raw=text, lines=lines, tokens=tokens, language=language)

    def _tokenise(self, lines: tuple[str, ...]) -> list[Token]:
        tokens: list[Token] = []
        for line_number, line in enumerate(lines, start=1):
            candidates: list[tuple[int, int, str, str]] = []
            for priority, (token_type, pattern) in enumerate(_TOKEN_PATTERNS):
                for match in pattern.finditer(line):
                    if match.group(0):
                        candidates.append(
                            (match.start(), priority, token_type, match.group(0))
                        )

            candidates.sort()
            covered_until = 0
            for column, _, token_type, value in candidates:
                if column < covered_until:
                    continue
                tokens.append(Token(token_type, value, line_number, column))
                covered_until = column + len(value)
        return tokens
