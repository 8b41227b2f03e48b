"""Prompts for contextual security analysis."""

SYSTEM_PROMPT = (
    "You are a security expert analyzing code for vulnerabilities. "
    "Always respond with valid JSON arrays only."
)


def number_source_lines(lines: tuple[str, ...]) -> str:
    """Render source lines with 1-indexed line numbers, null bytes removed."""
    width = len(str(len(lines)))
    return "\n".join(
        f"{number:>{width}} | {line.replace(chr(0), '')}"
        for number, line in enumerate(lines, start=1)
    )


def get_security_analysis_prompt(lines: tuple[str, ...], language: str) -> str:
    """Generate the contextual security analysis prompt for one source text.

    Args:
        lines: Source lines, in order
        language: Resolved language name (e.g. 'javascript')

    Returns:
        Formatted analysis prompt for the LLM

    """
    numbered_source = number_source_lines(lines)

    return f"""Analyze the following {language} code for security vulnerabilities.

**CODE (line numbers on the left):**
{numbered_source}

**ANALYSIS TASK:**
Identify security vulnerabilities that depend on how data flows through this code, such as injection, cross-site scripting, broken authentication, insecure cryptography, sensitive data exposure and insecure deserialization. Classify each one by its OWASP Top 10 (2021) category.

**GUIDELINES:**
- Report only real, exploitable issues; do not report style problems
- Use the line numbers shown on the left
- Report each issue once, on the line where it occurs

**RESPONSE FORMAT:**
Respond with a JSON array only (no markdown formatting). Return [] when there are no issues:

[
  {{
    "title": "Short issue title",
    "description": "Detailed explanation of the vulnerability",
    "severity": "critical" | "high" | "medium" | "low" | "info",
    "category": "A03:2021 - Injection",
    "line": 1,
    "columnStart": 0,
    "columnEnd": 10,
    "fix": "How to fix the vulnerability"
  }}
]

columnStart and columnEnd are optional.

Provide your analysis:"""
