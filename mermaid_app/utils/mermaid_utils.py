import re
from dataclasses import dataclass
from typing import Optional

# Keywords a Mermaid diagram body must start with, compared case-insensitively
DIAGRAM_STARTERS = (
    "graph", "flowchart", "sequenceDiagram", "classDiagram",
    "stateDiagram", "erDiagram", "journey", "gantt", "pie",
    "gitGraph", "mindmap", "timeline", "quadrantChart", "C4Context",
)

_LOWER_STARTERS = tuple(starter.lower() for starter in DIAGRAM_STARTERS)

_LEADING_FENCE = re.compile(r"^```(?:mermaid)?\s*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?\s*```\s*$")

FALLBACK_PROMPT_LIMIT = 50


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None


def _starts_with_diagram_type(line: str) -> bool:
    return line.strip().lower().startswith(_LOWER_STARTERS)


def extract_mermaid_code(raw_text: str) -> str:
    """
    Strip code fences and any preamble from a model response.

    Only the first leading fence and the last trailing fence are removed.
    Everything before the first line that starts with a diagram keyword is
    dropped; when no such line exists the text is returned as is and the
    validator decides what to do with it.

    Args:
        raw_text: Unprocessed model output

    Returns:
        The isolated diagram body, or an empty string for empty input
    """
    if not raw_text:
        return ""

    code = raw_text.strip()
    code = _LEADING_FENCE.sub("", code, count=1)
    code = _TRAILING_FENCE.sub("", code, count=1)
    code = code.strip()

    lines = code.split("\n")
    start_index = 0
    for index, line in enumerate(lines):
        if _starts_with_diagram_type(line):
            start_index = index
            break

    return "\n".join(lines[start_index:]).strip()


def validate_mermaid_syntax(code: str) -> ValidationResult:
    """Cheap structural gate for Mermaid text. Not a grammar check."""
    if not code or not code.strip():
        return ValidationResult(is_valid=False, error="Empty diagram code")

    content_lines = [line for line in code.split("\n") if line.strip()]

    if not _starts_with_diagram_type(content_lines[0]):
        return ValidationResult(
            is_valid=False,
            error=f"Diagram must start with a valid type: {', '.join(DIAGRAM_STARTERS)}",
        )

    if len(content_lines) < 2:
        return ValidationResult(is_valid=False, error="Diagram appears incomplete (too few lines)")

    return ValidationResult(is_valid=True)


def create_fallback_diagram(prompt: str) -> str:
    """
    Build a static flowchart that explains the generation failed.

    The prompt is embedded in the request node with double quotes
    backslash-escaped (nothing else is escaped) and capped at 50 characters.
    A cut that lands inside an escape pair drops the lone backslash.
    """
    safe_prompt = prompt.replace('"', '\\"')[:FALLBACK_PROMPT_LIMIT]
    if safe_prompt.endswith("\\"):
        safe_prompt = safe_prompt[:-1]

    return f"""flowchart TD
    A["Request: {safe_prompt}"] --> B["Unable to generate diagram"]
    B --> C["Please try:"]
    C --> D["1. Simplify your request"]
    C --> E["2. Be more specific"]
    C --> F["3. Use different keywords"]

    style B fill:#ffcccc
    style C fill:#ffffcc"""
