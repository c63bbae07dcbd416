"""
Parsing of resume-analysis responses from the language model.

The model output is untrusted text. parse_analysis_response turns it into a
tagged result instead of raising:
- ValidatedAnalysis: every required field checked
- ParseError: no JSON object found, or it does not decode
- SchemaError: JSON decoded but a required field is missing or mistyped
"""

import json
from dataclasses import dataclass, field
from typing import Any

DEFAULT_JOB_KEYWORDS = ("Software Developer", "Software Engineer", "Full Stack Developer")
MIN_JOB_KEYWORDS = 3


@dataclass(frozen=True)
class ValidatedAnalysis:
    skills: dict[str, list[str]]  # insertion order preserved
    summary: str
    job_keywords: list[str] = field(default_factory=list)

    def skill_categories(self) -> list[dict[str, Any]]:
        """Skills as an ordered list of {category, items}."""
        return [{"category": name, "items": list(items)} for name, items in self.skills.items()]


@dataclass(frozen=True)
class ParseError:
    reason: str


@dataclass(frozen=True)
class SchemaError:
    reason: str


AnalysisParseResult = ValidatedAnalysis | ParseError | SchemaError


def _extract_balanced(text: str, start: int, open_char: str, close_char: str) -> str | None:
    """Extract balanced brackets/braces starting from position."""
    depth = 0
    in_string = False
    escape_next = False

    for i, char in enumerate(text[start:], start):
        if escape_next:
            escape_next = False
            continue

        if char == '\\' and in_string:
            escape_next = True
            continue

        if char == '"':
            in_string = not in_string
            continue

        if in_string:
            continue

        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    return None


def find_json_object(text: str) -> str | None:
    """First balanced {...} span in text, ignoring commentary around it."""
    if not text:
        return None
    start = text.find('{')
    if start == -1:
        return None
    return _extract_balanced(text, start, '{', '}')


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def parse_analysis_response(text: str) -> AnalysisParseResult:
    """Validate a raw model response against the analysis schema."""
    span = find_json_object(text)
    if span is None:
        return ParseError("No JSON object found in response")

    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        return ParseError(f"Response JSON does not decode: {e}")

    skills = data.get("skills")
    if not isinstance(skills, dict):
        return SchemaError("Invalid or missing skills in response")
    for category, items in skills.items():
        if not _is_string_list(items):
            return SchemaError(f"Skills for category '{category}' must be a list of strings")

    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        return SchemaError("Invalid or missing summary in response")

    # The one tolerated defect: too few keywords falls back to a default list
    keywords = data.get("jobKeywords")
    if not _is_string_list(keywords) or len(keywords) < MIN_JOB_KEYWORDS:
        keywords = list(DEFAULT_JOB_KEYWORDS)

    return ValidatedAnalysis(skills=dict(skills), summary=summary, job_keywords=keywords)
