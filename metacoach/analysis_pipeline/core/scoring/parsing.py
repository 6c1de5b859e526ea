"""
Pattern-based extraction of scores and findings from free-text model replies.

The vision model's output format is not machine-enforced, so nothing here
raises on malformed text: missing numbers fall back to a neutral default and
missing lists come back empty.
"""

import math
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

DEFAULT_SCORE = 50
MAX_LIST_ITEMS = 5

_LIST_MARKER = re.compile(r"^[-*•\d.)\s]+")


@dataclass(frozen=True)
class ScoreFieldSpec:
    """
    One numeric field to pull out of a reply.

    name:
        Key in the returned mapping.
    label:
        Regular expression for the label preceding the number, e.g. r"visual\\s+appeal".
    default:
        Value used when the label is absent. None marks a derived field that
        the caller computes itself.
    """
    name: str
    label: str
    default: Optional[int] = DEFAULT_SCORE

    @property
    def pattern(self) -> "re.Pattern[str]":
        return re.compile(rf"{self.label}[:\s]+(\d+)", re.IGNORECASE | re.MULTILINE)


def parse_score_fields(text: str, field_specs: Sequence[ScoreFieldSpec]) -> Dict[str, Optional[int]]:
    """
    Extract `<label>[:\\s]+<integer>` values from text, first match per field.

    Args:
        text: Model reply
        field_specs: Fields to look for

    Returns:
        Dict mapping each field name to the parsed integer or its default
    """
    values: Dict[str, Optional[int]] = {}
    for spec in field_specs:
        match = spec.pattern.search(text or "")
        values[spec.name] = int(match.group(1)) if match else spec.default
    return values


def rounded_mean(values: Sequence[int]) -> int:
    """Arithmetic mean rounded half-up."""
    if not values:
        return DEFAULT_SCORE
    return int(math.floor(sum(values) / len(values) + 0.5))


def extract_list_items(text: str, keyword: str, limit: int = MAX_LIST_ITEMS) -> List[str]:
    """
    Collect findings mentioning `keyword`, case-insensitively, in document order.

    Numbered or bulleted lines containing the keyword are preferred. When
    there are none, any line mentioning the keyword is used with its list
    marker stripped.
    """
    if not text:
        return []

    bulleted = re.compile(
        rf"^[ \t]*(?:\d+\.|[-*•])[ \t]*(.*{re.escape(keyword)}.*)$",
        re.IGNORECASE | re.MULTILINE,
    )
    items = [match.group(1).strip() for match in bulleted.finditer(text)]
    items = [item for item in items if item]

    if not items:
        lowered = keyword.lower()
        for line in text.splitlines():
            if lowered in line.lower():
                cleaned = _LIST_MARKER.sub("", line).strip()
                if cleaned:
                    items.append(cleaned)

    return items[:limit]
