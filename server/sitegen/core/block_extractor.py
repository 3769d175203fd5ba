# sitegen/core/block_extractor.py
"""
Pulls the html / css / js fenced blocks out of raw model text.

Matching rules:
- a fence must open a line: ``` immediately followed by the label and a newline
- labels are case-insensitive; ``js`` and ``javascript`` both fill the script field
- the body runs (non-greedy) to the next ``` and is kept verbatim
- when a label appears more than once the last block wins
- unterminated or nested fences are not recovered, they just don't match
"""

import re
from typing import List, Tuple

from pydantic import BaseModel

from sitegen.models import CodeBundle, GenerationStatus

FENCE_RE = re.compile(r"^```(html|css|javascript|js)\n(.*?)```", re.IGNORECASE | re.MULTILINE | re.DOTALL)

_LABEL_TO_FIELD = {
    "html": "html",
    "css": "css",
    "js": "js",
    "javascript": "js",
}
_FIELDS = ("html", "css", "js")


class ExtractionResult(BaseModel):
    bundle: CodeBundle
    missing: List[str] = []


def extract_blocks(text: str) -> ExtractionResult:
    found = {}
    for match in FENCE_RE.finditer(text or ""):
        field = _LABEL_TO_FIELD[match.group(1).lower()]
        found[field] = match.group(2)
    missing = [f for f in _FIELDS if f not in found]
    return ExtractionResult(bundle=CodeBundle(**found), missing=missing)


def parse_code_blocks(text: str) -> CodeBundle:
    return extract_blocks(text).bundle


def classify(raw: str, result: ExtractionResult) -> Tuple[GenerationStatus, List[str]]:
    """
    Tell "model returned nothing" apart from "model returned something we
    could only partly parse".
    """
    if not raw or not raw.strip():
        return GenerationStatus.UPSTREAM_EMPTY, ["model returned no text"]
    if result.missing:
        warnings = [f"no {label} block found in model output" for label in result.missing]
        return GenerationStatus.PARTIAL_PARSE, warnings
    return GenerationStatus.SUCCESS, []
