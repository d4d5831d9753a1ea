"""
Tolerant extraction of JSON objects from model output.

Models asked for JSON still occasionally wrap it in markdown fences, prefix
it with prose or a bare ``json`` token. The helpers here produce candidate
substrings in order of likelihood and return the first one that decodes to
an object.
"""

import json
import re
from typing import Any, Dict, List, Optional

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_WHOLE_FENCE = re.compile(r"^\s*```[a-zA-Z0-9_+#-]*\s*([\s\S]*?)\s*```\s*$")


def extract_fenced_block(text: str) -> Optional[str]:
    """Return the body of the first markdown code fence, if any."""
    blocks = _FENCED_BLOCK.findall(text)
    return blocks[0].strip() if blocks else None


def strip_code_fences(text: str) -> str:
    """Drop a code fence that wraps the whole text."""
    if not text:
        return ""
    fenced = _WHOLE_FENCE.match(text)
    if fenced:
        return fenced.group(1).strip()
    return text.strip()


def extract_balanced_json_span(text: str) -> Optional[str]:
    """Best-effort extraction of the first balanced top-level JSON object/array."""
    if not text:
        return None

    starts = []
    first_obj = text.find("{")
    first_arr = text.find("[")
    if first_obj != -1:
        starts.append((first_obj, "{", "}"))
    if first_arr != -1:
        starts.append((first_arr, "[", "]"))
    if not starts:
        return None

    start_idx, open_ch, close_ch = min(starts, key=lambda x: x[0])
    depth = 0
    in_string = False
    escape = False
    for i in range(start_idx, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return text[start_idx : i + 1]
    return None


def json_candidates(raw_text: str) -> List[str]:
    """Candidate substrings of ``raw_text`` that may hold the JSON payload."""
    text = (raw_text or "").strip()
    if not text:
        return []

    candidates: List[str] = []
    fenced = extract_fenced_block(text)
    if fenced:
        candidates.append(fenced)

    candidates.append(text)

    balanced = extract_balanced_json_span(text)
    if balanced:
        candidates.append(balanced)

    # Some models emit a leading "json" token before the object
    if text.lower().startswith("json"):
        trimmed = text[4:].lstrip(": \n\r\t")
        if trimmed:
            candidates.append(trimmed)
            balanced_trimmed = extract_balanced_json_span(trimmed)
            if balanced_trimmed:
                candidates.append(balanced_trimmed)

    seen = set()
    unique: List[str] = []
    for candidate in candidates:
        c = candidate.strip()
        if not c or c in seen:
            continue
        seen.add(c)
        unique.append(c)
    return unique


def parse_json_object(raw_text: str) -> Dict[str, Any]:
    """
    Decode the first JSON object found in ``raw_text``.

    Raises:
        ValueError: If no candidate decodes to an object
    """
    candidates = json_candidates(raw_text)
    if not candidates:
        raise ValueError("Model returned empty content")

    errors: List[str] = []
    for candidate in candidates:
        try:
            parsed = json.loads(candidate, strict=False)
        except json.JSONDecodeError as e:
            errors.append(str(e))
            continue
        if isinstance(parsed, dict):
            return parsed
        errors.append(f"expected a JSON object, got {type(parsed).__name__}")

    raise ValueError("Unable to parse JSON response: " + " | ".join(errors[:3]))
