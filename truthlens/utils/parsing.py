import json
import re
from typing import Any, Optional, Dict


def extract_json_block(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Extract the first valid JSON object from model output.

    Balanced ``{...}`` spans are tried in order of their opening brace; a span
    that does not parse is skipped and scanning resumes at the next ``{``.
    """
    if not text:
        return None

    start = text.find("{")
    while start != -1:
        parsed = _parse_balanced(text, start)
        if parsed is not None:
            return parsed
        start = text.find("{", start + 1)
    return None


def _parse_balanced(text: str, start: int) -> Optional[Dict[str, Any]]:
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                candidate = text[start : i + 1]
                try:
                    return json.loads(candidate)
                except json.JSONDecodeError:
                    try:
                        cleaned = re.sub(r"[\x00-\x1f]", "", candidate)
                        return json.loads(cleaned)
                    except json.JSONDecodeError:
                        return None
    return None


def extract_delta_content(event: Any) -> Optional[str]:
    """Pull the incremental text out of a chat-completion stream event."""
    try:
        content = event["choices"][0]["delta"].get("content")
    except (KeyError, IndexError, TypeError, AttributeError):
        return None
    return content if isinstance(content, str) else None


def extract_message_content(data: Any) -> Optional[str]:
    """Pull the assistant text out of a non-streamed chat-completion body."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) and content else None
