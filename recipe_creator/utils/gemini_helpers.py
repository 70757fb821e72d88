"""Shared Gemini REST payload helpers."""

import re
from typing import Any, Dict, List, Optional

# Markdown code fences the model sometimes wraps its JSON in
_LEADING_FENCE = re.compile(r"^\s*```(?:json)?[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*$")


def build_generate_content_body(
    prompt: str,
    generation_config: Dict[str, Any],
    safety_settings: List[Dict[str, str]],
) -> Dict[str, Any]:
    """Build a generateContent request body with a single text part."""
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
        "safetySettings": safety_settings,
    }


def get_candidate_text(payload: Any) -> Optional[str]:
    """
    Extract candidates[0].content.parts[0].text from a generateContent response.

    Returns None when any step of the path is missing.
    """
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def get_error_message(payload: Any) -> Optional[str]:
    """Extract error.message from a Gemini error body, if there is one."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def strip_code_fences(text: str) -> str:
    """
    Remove a leading ``` / ```json fence and a trailing ``` fence.

    Text without fences is only trimmed.
    """
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()
