from __future__ import annotations

import json
from typing import Any

from .field_filter import OMITTED

EXCLUDED_MESSAGE = "(entire object was excluded)"


def read_json_content(file_obj):
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return json.loads(content)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def parse_json_text(text: str) -> Any:
    """Parse JSON typed into a text box. Raises ValueError on invalid input."""
    if text is None or not text.strip():
        raise ValueError("No JSON input.")
    return json.loads(text)


def dump_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def render_filter_output(value: Any) -> str:
    """Render a filter result for display, spelling out a fully excluded value."""
    if value is OMITTED:
        return EXCLUDED_MESSAGE
    return dump_json(value)
