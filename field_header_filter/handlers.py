from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

import gradio as gr

from .errors import FieldListSyntaxError
from .field_filter import get_field_filter
from .io_utils import EXCLUDED_MESSAGE, dump_json, parse_json_text, read_json_content, render_filter_output
from .presets import find_preset
from .validation import find_unknown_fields, node_exists

logger = logging.getLogger(__name__)

_EXPLICIT_SPLIT = re.compile(r'[,\n]')

NO_OUTPUT_MESSAGE = "No filtered response available"


def parse_explicit_text(text: Optional[str]) -> List[str]:
    """Split the explicit-fields box on commas and newlines."""
    if not text:
        return []
    entries = [entry.strip() for entry in _EXPLICIT_SPLIT.split(text)]
    return [entry for entry in entries if entry]


def format_unknown_fields_warning(unknown: Dict[str, List[str]]) -> str:
    labels = {'include': 'Inclusion', 'exclude': 'Exclusion', 'explicit': 'Explicit'}
    lines = []
    for kind, label in labels.items():
        fields = unknown.get(kind) or []
        if fields:
            lines.append(f"**{label}:** " + ", ".join(f"`{f}`" for f in fields))
    if not lines:
        return ""
    return "⚠️ Unknown fields (not found in JSON):\n\n" + "\n\n".join(lines)


def apply_filter_handler(json_text, include, exclude, explicit_text):
    """Run the filter on the JSON box.

    Returns (filtered output text, error message, warning update).
    """
    hidden_warning = gr.update(value="", visible=False)

    try:
        data = parse_json_text(json_text)
    except ValueError as e:
        return "", f"Invalid JSON: {str(e)}", hidden_warning

    explicit_fields = parse_explicit_text(explicit_text)

    try:
        field_filter = get_field_filter(include, exclude, explicit_fields)
        unknown = find_unknown_fields(data, include, exclude, explicit_fields)
    except FieldListSyntaxError as e:
        logger.info("Rejected field list: %s", e.message)
        return "", f"Invalid field list: {e.message}", hidden_warning

    warning = format_unknown_fields_warning(unknown)
    if warning:
        logger.info("Unknown fields in filter input: %s", unknown)

    result = field_filter.apply(data)
    warning_update = gr.update(value=warning, visible=True) if warning else hidden_warning
    return render_filter_output(result), "", warning_update


def check_node_handler(node_name, output_text):
    field = (node_name or "").strip()
    if not field:
        return ""

    text = (output_text or "").strip()
    if not text or text == EXCLUDED_MESSAGE:
        return NO_OUTPUT_MESSAGE

    try:
        filtered = parse_json_text(text)
    except ValueError:
        return "Cannot check, invalid filtered response"

    if node_exists(filtered, field):
        return "✅ Exists in response"
    return "❌ Absent in response"


def preset_fields(preset: Dict[str, Any]):
    return (
        dump_json(preset.get('response')),
        preset.get('include', ''),
        preset.get('exclude', ''),
        preset.get('explicit', ''),
    )


def apply_preset_handler(preset_name, presets):
    preset = find_preset(presets or [], preset_name)
    if preset is None:
        return gr.update(), gr.update(), gr.update(), gr.update()
    return preset_fields(preset)


def load_json_file_handler(file_obj):
    if file_obj is None:
        return gr.update(), "No file uploaded."

    try:
        data = read_json_content(file_obj)
    except Exception as e:
        return gr.update(), f"Error parsing JSON: {str(e)}"

    return dump_json(data), "Successfully loaded."
