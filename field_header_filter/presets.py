from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import settings

logger = logging.getLogger(__name__)


def load_presets(path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Load preview presets.

    The file holds a list of `{"preset": {name, include, exclude, explicit,
    response}}` entries; the inner dicts are returned. Entries without a name
    are skipped.
    """
    path = Path(path) if path is not None else settings.presets_path()
    with open(path, 'r', encoding='utf-8') as f:
        entries = json.load(f)

    presets: List[Dict[str, Any]] = []
    for entry in entries:
        preset = entry.get('preset') if isinstance(entry, dict) else None
        if not isinstance(preset, dict) or not preset.get('name'):
            logger.warning("Skipping malformed preset entry in %s", path)
            continue
        presets.append({
            'name': preset['name'],
            'include': preset.get('include', ''),
            'exclude': preset.get('exclude', ''),
            'explicit': preset.get('explicit', ''),
            'response': preset.get('response'),
        })
    return presets


def find_preset(presets: List[Dict[str, Any]], name: str) -> Optional[Dict[str, Any]]:
    for preset in presets:
        if preset['name'] == name:
            return preset
    return None
