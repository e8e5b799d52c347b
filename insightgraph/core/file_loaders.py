"""
file_loaders.py - Loading prose from text and crawler JSON files

This module handles:
- Plain .txt / .md files (BOM-safe UTF-8)
- Crawler-style .json (list of dicts, or a dict with a "chapters" list)
- HTML stripping, mojibake repair and Unicode normalisation
"""

import json
import pathlib
from typing import Iterable, List

from insightgraph.core.errors import InputLoadError
from insightgraph.utils.io_helpers import read_utf8
from insightgraph.utils.logging_helper import get_logger
from insightgraph.utils.text_processing import count_words, normalise, strip_html

log = get_logger()

_PREFERRED = ["content", "body", "text"]  # canonical field names
TEXT_SUFFIXES = {".txt", ".md", ".json"}


def _json_blocks(data) -> List[str]:
    if isinstance(data, dict):
        data = data.get("chapters", [data])
    if not isinstance(data, list):
        return []

    blocks: List[str] = []
    for item in data:
        if isinstance(item, str):
            blocks.append(item)
            continue
        if not isinstance(item, dict):
            continue
        for k in _PREFERRED:
            if k in item and isinstance(item[k], str):
                blocks.append(item[k])
                break
    return blocks


def load_text(path: pathlib.Path) -> str:
    """Return plain prose from a .txt/.md file or a crawler .json file.

    Raises:
        InputLoadError: If a JSON file holds no prose, or is not valid JSON
    """
    path = pathlib.Path(path)
    raw = read_utf8(path)

    if path.suffix.lower() != ".json":
        text = normalise(raw)
    else:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InputLoadError(f"{path.name} is not valid JSON: {exc}") from exc
        joined = "\n\n".join(strip_html(b) for b in _json_blocks(data))
        if not joined.strip():
            raise InputLoadError(f"No prose found in {path.name}")
        text = normalise(joined)

    log.info(f"loaded {count_words(text)} words from {path.name}")
    return text


def iter_files(root: pathlib.Path, recursive: bool = False) -> Iterable[pathlib.Path]:
    """Yield loadable files under *root* (or *root* itself), sorted."""
    root = pathlib.Path(root)
    if root.is_file():
        yield root
        return
    pattern = "**/*" if recursive else "*"
    for p in sorted(root.glob(pattern)):
        if p.suffix.lower() in TEXT_SUFFIXES and p.is_file():
            yield p
