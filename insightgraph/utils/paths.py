#!/usr/bin/env python
"""
paths.py – single source of truth for project folders.
           Import these constants everywhere.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()  # INSIGHTGRAPH_* settings may live in .env

# Try to get root from environment variable first
ROOT = os.environ.get('INSIGHTGRAPH_ROOT')
if ROOT:
    ROOT = Path(ROOT).resolve()
else:
    # Fallback: look for a marker file (like .git or pyproject.toml) in parent directories
    current = Path(__file__).resolve()
    while current.parent != current:
        if any((current / marker).exists() for marker in ['.git', 'pyproject.toml']):
            ROOT = current
            break
        current = current.parent
    else:
        # installed outside a checkout: work relative to the caller
        ROOT = Path.cwd().resolve()

LOG_DIR     = ROOT / "logs"
CONFIG_DIR  = ROOT / "config"
OUTPUT_DIR  = ROOT / "outputs"

DEFAULT_CONFIG = CONFIG_DIR / "insightgraph.yaml"


def export_stem(path: Path | None) -> str:
    """Return the file stem exports are named after.

    Text typed on the command line has no source file, so it is exported as
    ``insightgraph``.
    """
    if path is None:
        return "insightgraph"
    return Path(path).stem or "insightgraph"
