import sys
from pathlib import Path

import pytest

# Ensure the project root is on the import path so ``insightgraph`` can be imported
root_path = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(root_path))

from insightgraph.core.analysis.models import CooccurrenceEdge


@pytest.fixture()
def triangle_edges():
    return [
        CooccurrenceEdge("apple", "banana", 1),
        CooccurrenceEdge("apple", "cherry", 1),
        CooccurrenceEdge("banana", "cherry", 1),
    ]
