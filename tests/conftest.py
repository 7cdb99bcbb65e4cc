import os
import sys

import pytest

# Ensure the project root is on sys.path so tests can import
# ``dim_clustering_analysis`` without installing the package.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def _sequential_runner(monkeypatch):
    """Keep the worker-count override from leaking in from the environment."""
    monkeypatch.delenv("DCA_N_JOBS", raising=False)
