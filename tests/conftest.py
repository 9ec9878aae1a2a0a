import os
import sys

import pytest

# Ensure the repository root is on sys.path for `from hive_engine...` imports,
# and this directory for the shared `helpers` module
TESTS_DIR = os.path.abspath(os.path.dirname(__file__))
REPO_ROOT = os.path.dirname(TESTS_DIR)
for path in (REPO_ROOT, TESTS_DIR):
    if path not in sys.path:
        sys.path.insert(0, path)

from hive_engine.engine.board import Board  # noqa: E402


@pytest.fixture
def empty_board() -> Board:
    return Board.empty()
