"""Shared pytest fixtures."""
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Make the package importable without installing it
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from smart_expense.core.auto_categorizer import AutoCategorizer


@pytest.fixture
def categorizer():
    """Fresh categorizer with nothing learned"""
    return AutoCategorizer()


@pytest.fixture
def mock_conn():
    """psycopg2-like connection whose cursor() always returns the same mock"""
    conn = MagicMock()
    conn.cursor.return_value = MagicMock()
    return conn
