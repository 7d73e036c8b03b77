"""
Settings for the expense tracker

Read from environment variables, with a .env file loaded first:
- DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD: PostgreSQL connection
- BUDGET_WARN_THRESHOLD: fraction of a budget at which to warn (0.80 = 80%)
"""
import os
from typing import Dict

from dotenv import load_dotenv


# Load environment variables
load_dotenv()

DEFAULT_WARN_THRESHOLD = 0.80


def get_db_settings() -> Dict:
    """Connection settings for psycopg2.connect, local dev values by default"""
    return {
        'host': os.getenv('DB_HOST', 'localhost'),
        'port': int(os.getenv('DB_PORT', '5432')),
        'database': os.getenv('DB_NAME', 'expense_db'),
        'user': os.getenv('DB_USER', 'expense_user'),
        'password': os.getenv('DB_PASSWORD', 'expense_password_local_dev'),
    }


def get_warn_threshold() -> float:
    """
    Budget warning threshold from BUDGET_WARN_THRESHOLD

    Values that are not numbers, or not between 0 and 1, fall back to 0.80.
    """
    raw = os.getenv('BUDGET_WARN_THRESHOLD')
    if not raw:
        return DEFAULT_WARN_THRESHOLD
    try:
        threshold = float(raw)
    except ValueError:
        print(f"⚠️  Invalid BUDGET_WARN_THRESHOLD '{raw}', using {DEFAULT_WARN_THRESHOLD}")
        return DEFAULT_WARN_THRESHOLD
    if not 0 < threshold <= 1:
        print(f"⚠️  BUDGET_WARN_THRESHOLD must be between 0 and 1, using {DEFAULT_WARN_THRESHOLD}")
        return DEFAULT_WARN_THRESHOLD
    return threshold
