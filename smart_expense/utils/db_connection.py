"""
Database connection for the expense store
"""
from typing import Optional

import psycopg2

from smart_expense.utils.config import get_db_settings


def get_db_connection(**overrides: Optional[object]):
    """
    Open a PostgreSQL connection

    Args:
        **overrides: host, port, database, user or password; None values
            keep the configured setting

    Returns:
        psycopg2 connection object
    """
    settings = get_db_settings()
    settings.update({key: value for key, value in overrides.items() if value is not None})
    return psycopg2.connect(**settings)
