"""
Smart Expense Tracker - core

Auto-categorization engine, keyword rules and budget checks.
"""

from .keyword_rules import KEYWORD_RULES, DEFAULT_CATEGORIES, DEFAULT_CATEGORY, KeywordRule
from .auto_categorizer import AutoCategorizer, LearnedState, normalize_description
from .budget_status import BudgetStatus, check_budget

__all__ = [
    'KEYWORD_RULES',
    'DEFAULT_CATEGORIES',
    'DEFAULT_CATEGORY',
    'KeywordRule',
    'AutoCategorizer',
    'LearnedState',
    'normalize_description',
    'BudgetStatus',
    'check_budget',
]
