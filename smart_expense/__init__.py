"""
Smart Expense Tracker

Expense tracking with an auto-categorizer that suggests a category and an
amount for each new expense and learns from every expense you confirm.
"""

__version__ = "1.0.0"

# Expose main classes for easy imports
from .core.auto_categorizer import AutoCategorizer, LearnedState
from .core.budget_status import check_budget

__all__ = [
    'AutoCategorizer',
    'LearnedState',
    'check_budget',
]
