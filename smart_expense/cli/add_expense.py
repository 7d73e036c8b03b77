#!/usr/bin/env python3
"""
Add expense CLI

Suggests a category when none is given, stores the expense, learns from it
and reports the category's budget status.
"""
import argparse
import sys

from smart_expense.core.auto_categorizer import AutoCategorizer
from smart_expense.core.budget_status import check_budget
from smart_expense.storage.expense_store import Expense, ExpenseStore
from smart_expense.utils.config import get_warn_threshold
from smart_expense.utils.db_connection import get_db_connection


def add_expense(store: ExpenseStore,
                categorizer: AutoCategorizer,
                description: str,
                amount: float,
                category: str = None) -> Expense:
    """
    Store an expense and teach the categorizer about it

    Args:
        store: Expense store
        categorizer: Categorizer holding the current learned state
        description: Expense description
        amount: Expense amount
        category: Confirmed category (suggested when None)

    Returns:
        The stored expense
    """
    if category is None:
        category = categorizer.suggest_category(description)

    expense = Expense(expense_id=None, description=description, category=category, amount=amount)

    previous = categorizer.snapshot()
    categorizer.learn(description, category, amount)
    try:
        store.insert_expense_with_learning(expense, categorizer.snapshot())
    except Exception:
        # Nothing was stored, so forget the expense again
        categorizer.restore(previous)
        raise
    return expense


def report_budget(store: ExpenseStore, category: str, warn_threshold: float):
    """Print the budget status for a category, if it has a budget"""
    spent = store.get_category_totals().get(category, 0.0)
    status = check_budget(category, store.get_budget(category), spent, warn_threshold)
    if status is not None:
        print(f"\n{status.message()}")


def main():
    parser = argparse.ArgumentParser(description='Add an expense')
    parser.add_argument('description', help='Expense description')
    parser.add_argument('amount', type=float, help='Expense amount')
    parser.add_argument('--category', help='Category (default: auto-suggest)')
    
    args = parser.parse_args()
    
    print("🔌 Connecting to database...")
    try:
        conn = get_db_connection()
    except Exception as e:
        print(f"   ❌ Connection failed: {e}")
        sys.exit(1)
    
    try:
        store = ExpenseStore(conn)
        categorizer = AutoCategorizer.from_state(store.load_learned_state())
        
        expense = add_expense(store, categorizer, args.description, args.amount, args.category)
        source = "given" if args.category else "suggested"
        print(f"✅ Added #{expense.expense_id}: {expense.description} → {expense.category} ({source})  ₹{expense.amount:.2f}")
        
        report_budget(store, expense.category, get_warn_threshold())
        
    except Exception as e:
        print(f"\n❌ Add failed: {e}")
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
