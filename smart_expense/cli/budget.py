#!/usr/bin/env python3
"""
Budget CLI

Sets category budgets and shows spending against them.
"""
import argparse
import sys

from smart_expense.core.budget_status import check_budget
from smart_expense.core.keyword_rules import DEFAULT_CATEGORIES
from smart_expense.storage.expense_store import ExpenseStore
from smart_expense.utils.config import get_warn_threshold
from smart_expense.utils.db_connection import get_db_connection


def show_budgets(store: ExpenseStore, warn_threshold: float):
    """Print every category's budget and spending"""
    budgets = store.get_all_budgets()
    totals = store.get_category_totals()
    
    print("\n" + "=" * 80)
    print("💵 BUDGETS")
    print("=" * 80)
    
    categories = list(DEFAULT_CATEGORIES) + sorted(set(budgets) - set(DEFAULT_CATEGORIES))
    for category in categories:
        limit = budgets.get(category, 0.0)
        spent = totals.get(category, 0.0)
        status = check_budget(category, limit, spent, warn_threshold)
        if status is None:
            print(f"  {category:<15} no budget      spent ₹{spent:>10.2f}")
            continue
        icon = {"ok": "✅", "warning": "⚠️ ", "exceeded": "❌"}[status.level]
        print(f"{icon} {category:<15} ₹{limit:>10.2f}  spent ₹{spent:>10.2f}  ({status.percentage:.0f}%)")
    
    print("=" * 80)


def main():
    parser = argparse.ArgumentParser(description='Manage category budgets')
    subparsers = parser.add_subparsers(dest='command', required=True)
    
    set_parser = subparsers.add_parser('set', help='Set a monthly budget for a category')
    set_parser.add_argument('category', help='Category name')
    set_parser.add_argument('limit', type=float, help='Budget limit')
    
    subparsers.add_parser('show', help='Show budgets and spending')
    
    args = parser.parse_args()
    
    try:
        conn = get_db_connection()
    except Exception as e:
        print(f"❌ Connection failed: {e}")
        sys.exit(1)
    
    try:
        store = ExpenseStore(conn)
        if args.command == 'set':
            store.set_budget(args.category, args.limit)
            print(f"✅ {args.category} budget set to ₹{args.limit}")
        else:
            show_budgets(store, get_warn_threshold())
    except Exception as e:
        print(f"\n❌ Budget command failed: {e}")
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
