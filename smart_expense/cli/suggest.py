#!/usr/bin/env python3
"""
Suggestion CLI

Shows the suggested category and amount for a description.
"""
import argparse
import sys

from smart_expense.core.auto_categorizer import AutoCategorizer
from smart_expense.storage.expense_store import ExpenseStore
from smart_expense.utils.db_connection import get_db_connection


def main():
    parser = argparse.ArgumentParser(description='Suggest a category and amount for an expense')
    parser.add_argument('description', help='Expense description')
    parser.add_argument('--show-learned', action='store_true', help='Print all learned associations')
    
    args = parser.parse_args()
    
    try:
        conn = get_db_connection()
    except Exception as e:
        print(f"❌ Connection failed: {e}")
        sys.exit(1)
    
    try:
        categorizer = AutoCategorizer.from_state(ExpenseStore(conn).load_learned_state())
    except Exception as e:
        print(f"❌ Could not load learned data: {e}")
        sys.exit(1)
    finally:
        conn.close()
    
    if args.show_learned:
        categorizer.print_learned_data()
    
    print(f"Category: {categorizer.suggest_category(args.description)}")
    print(f"Amount:   ₹{categorizer.suggest_amount(args.description):.2f}")


if __name__ == "__main__":
    main()
