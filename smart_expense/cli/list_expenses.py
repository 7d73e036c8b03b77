#!/usr/bin/env python3
"""
Expense listing CLI

Lists (optionally filtered) expenses with per-category totals.
Deleting an expense does not make the categorizer forget it.
"""
import argparse
import sys

from smart_expense.storage.expense_store import ExpenseStore
from smart_expense.utils.db_connection import get_db_connection


def main():
    parser = argparse.ArgumentParser(description='List expenses')
    parser.add_argument('--search', help='Only show descriptions containing this text')
    parser.add_argument('--delete', type=int, metavar='ID', help='Delete the expense with this ID first')
    
    args = parser.parse_args()
    
    try:
        conn = get_db_connection()
    except Exception as e:
        print(f"❌ Connection failed: {e}")
        sys.exit(1)
    
    try:
        store = ExpenseStore(conn)
        
        if args.delete is not None:
            store.delete_expense(args.delete)
            print(f"🗑  Deleted expense #{args.delete}")
        
        expenses = store.search_expenses(args.search)
        
        print("\n" + "=" * 80)
        print("💰 EXPENSES")
        print("=" * 80)
        for expense in expenses:
            print(f"{expense.expense_id:>5}  {expense.description:<40} {expense.category or '':<15} ₹{expense.amount:>10.2f}")
        print("-" * 80)
        total = sum(e.amount for e in expenses) if args.search else store.get_total()
        print(f"Total: ₹{total:.2f}")
        
        print(f"\n📊 Category Breakdown:")
        for category, total in sorted(store.get_category_totals().items(),
                                      key=lambda x: x[1], reverse=True):
            print(f"  • {category}: ₹{total:.2f}")
        print("=" * 80)
        
    except Exception as e:
        print(f"\n❌ Listing failed: {e}")
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
