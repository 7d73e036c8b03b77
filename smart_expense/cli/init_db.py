#!/usr/bin/env python3
"""
Database initialization script

Creates the expense, budget and learned-state tables.
"""
import sys

from smart_expense.storage.expense_store import ExpenseStore, SCHEMA_FILE
from smart_expense.utils.db_connection import get_db_connection


def print_summary(conn):
    """Print database summary"""
    cursor = conn.cursor()
    
    print("\n" + "=" * 80)
    print("📊 DATABASE SUMMARY")
    print("=" * 80)
    
    cursor.execute("SELECT COUNT(*) FROM expenses")
    print(f"Expenses: {cursor.fetchone()[0]}")
    
    cursor.execute("SELECT COUNT(*) FROM budgets")
    print(f"Budgets: {cursor.fetchone()[0]}")
    
    cursor.execute("SELECT COUNT(*) FROM learned_associations")
    print(f"Learned associations: {cursor.fetchone()[0]}")
    
    print("=" * 80)
    
    cursor.close()


def main():
    """Main initialization function"""
    print("=" * 80)
    print("🚀 EXPENSE DATABASE INITIALIZATION")
    print("=" * 80)
    
    print("\n🔌 Connecting to database...")
    try:
        conn = get_db_connection()
        print("   ✅ Connected")
    except Exception as e:
        print(f"   ❌ Connection failed: {e}")
        sys.exit(1)
    
    try:
        print(f"\n📄 Creating database schema")
        print(f"   File: {SCHEMA_FILE}")
        ExpenseStore(conn).create_tables()
        print(f"   ✅ Success")
        
        print_summary(conn)
        
        print("\n✅ Database initialization complete!")
        print("\nNext steps:")
        print('  1. Add an expense: expense-add "Uber ride to airport" 450')
        print("  2. Set a budget:   expense-budget set Transport 5000")
        
    except Exception as e:
        print(f"\n❌ Initialization failed: {e}")
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
