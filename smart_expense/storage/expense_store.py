"""
Expense Store

PostgreSQL persistence for everything around the categorizer:
- Expense rows (insert, list, search, delete, totals)
- Category budgets
- The categorizer's learned state, so learning survives restarts
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from smart_expense.core.auto_categorizer import LearnedState

SCHEMA_FILE = Path(__file__).parent.parent / "db" / "db_schema.sql"


@dataclass
class Expense:
    """Expense data structure"""
    expense_id: Optional[int]
    description: str
    category: Optional[str]
    amount: float


class ExpenseStore:
    """
    Reads and writes expenses, budgets and learned state over one connection
    """

    def __init__(self, conn):
        self.conn = conn

    def _write(self, sql: str, params=None):
        cursor = self.conn.cursor()
        try:
            cursor.execute(sql, params)
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            print(f"❌ Error: {e}")
            raise
        finally:
            cursor.close()

    def _fetch_all(self, sql: str, params=None) -> List[tuple]:
        cursor = self.conn.cursor()
        try:
            cursor.execute(sql, params)
            return cursor.fetchall()
        finally:
            cursor.close()

    def create_tables(self, schema_file: Path = SCHEMA_FILE):
        """Create all tables (safe to run repeatedly)"""
        with open(schema_file, 'r') as f:
            sql = f.read()
        self._write(sql)

    # ------------------------------------------------------------------
    # Expenses
    # ------------------------------------------------------------------

    def insert_expense(self, expense: Expense) -> int:
        """
        Insert an expense

        Returns:
            The new expense_id
        """
        cursor = self.conn.cursor()
        try:
            expense_id = self._insert_expense_row(cursor, expense)
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            print(f"❌ Error: {e}")
            raise
        finally:
            cursor.close()

        expense.expense_id = expense_id
        return expense_id

    def insert_expense_with_learning(self, expense: Expense, state: LearnedState) -> int:
        """
        Insert an expense and replace the learned state in one transaction

        Either both are stored or neither is, so a failed save never leaves
        an expense behind that a retry would duplicate.

        Returns:
            The new expense_id
        """
        cursor = self.conn.cursor()
        try:
            expense_id = self._insert_expense_row(cursor, expense)
            self._replace_learned_state(cursor, state)
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            print(f"❌ Error: {e}")
            raise
        finally:
            cursor.close()

        expense.expense_id = expense_id
        return expense_id

    @staticmethod
    def _insert_expense_row(cursor, expense: Expense) -> int:
        cursor.execute("""
            INSERT INTO expenses (description, category, amount)
            VALUES (%s, %s, %s)
            RETURNING expense_id
        """, (expense.description, expense.category, expense.amount))
        return cursor.fetchone()[0]

    def get_all_expenses(self) -> List[Expense]:
        rows = self._fetch_all("""
            SELECT expense_id, description, category, amount
            FROM expenses
            ORDER BY expense_id
        """)
        return [Expense(*row) for row in rows]

    def search_expenses(self, query: Optional[str]) -> List[Expense]:
        """Expenses whose description contains query (case-insensitive)"""
        if not query or not query.strip():
            return self.get_all_expenses()

        rows = self._fetch_all("""
            SELECT expense_id, description, category, amount
            FROM expenses
            WHERE POSITION(LOWER(%s) IN LOWER(description)) > 0
            ORDER BY expense_id
        """, (query,))
        return [Expense(*row) for row in rows]

    def delete_expense(self, expense_id: int):
        """Delete an expense (learned associations are kept)"""
        self._write("DELETE FROM expenses WHERE expense_id = %s", (expense_id,))

    def get_category_totals(self) -> Dict[str, float]:
        rows = self._fetch_all("""
            SELECT category, SUM(amount) AS total
            FROM expenses
            GROUP BY category
        """)
        return {category: float(total) for category, total in rows}

    def get_total(self) -> float:
        rows = self._fetch_all("SELECT COALESCE(SUM(amount), 0) FROM expenses")
        return float(rows[0][0]) if rows else 0.0

    # ------------------------------------------------------------------
    # Budgets
    # ------------------------------------------------------------------

    def set_budget(self, category: str, budget_limit: float):
        self._write("""
            INSERT INTO budgets (category, budget_limit)
            VALUES (%s, %s)
            ON CONFLICT (category) DO UPDATE SET budget_limit = EXCLUDED.budget_limit
        """, (category, budget_limit))

    def get_budget(self, category: str) -> float:
        """Budget limit for a category, 0.0 if none is set"""
        rows = self._fetch_all(
            "SELECT budget_limit FROM budgets WHERE category = %s", (category,)
        )
        return float(rows[0][0]) if rows else 0.0

    def get_all_budgets(self) -> Dict[str, float]:
        rows = self._fetch_all("SELECT category, budget_limit FROM budgets ORDER BY category")
        return {category: float(limit) for category, limit in rows}

    # ------------------------------------------------------------------
    # Learned state
    # ------------------------------------------------------------------

    def save_learned_state(self, state: LearnedState):
        """Replace the stored learned state with this snapshot"""
        cursor = self.conn.cursor()
        try:
            self._replace_learned_state(cursor, state)
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            print(f"❌ Error: {e}")
            raise
        finally:
            cursor.close()

    @staticmethod
    def _replace_learned_state(cursor, state: LearnedState):
        associations = [
            (key, category, order)
            for order, (key, category) in enumerate(state.associations.items(), 1)
        ]
        amounts = [
            (category, amount)
            for category, values in state.amounts.items()
            for amount in values
        ]

        cursor.execute("DELETE FROM learned_associations")
        cursor.execute("DELETE FROM category_amounts")
        if associations:
            cursor.executemany("""
                INSERT INTO learned_associations (description_key, category, learn_order)
                VALUES (%s, %s, %s)
            """, associations)
        if amounts:
            cursor.executemany("""
                INSERT INTO category_amounts (category, amount)
                VALUES (%s, %s)
            """, amounts)

    def load_learned_state(self) -> LearnedState:
        state = LearnedState()

        for key, category in self._fetch_all("""
            SELECT description_key, category
            FROM learned_associations
            ORDER BY learn_order
        """):
            state.associations[key] = category

        for category, amount in self._fetch_all("""
            SELECT category, amount
            FROM category_amounts
            ORDER BY id
        """):
            state.amounts.setdefault(category, []).append(float(amount))

        return state
