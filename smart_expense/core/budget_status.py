"""
Budget status checks

Compares what was spent in a category against its budget limit.
"""
from dataclasses import dataclass
from typing import Optional

OK = 'ok'
WARNING = 'warning'
EXCEEDED = 'exceeded'


@dataclass
class BudgetStatus:
    """Spending of one category against its budget"""
    category: str
    budget_limit: float
    spent: float
    percentage: float
    level: str  # 'ok', 'warning', 'exceeded'

    @property
    def needs_alert(self) -> bool:
        return self.level != OK

    def message(self) -> str:
        if self.level == EXCEEDED:
            return (f"⚠️ Budget Exceeded!\n"
                    f"{self.category} budget: ₹{self.budget_limit}\n"
                    f"Spent: ₹{self.spent:.2f} ({self.percentage:.0f}%)")
        if self.level == WARNING:
            return (f"⚠️ Budget Alert!\n"
                    f"{self.category} is at {self.percentage:.0f}% of budget\n"
                    f"Budget: ₹{self.budget_limit} | Spent: ₹{self.spent:.2f}")
        return f"✅ {self.category}: ₹{self.spent:.2f} of ₹{self.budget_limit} ({self.percentage:.0f}%)"


def check_budget(category: str,
                 budget_limit: float,
                 spent: float,
                 warn_threshold: float = 0.80) -> Optional[BudgetStatus]:
    """
    Check spending for a category against its budget

    Args:
        category: Category name
        budget_limit: Budget for the category (0 or less means no budget)
        spent: Total spent in the category
        warn_threshold: Fraction of the budget at which to warn (0.80 = 80%)

    Returns:
        BudgetStatus, or None if the category has no budget
    """
    if budget_limit <= 0:
        return None

    percentage = spent / budget_limit * 100
    if percentage >= 100:
        level = EXCEEDED
    elif percentage >= warn_threshold * 100:
        level = WARNING
    else:
        level = OK

    return BudgetStatus(
        category=category,
        budget_limit=budget_limit,
        spent=spent,
        percentage=percentage,
        level=level,
    )
