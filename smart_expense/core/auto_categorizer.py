"""
Auto Categorizer

Suggests a category and an expected amount for a free-text expense
description, and learns from every expense the user confirms:
1. Learned associations (highest priority, longest matching key wins)
2. Built-in keyword rules (fallback)
3. "Other" (default)

Suggestions never raise. Bad input falls back to "Other", 0.0 or a no-op.
"""
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from . import keyword_rules
from .keyword_rules import DEFAULT_CATEGORY


def normalize_description(description) -> str:
    """Lower-case and trim a description ('' for None or non-text input)"""
    if not isinstance(description, str):
        return ''
    return description.lower().strip()


@dataclass
class LearnedState:
    """Everything the categorizer has learned, in a storable shape"""
    associations: Dict[str, str] = field(default_factory=dict)  # key -> category, oldest first
    amounts: Dict[str, List[float]] = field(default_factory=dict)  # category -> amounts, learning order


class AutoCategorizer:
    """
    Suggests categories/amounts and learns from confirmed expenses

    Construct one per application and pass it to whatever needs suggestions.
    A single lock serializes learning against lookups, so readers never see
    a key whose category or amount is only half written.
    """

    def __init__(self, state: Optional[LearnedState] = None):
        self._lock = threading.Lock()
        self._learned: Dict[str, Tuple[str, int]] = {}  # key -> (category, learn sequence)
        self._amounts: Dict[str, List[float]] = {}
        self._sequence = 0
        self.stats = {
            'learned': 0,
            'keyword': 0,
            'default': 0,
        }
        if state is not None:
            self.restore(state)

    @classmethod
    def from_state(cls, state: LearnedState) -> 'AutoCategorizer':
        return cls(state)

    def _match_learned(self, normalized: str) -> Optional[str]:
        best = None
        for key, (category, sequence) in self._learned.items():
            if key in normalized:
                rank = (len(key), sequence)
                if best is None or rank > best[0]:
                    best = (rank, category)
        return best[1] if best else None

    def _classify(self, description) -> Tuple[str, str]:
        """Category and where it came from: 'learned', 'keyword' or 'default'"""
        normalized = normalize_description(description)
        if not normalized:
            return DEFAULT_CATEGORY, 'default'

        category = self._match_learned(normalized)
        if category is not None:
            return category, 'learned'

        category = keyword_rules.lookup(normalized)
        if category is not None:
            return category, 'keyword'

        return DEFAULT_CATEGORY, 'default'

    def suggest_category(self, description) -> str:
        """
        Suggest a category for an expense description

        Learned associations are checked first: every learned key contained
        in the normalized description is a candidate, the longest key wins
        and equal lengths go to the most recently learned key. Without a
        learned match the keyword rules decide, then "Other".

        Args:
            description: Free-text description (None and blank give "Other")

        Returns:
            Category name
        """
        with self._lock:
            category, source = self._classify(description)
            self.stats[source] += 1
            return category

    def suggest_amount(self, description) -> float:
        """
        Suggest an amount: the mean of every amount learned for the
        suggested category, or 0.0 when that category has no history
        """
        with self._lock:
            category, _ = self._classify(description)
            amounts = self._amounts.get(category)
            if not amounts:
                return 0.0
            return sum(amounts) / len(amounts)

    def learn(self, description, category: Optional[str], amount) -> None:
        """
        Learn a description -> category pair and record its amount

        Should be called after the user commits an expense. Re-learning a
        description replaces its category (last write wins) but amounts
        already recorded under the old category stay there.

        Args:
            description: Expense description (blank or None is ignored)
            category: Confirmed category (None is ignored, blank is kept)
            amount: Expense amount, negative for refunds (unparseable is ignored)
        """
        key = normalize_description(description)
        if not key or category is None:
            return
        try:
            value = float(amount)
        except (TypeError, ValueError):
            return

        with self._lock:
            self._sequence += 1
            # Reinsert so dict order follows recency
            self._learned.pop(key, None)
            self._learned[key] = (category, self._sequence)
            self._amounts.setdefault(category, []).append(value)

    def snapshot(self) -> LearnedState:
        """Copy of the learned state, safe to persist"""
        with self._lock:
            return LearnedState(
                associations={key: category for key, (category, _) in self._learned.items()},
                amounts={category: list(amounts) for category, amounts in self._amounts.items()},
            )

    def restore(self, state: LearnedState):
        """Replace the learned state with a previously saved snapshot"""
        with self._lock:
            self._learned = {}
            self._sequence = 0
            for key, category in state.associations.items():
                self._sequence += 1
                self._learned[key] = (category, self._sequence)
            self._amounts = {
                category: [float(a) for a in amounts]
                for category, amounts in state.amounts.items()
            }

    def print_learned_data(self):
        """Print learned associations"""
        print("=== Learned Expense Data ===")
        for key, category in self.snapshot().associations.items():
            print(f"{key} → {category}")
        print("============================")

    def print_stats(self):
        """Print category suggestion statistics"""
        with self._lock:
            stats = dict(self.stats)
        total = sum(stats.values())
        if total == 0:
            print("No suggestions made yet")
            return

        print("\n" + "=" * 80)
        print("📊 CATEGORIZER STATISTICS")
        print("=" * 80)
        print(f"Total suggestions: {total}")
        print(f"  🧠 Learned match: {stats['learned']} ({stats['learned']/total*100:.1f}%)")
        print(f"  🔑 Keyword match: {stats['keyword']} ({stats['keyword']/total*100:.1f}%)")
        print(f"  ❔ Default: {stats['default']} ({stats['default']/total*100:.1f}%)")
        print("=" * 80)
