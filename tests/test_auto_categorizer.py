"""
Tests for the auto-categorization engine

Covers:
- suggest_category: defaults, keyword fallback, learned precedence,
  deterministic ranking of overlapping learned keys
- suggest_amount: averaging per category, empty history
- learn: normalization, overwrite semantics, ignored input
- snapshot/restore and concurrent learning
"""
import math
import threading

import pytest

from smart_expense.core.auto_categorizer import (
    AutoCategorizer,
    LearnedState,
    normalize_description,
)
from smart_expense.core.keyword_rules import KEYWORD_RULES


class TestSuggestCategory:

    @pytest.mark.parametrize("description", ["", None, "   ", "\t\n"])
    def test_blank_input_is_other(self, categorizer, description):
        assert categorizer.suggest_category(description) == 'Other'

    @pytest.mark.parametrize("category,keyword", [
        (rule.category, keyword) for rule in KEYWORD_RULES for keyword in rule.keywords
    ])
    def test_every_keyword_suggests_its_category(self, categorizer, category, keyword):
        assert categorizer.suggest_category(f"buying {keyword} today") == category

    def test_keyword_match_is_case_insensitive(self, categorizer):
        assert categorizer.suggest_category("  NETFLIX Premium ") == 'Entertainment'

    def test_unknown_description_is_other(self, categorizer):
        assert categorizer.suggest_category("some totally unseen item xyz") == 'Other'

    def test_learning_overrides_keywords(self, categorizer):
        categorizer.learn("office pizza party", "Work", 500)
        assert categorizer.suggest_category("team office pizza party") == 'Work'
        # Plain 'pizza' still falls back to the keyword rule
        assert categorizer.suggest_category("pizza") == 'Food'

    def test_learned_key_must_be_contained(self, categorizer):
        categorizer.learn("office pizza party", "Work", 500)
        assert categorizer.suggest_category("office pizza") == 'Food'

    def test_longest_learned_key_wins(self, categorizer):
        categorizer.learn("coffee beans", "Groceries", 12)
        categorizer.learn("coffee", "Cafe", 4)
        assert categorizer.suggest_category("fresh coffee beans") == 'Groceries'
        assert categorizer.suggest_category("coffee with friends") == 'Cafe'

    def test_longest_learned_key_wins_regardless_of_learn_order(self):
        first = AutoCategorizer()
        first.learn("coffee", "Cafe", 4)
        first.learn("coffee beans", "Groceries", 12)

        second = AutoCategorizer()
        second.learn("coffee beans", "Groceries", 12)
        second.learn("coffee", "Cafe", 4)

        assert first.suggest_category("coffee beans 1kg") == 'Groceries'
        assert second.suggest_category("coffee beans 1kg") == 'Groceries'

    def test_equal_length_keys_favor_most_recent(self, categorizer):
        categorizer.learn("abc", "A", 1)
        categorizer.learn("xyz", "B", 1)
        assert categorizer.suggest_category("abc xyz") == 'B'

        # Re-learning refreshes recency
        categorizer.learn("abc", "A", 1)
        assert categorizer.suggest_category("abc xyz") == 'A'

    def test_repeated_calls_are_deterministic(self, categorizer):
        categorizer.learn("lunch", "Food", 100)
        categorizer.learn("team", "Work", 100)
        categorizer.learn("dinner", "Food", 100)
        results = {categorizer.suggest_category("team lunch dinner") for _ in range(10)}
        assert len(results) == 1


class TestSuggestAmount:

    def test_amount_averaging(self, categorizer):
        categorizer.learn("coffee", "Food", 100)
        categorizer.learn("coffee", "Food", 300)
        assert categorizer.suggest_amount("coffee") == 200
        assert len(categorizer.snapshot().amounts['Food']) == 2

    def test_unknown_category_amount_is_zero(self, categorizer):
        assert categorizer.suggest_amount("some totally unseen item xyz") == 0

    def test_blank_description_amount_is_zero(self, categorizer):
        assert categorizer.suggest_amount("") == 0
        assert categorizer.suggest_amount(None) == 0

    def test_average_covers_whole_category(self, categorizer):
        categorizer.learn("pizza", "Food", 100)
        categorizer.learn("burger", "Food", 200)
        # 'snack' was never learned but falls under Food via the keyword table
        assert categorizer.suggest_amount("evening snack") == pytest.approx(150.0)

    def test_negative_amounts_are_averaged(self, categorizer):
        categorizer.learn("refund", "Shopping", -50)
        categorizer.learn("amazon order", "Shopping", 150)
        assert categorizer.suggest_amount("refund") == pytest.approx(50.0)

    def test_amount_is_float(self, categorizer):
        categorizer.learn("bus", "Transport", 10)
        categorizer.learn("bus", "Transport", 15)
        amount = categorizer.suggest_amount("bus")
        assert isinstance(amount, float)
        assert amount == 12.5


class TestLearn:

    def test_overwrite_keeps_stale_history(self, categorizer):
        categorizer.learn("x", "A", 10)
        categorizer.learn("x", "B", 20)

        assert categorizer.suggest_category("x") == 'B'
        state = categorizer.snapshot()
        assert state.associations == {'x': 'B'}
        # Amounts stay where they were first recorded
        assert state.amounts['A'] == [10.0]
        assert state.amounts['B'] == [20.0]

    def test_description_is_normalized(self, categorizer):
        categorizer.learn("  Morning COFFEE  ", "Cafe", 3)
        assert categorizer.snapshot().associations == {'morning coffee': 'Cafe'}
        assert categorizer.suggest_category("MORNING coffee at work") == 'Cafe'

    @pytest.mark.parametrize("description,category", [
        ("", "Food"),
        ("   ", "Food"),
        (None, "Food"),
        ("lunch", None),
    ])
    def test_ignored_input_changes_nothing(self, categorizer, description, category):
        categorizer.learn(description, category, 100)
        state = categorizer.snapshot()
        assert state.associations == {}
        assert state.amounts == {}

    def test_blank_category_is_accepted(self, categorizer):
        categorizer.learn("mystery", "  ", 5)
        assert categorizer.suggest_category("mystery box") == '  '
        assert categorizer.suggest_amount("mystery") == 5

    def test_unparseable_amount_is_ignored(self, categorizer):
        categorizer.learn("lunch", "Food", "abc")
        categorizer.learn("lunch", "Food", None)
        assert categorizer.snapshot() == LearnedState()

    def test_non_finite_amount_is_kept(self, categorizer):
        categorizer.learn("lottery", "Fun", float('inf'))
        assert math.isinf(categorizer.suggest_amount("lottery"))

    def test_every_learn_appends_one_amount(self, categorizer):
        for amount in (1, 2, 3):
            categorizer.learn("tea", "Cafe", amount)
        assert categorizer.snapshot().amounts == {'Cafe': [1.0, 2.0, 3.0]}


class TestEndToEnd:

    def test_uber_ride_scenario(self, categorizer):
        description = "Uber ride to airport"
        assert categorizer.suggest_category(description) == 'Transport'

        categorizer.learn(description, "Transport", 450)
        assert categorizer.suggest_amount(description) == 450

        categorizer.learn(description, "Transport", 550)
        assert categorizer.suggest_amount(description) == 500

    def test_engines_are_isolated(self):
        first = AutoCategorizer()
        second = AutoCategorizer()
        first.learn("gift", "Gifts", 100)
        assert first.suggest_category("gift") == 'Gifts'
        assert second.suggest_category("gift") == 'Other'


class TestState:

    def test_snapshot_round_trip(self, categorizer):
        categorizer.learn("coffee", "Cafe", 4)
        categorizer.learn("office pizza party", "Work", 500)
        categorizer.learn("coffee", "Cafe", 6)

        restored = AutoCategorizer.from_state(categorizer.snapshot())

        for description in ("coffee", "team office pizza party", "uber", "???"):
            assert restored.suggest_category(description) == categorizer.suggest_category(description)
            assert restored.suggest_amount(description) == categorizer.suggest_amount(description)

    def test_snapshot_orders_associations_by_recency(self, categorizer):
        categorizer.learn("a", "A", 1)
        categorizer.learn("b", "B", 1)
        categorizer.learn("a", "A", 1)
        assert list(categorizer.snapshot().associations) == ['b', 'a']

    def test_restore_keeps_recency_tie_break(self):
        state = LearnedState(associations={'abc': 'A', 'xyz': 'B'}, amounts={})
        assert AutoCategorizer.from_state(state).suggest_category("abc xyz") == 'B'

    def test_snapshot_is_a_copy(self, categorizer):
        categorizer.learn("coffee", "Cafe", 4)
        state = categorizer.snapshot()
        state.associations['coffee'] = 'Changed'
        state.amounts['Cafe'].append(1000)

        assert categorizer.suggest_category("coffee") == 'Cafe'
        assert categorizer.suggest_amount("coffee") == 4

    def test_restore_replaces_state(self, categorizer):
        categorizer.learn("coffee", "Cafe", 4)
        categorizer.restore(LearnedState(associations={'tea': 'Drinks'}, amounts={'Drinks': [2]}))

        assert categorizer.suggest_category("coffee") == 'Other'
        assert categorizer.suggest_category("green tea") == 'Drinks'
        assert categorizer.suggest_amount("green tea") == 2.0


class TestConcurrency:

    def test_concurrent_learning_records_every_amount(self, categorizer):
        threads_count = 8
        per_thread = 200

        def worker(n):
            for i in range(per_thread):
                categorizer.learn(f"item {n}-{i}", "Bulk", 1)
                categorizer.suggest_amount(f"item {n}-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(threads_count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        state = categorizer.snapshot()
        assert len(state.associations) == threads_count * per_thread
        assert len(state.amounts['Bulk']) == threads_count * per_thread
        assert categorizer.suggest_amount("item 0-0") == 1.0


class TestReporting:

    def test_stats_count_each_source(self, categorizer):
        categorizer.learn("office pizza party", "Work", 500)
        categorizer.suggest_category("office pizza party")
        categorizer.suggest_category("uber")
        categorizer.suggest_category("")
        categorizer.suggest_category("xyz")

        assert categorizer.stats == {'learned': 1, 'keyword': 1, 'default': 2}

    def test_amount_suggestions_are_not_counted(self, categorizer):
        categorizer.suggest_amount("uber")
        assert categorizer.stats == {'learned': 0, 'keyword': 0, 'default': 0}

        categorizer.suggest_category("uber")
        categorizer.suggest_amount("uber")
        assert categorizer.stats == {'learned': 0, 'keyword': 1, 'default': 0}

    def test_print_stats_totals(self, categorizer, capsys):
        categorizer.suggest_category("uber")
        categorizer.suggest_amount("uber")
        categorizer.suggest_category("")
        categorizer.print_stats()

        out = capsys.readouterr().out
        assert "Total suggestions: 2" in out
        assert "Keyword match: 1 (50.0%)" in out

    def test_print_learned_data(self, categorizer, capsys):
        categorizer.learn("Coffee", "Cafe", 4)
        categorizer.print_learned_data()
        out = capsys.readouterr().out
        assert "coffee → Cafe" in out

    def test_print_stats_without_suggestions(self, categorizer, capsys):
        categorizer.print_stats()
        assert "No suggestions made yet" in capsys.readouterr().out


def test_normalize_description():
    assert normalize_description("  Hello World ") == 'hello world'
    assert normalize_description(None) == ''
    assert normalize_description(42) == ''
