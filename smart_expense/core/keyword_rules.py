"""
Keyword Rule Table

Built-in fallback rules used when no learned association matches:
- One rule per category, each with an ordered list of trigger keywords
- Table order is fixed, so the first matching category always wins
- Keywords are lower-case and matched as plain substrings
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class KeywordRule:
    """A category and the keywords that trigger it"""
    category: str
    keywords: Tuple[str, ...]

    def matches(self, normalized_text: str) -> bool:
        return any(keyword in normalized_text for keyword in self.keywords)


KEYWORD_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule('Food', (
        'food', 'restaurant', 'pizza', 'burger', 'snack', 'canteen',
        'grocery', 'zomato', 'swiggy',
    )),
    KeywordRule('Transport', (
        'uber', 'bus', 'cab', 'metro', 'train', 'fuel', 'petrol', 'diesel', 'taxi',
    )),
    KeywordRule('Utilities', (
        'bill', 'rent', 'wifi', 'electricity', 'water', 'gas', 'maintenance',
    )),
    KeywordRule('Entertainment', (
        'movie', 'game', 'netflix', 'prime', 'spotify', 'cinema', 'recharge',
    )),
    KeywordRule('Health', (
        'doctor', 'medicine', 'hospital', 'pharmacy', 'gym', 'fitness',
    )),
    KeywordRule('Shopping', (
        'amazon', 'flipkart', 'shopping', 'myntra', 'clothes', 'electronics',
    )),
    KeywordRule('Education', (
        'book', 'tuition', 'course', 'school', 'college', 'exam', 'fees',
    )),
)

DEFAULT_CATEGORY = 'Other'

# Categories offered for budgeting, in table order
DEFAULT_CATEGORIES: Tuple[str, ...] = tuple(
    rule.category for rule in KEYWORD_RULES
) + (DEFAULT_CATEGORY,)


def lookup(normalized_text: str) -> Optional[str]:
    """
    Find the default category for already-normalized text

    Args:
        normalized_text: Lower-cased, trimmed description

    Returns:
        First category in table order with a keyword contained in the text,
        or None if nothing matches
    """
    for rule in KEYWORD_RULES:
        if rule.matches(normalized_text):
            return rule.category
    return None
