"""Keyword mining over uncategorized expense titles.

Lets a user categorize many titles at once by a shared word ("prisma",
"netflix") instead of one title at a time.
"""

import re
from decimal import Decimal
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional

import yaml

from logger import get_logger
from models.report import TitlePattern
from models.transaction import Transaction

logger = get_logger()

MIN_WORD_LENGTH = 3
MIN_MATCH_COUNT = 2
MAX_EXAMPLES = 3
DEFAULT_PATTERN_LIMIT = 30

# Anything that is not a digit, an ASCII letter or a Latin-1/Latin Extended letter
_TOKEN_SEPARATOR = re.compile(r"[^0-9a-zÀ-ÖØ-öø-ɏ]+")

_STOP_WORDS_FILE = Path(__file__).parent / "stopwords.yaml"
_stop_words_cache: Dict[Path, FrozenSet[str]] = {}


def load_stop_words(path: Optional[Path] = None) -> FrozenSet[str]:
    """Load the stop-word list from YAML.

    Args:
        path: YAML file with a "stop_words" list. Defaults to the bundled list.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If YAML is invalid.
    """
    path = path or _STOP_WORDS_FILE
    if path in _stop_words_cache:
        return _stop_words_cache[path]

    logger.debug(f"Loading stop words from {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    words = frozenset(str(w).lower() for w in data.get("stop_words", []))
    _stop_words_cache[path] = words
    return words


def tokenize_title(title: str, stop_words: FrozenSet[str]) -> List[str]:
    """Split a title into lower-cased keywords, dropping short and stop words."""
    return [
        word
        for word in _TOKEN_SEPARATOR.split(title.lower())
        if len(word) >= MIN_WORD_LENGTH and word not in stop_words
    ]


def extract_title_patterns(
    transactions: Iterable[Transaction],
    limit: int = DEFAULT_PATTERN_LIMIT,
    stop_words: Optional[FrozenSet[str]] = None,
) -> List[TitlePattern]:
    """Find keywords shared by at least two uncategorized expenses.

    Each keyword counts once per transaction. Keywords with equal totals keep
    the order in which they were first seen.

    Args:
        transactions: All transactions (filters to uncategorized expenses).
        limit: Maximum number of patterns to return.
        stop_words: Words to ignore. Defaults to the bundled list.

    Returns:
        Patterns sorted by total amount, highest first.
    """
    if stop_words is None:
        stop_words = load_stop_words()

    counts: Dict[str, int] = {}
    amounts: Dict[str, Decimal] = {}
    titles: Dict[str, List[str]] = {}

    for t in transactions:
        if not t.is_expense or t.category:
            continue

        # dict.fromkeys keeps token order while dropping repeats
        for word in dict.fromkeys(tokenize_title(t.title, stop_words)):
            counts[word] = counts.get(word, 0) + 1
            amounts[word] = amounts.get(word, Decimal("0")) + abs(t.amount)
            examples = titles.setdefault(word, [])
            if t.title not in examples:
                examples.append(t.title)

    patterns = [
        TitlePattern(
            pattern=word,
            match_count=count,
            total_amount=amounts[word],
            example_titles=tuple(titles[word][:MAX_EXAMPLES]),
        )
        for word, count in counts.items()
        if count >= MIN_MATCH_COUNT
    ]
    patterns.sort(key=lambda p: p.total_amount, reverse=True)
    return patterns[:limit]


def find_matching_transactions(
    transactions: Iterable[Transaction], pattern: str
) -> List[Transaction]:
    """Find uncategorized expenses whose title contains a pattern."""
    needle = pattern.lower()
    return [
        t
        for t in transactions
        if t.is_expense and not t.category and needle in t.title.lower()
    ]
