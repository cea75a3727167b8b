from decimal import Decimal

from processors.patterns import (
    extract_title_patterns,
    find_matching_transactions,
    load_stop_words,
    tokenize_title,
)
from tests.helpers import make_transaction


class TestLoadStopWords:
    """Tests for load_stop_words function."""

    def test_bundled_list(self):
        """Test the bundled list contains the expected groups of words."""
        words = load_stop_words()

        assert {"the", "oy", "helsinki", "01", "korttiosto"} <= words

    def test_custom_file(self, tmp_path):
        """Test a custom YAML file can be loaded."""
        path = tmp_path / "words.yaml"
        path.write_text("stop_words:\n  - Foo\n  - bar\n")

        assert load_stop_words(path) == frozenset({"foo", "bar"})


class TestTokenizeTitle:
    """Tests for tokenize_title function."""

    def test_splits_on_punctuation(self):
        assert tokenize_title("K-Market/Kamppi", frozenset()) == [
            "market",
            "kamppi",
        ]

    def test_keeps_latin_extended_letters(self):
        assert tokenize_title("Säästöpankki Café", frozenset()) == [
            "säästöpankki",
            "café",
        ]

    def test_drops_short_and_stop_words(self):
        assert tokenize_title("ALEPA OY HELSINKI 12", frozenset({"helsinki"})) == [
            "alepa"
        ]


class TestExtractTitlePatterns:
    """Tests for extract_title_patterns function."""

    def test_keywords_in_two_transactions(self):
        """Test shared keywords are found and ranked by amount."""
        transactions = [
            make_transaction(id="f-0", amount="-50", title="PRISMA KAMPPI"),
            make_transaction(id="f-1", amount="-30", title="PRISMA ITIS"),
            make_transaction(id="f-2", amount="-5", title="HSL KAMPPI"),
            make_transaction(id="f-3", amount="-1", title="ALEPA"),
        ]

        patterns = extract_title_patterns(transactions)

        assert [(p.pattern, p.match_count, p.total_amount) for p in patterns] == [
            ("prisma", 2, Decimal("80")),
            ("kamppi", 2, Decimal("55")),
        ]
        assert patterns[0].example_titles == ("PRISMA KAMPPI", "PRISMA ITIS")

    def test_counts_word_once_per_transaction(self):
        """Test a repeated word in one title counts once."""
        transactions = [make_transaction(id="f-0", title="PIZZA PIZZA PIZZA")]

        assert extract_title_patterns(transactions) == []

    def test_ignores_income_and_categorized(self):
        transactions = [
            make_transaction(id="f-0", amount="10", title="PRISMA"),
            make_transaction(id="f-1", title="PRISMA", category="Food"),
            make_transaction(id="f-2", title="PRISMA"),
        ]

        assert extract_title_patterns(transactions) == []

    def test_limit_and_examples(self):
        """Test at most `limit` patterns and three distinct example titles."""
        transactions = [
            make_transaction(id=f"f-{i}", amount=f"-{i + 1}", title=f"SHOP{i} WORD{i % 2} COMMON")
            for i in range(6)
        ]

        patterns = extract_title_patterns(transactions, limit=2)

        assert len(patterns) == 2
        common = patterns[0]
        assert common.pattern == "common"
        assert common.match_count == 6
        assert len(common.example_titles) == 3

    def test_empty(self):
        assert extract_title_patterns([]) == []


class TestFindMatchingTransactions:
    """Tests for find_matching_transactions function."""

    def test_case_insensitive_substring(self):
        transactions = [
            make_transaction(id="f-0", title="Prisma Kamppi"),
            make_transaction(id="f-1", title="PRISMA", category="Food"),
            make_transaction(id="f-2", title="Alepa"),
        ]

        assert [t.id for t in find_matching_transactions(transactions, "PRISMA")] == ["f-0"]
