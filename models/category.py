"""Category mapping model for rule-based transaction categorization."""

from dataclasses import dataclass
from typing import Iterable, List

MATCH_EXACT = "exact"
MATCH_CONTAINS = "contains"
MATCH_TYPES = (MATCH_EXACT, MATCH_CONTAINS)


@dataclass(frozen=True)
class CategoryMapping:
    """A rule assigning a category to expense transactions by title.

    Attributes:
        pattern: The title (exact) or substring (contains) to match.
        category: The category name to assign.
        match_type: Either "exact" or "contains". Matching is case-insensitive.
    """

    pattern: str
    category: str
    match_type: str = MATCH_EXACT

    def matches(self, title: str) -> bool:
        """Check whether a (trimmed) transaction title matches this rule."""
        normalized_title = title.lower()
        normalized_pattern = self.pattern.lower()
        if self.match_type == MATCH_EXACT:
            return normalized_title == normalized_pattern
        return normalized_pattern in normalized_title


def create_mapping(
    pattern: str, category: str, match_type: str = MATCH_EXACT
) -> CategoryMapping:
    """Create a new category mapping.

    Args:
        pattern: Title or substring to match. Surrounding whitespace is removed.
        category: Category to assign. Surrounding whitespace is removed.
        match_type: "exact" or "contains".

    Returns:
        The new CategoryMapping.

    Raises:
        ValueError: If pattern or category is blank, or match_type is unknown.
    """
    pattern = pattern.strip()
    category = category.strip()
    if not pattern:
        raise ValueError("Mapping pattern cannot be empty")
    if not category:
        raise ValueError("Mapping category cannot be empty")
    if match_type not in MATCH_TYPES:
        raise ValueError(f"Unknown match type: {match_type}")
    return CategoryMapping(pattern=pattern, category=category, match_type=match_type)


def unique_categories(mappings: Iterable[CategoryMapping]) -> List[str]:
    """Get the distinct category names used by a set of mappings, sorted."""
    return sorted({m.category for m in mappings})
