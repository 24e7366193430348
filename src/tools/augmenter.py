"""Automatic row-limit injection for ad-hoc queries."""

from typing import Tuple


class QueryAugmenter:
    """Appends a LIMIT clause to bare SELECT statements.

    This is a textual heuristic, not a parser: any occurrence of "LIMIT"
    (including inside a literal or an identifier) suppresses augmentation,
    and subqueries are never touched.
    """

    KEYWORD = "SELECT"
    LIMIT_KEYWORD = "LIMIT"

    @classmethod
    def should_augment(cls, query: str, limit: int) -> bool:
        trimmed_upper = query.strip().upper()
        return (
            trimmed_upper.startswith(cls.KEYWORD)
            and cls.LIMIT_KEYWORD not in trimmed_upper
            and limit > 0
        )

    @classmethod
    def augment(cls, query: str, limit: int) -> Tuple[str, bool]:
        """
        Apply the row limit to a query when it qualifies.

        Args:
            query: Raw query text from the caller
            limit: Effective row limit

        Returns:
            Tuple of (final_query, was_modified)
        """
        if cls.should_augment(query, limit):
            return f"{query} {cls.LIMIT_KEYWORD} {limit}", True
        return query, False
