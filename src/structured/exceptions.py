"""Exception hierarchy for the structured package.

The core data structure operations never raise these: lookups return
sentinels and edits that match nothing return the structure unchanged.
These exceptions are raised by the surrounding surface only (settings
loading, tree string parsing, and traversal option validation).

Example:
    ```python
    from structured.exceptions import StructuredError, TreeParseError

    try:
        tree = build_tree_from_string("(root (a b)")
    except TreeParseError as e:
        logger.error(f"Error: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class StructuredError(Exception):
    """Base exception for the structured package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence if both are given)

    Example:
        ```python
        error = StructuredError(
            "Unknown traversal",
            context={"traversal": "sideways"}
        )
        str(error)
        # 'Unknown traversal'
        error.context
        # {'traversal': 'sideways'}
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class ValidationError(StructuredError):
    """Raised when an option or argument is outside its accepted domain.

    Example:
        ```python
        raise ValidationError(
            "Unknown traversal 'sideways'",
            context={"traversal": "sideways", "allowed": ["dfs", "bfs"]}
        )
        ```
    """

    pass


class ConfigurationError(StructuredError):
    """Raised when settings are invalid or cannot be loaded."""

    pass


class NotFoundError(StructuredError):
    """Raised when a requested resource, such as a settings file, is missing."""

    pass


class TreeParseError(StructuredError):
    """Raised when a parenthesized tree string cannot be parsed."""

    pass


__all__ = [
    "StructuredError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "TreeParseError",
]
