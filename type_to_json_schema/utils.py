"""
Utility functions for the schema generator.
"""

import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def snake_to_camel_case(text: str) -> str:
    """Convert snake_case or space-separated text to camelCase.

    Leading underscores are kept, so that non-public attribute names stay
    recognizable in the generated property names.

    Examples:
        "first_name" -> "firstName"
        "FIRST_NAME" -> "firstName"
        "first 3 rows" -> "first3Rows"
        "_cache_key" -> "_cacheKey"
        "id" -> "id"

    Args:
        text: The text to convert

    Returns:
        camelCase string
    """
    if not text:
        return ""
    prefix = text[: len(text) - len(text.lstrip("_"))]
    words = _split_into_words(_normalize_separators(text.lower() if text.isupper() else text))
    if not words:
        return text
    head, *tail = words
    return prefix + head.lower() + "".join(word.capitalize() for word in tail)
