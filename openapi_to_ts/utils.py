"""
Utility functions for the OpenAPI to TypeScript generator.
"""

import re

# Regex pattern to split text into words, handling camelCase and acronym boundaries
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")

# Punctuation stripped from schema and field names before use
_NAME_PUNCTUATION = re.compile(r"[.,!@#$%^&*()_-]+")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def normalize_name(name: str) -> str:
    """Strip punctuation from a schema or field name.

    Examples:
        "first_name" -> "firstname"
        "x-rate-limit" -> "xratelimit"
        "User" -> "User"
    """
    return _NAME_PUNCTUATION.sub("", name)


def upper_first(text: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case, camelCase or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "HTTPServer" -> "HttpServer"
        "first 3 rows" -> "First3Rows"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    return "".join(word.capitalize() for word in _split_into_words(text))


def to_camel_case(text: str) -> str:
    """Convert text to camelCase ("get users by id" -> "getUsersById")."""
    pascal = to_pascal_case(text)
    if not pascal:
        return ""
    return pascal[0].lower() + pascal[1:]


def to_upper_snake_case(text: str) -> str:
    """Convert text to UPPER_SNAKE_CASE, used for enum member keys.

    Examples:
        "in-progress" -> "IN_PROGRESS"
        "inProgress" -> "IN_PROGRESS"
        "admin" -> "ADMIN"
    """
    return "_".join(word.upper() for word in _split_into_words(text))


def enum_member_keys(values: list[str]) -> list[str]:
    """Build one valid, unique enum member key per value, in order.

    Examples:
        ["in-progress", "in_progress"] -> ["IN_PROGRESS", "IN_PROGRESS_2"]
        ["1", "+"] -> ["_1", "VALUE"]
    """
    keys = []
    taken = set()
    for value in values:
        base = to_upper_snake_case(value) or "VALUE"
        # Identifiers cannot start with a digit
        if base[0].isdigit():
            base = f"_{base}"

        key = base
        suffix = 2
        while key in taken:
            key = f"{base}_{suffix}"
            suffix += 1

        taken.add(key)
        keys.append(key)
    return keys
