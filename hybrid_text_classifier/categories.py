"""
Parsing of the comma-separated category configuration.
"""

from typing import List, Sequence, Union
from .exceptions import InvalidInputError


def parse_categories(categories: Union[str, Sequence[str]]) -> List[str]:
    """
    Turn a category configuration into an ordered list of distinct labels.

    Args:
        categories: Comma-separated string (e.g. "positive, negative, neutral")
            or an already split sequence of labels

    Returns:
        Trimmed, non-empty labels in first-seen order

    Raises:
        InvalidInputError: If the configuration yields no category
    """
    if isinstance(categories, str):
        raw_entries = categories.split(',')
    elif isinstance(categories, (list, tuple)):
        raw_entries = list(categories)
    else:
        raise InvalidInputError(f"Categories must be a string or a list, got {type(categories).__name__}")

    category_list: List[str] = []
    for entry in raw_entries:
        if not isinstance(entry, str):
            raise InvalidInputError(f"Category names must be strings, got {entry!r}")
        name = entry.strip()
        if name and name not in category_list:
            category_list.append(name)

    if not category_list:
        raise InvalidInputError("At least one category is required")

    return category_list
