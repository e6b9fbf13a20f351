"""AuthItem identifier and input normalization.

AuthItems are opaque strings compared by value. Callers may pass a single
item or any iterable of items; normalization keeps order and duplicates,
dedup happens later against the cache and the in-flight set.
"""

from typing import Iterable, List, Tuple, Union

from ..exceptions.invalid_auth_item import InvalidAuthItem

AuthItem = str

AuthItems = Union[AuthItem, Iterable[AuthItem]]


def validate_auth_item(item: object) -> AuthItem:
    """Return the item unchanged if it is a non-empty string.

    Raises:
        InvalidAuthItem: If the item is not a string or is empty
    """
    if not isinstance(item, str):
        raise InvalidAuthItem.wrong_type(item)
    if not item:
        raise InvalidAuthItem.empty()
    return item


def normalize_auth_items(items: AuthItems) -> Tuple[List[AuthItem], bool]:
    """Normalize single-or-many input to a list.

    Args:
        items: One AuthItem or an iterable of AuthItems

    Returns:
        Tuple of (items as list, True if a single item was given)
    """
    if isinstance(items, str):
        return [validate_auth_item(items)], True

    try:
        iterator = iter(items)
    except TypeError:
        raise InvalidAuthItem.wrong_type(items) from None

    return [validate_auth_item(item) for item in iterator], False
