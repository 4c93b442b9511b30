"""
Naming conventions shared by the classifier, the descriptors and the method finder.
Both camel case (`getFoo`) and snake case (`get_foo`) accessor spellings are recognized.
"""
from __future__ import annotations

from typing import Optional

GET_PREFIX = "get"
SET_PREFIX = "set"
IS_PREFIX = "is"
ADD_PREFIX = "add"
REMOVE_PREFIX = "remove"

LISTENER_SUFFIX = "Listener"
PROPERTY_CHANGE = "propertyChange"

def decapitalize(name: Optional[str]) -> Optional[str]:
    """
    Convert the first character to lower case, unless the first two characters are both upper case.
    Thus "FooBah" becomes "fooBah" and "X" becomes "x", but "URL" stays as "URL".
    """
    if not name:
        return name

    if len(name) > 1 and name[0].isupper() and name[1].isupper():
        return name

    return name[0].lower() + name[1:]

def capitalize(name: Optional[str]) -> Optional[str]:
    if not name:
        return name

    return name[0].upper() + name[1:]

def camelize(name: str) -> str:
    """
    "foo_bar_listener" -> "FooBarListener", "FooListener" stays
    """
    return "".join(capitalize(part) for part in name.split("_") if part)

def strip_prefix(name: str, prefix: str) -> Optional[str]:
    """
    return the remainder of `name` after `prefix` and an optional separating underscore,
    or None if the name does not carry the prefix or nothing remains
    """
    if not name.startswith(prefix):
        return None

    remainder = name[len(prefix):]
    if remainder.startswith("_"):
        remainder = remainder[1:]

    return remainder or None

def accessor_names(prefix: str, property_name: str) -> list[str]:
    """
    all spellings of an accessor, e.g. ("get", "foo") -> ["getFoo", "get_foo"]
    """
    names = [prefix + capitalize(property_name)]
    if property_name[:1].islower():
        names.append(f"{prefix}_{property_name}")

    return names
