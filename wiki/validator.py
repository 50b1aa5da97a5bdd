"""
Request path validation.
"""

import re

from wiki.exceptions import InvalidName, InvalidPath

OPERATIONS = ("view", "edit", "save")

# fullmatch, so no trailing characters (not even a newline) are accepted
valid_path = re.compile(r"/(%s)/([a-zA-Z0-9]+)" % "|".join(OPERATIONS))
valid_name = re.compile(r"[a-zA-Z0-9]+")


def parse_path(path: str) -> tuple[str, str]:
    """
    Split a request path into (operation, name).

    Raises InvalidPath for anything outside the grammar. Names can not contain
    slashes, dots or control characters, so they are safe to use as storage keys.
    """
    match = valid_path.fullmatch(path)
    if match is None:
        raise InvalidPath(f"Invalid page path: {path!r}")
    return match.group(1), match.group(2)


def validate_name(name: str) -> str:
    """
    Check a bare page name, returns it unchanged.
    """
    if not isinstance(name, str) or valid_name.fullmatch(name) is None:
        raise InvalidName(f"Invalid page name: {name!r}")
    return name
