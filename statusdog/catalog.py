# statusdog/catalog.py
"""
Fixed catalog of status codes and the wildcard filter.

In a filter pattern a lowercase ``x`` stands for any single digit and the match is
anchored at the start of the code only, so ``20`` matches 200-204 and ``2xx`` matches
every code in the 2xx range.
"""

import re
from http import HTTPStatus

from .errors import ValidationError

HTTP_CODES = (
    "100", "101", "102", "103",         # Informational
    "200", "201", "202", "203", "204",  # Success
    "300", "301", "302", "303", "304",  # Redirection
    "400", "401", "403", "404", "405",  # Client errors
    "500", "501", "502", "503", "504",  # Server errors
    "999",                              # Non-standard
)


def compile_pattern(pattern: str) -> re.Pattern:
    """Turns a wildcard pattern into a regex. Other characters are passed through unescaped."""
    try:
        return re.compile("^" + (pattern or "").replace("x", r"\d"))
    except re.error as e:
        raise ValidationError(f"Invalid filter pattern '{pattern}': {e}") from e


def filter_codes(pattern: str, catalog=HTTP_CODES) -> list[str]:
    regex = compile_pattern(pattern)
    return [code for code in catalog if regex.match(code)]


def describe(code: str) -> str:
    """Reason phrase for a code, e.g. '404' -> 'Not Found'."""
    try:
        return HTTPStatus(int(code)).phrase
    except ValueError:
        return "Unknown"
