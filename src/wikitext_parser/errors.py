"""Exceptions raised by the wikitext parser.

Malformed markup never raises: unmatched delimiters degrade to plain
text. These exceptions only signal caller-level misuse of the API.
"""

from __future__ import annotations


class WikitextError(Exception):
    """Base exception for all wikitext-parser errors."""

    pass


class InvalidUsageError(WikitextError, TypeError):
    """Raised when an operation receives the wrong kind of input.

    Examples: asking a Paragraph for template parameters, or passing
    something other than a str to parse().
    """

    pass
