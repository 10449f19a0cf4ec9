"""
URL decoding helpers shared by the decoding middleware.

Both helpers are thin wrappers over ``urllib.parse`` so that every unit in
the pipeline decodes the same way:

    decode_uri("/docs/hello%20world.txt")      -> "/docs/hello world.txt"
    parse_query_string("foo=hello%20world&bar=fun")
                                               -> [("foo", "hello world"), ("bar", "fun")]
"""

from typing import List, Tuple
from urllib.parse import parse_qsl, unquote


def decode_uri(encoded: str) -> str:
    """Percent-decode a URI path. ``+`` is left alone (it is not a space in paths)."""
    return unquote(encoded)


def parse_query_string(query: str) -> List[Tuple[str, str]]:
    """
    Parse an ``application/x-www-form-urlencoded`` string into ordered pairs.

    Keys and values are percent-decoded. A field without ``=`` maps to the
    empty string, and repeated keys are all kept, in order.
    """
    return parse_qsl(query, keep_blank_values=True)
