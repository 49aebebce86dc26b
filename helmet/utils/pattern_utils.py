"""Limited glob matching for override keys

Supported syntax, evaluated against a whole name:
    ``*``      any run of characters except ``/``
    ``?``      exactly one character except ``/``
    ``[abc]``  one character from the set (``[!abc]`` negates)

There is no recursive ``**`` wildcard: a ``*`` never crosses a ``/``
segment boundary. Every other character matches itself.
"""

import re
from functools import lru_cache
from typing import Iterable, List, Pattern

SEGMENT_SEPARATOR = "/"


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Pattern:
    """
    Translate a limited glob into an anchored regular expression

    Args:
        pattern: Glob pattern

    Returns:
        Compiled regular expression
    """
    parts = []
    index = 0
    length = len(pattern)
    not_separator = f"[^{re.escape(SEGMENT_SEPARATOR)}]"

    while index < length:
        char = pattern[index]
        index += 1

        if char == "*":
            # Collapse runs so "**" behaves like a single segment wildcard
            while index < length and pattern[index] == "*":
                index += 1
            parts.append(f"{not_separator}*")
        elif char == "?":
            parts.append(not_separator)
        elif char == "[":
            end = index
            if end < length and pattern[end] == "!":
                end += 1
            if end < length and pattern[end] == "]":
                end += 1
            while end < length and pattern[end] != "]":
                end += 1
            if end >= length:
                # Unterminated class, match the bracket literally
                parts.append(re.escape(char))
            else:
                body = pattern[index:end].replace("\\", "\\\\")
                index = end + 1
                if body.startswith("!"):
                    body = "^" + body[1:]
                elif body.startswith("^"):
                    body = "\\" + body
                parts.append(f"(?!{re.escape(SEGMENT_SEPARATOR)})[{body}]")
        else:
            parts.append(re.escape(char))

    return re.compile("".join(parts) + r"\Z", re.DOTALL)


def match_pattern(name: str, pattern: str) -> bool:
    """Check whether ``name`` matches the limited glob ``pattern``"""
    return compile_pattern(pattern).match(name) is not None


def filter_names(names: Iterable[str], pattern: str) -> List[str]:
    """Return the names matching ``pattern``, preserving their order"""
    regex = compile_pattern(pattern)
    return [name for name in names if regex.match(name)]
