"""Validation utilities for blocklist lines and whitelist patterns."""

import logging
import re
from typing import Iterable, List

from .constants import (
    DOMAIN_PATTERN,
    LENIENT_IP_PATTERN,
    LOCAL_SUFFIXES,
    STRICT_IP_PATTERN,
)

logger = logging.getLogger(__name__)

_STRICT_ENTRY_RE = re.compile(rf"(?:{STRICT_IP_PATTERN}[ \t]+)?{DOMAIN_PATTERN}")
_LENIENT_ENTRY_RE = re.compile(rf"(?:{LENIENT_IP_PATTERN}[ \t]+)?{DOMAIN_PATTERN}")
_IP_PREFIX_RE = re.compile(r"^[^ \t]+[ \t]+")

# Bracket expression character classes
POSIX_CLASSES = {
    "alnum": "a-zA-Z0-9",
    "alpha": "a-zA-Z",
    "blank": " \\t",
    "cntrl": "\\x00-\\x1f\\x7f",
    "digit": "0-9",
    "graph": "\\x21-\\x7e",
    "lower": "a-z",
    "print": "\\x20-\\x7e",
    "punct": "!-/:-@\\[-`{-~",
    "space": " \\t\\n\\r\\f\\v",
    "upper": "A-Z",
    "xdigit": "0-9A-Fa-f",
}

# Escaped in BRE means "operator"; bare means literal
_BRE_OPERATORS = {"(": "(", ")": ")", "{": "{", "}": "}", "|": "|", "+": "+", "?": "?"}
_BRE_ESCAPES = {"<": r"\b", ">": r"\b", "`": r"\A", "'": r"\Z"}
_PASSTHROUGH_ESCAPES = set("bBwWsS123456789")


def is_valid_entry(line: str, lenient: bool = False) -> bool:
    """
    Check a trimmed line against the ``[IP whitespace]DOMAIN`` grammar.

    Rules:
    - DOMAIN has at least one dot; labels are 1-63 of alnum/underscore/hyphen
    - The top label starts with a letter and is 2-63 chars long
    - The optional IP prefix must be 0.0.0.0 or 127.0.0.1, or any
      dotted quad when lenient

    Args:
        line: The line to check
        lenient: Accept any dotted-quad IP prefix

    Returns:
        True if the whole line matches
    """
    regex = _LENIENT_ENTRY_RE if lenient else _STRICT_ENTRY_RE
    return regex.fullmatch(line) is not None


def strip_ip_prefix(line: str) -> str:
    """Remove a leading ``IP whitespace`` prefix, leaving the domain."""
    return _IP_PREFIX_RE.sub("", line, count=1)


def is_local_domain(domain: str) -> bool:
    """Check whether a domain is a local-network pseudo-domain."""
    return domain.endswith(LOCAL_SUFFIXES)


def _translate_bracket(pattern: str, start: int) -> tuple[str, int]:
    """
    Translate a bracket expression beginning at ``pattern[start] == "["``.

    Args:
        pattern: The whole BRE pattern
        start: Index of the opening bracket

    Returns:
        Tuple of (python_bracket_expression, index_after_closing_bracket)

    Raises:
        re.error: If the expression is unterminated or names an unknown class
    """
    n = len(pattern)
    j = start + 1
    parts = ["["]

    if j < n and pattern[j] == "^":
        parts.append("^")
        j += 1
    # A leading "]" is a literal member
    if j < n and pattern[j] == "]":
        parts.append("\\]")
        j += 1

    while j < n and pattern[j] != "]":
        if pattern.startswith("[:", j):
            end = pattern.find(":]", j + 2)
            if end == -1:
                raise re.error("unterminated character class", pattern, j)
            name = pattern[j + 2 : end]
            if name not in POSIX_CLASSES:
                raise re.error(f"invalid character class {name!r}", pattern, j)
            parts.append(POSIX_CLASSES[name])
            j = end + 2
            continue

        ch = pattern[j]
        if ch in "\\[&~|":
            parts.append("\\" + ch)
        else:
            parts.append(ch)
        j += 1

    if j >= n:
        raise re.error("unterminated bracket expression", pattern, start)

    parts.append("]")
    return "".join(parts), j + 1


def bre_to_regex(pattern: str) -> str:
    """
    Translate a POSIX basic regular expression to a Python ``re`` pattern.

    Handles the GNU flavour: ``\\(``, ``\\)``, ``\\{``, ``\\}``, ``\\|``,
    ``\\+`` and ``\\?`` are operators while their bare forms are literals;
    ``^`` and ``$`` anchor only at the edges of the pattern or a group; a
    ``*`` with nothing to repeat is literal; bracket expressions may use
    ``[:class:]`` names.

    Args:
        pattern: The BRE pattern

    Returns:
        An equivalent Python regular expression

    Raises:
        re.error: If the pattern is malformed
    """
    out: List[str] = []
    n = len(pattern)
    i = 0
    # True where a "^" anchors and a "*" is literal
    at_start = True

    while i < n:
        c = pattern[i]

        if c == "\\":
            if i + 1 >= n:
                raise re.error("trailing backslash", pattern, i)
            nxt = pattern[i + 1]
            i += 2
            if nxt in _BRE_OPERATORS:
                out.append(_BRE_OPERATORS[nxt])
                at_start = nxt in "(|"
                continue
            if nxt in _BRE_ESCAPES:
                out.append(_BRE_ESCAPES[nxt])
            elif nxt in _PASSTHROUGH_ESCAPES:
                out.append("\\" + nxt)
            else:
                out.append(re.escape(nxt))
            at_start = False
            continue

        if c == "[":
            bracket, i = _translate_bracket(pattern, i)
            out.append(bracket)
            at_start = False
            continue

        if c == "^":
            out.append("^" if at_start else "\\^")
            i += 1
            continue

        if c == "$":
            rest = pattern[i + 1 :]
            anchors = rest == "" or rest.startswith("\\)") or rest.startswith("\\|")
            out.append("$" if anchors else "\\$")
        elif c == "*":
            out.append("\\*" if at_start else "*")
        elif c == ".":
            out.append(".")
        else:
            out.append(re.escape(c))

        at_start = False
        i += 1

    return "".join(out)


def compile_whitelist(patterns: Iterable[str]) -> List[re.Pattern]:
    """
    Compile whitelist patterns, preserving their order.

    A malformed pattern is logged and skipped, so it matches nothing.

    Args:
        patterns: POSIX basic regular expressions

    Returns:
        List of compiled patterns
    """
    compiled: List[re.Pattern] = []

    for pattern in patterns:
        try:
            compiled.append(re.compile(bre_to_regex(pattern)))
        except re.error as e:
            logger.warning("Ignoring invalid whitelist pattern '%s': %s", pattern, e)

    return compiled
