"""Normalization of raw source text into hosts-file lines.

Each stage takes the previous list of lines and returns a new one, so the
pipeline is a plain chain of function calls:

  1. split_lines         - split text, dropping carriage returns
  2. strip_comments      - cut everything from the first "#"
  3. trim_whitespace     - trim spaces and tabs
  4. drop_empty          - discard blank lines
  5. filter_valid        - keep "[IP ]DOMAIN" lines only
  6. strip_ip_prefixes   - keep the domain token
  7. lowercase
  8. drop_local_domains  - discard .local / .localdomain
  9. apply_whitelist     - discard lines matching any pattern
 10. apply_blacklist     - append forced entries, unvalidated
 11. sort_unique
 12. to_hosts_lines      - prefix the redirect IP
"""

import logging
from typing import Iterable, List

from .config import HostblockConfig
from .constants import COMMENT_CHAR
from .validator import (
    compile_whitelist,
    is_local_domain,
    is_valid_entry,
    strip_ip_prefix,
)

logger = logging.getLogger(__name__)


def split_lines(text: str) -> List[str]:
    return text.replace("\r", "").split("\n")


def strip_comments(lines: Iterable[str]) -> List[str]:
    return [line.split(COMMENT_CHAR, 1)[0] for line in lines]


def trim_whitespace(lines: Iterable[str]) -> List[str]:
    return [line.strip(" \t") for line in lines]


def drop_empty(lines: Iterable[str]) -> List[str]:
    return [line for line in lines if line]


def filter_valid(lines: Iterable[str], lenient: bool = False) -> List[str]:
    return [line for line in lines if is_valid_entry(line, lenient=lenient)]


def strip_ip_prefixes(lines: Iterable[str]) -> List[str]:
    return [strip_ip_prefix(line) for line in lines]


def lowercase(lines: Iterable[str]) -> List[str]:
    return [line.lower() for line in lines]


def drop_local_domains(lines: Iterable[str]) -> List[str]:
    return [line for line in lines if not is_local_domain(line)]


def apply_whitelist(lines: Iterable[str], patterns: Iterable[str]) -> List[str]:
    """
    Remove every line matched anywhere by a whitelist pattern.

    Patterns are applied one after another, in the order given.

    Args:
        lines: Domains to filter
        patterns: POSIX basic regular expressions

    Returns:
        The domains no pattern matched
    """
    result = list(lines)
    for regex in compile_whitelist(patterns):
        result = [line for line in result if not regex.search(line)]
    return result


def apply_blacklist(lines: Iterable[str], entries: Iterable[str]) -> List[str]:
    """Append blacklist entries verbatim; they skip every earlier stage."""
    return list(lines) + list(entries)


def sort_unique(lines: Iterable[str]) -> List[str]:
    # Case-sensitive: blacklist entries keep the case they were given in
    return sorted(set(lines))


def to_hosts_lines(lines: Iterable[str], redirect_ip: str) -> List[str]:
    return [f"{redirect_ip} {line}" for line in lines]


def normalize(texts: Iterable[str], config: HostblockConfig) -> List[str]:
    """
    Turn fetched source texts into sorted ``REDIRECT_IP domain`` lines.

    Args:
        texts: Raw source contents, in source order
        config: The resolved configuration

    Returns:
        Final hosts-file lines for the blocklist block
    """
    lines = split_lines("\n".join(texts))
    logger.debug("Read %d raw line(s)", len(lines))

    lines = drop_empty(trim_whitespace(strip_comments(lines)))
    candidates = len(lines)

    lines = filter_valid(lines, lenient=config.lenient)
    logger.debug("Accepted %d of %d candidate line(s)", len(lines), candidates)

    lines = drop_local_domains(lowercase(strip_ip_prefixes(lines)))

    before = len(lines)
    lines = apply_whitelist(lines, config.whitelist)
    logger.debug("Whitelist removed %d line(s)", before - len(lines))

    lines = sort_unique(apply_blacklist(lines, config.blacklist))
    logger.debug("%d unique domain(s) after blacklist", len(lines))

    return to_hosts_lines(lines, config.redirect_ip)
