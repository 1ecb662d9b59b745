"""Hosts file rendering and output."""

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from .config import HostblockConfig
from .constants import BACKUP_SUFFIX
from .writer import FallbackWriter, read_existing

logger = logging.getLogger(__name__)

HOSTS_TEMPLATE = """# {timestamp}
# <header>
{header}
# </header>
# <blocklist>
{blocklist}# </blocklist>
"""


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def render_hosts(
    lines: Iterable[str],
    header: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Render the hosts file content.

    Args:
        lines: Final ``REDIRECT_IP domain`` lines
        header: Text placed verbatim in the header block
        now: Generation time (default: current UTC time)

    Returns:
        The complete file content, newline terminated
    """
    blocklist = "".join(f"{line}\n" for line in lines)
    return HOSTS_TEMPLATE.format(
        timestamp=_now(now).isoformat(timespec="seconds"),
        header=header,
        blocklist=blocklist,
    )


def backup_path(output: str, now: Optional[datetime] = None) -> str:
    """Return ``<output>.<unix timestamp>.bak``."""
    return f"{output}.{int(_now(now).timestamp())}{BACKUP_SUFFIX}"


def emit(
    lines: Iterable[str],
    config: HostblockConfig,
    writer: FallbackWriter,
    now: Optional[datetime] = None,
) -> str:
    """
    Write the hosts file, backing up the previous one first if requested.

    Args:
        lines: Final blocklist lines
        config: The resolved configuration
        writer: Write strategy
        now: Generation time (default: current UTC time)

    Returns:
        The written content

    Raises:
        WriteError: If the backup or the hosts file cannot be written
    """
    now = _now(now)
    content = render_hosts(lines, config.header, now=now)

    if config.backup:
        previous = read_existing(config.output)
        if previous is not None:
            target = backup_path(config.output, now=now)
            writer.write(target, previous)
            logger.info("Backed up %s to %s", config.output, target)

    writer.write(config.output, content)
    return content
