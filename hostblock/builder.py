"""Pipeline driver: fetch every source, normalize, write the hosts file."""

import logging
from datetime import datetime
from typing import List, Optional

from .config import HostblockConfig
from .emitter import emit
from .exceptions import AbortedError, FetchError, FetcherUnavailableError
from .fetcher import SourceFetcher
from .normalizer import normalize
from .prompt import Confirm
from .writer import FallbackWriter

logger = logging.getLogger(__name__)


class HostsBuilder:
    """Runs the fetch, normalize and emit stages in order."""

    def __init__(
        self,
        fetcher: SourceFetcher,
        confirm: Confirm,
        writer: Optional[FallbackWriter] = None,
    ):
        """
        Initialize the builder.

        Args:
            fetcher: Source fetcher
            confirm: Called with a question when a source fails; returning
                False aborts the run
            writer: Output write strategy
        """
        self.fetcher = fetcher
        self.confirm = confirm
        self.writer = writer or FallbackWriter()

    def collect(self, config: HostblockConfig) -> List[str]:
        """
        Fetch all sources one at a time, in configured order.

        Args:
            config: The resolved configuration

        Returns:
            Contents of the sources that were fetched successfully

        Raises:
            AbortedError: If continuing without a failed source is declined
        """
        texts: List[str] = []

        for url in config.sources:
            logger.info("Downloading %s", url)
            try:
                text = self.fetcher.fetch(url)
            except FetchError as e:
                logger.warning("%s", e)
                text = None
            else:
                if not text.strip():
                    logger.warning("Empty response from %s", url)
                    text = None

            if text is None:
                if not self.confirm(f"Source {url} failed. Continue without it?"):
                    raise AbortedError(f"Aborted after failure of {url}")
                continue

            texts.append(text)

        return texts

    def build(self, config: HostblockConfig) -> List[str]:
        """Fetch and normalize; returns the final blocklist lines."""
        return normalize(self.collect(config), config)

    def run(self, config: HostblockConfig, now: Optional[datetime] = None) -> int:
        """
        Build the blocklist and write the hosts file.

        Args:
            config: The resolved configuration
            now: Generation time (default: current UTC time)

        Returns:
            Number of blocked domains written

        Raises:
            FetcherUnavailableError: If no HTTP client can be used
            AbortedError: If the run was declined after a failed source
            WriteError: If the output cannot be written
        """
        if not self.fetcher.available():
            raise FetcherUnavailableError("No HTTPS-capable HTTP client available")

        lines = self.build(config)
        emit(lines, config, self.writer, now=now)
        logger.info("%d blocked domain(s) written to %s", len(lines), config.output)
        return len(lines)
