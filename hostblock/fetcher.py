"""URL fetching for hostblock sources."""

import logging
import urllib.request
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .constants import DEFAULT_TIMEOUT, USER_AGENT
from .exceptions import FetchError

logger = logging.getLogger(__name__)


class SourceFetcher:
    """Fetches raw blocklist text from URLs."""

    def __init__(self, timeout: int = DEFAULT_TIMEOUT, user_agent: str = USER_AGENT):
        """
        Initialize the fetcher.

        Args:
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header sent with every request
        """
        self.timeout = timeout
        self.user_agent = user_agent

    def available(self) -> bool:
        """
        Check whether HTTPS downloads are possible.

        urllib only provides an HTTPS handler when the interpreter was
        built with SSL support.

        Returns:
            True if sources can be fetched
        """
        return hasattr(urllib.request, "HTTPSHandler")

    def fetch(self, url: str) -> str:
        """
        Fetch the raw content of a source.

        Args:
            url: The URL to fetch from

        Returns:
            The content decoded as UTF-8

        Raises:
            FetchError: If the URL cannot be fetched
        """
        logger.debug("GET %s", url)
        try:
            request = Request(url, headers={"User-Agent": self.user_agent})
            with urlopen(request, timeout=self.timeout) as response:
                return response.read().decode("utf-8", errors="replace")
        except HTTPError as e:
            raise FetchError(f"HTTP error {e.code}: {url}") from e
        except URLError as e:
            raise FetchError(f"URL error: {e.reason} - {url}") from e
        except TimeoutError as e:
            raise FetchError(f"Timeout fetching {url}") from e
        except Exception as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e
