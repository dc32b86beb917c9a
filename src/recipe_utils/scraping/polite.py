"""HTTP session for fetching recipe pages with robots.txt compliance."""

import logging
import random
import time
from typing import Optional, Tuple
from urllib import robotparser
from urllib.parse import urljoin, urlparse

import requests

from .retry import retry_on_transient_error

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "recipe-importer/1.0"


def site_root(url: str) -> str:
    """Return scheme and host of ``url``, e.g. "https://example.com"."""
    parts = urlparse(url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"Not an absolute URL: {url}")
    return f"{parts.scheme}://{parts.netloc}"


class PoliteSession:
    """A requests session that honours robots.txt and waits between requests.

    robots.txt is fetched once per session. If it cannot be read, every URL
    is allowed and the default crawl delay applies.

    Attributes:
        session: The underlying requests session
        base_url: Site root used to locate robots.txt
        user_agent: User agent sent with requests and matched in robots.txt
        crawl_delay: Seconds to wait before each request
        jitter_range: (min, max) random seconds added to the delay
    """

    def __init__(
        self,
        base_url: str,
        user_agent: str = DEFAULT_USER_AGENT,
        crawl_delay: Optional[float] = None,
        jitter_range: Tuple[float, float] = (0.5, 1.5),
        session: Optional[requests.Session] = None,
        robots: Optional[robotparser.RobotFileParser] = None,
    ):
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent
        self.base_url = base_url
        self.user_agent = user_agent
        self.jitter_range = jitter_range
        self._robots = robots if robots is not None else self._read_robots()

        if crawl_delay is None:
            delay = self._robots.crawl_delay(user_agent) if self._robots else None
            self.crawl_delay = float(delay) if delay else 1.0
        else:
            self.crawl_delay = crawl_delay

    @classmethod
    def for_url(cls, url: str, **kwargs) -> "PoliteSession":
        """Create a session for the site hosting ``url``."""
        return cls(site_root(url), **kwargs)

    def _read_robots(self) -> Optional[robotparser.RobotFileParser]:
        robots_url = urljoin(self.base_url, "/robots.txt")
        parser = robotparser.RobotFileParser()
        parser.set_url(robots_url)
        try:
            parser.read()
        except Exception as e:
            logger.info(f"Could not read {robots_url}, assuming allowed: {e}")
            return None
        return parser

    def is_allowed(self, url: str) -> bool:
        if self._robots is None:
            return True
        return self._robots.can_fetch(self.user_agent, url)

    def _wait(self) -> None:
        time.sleep(self.crawl_delay + random.uniform(*self.jitter_range))

    @retry_on_transient_error()
    def get(self, url: str, **kwargs) -> requests.Response:
        """GET ``url`` after the crawl delay.

        Args:
            url: URL to request
            **kwargs: Passed to ``requests.Session.get``; timeout defaults to 30s

        Returns:
            Response object with a successful status

        Raises:
            PermissionError: If robots.txt disallows the URL
            requests.HTTPError: On an error status that retries did not clear
        """
        if not self.is_allowed(url):
            raise PermissionError(f"robots.txt disallows {url}")

        self._wait()
        kwargs.setdefault("timeout", 30)

        logger.debug(f"GET {url}")
        response = self.session.get(url, **kwargs)
        response.raise_for_status()
        return response
