"""
Site Crawler Service

Discovers a bounded list of a site's URLs using an ordered fallback chain:
1. <homepage>/sitemap.xml
2. Sitemaps declared in <homepage>/robots.txt
3. Links inside <nav> on the homepage

The first strategy that yields URLs wins. Results are deduplicated, filtered
against a path denylist and truncated to the requested limit. Discovery
failures never propagate: an empty list is the only failure signal.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlparse

from seo_auditor.config import resolve_user_agent, settings
from seo_auditor.integrations.html_document import parse
from seo_auditor.integrations.http_fetcher import HTTPFetcher

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
EXCLUDED_PATH_SUBSTRINGS: tuple[str, ...] = ("/blog", "/resources", "/news")


@dataclass(frozen=True)
class CrawlConfig:
    sitemap_timeout_seconds: float = 10.0
    robots_timeout_seconds: float = 8.0
    navigation_timeout_seconds: float = 10.0
    user_agent: str = ""
    excluded_paths: tuple[str, ...] = EXCLUDED_PATH_SUBSTRINGS

    @classmethod
    def from_settings(cls) -> "CrawlConfig":
        return cls(
            sitemap_timeout_seconds=settings.SITEMAP_TIMEOUT_SECONDS,
            robots_timeout_seconds=settings.ROBOTS_TIMEOUT_SECONDS,
            navigation_timeout_seconds=settings.NAVIGATION_TIMEOUT_SECONDS,
            user_agent=resolve_user_agent(settings.DEFAULT_USER_AGENT),
        )


def _join_site_path(homepage: str, filename: str) -> str:
    if homepage.endswith("/"):
        return homepage + filename
    return f"{homepage}/{filename}"


class SiteCrawler:
    """URL discovery for a single site."""

    def __init__(
        self,
        homepage: str,
        fetcher: HTTPFetcher | None = None,
        config: CrawlConfig | None = None,
    ):
        self.homepage = homepage
        self.fetcher = fetcher or HTTPFetcher()
        self.config = config or CrawlConfig()

    @property
    def _headers(self) -> dict[str, str]:
        if self.config.user_agent:
            return {"User-Agent": self.config.user_agent}
        return {}

    async def crawl(self, limit: int = DEFAULT_LIMIT) -> list[str]:
        """Run the discovery chain and return at most ``limit`` URLs."""
        try:
            urls = await self._discover()

            filtered = [
                u for u in urls
                if not any(path in u for path in self.config.excluded_paths)
            ]
            result = filtered[:limit]
            logger.info(f"Crawl of {self.homepage}: {len(urls)} discovered, {len(result)} returned")
            return result
        except Exception as e:
            logger.error(f"Crawler error for {self.homepage}: {e}")
            return []

    async def _discover(self) -> list[str]:
        # dict keeps discovery order while deduplicating
        urls: dict[str, None] = {}

        sitemap_url = _join_site_path(self.homepage, "sitemap.xml")
        for u in await self.fetch_sitemap_urls(sitemap_url):
            urls.setdefault(u, None)

        if not urls:
            for declared in await self.fetch_robots_sitemaps():
                for u in await self.fetch_sitemap_urls(declared):
                    urls.setdefault(u, None)

        if not urls:
            for u in await self.fetch_navigation_urls():
                urls.setdefault(u, None)

        return list(urls)

    async def fetch_sitemap_urls(self, sitemap_url: str) -> list[str]:
        """Collect every <loc> value from a sitemap. Child sitemaps are not expanded."""
        try:
            response = await self.fetcher.fetch(
                sitemap_url,
                headers=self._headers,
                timeout=self.config.sitemap_timeout_seconds,
            )
            if not response.ok:
                logger.debug(f"No sitemap at {sitemap_url} (status {response.status})")
                return []

            doc = parse(response.body, xml=True)
            urls = [loc.text().strip() for loc in doc.select("loc")]
            urls = [u for u in urls if u]
            logger.info(f"Found {len(urls)} URLs in sitemap {sitemap_url}")
            return urls
        except Exception as e:
            logger.warning(f"Could not read sitemap {sitemap_url}: {e}")
            return []

    async def fetch_robots_sitemaps(self) -> list[str]:
        """Return sitemap URLs declared in robots.txt."""
        robots_url = _join_site_path(self.homepage, "robots.txt")
        try:
            response = await self.fetcher.fetch(
                robots_url,
                headers=self._headers,
                timeout=self.config.robots_timeout_seconds,
            )
            if not response.ok:
                logger.debug(f"No robots.txt at {robots_url} (status {response.status})")
                return []
        except Exception as e:
            logger.warning(f"Could not fetch robots.txt {robots_url}: {e}")
            return []

        sitemap_urls = []
        for line in response.body.split("\n"):
            if line.lower().startswith("sitemap:"):
                value = line.split(":", 1)[1].strip()
                if value:
                    sitemap_urls.append(value)

        logger.debug(f"robots.txt declares {len(sitemap_urls)} sitemaps")
        return sitemap_urls

    async def fetch_navigation_urls(self) -> list[str]:
        """Fallback: absolute and root-relative links inside <nav> on the homepage."""
        try:
            response = await self.fetcher.fetch(
                self.homepage,
                headers=self._headers,
                timeout=self.config.navigation_timeout_seconds,
            )
            if not response.ok:
                logger.debug(f"Homepage {self.homepage} returned status {response.status}")
                return []

            parsed = urlparse(self.homepage)
            origin = f"{parsed.scheme}://{parsed.netloc}"

            urls = []
            for a in parse(response.body).select("nav a"):
                href = a.attr("href")
                if not href:
                    continue
                if href.startswith("http"):
                    urls.append(href)
                elif href.startswith("/"):
                    urls.append(origin + href)

            logger.info(f"Found {len(urls)} navigation links on {self.homepage}")
            return urls
        except Exception as e:
            logger.warning(f"Could not read navigation links from {self.homepage}: {e}")
            return []


async def crawl_site(
    homepage: str,
    limit: int = DEFAULT_LIMIT,
    fetcher: HTTPFetcher | None = None,
    config: CrawlConfig | None = None,
) -> list[str]:
    """
    Convenience function to discover a site's URLs.
    Never raises; returns an empty list when nothing could be discovered.
    """
    crawler = SiteCrawler(
        homepage=homepage,
        fetcher=fetcher,
        config=config or CrawlConfig.from_settings(),
    )
    return await crawler.crawl(limit)
