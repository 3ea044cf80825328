# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import logging
import time
from typing import Any, Dict, List, Optional, Tuple
import requests
from .cache import ResponseCache
from .config import Config
from .exceptions import UpstreamError
from .models.post import Post, PostPage
from .version import __version__

logger = logging.getLogger(__name__)

# WordPress caps per_page at 100; slugs beyond this are not pre-rendered.
SLUG_PAGE_SIZE = 100


class WordPressClient:
    """
    Read-only client for the WordPress REST API (`/wp-json/wp/v2`).
    Responses are served from a shared in-memory cache for the configured freshness windows.
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None,
                 cache: Optional[ResponseCache] = None):
        """
        Initialize the WordPress client.

        Args:
            config: Validated application configuration.
            session: Optional requests session (a new one is created if not provided).
            cache: Optional response cache, shared between clients if passed in.
        """
        self.config = config
        self.api_url = config.wordpress_api_url
        self.timeout = config.request_timeout_seconds
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": f"headless-blog/{__version__}",
        })
        self.cache = cache or ResponseCache()
        logger.info(f"WordPress client initialized for: {self.api_url}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.session.close()

    def _fetch(self, params: Dict[str, Any]) -> Tuple[Any, Dict[str, str]]:
        """GET /posts with the given query. Returns the decoded body and the response headers."""
        url = f"{self.api_url}/posts"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error fetching {url} {params}: {e}")
            raise UpstreamError(f"Failed to reach WordPress API: {e}", url=url) from e

        if not response.ok:
            logger.error(f"WordPress API error {response.status_code} for {url} {params}")
            raise UpstreamError(
                f"Failed to fetch posts: {response.status_code} {response.reason}",
                status_code=response.status_code,
                url=url,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"WordPress API returned a non-JSON body for {url} {params}")
            raise UpstreamError("WordPress API returned an unparseable body",
                                status_code=response.status_code, url=url) from e

        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            logger.error(f"WordPress API returned an unexpected shape for {url} {params}: {type(data).__name__}")
            raise UpstreamError("WordPress API response is not a list of posts",
                                status_code=response.status_code, url=url)

        return data, dict(response.headers)

    def _cached_fetch(self, params: Dict[str, Any], ttl: int) -> Tuple[Any, Dict[str, str]]:
        key = ("posts", tuple(sorted((k, str(v)) for k, v in params.items())))
        return self.cache.get_or_load(key, ttl, lambda: self._fetch(params))

    def list_posts_page(self, per_page: int = 10, page: int = 1) -> PostPage:
        """
        Fetch one page of posts, with embeds and pagination totals.

        Raises:
            UpstreamError: If the request fails or the body isn't a list of posts.
        """
        data, headers = self._cached_fetch(
            {"_embed": 1, "per_page": per_page, "page": page},
            self.config.listing_revalidate_seconds,
        )
        return PostPage(
            posts=[Post(item) for item in data],
            page=page,
            per_page=per_page,
            total_posts=_header_int(headers, "X-WP-Total"),
            total_pages=_header_int(headers, "X-WP-TotalPages"),
        )

    def list_posts(self, per_page: int = 10, page: int = 1) -> List[Post]:
        """Fetch one page of posts (with embeds)."""
        return self.list_posts_page(per_page, page).posts

    def list_recent_posts(self, count: int = 3) -> List[Post]:
        """Fetch the `count` most recently published posts, newest first."""
        data, _ = self._cached_fetch(
            {"_embed": 1, "per_page": count, "orderby": "date", "order": "desc"},
            self.config.listing_revalidate_seconds,
        )
        posts = [Post(item) for item in data]
        return sorted(posts, key=lambda post: post.date, reverse=True)

    def get_post_by_slug(self, slug: str) -> Optional[Post]:
        """
        Fetch a single post by slug.

        Returns:
            The post, or None if no post has this slug.

        Raises:
            UpstreamError: On transport, status or parse failure.
        """
        if not slug or not slug.strip():
            return None
        data, _ = self._cached_fetch(
            {"slug": slug.strip(), "_embed": 1},
            self.config.listing_revalidate_seconds,
        )
        if not data:
            logger.debug(f"No post found with slug {slug!r}")
            return None
        return Post(data[0])

    def list_all_slugs(self) -> List[str]:
        """
        Fetch the slugs of up to SLUG_PAGE_SIZE posts, for pre-rendering.
        Callers should treat an UpstreamError here as an empty result.
        """
        data, _ = self._cached_fetch(
            {"per_page": SLUG_PAGE_SIZE, "_fields": "slug"},
            self.config.slug_revalidate_seconds,
        )
        return [item["slug"] for item in data if isinstance(item.get("slug"), str) and item["slug"]]

    def ping(self) -> float:
        """Make one minimal, uncached request. Returns the elapsed time in seconds."""
        start = time.monotonic()
        self._fetch({"per_page": 1, "_fields": "id"})
        return time.monotonic() - start


def _header_int(headers: Dict[str, str], name: str) -> Optional[int]:
    # requests' CaseInsensitiveDict is lost by dict(); match case-insensitively
    for key, value in headers.items():
        if key.lower() == name.lower():
            try:
                return int(value)
            except (TypeError, ValueError):
                return None
    return None
