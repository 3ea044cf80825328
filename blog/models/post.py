# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT
from typing import Any, Dict, List, Optional


def _rendered(value: Any) -> str:
    """WordPress wraps HTML fields as {"rendered": "..."}."""
    if isinstance(value, dict):
        value = value.get("rendered", "")
    return value if isinstance(value, str) else ""


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _first_embed(embedded: Any, key: str) -> Optional[Dict[str, Any]]:
    """Return the first embedded record under `key`, or None.

    WordPress embeds error objects (e.g. {"code": "rest_forbidden", ...}) in place
    of records the caller may not see; those count as absent.
    """
    if not isinstance(embedded, dict):
        return None
    items = embedded.get(key)
    if not isinstance(items, list) or not items:
        return None
    first = items[0]
    if not isinstance(first, dict) or "code" in first:
        return None
    return first


class FeaturedMedia:
    """The `wp:featuredmedia` expansion of a post."""
    id: int
    source_url: str
    alt_text: str
    width: Optional[int]
    height: Optional[int]

    def __init__(self, id: int, source_url: str, alt_text: str = "",
                 width: Optional[int] = None, height: Optional[int] = None):
        self.id = id
        self.source_url = source_url
        self.alt_text = alt_text
        self.width = width
        self.height = height

    @staticmethod
    def from_raw(raw: Optional[Dict[str, Any]]) -> "Optional[FeaturedMedia]":
        if raw is None:
            return None
        details = raw.get("media_details")
        if not isinstance(details, dict):
            details = {}
        return FeaturedMedia(
            id=_as_int(raw.get("id")),
            source_url=raw.get("source_url") or "",
            alt_text=raw.get("alt_text") or "",
            width=details.get("width"),
            height=details.get("height"),
        )

    def __repr__(self):
        return f"<FeaturedMedia id={self.id} source_url=\"{self.source_url}\">"


class Author:
    """The `author` expansion of a post."""
    id: int
    name: str
    slug: str

    def __init__(self, id: int, name: str, slug: str = ""):
        self.id = id
        self.name = name
        self.slug = slug

    @staticmethod
    def from_raw(raw: Optional[Dict[str, Any]]) -> "Optional[Author]":
        if raw is None:
            return None
        return Author(
            id=_as_int(raw.get("id")),
            name=raw.get("name") or "",
            slug=raw.get("slug") or "",
        )

    def __repr__(self):
        return f"<Author id={self.id} name=\"{self.name}\">"


class Post:
    """Represents a blog post, as returned by the WordPress REST API (`/wp/v2/posts`)."""
    raw: dict # not recommended to use directly, use properties instead

    id: int
    date: str
    slug: str
    title: str
    content: str
    excerpt: str
    author: int
    featured_media: int
    embedded_media: Optional[FeaturedMedia]
    embedded_author: Optional[Author]

    def __init__(self, raw_data: dict):
        self.raw = raw_data
        self.id = _as_int(raw_data.get("id"))
        self.date = raw_data.get("date") or ""
        self.slug = raw_data.get("slug") or ""
        self.title = _rendered(raw_data.get("title"))
        self.content = _rendered(raw_data.get("content"))
        self.excerpt = _rendered(raw_data.get("excerpt"))
        self.author = _as_int(raw_data.get("author"))
        self.featured_media = _as_int(raw_data.get("featured_media"))

        embedded = raw_data.get("_embedded")
        self.embedded_media = FeaturedMedia.from_raw(_first_embed(embedded, "wp:featuredmedia"))
        self.embedded_author = Author.from_raw(_first_embed(embedded, "author"))

    def __repr__(self):
        raw_bytes = len(str(self.raw).encode('utf-8'))
        return f"<Post id={self.id} slug=\"{self.slug}\" date=\"{self.date}\", rawBytes={raw_bytes}>"


class PostPage:
    """One page of a post listing, with the totals WordPress reports in its headers."""
    posts: List[Post]
    page: int
    per_page: int
    total_posts: int
    total_pages: int

    def __init__(self, posts: List[Post], page: int, per_page: int,
                 total_posts: Optional[int] = None, total_pages: Optional[int] = None):
        self.posts = posts
        self.page = page
        self.per_page = per_page
        self.total_posts = total_posts if total_posts is not None else len(posts)
        self.total_pages = total_pages if total_pages is not None else 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def __repr__(self):
        return f"<PostPage page={self.page}/{self.total_pages} posts={len(self.posts)} total={self.total_posts}>"
