# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""
Display-ready values derived from a WordPress post.

Everything in here is a pure function over its input: no I/O, and no exceptions
for malformed markup or missing embeds. Bad input degrades to best-effort text
or to the fallback constants below.
"""

import re
from typing import Optional
from .models.post import Post

PLACEHOLDER_IMAGE_URL = "/static/placeholder-image.svg"
UNKNOWN_AUTHOR = "Unknown Author"

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# WordPress emits smart punctuation as numeric references; the quotes are
# flattened to ASCII, everything else decodes to its code point.
HTML_ENTITIES = {
    "&#8220;": '"',
    "&#8221;": '"',
    "&#8216;": "'",
    "&#8217;": "'",
    "&#8211;": "–",
    "&#8212;": "—",
    "&#8230;": "…",
    "&quot;": '"',
    "&apos;": "'",
    "&lt;": "<",
    "&gt;": ">",
    "&amp;": "&",
    "&nbsp;": " ",
    "&ndash;": "–",
    "&mdash;": "—",
    "&hellip;": "…",
    "&lsquo;": "‘",
    "&rsquo;": "’",
    "&ldquo;": '"',
    "&rdquo;": '"',
}

_TAG_RE = re.compile(r"<[^>]*?>", re.DOTALL)
_ENTITY_RE = re.compile(r"&(?:#[xX][0-9a-fA-F]+|#[0-9]+|[a-zA-Z][a-zA-Z0-9]*);")
_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})")


def _decode_entity(match: "re.Match[str]") -> str:
    entity = match.group(0)
    if entity in HTML_ENTITIES:
        return HTML_ENTITIES[entity]
    if entity.startswith("&#"):
        body = entity[2:-1]
        try:
            code_point = int(body[1:], 16) if body[:1] in ("x", "X") else int(body, 10)
            if code_point == 0 or 0xD800 <= code_point <= 0xDFFF:
                return entity
            return chr(code_point)
        except (ValueError, OverflowError):
            return entity
    # unknown named reference
    return entity


def strip_html(markup: Optional[str]) -> str:
    """Remove tags, decode character references and trim.

    The decode is a single pass, so an escaped reference such as `&amp;lt;`
    becomes the literal text `&lt;` rather than `<`.

    Applying it again is a no-op, except on escaped markup: `&lt;div&gt;`
    decodes to `<div>`, which a second pass then removes as a tag.
    """
    if not markup:
        return ""
    text = _TAG_RE.sub("", markup)
    text = _ENTITY_RE.sub(_decode_entity, text)
    return text.strip()


def featured_image_url(post: Post) -> str:
    media = post.embedded_media
    if media is None or not media.source_url:
        return PLACEHOLDER_IMAGE_URL
    return media.source_url


def has_featured_image(post: Post) -> bool:
    return featured_image_url(post) != PLACEHOLDER_IMAGE_URL


def featured_image_alt(post: Post) -> str:
    """Alt text of the featured image, or the plain-text title when there is none."""
    media = post.embedded_media
    if media is not None and media.alt_text:
        return media.alt_text
    return strip_html(post.title)


def author_name(post: Post) -> str:
    author = post.embedded_author
    if author is None or not author.name:
        return UNKNOWN_AUTHOR
    return author.name


def excerpt_text(post: Post, limit: Optional[int] = None) -> str:
    text = strip_html(post.excerpt)
    if limit is not None:
        text = text[:limit]
    return text


def format_date(iso_timestamp: Optional[str]) -> str:
    """Format an ISO-8601 timestamp as e.g. "March 5, 2024".

    Uses the calendar date written in the timestamp, with no time zone
    conversion and no locale, so the output is the same on every host.
    Input that doesn't start with a valid YYYY-MM-DD date is returned as-is.
    """
    if not iso_timestamp:
        return ""
    match = _DATE_RE.match(iso_timestamp)
    if not match:
        return iso_timestamp.strip()
    year, month, day = (int(part) for part in match.groups())
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return iso_timestamp.strip()
    return f"{MONTH_NAMES[month - 1]} {day}, {year}"
