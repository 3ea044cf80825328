# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

from typing import Any, Dict, Optional
from .models.post import Post
from .normalizer import excerpt_text, featured_image_url, has_featured_image, strip_html

DESCRIPTION_LIMIT = 160
DEFAULT_DESCRIPTION = "Read our latest articles and insights."


def page_metadata(site_name: str, title: Optional[str] = None,
                  description: str = DEFAULT_DESCRIPTION) -> Dict[str, Any]:
    """Head metadata for the non-article pages."""
    return {
        "title": f"{title} | {site_name}" if title else site_name,
        "description": description,
        "open_graph": None,
        "twitter": None,
    }


def article_metadata(post: Optional[Post], site_name: str) -> Dict[str, Any]:
    """Title, description and OpenGraph/Twitter card values for an article page."""
    if post is None:
        return {
            "title": "Article Not Found",
            "description": "The requested article could not be found.",
            "open_graph": None,
            "twitter": None,
        }

    title = strip_html(post.title)
    description = excerpt_text(post, DESCRIPTION_LIMIT)
    images = [featured_image_url(post)] if has_featured_image(post) else []

    return {
        "title": f"{title} | {site_name}",
        "description": description,
        "open_graph": {
            "title": title,
            "description": description,
            "images": images,
            "type": "article",
            "published_time": post.date,
        },
        "twitter": {
            "card": "summary_large_image",
            "title": title,
            "description": description,
            "images": images,
        },
    }
