# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

from flask import Blueprint, jsonify, request, url_for
from typing import Any, Dict
from ..exceptions import UpstreamError
from ..models.post import Post
from ..normalizer import (
    author_name,
    excerpt_text,
    featured_image_alt,
    featured_image_url,
    format_date,
    strip_html,
)
from ..wordpress import SLUG_PAGE_SIZE
from .pages import get_client
import logging

logger = logging.getLogger(__name__)
bp_api = Blueprint('api', __name__)

def serialize_post(post: Post, include_content: bool = False) -> Dict[str, Any]:
    """Normalized, display-ready view of a post."""
    data = {
        "id": post.id,
        "slug": post.slug,
        "date": post.date,
        "formatted_date": format_date(post.date),
        "title": strip_html(post.title),
        "excerpt": excerpt_text(post),
        "author": author_name(post),
        "image_url": featured_image_url(post),
        "image_alt": featured_image_alt(post),
        "url": url_for("pages.article", slug=post.slug, _external=True),
    }
    if include_content:
        data["content_html"] = post.content
    return data

def _upstream_failed(e: UpstreamError):
    logger.error(f"Upstream request failed: {e}")
    return jsonify({"error": "Upstream CMS request failed"}), 502

# GET /api/posts?per_page=10&page=1
@bp_api.route("/posts", methods=["GET"])
def list_posts():
    per_page = request.args.get("per_page", 10, type=int) or 10
    per_page = min(SLUG_PAGE_SIZE, max(1, per_page))
    page = max(1, request.args.get("page", 1, type=int) or 1)

    try:
        post_page = get_client().list_posts_page(per_page, page)
    except UpstreamError as e:
        return _upstream_failed(e)

    return jsonify({
        "posts": [serialize_post(post) for post in post_page.posts],
        "page": post_page.page,
        "per_page": post_page.per_page,
        "total": post_page.total_posts,
        "pages": post_page.total_pages,
    })

# GET /api/posts/<slug>
@bp_api.route("/posts/<slug>", methods=["GET"])
def get_post(slug: str):
    try:
        post = get_client().get_post_by_slug(slug)
    except UpstreamError as e:
        return _upstream_failed(e)

    if post is None:
        return jsonify({"error": f"No post with slug {slug!r}"}), 404
    return jsonify(serialize_post(post, include_content=True))
