# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

from flask import Blueprint, current_app, render_template, request
from ..config import Config
from ..exceptions import UpstreamError
from ..metadata import article_metadata, page_metadata
from ..models.post import PostPage
from ..wordpress import WordPressClient
import logging

logger = logging.getLogger(__name__)
bp_pages = Blueprint('pages', __name__)

def get_client() -> WordPressClient:
    return current_app.extensions["wordpress"]

def get_config() -> Config:
    return current_app.extensions["blog_config"]

@bp_pages.route("/")
def home():
    """Hero section plus the most recent articles."""
    config = get_config()
    try:
        posts = get_client().list_recent_posts(config.home_recent_count)
    except UpstreamError as e:
        logger.error(f"Failed to fetch recent posts: {e}")
        posts = []

    return render_template(
        "index.html",
        posts=posts,
        meta=page_metadata(config.site_name),
    )

@bp_pages.route("/articles")
def articles():
    """All articles, one page at a time."""
    config = get_config()
    page = request.args.get("page", 1, type=int)
    if page is None or page < 1:
        page = 1

    try:
        post_page = get_client().list_posts_page(config.articles_per_page, page)
    except UpstreamError as e:
        logger.error(f"Failed to fetch posts (page {page}): {e}")
        post_page = PostPage([], page, config.articles_per_page, total_posts=0, total_pages=0)

    return render_template(
        "articles.html",
        post_page=post_page,
        posts=post_page.posts,
        meta=page_metadata(config.site_name, "All Articles", "Explore our collection of insightful articles and stories"),
    )

@bp_pages.route("/articles/<slug>")
def article(slug: str):
    config = get_config()
    try:
        post = get_client().get_post_by_slug(slug)
    except UpstreamError as e:
        logger.error(f"Error fetching post {slug!r}: {e}")
        return render_template(
            "unavailable.html",
            meta=page_metadata(config.site_name, "Article Unavailable"),
        ), 503

    if post is None:
        logger.info(f"Article not found: {slug!r}")
        return render_template(
            "article_not_found.html",
            slug=slug,
            meta=article_metadata(None, config.site_name),
        ), 404

    return render_template(
        "article.html",
        post=post,
        meta=article_metadata(post, config.site_name),
    )
