# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

from datetime import datetime
from flask import Flask
from .config import Config
from .images import is_allowed_image
from . import normalizer
import logging

logger = logging.getLogger(__name__)

def register_template_helpers(app: Flask, config: Config):
    """Expose the normalizer to Jinja as filters, plus a few site-wide globals."""

    app.add_template_filter(normalizer.strip_html, "strip_html")
    app.add_template_filter(normalizer.format_date, "format_date")
    app.add_template_filter(normalizer.featured_image_url, "featured_image_url")
    app.add_template_filter(normalizer.featured_image_alt, "featured_image_alt")
    app.add_template_filter(normalizer.author_name, "author_name")
    app.add_template_filter(normalizer.excerpt_text, "excerpt_text")
    app.add_template_test(normalizer.has_featured_image, "with_featured_image")

    def image_src(url: str) -> str:
        """Swap images from origins outside the allow-list for the placeholder."""
        if is_allowed_image(url, config.remote_image_patterns):
            return url
        logger.warning(f"Image origin not allowed, using placeholder: {url}")
        return normalizer.PLACEHOLDER_IMAGE_URL

    app.add_template_filter(image_src, "image_src")

    @app.context_processor
    def site_globals():
        return {
            "site_name": config.site_name,
            "current_year": datetime.now().year,
        }
