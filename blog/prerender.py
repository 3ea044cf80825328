# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""
Static pre-rendering of the blog.

Renders the home page, the article list and one page per known slug through
the Flask test client, and writes each one to `<output>/<path>/index.html`.
"""

import logging
import os
import shutil
from typing import Dict, List
from flask import Flask
from .exceptions import UpstreamError
from .wordpress import WordPressClient

logger = logging.getLogger(__name__)


def static_params(client: WordPressClient) -> List[Dict[str, str]]:
    """Route parameters for every article page to pre-render.

    Slug enumeration is optional work: an upstream failure yields an empty list.
    """
    try:
        slugs = client.list_all_slugs()
    except UpstreamError as e:
        logger.error(f"Error generating static params: {e}")
        return []
    return [{"slug": slug} for slug in slugs]


def output_path(output_dir: str, url_path: str) -> str:
    relative = url_path.strip("/")
    return os.path.join(output_dir, relative, "index.html") if relative else os.path.join(output_dir, "index.html")


def prerender_site(app: Flask, output_dir: str) -> int:
    """Render every page to `output_dir`. Returns the number of pages written."""
    client: WordPressClient = app.extensions["wordpress"]
    paths = ["/", "/articles"] + [f"/articles/{params['slug']}" for params in static_params(client)]
    written = 0

    with app.test_client() as test_client:
        for path in paths:
            response = test_client.get(path)
            if response.status_code != 200:
                logger.warning(f"Skipping {path}: status {response.status_code}")
                continue
            target = output_path(output_dir, path)
            os.makedirs(os.path.dirname(target), exist_ok=True)
            with open(target, "wb") as file:
                file.write(response.data)
            written += 1
            logger.debug(f"Wrote {path} -> {target}")

    if app.static_folder and os.path.isdir(app.static_folder):
        shutil.copytree(app.static_folder, os.path.join(output_dir, "static"), dirs_exist_ok=True)

    logger.info(f"Pre-rendered {written} of {len(paths)} pages into {output_dir}")
    return written
