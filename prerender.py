#!/usr/bin/env python3
# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
# 
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import argparse
import logging
import sys
from datetime import datetime
from blog import create_app
from blog.exceptions import ConfigError
from blog.prerender import prerender_site

logger = logging.getLogger("blog.prerender")

def main() -> int:
    parser = argparse.ArgumentParser(
        prog = "prerender",
        description = "Render the home page, the article list and every article to static HTML files.",
        epilog = f"Copyright (c) {datetime.now().year} Damien Boisvert (AlphaGameDeveloper). This software is released under the MIT License. https://opensource.org/licenses/MIT"
    )

    parser.add_argument(
        "--output",
        type=str,
        default="build",
        help="Directory to write the rendered pages into (default: build)"
    )

    args = parser.parse_args()

    try:
        app = create_app()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    written = prerender_site(app, args.output)
    return 0 if written else 1

if __name__ == "__main__":
    sys.exit(main())
