# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
# 
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import logging
import sys
from blog import create_app
from blog.exceptions import ConfigError

try:
    app = create_app()
except ConfigError as e:
    logging.getLogger("blog").error(f"Invalid configuration: {e}")
    sys.exit(1)
