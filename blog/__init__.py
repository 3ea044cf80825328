# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

from flask import Flask, g, jsonify, render_template, request
from flask_cors import CORS
from typing import Optional
import logging
import time
import traceback
import requests
from .config import Config
from .utility import MultiLineFormatter, GunicornWorkerFilter, NoDockerHealthcheckFilter
from .version import __version__

logger = logging.getLogger("blog")

def configure_logging(debug: bool = False):
    """Send every `blog.*` logger through one multi-line aware handler."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = MultiLineFormatter('[%(worker_id)s] %(asctime)-21s %(levelname)-8s %(name)-12s | %(message)s', datefmt="%Y-%m-%d %H:%M:%S")
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(GunicornWorkerFilter())

    logger.setLevel(level)
    logger.propagate = False  # Prevent duplicate lines through the root logger
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        logger.addHandler(handler)

    request_logger = logging.getLogger("blog.request")
    if not any(isinstance(f, NoDockerHealthcheckFilter) for f in request_logger.filters):
        request_logger.addFilter(NoDockerHealthcheckFilter())

def create_app(config: Optional[Config] = None, session: Optional[requests.Session] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        config: Validated configuration. Read from the environment if not given,
            which raises ConfigError when WORDPRESS_API_URL is missing.
        session: Optional requests session for the WordPress client.
    """
    from .wordpress import WordPressClient
    from .templating import register_template_helpers
    from .bp.pages import bp_pages
    from .bp.api import bp_api
    from .bp.healthcheck import bp_healthcheck

    if config is None:
        config = Config.from_env()

    configure_logging(config.debug or config.debug_logging)

    app = Flask(__name__)
    app.debug = config.debug
    app.extensions["blog_config"] = config
    app.extensions["wordpress"] = WordPressClient(config, session=session)

    logger.info(f"Using WordPress API at {config.wordpress_api_url}")
    logger.info(f"* Listing cache: {config.listing_revalidate_seconds}s, slug cache: {config.slug_revalidate_seconds}s")

    register_template_helpers(app, config)

    @app.before_request
    def start_timer():
        g.request_start_time = time.time()

    @app.after_request
    def log_request(response):
        """Log the request and response details."""
        query_string = f"?{request.query_string.decode()}" if request.query_string else ""
        started = g.get("request_start_time", time.time())
        remote_addr = request.headers.get("X-Forwarded-For", request.remote_addr or "Unknown").split(",")[0].strip()
        logging.getLogger('blog.request').info(
            '%s %s%s %s %s %s "%s"',
            request.method,
            request.path,
            query_string,
            response.status_code,
            remote_addr,
            f"{(time.time() - started):.2f}s",
            request.headers.get('User-Agent', 'Unknown')
        )
        return response

    @app.errorhandler(404)
    def handle_not_found(error):
        logger.warning(f"404 error: {request.path} not found")
        if request.path.startswith("/api/"):
            return jsonify({"error": "Endpoint not found"}), 404
        return render_template("not_found.html", meta={"title": "Page Not Found", "description": ""}), 404

    @app.errorhandler(500)
    def handle_internal_error(error):
        tb_str = traceback.format_exc()
        logger.error(f"Internal server error: {error}\nTraceback:\n{tb_str}")

        if app.debug:
            return jsonify({
                "error": "Internal server error",
                "message": str(error),
                "traceback": tb_str,
                "endpoint": request.path,
                "method": request.method
            }), 500
        return "An internal server error occurred. Please try again later.", 500

    CORS(app, resources={
        r"/api/*": {
            "origins": "*"
        }
    })

    app.register_blueprint(bp_pages)
    app.register_blueprint(bp_api, url_prefix='/api')
    app.register_blueprint(bp_healthcheck, url_prefix='/')
    logger.info("Headless blog front end version %s starting up", __version__)
    return app
