# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

from flask import Blueprint, current_app, jsonify, request, make_response
from datetime import datetime, timedelta, timezone
from ..exceptions import UpstreamError
from ..version import __version__
from typing import Dict, Any
import os

bp_healthcheck = Blueprint('healthcheck', __name__)

# In-memory cache for healthcheck responses, per worker
_healthcheck_cache: Dict[str, Any] = {
    "response": None,
    "timestamp": None,
    "status_code": None
}

class Healthcheck:
    def __init__(self, app, os_env):
        self.app = app
        self.os_env = os_env
        self.client = app.extensions["wordpress"]
        self.config = app.extensions["blog_config"]
        self.overall_healthy = True
        self.result = {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "version": __version__,
            "checks": {},
            "environment": "development" if app.debug else "production"
        }

    def run(self):
        self.check_wordpress()
        self.check_cache()
        self.check_environment()
        if not self.overall_healthy:
            self.result["status"] = "unhealthy"
        return self.result, self.overall_healthy

    def check_wordpress(self):
        try:
            elapsed = self.client.ping()
            self.result["checks"]["wordpress"] = {
                "status": "healthy",
                "message": "WordPress API is reachable",
                "details": {
                    "api_url": self.config.wordpress_api_url,
                    "response_seconds": round(elapsed, 3)
                }
            }
        except UpstreamError as e:
            self.overall_healthy = False
            self.result["checks"]["wordpress"] = {
                "status": "unhealthy",
                "message": f"WordPress API request failed: {e.message}",
                "details": {
                    "api_url": self.config.wordpress_api_url,
                    "status_code": e.status_code
                }
            }

    def check_cache(self):
        cache = self.client.cache
        self.result["checks"]["cache"] = {
            "status": "healthy",
            "message": "Response cache active",
            "details": {
                "entries": len(cache),
                "hits": cache.stats["hits"],
                "misses": cache.stats["misses"],
                "evictions": cache.stats["evictions"],
                "max_entries": cache.max_entries,
                "listing_ttl_seconds": self.config.listing_revalidate_seconds,
                "slug_ttl_seconds": self.config.slug_revalidate_seconds
            }
        }

    def check_environment(self):
        # required settings are judged by the loaded config, which may not come from the environment
        required_settings = {"WORDPRESS_API_URL": self.config.wordpress_api_url}
        optional_vars = ["SITE_NAME", "REMOTE_IMAGE_PATTERNS"]
        missing_required = [name for name, value in required_settings.items() if not value]
        missing_optional = [var for var in optional_vars if not self.os_env.get(var)]
        env_status = "healthy"
        if missing_required:
            env_status = "unhealthy"
            self.overall_healthy = False
        elif missing_optional:
            env_status = "degraded"
        self.result["checks"]["environment"] = {
            "status": env_status,
            "message": "Environment variables configured properly" if env_status == "healthy" else "Some environment variables missing",
            "details": {
                "missing_required": missing_required,
                "missing_optional": missing_optional,
                "all_required_present": len(missing_required) == 0
            }
        }

@bp_healthcheck.route("/api/health")
@bp_healthcheck.route("/api/healthcheck")
@bp_healthcheck.route("/health")
@bp_healthcheck.route("/healthcheck")
def health():
    """Health check for the WordPress upstream, the response cache and the environment."""

    # ?c=1 allows a cached answer (up to a minute old)
    use_cache = request.args.get("c") == "1"
    now = datetime.now(timezone.utc)
    cache_valid = (
        _healthcheck_cache["response"] is not None and
        _healthcheck_cache["timestamp"] is not None and
        (now - _healthcheck_cache["timestamp"]) < timedelta(minutes=1)
    )

    if use_cache and cache_valid:
        resp = make_response(jsonify(_healthcheck_cache["response"]), _healthcheck_cache["status_code"])
        resp.headers["X-Cache"] = "HIT"
        return resp

    hc = Healthcheck(current_app, os.environ)
    health_status, overall_healthy = hc.run()

    status_code = 200 if overall_healthy else 503

    _healthcheck_cache["response"] = health_status
    _healthcheck_cache["timestamp"] = now
    _healthcheck_cache["status_code"] = status_code

    resp = make_response(jsonify(health_status), status_code)
    resp.headers["X-Cache"] = "MISS"
    return resp
