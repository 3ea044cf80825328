# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import logging
from os import getenv, getpid
from flask import has_request_context, request

class MultiLineFormatter(logging.Formatter):
    """Logging formatter that prefixes every line of a multi-line message.

    Tracebacks and rendered HTML snippets otherwise lose the worker/level prefix
    after their first line, which makes interleaved gunicorn output unreadable.
    """
    def format(self, record):
        message = super().format(record)
        if "\n" not in record.getMessage():
            return message

        lines = []
        for line in record.getMessage().splitlines():
            line_record = logging.LogRecord(
                record.name, record.levelno, record.pathname,
                record.lineno, line, None, None,
                func=record.funcName
            )
            # keep attributes added by filters (worker_id)
            for key, value in record.__dict__.items():
                if key not in line_record.__dict__:
                    setattr(line_record, key, value)
            lines.append(super().format(line_record))

        if record.exc_info or record.exc_text:
            lines.append(self.formatException(record.exc_info) if record.exc_info else record.exc_text)
        return "\n".join(lines)

class GunicornWorkerFilter(logging.Filter):
    """Filter to add the Gunicorn worker ID to log records."""

    def filter(self, record):
        worker_id = getenv("GUNICORN_WORKER_ID", "unknown")

        if worker_id != "unknown":
            record.worker_id = "worker" + worker_id
        else:
            record.worker_id = f"PID {getpid()}"
        return True

class NoDockerHealthcheckFilter(logging.Filter):
    """Filter to exclude Docker health probe requests from the request log."""

    def filter(self, record):
        if not has_request_context():
            return True
        if request.args.get("reason", None) == "DockerAutomatedHealthcheck" and "health" in request.path:
            return False
        return True
