#!/usr/bin/env python3
"""Run the site server."""

import logging
import os

from web.app import create_app

logger = logging.getLogger("studio")

HOST = os.getenv("SITE_HOST", "0.0.0.0")
PORT = int(os.getenv("SITE_PORT", "3000"))


def configure_logging() -> str:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s %(levelname)s %(message)s',
    )
    return log_level


def main() -> None:
    log_level = configure_logging()
    app = create_app()
    logger.info(
        {
            "evt": "startup",
            "component": "server",
            "log_level": log_level,
            "url": f"http://localhost:{PORT}",
            "site_dir": str(app.config["SITE_DIR"]),
            "upload_dir": str(app.config["UPLOAD_DIR"]),
        }
    )
    app.run(host=HOST, port=PORT, threaded=True)


if __name__ == "__main__":
    main()
