#!/usr/bin/env python3
"""
Booker Targets - Entry point for running the web API.

Usage:
    python main.py                    # Serve on the configured host/port
    python main.py --port 9000
"""

import argparse
import logging

import uvicorn

from bookertargets.config import config

logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Order booker monthly targets")
    parser.add_argument("--host", default=config.host, help="Web server host")
    parser.add_argument("--port", type=int, default=config.port, help="Web server port")
    args = parser.parse_args()

    # The app lifespan connects the database in the event loop that serves
    # requests; don't connect here.
    logger.info(f"Running web server on {args.host}:{args.port}")
    uvicorn.run("bookertargets.app:app", host=args.host, port=args.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
