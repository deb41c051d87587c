#!/usr/bin/env python3
"""
Command line entry point.

    tsdextractor URL [--debug] [--density-std] [--log-level LEVEL]

Fetches one page, extracts its main article and prints it as pretty JSON on
standard output. Logs go to standard error so the output can be piped.
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import httpx
import structlog

from tsdextractor.config import LogLevel, Settings, load_settings
from tsdextractor.errors import ExtractionError
from tsdextractor.extractor.article_parser import extract_url

# Set up structured logger
logger = structlog.get_logger()

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def setup_logging(settings: Settings) -> None:
    """Route structlog through stdlib logging on stderr."""
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.logging.structured_logging
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, settings.logging.log_level.value, logging.INFO)
    logging.basicConfig(stream=sys.stderr, format="%(message)s", level=level)
    logging.getLogger().setLevel(level)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="tsdextractor",
        description="Extract the main article of a web page by text and symbol density.",
    )
    parser.add_argument("url", help="URL of the page to extract")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="log every scored node with its statistics",
    )
    parser.add_argument(
        "--density-std",
        action="store_true",
        help="also report the standard deviation of text densities in debug output",
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        help="log level (overrides TSD_LOGGING__LOG_LEVEL)",
    )
    return parser.parse_args(argv)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Let command line flags win over environment configuration."""
    if args.log_level:
        settings.logging.log_level = LogLevel(args.log_level)
    if args.debug:
        settings.extractor.debug = True
    if args.density_std:
        settings.extractor.compute_density_std = True
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    """Run the extractor and return the process exit code."""
    args = parse_args(argv)

    try:
        settings = apply_overrides(load_settings(), args)
        setup_logging(settings)

        article = asyncio.run(extract_url(args.url, settings))
    except (httpx.HTTPError, ExtractionError) as e:
        logger.error("Extraction failed", url=args.url, error=str(e))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.exception("Unhandled exception", url=args.url, error=str(e))
        return EXIT_FAILURE

    print(article.to_json(indent=4))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
