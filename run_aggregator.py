"""Convenience script for running one aggregation pass locally."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Ensure the src directory is on the Python path so the catholicnews package can be imported
SRC_PATH = Path(__file__).resolve().parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from catholicnews.config import ALL_SOURCES, AppConfig  # noqa: E402  (import after path setup)
from catholicnews.services.aggregator import Aggregator  # noqa: E402
from catholicnews.services.renderer import select_articles  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch all configured Catholic news feeds")
    parser.add_argument("--config", help="Path to a sources JSON file", default=None)
    parser.add_argument("--source", help="Only print articles from this source", default=ALL_SOURCES)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Load the source registry, run one pass and print the working set as JSON."""

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args = parse_args(argv)

    try:
        config = AppConfig.load(args.config)
    except ValueError as exc:
        logging.error("Could not load source configuration: %s", exc)
        sys.exit(1)

    aggregator = Aggregator(config)
    asyncio.run(aggregator.load_all())

    if aggregator.display.error:
        logging.error("No articles could be loaded")
        sys.exit(1)

    articles = select_articles(aggregator.articles, args.source)
    logging.info("Loaded %d articles (%d shown)", len(aggregator.articles), len(articles))
    print(json.dumps([article.model_dump(by_alias=True) for article in articles], indent=2))


if __name__ == "__main__":
    main()
