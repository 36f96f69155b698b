"""Logging configuration for entry points."""

import logging


def setup_logging(debug: bool = False) -> None:
    """Configure standard logging format for the CLI and cloud functions."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    # Client libraries are chatty at DEBUG
    for noisy in ("httpx", "httpcore", "google", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
