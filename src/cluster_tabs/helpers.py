"""Helper functions for cluster_tabs CLI."""

from __future__ import annotations

import argparse
import os

from common.cli_helpers import parse_positive_int
from compute_embeddings.compute_embeddings import DEFAULT_MODEL

DEFAULT_CONFIG = "default"


def parse_cluster_tabs_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for cluster_tabs."""

    parser = argparse.ArgumentParser(description="Group open tabs into named clusters.")

    # Input options
    parser.add_argument(
        "--input",
        required=True,
        help="JSONL file with one tab per line (id, title, url, optional content)",
    )
    parser.add_argument(
        "--fetch-content",
        action="store_true",
        help="Download page content for tabs without a content field",
    )

    # Clustering options
    parser.add_argument(
        "--config",
        default=os.environ.get("CLUSTER_CONFIG", DEFAULT_CONFIG),
        help=f"Config name under configs/ or path to a YAML file (default: {DEFAULT_CONFIG})",
    )
    parser.add_argument(
        "--screen-width",
        type=lambda v: parse_positive_int(v, "screen-width"),
        default=1920,
        help="Window width in pixels used to size the group budget (default: 1920)",
    )

    # Model options
    parser.add_argument(
        "--model",
        default=DEFAULT_MODEL,
        help=f"Sentence transformer model (default: {DEFAULT_MODEL})",
    )
    parser.add_argument(
        "--batch-size",
        type=lambda v: parse_positive_int(v, "batch-size"),
        default=32,
        help="Batch size for encoding (default: 32)",
    )

    # Output options
    parser.add_argument("--load-local", action="store_true", help="Save results to local file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)
