"""CLI for clustering tabs."""

from __future__ import annotations

import logging
import sys

from dotenv import load_dotenv

from cluster_tabs.cluster_tabs import cluster_tabs
from cluster_tabs.config import load_config
from cluster_tabs.helpers import parse_cluster_tabs_args
from cluster_tabs.models import ClusterResult
from common.cli_helpers import setup_logging
from common.local_io import read_jsonl_local, save_jsonl_records_local
from compute_embeddings.compute_embeddings import EmbeddingError, SentenceTransformerEmbedder

logger = logging.getLogger(__name__)


def _print_groups(groups: list[ClusterResult], titles: dict) -> None:
    if not groups:
        print("No groups formed (too few tabs or nothing similar enough).")
        return

    for group in groups:
        print(f"{group.name} [{group.color}] ({len(group.tab_ids)} tabs)")
        for tab_id in group.tab_ids:
            print(f"- {tab_id} : {titles.get(tab_id) or '(untitled)'}")
        print()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = parse_cluster_tabs_args(argv)
    setup_logging(debug=args.debug)

    config = load_config(args.config)
    tabs = read_jsonl_local(args.input)
    if not tabs:
        logger.warning("No tabs to cluster")
        return 0

    embedder = SentenceTransformerEmbedder(model=args.model, batch_size=args.batch_size)

    try:
        groups = cluster_tabs(
            tabs,
            embedder,
            config,
            screen_width=args.screen_width,
            fetch_content=args.fetch_content,
        )
    except EmbeddingError as e:
        logger.error("Clustering failed, no groups applied: %s", e)
        return 1

    _print_groups(groups, {tab.get("id"): tab.get("title") for tab in tabs})

    if args.load_local and groups:
        save_jsonl_records_local(groups, "tab_groups")

    return 0


if __name__ == "__main__":
    sys.exit(main())
