"""YAML configuration loader for tab clustering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# Config directory at the repository root
CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"


@dataclass(frozen=True)
class ClusterConfig:
    # Primary clustering thresholds
    content_similarity_threshold: float = 0.38
    domain_affinity_boost: float = 0.15
    url_path_boost: float = 0.08

    # Singleton handling
    singleton_absorption_threshold: float = 0.25
    singleton_cluster_threshold: float = 0.33
    min_orphans_for_misc: int = 3

    # Screen capacity estimation
    pixels_per_group: int = 130
    min_groups: int = 2
    max_groups: int = 10

    def __post_init__(self) -> None:
        if self.pixels_per_group <= 0:
            raise ValueError(f"Invalid pixels_per_group: {self.pixels_per_group}. Must be positive")

        if self.min_groups < 1:
            raise ValueError(f"Invalid min_groups: {self.min_groups}. Must be at least 1")

        if self.max_groups < self.min_groups:
            raise ValueError(
                f"Invalid max_groups: {self.max_groups}. Must be >= min_groups ({self.min_groups})"
            )

        if self.min_orphans_for_misc < 1:
            raise ValueError(
                f"Invalid min_orphans_for_misc: {self.min_orphans_for_misc}. Must be at least 1"
            )

        for name in ("domain_affinity_boost", "url_path_boost"):
            if getattr(self, name) < 0:
                raise ValueError(f"Invalid {name}: {getattr(self, name)}. Must be non-negative")


def load_config(name: str) -> ClusterConfig:
    """Load cluster config by name (e.g., 'default') or from a YAML path.

    Keys missing from the file keep their ClusterConfig defaults.

    Args:
        name: Config name without extension, or full path to config file

    Returns:
        ClusterConfig instance
    """
    if "/" in name or name.endswith(".yaml") or name.endswith(".yml"):
        config_path = Path(name)
    else:
        config_path = CONFIG_DIR / f"{name}.yaml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return _parse_config(data)


def _parse_config(data: dict) -> ClusterConfig:
    """Parse config dictionary into ClusterConfig object."""
    defaults = ClusterConfig()
    similarity = data.get("similarity", {})
    singletons = data.get("singletons", {})
    capacity = data.get("capacity", {})

    return ClusterConfig(
        content_similarity_threshold=similarity.get(
            "content_threshold", defaults.content_similarity_threshold
        ),
        domain_affinity_boost=similarity.get("domain_boost", defaults.domain_affinity_boost),
        url_path_boost=similarity.get("path_boost", defaults.url_path_boost),
        singleton_absorption_threshold=singletons.get(
            "absorption_threshold", defaults.singleton_absorption_threshold
        ),
        singleton_cluster_threshold=singletons.get(
            "cluster_threshold", defaults.singleton_cluster_threshold
        ),
        min_orphans_for_misc=singletons.get("min_orphans_for_misc", defaults.min_orphans_for_misc),
        pixels_per_group=capacity.get("pixels_per_group", defaults.pixels_per_group),
        min_groups=capacity.get("min_groups", defaults.min_groups),
        max_groups=capacity.get("max_groups", defaults.max_groups),
    )
