"""Data models for cluster_tabs pipeline stage."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class Cluster:
    """Group of tabs referenced by index into the run's embedded tab list.

    ``indices`` stay in input order and ``domains`` in first-seen order.
    ``centroid`` is the normalized mean of the member embeddings.
    """

    indices: tuple[int, ...]
    domains: tuple[str, ...]
    centroid: np.ndarray
    is_misc: bool = False

    @property
    def size(self) -> int:
        return len(self.indices)


@dataclass(frozen=True)
class ClusterResult:
    """Named group handed to the grouping sink."""

    name: str
    color: str
    tab_ids: tuple[int | str, ...]
