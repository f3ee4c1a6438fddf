"""Serialization utilities."""

from dataclasses import asdict

import numpy as np


def serialize_dataclass(obj) -> dict:
    """Serialize a dataclass to dict, converting arrays and tuples to lists."""
    data = asdict(obj)
    for key, value in data.items():
        if isinstance(value, np.ndarray):
            data[key] = value.tolist()
        elif isinstance(value, tuple):
            data[key] = list(value)
    return data
