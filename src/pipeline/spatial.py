"""
Spatial calculation algorithm selection.
"""

from __future__ import annotations

import logging

DEFAULT_ALGORITHM = "AVERAGE"

# Accepted config names -> dai.SpatialLocationCalculatorAlgorithm member names
ALGORITHM_NAMES = {
    "average": "AVERAGE",
    "mean": "AVERAGE",
    "min": "MIN",
    "max": "MAX",
    "mode": "MODE",
    "median": "MEDIAN",
}


def parse_spatial_algorithm(name: str) -> str:
    """
    Map a configured algorithm name to its SDK enum member name.

    Unknown names fall back to AVERAGE with a warning.
    """
    key = (name or "").strip().lower()
    if key in ALGORITHM_NAMES:
        return ALGORITHM_NAMES[key]
    logging.warning(f"Unrecognized spatial algorithm '{name}', using {DEFAULT_ALGORITHM.lower()} algorithm")
    return DEFAULT_ALGORITHM
