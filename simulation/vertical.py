# simulation/vertical.py
"""Hydrostatic compression model shared by downward and upward flow.

A lower cell may hold slightly more than MAX_LIQUID_AMOUNT when liquid is
stacked above it. vertical_flow() returns how much the lower cell of a
two-cell column should hold once the pair is pressure-equalized.
"""
from __future__ import annotations

from typing import Union

import numpy as np

from simulation.config import MAX_COMPRESSION, MAX_LIQUID_AMOUNT

ArrayLike = Union[float, np.ndarray]


def vertical_flow(
    source: ArrayLike,
    dest: ArrayLike,
    max_amount: float = MAX_LIQUID_AMOUNT,
    max_compression: float = MAX_COMPRESSION,
) -> ArrayLike:
    """Target level for the lower cell of a vertical pair.

    Three regimes on the combined amount `total = source + dest`:
    - total <= max_amount: the lower cell may simply fill up (result = max_amount)
    - total < 2 * max_amount + max_compression: partial compression,
      interpolated smoothly between the two other regimes
    - otherwise both cells are saturated and share the excess equally

    The result is a level, not a flow. Callers subtract the destination's
    current amount to get the desired transfer.

    Works element-wise on NumPy arrays; plain floats in give a float back.
    """
    total = np.asarray(source, dtype=np.float64) + np.asarray(dest, dtype=np.float64)

    compressed = (max_amount * max_amount + total * max_compression) / (max_amount + max_compression)
    saturated = (total + max_compression) / 2.0

    level = np.where(
        total <= max_amount,
        max_amount,
        np.where(total < 2 * max_amount + max_compression, compressed, saturated),
    )

    if level.ndim == 0:
        return float(level)
    return level
