from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np


ModulationMode = Literal["real", "imag", "magnitude"]
MODULATION_MODES: tuple[str, ...] = ("real", "imag", "magnitude")


@dataclass(frozen=True)
class SampledSignal:
    """Samples of an evaluator on an explicit grid.

    Attributes
    ----------
    x:
        Abscissae the evaluator was called with, shape ``(N,)``, in call order.
    y:
        Sample values, float64, shape ``(N,)``.
    failed:
        Indices where the evaluator failed and ``0.0`` was substituted.
    warnings:
        Human-readable notes for display (evaluator failures, non-finite samples).
    """

    x: np.ndarray
    y: np.ndarray
    failed: tuple[int, ...] = ()
    warnings: tuple[str, ...] = ()

    def __len__(self) -> int:
        return int(self.y.size)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass(frozen=True)
class ModulatedSignal:
    """Carrier-modulated samples as signal-space ``(x, y)`` pairs.

    Coordinates are never projected to a drawing surface here.
    """

    x: np.ndarray
    y: np.ndarray
    mode: str
    failed: tuple[int, ...] = ()
    warnings: tuple[str, ...] = ()

    def __len__(self) -> int:
        return int(self.y.size)
