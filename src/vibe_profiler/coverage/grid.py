"""Lazy cartesian grid over discretized axis values."""

from __future__ import annotations

import itertools
from collections.abc import Iterator, Mapping, Sequence
from typing import Optional

from ..axes.models import AXIS_KEYS, LETTER_AXES, NEUTRAL_SCORE
from ..exceptions import InvalidConfigError


def _axis_key(name: str) -> str:
    if name in AXIS_KEYS:
        return name
    if name in LETTER_AXES:
        return LETTER_AXES[name]
    raise InvalidConfigError("axis", name, f"expected one of {', '.join(AXIS_KEYS)}")


class AxisGrid:
    """Every combination of probed axis values, generated on demand.

    Probed axes take the values 0, step, 2*step, ... up to 100; the other
    axes stay at their fixed value. Iteration order is the cartesian
    product in ``AXIS_KEYS`` order, so position ``n`` always names the same
    vector and an interrupted run can resume with ``iter_from(n)``.
    """

    def __init__(
        self,
        step: int,
        axes: Optional[Sequence[str]] = None,
        fixed: Optional[Mapping[str, int]] = None,
    ):
        if isinstance(step, bool) or not isinstance(step, int) or not 1 <= step <= 100:
            raise InvalidConfigError("step", step, "must be an integer in [1, 100]")
        self.step = step

        requested = [_axis_key(a) for a in axes] if axes else list(AXIS_KEYS)
        if len(set(requested)) != len(requested):
            raise InvalidConfigError("axes", requested, "axes must not repeat")
        self.axes: tuple[str, ...] = tuple(k for k in AXIS_KEYS if k in requested)

        self.fixed: dict[str, int] = {k: NEUTRAL_SCORE for k in AXIS_KEYS if k not in self.axes}
        for name, value in (fixed or {}).items():
            key = _axis_key(name)
            if key in self.axes:
                raise InvalidConfigError("fixed", name, "axis is both probed and fixed")
            if not 0 <= int(value) <= 100:
                raise InvalidConfigError(f"fixed.{name}", value, "must be in [0, 100]")
            self.fixed[key] = int(value)

        self.values: tuple[int, ...] = tuple(range(0, 101, step))

    def __len__(self) -> int:
        return len(self.values) ** len(self.axes)

    def __iter__(self) -> Iterator[dict[str, int]]:
        return self.iter_from(0)

    def iter_from(self, start: int) -> Iterator[dict[str, int]]:
        """Yield full six-axis vectors beginning at position ``start``."""
        if start < 0:
            raise ValueError("start must be non-negative")
        product = itertools.product(self.values, repeat=len(self.axes))
        for combo in itertools.islice(product, start, None):
            scores = dict(self.fixed)
            scores.update(zip(self.axes, combo))
            yield {k: scores[k] for k in AXIS_KEYS}
