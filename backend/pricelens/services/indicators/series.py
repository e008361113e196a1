"""
Aligned Indicator Series

Every indicator produces fewer values than it consumes. The values are always
anchored to the END of the input: the newest output lines up with the newest
price. IndicatorSeries carries the values together with the input index of
its first element, so series of different lengths are combined by offset
instead of by implicit array position.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np


@dataclass(frozen=True, eq=False)
class IndicatorSeries:
    """
    Indicator values plus their alignment to the input.

    values[i] corresponds to input index offset + i.
    offset + len(values) == length of the input the series was computed from.
    """

    values: np.ndarray
    offset: int

    def __post_init__(self):
        values = np.array(self.values, dtype=float)
        if values.ndim != 1:
            raise ValueError("IndicatorSeries values must be one-dimensional")
        if self.offset < 0:
            raise ValueError(f"Negative series offset: {self.offset}")
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

    @classmethod
    def empty(cls, source_length: int) -> "IndicatorSeries":
        """Series with no values for an input of source_length points."""
        return cls(np.empty(0, dtype=float), source_length)

    @property
    def source_length(self) -> int:
        """Length of the input this series is anchored to."""
        return self.offset + len(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self.values)

    def __getitem__(self, index):
        return self.values[index]

    def is_empty(self) -> bool:
        return len(self.values) == 0

    def tolist(self) -> list[float]:
        return [float(v) for v in self.values]

    def value_at(self, input_index: int) -> Optional[float]:
        """Value aligned with the given input index, None before the offset."""
        if input_index < 0:
            input_index += self.source_length
        if input_index < self.offset or input_index >= self.source_length:
            return None
        return float(self.values[input_index - self.offset])

    def last(self) -> Optional[float]:
        """Newest value, or None for an empty series."""
        if self.is_empty():
            return None
        return float(self.values[-1])

    def shift(self, by: int) -> "IndicatorSeries":
        """
        Re-anchor a series computed from a derived input.

        A series computed over another series' values has offsets relative to
        that series; shifting by the parent offset maps them back onto the
        original price indices.
        """
        return IndicatorSeries(self.values, self.offset + by)

    def tail(self, length: int) -> "IndicatorSeries":
        """Keep only the newest `length` values."""
        if length < 0:
            raise ValueError(f"Negative tail length: {length}")
        if length >= len(self.values):
            return self
        return IndicatorSeries(
            self.values[len(self.values) - length:],
            self.source_length - length,
        )


def align(*series: IndicatorSeries) -> tuple[np.ndarray, ...]:
    """
    Tail-anchor several series on their common input range.

    The longer series lose their oldest values so that element i of every
    returned array refers to the same input index.

    Raises:
        ValueError: if the series are anchored to inputs of different length
    """
    if not series:
        return ()

    source_lengths = {s.source_length for s in series}
    if len(source_lengths) != 1:
        raise ValueError(
            f"Cannot align series anchored to different inputs: {sorted(source_lengths)}"
        )

    common = min(len(s) for s in series)
    return tuple(s.tail(common).values for s in series)
