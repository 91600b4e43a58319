from dataclasses import dataclass, replace
from enum import Enum


class KineVar(Enum):
    X = "x"      # Bjorken x
    Y = "y"      # inelasticity
    Q2 = "Q2"    # momentum transfer squared
    W = "W"      # hadronic invariant mass


@dataclass(frozen=True)
class Range1D:
    """Closed interval [min, max]. An interval with min > max is empty."""
    min: float
    max: float

    @staticmethod
    def empty() -> "Range1D":
        return Range1D(0.0, -1.0)

    @property
    def is_empty(self) -> bool:
        return self.min > self.max

    @property
    def width(self) -> float:
        return 0.0 if self.is_empty else self.max - self.min

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def intersect(self, other: "Range1D") -> "Range1D":
        return Range1D(max(self.min, other.min), min(self.max, other.max))

    def shrink(self, epsilon: float) -> "Range1D":
        """Pull both ends inwards by a fraction ``epsilon`` of the width."""
        d = epsilon * self.width
        return Range1D(self.min + d, self.max - d)

    def as_tuple(self) -> tuple[float, float]:
        return self.min, self.max


@dataclass(frozen=True)
class Kinematics:
    """Phase space point. Unset variables are None."""
    x: float | None = None
    y: float | None = None
    Q2: float | None = None
    W: float | None = None

    def get(self, var: KineVar):
        return getattr(self, var.value)

    def is_set(self, var: KineVar) -> bool:
        return self.get(var) is not None

    def with_values(self, values: dict) -> "Kinematics":
        """Copy with the given {KineVar: value} entries overwritten."""
        return replace(self, **{var.value: float(val) for var, val in values.items()})
