from nu_events.interaction.kinematics import Range1D

from abc import ABC, abstractmethod
from typing import Callable, Sequence


class ScalarFunction(ABC):
    """
    Real valued function of a fixed-size numeric vector.

    Each dimension can carry a name and a default integration range, declared
    with ``set_param`` before the function is handed to an integrator.
    """

    def __init__(self, n_dims: int):
        if n_dims < 1:
            raise ValueError(f"A scalar function needs at least one dimension, got {n_dims}.")
        self._n_dims = int(n_dims)
        self._param_names = [f"x{i}" for i in range(self._n_dims)]
        self._param_ranges: list[Range1D | None] = [None] * self._n_dims

    @property
    def n_dims(self) -> int:
        return self._n_dims

    def set_param(self, i: int, name: str, limits: Range1D):
        if not 0 <= i < self._n_dims:
            raise IndexError(f"parameter index {i} out of range for n_dims={self._n_dims}")
        self._param_names[i] = name
        self._param_ranges[i] = limits

    def param_name(self, i: int) -> str:
        return self._param_names[i]

    def param_range(self, i: int) -> Range1D | None:
        return self._param_ranges[i]

    @property
    def ranges(self) -> list[Range1D]:
        """Declared ranges; all of them must have been set."""
        missing = [self._param_names[i] for i, r in enumerate(self._param_ranges) if r is None]
        if missing:
            raise ValueError(f"No integration range declared for: {', '.join(missing)}")
        return list(self._param_ranges)

    def __call__(self, x: Sequence[float]) -> float:
        if len(x) != self._n_dims:
            raise ValueError(f"Expected a vector of size {self._n_dims}, got {len(x)}.")
        return float(self.evaluate(x))

    @abstractmethod
    def evaluate(self, x: Sequence[float]) -> float:
        ...


class CallableFunction(ScalarFunction):
    """Wrap a plain Python callable ``f(x0, x1, ...)``."""

    def __init__(self, fct: Callable[..., float], n_dims: int = 1):
        super().__init__(n_dims=n_dims)
        self._fct = fct

    def evaluate(self, x):
        return self._fct(*x)
