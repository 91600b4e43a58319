import numpy as np


# static class
class RandomSource:
    """
    Process-wide random source shared by the event generation chain.

    Uses NumPy's PCG64 generator, which yields the same stream for a given seed
    on every platform. Components that want their own stream can be handed an
    explicit ``np.random.Generator`` instead.
    """
    _seed = None
    _rng = np.random.default_rng()

    @classmethod
    def set_seed(cls, seed: int | None):
        """(Re)initialise the shared generator. ``None`` draws fresh OS entropy."""
        cls._seed = seed
        cls._rng = np.random.default_rng(seed)

    @classmethod
    def seed(cls):
        return cls._seed

    @classmethod
    def rng(cls) -> np.random.Generator:
        """Return the current shared generator."""
        return cls._rng
