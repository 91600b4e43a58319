from nu_events.errors import ConfigurationError

import logging

import numpy as np

logger = logging.getLogger(__name__)


class XSecTable:
    """
    Precomputed total cross sections per channel on a probe energy grid.

    Lookups interpolate linearly, return 0 below the grid and the last value
    above it. The stored arrays are read-only.
    """

    def __init__(self, energies, xsecs: dict):
        energies = np.array(energies, dtype=float)
        if energies.ndim != 1 or energies.size < 1:
            raise ValueError("energies must be a non-empty 1-D array")
        if np.any(np.diff(energies) <= 0.0):
            raise ValueError("energies must be strictly increasing")
        energies.flags.writeable = False
        self._energies = energies

        self._xsecs = {}
        for channel, values in xsecs.items():
            values = np.array(values, dtype=float)
            if values.shape != energies.shape:
                raise ValueError(
                    f"channel '{channel}': shape {values.shape} does not match energies {energies.shape}"
                )
            if not np.all(np.isfinite(values)) or np.any(values < 0.0):
                raise ValueError(f"channel '{channel}': cross sections must be finite and >= 0")
            values.flags.writeable = False
            self._xsecs[str(channel)] = values

    @property
    def energies(self) -> np.ndarray:
        return self._energies

    @property
    def channels(self) -> list[str]:
        return list(self._xsecs)

    def __contains__(self, channel) -> bool:
        return channel in self._xsecs

    def values(self, channel: str) -> np.ndarray:
        return self._xsecs[channel]

    def lookup(self, channel: str, E: float) -> float:
        try:
            values = self._xsecs[channel]
        except KeyError:
            raise ConfigurationError(f"No tabulated cross section for channel '{channel}'") from None
        if E < self._energies[0]:
            return 0.0
        return float(np.interp(E, self._energies, values))

    @classmethod
    def build(cls, generator_map, energies) -> "XSecTable":
        """Integrate every channel of ``generator_map`` on the energy grid."""
        energies = np.asarray(energies, dtype=float)
        xsecs = {}
        for channel, generator in generator_map.items():
            xsecs[channel] = [generator.cross_section((0.0, 0.0, E, E)) for E in energies]
            logger.info(f"Tabulated {channel} at {energies.size} energies")
        return cls(energies, xsecs)

    # ---------- persistence ----------
    def save(self, path):
        channels = self.channels
        np.savez(
            path,
            energies=self._energies,
            channels=np.array(channels, dtype=str),
            xsecs=np.stack([self._xsecs[c] for c in channels]) if channels else np.empty((0, self._energies.size)),
        )

    @classmethod
    def load(cls, path) -> "XSecTable":
        with np.load(path, allow_pickle=False) as data:
            energies = data["energies"]
            channels = [str(c) for c in data["channels"]]
            xsecs = data["xsecs"]
        if not channels:
            logger.warning(f"Cross section table {path} holds no channel")
        return cls(energies, dict(zip(channels, xsecs)))
