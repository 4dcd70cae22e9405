"""Min-max normalization for score fusion."""

import numpy as np

# Ranges this small relative to the data are floating-point noise, not signal.
_RELATIVE_TOLERANCE = 1e-12


class Normalization:
    """Rescaling helpers shared by the scorer."""

    @staticmethod
    def min_max(values: np.ndarray, constant: float = 0.5) -> np.ndarray:
        """
        Rescale to [0, 1]: (x - min) / (max - min).

        Args:
            values: 1-D array
            constant: Value assigned to every entry when max == min (up to
                rounding noise)

        Returns:
            New array of the same length
        """
        values = np.asarray(values, dtype=float)
        if values.size == 0:
            return values.copy()

        low = float(values.min())
        high = float(values.max())
        if high - low <= _RELATIVE_TOLERANCE * max(1.0, abs(high), abs(low)):
            return np.full(values.shape, constant)

        return np.clip((values - low) / (high - low), 0.0, 1.0)
