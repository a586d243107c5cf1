"""Error types raised by the Intention-Space simulation.

All of them abort the run in progress. Nothing is retried: a run is
deterministic given its random draws, so repeating a failed step without
reseeding would fail the same way.
"""


class ConfigurationError(ValueError):
    """Invalid simulation setup.

    Raised for rule numbers outside [0, 255], probabilities outside [0, 1],
    malformed patterns, bad precedence orderings, and cells left without any
    proposal during resolution (usually a missing BaselineRule source).
    """


class DimensionMismatch(ValueError):
    """A row or proposal disagrees with the field size."""


class InvalidCellIndex(IndexError):
    """A cell index falls outside [0, size)."""
