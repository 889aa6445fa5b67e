"""Exception raised when an iterative solver fails to finish."""


class EphemerisComputationError(RuntimeError):
    """An iterative step (Kepler solve or new-moon search) exceeded its bound."""
