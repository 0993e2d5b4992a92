"""
Exception hierarchy for the Clausing factor simulation.
"""


class ClausingError(Exception):
    """Base exception for Clausing simulation errors."""
    pass


class InvalidGeometryError(ClausingError, ValueError):
    """Raised when simulation parameters violate a precondition."""
    pass


class NoParticlesEscapedError(ClausingError, RuntimeError):
    """Raised when no particle escaped, leaving den_cor undefined."""

    def __init__(self, npart: int):
        self.npart = npart
        super().__init__(
            f"No particles escaped out of {npart} launched; "
            "the downstream correction factor is undefined"
        )
