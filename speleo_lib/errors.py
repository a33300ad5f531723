# -*- coding: utf-8 -*-
"""Exceptions raised by speleo_lib.

Only programming-invariant violations and external I/O failures are
raised.  Data-quality problems (orphan, duplicate or invalid shots,
isolated surveys) are recorded on the survey instead.
"""


class SpeleoError(Exception):
    """Base class of all speleo_lib errors."""


class ConflictingShotError(SpeleoError):
    """Raised when reconstruction tries to place an already placed station.

    Attributes:
        from_name: ``from`` station of the offending shot
        to_name: ``to`` station of the offending shot
    """

    def __init__(self, from_name: str | None, to_name: str | None):
        self.from_name = from_name
        self.to_name = to_name
        super().__init__(f"Conflicting shot ({from_name} -> {to_name})!")


class UnknownShotTypeError(SpeleoError):
    """Raised when a shot carries a type outside of ``ShotType``."""


class GradientConfigurationError(SpeleoError, ValueError):
    """Raised when a colour gradient has fewer than two breakpoints."""


class InvalidCoordinateError(SpeleoError):
    """Raised when coordinate conversion fails."""


class DeclinationLookupError(SpeleoError):
    """Raised when the magnetic declination service cannot answer."""
