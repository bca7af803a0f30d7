"""Exception hierarchy for structural (caller-side) failures."""


class LPError(Exception):
    """Base class for every error raised by rational_lp."""


class ParseError(LPError, ValueError):
    """Malformed LP text or numeric literal."""


class InputError(LPError, ValueError):
    """Inputs with the wrong shape, non-finite entries or unsupported values."""


class RationalOverflowError(LPError, OverflowError):
    """A rational result does not fit the signed 64-bit range."""


class RationalZeroDivisionError(LPError, ZeroDivisionError):
    """A rational was built or divided with a zero denominator."""


class SolutionUnavailableError(LPError, LookupError):
    """A solution payload was requested for a status that carries none."""
