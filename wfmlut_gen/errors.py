"""Exceptions raised while building and writing a sin/cos LUT."""


class WfmLutError(Exception):
    """Base class for every error this package raises on purpose."""


class InvalidFormat(WfmLutError, ValueError):
    """Fixed-point format has no integer (sign) bit or a negative fraction width."""


class InvalidDepth(WfmLutError, ValueError):
    """LUT depth is not a positive power of two."""


class SizeComputationMismatch(WfmLutError, RuntimeError):
    """Rendered document length disagrees with the length planned before allocation."""


class ShortWrite(WfmLutError, OSError):
    """Fewer (or more) bytes reached the output file than the document holds."""
