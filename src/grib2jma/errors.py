"""
Exceptions raised while decoding GRIB2 messages.

All decode errors derive from `Grib2DecodeError`, which is itself a
`ValueError`, and carry the absolute byte offset in the message buffer
where the problem was detected (or `None` when the error is not tied to
a position in the buffer, e.g. `OutOfBounds`).
"""

from typing import Optional

__all__ = ['Grib2DecodeError', 'TruncatedMessage', 'InvalidSectionOrder',
           'UnsupportedGridTemplate', 'UnsupportedProductTemplate',
           'UnsupportedPackingMethod', 'UnsupportedBitmapReference',
           'UnknownParameter', 'InconsistentLevelTable', 'DataLengthMismatch',
           'CorruptRunLength', 'OutOfBounds']


class Grib2DecodeError(ValueError):
    """
    Base class of GRIB2 decode errors.

    Attributes
    ----------
    offset : int or None
        Byte offset from the beginning of the message where the error was
        detected.
    """
    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.offset = offset

    def __str__(self):
        if self.offset is None:
            return self.message
        return f'{self.message} (at byte offset {self.offset})'

    def __reduce__(self):
        return (self.__class__, (self.message, self.offset))


class TruncatedMessage(Grib2DecodeError):
    """Fewer bytes remain than a section or value declares."""


class InvalidSectionOrder(Grib2DecodeError):
    """Section numbers do not follow the GRIB2 section sequence."""


class UnsupportedGridTemplate(Grib2DecodeError):
    """Grid Definition Template other than 3.0."""


class UnsupportedProductTemplate(Grib2DecodeError):
    """Product Definition Template that this package cannot interpret."""


class UnsupportedPackingMethod(Grib2DecodeError):
    """Data Representation Template that this package cannot unpack."""


class UnsupportedBitmapReference(Grib2DecodeError):
    """Bitmap indicator referring to a predefined or unavailable bitmap."""


class UnknownParameter(Grib2DecodeError):
    """Parameter category/number absent from the product table."""


class InconsistentLevelTable(Grib2DecodeError):
    """Level table does not agree with the run-length level codes."""


class DataLengthMismatch(Grib2DecodeError):
    """Number of decoded values differs from the number of grid points."""


class CorruptRunLength(Grib2DecodeError):
    """Run-length stream that cannot be expanded onto the grid."""


class OutOfBounds(Grib2DecodeError):
    """Point query outside of the grid extent."""
