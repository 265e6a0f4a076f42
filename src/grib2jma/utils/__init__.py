"""
Collection of utility functions to assist in the decoding of GRIB2 Messages.
"""

import datetime
import math
import struct
from typing import Union, Type, List

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .. import tables
from ..errors import TruncatedMessage

def int2bin(i: int, nbits: int=8, output: Union[Type[str], Type[List]]=str):
    """
    Convert integer to binary string or list

    Parameters
    ----------
    i
        Integer value to convert to binary representation.
    nbits : default=8
        Number of bits to return.  Valid values are 8 [DEFAULT], 16, 32, and
        64.
    output : default=str
        Return data as `str` [DEFAULT] or `list` (list of ints).

    Returns
    -------
    int2bin
        `str` or `list` (list of ints) of binary representation of the integer
        value.
    """
    i = int(i) if not isinstance(i,int) else i
    assert nbits in [8,16,32,64]
    bitstr = "{0:b}".format(i).zfill(nbits)
    if output is str:
        return bitstr
    elif output is list:
        return [int(b) for b in bitstr]


def ieee_float_to_int(f):
    """
    Convert an IEEE 754 32-bit float to a 32-bit integer.

    Parameters
    ----------
    f : float
        Floating-point value.

    Returns
    -------
    ieee_float_to_int
        `numpy.int32` representation of an IEEE 32-bit float.
    """
    i = struct.unpack('>i',struct.pack('>f',np.float32(f)))[0]
    return np.int32(i)


def ieee_int_to_float(i):
    """
    Convert a 32-bit integer to an IEEE 32-bit float.

    Parameters
    ----------
    i : int
        Integer value.

    Returns
    -------
    ieee_int_to_float
        `numpy.float32` representation of a 32-bit int.
    """
    f = struct.unpack('>f',struct.pack('>i',np.int32(i)))[0]
    return np.float32(f)


def sign_magnitude(value: int, nbits: int) -> int:
    """
    Interpret an unsigned integer as a GRIB2 sign-magnitude integer.

    GRIB2 encodes negative values by setting the most significant bit of
    the octets; the remaining bits hold the absolute value.

    Parameters
    ----------
    value
        Unsigned integer as read from the message.
    nbits
        Width of the value in bits (8, 16 or 32).

    Returns
    -------
    sign_magnitude
        Signed integer.
    """
    signbit = 1 << (nbits-1)
    if value & signbit:
        return -(value & (signbit-1))
    return value


def to_sign_magnitude(value: int, nbits: int) -> int:
    """Inverse of `sign_magnitude`."""
    if value < 0:
        return (1 << (nbits-1)) | -value
    return value


def min_bit_width(maxv: int) -> int:
    """
    Smallest bit width able to carry run-length level codes.

    Level codes occupy the values 0..maxv and at least one more value must
    remain to encode run-length digits, so the width `w` is the smallest
    satisfying `2**w >= maxv + 2`.

    Parameters
    ----------
    maxv
        Largest level code used in the message.

    Returns
    -------
    min_bit_width
        Number of bits.
    """
    return max(1, int(maxv+1).bit_length())


def get_leadtime(idsec: ArrayLike, pdtn: int, pdt: ArrayLike) -> datetime.timedelta:
    """
    Compute lead time as a datetime.timedelta object.

    Using information from GRIB2 Identification Section (Section 1), Product
    Definition Template Number, and Product Definition Template (Section 4).
    For the statistically processed templates (4.50008, 4.50009) the lead
    time runs to the end of the overall time interval.

    Parameters
    ----------
    idsec
        Sequence containing GRIB2 Identification Section (Section 1).
    pdtn
        GRIB2 Product Definition Template Number
    pdt
        Sequence containing GRIB2 Product Definition Template (Section 4).

    Returns
    -------
    leadTime
        datetime.timedelta object representing the lead time of the GRIB2 message.
    """
    _key = {50008:slice(15,21), 50009:slice(15,21)}
    refdate = datetime.datetime(*idsec[5:11])
    try:
        return datetime.datetime(*pdt[_key[pdtn]])-refdate
    except(KeyError):
        return datetime.timedelta(hours=int(pdt[8])*(tables.get_value_from_table(pdt[7],'scale_time_hours')))


def get_duration(pdtn: int, pdt: ArrayLike) -> datetime.timedelta:
    """
    Compute a time duration as a datetime.timedelta.

    Parameters
    ----------
    pdtn
        GRIB2 Product Definition Template Number
    pdt
        Sequence containing GRIB2 Product Definition Template (Section 4).

    Returns
    -------
    get_duration
        datetime.timedelta object representing the time duration of the GRIB2
        message.  Zero for templates without statistical processing.
    """
    _key = {50008:25, 50009:25}
    try:
        return datetime.timedelta(hours=int(pdt[_key[pdtn]+1])*tables.get_value_from_table(pdt[_key[pdtn]],'scale_time_hours'))
    except(KeyError):
        return datetime.timedelta(hours=0)


def mesh3_code(lat: float, lon: float) -> str:
    """
    Return the Japanese standard third-order mesh code of a point.

    The standard regional mesh (JIS X 0410) divides the country into first
    order meshes of 40' of latitude by 1 degree of longitude, second order
    meshes of 5' by 7'30" and third order meshes of 30" by 45".

    Parameters
    ----------
    lat
        Latitude in degrees.
    lon
        Longitude in degrees.

    Returns
    -------
    mesh3_code
        8-digit mesh code string.
    """
    # Work in integer milliseconds of arc to avoid float boundary errors.
    lat_ms = int(round(lat*3600000))
    lon_ms = int(round(lon*3600000))
    p, rem = divmod(lat_ms, 2400000)
    q, rem = divmod(rem, 300000)
    r = rem // 30000
    deg, rem = divmod(lon_ms, 3600000)
    u = deg - 100
    v, rem = divmod(rem, 450000)
    w = rem // 45000
    if not (0 <= p < 100 and 0 <= u < 100):
        raise ValueError(f'Point ({lat}, {lon}) lies outside the standard regional mesh.')
    return f'{p:02d}{u:02d}{q}{v}{r}{w}'


class BitCursor:
    """
    Sequential reader of big-endian unsigned integers of any bit width.

    The cursor owns its bit position, so independent cursors may walk the
    same immutable buffer concurrently.

    Attributes
    ----------
    position : int
        Current position in bits from the start of the buffer.
    size : int
        Size of the buffer in bits.
    """
    __slots__ = ('_buf', '_base', 'position', 'size')

    def __init__(self, buf, offset: int=0):
        """
        Parameters
        ----------
        buf
            Bytes-like object to read from.
        offset
            Absolute byte offset of `buf` within the GRIB2 message, used
            when reporting errors.
        """
        self._buf = np.frombuffer(buf, dtype=np.uint8)
        self._base = offset
        self.position = 0
        self.size = self._buf.size*8

    def __repr__(self):
        return f'{self.__class__.__name__}(position={self.position}, remaining={self.remaining})'

    @property
    def remaining(self) -> int:
        """Number of unread bits."""
        return self.size - self.position

    @property
    def offset(self) -> int:
        """Absolute byte offset of the current position."""
        return self._base + self.position // 8

    def _check(self, nbits: int):
        if nbits > self.remaining:
            raise TruncatedMessage(f'Need {nbits} bits but only {self.remaining} remain.', self.offset)

    def peek(self, nbits: int) -> int:
        """Return the next `nbits`-wide value without advancing."""
        self._check(nbits)
        if nbits == 0:
            return 0
        start = self.position // 8
        end = (self.position + nbits + 7) // 8
        chunk = int.from_bytes(self._buf[start:end].tobytes(), 'big')
        shift = end*8 - (self.position + nbits)
        return (chunk >> shift) & ((1 << nbits) - 1)

    def read(self, nbits: int) -> int:
        """Return the next `nbits`-wide value and advance."""
        value = self.peek(nbits)
        self.position += nbits
        return value

    def read_array(self, nbits: int, count: int) -> NDArray:
        """
        Read `count` consecutive `nbits`-wide values.

        Parameters
        ----------
        nbits
            Width of each value in bits (0 to 64).
        count
            Number of values.

        Returns
        -------
        read_array
            `numpy.ndarray` of dtype `uint64`.
        """
        self._check(nbits*count)
        if nbits == 0 or count == 0:
            return np.zeros(count, dtype=np.uint64)
        start = self.position // 8
        if self.position % 8 == 0 and nbits in {8, 16, 32}:
            dtype = {8:'>u1', 16:'>u2', 32:'>u4'}[nbits]
            nbytes = count*nbits//8
            values = np.frombuffer(self._buf[start:start+nbytes].tobytes(), dtype=dtype).astype(np.uint64)
        else:
            end = (self.position + nbits*count + 7) // 8
            skip = self.position - start*8
            bits = np.unpackbits(self._buf[start:end])[skip:skip+nbits*count].reshape(count, nbits)
            values = np.zeros(count, dtype=np.uint64)
            for i in range(nbits):
                values = (values << np.uint64(1)) | bits[:, i].astype(np.uint64)
        self.position += nbits*count
        return values

    def align(self):
        """Advance to the next octet boundary."""
        self.position = math.ceil(self.position/8)*8
