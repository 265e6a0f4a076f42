"""
Unpacking of GRIB2 integer sections into numpy arrays.

Each `unpackN` function takes the raw bytes of GRIB2 section N (starting
with the section length and number octets) and returns the section
contents as an array of `numpy.int64` laid out the way the
`grib2jma.templates` descriptor classes index them.  Sign-magnitude
quantities are converted to signed integers here; missing unsigned 32-bit
values (all bits set) become -1.
"""

import logging
import struct

import numpy as np

from . import utils
from .errors import (TruncatedMessage, UnsupportedGridTemplate,
                     UnsupportedProductTemplate, UnsupportedPackingMethod,
                     UnsupportedBitmapReference, InconsistentLevelTable,
                     DataLengthMismatch)

logger = logging.getLogger(__name__)

DEFAULT_NUMPY_INT = np.int64
MISSING_UINT32 = 4294967295

# Section 3: source, number of data points, octets for optional list,
# interpretation of list, grid definition template number.
_sect3_struct = struct.Struct('>BIBBH')
# Template 3.0
_gdt0_struct = struct.Struct('>BBIBIBIIIIIIIBIIIIB')
_gdt0_signed = (11, 12, 14, 15)

_sect4_struct = struct.Struct('>HH')
# Template 4.0
_pdt0_struct = struct.Struct('>BBBBBHBBIBBIBBI')
# Template 4.50000 source documents
_pdt50000_struct = struct.Struct('>BHBBHB')
# Template 4.50008 statistical processing and operation words
_pdt50008_struct = struct.Struct('>HBBBBBBIBBBIBIQQQ')
# Template 4.50009 area count and ratio scale
_pdt50009_struct = struct.Struct('>HB')

_sect5_struct = struct.Struct('>IH')
# Template 5.0
_drt0_struct = struct.Struct('>IHHBB')
# Template 5.200
_drt200_struct = struct.Struct('>BHHB')

_pdt_lengths = {0: _pdt0_struct.size,
                50000: _pdt0_struct.size+_pdt50000_struct.size,
                50008: _pdt0_struct.size+_pdt50008_struct.size,
                50009: _pdt0_struct.size+_pdt50008_struct.size+_pdt50009_struct.size}


def _require(buf, size: int, offset: int, what: str):
    if len(buf) < size:
        raise TruncatedMessage(f'{what} needs {size} octets but has {len(buf)}.', offset)


def unpack0(buf, offset: int=0) -> np.ndarray:
    """
    Unpack GRIB2 Indicator Section (Section 0).

    Parameters
    ----------
    buf
        The first 16 octets of a GRIB2 message.
    offset
        Absolute byte offset of `buf`, for error reporting.

    Returns
    -------
    section0
        `numpy.ndarray` of [GRIB, reserved, discipline, edition, total length].
    """
    _require(buf, 16, offset, 'Section 0')
    header = struct.unpack('>I', bytes(buf[0:4]))[0]
    return np.concatenate(([header], struct.unpack('>HBBQ', bytes(buf[4:16]))), dtype=DEFAULT_NUMPY_INT)


def unpack1(buf, offset: int=0) -> np.ndarray:
    """
    Unpack GRIB2 Identification Section (Section 1).

    Returns
    -------
    section1
        `numpy.ndarray` of 13 values: originating center, subcenter, master
        and local table versions, significance of reference time, year, month,
        day, hour, minute, second, production status and type of data.
    """
    _require(buf, 21, offset, 'Section 1')
    return np.array(struct.unpack('>HHBBBHBBBBBBB', bytes(buf[5:21])), dtype=DEFAULT_NUMPY_INT)


def unpack3(buf, offset: int=0) -> np.ndarray:
    """
    Unpack GRIB2 Grid Definition Section (Section 3).

    Only Grid Definition Template 3.0 (equidistant latitude/longitude) is
    supported.

    Parameters
    ----------
    buf
        Section 3 octets.
    offset
        Absolute byte offset of `buf`, for error reporting.

    Returns
    -------
    section3
        `numpy.ndarray` of the 5 section values followed by the 19 values
        of the grid definition template.
    """
    _require(buf, 5+_sect3_struct.size, offset, 'Section 3')
    gds = list(_sect3_struct.unpack_from(buf, 5))
    gdtn = gds[4]
    if gdtn != 0:
        raise UnsupportedGridTemplate(f'Grid Definition Template 3.{gdtn} is not supported.', offset)
    start = 5+_sect3_struct.size
    _require(buf, start+_gdt0_struct.size, offset, 'Grid Definition Template 3.0')
    gdt = list(_gdt0_struct.unpack_from(buf, start))
    for i in _gdt0_signed:
        gdt[i] = utils.sign_magnitude(gdt[i], 32)
    section3 = np.array(gds+gdt, dtype=DEFAULT_NUMPY_INT)
    section3 = np.where(section3==MISSING_UINT32, -1, section3)
    logger.debug('Section 3 at %d: gdtn=%d npoints=%d', offset, gdtn, section3[1])
    return section3


def unpack4(buf, offset: int=0) -> np.ndarray:
    """
    Unpack GRIB2 Product Definition Section (Section 4).

    Supported templates are 4.0 and the JMA local templates 4.50000,
    4.50008 and 4.50009.

    Returns
    -------
    section4
        `numpy.ndarray` of [number of coordinate values, template number]
        followed by the product definition template.
    """
    _require(buf, 5+_sect4_struct.size, offset, 'Section 4')
    numcoord, pdtn = _sect4_struct.unpack_from(buf, 5)
    if pdtn not in _pdt_lengths:
        raise UnsupportedProductTemplate(f'Product Definition Template 4.{pdtn} is not supported.', offset)
    pos = 5+_sect4_struct.size
    _require(buf, pos+_pdt_lengths[pdtn], offset, f'Product Definition Template 4.{pdtn}')

    pdt = list(_pdt0_struct.unpack_from(buf, pos))
    pos += _pdt0_struct.size
    pdt[8] = utils.sign_magnitude(pdt[8], 32)
    pdt[10] = utils.sign_magnitude(pdt[10], 8)
    pdt[13] = utils.sign_magnitude(pdt[13], 8)

    if pdtn == 50000:
        pdt.extend(_pdt50000_struct.unpack_from(buf, pos))
    elif pdtn in {50008, 50009}:
        pdt.extend(_pdt50008_struct.unpack_from(buf, pos))
        pos += _pdt50008_struct.size
        if pdtn == 50009:
            nareas, ratio_scale = _pdt50009_struct.unpack_from(buf, pos)
            pos += _pdt50009_struct.size
            _require(buf, pos+2*nareas, offset, 'Product Definition Template 4.50009 ratios')
            pdt.extend((nareas, ratio_scale))
            pdt.extend(struct.unpack_from(f'>{nareas}H', buf, pos))

    # 64-bit operation words are stored two's complement to fit int64.
    if pdtn in {50008, 50009}:
        for i in range(29, 32):
            if pdt[i] >= 1<<63:
                pdt[i] -= 1<<64

    section4 = np.array([numcoord, pdtn]+pdt, dtype=DEFAULT_NUMPY_INT)
    logger.debug('Section 4 at %d: pdtn=%d parameter=(%d,%d)', offset, pdtn, pdt[0], pdt[1])
    return section4


def unpack5(buf, offset: int=0) -> np.ndarray:
    """
    Unpack GRIB2 Data Representation Section (Section 5).

    Supported templates are 5.0 (simple packing) and the JMA local template
    5.200 (run-length packing with a level table).  Representative level
    values are returned as unsigned integers; products with signed levels
    reinterpret them through the template descriptors.

    Parameters
    ----------
    buf
        Section 5 octets.
    offset
        Absolute byte offset of `buf`, for error reporting.

    Returns
    -------
    section5
        `numpy.ndarray` of [number of packed values, template number]
        followed by the data representation template.
    """
    _require(buf, 5+_sect5_struct.size, offset, 'Section 5')
    npts, drtn = _sect5_struct.unpack_from(buf, 5)
    pos = 5+_sect5_struct.size
    if drtn == 0:
        _require(buf, pos+_drt0_struct.size, offset, 'Data Representation Template 5.0')
        refvalue, binscale, decscale, nbits, typeofvalues = _drt0_struct.unpack_from(buf, pos)
        if nbits == 0:
            raise UnsupportedPackingMethod('Simple packing with 0 bits per value is not supported.', offset)
        # Keep the IEEE bits in a signed 32-bit integer.
        refvalue = struct.unpack('>i', struct.pack('>I', refvalue))[0]
        drt = [refvalue, utils.sign_magnitude(binscale, 16), utils.sign_magnitude(decscale, 16),
               nbits, typeofvalues]
    elif drtn == 200:
        _require(buf, pos+_drt200_struct.size, offset, 'Data Representation Template 5.200')
        nbits, maxv, nlevels, decscale = _drt200_struct.unpack_from(buf, pos)
        pos += _drt200_struct.size
        if (len(buf)-pos) % 2 != 0:
            raise DataLengthMismatch('Level values of Template 5.200 must be 2 octets each.', offset+pos)
        levels = list(struct.unpack_from(f'>{(len(buf)-pos)//2}H', buf, pos))
        if len(levels) == 0:
            raise InconsistentLevelTable('Level table is empty.', offset+pos)
        if maxv > len(levels):
            raise InconsistentLevelTable(f'Maximum level value {maxv} exceeds the '
                                         f'{len(levels)} level values present.', offset)
        minbits = utils.min_bit_width(maxv)
        if nbits != 0 and nbits < minbits:
            raise InconsistentLevelTable(f'{nbits} bits cannot encode level values up to '
                                         f'{maxv} and run lengths; need at least {minbits}.', offset)
        drt = [nbits, maxv, nlevels, utils.sign_magnitude(decscale, 8)]+levels
    else:
        raise UnsupportedPackingMethod(f'Data Representation Template 5.{drtn} is not supported.', offset)
    logger.debug('Section 5 at %d: drtn=%d npoints=%d', offset, drtn, npts)
    return np.array([npts, drtn]+drt, dtype=DEFAULT_NUMPY_INT)


def unpack6(buf, npoints: int, offset: int=0):
    """
    Unpack GRIB2 Bit-Map Section (Section 6).

    Parameters
    ----------
    buf
        Section 6 octets.
    npoints
        Number of grid points the bitmap covers.
    offset
        Absolute byte offset of `buf`, for error reporting.

    Returns
    -------
    bitMapFlag
        Bit-map indicator.
    bitmap
        `numpy.ndarray` of bool of length `npoints` when the bitmap is in
        this section, otherwise `None` (no bitmap or a reference to a
        previously defined bitmap, indicator 254).
    """
    _require(buf, 6, offset, 'Section 6')
    bmapflag = buf[5]
    if bmapflag == 255 or bmapflag == 254:
        return bmapflag, None
    if bmapflag != 0:
        raise UnsupportedBitmapReference(f'Predefined bitmap {bmapflag} is not supported.', offset+5)
    nbytes = (npoints+7)//8
    if len(buf)-6 < nbytes:
        raise DataLengthMismatch(f'Bitmap holds {8*(len(buf)-6)} bits for {npoints} grid points.', offset+6)
    bitmap = np.unpackbits(np.frombuffer(buf, dtype=np.uint8, count=nbytes, offset=6))[:npoints].astype(bool)
    return bmapflag, bitmap
