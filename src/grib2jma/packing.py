"""
Reconstruction of data values from GRIB2 Data Section (Section 7).

Two packing schemes are supported:

- Simple packing (Data Representation Template 5.0): fixed width codes
  `X`, one per valid grid point, with physical values
  `(R + X * 2**E) * 10**-D`.
- Run-length packing with level values (JMA Template 5.200): a stream of
  sets, each a level code (0..MAXV) followed by zero or more run-length
  digits (values greater than MAXV) in base `LNGU = 2**NBIT - 1 - MAXV`.

Values are produced in scan order; placing them on the 2-D grid is done by
`grib2jma.Grib2GridDef.scan_indices`.
"""

import logging
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .utils import BitCursor
from .errors import (CorruptRunLength, DataLengthMismatch,
                     InconsistentLevelTable)

logger = logging.getLogger(__name__)


def _check_surplus(cursor: BitCursor, what: str):
    """Only the zero padding of the last octet may follow the data."""
    if cursor.remaining >= 8:
        raise DataLengthMismatch(f'{cursor.remaining//8} octets of {what} remain after the grid is full.',
                                 cursor.offset)


def unpack_simple(cursor: BitCursor, nbits: int, count: int, refvalue: float,
                  binscale: int, decscale: int) -> NDArray:
    """
    Unpack simple packed values.

    Values follow GRIB2 Template 5.0, `(R + X*2**E) * 10**-D`: the binary
    scale applies to the code X only and not to the reference value R.

    Parameters
    ----------
    cursor
        `BitCursor` positioned at the first packed value.
    nbits
        Number of bits of each packed value.
    count
        Number of packed values (the number of valid grid points).
    refvalue
        Reference value R.
    binscale
        Binary scale factor E.
    decscale
        Decimal scale factor D.

    Returns
    -------
    unpack_simple
        `numpy.ndarray` of dtype float64 with `count` values.
    """
    if cursor.remaining < nbits*count:
        raise DataLengthMismatch(f'Data Section holds {cursor.remaining//nbits} values '
                                 f'of {nbits} bits for {count} valid grid points.', cursor.offset)
    codes = cursor.read_array(nbits, count)
    _check_surplus(cursor, 'simple packed values')
    return (float(refvalue) + codes.astype(np.float64)*2.0**binscale) * 10.0**-decscale


def _pack_bits(codes: NDArray, nbits: int) -> bytes:
    codes = np.asarray(codes, dtype=np.uint64)
    shifts = np.arange(nbits-1, -1, -1, dtype=np.uint64)
    bits = ((codes[:, None] >> shifts) & np.uint64(1)).astype(np.uint8)
    return np.packbits(bits.ravel()).tobytes()


def pack_simple(values: Sequence[float], nbits: int, binscale: int=0,
                decscale: int=0) -> Tuple[np.float32, bytes]:
    """
    Simple pack values.

    The inverse of `unpack_simple`; values are scaled by `10**decscale`,
    the minimum becomes the reference value and the remainder is quantized
    in steps of `2**binscale`.

    Parameters
    ----------
    values
        Values of the valid grid points in scan order.
    nbits
        Number of bits of each packed value.
    binscale
        Binary scale factor E.
    decscale
        Decimal scale factor D.

    Returns
    -------
    refvalue
        Reference value as a `numpy.float32`.
    packed
        Packed codes, zero padded to a whole octet.

    Raises
    ------
    ValueError
        If the scaled range does not fit in `nbits` bits.
    """
    scaled = np.asarray(values, dtype=np.float64) * 10.0**decscale
    refvalue = np.float32(scaled.min()) if scaled.size else np.float32(0.0)
    # R must not exceed the minimum once rounded to 32 bits.
    if scaled.size and float(refvalue) > scaled.min():
        refvalue = np.nextafter(refvalue, np.float32(-np.inf))
    codes = np.rint((scaled - float(refvalue)) / 2.0**binscale)
    if codes.size and codes.max() > 2**nbits-1:
        raise ValueError(f'Values span {int(codes.max())} steps of 2**{binscale}, '
                         f'more than {nbits} bits can carry.')
    return refvalue, _pack_bits(codes, nbits)


def expand_run_length(values: Sequence[int], maxv: int, lngu: int) -> Tuple[int, int]:
    """
    Expand one run-length set into its level code and run length.

    Parameters
    ----------
    values
        The level code followed by its run-length digits.
    maxv
        Largest level code (MAXV).
    lngu
        Base of the run-length digits, `2**NBIT - 1 - MAXV`.

    Returns
    -------
    level
        Level code.
    run
        Number of grid points carrying the level.
    """
    level = int(values[0])
    run = 1
    for i, digit in enumerate(values[1:]):
        run += lngu**i * (int(digit) - (maxv+1))
    return level, run


def iter_runs(cursor: BitCursor, nbit: int, maxv: int) -> Iterator[Tuple[int, int]]:
    """
    Iterate over the `(level, run)` sets of a run-length stream.

    The generator is lazy; stop consuming it once the grid is full so that
    the padding of the last octet is never read as a set.

    Parameters
    ----------
    cursor
        `BitCursor` positioned at the first set.
    nbit
        Number of bits of each value (NBIT).
    maxv
        Largest level code (MAXV).
    """
    lngu = 2**nbit - 1 - maxv
    while cursor.remaining >= nbit:
        start = cursor.offset
        values = [cursor.read(nbit)]
        if values[0] > maxv:
            raise CorruptRunLength(f'Run-length set starts with digit {values[0]} '
                                   f'instead of a level code (MAXV={maxv}).', start)
        while cursor.remaining >= nbit and cursor.peek(nbit) > maxv:
            values.append(cursor.read(nbit))
        yield expand_run_length(values, maxv, lngu)


def decode_runs(cursor: BitCursor, nbit: int, maxv: int) -> Tuple[NDArray, NDArray, NDArray]:
    """
    Decode a whole run-length stream at once.

    Parameters
    ----------
    cursor
        `BitCursor` positioned at the first set.  All remaining values are
        consumed, including any trailing padding.
    nbit
        Number of bits of each value (NBIT).
    maxv
        Largest level code (MAXV).

    Returns
    -------
    levels
        Level code of each set.
    runs
        Run length of each set.
    ends
        Index of the value following each set, counted in values from the
        start of the stream.
    """
    lngu = 2**nbit - 1 - maxv
    base = cursor.position
    start = cursor.offset
    values = cursor.read_array(nbit, cursor.remaining//nbit).astype(np.int64)
    if values.size == 0:
        empty = np.zeros(0, dtype=np.int64)
        return empty, empty, empty
    is_level = values <= maxv
    if not is_level[0]:
        raise CorruptRunLength(f'Run-length set starts with digit {values[0]} '
                               f'instead of a level code (MAXV={maxv}).', start)
    starts = np.flatnonzero(is_level)
    set_id = np.cumsum(is_level) - 1
    power = np.arange(values.size) - starts[set_id] - 1
    if power.max() > 0 and float(lngu)**power.max() > 2.0**53:
        bad = starts[set_id[np.argmax(power)]]
        raise CorruptRunLength('Run-length set has more digits than any grid can hold.',
                               start + (base%8 + int(bad)*nbit)//8)
    digits = np.where(is_level, 0, values - (maxv+1))
    weights = np.where(is_level, 0, lngu**np.maximum(power, 0))
    runs = 1 + np.bincount(set_id, weights=(digits*weights).astype(np.float64),
                           minlength=starts.size).astype(np.int64)
    ends = np.append(starts[1:], values.size)
    return values[starts], runs, ends


def _place(values: NDArray, bitmap: Optional[NDArray], npoints: int, fill) -> NDArray:
    if bitmap is None:
        return values
    out = np.full(npoints, fill, dtype=values.dtype)
    out[bitmap] = values
    return out


def expand_runs(levels: NDArray, runs: NDArray, level_table: NDArray,
                bitmap: Optional[NDArray], npoints: int, fill=np.nan) -> NDArray:
    """
    Expand `(level, run)` sets into a linear sequence of physical values.

    Parameters
    ----------
    levels
        Level code of each set.
    runs
        Run length of each set.
    level_table
        Physical value of each level code.
    bitmap
        Valid points in scan order or `None` when all points are valid.
        Invalid points consume no run.
    npoints
        Number of grid points.
    fill
        Value of the invalid points.

    Returns
    -------
    expand_runs
        `numpy.ndarray` of dtype float64 with `npoints` values in scan order.
    """
    levels = np.asarray(levels, dtype=np.int64)
    runs = np.asarray(runs, dtype=np.int64)
    capacity = npoints if bitmap is None else int(np.count_nonzero(bitmap))
    total = np.cumsum(runs)
    if total.size and total[-1] > capacity:
        k = int(np.searchsorted(total, capacity, side='right'))
        raise CorruptRunLength(f'Run of {runs[k]} points at set {k} overruns the '
                               f'{capacity} valid grid points.')
    if (total[-1] if total.size else 0) < capacity:
        raise DataLengthMismatch(f'Runs cover {total[-1] if total.size else 0} of '
                                 f'{capacity} valid grid points.')
    if levels.size and (levels.min() < 0 or levels.max() >= len(level_table)):
        raise InconsistentLevelTable(f'Level code {levels.max()} has no entry in the '
                                     f'level table of {len(level_table)} entries.')
    values = np.repeat(np.asarray(level_table, dtype=np.float64)[levels], runs)
    return _place(values, bitmap, npoints, fill)


def pack_run_length(levels: Sequence[int], runs: Sequence[int], nbit: int, maxv: int) -> bytes:
    """
    Run-length pack `(level, run)` sets.

    Parameters
    ----------
    levels
        Level code of each set.
    runs
        Run length of each set.
    nbit
        Number of bits of each value (NBIT).
    maxv
        Largest level code (MAXV).

    Returns
    -------
    pack_run_length
        Packed stream, zero padded to a whole octet.
    """
    lngu = 2**nbit - 1 - maxv
    if lngu < 2:
        raise ValueError(f'{nbit} bits leave no run-length digits above MAXV={maxv}.')
    codes = []
    for level, run in zip(levels, runs):
        if not 0 <= level <= maxv:
            raise ValueError(f'Level code {level} outside 0..{maxv}.')
        codes.append(level)
        rest = run - 1
        while rest > 0:
            rest, digit = divmod(rest, lngu)
            codes.append(digit + maxv + 1)
    return _pack_bits(codes, nbit)


def reconstruct(field, fill=np.nan) -> Tuple[NDArray, Optional[NDArray]]:
    """
    Reconstruct the values of a field in scan order.

    Parameters
    ----------
    field
        `grib2jma.Grib2Field` holding Section 7 and the resolved bitmap.
    fill
        Value of the grid points without data.

    Returns
    -------
    values
        `numpy.ndarray` of dtype float64 with one value per grid point.
    levels
        Level code of each grid point for run-length packing (0 where there
        is no data), otherwise `None`.
    """
    npoints = field.griddef.npoints
    bitmap = field.bitmap
    capacity = npoints if bitmap is None else int(np.count_nonzero(bitmap))
    cursor = BitCursor(field._section7[5:], offset=field._section7_offset+5)
    logger.debug('reconstructing %s field: %d points, %d valid',
                 field._packingScheme, npoints, capacity)

    if field._packingScheme == 'simple':
        values = unpack_simple(cursor, field.nBitsPacking, capacity, field.refValue,
                               field.binScaleFactor, field.decScaleFactor)
        return _place(values, bitmap, npoints, fill), None

    nbit = field.bitsPerLevelCode
    maxv = field.maxLevelValue
    if capacity == 0:
        _check_surplus(cursor, 'run-length data')
        levels = runs = np.zeros(0, dtype=np.int64)
    else:
        levels, runs, ends = decode_runs(cursor, nbit, maxv)
        total = np.cumsum(runs)
        # First set that fills the grid; anything after it must be padding.
        k = int(np.searchsorted(total, capacity))
        if k < total.size:
            trailing = BitCursor(field._section7[5:], offset=field._section7_offset+5)
            trailing.position = (int(ends[k-1]) if k > 0 else 0)*nbit
            if total[k] > capacity:
                raise CorruptRunLength(f'Run of {runs[k]} points overruns the '
                                       f'{capacity} valid grid points.', trailing.offset)
            trailing.position = int(ends[k])*nbit
            _check_surplus(trailing, 'run-length data')
            levels, runs = levels[:k+1], runs[:k+1]
    table = field.levelTable
    if not np.isnan(fill):
        table = np.where(np.isnan(table), fill, table)
    values = expand_runs(levels, runs, table, bitmap, npoints, fill=fill)
    codes = expand_runs(levels, runs, np.arange(len(table)), bitmap, npoints, fill=0)
    return values, codes.astype(np.int64)
