import itertools

import numpy as np
import pytest

import grib2jma
from grib2jma import errors, packing
from grib2jma.utils import BitCursor

# JMA Template 7.200 example: NBIT=4, MAXV=10, LNGU=5
JMA_STREAM = [3, 9, 12, 6, 4, 15, 2, 1, 0, 13, 12, 2, 3]
JMA_SETS = [(3, 1), (9, 2), (6, 1), (4, 5), (2, 1), (1, 1), (0, 8), (2, 1), (3, 1)]
JMA_EXPANDED = [3, 9, 9, 6, 4, 4, 4, 4, 4, 2, 1] + [0]*8 + [2, 3]


def _nibbles(values):
    values = list(values) + [0]*(len(values) % 2)
    return bytes(16*values[i] + values[i+1] for i in range(0, len(values), 2))


def test_bit_cursor():
    cursor = BitCursor(bytes([0b10110011, 0b01011111]), offset=100)
    assert cursor.read(3) == 0b101
    assert cursor.peek(5) == 0b10011
    assert cursor.offset == 100
    np.testing.assert_array_equal(cursor.read_array(5, 2), [0b10011, 0b01011])
    assert cursor.offset == 101
    assert cursor.remaining == 3
    with pytest.raises(errors.TruncatedMessage):
        cursor.read(4)
    cursor.align()
    assert cursor.remaining == 0


def test_expand_run_length_sets():
    assert packing.expand_run_length([3], 10, 5) == (3, 1)
    assert packing.expand_run_length([9, 12], 10, 5) == (9, 2)
    assert packing.expand_run_length([4, 15], 10, 5) == (4, 5)
    assert packing.expand_run_length([0, 13, 12], 10, 5) == (0, 8)


def test_jma_worked_example():
    buf = _nibbles(JMA_STREAM)
    sets = list(itertools.islice(packing.iter_runs(BitCursor(buf), 4, 10), len(JMA_SETS)))
    assert sets == JMA_SETS
    levels, runs, ends = packing.decode_runs(BitCursor(buf), 4, 10)
    # The padding nibble decodes as one more set.
    assert list(zip(levels[:9].tolist(), runs[:9].tolist())) == JMA_SETS
    assert ends[8] == len(JMA_STREAM)
    table = np.arange(11, dtype=np.float64)
    values = packing.expand_runs(levels[:9], runs[:9], table, None, len(JMA_EXPANDED))
    np.testing.assert_array_equal(values, JMA_EXPANDED)


def test_pack_run_length_matches_jma_example():
    levels, runs = zip(*JMA_SETS)
    assert packing.pack_run_length(levels, runs, 4, 10) == _nibbles(JMA_STREAM)


def test_run_length_starting_with_digit():
    with pytest.raises(errors.CorruptRunLength):
        next(packing.iter_runs(BitCursor(_nibbles([12, 3])), 4, 10))
    with pytest.raises(errors.CorruptRunLength) as e:
        packing.decode_runs(BitCursor(_nibbles([12, 3]), offset=50), 4, 10)
    assert e.value.offset == 50


def test_level_table():
    table = np.array([0.0, 1.0, 5.0, 10.0])
    values = packing.expand_runs([1, 3], [3, 2], table, None, 5)
    np.testing.assert_array_equal(values, [1.0, 1.0, 1.0, 10.0, 10.0])


def test_level_beyond_table():
    with pytest.raises(errors.InconsistentLevelTable):
        packing.expand_runs([1, 4], [3, 2], np.array([0.0, 1.0, 5.0, 10.0]), None, 5)


def test_exact_count():
    table = np.array([0.0, 1.0, 5.0, 10.0])
    with pytest.raises(errors.DataLengthMismatch):
        packing.expand_runs([1, 3], [3, 1], table, None, 5)
    with pytest.raises(errors.CorruptRunLength):
        packing.expand_runs([1, 3], [3, 3], table, None, 5)


def test_expand_runs_with_bitmap():
    bitmap = np.array([1, 0, 1, 1], dtype=bool)
    values = packing.expand_runs([1, 2], [1, 2], np.array([np.nan, 4.0, 8.0]), bitmap, 4)
    np.testing.assert_array_equal(values, [4.0, np.nan, 8.0, 8.0])
    # Invalid points consume no run.
    with pytest.raises(errors.CorruptRunLength):
        packing.expand_runs([1, 2], [2, 2], np.array([np.nan, 4.0, 8.0]), bitmap, 4)


def test_simple_packing_round_trip():
    values = np.array([0.0, 12.3, 45.6, 78.9, 99.9, 3.14])
    for binscale, decscale in [(0, 1), (-2, 0), (1, 2)]:
        refvalue, packed = packing.pack_simple(values, 16, binscale, decscale)
        decoded = packing.unpack_simple(BitCursor(packed), 16, values.size, refvalue,
                                        binscale, decscale)
        tolerance = 0.5 * 2.0**binscale * 10.0**-decscale
        np.testing.assert_allclose(decoded, values, rtol=0, atol=tolerance*1.0001)


def test_simple_packing_length():
    refvalue, packed = packing.pack_simple([1.0, 2.0, 3.0], 8)
    with pytest.raises(errors.DataLengthMismatch):
        packing.unpack_simple(BitCursor(packed), 8, 4, refvalue, 0, 0)
    with pytest.raises(errors.DataLengthMismatch):
        packing.unpack_simple(BitCursor(packed + b'\x00'), 8, 3, refvalue, 0, 0)


def test_simple_packing_overflow():
    with pytest.raises(ValueError):
        packing.pack_simple([0.0, 1000.0], 8)
    # Fits once the binary scale widens the step.
    refvalue, packed = packing.pack_simple([0.0, 1000.0], 8, binscale=2)
    assert len(packed) == 2


def test_simple_packing_reference_not_above_minimum():
    values = [0.1, 0.7, 0.3]
    refvalue, packed = packing.pack_simple(values, 16, binscale=-10)
    assert float(refvalue) <= 0.1
    decoded = packing.unpack_simple(BitCursor(packed), 16, 3, refvalue, -10, 0)
    np.testing.assert_allclose(decoded, values, rtol=0, atol=2.0**-11*1.0001)


def test_simple_packed_message(builder, grid_2x3):
    values = np.array([1.5, 2.0, 0.0, 7.25, 3.5, 10.0])
    refvalue, packed = packing.pack_simple(values, 12, binscale=-2, decscale=0)
    buf = builder.message(builder.section1(), grid_2x3, builder.section4(1, 200),
                          builder.section5_simple(6, refvalue, -2, 0, 12),
                          builder.section6(), builder.section7(packed))
    fld = grib2jma.decode(buf)[0]
    assert fld.dataRepresentationTemplateNumber == 0
    assert fld._packingScheme == 'simple'
    assert fld.nBitsPacking == 12
    assert fld.binScaleFactor == -2
    assert fld.decScaleFactor == 0
    assert fld.refValue == pytest.approx(0.0)
    assert fld.levels is None
    assert fld.data.dtype == np.float32
    np.testing.assert_allclose(fld.data, values.reshape(2, 3), atol=0.125)


def test_bitmap_masking(builder):
    grid = builder.section3(2, 2, 31.0, 130.0, 30.5, 130.5, 0.5, 0.5)
    buf = builder.message(builder.section1(), grid, builder.section4(1, 200),
                          builder.section5_simple(3, 0.0, 0, 0, 8),
                          builder.section6([1, 0, 1, 1]), builder.section7(bytes([5, 6, 7])))
    fld = grib2jma.decode(buf)[0]
    assert fld.bitMapFlag == 0
    np.testing.assert_array_equal(fld.bitmap, [True, False, True, True])
    np.testing.assert_array_equal(fld.data, [[5.0, np.nan], [6.0, 7.0]])


def test_run_length_message(rain_message):
    fld = grib2jma.decode(rain_message)[0]
    assert fld._packingScheme == 'run-length'
    assert fld.maxLevelValue == 3
    assert fld.numberOfLevelValues == 3
    assert fld.decScaleFactor == 1
    assert fld.bitsPerLevelCode == 4
    np.testing.assert_array_equal(fld.levelValues, [0, 10, 50])
    np.testing.assert_allclose(fld.levelTable, [np.nan, 0.0, 1.0, 5.0])
    np.testing.assert_array_equal(fld.levels, [[1, 1, 2], [3, 3, 0]])
    np.testing.assert_allclose(fld.data, [[0.0, 0.0, 1.0], [5.0, 5.0, np.nan]])


def test_run_length_minimum_width(builder, grid_2x3):
    # NBIT of 0 selects the smallest width for MAXV=1, i.e. 2 bits.
    buf = builder.message(builder.section1(), grid_2x3, builder.section4(1, 208),
                          builder.section5_run_length(6, 0, 1, [10]), builder.section6(),
                          builder.section7(packing.pack_run_length([1, 0], [2, 4], 2, 1)))
    fld = grib2jma.decode(buf)[0]
    assert fld.bitsPerLevelCode == 2
    np.testing.assert_array_equal(fld.levels, [[1, 1, 0], [0, 0, 0]])
    np.testing.assert_array_equal(fld.data, [[10.0, 10.0, np.nan], [np.nan, np.nan, np.nan]])


def test_run_length_message_counts(builder, grid_2x3):
    def message(levels, runs):
        return builder.message(builder.section1(), grid_2x3, builder.section4(1, 208),
                               builder.section5_run_length(6, 8, 2, [10, 20]), builder.section6(),
                               builder.section7(packing.pack_run_length(levels, runs, 8, 2)))
    with pytest.raises(errors.DataLengthMismatch):
        grib2jma.decode(message([1, 2], [2, 3]))
    with pytest.raises(errors.CorruptRunLength):
        grib2jma.decode(message([1, 2], [2, 5]))
    # Surplus sets after the grid is full
    with pytest.raises(errors.DataLengthMismatch):
        grib2jma.decode(message([1, 2, 1], [2, 4, 1]))
    # Metadata is unpacked eagerly, data only on access.
    msg = grib2jma.Message(message([1, 2], [2, 5]))
    with pytest.raises(errors.CorruptRunLength):
        msg[0].data


def test_auto_nans(rain_message):
    fld = grib2jma.Message(rain_message)[0]
    assert np.isnan(fld.data[1, 2])
    try:
        grib2jma.set_auto_nans(False)
        assert fld.data[1, 2] == np.float32(grib2jma.DEFAULT_FILL_VALUE)
        assert fld.value_at(30.5, 131.0) is None
    finally:
        grib2jma.set_auto_nans(True)
    assert np.isnan(fld.data[1, 2])
    with pytest.raises(TypeError):
        grib2jma.set_auto_nans(1)
