import struct

import numpy as np
import pytest

import grib2jma
from grib2jma import errors


def _swi_field(builder, parmnum=208, **kwargs):
    return builder.run_length_field(1, parmnum, levels=[1, 2], runs=[3, 3],
                                    level_values=[10, 20], **kwargs)


def test_split_sections(builder, grid_2x3, rain_message):
    sections = grib2jma.split_sections(rain_message)
    assert [s.number for s in sections] == [0, 1, 3, 4, 5, 6, 7, 8]
    assert sections[0].offset == 0 and sections[0].length == 16
    assert sections[1].offset == 16 and sections[1].length == 21
    assert sections[2].length == len(grid_2x3)
    assert bytes(sections[-1].view) == b'7777'
    assert sections[-1].offset == len(rain_message) - 4
    for s in sections[1:-1]:
        assert struct.unpack('>I', bytes(s.view[0:4]))[0] == s.length


def test_local_use_section(builder, grid_2x3):
    buf = builder.message(builder.section1(), builder.section(2, b'JMA local'),
                          grid_2x3, _swi_field(builder))
    msg = grib2jma.Message(buf)
    assert msg.section2 == b'JMA local'
    assert msg.fields[0].section2 == b'JMA local'


def test_not_grib(rain_message):
    with pytest.raises(errors.InvalidSectionOrder) as e:
        grib2jma.split_sections(b'GRIC' + rain_message[4:])
    assert e.value.offset == 0


def test_grib1_edition(builder, grid_2x3):
    buf = builder.message(builder.section1(), grid_2x3, _swi_field(builder), edition=1)
    with pytest.raises(errors.InvalidSectionOrder):
        grib2jma.Message(buf)


def test_total_length_mismatch(rain_message):
    with pytest.raises(errors.TruncatedMessage) as e:
        grib2jma.split_sections(rain_message[:-10])
    assert e.value.offset == 8
    with pytest.raises(errors.DataLengthMismatch):
        grib2jma.split_sections(rain_message + b'\x00\x00')


def test_bytes_after_end_section(rain_message):
    # Total length covers the junk, so the End Section is followed by bytes.
    buf = bytearray(rain_message + b'JUNK')
    buf[8:16] = struct.pack('>Q', len(buf))
    with pytest.raises(errors.DataLengthMismatch) as e:
        grib2jma.split_sections(bytes(buf))
    assert e.value.offset == len(rain_message)


def test_missing_end_section(builder, grid_2x3):
    body = builder.section1() + grid_2x3 + _swi_field(builder)
    buf = b'GRIB' + struct.pack('>HBBQ', 0, 0, 2, 16+len(body)) + body
    with pytest.raises(errors.TruncatedMessage):
        grib2jma.split_sections(buf)


def test_section_length_overrun(builder, grid_2x3):
    body = builder.section1() + grid_2x3
    # Section 4 claims more octets than remain.
    body += struct.pack('>IB', 5000, 4) + b'\x00'*20
    buf = b'GRIB' + struct.pack('>HBBQ', 0, 0, 2, 16+len(body)+4) + body + b'7777'
    with pytest.raises(errors.TruncatedMessage) as e:
        grib2jma.split_sections(buf)
    assert e.value.offset == 16 + len(builder.section1()) + len(grid_2x3)


def test_section_order(builder, grid_2x3):
    fld = _swi_field(builder)
    with pytest.raises(errors.InvalidSectionOrder):
        grib2jma.split_sections(builder.message(grid_2x3, builder.section1(), fld))
    with pytest.raises(errors.InvalidSectionOrder):
        grib2jma.split_sections(builder.message(builder.section1(), grid_2x3,
                                                builder.section(9, b'')))
    # A second grid in the same message.
    with pytest.raises(errors.InvalidSectionOrder):
        grib2jma.split_sections(builder.message(builder.section1(), grid_2x3, fld,
                                                grid_2x3, fld))
    # End Section written with a length and number header.
    with pytest.raises(errors.InvalidSectionOrder) as e:
        grib2jma.split_sections(builder.message(builder.section1(), grid_2x3, fld,
                                                struct.pack('>IB', 5, 8)))
    assert e.value.offset == 16 + len(builder.section1()) + len(grid_2x3) + len(fld)
    # End Section right after the Product Definition Section.
    with pytest.raises(errors.InvalidSectionOrder):
        grib2jma.split_sections(builder.message(builder.section1(), grid_2x3,
                                                builder.section4(1, 208)))


def test_error_str_has_offset(rain_message):
    with pytest.raises(errors.Grib2DecodeError) as e:
        grib2jma.split_sections(rain_message[:-10])
    assert 'at byte offset 8' in str(e.value)
    assert isinstance(e.value, ValueError)


def test_unsupported_grid_template(builder):
    grid = builder.section3(3, 2, 31.0, 130.0, 30.5, 131.0, 0.5, 0.5, gdtn=10)
    buf = builder.message(builder.section1(), grid, _swi_field(builder))
    with pytest.raises(errors.UnsupportedGridTemplate) as e:
        grib2jma.Message(buf)
    assert e.value.offset == 16 + 21


def test_grid_point_count_mismatch(builder):
    grid = builder.section3(3, 2, 31.0, 130.0, 30.5, 131.0, 0.5, 0.5, npoints=7)
    buf = builder.message(builder.section1(), grid, _swi_field(builder))
    with pytest.raises(errors.DataLengthMismatch):
        grib2jma.Message(buf)


def test_zero_grid_increment(builder):
    grid = builder.section3(3, 2, 31.0, 130.0, 30.5, 131.0, 0.0, 0.5)
    buf = builder.message(builder.section1(), grid, _swi_field(builder))
    with pytest.raises(errors.UnsupportedGridTemplate):
        grib2jma.Message(buf)


def test_unsupported_product_template(builder, grid_2x3):
    fld = _swi_field(builder)
    # Template 4.8 instead of 4.0
    fld = fld[:7] + struct.pack('>H', 8) + fld[9:]
    buf = builder.message(builder.section1(), grid_2x3, fld)
    with pytest.raises(errors.UnsupportedProductTemplate) as e:
        grib2jma.Message(buf)
    assert e.value.offset == 16 + 21 + len(grid_2x3)


def test_unknown_parameter(builder, grid_2x3):
    buf = builder.message(builder.section1(), grid_2x3, _swi_field(builder, parmnum=201))
    with pytest.raises(errors.UnknownParameter) as e:
        grib2jma.Message(buf)
    assert e.value.offset == 16 + 21 + len(grid_2x3)
    buf = builder.message(builder.section1(), grid_2x3, _swi_field(builder), discipline=2)
    with pytest.raises(errors.UnknownParameter):
        grib2jma.Message(buf)


def test_unsupported_packing(builder, grid_2x3):
    section5 = builder.section(5, struct.pack('>IH', 6, 3) + b'\x00'*10)
    buf = builder.message(builder.section1(), grid_2x3, builder.section4(1, 208),
                          section5, builder.section6(), builder.section7(b'\x00'))
    with pytest.raises(errors.UnsupportedPackingMethod):
        grib2jma.Message(buf)
    section5 = builder.section5_simple(6, 0.0, 0, 0, 0)
    buf = builder.message(builder.section1(), grid_2x3, builder.section4(1, 200),
                          section5, builder.section6(), builder.section7(b''))
    with pytest.raises(errors.UnsupportedPackingMethod):
        grib2jma.Message(buf)


def test_inconsistent_level_table(builder, grid_2x3):
    def message(section5):
        return builder.message(builder.section1(), grid_2x3, builder.section4(1, 208),
                               section5, builder.section6(), builder.section7(b'\x00'))
    # MAXV beyond the level values present
    with pytest.raises(errors.InconsistentLevelTable):
        grib2jma.Message(message(builder.section5_run_length(6, 4, 5, [10, 20])))
    # Empty level table
    with pytest.raises(errors.InconsistentLevelTable):
        grib2jma.Message(message(builder.section5_run_length(6, 4, 0, [])))
    # 2 bits cannot carry levels 0..3 plus run-length digits
    with pytest.raises(errors.InconsistentLevelTable):
        grib2jma.Message(message(builder.section5_run_length(6, 2, 3, [10, 20, 30])))


def test_bitmap_references(builder, grid_2x3):
    def field(flag):
        return (builder.section4(1, 208) + builder.section5_run_length(6, 4, 2, [10, 20]) +
                builder.section6(flag=flag) +
                builder.section7(grib2jma.packing.pack_run_length([1], [6], 4, 2)))
    with pytest.raises(errors.UnsupportedBitmapReference):
        grib2jma.Message(builder.message(builder.section1(), grid_2x3, field(254)))
    with pytest.raises(errors.UnsupportedBitmapReference):
        grib2jma.Message(builder.message(builder.section1(), grid_2x3, field(5)))


def test_bitmap_too_short(builder, grid_2x3):
    # 12 points need 2 octets of bitmap
    grid = builder.section3(4, 3, 31.0, 130.0, 30.0, 131.5, 0.5, 0.5)
    section6 = builder.section(6, bytes([0, 0xFF]))
    buf = builder.message(builder.section1(), grid, builder.section4(1, 208),
                          builder.section5_run_length(12, 4, 2, [10, 20]), section6,
                          builder.section7(b'\x00'))
    with pytest.raises(errors.DataLengthMismatch):
        grib2jma.Message(buf)


def test_packed_value_count_mismatch(builder, grid_2x3):
    buf = builder.message(builder.section1(), grid_2x3, builder.section4(1, 208),
                          builder.section5_run_length(5, 4, 2, [10, 20]), builder.section6(),
                          builder.section7(grib2jma.packing.pack_run_length([1], [6], 4, 2)))
    with pytest.raises(errors.DataLengthMismatch):
        grib2jma.Message(buf)


def test_errors_pickle():
    import pickle
    e = pickle.loads(pickle.dumps(errors.CorruptRunLength('bad run', 42)))
    assert isinstance(e, errors.CorruptRunLength)
    assert e.offset == 42
    assert str(e) == 'bad run (at byte offset 42)'
