import datetime
import struct

import numpy as np
import pytest

from grib2jma import packing, utils


class Grib2Builder:
    """Assemble GRIB2 messages of the JMA products in memory."""

    @staticmethod
    def section(number, payload):
        return struct.pack('>IB', 5+len(payload), number) + payload

    @classmethod
    def section1(cls, refdate=datetime.datetime(2020,7,4,12,0,0), center=34):
        payload = struct.pack('>HHBBBHBBBBBBB', center, 0, 2, 1, 0, refdate.year, refdate.month,
                              refdate.day, refdate.hour, refdate.minute, refdate.second, 0, 0)
        return cls.section(1, payload)

    @classmethod
    def section3(cls, nx, ny, la1, lo1, la2, lo2, di, dj, scan=0x00, npoints=None, gdtn=0):
        def micro(deg):
            return utils.to_sign_magnitude(int(round(deg*1e6)), 32)
        npoints = nx*ny if npoints is None else npoints
        payload = struct.pack('>BIBBH', 0, npoints, 0, 0, gdtn)
        payload += struct.pack('>BBIBIBIIIIIIIBIIIIB', 4, 0, 0, 0, 0, 0, 0, nx, ny,
                               0, 0xFFFFFFFF, micro(la1), micro(lo1), 0x30,
                               micro(la2), micro(lo2), int(round(di*1e6)),
                               int(round(dj*1e6)), scan)
        return cls.section(3, payload)

    @classmethod
    def section4(cls, parmcat, parmnum, pdtn=0, forecast_time=0, unit=1, extra=b''):
        payload = struct.pack('>HH', 0, pdtn)
        payload += struct.pack('>BBBBBHBBIBBIBBI', parmcat, parmnum, 0, 0, 0, 0, 0, unit,
                               utils.to_sign_magnitude(forecast_time, 32), 1, 0, 0, 255, 0, 0)
        return cls.section(4, payload+extra)

    @staticmethod
    def pdt50000(doc1=1, hours1=0, minutes1=0, doc2=2, hours2=0, minutes2=0):
        return struct.pack('>BHBBHB', doc1, hours1, minutes1, doc2, hours2, minutes2)

    @staticmethod
    def pdt50008(end, statlen=1, radar1=0, radar2=0, gauge=0):
        return struct.pack('>HBBBBBBIBBBIBIQQQ', end.year, end.month, end.day, end.hour,
                           end.minute, end.second, 1, 0, 1, 2, 1, statlen, 1, 0,
                           radar1, radar2, gauge)

    @classmethod
    def pdt50009(cls, end, ratios=(), scale=2, **kwargs):
        return (cls.pdt50008(end, **kwargs) + struct.pack('>HB', len(ratios), scale) +
                struct.pack(f'>{len(ratios)}H', *ratios))

    @classmethod
    def section5_simple(cls, npts, refvalue, binscale, decscale, nbits):
        payload = struct.pack('>IH', npts, 0)
        payload += struct.pack('>IHHBB', int(utils.ieee_float_to_int(refvalue)) & 0xFFFFFFFF,
                               utils.to_sign_magnitude(binscale, 16),
                               utils.to_sign_magnitude(decscale, 16), nbits, 0)
        return cls.section(5, payload)

    @classmethod
    def section5_run_length(cls, npts, nbits, maxv, levels, decscale=0, nlevels=None):
        nlevels = len(levels) if nlevels is None else nlevels
        payload = struct.pack('>IH', npts, 200)
        payload += struct.pack('>BHHB', nbits, maxv, nlevels, utils.to_sign_magnitude(decscale, 8))
        payload += struct.pack(f'>{len(levels)}H', *levels)
        return cls.section(5, payload)

    @classmethod
    def section6(cls, bitmap=None, flag=None):
        if bitmap is None:
            return cls.section(6, bytes([255 if flag is None else flag]))
        bits = np.packbits(np.asarray(bitmap, dtype=np.uint8)).tobytes()
        return cls.section(6, bytes([0]) + bits)

    @classmethod
    def section7(cls, data):
        return cls.section(7, data)

    @classmethod
    def run_length_field(cls, parmcat, parmnum, levels, runs, level_values, nbits=4,
                         maxv=None, pdtn=0, forecast_time=0, extra=b'', decscale=0,
                         bitmap=None):
        maxv = len(level_values) if maxv is None else maxv
        npts = sum(runs) if bitmap is None else int(np.count_nonzero(bitmap))
        return (cls.section4(parmcat, parmnum, pdtn=pdtn, forecast_time=forecast_time, extra=extra) +
                cls.section5_run_length(npts, nbits, maxv, level_values, decscale=decscale) +
                cls.section6(bitmap) +
                cls.section7(packing.pack_run_length(levels, runs, nbits, maxv)))

    @staticmethod
    def message(*sections, discipline=0, edition=2):
        body = b''.join(sections)
        total = 16 + len(body) + 4
        return b'GRIB' + struct.pack('>HBBQ', 0, discipline, edition, total) + body + b'7777'


@pytest.fixture
def builder():
    return Grib2Builder


@pytest.fixture
def grid_2x3(builder):
    """Ny=2, Nx=3 grid scanned north to south, west to east."""
    return builder.section3(3, 2, 31.0, 130.0, 30.5, 131.0, 0.5, 0.5, scan=0x00)


@pytest.fixture
def rain_message(builder, grid_2x3):
    """Analysed rainfall (template 4.50008) run-length packed on a 2x3 grid."""
    end = datetime.datetime(2020,7,4,12,0,0)
    return builder.message(
        builder.section1(),
        grid_2x3,
        builder.run_length_field(1, 200, levels=[1, 2, 3, 0], runs=[2, 1, 2, 1],
                                 level_values=[0, 10, 50], decscale=1, pdtn=50008,
                                 extra=builder.pdt50008(end, radar1=1<<63 | 5, gauge=7)))
