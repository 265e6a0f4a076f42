import datetime
import gzip

import numpy as np
import pytest

import grib2jma
from grib2jma import errors, utils
from grib2jma.tables import ProductKind, SwiTank

REFDATE = datetime.datetime(2020,7,4,12,0,0)


@pytest.fixture
def swi_forecast_message(builder, grid_2x3):
    fields = []
    for hour in (1, 2):
        for parmnum in (208, 209, 210):
            fields.append(builder.run_length_field(1, parmnum, [1, 2], [3, 3],
                                                   [hour*100+parmnum, 5],
                                                   forecast_time=hour))
    return builder.message(builder.section1(), grid_2x3, *fields)


@pytest.fixture
def precipitation_forecast_message(builder, grid_2x3):
    fields = []
    for hour in (1, 2, 3):
        end = REFDATE + datetime.timedelta(hours=hour)
        extra = builder.pdt50009(end, ratios=(25, 50, 75), scale=2)
        fields.append(builder.run_length_field(1, 200, [hour], [6], [10, 20, 30],
                                               pdtn=50009, extra=extra))
    return builder.message(builder.section1(), grid_2x3, *fields)


def test_section0_attrs(rain_message):
    fld = grib2jma.Message(rain_message)[0]
    np.testing.assert_array_equal(fld.section0, [1196575042, 0, 0, 2, len(rain_message)])
    np.testing.assert_array_equal(fld.indicatorSection, fld.section0)
    assert fld.discipline.value == 0
    assert fld.discipline.definition == 'Meteorological Products'


def test_section1_attrs(rain_message):
    fld = grib2jma.Message(rain_message)[0]
    np.testing.assert_array_equal(fld.section1, [34, 0, 2, 1, 0, 2020, 7, 4, 12, 0, 0, 0, 0])
    assert fld.identificationSection is fld.section1
    assert fld.originatingCenter.value == 34
    assert fld.originatingCenter.definition == 'Japanese Meteorological Agency - Tokyo (RSMC)'
    assert fld.year == 2020
    assert fld.month == 7
    assert fld.day == 4
    assert fld.hour == 12
    assert fld.refDate == REFDATE
    assert fld.productionStatus.value == 0


def test_section3_attrs(rain_message):
    fld = grib2jma.Message(rain_message)[0]
    assert fld.gdtn == 0
    assert fld.gridDefinitionTemplateNumber.definition == 'Latitude/Longitude'
    assert fld.numberOfDataPoints == 6
    assert fld.nx == 3
    assert fld.ny == 2
    assert fld.scanModeFlags == [0, 0, 0, 0, 0, 0, 0, 0]
    assert fld.latitudeFirstGridpoint == 31.0
    assert fld.gridlengthYDirection == -0.5
    assert fld.griddef.shape == (2, 3)


def test_rainfall_analysis_attrs(rain_message):
    fld = grib2jma.Message(rain_message)[0]
    assert fld.pdtn == 50008
    assert fld.product is ProductKind.RAINFALL_ANALYSIS
    assert fld.isForecast is False
    assert fld.tank is None
    assert fld.shortName == 'RR1H'
    assert fld.units == 'mm'
    assert fld.parameterCategory == 1
    assert fld.parameterNumber == 200
    assert fld.leadTime == datetime.timedelta(0)
    assert fld.validDate == REFDATE
    assert fld.duration == datetime.timedelta(hours=1)
    assert fld.statisticalProcess == 1
    assert fld.radarOperationInfo1 == (1<<63) + 5
    assert fld.radarOperationInfo2 == 0
    assert fld.rainGaugeOperationInfo == 7


def test_precipitation_forecast(precipitation_forecast_message):
    msg = grib2jma.decode(precipitation_forecast_message)
    assert len(msg) == 3
    assert msg.product is ProductKind.PRECIPITATION_FORECAST
    for hour, fld in enumerate(msg, start=1):
        assert fld.isForecast
        assert fld.leadTime == datetime.timedelta(hours=hour)
        assert fld.validDate == REFDATE + datetime.timedelta(hours=hour)
        assert fld.numberOfCalculationAreas == 3
        np.testing.assert_allclose(fld.combinationRatios, [0.25, 0.5, 0.75])
    [fld] = msg.forecast(2)
    np.testing.assert_array_equal(fld.data, np.full((2, 3), 20.0))
    assert msg.forecast(4) == []


def test_soil_water_index_forecast(swi_forecast_message):
    msg = grib2jma.Message(swi_forecast_message)
    assert len(msg) == 6
    assert msg.product is ProductKind.SOIL_WETNESS_INDEX_FORECAST
    assert [f.tank for f in msg.forecast(1)] == [SwiTank.SOIL_WETNESS_INDEX,
                                                 SwiTank.FIRST_TANK, SwiTank.SECOND_TANK]
    fld = msg.tank(SwiTank.FIRST_TANK, hour=2)
    assert fld is msg[4]
    assert fld.valueOfForecastTime == 2
    assert fld.value_at(31.0, 130.0) == 409.0
    with pytest.raises(ValueError):
        msg.tank(SwiTank.FIRST_TANK)
    with pytest.raises(KeyError):
        msg.tank(SwiTank.FIRST_TANK, hour=3)
    assert [f.shortName for f in msg['SWI1']] == ['SWI1', 'SWI1']


def test_soil_water_index(builder, grid_2x3):
    fields = [builder.run_length_field(1, parmnum, [1], [6], [parmnum])
              for parmnum in (208, 209, 210)]
    msg = grib2jma.decode(builder.message(builder.section1(), grid_2x3, *fields))
    assert [f.product for f in msg] == [ProductKind.SOIL_WETNESS_INDEX]*3
    fld = msg.tank(SwiTank.SECOND_TANK)
    assert fld.fullName == 'Soil Water Index, Second Tank'
    assert fld.min == fld.max == 210.0
    assert msg.forecast(0) == msg.fields


def test_landslide_risk(builder, grid_2x3):
    level_values = [utils.to_sign_magnitude(-1, 16), 1, 2, 3]
    fld = builder.run_length_field(1, 217, [1, 2, 4], [1, 2, 3], level_values,
                                   pdtn=50000, extra=builder.pdt50000(hours1=1))
    msg = grib2jma.decode(builder.message(builder.section1(), grid_2x3, fld))
    fld = msg[0]
    assert fld.product is ProductKind.LANDSLIDE_RISK
    assert fld.units == 'level'
    np.testing.assert_array_equal(fld.levelValues, [-1, 1, 2, 3])
    np.testing.assert_array_equal(fld.data, [[-1.0, 1.0, 1.0], [3.0, 3.0, 3.0]])
    assert fld.sourceDocument1 == 1
    assert fld.timeFromSourceDocument1 == datetime.timedelta(hours=1)


def test_shared_bitmap(builder, grid_2x3):
    bitmap = [1, 1, 0, 1, 1, 0]
    first = builder.run_length_field(1, 209, [1], [4], [10], bitmap=bitmap)
    second = (builder.section4(1, 210) + builder.section5_run_length(4, 4, 1, [20]) +
              builder.section6(flag=254) +
              builder.section7(grib2jma.packing.pack_run_length([1], [4], 4, 1)))
    msg = grib2jma.decode(builder.message(builder.section1(), grid_2x3, first, second))
    assert msg[1].bitMapFlag == 254
    np.testing.assert_array_equal(msg[1].bitmap, msg[0].bitmap)
    np.testing.assert_array_equal(msg[1].data, [[20.0, 20.0, np.nan], [20.0, 20.0, np.nan]])


def test_attrs_by_section(rain_message):
    fld = grib2jma.Message(rain_message)[0]
    assert 'nx' in fld.attrs_by_section(3)
    assert 'latitudeFirstGridpoint' in fld.attrs_by_section(3)
    assert 'radarOperationInfo1' in fld.attrs_by_section(4)
    assert 'levelValues' in fld.attrs_by_section(5)
    assert fld.attrs_by_section(5, values=True)['maxLevelValue'] == 3
    assert 'Section 4: shortName = RR1H' in repr(fld)
    assert str(fld) == f'0:d={REFDATE}:RR1H:One Hour Precipitation (mm):{ProductKind.RAINFALL_ANALYSIS}:0:00:00'


def test_message_indexing(swi_forecast_message):
    msg = grib2jma.Message(swi_forecast_message)
    assert msg[-1] is msg.fields[5]
    assert msg[1:3] == msg.fields[1:3]
    assert msg.refDate == REFDATE
    with pytest.raises(IndexError):
        msg[6]
    with pytest.raises(KeyError):
        msg[1.0]
    assert msg.select(tank=SwiTank.SOIL_WETNESS_INDEX, valueOfForecastTime=1) == [msg[0]]


def test_open_bytes_and_files(tmp_path, rain_message, swi_forecast_message):
    data = rain_message + b'\x00'*4 + swi_forecast_message
    plain = tmp_path / 'srf.grib2'
    plain.write_bytes(data)
    packed = tmp_path / 'srf.grib2.gz'
    packed.write_bytes(gzip.compress(data))
    for source in (plain, packed, data):
        with pytest.warns(UserWarning):
            f = grib2jma.open(source)
        with f:
            assert len(f) == 7
            assert f.variables == ('RR1H', 'SWI', 'SWI1', 'SWI2')
            assert f['RR1H'][0].product is ProductKind.RAINFALL_ANALYSIS
            fld = f.read(1)
            assert fld.shortName == 'RR1H'
            assert f.tell() == 1
            assert len(f.read(2)) == 2
            f.seek(0)
            assert len(f.read()) == 7
            assert len(f.select(shortName='SWI')) == 2
        assert f.closed


def test_open_grib1_skipped(tmp_path, rain_message):
    grib1 = b'GRIB' + (12).to_bytes(3, 'big') + bytes([1]) + b'7777'
    path = tmp_path / 'mixed.grib'
    path.write_bytes(grib1 + rain_message)
    with pytest.warns(UserWarning, match='GRIB1'):
        with grib2jma.open(path) as f:
            assert len(f) == 1


def test_open_corrupt_message(tmp_path, rain_message):
    path = tmp_path / 'truncated.grib2'
    path.write_bytes(rain_message[:-6])
    with pytest.raises(errors.TruncatedMessage):
        grib2jma.open(path)


def test_show_config(capsys):
    grib2jma.show_config()
    out = capsys.readouterr().out
    assert 'Product Definition Templates: [0, 50000, 50008, 50009]' in out
    assert 'LSWJ' in out


def test_code_tables(rain_message):
    fld = grib2jma.Message(rain_message)[0]
    assert grib2jma.tables.get_shortnames() == ['LSWJ', 'RR1H', 'SWI', 'SWI1', 'SWI2']
    assert fld.productDefinitionTemplateNumber == 50008
    assert '(JMA)' in fld.productDefinitionTemplateNumber
    assert fld.unitOfTimeRangeOfStatisticalProcess == 'Hour'
    assert fld.dataRepresentationTemplateNumber.show_table() is grib2jma.tables.get_table('5.0')
    assert grib2jma.tables.get_value_from_table(50100, '4.0') == 'Reserved for Local Use'
    assert grib2jma.tables.get_varinfo_from_table(0, 1, 201) == ['Unknown', 'Unknown', 'Unknown']
