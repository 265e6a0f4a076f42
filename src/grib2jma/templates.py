"""GRIB2 section templates classes and metadata descriptor classes."""
from dataclasses import dataclass, field
from collections import defaultdict
import datetime

import numpy as np
import pyproj

from . import tables
from . import utils

# This dict is used by grib2jma.Grib2Field.attrs_by_section() method
# to get attr names that defined in the Grib2Field base class.
_section_attrs = {0:['discipline'],
                  1:['originatingCenter', 'originatingSubCenter', 'masterTableInfo', 'localTableInfo',
                     'significanceOfReferenceTime', 'year', 'month', 'day', 'hour', 'minute', 'second',
                     'refDate', 'productionStatus', 'typeOfData'],
                  2:[],
                  3:['sourceOfGridDefinition', 'numberOfDataPoints', 'interpretationOfListOfNumbers',
                     'gridDefinitionTemplateNumber', 'shapeOfEarth', 'earthRadius', 'earthMajorAxis',
                     'earthMinorAxis', 'resolutionAndComponentFlags', 'ny', 'nx', 'scanModeFlags'],
                  4:[],
                  5:['dataRepresentationTemplateNumber','numberOfPackedValues'],
                  6:['bitMapFlag'],
                  7:[],
                  8:[],}


class Grib2Metadata:
    """
    Class to hold GRIB2 metadata.

    Stores both numeric code value as stored in GRIB2 and its plain language
    definition.

    Attributes
    ----------
    value : int
        GRIB2 metadata integer code value.
    table : str, optional
        GRIB2 table to lookup the `value`. Default is None.
    definition : str
        Plain language description of numeric metadata.
    """
    __slots__ = ('value','table')
    def __init__(self, value, table=None):
        self.value = value
        self.table = table
    def __call__(self):
        return self.value
    def __hash__(self):
        return hash(self.value)
    def __repr__(self):
        return f"{self.__class__.__name__}({self.value}, table = '{self.table}')"
    def __str__(self):
        return f'{self.value} - {self.definition}'
    def __eq__(self,other):
        if isinstance(other,str):
            return self.definition is not None and self.definition == other
        return self.value == other
    def __gt__(self,other):
        return self.value > other
    def __ge__(self,other):
        return self.value >= other
    def __lt__(self,other):
        return self.value < other
    def __le__(self,other):
        return self.value <= other
    def __contains__(self,other):
        return self.definition is not None and other in self.definition
    def __index__(self):
        return int(self.value)
    @property
    def definition(self):
        return tables.get_value_from_table(self.value,self.table)
    def show_table(self):
        """Provide the table related to this metadata."""
        return tables.get_table(self.table)

# ----------------------------------------------------------------------------------------
# Descriptor Classes for Section 0 metadata.
# ----------------------------------------------------------------------------------------
class IndicatorSection:
    """
    [GRIB2 Indicator Section (0)](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_sect0.shtml)
    """
    def __get__(self, obj, objtype=None):
        return obj.section0
    def __set__(self, obj, value):
        raise RuntimeError

class Discipline:
    """[Discipline](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table0-0.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.indicatorSection[2],table='0.0')
    def __set__(self, obj, value):
        raise RuntimeError


# ----------------------------------------------------------------------------------------
# Descriptor Classes for Section 1 metadata.
# ----------------------------------------------------------------------------------------
class IdentificationSection:
    """
    GRIB2 Section 1, [Identification Section](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_sect1.shtml)
    """
    def __get__(self, obj, objtype=None):
        return obj.section1
    def __set__(self, obj, value):
        raise RuntimeError

class OriginatingCenter:
    """[Originating Center](https://www.nco.ncep.noaa.gov/pmb/docs/on388/table0.html)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section1[0],table='originating_centers')
    def __set__(self, obj, value):
        raise RuntimeError

class OriginatingSubCenter:
    """[Originating SubCenter](https://www.nco.ncep.noaa.gov/pmb/docs/on388/tablec.html)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section1[1],table='originating_subcenters')
    def __set__(self, obj, value):
        raise RuntimeError

class MasterTableInfo:
    """[GRIB2 Master Table Version](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table1-0.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section1[2],table='1.0')
    def __set__(self, obj, value):
        raise RuntimeError

class LocalTableInfo:
    """[GRIB2 Local Tables Version Number](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table1-1.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section1[3],table='1.1')
    def __set__(self, obj, value):
        raise RuntimeError

class SignificanceOfReferenceTime:
    """[Significance of Reference Time](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table1-2.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section1[4],table='1.2')
    def __set__(self, obj, value):
        raise RuntimeError

class Year:
    """Year of reference time"""
    def __get__(self, obj, objtype=None):
        return obj.section1[5]
    def __set__(self, obj, value):
        raise RuntimeError

class Month:
    """Month of reference time"""
    def __get__(self, obj, objtype=None):
        return obj.section1[6]
    def __set__(self, obj, value):
        raise RuntimeError

class Day:
    """Day of reference time"""
    def __get__(self, obj, objtype=None):
        return obj.section1[7]
    def __set__(self, obj, value):
        raise RuntimeError

class Hour:
    """Hour of reference time"""
    def __get__(self, obj, objtype=None):
        return obj.section1[8]
    def __set__(self, obj, value):
        raise RuntimeError

class Minute:
    """Minute of reference time"""
    def __get__(self, obj, objtype=None):
        return obj.section1[9]
    def __set__(self, obj, value):
        raise RuntimeError

class Second:
    """Second of reference time"""
    def __get__(self, obj, objtype=None):
        return obj.section1[10]
    def __set__(self, obj, value):
        raise RuntimeError

class RefDate:
    """Reference Date. NOTE: This is a `datetime.datetime` object."""
    def __get__(self, obj, objtype=None):
        return datetime.datetime(*obj.section1[5:11])
    def __set__(self, obj, value):
        raise RuntimeError

class ProductionStatus:
    """[Production Status of Processed Data](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table1-3.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section1[11],table='1.3')
    def __set__(self, obj, value):
        raise RuntimeError

class TypeOfData:
    """[Type of Processed Data in this GRIB message](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table1-4.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section1[12],table='1.4')
    def __set__(self, obj, value):
        raise RuntimeError

# ----------------------------------------------------------------------------------------
# Descriptor Classes for Section 3 metadata.
# ----------------------------------------------------------------------------------------
class GridDefinitionSection:
    """
    GRIB2 Section 3, [Grid Definition Section](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_sect3.shtml)
    """
    def __get__(self, obj, objtype=None):
        return obj.section3[0:5]
    def __set__(self, obj, value):
        raise RuntimeError

class SourceOfGridDefinition:
    """[Source of Grid Definition](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table3-0.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section3[0],table='3.0')
    def __set__(self, obj, value):
        raise RuntimeError

class NumberOfDataPoints:
    """Number of Data Points"""
    def __get__(self, obj, objtype=None):
        return obj.section3[1]
    def __set__(self, obj, value):
        raise RuntimeError

class InterpretationOfListOfNumbers:
    """Interpretation of List of Numbers"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section3[3],table='3.11')
    def __set__(self, obj, value):
        raise RuntimeError

class GridDefinitionTemplateNumber:
    """[Grid Definition Template Number](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table3-1.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section3[4],table='3.1')
    def __set__(self, obj, value):
        raise RuntimeError

class GridDefinitionTemplate:
    """Grid definition template"""
    def __get__(self, obj, objtype=None):
        return obj.section3[5:]
    def __set__(self, obj, value):
        raise RuntimeError

class EarthParams:
    """Metadata about the shape of the Earth"""
    def __get__(self, obj, objtype=None):
        return tables.get_table('earth_params')[str(obj.section3[5])]
    def __set__(self, obj, value):
        raise RuntimeError

class DxSign:
    """Sign of Grid Length in X-Direction (scanning mode bit 1)"""
    def __get__(self, obj, objtype=None):
        return -1.0 if obj.scanModeFlags[0] else 1.0
    def __set__(self, obj, value):
        raise RuntimeError

class DySign:
    """Sign of Grid Length in Y-Direction (scanning mode bit 2)"""
    def __get__(self, obj, objtype=None):
        return 1.0 if obj.scanModeFlags[1] else -1.0
    def __set__(self, obj, value):
        raise RuntimeError

class LLScaleFactor:
    """Scale Factor for Lats/Lons"""
    def __get__(self, obj, objtype=None):
        llscalefactor = float(obj.section3[14])
        if llscalefactor <= 0:
            return 1
        return llscalefactor
    def __set__(self, obj, value):
        raise RuntimeError

class LLDivisor:
    """Divisor Value for scaling Lats/Lons"""
    def __get__(self, obj, objtype=None):
        lldivisor = float(obj.section3[15])
        if lldivisor <= 0:
            return 1.e6
        return lldivisor
    def __set__(self, obj, value):
        raise RuntimeError

class XYDivisor:
    """Divisor Value for scaling grid lengths"""
    def __get__(self, obj, objtype=None):
        return obj._lldivisor
    def __set__(self, obj, value):
        raise RuntimeError

class ShapeOfEarth:
    """[Shape of the Reference System](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table3-2.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section3[5],table='3.2')
    def __set__(self, obj, value):
        raise RuntimeError

class EarthShape:
    """Description of the shape of the Earth"""
    def __get__(self, obj, objtype=None):
        return obj._earthparams['shape']
    def __set__(self, obj, value):
        raise RuntimeError

class EarthRadius:
    """Radius of the Earth (Assumes "spherical")"""
    def __get__(self, obj, objtype=None):
        ep = obj._earthparams
        if ep['shape'] == 'spherical':
            if ep['radius'] is None:
                return obj.section3[7]/(10.**obj.section3[6])
            else:
                return ep['radius']
        return None
    def __set__(self, obj, value):
        raise RuntimeError

class EarthMajorAxis:
    """Major Axis of the Earth (Assumes "oblate spheroid" or "ellipsoid")"""
    def __get__(self, obj, objtype=None):
        ep = obj._earthparams
        if ep['shape'] == 'spherical':
            return None
        if ep['major_axis'] is None:
            return obj.section3[9]/(10.**obj.section3[8])
        return ep['major_axis']
    def __set__(self, obj, value):
        raise RuntimeError

class EarthMinorAxis:
    """Minor Axis of the Earth (Assumes "oblate spheroid" or "ellipsoid")"""
    def __get__(self, obj, objtype=None):
        ep = obj._earthparams
        if ep['shape'] == 'spherical':
            return None
        if ep['minor_axis'] is None:
            return obj.section3[11]/(10.**obj.section3[10])
        return ep['minor_axis']
    def __set__(self, obj, value):
        raise RuntimeError

class Nx:
    """Number of grid points in the X-direction (generally East-West)"""
    def __get__(self, obj, objtype=None):
        return int(obj.section3[12])
    def __set__(self, obj, value):
        raise RuntimeError

class Ny:
    """Number of grid points in the Y-direction (generally North-South)"""
    def __get__(self, obj, objtype=None):
        return int(obj.section3[13])
    def __set__(self, obj, value):
        raise RuntimeError

class ScanModeFlags:
    """[Scanning Mode](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table3-4.shtml)"""
    def __get__(self, obj, objtype=None):
        return utils.int2bin(obj.section3[18+5],output=list)[0:8]
    def __set__(self, obj, value):
        raise RuntimeError

class ResolutionAndComponentFlags:
    """[Resolution and Component Flags](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table3-3.shtml)"""
    def __get__(self, obj, objtype=None):
        return utils.int2bin(obj.section3[13+5],output=list)
    def __set__(self, obj, value):
        raise RuntimeError

class LatitudeFirstGridpoint:
    """Latitude of first gridpoint"""
    def __get__(self, obj, objtype=None):
        return obj._llscalefactor*obj.section3[11+5]/obj._lldivisor
    def __set__(self, obj, value):
        raise RuntimeError

class LongitudeFirstGridpoint:
    """Longitude of first gridpoint"""
    def __get__(self, obj, objtype=None):
        return obj._llscalefactor*obj.section3[12+5]/obj._lldivisor
    def __set__(self, obj, value):
        raise RuntimeError

class LatitudeLastGridpoint:
    """Latitude of last gridpoint"""
    def __get__(self, obj, objtype=None):
        return obj._llscalefactor*obj.section3[14+5]/obj._lldivisor
    def __set__(self, obj, value):
        raise RuntimeError

class LongitudeLastGridpoint:
    """Longitude of last gridpoint"""
    def __get__(self, obj, objtype=None):
        return obj._llscalefactor*obj.section3[15+5]/obj._lldivisor
    def __set__(self, obj, value):
        raise RuntimeError

class GridlengthXDirection:
    """Grid length in the X-Direction, signed by the scanning mode"""
    def __get__(self, obj, objtype=None):
        return (obj._llscalefactor*obj.section3[16+5]/obj._xydivisor)*obj._dxsign
    def __set__(self, obj, value):
        raise RuntimeError

class GridlengthYDirection:
    """Grid length in the Y-Direction, signed by the scanning mode"""
    def __get__(self, obj, objtype=None):
        return (obj._llscalefactor*obj.section3[17+5]/obj._xydivisor)*obj._dysign
    def __set__(self, obj, value):
        raise RuntimeError

class ProjParameters:
    """PROJ Parameters to define the reference system"""
    def __get__(self, obj, objtype=None):
        projparams = {}
        projparams['a'] = 1.0
        projparams['b'] = 1.0
        if obj.earthRadius is not None:
            projparams['a'] = obj.earthRadius
            projparams['b'] = obj.earthRadius
        else:
            if obj.earthMajorAxis is not None: projparams['a'] = obj.earthMajorAxis
            if obj.earthMinorAxis is not None: projparams['b'] = obj.earthMinorAxis
        projparams['proj'] = 'longlat'
        return projparams
    def __set__(self, obj, value):
        raise RuntimeError

class Crs:
    """Coordinate reference system of the grid as a `pyproj.CRS`"""
    def __get__(self, obj, objtype=None):
        return pyproj.CRS.from_dict(obj.projParameters)
    def __set__(self, obj, value):
        raise RuntimeError

@dataclass(init=False)
class GridDefinitionTemplate0:
    """[Grid Definition Template 0](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_temp3-0.shtml)"""
    _len = 19
    _num = 0
    latitudeFirstGridpoint: float = field(init=False, repr=False, default=LatitudeFirstGridpoint())
    longitudeFirstGridpoint: float = field(init=False, repr=False, default=LongitudeFirstGridpoint())
    latitudeLastGridpoint: float = field(init=False, repr=False, default=LatitudeLastGridpoint())
    longitudeLastGridpoint: float = field(init=False, repr=False, default=LongitudeLastGridpoint())
    gridlengthXDirection: float = field(init=False, repr=False, default=GridlengthXDirection())
    gridlengthYDirection: float = field(init=False, repr=False, default=GridlengthYDirection())

_gdt_by_gdtn = {0: GridDefinitionTemplate0,
    }

def gdt_class_by_gdtn(gdtn: int):
    """
    Provides a Grid Definition Template class via the template number

    Parameters
    ----------
    gdtn
        Grid definition template number.

    Returns
    -------
    gdt_class_by_gdtn
        Grid definition template class object (not an instance).
    """
    return _gdt_by_gdtn[gdtn]

# ----------------------------------------------------------------------------------------
# Descriptor Classes for Section 4 metadata.
# ----------------------------------------------------------------------------------------
class ProductDefinitionTemplateNumber:
    """[Product Definition Template Number](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table4-0.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section4[1],table='4.0')
    def __set__(self, obj, value):
        raise RuntimeError

#  since PDT begins at position 2 of section4, code written with +2 for added readability with grib2 documentation
class ProductDefinitionTemplate:
    """Product Definition Template"""
    def __get__(self, obj, objtype=None):
        return obj.section4[2:]
    def __set__(self, obj, value):
        raise RuntimeError

class ParameterCategory:
    """[Parameter Category](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table4-1.shtml)"""
    def __get__(self, obj, objtype=None):
        return obj.section4[0+2]
    def __set__(self, obj, value):
        raise RuntimeError

class ParameterNumber:
    """[Parameter Number](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table4-2.shtml)"""
    def __get__(self, obj, objtype=None):
        return obj.section4[1+2]
    def __set__(self, obj, value):
        raise RuntimeError

class VarInfo:
    """
    Variable Information.

    These are the metadata returned for a specific variable according to
    discipline, parameter category, and parameter number.
    """
    def __get__(self, obj, objtype=None):
        return tables.get_varinfo_from_table(obj.section0[2],*obj.section4[2:4])
    def __set__(self, obj, value):
        raise RuntimeError

class FullName:
    """Full name of the Variable."""
    def __get__(self, obj, objtype=None):
        return obj._varinfo[0]
    def __set__(self, obj, value):
        raise RuntimeError

class Units:
    """Units of the Variable."""
    def __get__(self, obj, objtype=None):
        return obj._varinfo[1]
    def __set__(self, obj, value):
        raise RuntimeError

class ShortName:
    """ Short name of the variable (i.e. the variable abbreviation)."""
    def __get__(self, obj, objtype=None):
        return obj._varinfo[2]
    def __set__(self, obj, value):
        raise RuntimeError

class ProductEntry:
    """Entry of the product table for the parameter, or `None`."""
    def __get__(self, obj, objtype=None):
        return tables.get_product_entry(*obj.section4[2:4])
    def __set__(self, obj, value):
        raise RuntimeError

class IsForecast:
    """`True` for forecast fields, `False` for analysis (current state) fields."""
    def __get__(self, obj, objtype=None):
        return bool(obj.section4[1] == 50009 or obj.valueOfForecastTime > 0)
    def __set__(self, obj, value):
        raise RuntimeError

class Product:
    """Product kind as a `grib2jma.tables.ProductKind`."""
    def __get__(self, obj, objtype=None):
        entry = obj._productEntry
        if entry is None:
            return None
        return entry.kind(obj.isForecast)
    def __set__(self, obj, value):
        raise RuntimeError

class Tank:
    """Soil water index tank as a `grib2jma.tables.SwiTank`, `None` for other products."""
    def __get__(self, obj, objtype=None):
        entry = obj._productEntry
        if entry is None:
            return None
        return entry.tank
    def __set__(self, obj, value):
        raise RuntimeError

class TypeOfGeneratingProcess:
    """[Type of Generating Process](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table4-3.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section4[2+2],table='4.3')
    def __set__(self, obj, value):
        raise RuntimeError

class BackgroundGeneratingProcessIdentifier:
    """Background Generating Process Identifier"""
    def __get__(self, obj, objtype=None):
        return obj.section4[3+2]
    def __set__(self, obj, value):
        raise RuntimeError

class GeneratingProcess:
    """Analysis or Forecast Generating Process Identifier"""
    def __get__(self, obj, objtype=None):
        return obj.section4[4+2]
    def __set__(self, obj, value):
        raise RuntimeError

class HoursAfterDataCutoff:
    """Hours of observational data cutoff after reference time."""
    def __get__(self, obj, objtype=None):
        return obj.section4[5+2]
    def __set__(self, obj, value):
        raise RuntimeError

class MinutesAfterDataCutoff:
    """Minutes of observational data cutoff after reference time."""
    def __get__(self, obj, objtype=None):
        return obj.section4[6+2]
    def __set__(self, obj, value):
        raise RuntimeError

class UnitOfForecastTime:
    """[Units of Forecast Time](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table4-4.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section4[7+2],table='4.4')
    def __set__(self, obj, value):
        raise RuntimeError

class ValueOfForecastTime:
    """Value of forecast time in units defined by `UnitofForecastTime`."""
    def __get__(self, obj, objtype=None):
        return obj.section4[8+2]
    def __set__(self, obj, value):
        raise RuntimeError

class LeadTime:
    """Forecast Lead Time. NOTE: This is a `datetime.timedelta` object."""
    def __get__(self, obj, objtype=None):
        return utils.get_leadtime(obj.section1,obj.section4[1],obj.section4[2:])
    def __set__(self, obj, value):
        raise RuntimeError

class Duration:
    """Duration of time period. NOTE: This is a `datetime.timedelta` object."""
    def __get__(self, obj, objtype=None):
        return utils.get_duration(obj.section4[1],obj.section4[2:])
    def __set__(self, obj, value):
        raise RuntimeError

class ValidDate:
    """Valid Date of the forecast. NOTE: This is a `datetime.datetime` object."""
    _key = {50008:slice(15,21), 50009:slice(15,21)}
    def __get__(self, obj, objtype=None):
        pdtn = obj.section4[1]
        try:
            s = slice(self._key[pdtn].start+2,self._key[pdtn].stop+2)
            return datetime.datetime(*obj.section4[s])
        except(KeyError):
            return obj.refDate + obj.leadTime
    def __set__(self, obj, value):
        raise RuntimeError

class TypeOfFirstFixedSurface:
    """[Type of First Fixed Surface](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table4-5.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section4[9+2],table='4.5')
    def __set__(self, obj, value):
        raise RuntimeError

class ValueOfFirstFixedSurface:
    """Value of First Fixed Surface"""
    def __get__(self, obj, objtype=None):
        return obj.section4[11+2]/(10.**obj.section4[10+2])
    def __set__(self, obj, value):
        raise RuntimeError

class TypeOfSecondFixedSurface:
    """[Type of Second Fixed Surface](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table4-5.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section4[12+2],table='4.5')
    def __set__(self, obj, value):
        raise RuntimeError

class ValueOfSecondFixedSurface:
    """Value of Second Fixed Surface"""
    def __get__(self, obj, objtype=None):
        return obj.section4[14+2]/(10.**obj.section4[13+2])
    def __set__(self, obj, value):
        raise RuntimeError

class SourceDocument1:
    """Source document used to produce the field (first)"""
    def __get__(self, obj, objtype=None):
        return obj.section4[15+2]
    def __set__(self, obj, value):
        raise RuntimeError

class TimeFromSourceDocument1:
    """Time of the first source document relative to the reference time. NOTE: This is a `datetime.timedelta` object."""
    def __get__(self, obj, objtype=None):
        return datetime.timedelta(hours=int(obj.section4[16+2]),minutes=int(obj.section4[17+2]))
    def __set__(self, obj, value):
        raise RuntimeError

class SourceDocument2:
    """Source document used to produce the field (second)"""
    def __get__(self, obj, objtype=None):
        return obj.section4[18+2]
    def __set__(self, obj, value):
        raise RuntimeError

class TimeFromSourceDocument2:
    """Time of the second source document relative to the reference time. NOTE: This is a `datetime.timedelta` object."""
    def __get__(self, obj, objtype=None):
        return datetime.timedelta(hours=int(obj.section4[19+2]),minutes=int(obj.section4[20+2]))
    def __set__(self, obj, value):
        raise RuntimeError

class YearOfEndOfTimePeriod:
    """Year of end of time period"""
    def __get__(self, obj, objtype=None):
        return obj.section4[15+2]
    def __set__(self, obj, value):
        raise RuntimeError

class MonthOfEndOfTimePeriod:
    """Month Year of end of time period"""
    def __get__(self, obj, objtype=None):
        return obj.section4[16+2]
    def __set__(self, obj, value):
        raise RuntimeError

class DayOfEndOfTimePeriod:
    """Day Year of end of time period"""
    def __get__(self, obj, objtype=None):
        return obj.section4[17+2]
    def __set__(self, obj, value):
        raise RuntimeError

class HourOfEndOfTimePeriod:
    """Hour Year of end of time period"""
    def __get__(self, obj, objtype=None):
        return obj.section4[18+2]
    def __set__(self, obj, value):
        raise RuntimeError

class MinuteOfEndOfTimePeriod:
    """Minute Year of end of time period"""
    def __get__(self, obj, objtype=None):
        return obj.section4[19+2]
    def __set__(self, obj, value):
        raise RuntimeError

class SecondOfEndOfTimePeriod:
    """Second Year of end of time period"""
    def __get__(self, obj, objtype=None):
        return obj.section4[20+2]
    def __set__(self, obj, value):
        raise RuntimeError

class NumberOfTimeRanges:
    """Number of time ranges specifications describing the time intervals used to calculate the statistically-processed field"""
    def __get__(self, obj, objtype=None):
        return obj.section4[21+2]
    def __set__(self, obj, value):
        raise RuntimeError

class NumberOfMissingValues:
    """Total number of data values missing in statistical process"""
    def __get__(self, obj, objtype=None):
        return obj.section4[22+2]
    def __set__(self, obj, value):
        raise RuntimeError

class StatisticalProcess:
    """[Statistical Process](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table4-10.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section4[23+2],table='4.10')
    def __set__(self, obj, value):
        raise RuntimeError

class TypeOfTimeIncrementOfStatisticalProcess:
    """[Type of Time Increment of Statistical Process](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table4-11.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section4[24+2],table='4.11')
    def __set__(self, obj, value):
        raise RuntimeError

class UnitOfTimeRangeOfStatisticalProcess:
    """[Unit of Time Range of Statistical Process](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table4-4.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section4[25+2],table='4.4')
    def __set__(self, obj, value):
        raise RuntimeError

class TimeRangeOfStatisticalProcess:
    """Time Range of Statistical Process"""
    def __get__(self, obj, objtype=None):
        return obj.section4[26+2]
    def __set__(self, obj, value):
        raise RuntimeError

class UnitOfTimeRangeOfSuccessiveFields:
    """[Unit of Time Range of Successive Fields](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table4-4.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section4[27+2],table='4.4')
    def __set__(self, obj, value):
        raise RuntimeError

class TimeIncrementOfSuccessiveFields:
    """Time Increment of Successive Fields"""
    def __get__(self, obj, objtype=None):
        return obj.section4[28+2]
    def __set__(self, obj, value):
        raise RuntimeError

class OperationWord:
    """64-bit operation information word (radar or rain gauge) as an unsigned integer."""
    def __init__(self, index):
        self._index = index
    def __get__(self, obj, objtype=None):
        return int(obj.section4[self._index+2]) & 0xFFFFFFFFFFFFFFFF
    def __set__(self, obj, value):
        raise RuntimeError

class NumberOfCalculationAreas:
    """Number of areas for which mesoscale model combination ratios are given"""
    def __get__(self, obj, objtype=None):
        return obj.section4[32+2]
    def __set__(self, obj, value):
        raise RuntimeError

class ScaleFactorOfCombinationRatio:
    """Decimal scale factor of the mesoscale model combination ratios"""
    def __get__(self, obj, objtype=None):
        return obj.section4[33+2]
    def __set__(self, obj, value):
        raise RuntimeError

class CombinationRatios:
    """Mesoscale model combination ratio of each area"""
    def __get__(self, obj, objtype=None):
        return obj.section4[34+2:]/(10.**obj.section4[33+2])
    def __set__(self, obj, value):
        raise RuntimeError

"""
GRIB2 Section 4, Product Definition Template Classes
"""

@dataclass(init=False)
class ProductDefinitionTemplateBase:
    """Base attributes for Product Definition Templates"""
    _varinfo: list = field(init=False, repr=False, default=VarInfo())
    _productEntry: tables.ProductEntry = field(init=False, repr=False, default=ProductEntry())
    fullName: str = field(init=False, repr=False, default=FullName())
    units: str = field(init=False, repr=False, default=Units())
    shortName: str = field(init=False, repr=False, default=ShortName())
    product: tables.ProductKind = field(init=False, repr=False, default=Product())
    tank: tables.SwiTank = field(init=False, repr=False, default=Tank())
    isForecast: bool = field(init=False, repr=False, default=IsForecast())
    leadTime: datetime.timedelta = field(init=False,repr=False,default=LeadTime())
    duration: datetime.timedelta = field(init=False,repr=False,default=Duration())
    validDate: datetime.datetime = field(init=False,repr=False,default=ValidDate())
    # Begin template here...
    parameterCategory: int = field(init=False,repr=False,default=ParameterCategory())
    parameterNumber: int = field(init=False,repr=False,default=ParameterNumber())
    typeOfGeneratingProcess: Grib2Metadata = field(init=False,repr=False,default=TypeOfGeneratingProcess())
    generatingProcess: int = field(init=False, repr=False, default=GeneratingProcess())
    backgroundGeneratingProcessIdentifier: int = field(init=False,repr=False,default=BackgroundGeneratingProcessIdentifier())
    hoursAfterDataCutoff: int = field(init=False,repr=False,default=HoursAfterDataCutoff())
    minutesAfterDataCutoff: int = field(init=False,repr=False,default=MinutesAfterDataCutoff())
    unitOfForecastTime: Grib2Metadata = field(init=False,repr=False,default=UnitOfForecastTime())
    valueOfForecastTime: int = field(init=False,repr=False,default=ValueOfForecastTime())
    typeOfFirstFixedSurface: Grib2Metadata = field(init=False,repr=False,default=TypeOfFirstFixedSurface())
    valueOfFirstFixedSurface: float = field(init=False,repr=False,default=ValueOfFirstFixedSurface())
    typeOfSecondFixedSurface: Grib2Metadata = field(init=False,repr=False,default=TypeOfSecondFixedSurface())
    valueOfSecondFixedSurface: float = field(init=False,repr=False,default=ValueOfSecondFixedSurface())

@dataclass(init=False)
class ProductDefinitionTemplateStatistical:
    """Statistical processing and operation attributes of the JMA radar based templates"""
    yearOfEndOfTimePeriod: int = field(init=False,repr=False,default=YearOfEndOfTimePeriod())
    monthOfEndOfTimePeriod: int = field(init=False,repr=False,default=MonthOfEndOfTimePeriod())
    dayOfEndOfTimePeriod: int = field(init=False,repr=False,default=DayOfEndOfTimePeriod())
    hourOfEndOfTimePeriod: int = field(init=False,repr=False,default=HourOfEndOfTimePeriod())
    minuteOfEndOfTimePeriod: int = field(init=False,repr=False,default=MinuteOfEndOfTimePeriod())
    secondOfEndOfTimePeriod: int = field(init=False,repr=False,default=SecondOfEndOfTimePeriod())
    numberOfTimeRanges: int = field(init=False,repr=False,default=NumberOfTimeRanges())
    numberOfMissingValues: int = field(init=False,repr=False,default=NumberOfMissingValues())
    statisticalProcess: Grib2Metadata = field(init=False,repr=False,default=StatisticalProcess())
    typeOfTimeIncrementOfStatisticalProcess: Grib2Metadata = field(init=False,repr=False,default=TypeOfTimeIncrementOfStatisticalProcess())
    unitOfTimeRangeOfStatisticalProcess: Grib2Metadata = field(init=False,repr=False,default=UnitOfTimeRangeOfStatisticalProcess())
    timeRangeOfStatisticalProcess: int = field(init=False,repr=False,default=TimeRangeOfStatisticalProcess())
    unitOfTimeRangeOfSuccessiveFields: Grib2Metadata = field(init=False,repr=False,default=UnitOfTimeRangeOfSuccessiveFields())
    timeIncrementOfSuccessiveFields: int = field(init=False,repr=False,default=TimeIncrementOfSuccessiveFields())
    radarOperationInfo1: int = field(init=False,repr=False,default=OperationWord(29))
    radarOperationInfo2: int = field(init=False,repr=False,default=OperationWord(30))
    rainGaugeOperationInfo: int = field(init=False,repr=False,default=OperationWord(31))

@dataclass(init=False)
class ProductDefinitionTemplate0(ProductDefinitionTemplateBase):
    """[Product Definition Template 0](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_temp4-0.shtml)"""
    _len = 15
    _num = 0

@dataclass(init=False)
class ProductDefinitionTemplate50000(ProductDefinitionTemplateBase):
    """Product Definition Template 50000 (JMA): product processed from other source documents"""
    _len = 21
    _num = 50000
    sourceDocument1: int = field(init=False,repr=False,default=SourceDocument1())
    timeFromSourceDocument1: datetime.timedelta = field(init=False,repr=False,default=TimeFromSourceDocument1())
    sourceDocument2: int = field(init=False,repr=False,default=SourceDocument2())
    timeFromSourceDocument2: datetime.timedelta = field(init=False,repr=False,default=TimeFromSourceDocument2())

@dataclass(init=False)
class ProductDefinitionTemplate50008(ProductDefinitionTemplateBase,ProductDefinitionTemplateStatistical):
    """Product Definition Template 50008 (JMA): analysis based on radar and rain gauges"""
    _len = 32
    _num = 50008

@dataclass(init=False)
class ProductDefinitionTemplate50009(ProductDefinitionTemplateBase,ProductDefinitionTemplateStatistical):
    """Product Definition Template 50009 (JMA): forecast based on radar, rain gauges and the mesoscale model"""
    _len = 34
    _num = 50009
    numberOfCalculationAreas: int = field(init=False,repr=False,default=NumberOfCalculationAreas())
    scaleFactorOfCombinationRatio: int = field(init=False,repr=False,default=ScaleFactorOfCombinationRatio())
    combinationRatios: np.ndarray = field(init=False,repr=False,default=CombinationRatios())

_pdt_by_pdtn = {
    0: ProductDefinitionTemplate0,
    50000: ProductDefinitionTemplate50000,
    50008: ProductDefinitionTemplate50008,
    50009: ProductDefinitionTemplate50009,
    }

def pdt_class_by_pdtn(pdtn: int):
    """
    Provide a Product Definition Template class via the template number.

    Parameters
    ----------
    pdtn
        Product definition template number.

    Returns
    -------
    pdt_class_by_pdtn
        Product definition template class object (not an instance).
    """
    return _pdt_by_pdtn[pdtn]

# ----------------------------------------------------------------------------------------
# Descriptor Classes for Section 5 metadata.
# ----------------------------------------------------------------------------------------
class NumberOfPackedValues:
    """Number of Packed Values"""
    def __get__(self, obj, objtype=None):
        return obj.section5[0]
    def __set__(self, obj, value):
        raise RuntimeError

class DataRepresentationTemplateNumber:
    """[Data Representation Template Number](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table5-0.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section5[1],table='5.0')
    def __set__(self, obj, value):
        raise RuntimeError

class DataRepresentationTemplate:
    """Data Representation Template"""
    def __get__(self, obj, objtype=None):
        return obj.section5[2:]
    def __set__(self, obj, value):
        raise RuntimeError

class RefValue:
    """Reference Value (represented as an IEEE 32-bit floating point value)"""
    def __get__(self, obj, objtype=None):
        return utils.ieee_int_to_float(obj.section5[0+2])
    def __set__(self, obj, value):
        raise RuntimeError

class BinScaleFactor:
    """Binary Scale Factor"""
    def __get__(self, obj, objtype=None):
        return obj.section5[1+2]
    def __set__(self, obj, value):
        raise RuntimeError

class DecScaleFactor:
    """Decimal Scale Factor"""
    _key = {0:2, 200:3}
    def __get__(self, obj, objtype=None):
        return obj.section5[self._key[obj.drtn]+2]
    def __set__(self, obj, value):
        raise RuntimeError

class NBitsPacking:
    """Number of bits used for each packed value"""
    _key = {0:3, 200:0}
    def __get__(self, obj, objtype=None):
        return obj.section5[self._key[obj.drtn]+2]
    def __set__(self, obj, value):
        raise RuntimeError

class TypeOfValues:
    """[Type of Original Field Values](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_table5-1.shtml)"""
    def __get__(self, obj, objtype=None):
        return Grib2Metadata(obj.section5[4+2],table='5.1')
    def __set__(self, obj, value):
        raise RuntimeError

class MaxLevelValue:
    """Maximum level value used in this field (MAXV)"""
    def __get__(self, obj, objtype=None):
        return obj.section5[1+2]
    def __set__(self, obj, value):
        raise RuntimeError

class NumberOfLevelValues:
    """Maximum level value possible for the product"""
    def __get__(self, obj, objtype=None):
        return obj.section5[2+2]
    def __set__(self, obj, value):
        raise RuntimeError

class LevelValues:
    """Representative values of each level, scaled by 10**decScaleFactor"""
    def __get__(self, obj, objtype=None):
        levels = obj.section5[4+2:]
        entry = obj._productEntry
        if entry is not None and entry.signed_levels:
            return np.array([utils.sign_magnitude(int(lv),16) for lv in levels],dtype=np.int64)
        return levels
    def __set__(self, obj, value):
        raise RuntimeError

class LevelTable:
    """
    Physical value of each level code.

    Entry 0 is "no data" (`numpy.nan`); entry `m` is the representative
    value of level `m`.
    """
    def __get__(self, obj, objtype=None):
        values = obj.levelValues*(10.**-obj.decScaleFactor)
        return np.concatenate(([np.nan],values))
    def __set__(self, obj, value):
        raise RuntimeError

class BitsPerLevelCode:
    """Width of the run-length codes; the minimum width when NBIT is 0"""
    def __get__(self, obj, objtype=None):
        nbits = obj.section5[0+2]
        if nbits == 0:
            return utils.min_bit_width(obj.maxLevelValue)
        return int(nbits)
    def __set__(self, obj, value):
        raise RuntimeError

@dataclass(init=False)
class DataRepresentationTemplate0:
    """[Data Representation Template 0](https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_temp5-0.shtml)"""
    _len = 5
    _num = 0
    _packingScheme = 'simple'
    refValue: float = field(init=False, repr=False, default=RefValue())
    binScaleFactor: int = field(init=False, repr=False, default=BinScaleFactor())
    decScaleFactor: int = field(init=False, repr=False, default=DecScaleFactor())
    nBitsPacking: int = field(init=False, repr=False, default=NBitsPacking())
    typeOfValues: Grib2Metadata = field(init=False, repr=False, default=TypeOfValues())

@dataclass(init=False)
class DataRepresentationTemplate200:
    """Data Representation Template 200 (JMA): run length packing with level values"""
    _len = 4
    _num = 200
    _packingScheme = 'run-length'
    nBitsPacking: int = field(init=False, repr=False, default=NBitsPacking())
    maxLevelValue: int = field(init=False, repr=False, default=MaxLevelValue())
    numberOfLevelValues: int = field(init=False, repr=False, default=NumberOfLevelValues())
    decScaleFactor: int = field(init=False, repr=False, default=DecScaleFactor())
    levelValues: np.ndarray = field(init=False, repr=False, default=LevelValues())
    levelTable: np.ndarray = field(init=False, repr=False, default=LevelTable())
    bitsPerLevelCode: int = field(init=False, repr=False, default=BitsPerLevelCode())

_drt_by_drtn = {
    0: DataRepresentationTemplate0,
    200: DataRepresentationTemplate200,
    }

def drt_class_by_drtn(drtn: int):
    """
    Provide a Data Representation Template class via the template number.

    Parameters
    ----------
    drtn
        Data Representation template number.

    Returns
    -------
    drt_class_by_drtn
        Data Representation template class object (not an instance).
    """
    return _drt_by_drtn[drtn]
