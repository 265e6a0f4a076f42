"""
Introduction
============
grib2jma is a Python package for decoding the GRIB2 products of the Japan
Meteorological Agency (JMA): the 1 km mesh analysed rainfall, the
short-range precipitation forecast, the soil water index (analysis and
forecast) and the landslide warning judgement mesh.

A GRIB2 message is split into its sections directly in Python.  The
integer sections are unpacked into numpy arrays by `grib2jma.unpack` and the
coded metadata is translated into plain language metadata by looking up the
integer code values against the code tables of `grib2jma.tables`.  Data
values are reconstructed lazily by `grib2jma.packing`, on first access of
`Grib2Field.data`.

A message holds one grid and one or more fields (repeated Sections 4 to 7),
for example the three tanks of the soil water index for each forecast hour.
"""

from dataclasses import dataclass, field
import dataclasses
from typing import NamedTuple, Optional, Union
import builtins
import datetime
import hashlib
import logging
import os
import struct
import warnings

from numpy.typing import NDArray
import numpy as np

from . import packing
from . import tables
from . import templates
from . import unpack
from . import utils
from .errors import (DataLengthMismatch, InvalidSectionOrder, OutOfBounds,
                     TruncatedMessage, UnknownParameter,
                     UnsupportedBitmapReference, UnsupportedGridTemplate)

logger = logging.getLogger(__name__)

DEFAULT_FILL_VALUE = 9.9692099683868690e+36
GRIB2_EDITION_NUMBER = 2

_AUTO_NANS = True

_latlon_datastore = dict()
_LATLON_CACHE_SIZE = 8
_msg_class_store = dict()

_section_header = struct.Struct('>IB')

# Sections allowed to follow each section.  One grid per message, so a
# repeated group starts at Section 4.
_next_sections = {0:{1}, 1:{2,3}, 2:{3}, 3:{4}, 4:{5}, 5:{6,7}, 6:{7}, 7:{4,8}}


class Section(NamedTuple):
    """
    A GRIB2 section located in a message buffer.

    Attributes
    ----------
    number
        Section number (0-8).
    offset
        Byte offset of the section from the beginning of the message.
    length
        Length of the section in bytes.
    view
        `memoryview` of the section bytes.
    """
    number: int
    offset: int
    length: int
    view: memoryview


def split_sections(buf) -> list:
    """
    Split a GRIB2 message into its sections.

    Parameters
    ----------
    buf
        Bytes-like object holding exactly one GRIB2 message.

    Returns
    -------
    split_sections
        List of `Section`, from the Indicator Section (0) to the End
        Section (8).
    """
    view = memoryview(buf).cast('B')
    size = len(view)
    if size < 16:
        raise TruncatedMessage(f'Message of {size} octets is shorter than the Indicator Section.', 0)
    if bytes(view[0:4]) != b'GRIB':
        raise InvalidSectionOrder('Message does not start with "GRIB".', 0)
    section0 = unpack.unpack0(view[0:16])
    if section0[3] != GRIB2_EDITION_NUMBER:
        raise InvalidSectionOrder(f'GRIB edition {section0[3]} is not supported.', 7)
    if section0[4] > size:
        raise TruncatedMessage(f'Indicator Section declares {section0[4]} octets '
                               f'but the buffer holds {size}.', 8)
    if section0[4] < size:
        raise DataLengthMismatch(f'Indicator Section declares {section0[4]} octets '
                                 f'but the buffer holds {size}.', 8)

    sections = [Section(0, 0, 16, view[0:16])]
    pos = 16
    prev = 0
    while pos < size:
        if bytes(view[pos:pos+4]) == b'7777':
            if 8 not in _next_sections.get(prev, set()):
                raise InvalidSectionOrder(f'End Section follows Section {prev}.', pos)
            sections.append(Section(8, pos, 4, view[pos:pos+4]))
            pos += 4
            if pos != size:
                raise DataLengthMismatch(f'{size-pos} octets follow the End Section.', pos)
            logger.debug('split message of %d octets into sections %s',
                         size, [s.number for s in sections])
            return sections
        if size-pos < 5:
            raise TruncatedMessage('Section header runs past the end of the message.', pos)
        length, number = _section_header.unpack_from(view, pos)
        if number == 8:
            raise InvalidSectionOrder('End Section must be the 4 octets "7777".', pos)
        if number not in _next_sections.get(prev, set()):
            raise InvalidSectionOrder(f'Section {number} cannot follow Section {prev}.', pos)
        if length < 5 or pos+length > size:
            raise TruncatedMessage(f'Section {number} declares {length} octets but '
                                   f'{size-pos} remain.', pos)
        sections.append(Section(number, pos, length, view[pos:pos+length]))
        pos += length
        prev = number
    raise TruncatedMessage('Message ends without the End Section "7777".', pos)


class Message:
    """
    GRIB2 Message.

    All section metadata is unpacked and validated when the message is
    created; data values are reconstructed on first access of
    `Grib2Field.data`.

    Attributes
    ----------
    sections : list
        `Section` objects of the message.
    section0 : numpy.ndarray
        Indicator Section.
    section1 : numpy.ndarray
        Identification Section.
    section2 : bytes
        Local Use Section or `None`.
    section3 : numpy.ndarray
        Grid Definition Section.
    griddef : Grib2GridDef
        Grid of all fields.
    fields : list
        `Grib2Field` objects, one per repeated Section 4 to 7 group.
    """
    def __init__(self, buf):
        if isinstance(buf, bytearray):
            buf = bytes(buf)
        self._buf = buf
        self.sections = split_sections(buf)
        byno = {}
        for s in self.sections[:5]:
            byno.setdefault(s.number, s)
        self.section0 = unpack.unpack0(self.sections[0].view)
        self.section1 = unpack.unpack1(byno[1].view, byno[1].offset)
        self.section2 = bytes(byno[2].view[5:]) if 2 in byno else None
        self.section3 = unpack.unpack3(byno[3].view, byno[3].offset)
        self.griddef = Grib2GridDef.from_section3(self.section3)
        self.griddef.validate(byno[3].offset)
        self.fields = []

        bitmap = None
        groups = []
        for s in self.sections:
            if s.number == 4:
                groups.append({})
            if groups and 4 <= s.number <= 7:
                groups[-1][s.number] = s
        for group in groups:
            fld, bitmap = self._make_field(group, bitmap)
            fld._msgnum = len(self.fields)
            self.fields.append(fld)
        logger.debug('message with %d field(s) on a %dx%d grid', len(self.fields),
                     self.griddef.ny, self.griddef.nx)

    def _make_field(self, group: dict, bitmap: Optional[NDArray]):
        s4, s5, s7 = group[4], group[5], group[7]
        section4 = unpack.unpack4(s4.view, s4.offset)
        if self.section0[2] not in tables.GRIB2_DISCIPLINES or \
           tables.get_product_entry(*section4[2:4]) is None:
            raise UnknownParameter(f'Parameter (discipline {self.section0[2]}, category '
                                   f'{section4[2]}, number {section4[3]}) is not a known product.',
                                   s4.offset)
        section5 = unpack.unpack5(s5.view, s5.offset)
        npoints = self.griddef.npoints

        bmapflag, bmap = 255, None
        if 6 in group:
            s6 = group[6]
            bmapflag, bmap = unpack.unpack6(s6.view, npoints, s6.offset)
            if bmapflag == 254:
                if bitmap is None:
                    raise UnsupportedBitmapReference('Bitmap indicator 254 without a previously '
                                                     'defined bitmap.', s6.offset+5)
                bmap = bitmap
            elif bmapflag == 0:
                bitmap = bmap

        expected = npoints if bmap is None else int(np.count_nonzero(bmap))
        if section5[0] != expected:
            raise DataLengthMismatch(f'Data Representation Section declares {section5[0]} values '
                                     f'for {expected} grid points with data.', s5.offset+5)

        fld = Grib2Field(self.section0, self.section1, self.section2, self.section3,
                         section4, section5, bmapflag)
        fld.bitmap = bmap
        fld._griddef = self.griddef
        fld._section7 = s7.view
        fld._section7_offset = s7.offset
        logger.debug('field at %d: %s, pdtn=%d drtn=%d bitmap=%d', s4.offset,
                     fld.product.name, section4[1], section5[1], bmapflag)
        return fld, bitmap

    def __iter__(self):
        yield from self.fields

    def __len__(self):
        return len(self.fields)

    def __getitem__(self, key):
        if isinstance(key,int):
            if abs(key) >= len(self.fields):
                raise IndexError("index out of range")
            return self.fields[key]
        elif isinstance(key,str):
            return self.select(shortName=key)
        elif isinstance(key,slice):
            return self.fields[key]
        else:
            raise KeyError('Key must be an integer, slice, or GRIB2 variable shortName.')

    def __repr__(self):
        return (f'{self.__class__.__name__}(refDate={self.refDate}, '
                f'product={self.product}, fields={len(self.fields)})')

    @property
    def refDate(self):
        """Reference date of the message."""
        return datetime.datetime(*self.section1[5:11])

    @property
    def product(self):
        """Product kind of the first field."""
        return self.fields[0].product if self.fields else None

    def select(self, **kwargs):
        """Select fields by `Grib2Field` attributes."""
        return [f for f in self.fields
                if all(hasattr(f,k) and getattr(f,k) == v for k,v in kwargs.items())]

    def forecast(self, hour: int) -> list:
        """
        Return the fields valid a given number of hours after the reference time.

        Parameters
        ----------
        hour
            Forecast hour; 0 selects the analysis fields.

        Returns
        -------
        forecast
            List of `Grib2Field`; several for products with one field per
            tank.
        """
        lead = datetime.timedelta(hours=hour)
        return [f for f in self.fields if f.leadTime == lead]

    def tank(self, tank: tables.SwiTank, hour: Optional[int] = None):
        """
        Return the soil water index field of a tank.

        Parameters
        ----------
        tank
            `grib2jma.tables.SwiTank` member.
        hour
            Forecast hour.  Required when the message carries the tank for
            more than one hour.

        Returns
        -------
        tank
            `Grib2Field`.
        """
        found = [f for f in self.fields if f.tank is tank]
        if hour is not None:
            lead = datetime.timedelta(hours=hour)
            found = [f for f in found if f.leadTime == lead]
        if not found:
            raise KeyError(f'No field for {tank}' + (f' at hour {hour}.' if hour is not None else '.'))
        if len(found) > 1:
            raise ValueError(f'{len(found)} fields for {tank}; select one with hour=.')
        return found[0]


def decode(buf) -> Message:
    """
    Decode a GRIB2 message and reconstruct the data of every field.

    Parameters
    ----------
    buf
        Bytes-like object holding exactly one GRIB2 message.

    Returns
    -------
    decode
        `Message` whose fields hold their data.
    """
    msg = Message(buf)
    for fld in msg.fields:
        fld.data
    return msg


class open():
    """
    GRIB2 File Object.

    The file named `filename` is read and every GRIB2 message in it is
    decoded.  Gzip compressed files are detected and decompressed.  The
    fields of all messages are flattened into one sequence, so that the
    object behaves like a file of fields.

    Attributes
    ----------
    closed : bool
        `True` is file handle is close; `False` otherwise.
    current_message : int
        Current position of the file in units of fields.
    messages : int
        Count of fields contained in the file.
    name : str
        Full path name of the GRIB2 file, or `None` for in-memory data.
    size : int
        Size of the (decompressed) data in bytes.
    variables : tuple
        Tuple containing a unique list of variable short names.
    """

    __slots__ = ('_filehandle', '_index', 'closed', 'current_message',
                 'messages', 'name', 'size')

    def __init__(self, filename: Union[str, bytes, os.PathLike]):
        """
        Initialize GRIB2 File object instance.

        Parameters
        ----------
        filename
            File name containing GRIB2 messages, or the bytes of the file.
        """
        if isinstance(filename, (bytes, bytearray, memoryview)):
            self._filehandle = None
            self.name = None
            data = bytes(filename)
            if data[:2] == b'\x1f\x8b':
                import gzip
                data = gzip.decompress(data)
        else:
            self._filehandle = builtins.open(filename, mode='rb')
            # Gzip files contain a 2-byte header b'\x1f\x8b'.
            if self._filehandle.read(2) == b'\x1f\x8b':
                self._filehandle.close()
                import gzip
                self._filehandle = gzip.open(filename, mode='rb')
            else:
                self._filehandle.seek(0)
            self.name = os.path.abspath(filename)
            data = self._filehandle.read()
        self.size = len(data)
        self.closed = False
        self.current_message = 0
        self._build_index(data)
        self.messages = len(self._index['msg'])

    def __enter__(self):
        return self

    def __exit__(self, atype, value, traceback):
        self.close()

    def __iter__(self):
        yield from self._index['msg']

    def __len__(self):
        return self.messages

    def __repr__(self):
        strings = []
        for k in self.__slots__:
            if k.startswith('_'): continue
            strings.append('%s = %s\n'%(k,getattr(self,k)))
        return ''.join(strings)

    def __getitem__(self, key):
        if isinstance(key,int):
            if abs(key) >= len(self._index['msg']):
                raise IndexError("index out of range")
            else:
                return self._index['msg'][key]
        elif isinstance(key,str):
            return self.select(shortName=key)
        elif isinstance(key,slice):
            return self._index['msg'][key]
        else:
            raise KeyError('Key must be an integer, slice, or GRIB2 variable shortName.')

    def _build_index(self, data: bytes):
        """Find and decode the GRIB2 messages of the file."""
        self._index = {'offset':[], 'message':[], 'msg':[]}
        pos = 0
        while pos < len(data):
            # Search for GRIB within the next 2048 bytes.
            start = data.find(b'GRIB', pos, pos+2048)
            if start < 0:
                if data[pos:].strip(b'\x00'):
                    warnings.warn(f'{len(data)-pos} trailing bytes without a GRIB message ignored.')
                break
            if start > pos:
                warnings.warn(f'{start-pos} bytes before the GRIB message at offset {start} ignored.')
            if len(data)-start < 16:
                raise TruncatedMessage('GRIB indicator at the end of the file.', start)
            edition = data[start+7]
            if edition == 1:
                warnings.warn(f'GRIB1 message at offset {start} ignored.')
                pos = start + max(int.from_bytes(data[start+4:start+7], 'big'), 8)
                continue
            length = struct.unpack('>Q', data[start+8:start+16])[0]
            msg = Message(memoryview(data)[start:start+length])
            logger.debug('message at offset %d: %d octets, %d field(s)', start, length, len(msg))
            self._index['offset'].append(start)
            self._index['message'].append(msg)
            self._index['msg'].extend(msg.fields)
            pos = start + length

    @property
    def variables(self):
        return tuple(sorted(set([msg.shortName for msg in self._index['msg']])))

    def close(self):
        """Close the file handle."""
        if self._filehandle is not None and not self._filehandle.closed:
            self._filehandle.close()
        self.closed = True

    def read(self, size: Optional[int]=None):
        """
        Read size amount of fields from the current position.

        If no argument is given, then size is None and all fields are returned
        from the current position in the file. This read method follows the
        behavior of Python's builtin open() function, but whereas that operates
        on units of bytes, we operate on units of fields.

        Parameters
        ----------
        size: default=None
            The number of fields to read from the current position. If no
            argument is give, the default value is None and remainder of the
            file is read.

        Returns
        -------
        read
            ``Grib2Field`` object when size = 1 or a list of Grib2Fields
            when size > 1.
        """
        if size is not None and size < 0:
            size = None
        if size is None or size > 1:
            start = self.tell()
            stop = self.messages if size is None else min(start+size, self.messages)
            self.current_message = stop
            return self._index['msg'][slice(start,stop,1)]
        elif size == 1:
            if self.current_message >= self.messages:
                return None
            self.current_message += 1
            return self._index['msg'][self.current_message-1]
        else:
            return None

    def seek(self, pos: int):
        """
        Set the position within the file in units of fields.

        Parameters
        ----------
        pos
            The field number to set the file pointer to.
        """
        self.current_message = pos

    def tell(self):
        """Returns the position of the file in units of fields."""
        return self.current_message

    def select(self, **kwargs):
        """Select fields by `Grib2Field` attributes."""
        return [m for m in self._index['msg']
                if all(hasattr(m,k) and getattr(m,k) == v for k,v in kwargs.items())]


class Grib2Field:
    """
    Creation class for a GRIB2 field.

    This class returns a dynamically-created Grib2Field object that
    inherits from `_Grib2Field` and grid, product, data representation
    template classes according to the template numbers for the respective
    sections.

    Parameters
    ----------
    section0
        GRIB2 section 0 array.
    section1
        GRIB2 section 1 array.
    section2
        Local Use section data.
    section3
        GRIB2 section 3 array.
    section4
        GRIB2 section 4 array.
    section5
        GRIB2 section 5 array.
    bitMapFlag
        GRIB2 bit-map indicator.

    Returns
    -------
    Msg
        A dynamically-create Grib2Field object that inherits from
        _Grib2Field, a grid definition template class, product
        definition template class, and a data representation template
        class.
    """
    def __new__(self, section0: NDArray, section1: NDArray,
                      section2: Optional[bytes], section3: NDArray,
                      section4: NDArray, section5: NDArray,
                      bitMapFlag: int = 255):

        gdtn, pdtn, drtn = int(section3[4]), int(section4[1]), int(section5[1])
        try:
            bases = [templates.gdt_class_by_gdtn(gdtn)]
        except KeyError:
            raise UnsupportedGridTemplate(f'Grid Definition Template 3.{gdtn} is not supported.')
        bases.append(templates.pdt_class_by_pdtn(pdtn))
        bases.append(templates.drt_class_by_drtn(drtn))

        # attempt to use existing Msg class if it has already been made with gdtn,pdtn,drtn combo
        try:
            Msg = _msg_class_store[f"{gdtn}:{pdtn}:{drtn}"]
        except KeyError:
            @dataclass(init=False, repr=False, eq=False)
            class Msg(_Grib2Field, *bases):
                pass
            _msg_class_store[f"{gdtn}:{pdtn}:{drtn}"] = Msg

        return Msg(section0, section1, section2, section3, section4, section5, bitMapFlag)


@dataclass(eq=False)
class _Grib2Field:
    """
    GRIB2 Field base class.
    """
    # GRIB2 Sections
    section0: NDArray = field(init=True,repr=False)
    section1: NDArray = field(init=True,repr=False)
    section2: bytes = field(init=True,repr=False)
    section3: NDArray = field(init=True,repr=False)
    section4: NDArray = field(init=True,repr=False)
    section5: NDArray = field(init=True,repr=False)
    bitMapFlag: templates.Grib2Metadata = field(init=True,repr=False,default=255)

    # Section 0 looked up attributes
    indicatorSection: NDArray = field(init=False,repr=False,default=templates.IndicatorSection())
    discipline: templates.Grib2Metadata = field(init=False,repr=False,default=templates.Discipline())

    # Section 1 looked up attributes
    identificationSection: NDArray = field(init=False,repr=False,default=templates.IdentificationSection())
    originatingCenter: templates.Grib2Metadata = field(init=False,repr=False,default=templates.OriginatingCenter())
    originatingSubCenter: templates.Grib2Metadata = field(init=False,repr=False,default=templates.OriginatingSubCenter())
    masterTableInfo: templates.Grib2Metadata = field(init=False,repr=False,default=templates.MasterTableInfo())
    localTableInfo: templates.Grib2Metadata = field(init=False,repr=False,default=templates.LocalTableInfo())
    significanceOfReferenceTime: templates.Grib2Metadata = field(init=False,repr=False,default=templates.SignificanceOfReferenceTime())
    year: int = field(init=False,repr=False,default=templates.Year())
    month: int = field(init=False,repr=False,default=templates.Month())
    day: int = field(init=False,repr=False,default=templates.Day())
    hour: int = field(init=False,repr=False,default=templates.Hour())
    minute: int = field(init=False,repr=False,default=templates.Minute())
    second: int = field(init=False,repr=False,default=templates.Second())
    refDate: datetime.datetime = field(init=False,repr=False,default=templates.RefDate())
    productionStatus: templates.Grib2Metadata = field(init=False,repr=False,default=templates.ProductionStatus())
    typeOfData: templates.Grib2Metadata = field(init=False,repr=False,default=templates.TypeOfData())

    # Section 3 looked up common attributes.  Other looked up attributes are available according
    # to the Grid Definition Template.
    gridDefinitionSection: NDArray = field(init=False,repr=False,default=templates.GridDefinitionSection())
    sourceOfGridDefinition: int = field(init=False,repr=False,default=templates.SourceOfGridDefinition())
    numberOfDataPoints: int = field(init=False,repr=False,default=templates.NumberOfDataPoints())
    interpretationOfListOfNumbers: templates.Grib2Metadata = field(init=False,repr=False,default=templates.InterpretationOfListOfNumbers())
    gridDefinitionTemplateNumber: templates.Grib2Metadata = field(init=False,repr=False,default=templates.GridDefinitionTemplateNumber())
    gridDefinitionTemplate: list = field(init=False,repr=False,default=templates.GridDefinitionTemplate())
    _earthparams: dict = field(init=False,repr=False,default=templates.EarthParams())
    _dxsign: float = field(init=False,repr=False,default=templates.DxSign())
    _dysign: float = field(init=False,repr=False,default=templates.DySign())
    _llscalefactor: float = field(init=False,repr=False,default=templates.LLScaleFactor())
    _lldivisor: float = field(init=False,repr=False,default=templates.LLDivisor())
    _xydivisor: float = field(init=False,repr=False,default=templates.XYDivisor())
    shapeOfEarth: templates.Grib2Metadata = field(init=False,repr=False,default=templates.ShapeOfEarth())
    earthShape: str = field(init=False,repr=False,default=templates.EarthShape())
    earthRadius: float = field(init=False,repr=False,default=templates.EarthRadius())
    earthMajorAxis: float = field(init=False,repr=False,default=templates.EarthMajorAxis())
    earthMinorAxis: float = field(init=False,repr=False,default=templates.EarthMinorAxis())
    resolutionAndComponentFlags: list = field(init=False,repr=False,default=templates.ResolutionAndComponentFlags())
    ny: int = field(init=False,repr=False,default=templates.Ny())
    nx: int = field(init=False,repr=False,default=templates.Nx())
    scanModeFlags: list = field(init=False,repr=False,default=templates.ScanModeFlags())
    projParameters: dict = field(init=False,repr=False,default=templates.ProjParameters())
    crs: object = field(init=False,repr=False,default=templates.Crs())

    # Section 4
    productDefinitionTemplateNumber: templates.Grib2Metadata = field(init=False,repr=False,default=templates.ProductDefinitionTemplateNumber())
    productDefinitionTemplate: NDArray = field(init=False,repr=False,default=templates.ProductDefinitionTemplate())

    # Section 5 looked up common attributes.  Other looked up attributes are
    # available according to the Data Representation Template.
    numberOfPackedValues: int = field(init=False,repr=False,default=templates.NumberOfPackedValues())
    dataRepresentationTemplateNumber: templates.Grib2Metadata = field(init=False,repr=False,default=templates.DataRepresentationTemplateNumber())
    dataRepresentationTemplate: list = field(init=False,repr=False,default=templates.DataRepresentationTemplate())

    def __post_init__(self):
        """Set some attributes after init."""
        self._auto_nans = _AUTO_NANS
        self._data = None
        self._levels = None
        self._griddef = None
        self._msgnum = -1
        self._section7 = None
        self._section7_offset = 0
        self._sha1_section3 = hashlib.sha1(self.section3).hexdigest()
        self.bitMapFlag = templates.Grib2Metadata(self.bitMapFlag,table='6.0')
        self.bitmap = None

    @property
    def gdtn(self):
        """Return Grid Definition Template Number"""
        return self.section3[4]

    @property
    def gdt(self):
        """Return Grid Definition Template."""
        return self.gridDefinitionTemplate

    @property
    def pdtn(self):
        """Return Product Definition Template Number."""
        return self.section4[1]

    @property
    def pdt(self):
        """Return Product Definition Template."""
        return self.productDefinitionTemplate

    @property
    def drtn(self):
        """Return Data Representation Template Number."""
        return self.section5[1]

    @property
    def drt(self):
        """Return Data Representation Template."""
        return self.dataRepresentationTemplate

    @property
    def griddef(self):
        """Return a Grib2GridDef instance for a GRIB2 field."""
        if self._griddef is None:
            self._griddef = Grib2GridDef.from_section3(self.section3)
        return self._griddef

    @property
    def lats(self):
        """Return grid latitudes."""
        return self.latlons()[0]

    @property
    def lons(self):
        """Return grid longitudes."""
        return self.latlons()[1]

    @property
    def min(self):
        """Return minimum value of data."""
        return np.nanmin(self.data)

    @property
    def max(self):
        """Return maximum value of data."""
        return np.nanmax(self.data)

    @property
    def mean(self):
        """Return mean value of data."""
        return np.nanmean(self.data)

    @property
    def median(self):
        """Return median value of data."""
        return np.nanmedian(self.data)

    def __repr__(self):
        """
        Return an unambiguous string representation of the object.

        Returns
        -------
        repr
            A string representation of the object, including information from
            sections 0, 1, 3, 4, 5, and 6.
        """
        info = ''
        for sect in [0,1,3,4,5,6]:
            for k,v in self.attrs_by_section(sect,values=True).items():
                info += f'Section {sect}: {k} = {v}\n'
        return info

    def __str__(self):
        return (f'{self._msgnum}:d={self.refDate}:{self.shortName}:'
                f'{self.fullName} ({self.units}):{self.product}:'
                f'{self.leadTime}')

    def attrs_by_section(self, sect: int, values: bool=False):
        """
        Provide a tuple of attribute names for the given GRIB2 section.

        Parameters
        ----------
        sect
            The GRIB2 section number.
        values
            Optional (default is `False`) argument to return attributes values.

        Returns
        -------
        attrs_by_section
            A list of attribute names or dict of name:value pairs if `values =
            True`.
        """
        if sect in {0,1,6}:
            attrs = templates._section_attrs[sect]
        elif sect in {3,4,5}:
            _key = {3:'Grid', 4:'Product', 5:'Data'}
            attrs = list(templates._section_attrs[sect])
            for c in self.__class__.__mro__:
                if _key[sect] in c.__name__ and dataclasses.is_dataclass(c):
                    attrs += [f.name for f in dataclasses.fields(c)
                              if not f.name.startswith('_') and f.name not in attrs]
                    break
        else:
            attrs = []
        if values:
            return {k:getattr(self,k) for k in attrs}
        else:
            return attrs

    @property
    def data(self) -> np.array:
        """Access the unpacked data values as a (ny, nx) array."""
        if self._data is None or self._auto_nans != _AUTO_NANS:
            self._auto_nans = _AUTO_NANS
            fill_value = np.nan if self._auto_nans else DEFAULT_FILL_VALUE
            values, codes = packing.reconstruct(self, fill=fill_value)
            idx = self.griddef.scan_indices()
            self._levels = None if codes is None else codes[idx]
            self._data = values[idx].astype(np.float32)
        return self._data

    @property
    def levels(self) -> Optional[np.array]:
        """Level codes of run-length packed fields as a (ny, nx) array, 0 is no data."""
        self.data
        return self._levels

    def flush_data(self):
        """Flush the unpacked data values from the Grib2Field object."""
        self._data = None
        self._levels = None

    def __getitem__(self, item):
        return self.data[item]

    def latlons(self, *args, **kwrgs):
        """Alias for `grib2jma.Grib2Field.grid` method."""
        return self.grid(*args, **kwrgs)

    def grid(self):
        """
        Return lats,lons (in degrees) of grid.

        Returns
        -------
        lats, lons : numpy.ndarray
            Returns two numpy.ndarrays with dtype=numpy.float64 of grid
            latitudes and longitudes in units of degrees.
        """
        if self._sha1_section3 in _latlon_datastore.keys():
            return (_latlon_datastore[self._sha1_section3]['latitude'],
                    _latlon_datastore[self._sha1_section3]['longitude'])
        lats, lons = self.griddef.grid()
        # Oldest grid goes first.
        if len(_latlon_datastore) >= _LATLON_CACHE_SIZE:
            del _latlon_datastore[next(iter(_latlon_datastore))]
        _latlon_datastore[self._sha1_section3] = dict(latitude=lats,longitude=lons)
        return lats, lons

    def _value(self, v):
        if np.isnan(v) or v == np.float32(DEFAULT_FILL_VALUE):
            return None
        return float(v)

    def value_at(self, lat: float, lon: float) -> Optional[float]:
        """
        Return the value of the grid cell nearest to a point.

        Parameters
        ----------
        lat
            Latitude in degrees.
        lon
            Longitude in degrees.

        Returns
        -------
        value_at
            Value at the cell or `None` when the cell has no data.
        """
        row, col = self.griddef.cell_index(lat, lon)
        return self._value(self.data[row, col])

    def iter_points(self, mesh_code: bool=False):
        """
        Iterate over the grid points in scan order.

        Parameters
        ----------
        mesh_code
            If `True`, attach the third-order mesh code of each point.

        Yields
        ------
        Grib2Point
        """
        data = self.data
        levels = self.levels
        lats, lons = self.grid()
        idx = self.griddef.scan_indices().ravel()
        order = np.empty_like(idx)
        order[idx] = np.arange(idx.size)
        lats, lons, data = lats.ravel(), lons.ravel(), data.ravel()
        if levels is not None:
            levels = levels.ravel()
        for k in order:
            lat, lon = float(lats[k]), float(lons[k])
            yield Grib2Point(lat, lon,
                             None if levels is None else int(levels[k]),
                             self._value(data[k]),
                             utils.mesh3_code(lat, lon) if mesh_code else None)


class Grib2Point(NamedTuple):
    """A grid point with its level code (run-length packing only) and value."""
    lat: float
    lon: float
    level: Optional[int]
    value: Optional[float]
    meshCode: Optional[str] = None


@dataclass(eq=False)
class Grib2GridDef:
    """
    Equidistant latitude/longitude grid of a GRIB2 message.

    The grid is addressed by (row, col) where row 0 is the first scanned row
    (latitude of the first grid point) and col 0 the first scanned column
    (longitude of the first grid point).  The linear position of a point is
    its position in the Data Section, which follows the scanning mode.
    """
    section3: NDArray

    _dxsign = templates.DxSign()
    _dysign = templates.DySign()
    _llscalefactor = templates.LLScaleFactor()
    _lldivisor = templates.LLDivisor()
    _xydivisor = templates.XYDivisor()
    nx = templates.Nx()
    ny = templates.Ny()
    scanModeFlags = templates.ScanModeFlags()
    latitudeFirstGridpoint = templates.LatitudeFirstGridpoint()
    longitudeFirstGridpoint = templates.LongitudeFirstGridpoint()
    latitudeLastGridpoint = templates.LatitudeLastGridpoint()
    longitudeLastGridpoint = templates.LongitudeLastGridpoint()
    gridlengthXDirection = templates.GridlengthXDirection()
    gridlengthYDirection = templates.GridlengthYDirection()

    @classmethod
    def from_section3(cls, section3):
        return cls(section3)

    @property
    def gdtn(self):
        return self.section3[4]

    @property
    def gdt(self):
        return self.section3[5:]

    @property
    def npoints(self):
        return self.nx * self.ny

    @property
    def shape(self):
        return (self.ny, self.nx)

    def validate(self, offset: Optional[int] = None):
        """Check the grid against the declared number of data points."""
        if self.npoints != self.section3[1]:
            raise DataLengthMismatch(f'Grid of {self.ny}x{self.nx} points does not match the '
                                     f'{self.section3[1]} data points declared.', offset)
        if (self.nx > 1 and self.section3[21] == 0) or (self.ny > 1 and self.section3[22] == 0):
            raise UnsupportedGridTemplate('Grid increments must be non-zero.', offset)

    def index(self, row: int, col: int) -> int:
        """Linear position of grid point (row, col)."""
        nx, ny = self.nx, self.ny
        if self.scanModeFlags[2]:
            if self.scanModeFlags[3] and col % 2 == 1:
                row = ny - 1 - row
            return col*ny + row
        if self.scanModeFlags[3] and row % 2 == 1:
            col = nx - 1 - col
        return row*nx + col

    def position(self, linear: int):
        """Grid point (row, col) of a linear position."""
        nx, ny = self.nx, self.ny
        if self.scanModeFlags[2]:
            col, row = divmod(linear, ny)
            if self.scanModeFlags[3] and col % 2 == 1:
                row = ny - 1 - row
        else:
            row, col = divmod(linear, nx)
            if self.scanModeFlags[3] and row % 2 == 1:
                col = nx - 1 - col
        return row, col

    def scan_indices(self) -> NDArray:
        """Linear position of every grid point as a (ny, nx) array."""
        nx, ny = self.nx, self.ny
        rows, cols = np.indices((ny, nx))
        if self.scanModeFlags[2]:
            if self.scanModeFlags[3]:
                rows = np.where(cols % 2 == 1, ny-1-rows, rows)
            return cols*ny + rows
        if self.scanModeFlags[3]:
            cols = np.where(rows % 2 == 1, nx-1-cols, cols)
        return rows*nx + cols

    def cell_index(self, lat: float, lon: float):
        """
        Grid point (row, col) nearest to a point.

        Raises `OutOfBounds` when the point lies outside the grid.
        """
        frac_row = (lat - self.latitudeFirstGridpoint)/self.gridlengthYDirection
        dlon = ((lon - self.longitudeFirstGridpoint + 180.0) % 360.0) - 180.0
        frac_col = dlon/self.gridlengthXDirection
        if not (0.0 <= frac_row < self.ny and 0.0 <= frac_col < self.nx):
            raise OutOfBounds(f'Point ({lat}, {lon}) lies outside the grid.')
        row = min(int(np.floor(frac_row + 0.5)), self.ny - 1)
        col = min(int(np.floor(frac_col + 0.5)), self.nx - 1)
        return row, col

    def grid(self):
        """Return lats, lons (in degrees) of grid as (ny, nx) arrays."""
        lon1, lat1 = self.longitudeFirstGridpoint, self.latitudeFirstGridpoint
        lon2, lat2 = self.longitudeLastGridpoint, self.latitudeLastGridpoint
        dlon = self.gridlengthXDirection
        if lon2 < lon1 and dlon > 0: lon2 += 360.0
        if lon2 > lon1 and dlon < 0: lon2 -= 360.0
        lats = np.linspace(lat1,lat2,self.ny)
        lons = np.linspace(lon1,lon2,self.nx)
        lons, lats = np.meshgrid(lons,lats)
        return lats, lons


def set_auto_nans(value: bool):
    """
    Handle missing values in GRIB2 field data.

    Parameters
    ----------
    value
        If `True` [DEFAULT], grid points without data will be set to `np.nan`
        and if `False`, they will be set to `grib2jma.DEFAULT_FILL_VALUE`.
    """
    global _AUTO_NANS
    if isinstance(value,bool):
        _AUTO_NANS = value
    else:
        raise TypeError(f"Argument must be bool")
