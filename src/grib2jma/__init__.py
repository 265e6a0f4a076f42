from ._grib2jma import *
from ._grib2jma import __doc__
from ._grib2jma import _Grib2Field
from .errors import *
from .tables import ProductKind, SwiTank

__all__ = ['open', 'decode', 'show_config', 'set_auto_nans',
           'tables', 'templates', 'utils', 'packing', 'unpack', 'errors',
           'Message', 'Section', 'split_sections',
           'Grib2Field', '_Grib2Field', 'Grib2GridDef', 'Grib2Point',
           'ProductKind', 'SwiTank', 'DEFAULT_FILL_VALUE']
__all__ += errors.__all__

try:
    from importlib.metadata import version, PackageNotFoundError
    __version__ = version('grib2jma')
except(PackageNotFoundError):
    __version__ = 'unknown'

def show_config():
    """Print grib2jma configuration information."""
    print(f'grib2jma version {__version__} Configuration:\n')
    print(f'\tGrid Definition Templates: {sorted(templates._gdt_by_gdtn)}')
    print(f'\tProduct Definition Templates: {sorted(templates._pdt_by_pdtn)}')
    print(f'\tData Representation Templates: {sorted(templates._drt_by_drtn)}')
    print(f'')
    print(f'\tProducts (discipline 0):')
    for (parmcat, parmnum), entry in tables.PRODUCT_TABLE.items():
        shortname = tables.get_varinfo_from_table(0, parmcat, parmnum)[2]
        print(f'\t  {parmcat:3d} {parmnum:3d} {shortname:6s} {entry.analysis} / {entry.forecast}')
