"""Functions for retrieving data from GRIB2 code tables."""

from functools import lru_cache
from importlib import import_module
from typing import Optional, Union, List

from .section0 import *
from .section1 import *
from .section3 import *
from .section4 import *
from .section5 import *
from .section6 import *
from .originating_centers import *
from .products import ProductKind, SwiTank, ProductEntry, PRODUCT_TABLE, get_product_entry

GRIB2_DISCIPLINES = [0]

def get_table(table: str, expand: bool=False) -> dict:
    """
    Return GRIB2 code table as a dictionary.

    Parameters
    ----------
    table
        Code table number (e.g. '1.0').

        NOTE: Code table '4.1' requires a 3rd value representing the product
        discipline (e.g. '4.1.0').
    expand
        If `True`, expand output dictionary wherever keys are a range.

    Returns
    -------
    get_table
        GRIB2 code table as a dictionary.
    """
    if len(table) == 3 and table == '4.1':
        raise Exception('GRIB2 Code Table 4.1 requires a 3rd value representing the discipline.')
    if len(table) == 3 and table.startswith('4.2'):
        raise Exception('Use function get_varinfo_from_table() for GRIB2 Code Table 4.2')
    try:
        tbl = globals()['table_'+table.replace('.','_')]
        if expand:
            _tbl = {}
            for k,v in tbl.items():
                if '-' in k:
                    irng = [int(i) for i in k.split('-')]
                    for i in range(irng[0],irng[1]+1):
                        _tbl[str(i)] = v
                else:
                    _tbl[k] = v
            tbl = _tbl
        return tbl
    except(KeyError):
        return {}


def get_value_from_table(
    value: Union[int, str],
    table: str,
    expand: bool = False,
) -> Optional[Union[float, int, str]]:
    """
    Return the definition given a GRIB2 code table.

    Parameters
    ----------
    value
        Code table value.
    table
        Code table number.
    expand
        If `True`, expand output dictionary where keys are a range.

    Returns
    -------
    get_value_from_table
        Table value or `None` if not found.
    """
    tbl = get_table(table,expand=expand)
    value = str(value)
    try:
        return tbl[value]
    except(KeyError):
        for k in tbl.keys():
            if '-' in k:
                bounds = k.split('-')
                if int(bounds[0]) <= int(value) <= int(bounds[1]):
                    return tbl[k]
        return None


@lru_cache(maxsize=None)
def get_varinfo_from_table(
    discipline: Union[int, str],
    parmcat: Union[int, str],
    parmnum: Union[int, str],
) -> List[str]:
    """
    Return the GRIB2 variable information.

    NOTE: This functions allows for all arguments to be converted to a string
    type if arguments are integer.

    Parameters
    ----------
    discipline
        Discipline code value of a GRIB2 message.
    parmcat
        Parameter Category value of a GRIB2 message.
    parmnum
        Parameter Number value of a GRIB2 message.

    Returns
    -------
    full_name
        Full name of the GRIB2 variable. "Unknown" if variable is not found.
    units
        Units of the GRIB2 variable. "Unknown" if variable is not found.
    shortName
        Abbreviated name of the GRIB2 variable. "Unknown" if variable is not
        found.
    """
    try:
        module = import_module(f'.section4_discipline{discipline}', __name__)
        return getattr(module, f'table_4_2_{discipline}_{parmcat}')[str(parmnum)]
    except(ImportError,AttributeError,KeyError):
        return ['Unknown','Unknown','Unknown']


@lru_cache(maxsize=None)
def get_shortnames() -> List[str]:
    """
    Return the shortNames of all supported products.

    Returns
    -------
    get_shortnames
        list of GRIB2 shortNames.
    """
    return sorted({get_varinfo_from_table(0,*key)[2] for key in PRODUCT_TABLE})
