"""
Classification of JMA GRIB2 products by parameter category and number.

Every supported field must resolve through `PRODUCT_TABLE`; a parameter
pair absent from the table is a decode error.  Adding a product is a
matter of adding one entry to the table (and, for a new kind, one member
to `ProductKind`).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ProductKind(Enum):
    """JMA products decoded by grib2jma."""
    RAINFALL_ANALYSIS = 'Analysed Rainfall (1 km mesh)'
    PRECIPITATION_FORECAST = 'Short-range Precipitation Forecast (1 km mesh)'
    SOIL_WETNESS_INDEX = 'Soil Water Index (1 km mesh)'
    SOIL_WETNESS_INDEX_FORECAST = 'Soil Water Index Forecast (1 km mesh)'
    LANDSLIDE_RISK = 'Landslide Warning Judgement Mesh'

    def __str__(self):
        return self.value


class SwiTank(Enum):
    """Tank of the soil water index tank model."""
    SOIL_WETNESS_INDEX = 0
    FIRST_TANK = 1
    SECOND_TANK = 2


@dataclass(frozen=True)
class ProductEntry:
    """
    Row of the product table.

    Attributes
    ----------
    analysis : ProductKind
        Product kind of analysis (current state) fields.
    forecast : ProductKind
        Product kind of forecast fields.
    signed_levels : bool
        `True` when the representative level values of Template 5.200 are
        signed (sign-magnitude) integers.
    tank : SwiTank, optional
        Soil water index tank carried by the field.
    """
    analysis: ProductKind
    forecast: ProductKind
    signed_levels: bool = False
    tank: Optional[SwiTank] = None

    def kind(self, is_forecast: bool) -> ProductKind:
        return self.forecast if is_forecast else self.analysis


# (parameterCategory, parameterNumber) -> ProductEntry.  Discipline 0.
PRODUCT_TABLE = {
    (1, 200): ProductEntry(ProductKind.RAINFALL_ANALYSIS,
                           ProductKind.PRECIPITATION_FORECAST),
    (1, 208): ProductEntry(ProductKind.SOIL_WETNESS_INDEX,
                           ProductKind.SOIL_WETNESS_INDEX_FORECAST,
                           tank=SwiTank.SOIL_WETNESS_INDEX),
    (1, 209): ProductEntry(ProductKind.SOIL_WETNESS_INDEX,
                           ProductKind.SOIL_WETNESS_INDEX_FORECAST,
                           tank=SwiTank.FIRST_TANK),
    (1, 210): ProductEntry(ProductKind.SOIL_WETNESS_INDEX,
                           ProductKind.SOIL_WETNESS_INDEX_FORECAST,
                           tank=SwiTank.SECOND_TANK),
    (1, 217): ProductEntry(ProductKind.LANDSLIDE_RISK,
                           ProductKind.LANDSLIDE_RISK,
                           signed_levels=True),
}


def get_product_entry(parmcat: int, parmnum: int) -> Optional[ProductEntry]:
    """
    Return the product table entry of a parameter.

    Parameters
    ----------
    parmcat
        Parameter Category value of a GRIB2 message.
    parmnum
        Parameter Number value of a GRIB2 message.

    Returns
    -------
    get_product_entry
        `ProductEntry` or `None` when the parameter is not a supported product.
    """
    return PRODUCT_TABLE.get((int(parmcat), int(parmnum)))


def _check_product_table(table):
    """Verify that the product table is well formed and covers every kind."""
    reachable = set()
    for key, entry in table.items():
        if len(key) != 2 or not all(isinstance(k, int) and 0 <= k <= 255 for k in key):
            raise RuntimeError(f'Invalid product table key {key!r}.')
        if not isinstance(entry.analysis, ProductKind) or not isinstance(entry.forecast, ProductKind):
            raise RuntimeError(f'Product table entry {key!r} does not name a ProductKind.')
        if entry.tank is not None and not isinstance(entry.tank, SwiTank):
            raise RuntimeError(f'Product table entry {key!r} has an invalid tank.')
        reachable.update((entry.analysis, entry.forecast))
    missing = set(ProductKind) - reachable
    if missing:
        raise RuntimeError('Product table does not cover: '+
                           ', '.join(sorted(k.name for k in missing)))

_check_product_table(PRODUCT_TABLE)
