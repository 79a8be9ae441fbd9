from typing import Optional

import pydantic
from astropy.table import QTable
from astropy.units import Quantity


class TableColumnInfo(pydantic.BaseModel):
    description: Optional[str] = None
    unit: Optional[str] = None
    dtype: Optional[str] = None


QTableHeader = dict[str, TableColumnInfo]


class RootQTableHeader(pydantic.RootModel):
    root: QTableHeader


def get_header_from_table(table: QTable, descriptions: Optional[dict[str, str]] = None) -> QTableHeader:
    """
    Builds a header describing every column of the table.

    Quantity columns report their unit, plain columns their description (or the one
    given in `descriptions`, which takes precedence).
    """
    descriptions = descriptions or {}
    header = {}
    for col, col_name in zip(table.itercols(), table.colnames):
        if isinstance(col, Quantity):
            header[col_name] = TableColumnInfo(
                description=descriptions.get(col_name),
                unit=col.unit.to_string(),
                dtype=col.dtype.name,
            )
        else:
            header[col_name] = TableColumnInfo(
                description=descriptions.get(col_name, col.description),
                unit=str(col.unit) if col.unit else None,
                dtype=col.dtype.name,
            )
    return header


def header_to_json(header: QTableHeader) -> str:
    return RootQTableHeader(root=header).model_dump_json(indent=4)


def header_from_json(data: str) -> QTableHeader:
    return RootQTableHeader.model_validate_json(data).root
