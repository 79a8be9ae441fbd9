from .qtable_utils import QTableHeader, TableColumnInfo

__all__ = [
    "TableColumnInfo",
    "QTableHeader",
]
