"""Pydantic models for per-site extraction schemas.

A schema is a plain mapping of section name -> entry.  Each entry is validated
into a ``FieldConfig`` individually by the processor, so one malformed entry
only costs that entry.  Keys are accepted in the camelCase form used by the
site schema files (``tableSelector``, ``ignoreRows`` ...) or in snake_case.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TableType(str, Enum):
    """Shape of a table, which decides where its header axes are."""

    HORIZONTAL = "horizontal"  # key/value rows: column 0 label, column 1 value
    VERTICAL = "vertical"  # header row 0
    MATRIX = "matrix"  # header row 0 and header column 0


class ExtractionFunction(str, Enum):
    """Every extraction strategy an entry can name."""

    GET_ALL_DATA = "getalldata"
    GET_BY_SELECTORS = "getbyselectors"
    GET_ROW = "getrow"
    GET_COLUMN = "getcolumn"
    GET_CELL = "getcell"
    GET_CELL_SELECTOR = "getcellselector"
    GET_FORM_DATA = "getformdata"
    RUN_MIAMI_EXCEPTIONS = "runmiamiexceptions"


# Functions that read the located table (everything else queries the document directly)
TABLE_FUNCTIONS = frozenset(
    {
        ExtractionFunction.GET_ALL_DATA,
        ExtractionFunction.GET_ROW,
        ExtractionFunction.GET_COLUMN,
        ExtractionFunction.GET_CELL,
    }
)


def _lower_if_str(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


class IgnoreRows(BaseModel):
    """Rows to drop before a table is read."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    values: list[str | int | float] = Field(default_factory=list)
    columns: list[int] = Field(default_factory=list)
    case_sensitive: bool = Field(default=False, alias="caseSensitive")
    indices: list[int] = Field(default_factory=list)


class FieldConfig(BaseModel):
    """One schema entry: how to find a table (or elements) and what to read from it."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    table_selector: str | None = Field(default=None, alias="tableSelector")
    table_data: list[str | int | float] | None = Field(default=None, alias="tableData")
    table_type: TableType | None = Field(default=None, alias="tableType")
    table_selectors: dict[str, str] | None = Field(default=None, alias="tableSelectors")
    formdata: dict[str, str] | None = None
    ignore_rows: IgnoreRows | None = Field(default=None, alias="ignoreRows")
    constants: dict[str, Any] | None = None
    function: ExtractionFunction = ExtractionFunction.GET_ALL_DATA
    row_identifier: int | str | None = Field(default=None, alias="rowIdentifier")
    column_identifier: int | str | None = Field(default=None, alias="columnIdentifier")
    cell_selector: str | None = Field(default=None, alias="cellSelector")

    @field_validator("table_type", "function", mode="before")
    @classmethod
    def _case_insensitive(cls, value: Any) -> Any:
        return _lower_if_str(value)

    @property
    def shape(self) -> TableType:
        """Declared table type, defaulting to vertical when the entry omits it."""
        return self.table_type or TableType.VERTICAL

    @property
    def required_text(self) -> list[str] | None:
        """``tableData`` items as strings, or None when not configured."""
        if not self.table_data:
            return None
        return [str(item) for item in self.table_data]
