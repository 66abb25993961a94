"""Read a located table according to its declared shape.

Shapes (see ``TableType``):

  horizontal  -- no header row; each row is ``label | value``
  vertical    -- row 0 holds column labels, later rows are records
  matrix      -- row 0 holds column labels AND column 0 holds row labels

Row filtering (``IgnoreRows``) is applied once at construction, so every
read below works on the filtered rows: ignoring index 0 of a 3-row table
leaves a 2-row table for all functions.

Every read returns ``None`` rather than raising when the table is missing or
lacks the expected axis; the schema processor relies on that to keep
extracting sibling sections.
"""

import logging

from bs4 import Tag

from prop_scraper.extraction.dom import normalized_text, row_cells, table_rows, text_of
from prop_scraper.extraction.models import IgnoreRows, TableType

logger = logging.getLogger(__name__)

NOT_FOUND = -1
MISSING_CELL = "N/A"

ROW = "row"
COLUMN = "column"


class TableInterpreter:
    """Shape-aware reader over one table's (filtered) rows."""

    def __init__(self, table: Tag | None, table_type: TableType, ignore_rows: IgnoreRows | None = None):
        self.table = table
        self.table_type = table_type
        self.ignore_rows = ignore_rows or IgnoreRows()
        self.rows: list[list[Tag]] = self._filter_rows(table_rows(table)) if table is not None else []

    # ─── Row Filtering ───────────────────────────────────────────────────────

    def _ignored_by_value(self, cells: list[Tag]) -> bool:
        """True if any configured column holds one of the configured values."""
        cfg = self.ignore_rows
        if not cfg.values or not cfg.columns:
            return False

        def norm(text: str) -> str:
            return text if cfg.case_sensitive else text.lower()

        targets = {norm(str(value)) for value in cfg.values}
        for col in cfg.columns:
            if 0 <= col < len(cells) and norm(normalized_text(cells[col])) in targets:
                logger.debug("Value match in column %d: %r", col, normalized_text(cells[col]))
                return True
        return False

    def _filter_rows(self, rows: list[Tag]) -> list[list[Tag]]:
        indices = set(self.ignore_rows.indices)
        kept: list[list[Tag]] = []
        for idx, row in enumerate(rows):
            cells = row_cells(row)
            if idx in indices:
                logger.debug("Row %d ignored by index", idx)
                continue
            if self._ignored_by_value(cells):
                logger.debug("Row %d ignored by value", idx)
                continue
            kept.append(cells)
        logger.debug("Rows kept after filtering: %d of %d", len(kept), len(rows))
        return kept

    # ─── Coordinate Access ───────────────────────────────────────────────────

    def cell_at(self, row: int, col: int) -> str | None:
        """Return the trimmed text of the cell at (row, col), or None if out of range."""
        if row < 0 or col < 0 or row >= len(self.rows) or col >= len(self.rows[row]):
            logger.debug("No cell at [%d, %d]", row, col)
            return None
        return text_of(self.rows[row][col])

    def index_by_text(self, text: str | int, axis: str = ROW) -> int:
        """Return the first row (by column-0 text) or column (by header-row text) matching *text*.

        Comparison is exact on trimmed, lowercased text.  Returns -1 when nothing matches.
        """
        needle = str(text).strip().lower()
        if axis == ROW:
            candidates = [cells[0] if cells else None for cells in self.rows]
        else:
            candidates = list(self.rows[0]) if self.rows else []
        for idx, cell in enumerate(candidates):
            if cell is not None and text_of(cell).lower() == needle:
                return idx
        return NOT_FOUND

    def _resolve(self, identifier: int | str, axis: str) -> int:
        """Ints are absolute indices; anything else is looked up by header text."""
        if isinstance(identifier, int):
            return identifier
        return self.index_by_text(identifier, axis)

    # ─── Header-Based Access ─────────────────────────────────────────────────

    def cell_by_header(self, row_header: int | str, col_header: int | str | None = None) -> str | None:
        """Return one cell addressed by header text (or absolute index), interpreted per table type."""
        if self.table is None:
            logger.error("Cannot read cell %r: table not found", row_header)
            return None

        if self.table_type == TableType.HORIZONTAL:
            row = self._resolve(row_header, ROW)
            return self.cell_at(row, 1)

        if self.table_type == TableType.VERTICAL:
            col = self._resolve(row_header, COLUMN)
            return self.cell_at(1, col)

        # Matrix: both axes are required
        if col_header is None:
            logger.error("Column header required for matrix table (row header %r)", row_header)
            return None
        return self.cell_at(self._resolve(row_header, ROW), self._resolve(col_header, COLUMN))

    def row_data(self, identifier: int | str) -> list[str] | None:
        """Return the texts along one row; matrix tables skip the row label."""
        row = self._resolve(identifier, ROW)
        if row < 0 or row >= len(self.rows):
            logger.warning("Row %r not found", identifier)
            return None
        start = 1 if self.table_type == TableType.MATRIX else 0
        return [text_of(cell) for cell in self.rows[row][start:]]

    def column_data(self, identifier: int | str) -> list[str] | None:
        """Return the texts down one column; vertical tables skip the header row."""
        col = self._resolve(identifier, COLUMN)
        if col < 0:
            logger.warning("Column %r not found", identifier)
            return None
        start = 1 if self.table_type == TableType.VERTICAL else 0
        return [text_of(cells[col]) if col < len(cells) else "" for cells in self.rows[start:]]

    # ─── Bulk Extraction ─────────────────────────────────────────────────────

    def all_data(self) -> dict[str, str] | None:
        """Return every value in the table keyed by its header labels.

        horizontal: ``{label: value}``
        vertical:   ``{"{header}_{n}": value}`` for the n-th record (0-based)
        matrix:     ``{"{rowLabel}_{colLabel}": value}``
        """
        if self.table is None:
            logger.error("No table found")
            return None

        if self.table_type == TableType.HORIZONTAL:
            result: dict[str, str] = {}
            for cells in self.rows:
                if len(cells) >= 2:
                    result[normalized_text(cells[0])] = normalized_text(cells[1])
            return result

        if self.table_type == TableType.VERTICAL:
            if not self.rows:
                return {}
            headers = [normalized_text(cell) for cell in self.rows[0]]
            result = {}
            for record, cells in enumerate(self.rows[1:]):
                for col, header in enumerate(headers):
                    result[f"{header}_{record}"] = normalized_text(cells[col]) if col < len(cells) else MISSING_CELL
            return result

        # Matrix needs a header row plus at least one data row
        if len(self.rows) <= 1:
            return {}
        col_labels = [normalized_text(cell) for cell in self.rows[0][1:]]
        result = {}
        for cells in self.rows[1:]:
            row_label = normalized_text(cells[0]) if cells else ""
            for offset, col_label in enumerate(col_labels, start=1):
                result[f"{row_label}_{col_label}"] = normalized_text(cells[offset]) if offset < len(cells) else MISSING_CELL
        return result
