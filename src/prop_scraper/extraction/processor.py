"""Run a site schema against a parsed document.

For each schema entry, in declaration order:

  1. Validate the raw entry into a ``FieldConfig``.
  2. Locate its table (if any) and wrap it in a ``TableInterpreter``.
  3. Merge the entry's ``constants`` into the accumulator.
  4. Run the entry's ``ExtractionFunction`` and merge its output.

Merges are last-write-wins, so later entries overwrite earlier ones and a
function's output overwrites its own constants.  Failures are contained to
the entry that caused them: the error is logged and recorded in
``ExtractionResult.errors``, and the remaining entries still run.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from bs4 import Tag
from pydantic import BaseModel, Field, ValidationError

from prop_scraper.extraction.dom import normalized_text, select_one, text_of
from prop_scraper.extraction.errors import ConfigError
from prop_scraper.extraction.flatten import flatten
from prop_scraper.extraction.interpreter import TableInterpreter
from prop_scraper.extraction.locator import locate_table
from prop_scraper.extraction.miami_dade import extract_miami_dade
from prop_scraper.extraction.models import TABLE_FUNCTIONS, ExtractionFunction, FieldConfig

logger = logging.getLogger(__name__)

Handler = Callable[[FieldConfig, TableInterpreter, Tag], dict[str, Any] | None]


class ExtractionResult(BaseModel):
    """Merged output of one schema run plus the sections that failed."""

    data: dict[str, Any] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)

    def flat(self) -> dict[str, Any]:
        """Return ``data`` flattened to single-level keys."""
        return flatten(self.data)


# ─── Form Values ─────────────────────────────────────────────────────────────


def _select_value(select: Tag) -> str:
    """Value of a <select>: the selected option, else the first option.

    A single-select marked up with several ``selected`` options keeps the last
    one; a ``multiple`` select reports its first selected option.
    """
    options = select.find_all("option")
    if not options:
        return ""
    selected = [opt for opt in options if opt.has_attr("selected")]
    if not selected:
        chosen = options[0]
    else:
        chosen = selected[0] if select.has_attr("multiple") else selected[-1]
    return chosen.get("value", normalized_text(chosen))


def _radio_group_value(doc: Tag, name: str | None) -> str | None:
    """Value of the checked radio button sharing *name*, or None if none is checked."""
    if not name:
        return None
    for radio in doc.find_all("input", attrs={"name": name}):
        if radio.get("type", "").lower() == "radio" and radio.has_attr("checked"):
            return radio.get("value", "on")
    return None


def read_form_value(doc: Tag, element: Tag) -> str | bool | None:
    """Return the effective value of a form control (or the text of any other element)."""
    if element.name == "select":
        return _select_value(element)
    if element.name == "input":
        input_type = element.get("type", "text").lower()
        if input_type == "checkbox":
            return element.has_attr("checked")
        if input_type == "radio":
            return _radio_group_value(doc, element.get("name"))
        return element.get("value", "")
    return text_of(element)


# ─── Extraction Handlers ─────────────────────────────────────────────────────


def _get_all_data(_config: FieldConfig, parser: TableInterpreter, _doc: Tag) -> dict[str, Any] | None:
    return parser.all_data()


def _get_by_selectors(config: FieldConfig, _parser: TableInterpreter, doc: Tag) -> dict[str, Any]:
    if not config.table_selectors:
        raise ConfigError("tableSelectors is required for getbyselectors")
    result: dict[str, Any] = {}
    for key, selector in config.table_selectors.items():
        element = select_one(doc, selector)
        result[key] = normalized_text(element) if element is not None else None
    return result


def _get_row(config: FieldConfig, parser: TableInterpreter, _doc: Tag) -> dict[str, Any]:
    if config.row_identifier is None:
        raise ConfigError("rowIdentifier is required for getrow")
    return {"rowData": parser.row_data(config.row_identifier)}


def _get_column(config: FieldConfig, parser: TableInterpreter, _doc: Tag) -> dict[str, Any]:
    if config.column_identifier is None:
        raise ConfigError("columnIdentifier is required for getcolumn")
    return {"columnData": parser.column_data(config.column_identifier)}


def _get_cell(config: FieldConfig, parser: TableInterpreter, _doc: Tag) -> dict[str, Any]:
    if config.row_identifier is None or config.column_identifier is None:
        raise ConfigError("rowIdentifier and columnIdentifier are required for getcell")
    return {"cellValue": parser.cell_by_header(config.row_identifier, config.column_identifier)}


def _get_cell_selector(config: FieldConfig, _parser: TableInterpreter, doc: Tag) -> dict[str, Any]:
    if not config.cell_selector:
        raise ConfigError("cellSelector is required for getcellselector")
    element = select_one(doc, config.cell_selector)
    return {"cellValue": normalized_text(element) if element is not None else None}


def _get_form_data(config: FieldConfig, _parser: TableInterpreter, doc: Tag) -> dict[str, Any]:
    if not config.formdata:
        raise ConfigError("formdata is required for getformdata")
    result: dict[str, Any] = {}
    for key, selector in config.formdata.items():
        element = select_one(doc, selector)
        if element is None:
            logger.warning("Form element not found for %s (selector %r)", key, selector)
            result[key] = None
            continue
        result[key] = read_form_value(doc, element)
    return result


def _run_miami_exceptions(_config: FieldConfig, _parser: TableInterpreter, doc: Tag) -> dict[str, Any] | None:
    return extract_miami_dade(doc)


HANDLERS: dict[ExtractionFunction, Handler] = {
    ExtractionFunction.GET_ALL_DATA: _get_all_data,
    ExtractionFunction.GET_BY_SELECTORS: _get_by_selectors,
    ExtractionFunction.GET_ROW: _get_row,
    ExtractionFunction.GET_COLUMN: _get_column,
    ExtractionFunction.GET_CELL: _get_cell,
    ExtractionFunction.GET_CELL_SELECTOR: _get_cell_selector,
    ExtractionFunction.GET_FORM_DATA: _get_form_data,
    ExtractionFunction.RUN_MIAMI_EXCEPTIONS: _run_miami_exceptions,
}


# ─── Schema Processing ───────────────────────────────────────────────────────


def _run_entry(config: FieldConfig, doc: Tag) -> dict[str, Any] | None:
    table = locate_table(doc, selector=config.table_selector, required_text=config.required_text)
    if table is None and config.function in TABLE_FUNCTIONS:
        logger.warning("Table not found (selector=%r, tableData=%r)", config.table_selector, config.table_data)
    parser = TableInterpreter(table, config.shape, config.ignore_rows)
    return HANDLERS[config.function](config, parser, doc)


def extract(schema: Mapping[str, Any], doc: Tag) -> ExtractionResult:
    """Run every schema entry against *doc* and return the merged result."""
    result = ExtractionResult()

    for section, raw in schema.items():
        try:
            config = raw if isinstance(raw, FieldConfig) else FieldConfig.model_validate(raw)
        except ValidationError as exc:
            logger.error("Invalid config for %s: %s", section, exc)
            result.errors[section] = f"invalid config: {exc.error_count()} validation error(s)"
            continue

        if config.constants:
            result.data.update(config.constants)

        try:
            output = _run_entry(config, doc)
        except ConfigError as exc:
            logger.error("Skipping %s: %s", section, exc)
            result.errors[section] = str(exc)
            continue
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.error("Error processing %s: %s", section, exc)
            result.errors[section] = f"{type(exc).__name__}: {exc}"
            continue

        if output:
            result.data.update(output)
        logger.debug("Section %s contributed %d keys", section, len(output or {}))

    logger.info("Schema produced %d keys (%d section errors)", len(result.data), len(result.errors))
    return result


def process_schema(schema: Mapping[str, Any], doc: Tag) -> dict[str, Any]:
    """Run *schema* against *doc* and return the merged (still nested) data."""
    return extract(schema, doc).data


# ─── Schema Validation ───────────────────────────────────────────────────────


def _entry_problems(section: str, config: FieldConfig) -> list[str]:
    problems: list[str] = []
    func = config.function
    if config.table_type is None and func in TABLE_FUNCTIONS:
        problems.append(f"{section}: tableType is missing (defaults to vertical)")
    if func in TABLE_FUNCTIONS and not (config.table_selector or config.table_data):
        problems.append(f"{section}: {func.value} needs tableSelector or tableData")
    if func in (ExtractionFunction.GET_ROW, ExtractionFunction.GET_CELL) and config.row_identifier is None:
        problems.append(f"{section}: {func.value} needs rowIdentifier")
    if func in (ExtractionFunction.GET_COLUMN, ExtractionFunction.GET_CELL) and config.column_identifier is None:
        problems.append(f"{section}: {func.value} needs columnIdentifier")
    if func == ExtractionFunction.GET_BY_SELECTORS and not config.table_selectors:
        problems.append(f"{section}: getbyselectors needs tableSelectors")
    if func == ExtractionFunction.GET_CELL_SELECTOR and not config.cell_selector:
        problems.append(f"{section}: getcellselector needs cellSelector")
    if func == ExtractionFunction.GET_FORM_DATA and not config.formdata:
        problems.append(f"{section}: getformdata needs formdata")
    return problems


def validate_schema(schema: Mapping[str, Any]) -> list[str]:
    """Return human-readable problems with *schema*; an empty list means it looks runnable."""
    problems: list[str] = []
    for section, raw in schema.items():
        try:
            config = raw if isinstance(raw, FieldConfig) else FieldConfig.model_validate(raw)
        except ValidationError as exc:
            for err in exc.errors():
                loc = ".".join(str(part) for part in err["loc"]) or "entry"
                problems.append(f"{section}: {loc}: {err['msg']}")
            continue
        problems.extend(_entry_problems(section, config))
    return problems
