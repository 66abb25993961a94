"""Schema-driven HTML table extraction.

Submodules:
  errors       -- ConfigError / StructuralError taxonomy
  models       -- FieldConfig / IgnoreRows Pydantic models, TableType and ExtractionFunction enums
  dom          -- BeautifulSoup helpers (parsing, text normalisation, table rows and cells)
  locator      -- find the one table a schema entry refers to
  interpreter  -- read a located table according to its declared shape
  processor    -- run a whole schema against a document and merge the results
  flatten      -- collapse nested results into underscore-joined keys
  miami_dade   -- hard-coded extraction for the Miami-Dade property appraiser layout
"""

from prop_scraper.extraction.flatten import flatten
from prop_scraper.extraction.processor import ExtractionResult, extract, process_schema, validate_schema

__all__ = ["ExtractionResult", "extract", "flatten", "process_schema", "validate_schema"]
