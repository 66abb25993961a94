"""Error taxonomy for schema-driven extraction.

A locator that finds nothing is not an error: it yields ``None`` and callers
treat that as "no data for this field".  The exceptions below are raised
inside a single schema entry and caught by the schema processor, which logs
them and skips that entry.
"""


class ExtractionError(Exception):
    """Base class for failures confined to one schema entry."""


class ConfigError(ExtractionError):
    """A schema entry lacks an identifier or selector its function requires."""


class StructuralError(ExtractionError):
    """The located table does not have the shape the entry declares."""
