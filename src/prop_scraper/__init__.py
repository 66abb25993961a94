"""Schema-driven table scraping for government property-record pages.

Subpackages / modules:
  extraction  -- table locator, shape interpreter, schema processor, flattener
  schemas     -- built-in per-site schemas
  sites       -- URL -> schema routing
  export      -- TSV rendering and CSV export sink
  cli         -- command-line entry point
  web         -- FastAPI preview / export service
"""
