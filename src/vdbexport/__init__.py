"""vdbexport - extract chain trade records from an embedded store into CSV."""

__version__ = "0.1.0"
