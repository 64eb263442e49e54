"""Export error hierarchy."""


class ExportError(Exception):
    """Base class for export failures."""


class StoreOpenError(ExportError):
    """Store cannot be opened read-only. Fatal for the whole run."""


class OutputCreateError(ExportError):
    """Destination file cannot be created or its header written. Fatal."""


class RecordDecodeError(ExportError):
    """Stored payload is not a valid record. Aborts the current scan."""
