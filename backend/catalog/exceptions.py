class CatalogUnavailableError(RuntimeError):
    """Raised when the catalog source cannot be loaded or parsed."""
    pass


class EntryNotFoundError(LookupError):
    """Raised when a catalog entry id does not exist."""
    pass
