class StoreError(Exception):
    """A database round-trip failed; nothing was applied."""

class NotFoundError(LookupError):
    pass
