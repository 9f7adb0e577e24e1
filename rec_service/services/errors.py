"""Store errors."""


class StoreError(Exception):
    """A backing store could not be read or written (e.g. malformed JSON file)."""
