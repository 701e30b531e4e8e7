class RtrieError(Exception):
    """Base class for errors raised by the prefix index."""


class InvalidArgument(RtrieError, ValueError):
    """Raised when a required argument (key, value, id) is missing or empty."""


class StoreError(RtrieError, RuntimeError):
    """Raised when the backing store fails or a stored record can't be (de)serialized."""
