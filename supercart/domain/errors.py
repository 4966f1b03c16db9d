# supercart/domain/errors.py


class ConflictError(Exception):
    """Duplicate entity or a lost optimistic-locking race."""


class AuthenticationError(Exception):
    """Bad credentials or an unusable token."""


class MalformedPriceError(ValueError):
    """A price snapshot holds a value that is not a number."""

    def __init__(self, market: str, value):
        self.market = market
        self.value = value
        super().__init__(f"Malformed price for {market!r}: {value!r}")
