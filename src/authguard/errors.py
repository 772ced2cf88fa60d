"""Error types raised by authguard."""


class InvalidConfiguration(ValueError):
    """Policy settings are outside their allowed domain."""


class TransientLookupFailure(RuntimeError):
    """The breach corpus could not be queried (network, timeout or bad response)."""
