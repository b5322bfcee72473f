"""Custom exceptions for harsnip package."""


class HarsnipError(Exception):
    """Base exception class for all harsnip errors."""


class ConfigurationError(HarsnipError):
    """Raised when a target or client definition cannot be registered.

    These are programmer errors: missing info fields, duplicate keys, or a
    target without clients. The registry is left unchanged.
    """


class InputError(HarsnipError):
    """Raised when top-level input is neither a HAR log nor a request object."""


class HARParseError(HarsnipError):
    """Raised when HAR content cannot be parsed."""
