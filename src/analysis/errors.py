"""Exceptions raised while building check configurations."""


class ConfigurationError(ValueError):
    """Raised when a check configuration cannot be built.

    Covers unknown rule keys, invalid regular expressions in an allow-list and
    malformed configuration files. A check that fails with this error must not
    run at all.
    """
