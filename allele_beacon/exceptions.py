"""Exceptions raised by the allele Beacon data contract layer."""


class AlleleBeaconError(Exception):
    """Base exception for allele Beacon related errors."""
    pass


class ConfigurationError(AlleleBeaconError):
    """Exception raised when a configuration file cannot be loaded."""
    pass


class ValidationFailed(AlleleBeaconError):
    """Exception raised when a message is rejected by validation.

    Carries the complete list of errors found (field and consistency errors).
    """

    def __init__(self, errors: tuple):
        self.errors = tuple(errors)
        super().__init__(
            f"Validation failed with {len(self.errors)} error(s): "
            + "; ".join(str(e) for e in self.errors)
        )
