"""Custom exception hierarchy for shariah-contracts."""


class ShariahContractsError(Exception):
    """Base exception for all shariah-contracts errors."""


class ConfigurationError(ShariahContractsError):
    """Raised when engine policy configuration is invalid."""


class InvalidContractTermsError(ShariahContractsError):
    """Raised when contract terms cannot be used for a computation."""


class InvalidNumericInputError(InvalidContractTermsError):
    """Raised when a required numeric field is absent, zero or negative.

    Calculators convert this into a failure value before returning.
    """

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(f"{field_name}: {message}")
        self.field_name = field_name


class UnsupportedContractError(ShariahContractsError):
    """Raised when a known contract type has no registered handler."""


class InvalidRatioError(InvalidContractTermsError):
    """Raised when a percentage pair does not form a 100% split."""
