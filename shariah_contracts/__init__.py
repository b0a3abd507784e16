"""Islamic contract financial engine."""

from shariah_contracts.engine import (
    derive_investment_terms,
    derive_many,
    distribute_musharakah,
    explain_derivation,
)
from shariah_contracts.validation import validate_contract

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "derive_investment_terms",
    "derive_many",
    "distribute_musharakah",
    "explain_derivation",
    "validate_contract",
]
