"""Discriminate an opaque contract-terms value into one contract variant."""

from collections.abc import Mapping
from typing import Any

from shariah_contracts.models.contracts import CONTRACT_CLASSES, ContractTerms
from shariah_contracts.models.enums import ContractType, FailureReason
from shariah_contracts.models.parsing import parse_contract_terms, read_contract_type
from shariah_contracts.models.results import DerivationFailure

_CLASS_TO_TYPE = {cls: contract_type for contract_type, cls in CONTRACT_CLASSES.items()}


def classify(value: Any) -> ContractType | DerivationFailure:
    """Return the contract type of ``value``.

    Accepts a contract dataclass or a stored mapping. Never raises:
    ``None``, unknown objects and missing or unknown discriminants give an
    ``UNRECOGNIZED_CONTRACT`` failure.
    """
    if value is None:
        return DerivationFailure(FailureReason.UNRECOGNIZED_CONTRACT, "contract terms are absent")

    contract_type = _CLASS_TO_TYPE.get(type(value))
    if contract_type is not None:
        return contract_type

    if isinstance(value, Mapping):
        contract_type = read_contract_type(value)
        if contract_type is not None:
            return contract_type
        tag = value.get("contractType", value.get("contract_type"))
        return DerivationFailure(
            FailureReason.UNRECOGNIZED_CONTRACT,
            f"not a recognized contract: contractType={tag!r}",
        )

    return DerivationFailure(
        FailureReason.UNRECOGNIZED_CONTRACT,
        f"not a recognized contract: {type(value).__name__}",
    )


def coerce_contract(value: Any) -> ContractTerms | DerivationFailure:
    """Return typed contract terms for ``value``, parsing mappings."""
    contract_type = classify(value)
    if isinstance(contract_type, DerivationFailure):
        return contract_type
    if isinstance(value, Mapping):
        return parse_contract_terms(value)
    return value
