"""Build typed contract terms from stored mappings.

The persistence layer stores contract terms as documents with camelCase
keys (``contractType``, ``party1Capital``, ...). Snake_case keys are
accepted as well. Unknown keys are ignored.
"""

import types
import typing
from collections.abc import Mapping
from dataclasses import MISSING, fields
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from shariah_contracts.exceptions import InvalidContractTermsError, InvalidNumericInputError
from shariah_contracts.models.contracts import CONTRACT_CLASSES, ContractTerms
from shariah_contracts.models.enums import ContractType, FailureReason
from shariah_contracts.models.results import DerivationFailure
from shariah_contracts.numeric import to_decimal, to_int


def to_camel(name: str) -> str:
    """Convert a snake_case field name to the stored camelCase key."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def read_contract_type(data: Any) -> ContractType | None:
    """Return the discriminant of a stored mapping, or None."""
    if not isinstance(data, Mapping):
        return None
    tag = data.get("contractType", data.get("contract_type"))
    if isinstance(tag, ContractType):
        return tag
    if not isinstance(tag, str):
        return None
    try:
        return ContractType(tag.strip().lower())
    except ValueError:
        return None


def parse_contract_terms(data: Any) -> ContractTerms | DerivationFailure:
    """Build the typed variant for a stored contract mapping.

    Parameters
    ----------
    data : Any
        Mapping carrying a ``contractType`` discriminant.

    Returns
    -------
    ContractTerms | DerivationFailure
        The contract dataclass, or a failure describing why none could be
        built.
    """
    contract_type = read_contract_type(data)
    if contract_type is None:
        tag = data.get("contractType", data.get("contract_type")) if isinstance(data, Mapping) else None
        return DerivationFailure(
            FailureReason.UNRECOGNIZED_CONTRACT,
            f"not a recognized contract: contractType={tag!r}",
        )

    cls = CONTRACT_CLASSES[contract_type]
    hints = typing.get_type_hints(cls)
    values: dict[str, Any] = {}

    for f in fields(cls):
        raw = data.get(f.name, data.get(to_camel(f.name)))
        required = f.default is MISSING and f.default_factory is MISSING
        if raw is None:
            if required:
                return DerivationFailure(
                    FailureReason.MISSING_FIELD,
                    f"{to_camel(f.name)} is required",
                    contract_type,
                )
            continue
        try:
            values[f.name] = _convert(raw, hints[f.name], f.name)
        except InvalidNumericInputError as e:
            return DerivationFailure(FailureReason.INVALID_NUMERIC_INPUT, str(e), contract_type)
        except InvalidContractTermsError as e:
            return DerivationFailure(FailureReason.INVALID_FIELD, str(e), contract_type)

    return cls(**values)


def _convert(value: Any, annotation: Any, field_name: str) -> Any:
    """Convert a stored value to the field's declared type."""
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        annotation = next(arg for arg in typing.get_args(annotation) if arg is not type(None))

    if annotation is Decimal:
        return to_decimal(value, field_name)
    if annotation is bool:
        if not isinstance(value, bool):
            raise InvalidContractTermsError(f"{field_name}: must be true or false, got {value!r}")
        return value
    if annotation is int:
        return to_int(value, field_name)
    if annotation is date:
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value))
        except ValueError as e:
            raise InvalidContractTermsError(f"{field_name}: not a YYYY-MM-DD date: {value!r}") from e
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        try:
            return annotation(value)
        except ValueError as e:
            raise InvalidContractTermsError(f"{field_name}: unknown value {value!r}") from e
    return str(value)
