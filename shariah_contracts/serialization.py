"""Serialization of contracts and engine results for audit logs and APIs."""

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from shariah_contracts.models.parsing import to_camel


def to_dict(obj: Any, camel_case: bool = False) -> dict:
    """Convert a contract or result object to a JSON-ready dictionary.

    Parameters
    ----------
    obj : Any
        A dataclass instance (contract terms, results, schedule entries).
    camel_case : bool
        Use the stored camelCase key style instead of snake_case.

    Returns
    -------
    dict
        Serialized dictionary.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        data = serialize_value(asdict(obj))
        contract_type = getattr(type(obj), "contract_type", None)
        if isinstance(contract_type, Enum):
            data["contract_type"] = contract_type.value
    elif isinstance(obj, dict):
        data = serialize_value(obj)
    else:
        return {"value": str(obj)}
    return _camelize(data) if camel_case else data


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def _camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {to_camel(k): _camelize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_camelize(v) for v in value]
    return value
