"""Public entry points of the contract financial engine.

All entry points are pure: they read their input, allocate fresh result
values and keep no state between calls, so they may be called from any
number of threads at once. Expected bad input comes back as a
``DerivationFailure`` value; nothing here raises for malformed contracts.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from shariah_contracts.calculators import DERIVERS
from shariah_contracts.classifier import coerce_contract
from shariah_contracts.config import EngineConfig
from shariah_contracts.distribution import distribute_musharakah_terms
from shariah_contracts.exceptions import UnsupportedContractError
from shariah_contracts.explanation import describe
from shariah_contracts.models.contracts import ContractTerms, MusharakahTerms
from shariah_contracts.models.enums import FailureReason
from shariah_contracts.models.results import (
    Derivation,
    DerivationFailure,
    InvestmentTerms,
    MusharakahDistribution,
)

logger = logging.getLogger(__name__)


def _derive(
    contract_terms: Any,
    config: EngineConfig | None,
) -> tuple[ContractTerms | None, Derivation | DerivationFailure]:
    terms = coerce_contract(contract_terms)
    if isinstance(terms, DerivationFailure):
        logger.info("No derivable terms: %s", terms.detail)
        return None, terms
    try:
        derive = DERIVERS[terms.contract_type]
    except KeyError:
        raise UnsupportedContractError(f"no calculator registered for {terms.contract_type!r}") from None
    return terms, derive(terms, config)


def derive_investment_terms(
    contract_terms: Any,
    config: EngineConfig | None = None,
) -> InvestmentTerms | DerivationFailure:
    """Derive publishable investment terms from contract terms.

    Parameters
    ----------
    contract_terms : Any
        A contract dataclass or a stored contract mapping.
    config : EngineConfig | None
        Policy configuration; the default is used when omitted.

    Returns
    -------
    InvestmentTerms | DerivationFailure
        Derived terms, or a failure meaning "no derivable terms".
    """
    _, derivation = _derive(contract_terms, config)
    if isinstance(derivation, DerivationFailure):
        return derivation
    return derivation.terms


def derive_with_details(
    contract_terms: Any,
    config: EngineConfig | None = None,
) -> Derivation | DerivationFailure:
    """Like ``derive_investment_terms`` but keep the intermediate figures."""
    return _derive(contract_terms, config)[1]


def explain_derivation(
    contract_terms: Any,
    config: EngineConfig | None = None,
) -> str | DerivationFailure:
    """Explain how the terms for ``contract_terms`` are derived.

    The figures in the text are those ``derive_investment_terms`` returns
    for the same input and config.
    """
    terms, derivation = _derive(contract_terms, config)
    if isinstance(derivation, DerivationFailure):
        return derivation
    return describe(terms, derivation, config)


def distribute_musharakah(
    contract_terms: Any,
    actual_profit: Any = 0,
    actual_loss: Any = 0,
    config: EngineConfig | None = None,
) -> MusharakahDistribution | DerivationFailure:
    """Distribute a reporting period's profit and loss between partners.

    Only Musharakah contracts are accepted; any other input yields an
    ``UNRECOGNIZED_CONTRACT`` failure.
    """
    terms = coerce_contract(contract_terms)
    if isinstance(terms, DerivationFailure):
        return terms
    if not isinstance(terms, MusharakahTerms):
        return DerivationFailure(
            FailureReason.UNRECOGNIZED_CONTRACT,
            f"not a musharakah contract: {terms.contract_type.value}",
            terms.contract_type,
        )
    return distribute_musharakah_terms(terms, actual_profit, actual_loss, config)


def derive_many(
    contracts: Iterable[Any],
    config: EngineConfig | None = None,
) -> list[InvestmentTerms | DerivationFailure]:
    """Derive terms for many contracts, in input order.

    Calls are independent; callers wanting parallelism can map
    ``derive_investment_terms`` over their own executor instead.
    """
    results = [derive_investment_terms(contract, config) for contract in contracts]
    failed = sum(1 for r in results if isinstance(r, DerivationFailure))
    logger.info("Derived terms for %d contracts (%d without derivable terms)", len(results), failed)
    return results


__all__ = [
    "derive_investment_terms",
    "derive_many",
    "derive_with_details",
    "distribute_musharakah",
    "explain_derivation",
]
