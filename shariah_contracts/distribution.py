"""Profit and loss distribution between contracting parties.

Profits follow the negotiated ratios. Musharakah losses follow the
capital ratio, whatever loss shares the contract stores; a stored pair
that disagrees with capital is reported back as a discrepancy so it can
be corrected upstream.
"""

from __future__ import annotations

import logging
from decimal import Decimal, DecimalException
from typing import Any

from shariah_contracts.config import DEFAULT_CONFIG, EngineConfig
from shariah_contracts.exceptions import InvalidNumericInputError, InvalidRatioError
from shariah_contracts.models.contracts import MudarabahTerms, MusharakahTerms
from shariah_contracts.models.enums import ContractType, DistributionBasis, FailureReason
from shariah_contracts.models.results import (
    DerivationFailure,
    DistributionResult,
    LossShareDiscrepancy,
    MudarabahDistribution,
    MusharakahDistribution,
    PartyOutcome,
)
from shariah_contracts.numeric import (
    HUNDRED,
    numeric_error_detail,
    require_non_negative,
    require_percentage,
    require_positive,
    round_money,
    round_percent,
    sums_to_hundred,
    to_decimal,
)
from shariah_contracts.serialization import to_dict

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def capital_ratio(terms: MusharakahTerms) -> tuple[Decimal, Decimal]:
    """Each party's share of total capital, as unrounded percentages."""
    party1 = require_positive(terms.party1_capital, "party1_capital")
    party2 = require_positive(terms.party2_capital, "party2_capital")
    total = party1 + party2
    return party1 * HUNDRED / total, party2 * HUNDRED / total


def find_loss_share_discrepancy(
    terms: MusharakahTerms,
    config: EngineConfig | None = None,
) -> LossShareDiscrepancy | None:
    """Compare stored loss shares with the capital ratio.

    Missing or non-numeric stored shares count as a discrepancy.
    """
    config = config or DEFAULT_CONFIG
    capital1, capital2 = capital_ratio(terms)
    stored1 = _stored_share(terms.party1_loss_share, "party1_loss_share")
    stored2 = _stored_share(terms.party2_loss_share, "party2_loss_share")

    if (
        stored1 is not None
        and stored2 is not None
        and abs(stored1 - capital1) <= config.ratio_tolerance
        and abs(stored2 - capital2) <= config.ratio_tolerance
    ):
        return None

    return LossShareDiscrepancy(
        stored_party1_loss_share=stored1,
        stored_party2_loss_share=stored2,
        capital_party1_percentage=round_percent(capital1),
        capital_party2_percentage=round_percent(capital2),
    )


def _stored_share(value: Any, field_name: str) -> Decimal | None:
    try:
        return to_decimal(value, field_name)
    except InvalidNumericInputError:
        return None


def _split(total: Decimal, party1_numerator: Decimal, denominator: Decimal) -> tuple[Decimal, Decimal]:
    """Split ``total`` so the two shares add back to it exactly."""
    party1 = round_money(total * party1_numerator / denominator)
    return party1, total - party1


def split_profit(terms: MusharakahTerms, actual_profit: Decimal, config: EngineConfig) -> DistributionResult:
    """Distribute a profit by the negotiated profit ratio."""
    share1 = require_percentage(terms.party1_profit_share, "party1_profit_share")
    share2 = require_percentage(terms.party2_profit_share, "party2_profit_share")
    if not sums_to_hundred(share1, share2, config.ratio_tolerance):
        raise InvalidRatioError(f"party1_profit_share + party2_profit_share must sum to 100, got {share1 + share2}")

    total = round_money(actual_profit)
    party1, party2 = _split(total, share1, share1 + share2)
    return DistributionResult(
        total_amount=total,
        party1_share=party1,
        party2_share=party2,
        party1_percentage=share1,
        party2_percentage=share2,
        basis=DistributionBasis.PROFIT_RATIO,
    )


def split_loss(terms: MusharakahTerms, actual_loss: Decimal) -> DistributionResult:
    """Distribute a loss by capital contribution."""
    capital1 = require_positive(terms.party1_capital, "party1_capital")
    capital2 = require_positive(terms.party2_capital, "party2_capital")
    percent1, percent2 = capital_ratio(terms)

    total = round_money(actual_loss)
    party1, party2 = _split(total, capital1, capital1 + capital2)
    return DistributionResult(
        total_amount=total,
        party1_share=party1,
        party2_share=party2,
        party1_percentage=round_percent(percent1),
        party2_percentage=round_percent(percent2),
        basis=DistributionBasis.CAPITAL_RATIO,
    )


def _outcome(capital: Decimal, profit_share: Decimal, loss_share: Decimal) -> PartyOutcome:
    net = profit_share - loss_share
    return PartyOutcome(
        capital=capital,
        profit_share=profit_share,
        loss_share=loss_share,
        net_result=net,
        roi_percent=round_percent(net / capital * HUNDRED),
        capital_remaining=max(ZERO, capital - loss_share),
    )


def distribute_musharakah_terms(
    terms: MusharakahTerms,
    actual_profit: Any = 0,
    actual_loss: Any = 0,
    config: EngineConfig | None = None,
) -> MusharakahDistribution | DerivationFailure:
    """Compute the party-level breakdown of a Musharakah reporting period.

    Parameters
    ----------
    terms : MusharakahTerms
        Contract terms.
    actual_profit : Any
        Observed profit, zero or more. Distributed only when positive.
    actual_loss : Any
        Observed loss, zero or more. Distributed only when positive.
    config : EngineConfig | None
        Policy configuration; the default is used when omitted.

    Returns
    -------
    MusharakahDistribution | DerivationFailure
        The distribution, or a failure when capital, ratios or the
        observed amounts are invalid.
    """
    config = config or DEFAULT_CONFIG
    try:
        profit = require_non_negative(actual_profit, "actual_profit")
        loss = require_non_negative(actual_loss, "actual_loss")
        capital1 = require_positive(terms.party1_capital, "party1_capital")
        capital2 = require_positive(terms.party2_capital, "party2_capital")
        profit_result = split_profit(terms, profit, config) if profit > 0 else None
        loss_result = split_loss(terms, loss) if loss > 0 else None
        discrepancy = find_loss_share_discrepancy(terms, config)
        party1 = _outcome(
            capital1,
            profit_result.party1_share if profit_result else ZERO,
            loss_result.party1_share if loss_result else ZERO,
        )
        party2 = _outcome(
            capital2,
            profit_result.party2_share if profit_result else ZERO,
            loss_result.party2_share if loss_result else ZERO,
        )
    except InvalidRatioError as e:
        return DerivationFailure(FailureReason.INVALID_RATIO, str(e), ContractType.MUSHARAKAH)
    except (InvalidNumericInputError, DecimalException) as e:
        return DerivationFailure(FailureReason.INVALID_NUMERIC_INPUT, numeric_error_detail(e), ContractType.MUSHARAKAH)

    if discrepancy is not None:
        logger.warning(
            "Stored loss shares %s/%s do not match capital ratio %s/%s; using capital ratio",
            discrepancy.stored_party1_loss_share,
            discrepancy.stored_party2_loss_share,
            discrepancy.capital_party1_percentage,
            discrepancy.capital_party2_percentage,
            extra={"extra": to_dict(discrepancy)},
        )

    return MusharakahDistribution(
        profit=profit_result,
        loss=loss_result,
        party1=party1,
        party2=party2,
        loss_share_discrepancy=discrepancy,
    )


def distribute_mudarabah(
    terms: MudarabahTerms,
    actual_profit: Any = 0,
    actual_loss: Any = 0,
    config: EngineConfig | None = None,
) -> MudarabahDistribution | DerivationFailure:
    """Split a Mudarabah profit by the agreed shares and allocate any loss.

    Capital losses fall on the capital provider alone; the mudarib loses
    only the effort put in.
    """
    config = config or DEFAULT_CONFIG
    try:
        profit = round_money(require_non_negative(actual_profit, "actual_profit"))
        loss = round_money(require_non_negative(actual_loss, "actual_loss"))
        capital = require_positive(terms.capital_amount, "capital_amount")
        investor_pct = require_percentage(terms.investor_profit_share, "investor_profit_share")
        mudarib_pct = require_percentage(terms.mudarib_profit_share, "mudarib_profit_share")
        if not sums_to_hundred(investor_pct, mudarib_pct, config.ratio_tolerance):
            raise InvalidRatioError(
                f"investor_profit_share + mudarib_profit_share must sum to 100, got {investor_pct + mudarib_pct}"
            )
        investor_share, mudarib_share = _split(profit, investor_pct, investor_pct + mudarib_pct)
    except InvalidRatioError as e:
        return DerivationFailure(FailureReason.INVALID_RATIO, str(e), ContractType.MUDARABAH)
    except (InvalidNumericInputError, DecimalException) as e:
        return DerivationFailure(FailureReason.INVALID_NUMERIC_INPUT, numeric_error_detail(e), ContractType.MUDARABAH)

    return MudarabahDistribution(
        total_profit=profit,
        investor_share=investor_share,
        mudarib_share=mudarib_share,
        total_loss=loss,
        investor_loss=loss,
        mudarib_loss=ZERO,
        capital_remaining=max(ZERO, capital - loss),
    )


def validate_ratios(
    terms: MudarabahTerms | MusharakahTerms,
    config: EngineConfig | None = None,
) -> list[str]:
    """List every ratio problem in profit-sharing contract terms.

    Returns an empty list when the terms are consistent.
    """
    config = config or DEFAULT_CONFIG
    tolerance = config.ratio_tolerance
    problems: list[str] = []

    def _pair(first: Any, second: Any, names: tuple[str, str]) -> tuple[Decimal, Decimal] | None:
        try:
            a = require_percentage(first, names[0])
            b = require_percentage(second, names[1])
        except InvalidNumericInputError as e:
            problems.append(str(e))
            return None
        if not sums_to_hundred(a, b, tolerance):
            problems.append(f"{names[0]} + {names[1]} must sum to 100, got {a + b}")
        return a, b

    if isinstance(terms, MudarabahTerms):
        _pair(terms.investor_profit_share, terms.mudarib_profit_share, ("investor_profit_share", "mudarib_profit_share"))
        return problems

    _pair(terms.party1_profit_share, terms.party2_profit_share, ("party1_profit_share", "party2_profit_share"))
    losses = _pair(terms.party1_loss_share, terms.party2_loss_share, ("party1_loss_share", "party2_loss_share"))
    try:
        capital1, capital2 = capital_ratio(terms)
    except (InvalidNumericInputError, DecimalException) as e:
        problems.append(numeric_error_detail(e))
        return problems

    if losses is not None and (
        abs(losses[0] - capital1) > tolerance or abs(losses[1] - capital2) > tolerance
    ):
        problems.append(
            f"loss shares {losses[0]}/{losses[1]} must match capital ratio "
            f"{round_percent(capital1)}/{round_percent(capital2)}"
        )
    return problems
