"""Tests for profit and loss distribution."""

from dataclasses import replace
from decimal import Decimal

import pytest

from shariah_contracts.config import EngineConfig
from shariah_contracts.distribution import (
    capital_ratio,
    distribute_mudarabah,
    distribute_musharakah_terms,
    find_loss_share_discrepancy,
    validate_ratios,
)
from shariah_contracts.models import (
    DerivationFailure,
    DistributionBasis,
    FailureReason,
    MusharakahDistribution,
)


class TestCapitalRatio:
    """Tests for capital_ratio."""

    def test_two_to_one(self, musharakah_terms) -> None:
        party1, party2 = capital_ratio(musharakah_terms)

        assert party1 + party2 == Decimal("100")
        assert party1.quantize(Decimal("0.01")) == Decimal("66.67")


class TestMusharakahDistribution:
    """Tests for distribute_musharakah_terms."""

    def test_profit_follows_profit_ratio(self, musharakah_terms) -> None:
        result = distribute_musharakah_terms(musharakah_terms, actual_profit=2_000_000)

        assert isinstance(result, MusharakahDistribution)
        assert result.loss is None
        assert result.profit.party1_share == Decimal("1200000")
        assert result.profit.party2_share == Decimal("800000")
        assert result.profit.party1_percentage == Decimal("60")
        assert result.profit.basis is DistributionBasis.PROFIT_RATIO
        assert result.party1.roi_percent == Decimal("12.00")
        assert result.party2.roi_percent == Decimal("16.00")

    def test_loss_follows_capital_ratio(self, musharakah_terms) -> None:
        result = distribute_musharakah_terms(musharakah_terms, actual_loss=1_500_000)

        assert result.profit is None
        assert result.loss.party1_share == Decimal("1000000")
        assert result.loss.party2_share == Decimal("500000")
        assert result.loss.party1_percentage == Decimal("66.67")
        assert result.loss.party2_percentage == Decimal("33.33")
        assert result.loss.basis is DistributionBasis.CAPITAL_RATIO
        assert not result.has_discrepancy

    def test_stored_loss_shares_never_override_capital(self, musharakah_terms, caplog) -> None:
        """A 50/50 stored loss split is reported, not applied."""
        terms = replace(musharakah_terms, party1_loss_share=Decimal("50"), party2_loss_share=Decimal("50"))

        with caplog.at_level("WARNING"):
            result = distribute_musharakah_terms(terms, actual_loss=1_500_000)

        assert result.loss.party1_share == Decimal("1000000")
        assert result.loss.party2_share == Decimal("500000")
        assert result.has_discrepancy
        discrepancy = result.loss_share_discrepancy
        assert discrepancy.stored_party1_loss_share == Decimal("50")
        assert discrepancy.capital_party1_percentage == Decimal("66.67")
        assert discrepancy.capital_party2_percentage == Decimal("33.33")
        assert "capital ratio" in caplog.text

    def test_profit_and_loss_in_one_period(self, musharakah_terms) -> None:
        result = distribute_musharakah_terms(musharakah_terms, actual_profit=2_000_000, actual_loss=1_500_000)

        assert result.party1.net_result == Decimal("200000")
        assert result.party1.roi_percent == Decimal("2.00")
        assert result.party1.capital_remaining == Decimal("9000000")
        assert result.party2.net_result == Decimal("300000")
        assert result.party2.roi_percent == Decimal("6.00")
        assert result.party2.capital_remaining == Decimal("4500000")

    def test_shares_sum_to_total_after_rounding(self, musharakah_terms) -> None:
        result = distribute_musharakah_terms(musharakah_terms, actual_profit="1000.01", actual_loss="1000.01")

        assert result.profit.party1_share + result.profit.party2_share == Decimal("1000.01")
        assert result.loss.party1_share + result.loss.party2_share == Decimal("1000.01")
        assert result.loss.party1_share == Decimal("666.67")

    def test_nothing_to_distribute(self, musharakah_terms) -> None:
        result = distribute_musharakah_terms(musharakah_terms)

        assert result.profit is None
        assert result.loss is None
        assert result.party1.net_result == 0
        assert result.party2.roi_percent == 0

    def test_loss_beyond_capital(self, musharakah_terms) -> None:
        result = distribute_musharakah_terms(musharakah_terms, actual_loss=30_000_000)

        assert result.party1.capital_remaining == 0
        assert result.party1.roi_percent == Decimal("-200.00")

    def test_missing_stored_loss_share_is_a_discrepancy(self, musharakah_terms) -> None:
        result = distribute_musharakah_terms(replace(musharakah_terms, party2_loss_share=None))

        assert result.has_discrepancy
        assert result.loss_share_discrepancy.stored_party2_loss_share is None

    @pytest.mark.parametrize("kwargs", [{"actual_profit": -1}, {"actual_loss": "-0.01"}, {"actual_loss": "abc"}])
    def test_invalid_amounts(self, musharakah_terms, kwargs) -> None:
        result = distribute_musharakah_terms(musharakah_terms, **kwargs)

        assert isinstance(result, DerivationFailure)
        assert result.reason is FailureReason.INVALID_NUMERIC_INPUT

    def test_zero_capital(self, musharakah_terms) -> None:
        result = distribute_musharakah_terms(replace(musharakah_terms, party2_capital=Decimal("0")))

        assert result.reason is FailureReason.INVALID_NUMERIC_INPUT
        assert "party2_capital" in result.detail

    def test_profit_ratio_must_sum_to_hundred(self, musharakah_terms) -> None:
        terms = replace(musharakah_terms, party2_profit_share=Decimal("50"))

        result = distribute_musharakah_terms(terms, actual_profit=1000)

        assert result.reason is FailureReason.INVALID_RATIO


class TestFindLossShareDiscrepancy:
    """Tests for find_loss_share_discrepancy."""

    def test_within_tolerance(self, musharakah_terms) -> None:
        assert find_loss_share_discrepancy(musharakah_terms) is None

    def test_outside_tolerance(self, musharakah_terms) -> None:
        terms = replace(musharakah_terms, party1_loss_share=Decimal("66.5"), party2_loss_share=Decimal("33.5"))

        assert find_loss_share_discrepancy(terms) is not None

    def test_non_numeric_stored_share(self, musharakah_terms) -> None:
        result = find_loss_share_discrepancy(replace(musharakah_terms, party1_loss_share="two thirds"))

        assert result.stored_party1_loss_share is None
        assert result.stored_party2_loss_share == Decimal("33.33")


class TestMudarabahDistribution:
    """Tests for distribute_mudarabah."""

    def test_profit_split(self, mudarabah_terms) -> None:
        result = distribute_mudarabah(mudarabah_terms, actual_profit=1_000_000)

        assert result.investor_share == Decimal("300000")
        assert result.mudarib_share == Decimal("700000")
        assert result.total_loss == 0

    def test_capital_provider_bears_loss(self, mudarabah_terms) -> None:
        result = distribute_mudarabah(mudarabah_terms, actual_loss=500_000)

        assert result.investor_loss == Decimal("500000")
        assert result.mudarib_loss == 0
        assert result.capital_remaining == Decimal("7500000")

    def test_loss_beyond_capital(self, mudarabah_terms) -> None:
        result = distribute_mudarabah(mudarabah_terms, actual_loss=9_000_000)

        assert result.capital_remaining == 0

    def test_mismatched_shares(self, mudarabah_terms) -> None:
        result = distribute_mudarabah(replace(mudarabah_terms, mudarib_profit_share=Decimal("60")), 1000)

        assert isinstance(result, DerivationFailure)
        assert result.reason is FailureReason.INVALID_RATIO

    def test_negative_profit(self, mudarabah_terms) -> None:
        result = distribute_mudarabah(mudarabah_terms, actual_profit=-5)

        assert result.reason is FailureReason.INVALID_NUMERIC_INPUT


class TestValidateRatios:
    """Tests for validate_ratios."""

    def test_consistent_contracts(self, mudarabah_terms, musharakah_terms) -> None:
        assert validate_ratios(mudarabah_terms) == []
        assert validate_ratios(musharakah_terms) == []

    def test_mudarabah_split(self, mudarabah_terms) -> None:
        problems = validate_ratios(replace(mudarabah_terms, mudarib_profit_share=Decimal("60")))

        assert len(problems) == 1
        assert "must sum to 100" in problems[0]

    def test_loss_shares_against_capital(self, musharakah_terms) -> None:
        terms = replace(musharakah_terms, party1_loss_share=Decimal("50"), party2_loss_share=Decimal("50"))

        problems = validate_ratios(terms)

        assert problems == ["loss shares 50/50 must match capital ratio 66.67/33.33"]

    def test_reports_every_problem(self, musharakah_terms) -> None:
        terms = replace(
            musharakah_terms,
            party1_profit_share=Decimal("70"),
            party1_loss_share="abc",
            party2_capital=Decimal("0"),
        )

        problems = validate_ratios(terms)

        assert len(problems) == 3
        assert any("party1_profit_share" in p for p in problems)
        assert any("party1_loss_share" in p for p in problems)
        assert any("party2_capital" in p for p in problems)

    def test_tolerance_is_configurable(self, musharakah_terms) -> None:
        terms = replace(musharakah_terms, party1_loss_share=Decimal("66.5"), party2_loss_share=Decimal("33.5"))

        assert validate_ratios(terms, EngineConfig(ratio_tolerance=Decimal("0.5"))) == []
