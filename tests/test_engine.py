"""Tests for the public entry points and the variant classifier."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from decimal import Decimal

import pytest

from shariah_contracts import (
    derive_investment_terms,
    derive_many,
    distribute_musharakah,
    explain_derivation,
)
from shariah_contracts.classifier import classify, coerce_contract
from shariah_contracts.engine import derive_with_details
from shariah_contracts.generators import ContractGenerator
from shariah_contracts.models import (
    ContractType,
    DerivationFailure,
    FailureReason,
    InvestmentTerms,
    MusharakahTerms,
)

UNRECOGNIZED = [
    None,
    42,
    "murabaha",
    {},
    {"contractType": None},
    {"contractType": "istisna", "amount": 1000},
    {"contract": "murabaha"},
]


class TestClassify:
    """Tests for classify."""

    def test_dataclass_variants(
        self, murabaha_terms, mudarabah_terms, musharakah_terms, ijarah_terms, salam_terms
    ) -> None:
        assert classify(murabaha_terms) is ContractType.MURABAHA
        assert classify(mudarabah_terms) is ContractType.MUDARABAH
        assert classify(musharakah_terms) is ContractType.MUSHARAKAH
        assert classify(ijarah_terms) is ContractType.IJARAH
        assert classify(salam_terms) is ContractType.SALAM

    def test_stored_mapping(self, stored_musharakah) -> None:
        assert classify(stored_musharakah) is ContractType.MUSHARAKAH

    def test_tag_is_case_insensitive(self) -> None:
        assert classify({"contractType": " Ijarah "}) is ContractType.IJARAH

    def test_snake_case_tag(self) -> None:
        assert classify({"contract_type": "salam"}) is ContractType.SALAM

    @pytest.mark.parametrize("value", UNRECOGNIZED)
    def test_unrecognized(self, value) -> None:
        result = classify(value)

        assert isinstance(result, DerivationFailure)
        assert result.reason is FailureReason.UNRECOGNIZED_CONTRACT

    def test_coerce_parses_mappings(self, stored_musharakah) -> None:
        terms = coerce_contract(stored_musharakah)

        assert isinstance(terms, MusharakahTerms)
        assert terms.party1_loss_share == Decimal("66.67")

    def test_coerce_passes_dataclasses_through(self, salam_terms) -> None:
        assert coerce_contract(salam_terms) is salam_terms


class TestDeriveInvestmentTerms:
    """Tests for derive_investment_terms."""

    def test_murabaha_scenario(self, murabaha_terms) -> None:
        result = derive_investment_terms(murabaha_terms)

        assert result.return_min == Decimal("11")
        assert result.return_max == Decimal("13")
        assert result.campaign_days == 21

    def test_ijarah_scenario(self, ijarah_terms) -> None:
        result = derive_investment_terms(ijarah_terms)

        assert result.return_min == Decimal("17")
        assert result.return_max == Decimal("19")
        assert result.campaign_days == 30

    def test_stored_mapping(self, stored_musharakah) -> None:
        result = derive_investment_terms(stored_musharakah)

        assert result == InvestmentTerms(
            return_min=Decimal("16.00"),
            return_max=Decimal("21.00"),
            term_months=24,
            minimum_investment=Decimal("600000"),
            campaign_days=45,
        )

    def test_salam_zero_advance_is_a_failure(self, salam_terms) -> None:
        result = derive_investment_terms(replace(salam_terms, advance_payment=Decimal("0")))

        assert isinstance(result, DerivationFailure)
        assert not result

    def test_stored_mapping_missing_field(self, stored_musharakah) -> None:
        del stored_musharakah["party2Capital"]

        result = derive_investment_terms(stored_musharakah)

        assert result.reason is FailureReason.MISSING_FIELD
        assert "party2Capital" in result.detail

    @pytest.mark.parametrize("bad", ["abc", "NaN", "Infinity", float("inf"), True, [1]])
    def test_stored_mapping_non_numeric(self, stored_musharakah, bad) -> None:
        stored_musharakah["party1Capital"] = bad

        result = derive_investment_terms(stored_musharakah)

        assert isinstance(result, DerivationFailure)
        assert result.reason is FailureReason.INVALID_NUMERIC_INPUT

    @pytest.mark.parametrize("value", UNRECOGNIZED)
    def test_unrecognized(self, value) -> None:
        result = derive_investment_terms(value)

        assert isinstance(result, DerivationFailure)
        assert result.reason is FailureReason.UNRECOGNIZED_CONTRACT

    def test_deterministic(self, seed) -> None:
        for contract in ContractGenerator(seed=seed).generate_batch(50):
            assert derive_investment_terms(contract) == derive_investment_terms(contract)

    def test_return_range_ordering(self, seed) -> None:
        """return_max >= return_min >= 0 for every generated contract."""
        for contract in ContractGenerator(seed=seed).generate_batch(200):
            result = derive_investment_terms(contract)

            assert isinstance(result, InvestmentTerms), result
            assert result.return_max >= result.return_min >= 0
            assert result.minimum_investment > 0
            assert result.campaign_days > 0
            assert result.term_months == contract.duration

    @pytest.mark.parametrize("contract_type", list(ContractType))
    def test_one_month_term(self, seed, contract_type) -> None:
        contract = ContractGenerator(seed=seed).generate(contract_type)
        contract = replace(contract, duration=1)

        result = derive_investment_terms(contract)

        assert result.return_max >= result.return_min >= 0


class TestExplainDerivation:
    """Tests for explain_derivation."""

    def test_murabaha_text(self, murabaha_terms) -> None:
        text = explain_derivation(murabaha_terms)

        assert text == (
            "Returns calculated from 12.00% profit rate over 12 months, annualized to 12.00%. "
            "Annual return range 11.00% to 13.00% over 12 months. "
            "Min investment is 15% of 5,000,000 asset cost: 750,000. "
            "Campaign runs 21 days."
        )

    def test_ijarah_text(self, ijarah_terms) -> None:
        text = explain_derivation(ijarah_terms)

        assert text.startswith(
            "Returns calculated from 18.00% rental yield (300,000/month x 12 / 20,000,000 asset value)."
        )
        assert "Min investment is 17% of 20,000,000 asset value: 3,400,000." in text

    def test_salam_text(self, salam_terms) -> None:
        text = explain_derivation(salam_terms)

        assert "15.00% profit margin over 6 months (300,000 profit on 2,000,000 advance)" in text
        assert "annualized to 30.00%" in text
        assert "28.00% to 32.00%" in text

    def test_mudarabah_baseline_text(self, mudarabah_terms) -> None:
        terms = replace(mudarabah_terms, expected_annual_return=None, expected_return_rate=None)

        text = explain_derivation(terms)

        assert "30.00% investor profit share of an assumed 18.00% business return, giving 5.40%" in text

    def test_musharakah_text(self, musharakah_terms) -> None:
        text = explain_derivation(musharakah_terms)

        assert "40.00% investor profit share (33.33% capital contribution)" in text
        assert "Min investment is 12% of 5,000,000 investor capital: 600,000." in text
        assert "Campaign runs 45 days." in text

    def test_figures_match_derived_terms(self, seed) -> None:
        """Every published figure appears verbatim in the explanation."""
        for contract in ContractGenerator(seed=seed).generate_batch(100):
            details = derive_with_details(contract)
            terms = derive_investment_terms(contract)
            text = explain_derivation(contract)

            assert details.terms == terms
            assert f"{details.expected_return:.2f}%" in text
            assert f"range {terms.return_min:.2f}% to {terms.return_max:.2f}%" in text
            assert f"over {terms.term_months} months" in text
            assert f": {terms.minimum_investment:,.0f}." in text
            assert f"Campaign runs {terms.campaign_days} days." in text

    def test_deterministic(self, seed) -> None:
        for contract in ContractGenerator(seed=seed).generate_batch(20):
            assert explain_derivation(contract) == explain_derivation(contract)

    def test_failure_matches_derivation(self, salam_terms) -> None:
        terms = replace(salam_terms, advance_payment=Decimal("0"))

        assert explain_derivation(terms) == derive_investment_terms(terms)

    @pytest.mark.parametrize("value", UNRECOGNIZED)
    def test_unrecognized(self, value) -> None:
        result = explain_derivation(value)

        assert isinstance(result, DerivationFailure)
        assert result.reason is FailureReason.UNRECOGNIZED_CONTRACT


class TestDistributeMusharakahEntryPoint:
    """Tests for the distribute_musharakah entry point."""

    def test_stored_mapping(self, stored_musharakah) -> None:
        result = distribute_musharakah(stored_musharakah, actual_loss=1_500_000)

        assert result.loss.party1_share == Decimal("1000000")
        assert result.loss.party2_share == Decimal("500000")

    def test_other_variant_is_rejected(self, murabaha_terms) -> None:
        result = distribute_musharakah(murabaha_terms, actual_profit=1000)

        assert isinstance(result, DerivationFailure)
        assert result.reason is FailureReason.UNRECOGNIZED_CONTRACT
        assert result.contract_type is ContractType.MURABAHA

    @pytest.mark.parametrize("value", UNRECOGNIZED)
    def test_unrecognized(self, value) -> None:
        result = distribute_musharakah(value, actual_profit=1000)

        assert isinstance(result, DerivationFailure)
        assert result.reason is FailureReason.UNRECOGNIZED_CONTRACT


class TestDeriveMany:
    """Tests for batch derivation."""

    def test_preserves_order_and_failures(self, murabaha_terms, ijarah_terms) -> None:
        results = derive_many([murabaha_terms, None, ijarah_terms])

        assert results[0] == derive_investment_terms(murabaha_terms)
        assert isinstance(results[1], DerivationFailure)
        assert results[2] == derive_investment_terms(ijarah_terms)

    def test_parallel_matches_sequential(self, seed) -> None:
        contracts = list(ContractGenerator(seed=seed).generate_batch(100))

        with ThreadPoolExecutor(max_workers=8) as pool:
            parallel = list(pool.map(derive_investment_terms, contracts))

        assert parallel == derive_many(contracts)


class TestOutOfRangeAmounts:
    """Finite amounts too large or too small to compute with come back as failures."""

    @pytest.mark.parametrize(
        "changes",
        [
            {"asset_value": "1e-30", "monthly_rental": 1},
            {"asset_value": "1e40"},
        ],
    )
    def test_ijarah(self, ijarah_terms, changes) -> None:
        terms = replace(ijarah_terms, **changes)

        for result in (derive_investment_terms(terms), explain_derivation(terms), derive_with_details(terms)):
            assert isinstance(result, DerivationFailure)
            assert result.reason is FailureReason.INVALID_NUMERIC_INPUT
            assert result.contract_type is ContractType.IJARAH
            assert "outside the computable range" in result.detail

    def test_salam_huge_exponent(self, salam_terms) -> None:
        terms = replace(salam_terms, delivery_value="1e999999")

        for result in (derive_investment_terms(terms), explain_derivation(terms)):
            assert isinstance(result, DerivationFailure)
            assert result.reason is FailureReason.INVALID_NUMERIC_INPUT

    def test_stored_mapping(self, stored_musharakah) -> None:
        stored_musharakah["party2Capital"] = "1e40"

        result = derive_investment_terms(stored_musharakah)

        assert result.reason is FailureReason.INVALID_NUMERIC_INPUT

    def test_duration_too_large(self, murabaha_terms) -> None:
        result = derive_investment_terms(replace(murabaha_terms, duration="1e999999999"))

        assert result.reason is FailureReason.INVALID_NUMERIC_INPUT
        assert "duration: is too large" in result.detail

    @pytest.mark.parametrize("field", ["actual_profit", "actual_loss"])
    def test_distribution_amount(self, musharakah_terms, field) -> None:
        result = distribute_musharakah(musharakah_terms, **{field: "1e30"})

        assert isinstance(result, DerivationFailure)
        assert result.reason is FailureReason.INVALID_NUMERIC_INPUT
        assert result.contract_type is ContractType.MUSHARAKAH

    def test_distribution_tiny_capital(self, musharakah_terms) -> None:
        terms = replace(musharakah_terms, party1_capital=Decimal("1e-30"))

        result = distribute_musharakah(terms, actual_profit=1_000_000)

        assert result.reason is FailureReason.INVALID_NUMERIC_INPUT
