"""Unit tests for allocation policy validation."""

import pytest
from pydantic import ValidationError

from tilt_calculator import (
    AllocationEntry,
    AllocationPolicy,
    AllocationSumError,
    ConfigError,
    DuplicateSymbolError,
    validate_policy,
)


def _entry(symbol, fraction, *aliases):
    return AllocationEntry(symbol=symbol, target_fraction=fraction, aliases=tuple(aliases))


@pytest.mark.unit
class TestAllocationSum:
    """Target fractions must add up to 1.0"""

    def test_valid_policy(self, voo_bnd_policy):
        assert voo_bnd_policy.symbols == ("VOO", "BND")
        assert len(voo_bnd_policy) == 2
        assert [e.target_percentage for e in voo_bnd_policy] == pytest.approx([80.0, 20.0])

    def test_sum_too_low(self):
        with pytest.raises(AllocationSumError) as exc_info:
            AllocationPolicy([_entry("VOO", 0.6), _entry("BND", 0.3)])
        assert exc_info.value.total == pytest.approx(0.9)
        assert "do not add up to 100" in str(exc_info.value)

    def test_sum_too_high(self):
        with pytest.raises(AllocationSumError):
            validate_policy([_entry("VOO", 0.8), _entry("BND", 0.21)])

    def test_within_tolerance(self):
        policy = validate_policy([_entry("A", 0.5), _entry("B", 0.5 + 5e-10)])
        assert len(policy) == 2

    def test_outside_tolerance(self):
        with pytest.raises(AllocationSumError):
            validate_policy([_entry("A", 0.5), _entry("B", 0.50000001)])

    def test_thirds_sum_to_one(self, thirds_policy):
        assert thirds_policy.symbols == ("A", "B", "C")

    def test_empty_policy(self):
        with pytest.raises(AllocationSumError) as exc_info:
            validate_policy([])
        assert exc_info.value.total == 0

    def test_sum_error_is_config_error(self):
        with pytest.raises(ConfigError):
            validate_policy([_entry("VOO", 0.5)])


@pytest.mark.unit
class TestDuplicateSymbols:
    """Every canonical and alias symbol belongs to exactly one entry"""

    def test_duplicate_canonical(self):
        with pytest.raises(DuplicateSymbolError) as exc_info:
            validate_policy([_entry("VOO", 0.5), _entry("VOO", 0.5)])
        error = exc_info.value
        assert (error.symbol, error.owner, error.claimant) == ("VOO", "VOO", "VOO")

    def test_alias_claims_later_canonical(self):
        with pytest.raises(DuplicateSymbolError) as exc_info:
            validate_policy([_entry("VOO", 0.5, "IVV"), _entry("IVV", 0.5)])
        error = exc_info.value
        assert (error.symbol, error.owner, error.claimant) == ("IVV", "VOO", "IVV")
        assert "VOO" in str(error) and "IVV" in str(error)

    def test_alias_shared_by_two_entries(self):
        with pytest.raises(DuplicateSymbolError) as exc_info:
            validate_policy([_entry("VOO", 0.5, "SPY"), _entry("VTI", 0.5, "SPY")])
        assert (exc_info.value.owner, exc_info.value.claimant) == ("VOO", "VTI")

    def test_alias_repeated_within_entry(self):
        with pytest.raises(DuplicateSymbolError):
            validate_policy([_entry("VOO", 1.0, "SPY", "SPY")])

    def test_entry_alias_equal_to_own_symbol(self):
        with pytest.raises(DuplicateSymbolError):
            validate_policy([_entry("VOO", 1.0, "VOO")])

    def test_sum_checked_before_duplicates(self):
        with pytest.raises(AllocationSumError):
            validate_policy([_entry("VOO", 0.5), _entry("VOO", 0.6)])


@pytest.mark.unit
class TestRawEntries:
    """Plain mappings are accepted and validated"""

    def test_mappings(self):
        policy = validate_policy([
            {"symbol": "VOO", "target_fraction": 0.8, "aliases": ["IVV"]},
            {"symbol": "BND", "target_fraction": 0.2, "description": "Bonds"},
        ])
        assert policy.resolve("IVV") == "VOO"
        assert policy.entry("BND").description == "Bonds"

    @pytest.mark.parametrize(
        "raw",
        [
            {"symbol": "VOO", "target_fraction": 1.5},
            {"symbol": "VOO", "target_fraction": -0.1},
            {"symbol": "  ", "target_fraction": 1.0},
            {"symbol": "VOO", "target_fraction": 1.0, "aliases": [""]},
            {"target_fraction": 1.0},
        ],
    )
    def test_malformed_entry(self, raw):
        with pytest.raises(ConfigError) as exc_info:
            validate_policy([raw])
        assert "entry #1" in str(exc_info.value)


@pytest.mark.unit
class TestPolicyLookup:
    """Symbol resolution and immutability"""

    def test_resolve(self, voo_bnd_policy):
        assert voo_bnd_policy.resolve("VOO") == "VOO"
        assert voo_bnd_policy.resolve("SPY") == "VOO"
        assert voo_bnd_policy.resolve("BND") == "BND"
        assert voo_bnd_policy.resolve("VXUS") is None

    def test_entry_by_alias(self, voo_bnd_policy):
        assert voo_bnd_policy.entry("IVV").symbol == "VOO"
        assert voo_bnd_policy.entry("VXUS") is None

    def test_symbols_include_aliases(self, voo_bnd_policy):
        assert voo_bnd_policy.entries[0].symbols == ("VOO", "IVV", "SPY")

    def test_policy_is_immutable(self, voo_bnd_policy):
        with pytest.raises(AttributeError):
            voo_bnd_policy.extra = 1
        with pytest.raises(ValidationError):
            voo_bnd_policy.entries[0].target_fraction = 0.5

    def test_equality(self):
        first = validate_policy([_entry("A", 1.0)])
        second = validate_policy([_entry("A", 1.0)])
        assert first == second
        assert hash(first) == hash(second)
