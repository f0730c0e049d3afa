"""Tests for the autonomous level provider."""

import pytest

from ladderbot.errors import BalanceError, ConfigError
from ladderbot.levels import AutonomousLevelProvider


def make_provider(**overrides) -> AutonomousLevelProvider:
    params = dict(spread=0.02, plateau_threshold=0.9, amount_spread=0.05)
    params.update(overrides)
    return AutonomousLevelProvider(**params)


class TestConstruction:
    """Parameter validation happens at construction time."""

    @pytest.mark.parametrize("amount_spread", [0.0, 1.0, -0.1, 1.5])
    def test_amount_spread_out_of_range(self, amount_spread):
        with pytest.raises(ConfigError, match="amount_spread"):
            make_provider(amount_spread=amount_spread)

    @pytest.mark.parametrize("spread", [0.0, -0.01])
    def test_spread_not_positive(self, spread):
        with pytest.raises(ConfigError, match="spread"):
            make_provider(spread=spread)

    @pytest.mark.parametrize("threshold", [0.0, 1.0, 1.2])
    def test_plateau_threshold_out_of_range(self, threshold):
        with pytest.raises(ConfigError, match="plateau_threshold"):
            make_provider(plateau_threshold=threshold)

    def test_valid_amount_spread_edges(self):
        make_provider(amount_spread=0.0001)
        make_provider(amount_spread=0.9999)


class TestGetLevels:
    """Tests for get_levels."""

    def test_reference_example(self):
        """base=1000, quote=500, spread=2%, plateau=0.9, amount_spread=5%."""
        provider = make_provider()

        levels = provider.get_levels(1000.0, 500.0)

        assert len(levels) == 1
        assert provider.center_price(1000.0, 500.0) == pytest.approx(0.5)
        assert levels[0].target_price == pytest.approx(0.505)
        assert levels[0].target_amount == pytest.approx(40.0 / 4.02 * 0.95)
        assert levels[0].target_amount == pytest.approx(9.45, abs=0.01)

    def test_quote_sizing(self):
        """use_max_quote_in_target_amount_calc sizes from the quote balance."""
        provider = make_provider(use_max_quote_in_target_amount_calc=True)

        levels = provider.get_levels(1000.0, 500.0)

        assert levels[0].target_amount == pytest.approx(2 * 500.0 * 0.02 / 4.02 * 0.95)
        assert levels[0].target_price == pytest.approx(0.505)

    def test_plateau_ceiling(self):
        """Quote share above threshold flattens the price at t / (1 - t)."""
        provider = make_provider()
        ceiling = 0.9 / 0.1 * 1.01

        assert provider.get_levels(100.0, 900.0)[0].target_price == pytest.approx(ceiling)
        assert provider.get_levels(50.0, 950.0)[0].target_price == pytest.approx(ceiling)
        assert provider.get_levels(1.0, 1_000_000.0)[0].target_price == pytest.approx(ceiling)

    def test_plateau_floor(self):
        """Base share above threshold flattens the price at (1 - t) / t."""
        provider = make_provider()
        floor = 0.1 / 0.9 * 1.01

        assert provider.get_levels(950.0, 50.0)[0].target_price == pytest.approx(floor)
        assert provider.get_levels(1_000_000.0, 1.0)[0].target_price == pytest.approx(floor)

    def test_base_depleted_hits_plateau_not_division(self):
        """An empty base balance lands on the ceiling instead of dividing by zero."""
        provider = make_provider()

        levels = provider.get_levels(0.0, 100.0)

        assert levels[0].target_price == pytest.approx(9.0 * 1.01)
        assert levels[0].target_amount == 0.0

    def test_low_threshold_never_uses_raw_ratio(self):
        """With a threshold at or below one half one plateau always triggers."""
        provider = make_provider(plateau_threshold=0.4)

        assert provider.center_price(0.0, 10.0) == pytest.approx(0.4 / 0.6)
        assert provider.center_price(10.0, 0.0) == pytest.approx(0.6 / 0.4)

    def test_empty_account(self):
        with pytest.raises(BalanceError):
            make_provider().get_levels(0.0, 0.0)

    @pytest.mark.parametrize("base,quote", [
        (1000.0, 500.0),
        (1.0, 1.0),
        (10.0, 85.0),
        (85.0, 10.0),
        (0.001, 1_000.0),
        (1_000.0, 0.001),
    ])
    @pytest.mark.parametrize("threshold", [0.6, 0.9, 0.99])
    def test_price_always_above_center(self, base, quote, threshold):
        provider = make_provider(plateau_threshold=threshold)

        level = provider.get_levels(base, quote)[0]

        assert level.target_price > provider.center_price(base, quote)

    @pytest.mark.parametrize("base", [0.5, 10.0, 1000.0, 1e9])
    @pytest.mark.parametrize("amount_spread", [0.001, 0.05, 0.5])
    def test_amount_below_exhausting_bound(self, base, amount_spread):
        provider = make_provider(amount_spread=amount_spread)
        bound = 2 * base * 0.02 / (4 + 0.02)

        level = provider.get_levels(base, 500.0)[0]

        assert level.target_amount < bound

    def test_returns_fresh_list(self):
        provider = make_provider()
        first = provider.get_levels(1000.0, 500.0)
        second = provider.get_levels(1000.0, 500.0)
        assert first == second
        assert first is not second
