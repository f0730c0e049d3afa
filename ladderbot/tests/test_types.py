"""Tests for core value types."""

import math
import pytest

from ladderbot.errors import BalanceError
from ladderbot.types import (
    Asset,
    Balances,
    Level,
    MAX_NATIVE_TRUST,
    OperationAction,
    OperationIntent,
    RestingOrder,
    Side,
    sort_best_first,
)


class TestSide:
    """Tests for Side enum."""

    def test_opposite(self):
        assert Side.BUY.opposite is Side.SELL
        assert Side.SELL.opposite is Side.BUY


class TestAsset:
    """Tests for Asset parsing."""

    def test_parse_native(self):
        assert Asset.parse("native").is_native
        assert Asset.parse("XLM") == Asset.native()

    def test_parse_credit(self):
        asset = Asset.parse("USD:GISSUER")
        assert asset.code == "USD"
        assert asset.issuer == "GISSUER"
        assert not asset.is_native
        assert str(asset) == "USD:GISSUER"

    @pytest.mark.parametrize("text", ["", "USD", "USD:", ":GISSUER"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            Asset.parse(text)

    def test_from_horizon(self):
        assert Asset.from_horizon({"asset_type": "native"}) == Asset.native()
        record = {"asset_type": "credit_alphanum4", "asset_code": "USD", "asset_issuer": "GISSUER"}
        assert Asset.from_horizon(record) == Asset("USD", "GISSUER")


class TestLevel:
    """Tests for Level."""

    def test_immutable(self):
        level = Level(target_price=0.5, target_amount=10.0)
        with pytest.raises(AttributeError):
            level.target_price = 0.6


class TestBalances:
    """Tests for Balances."""

    def test_validate_ok(self):
        Balances(max_base=10, max_quote=0, trust_base=100, trust_quote=MAX_NATIVE_TRUST).validate()

    @pytest.mark.parametrize("field", ["max_base", "max_quote", "trust_base", "trust_quote"])
    def test_validate_negative(self, field):
        values = {"max_base": 1.0, "max_quote": 1.0, "trust_base": 1.0, "trust_quote": 1.0}
        values[field] = -0.1
        with pytest.raises(BalanceError, match=field):
            Balances(**values).validate()

    def test_validate_nan(self):
        with pytest.raises(BalanceError):
            Balances(max_base=math.nan, max_quote=1, trust_base=1, trust_quote=1).validate()

    def test_headroom(self):
        b = Balances(max_base=10, max_quote=20, trust_base=15, trust_quote=20)
        assert b.base_headroom == 5
        assert b.quote_headroom == 0


class TestRestingOrder:
    """Tests for RestingOrder frames."""

    def test_sell_offer_frame(self):
        order = RestingOrder.from_offer("1", Side.SELL, selling_amount=10.0, selling_price=0.5)
        assert order.price == 0.5
        assert order.amount == 10.0
        assert order.selling_amount == 10.0
        assert order.selling_price == 0.5
        assert order.buying_amount == 5.0

    def test_buy_offer_frame(self):
        """Buy offers sell quote for base, priced base-per-quote."""
        order = RestingOrder.from_offer("2", Side.BUY, selling_amount=10.0, selling_price=2.0)
        assert order.price == 0.5      # quote per base
        assert order.amount == 20.0    # base units
        assert order.selling_amount == pytest.approx(10.0)
        assert order.selling_price == pytest.approx(2.0)
        assert order.buying_amount == 20.0

    def test_from_offer_rejects_zero_price(self):
        with pytest.raises(ValueError):
            RestingOrder.from_offer("3", Side.BUY, selling_amount=1.0, selling_price=0.0)

    def test_sort_best_first(self):
        orders = [
            RestingOrder("a", Side.SELL, 1.2, 1),
            RestingOrder("b", Side.SELL, 1.0, 1),
            RestingOrder("c", Side.SELL, 1.1, 1),
        ]
        assert [o.order_id for o in sort_best_first(orders, Side.SELL)] == ["b", "c", "a"]

        bids = [RestingOrder(o.order_id, Side.BUY, o.price, o.amount) for o in orders]
        assert [o.order_id for o in sort_best_first(bids, Side.BUY)] == ["a", "c", "b"]


class TestOperationIntent:
    """Tests for OperationIntent."""

    def test_create(self):
        op = OperationIntent.create(Side.SELL, 0.505, 9.45)
        assert op.action is OperationAction.CREATE
        assert op.is_create and not op.is_cancel
        assert op.order_id is None
        assert "CREATE SELL" in op.describe()

    def test_cancel(self):
        order = RestingOrder("42", Side.BUY, 0.49, 3.0)
        op = OperationIntent.cancel(order)
        assert op.is_cancel
        assert op.order_id == "42"
        assert op.side is Side.BUY
        assert "42" in op.describe()
