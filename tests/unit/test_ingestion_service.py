"""
Unit tests for IngestionService.

Tests cover:
- Single payload classify-and-apply
- Missing timestamps filled from the clock
- Batch summaries with duplicates, non-trades and failures
- Direct classified trades and their validation
"""

from decimal import Decimal

import pytest

from pumploss.core.exceptions import ValidationError, WriteConflictError
from pumploss.domain.models import ApplyStatus, ClassificationCase, TradeDirection
from pumploss.repositories.sqlalchemy import SqlAlchemyLedgerRepository
from pumploss.services import build_direct_trade

from tests.conftest import (
    FIXED_NOW,
    TRADER_A,
    TRADER_B,
    MINT_X,
    assert_decimal_equal,
    make_swap_payload,
)


# =============================================================================
# TRANSPORT PAYLOADS
# =============================================================================


class TestIngestPayload:
    """Tests for ingest_payload."""

    def test_swap_payload_is_applied(self, ingestion_service, accounting_engine):
        result = ingestion_service.ingest_payload(make_swap_payload("sig-1"))

        assert result.status == ApplyStatus.APPLIED
        assert result.trade.classification_case == ClassificationCase.UNAMBIGUOUS_BUY
        position = accounting_engine.get_position(TRADER_A, MINT_X)
        assert_decimal_equal(position.quantity_held, Decimal("1000"))

    def test_non_trade_returns_none(self, ingestion_service, trade_repo):
        result = ingestion_service.ingest_payload({"signature": "sig-nft", "type": "NFT_SALE"})

        assert result is None
        assert trade_repo.get_by_signature("sig-nft") is None

    def test_missing_timestamp_uses_clock(self, ingestion_service, fake_clock):
        fake_clock.advance(42)

        result = ingestion_service.ingest_payload(make_swap_payload("sig-1", block_time=None))

        assert result.trade.block_time == FIXED_NOW + 42

    def test_buy_then_sell_realizes_pnl(self, ingestion_service):
        """
        GIVEN a BUY of 1000 for 1.5 SOL
        WHEN the wallet sells 1000 for 1.0 SOL
        THEN a 0.5 SOL loss is realized
        """
        ingestion_service.ingest_payload(make_swap_payload("sig-1"))

        result = ingestion_service.ingest_payload(
            make_swap_payload("sig-2", direction="SELL", sol=Decimal("1.0"), tokens=Decimal("1000"))
        )

        assert_decimal_equal(result.pnl_event.pnl_quote, Decimal("-0.5"))
        assert result.ledger_entry is None


# =============================================================================
# BATCHES
# =============================================================================


class TestIngestBatch:
    """Tests for ingest_batch summaries."""

    def test_batch_summary_counts(self, ingestion_service):
        """
        GIVEN a batch with two swaps, a repeat, an unrelated event and junk
        WHEN it is ingested
        THEN every item is accounted for
        """
        payloads = [
            make_swap_payload("sig-1"),
            make_swap_payload("sig-2", trader=TRADER_B),
            make_swap_payload("sig-1"),
            {"signature": "sig-transfer", "nativeTransfers": []},
            "not-a-dict",
        ]

        summary = ingestion_service.ingest_batch(payloads)

        assert summary.received == 5
        assert summary.classified == 3
        assert summary.applied == 2
        assert summary.duplicates == 1
        assert summary.not_trades == 2
        assert summary.errors == 0

    def test_failed_event_does_not_stop_batch(self, ingestion_service, monkeypatch):
        original_save = SqlAlchemyLedgerRepository.save

        def conflict_for_a(self, entry):
            if entry.wallet_address == TRADER_A:
                raise WriteConflictError("row changed")
            return original_save(self, entry)

        monkeypatch.setattr(SqlAlchemyLedgerRepository, "save", conflict_for_a)

        summary = ingestion_service.ingest_batch([
            make_swap_payload("sig-a", trader=TRADER_A),
            make_swap_payload("sig-b", trader=TRADER_B),
        ])

        assert summary.errors == 1
        assert summary.applied == 1
        assert "sig-a" in summary.error_messages[0]

    @pytest.mark.parametrize(
        "field, value",
        [
            ("tokenAmount", "NaN"),
            ("tokenAmount", "Infinity"),
            ("amount", float("inf")),
            ("signature", 12345),
        ],
    )
    def test_malformed_payload_does_not_stop_batch(self, ingestion_service, accounting_engine, field, value):
        """
        GIVEN a malformed swap followed by a valid one
        WHEN the batch is ingested
        THEN the malformed one is not a trade and the valid one is applied
        """
        bad = make_swap_payload("sig-bad")
        if field == "tokenAmount":
            bad["tokenTransfers"][0][field] = value
        elif field == "amount":
            bad["nativeTransfers"][0][field] = value
        else:
            bad[field] = value

        summary = ingestion_service.ingest_batch([bad, make_swap_payload("sig-good", trader=TRADER_B)])

        assert summary.not_trades == 1
        assert summary.applied == 1
        assert summary.errors == 0
        assert accounting_engine.get_position(TRADER_A, MINT_X) is None
        position = accounting_engine.get_position(TRADER_B, MINT_X)
        assert_decimal_equal(position.quantity_held, Decimal("1000"))

    def test_empty_batch(self, ingestion_service):
        summary = ingestion_service.ingest_batch([])

        assert summary.received == 0
        assert summary.applied == 0


# =============================================================================
# DIRECT CLASSIFIED TRADES
# =============================================================================


class TestDirectTrades:
    """Tests for ingest_classified and build_direct_trade."""

    def test_classified_trade_is_applied(self, ingestion_service):
        result = ingestion_service.ingest_classified(
            signature="sig-d1",
            block_time=FIXED_NOW,
            trader_address=TRADER_A,
            asset_id=MINT_X,
            direction="BUY",
            asset_amount="250",
            quote_amount="2",
        )

        assert result.status == ApplyStatus.APPLIED
        assert result.trade.classification_case == ClassificationCase.DIRECT

    def test_iso_block_time_is_utc(self):
        trade = build_direct_trade(
            "sig", "2024-06-15T14:30:00", TRADER_A, MINT_X, "SELL", "1", "1"
        )

        assert trade.block_time == FIXED_NOW
        assert trade.direction == TradeDirection.DISPOSE

    def test_iso_offset_is_honored(self):
        trade = build_direct_trade(
            "sig", "2024-06-15T10:30:00-04:00", TRADER_A, MINT_X, "BUY", "1", "1"
        )

        assert trade.block_time == FIXED_NOW

    def test_direction_accepts_member_names(self):
        trade = build_direct_trade("sig", FIXED_NOW, TRADER_A, MINT_X, "dispose", "1", "1")

        assert trade.direction == TradeDirection.DISPOSE

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"signature": ""}, "signature is required"),
            ({"trader_address": "  "}, "trader_address is required"),
            ({"asset_id": None}, "asset_id is required"),
            ({"direction": "HOLD"}, "Invalid direction"),
            ({"block_time": ""}, "block_time is required"),
            ({"block_time": "not a date"}, "Invalid block_time"),
            ({"asset_amount": "abc"}, "Invalid asset_amount"),
            ({"asset_amount": "0"}, "asset_amount must be positive"),
            ({"quote_amount": "-1"}, "quote_amount must be positive"),
            ({"quote_amount": "NaN"}, "quote_amount must be positive"),
        ],
    )
    def test_invalid_fields_raise(self, overrides, message):
        fields = {
            "signature": "sig",
            "block_time": FIXED_NOW,
            "trader_address": TRADER_A,
            "asset_id": MINT_X,
            "direction": "BUY",
            "asset_amount": "1",
            "quote_amount": "1",
        }
        fields.update(overrides)

        with pytest.raises(ValidationError, match=message):
            build_direct_trade(**fields)
