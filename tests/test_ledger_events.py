from __future__ import annotations

from amm_gateway.domain.entities.events import (
    LiquidityAdded,
    SwapExecuted,
    event_from_payload,
    event_name,
    event_payload,
)

from fakes import ALICE, TOKEN_A, TOKEN_B


def test_payload_keeps_wide_amounts_as_strings():
    event = SwapExecuted(sender=ALICE, asset_in=TOKEN_A, asset_out=TOKEN_B, amount_in=2**130, amount_out=7)

    payload = event_payload(event)

    assert event_name(event) == "SwapExecuted"
    assert payload["amount_in"] == str(2**130)
    assert payload["sender"] == ALICE
    assert event_from_payload("SwapExecuted", payload) == event


def test_liquidity_added_restores_from_stored_payload():
    payload = {
        "sender": ALICE,
        "token_a": TOKEN_A,
        "token_b": TOKEN_B,
        "amount_a": "950",
        "amount_b": "1000",
        "liquidity_minted": "500",
    }

    event = event_from_payload("LiquidityAdded", payload)

    assert isinstance(event, LiquidityAdded)
    assert event.amount_a == 950
