from __future__ import annotations

import unittest

from amm_gateway.application.dto.liquidity import (
    AddLiquidityETHInput,
    AddLiquidityInput,
    RemoveLiquidityInput,
)
from amm_gateway.application.use_cases.add_liquidity import AddLiquidityETHUseCase, AddLiquidityUseCase
from amm_gateway.application.use_cases.remove_liquidity import RemoveLiquidityUseCase
from amm_gateway.domain.entities.events import LiquidityAdded, LiquidityRemoved
from amm_gateway.domain.exceptions import (
    AddLiquidityFailed,
    DeadlinePassed,
    InsufficientAmount,
    InsufficientLiquidity,
    InvalidParams,
    PairNotFound,
    RemoveLiquidityFailed,
)

from fakes import ALICE, CORE, NOW, PAIR, ROUTER, TOKEN_A, TOKEN_B, WRAPPED, Core


class AddLiquidityUseCaseTests(unittest.TestCase):
    def setUp(self):
        self.core = Core()
        for token in (TOKEN_A, TOKEN_B):
            self.core.fund(token, ALICE, 1_000)
            self.core.approve_core(token, ALICE, 1_000)
        self.use_case = AddLiquidityUseCase(**self.core.orchestration())

    def _input(self, **overrides) -> AddLiquidityInput:
        payload = {
            "caller": ALICE,
            "token_a": TOKEN_A,
            "token_b": TOKEN_B,
            "amount_a_desired": 1_000,
            "amount_b_desired": 1_000,
            "amount_a_min": 900,
            "amount_b_min": 900,
            "recipient": ALICE,
            "deadline": NOW + 60,
        }
        payload.update(overrides)
        return AddLiquidityInput(**payload)

    def test_unused_amount_is_refunded_and_event_reports_used_amounts(self):
        self.core.amm.liquidity_result = (950, 1_000, 500)

        output = self.use_case.execute(self._input())

        self.assertEqual(self.core.ledger.balance_of(asset=TOKEN_A, holder=ALICE), 50)
        self.assertEqual(self.core.ledger.balance_of(asset=TOKEN_B, holder=ALICE), 0)
        self.assertEqual(self.core.ledger.balance_of(asset=PAIR, holder=ALICE), 500)
        self.assertEqual(output.refunded_a, 50)
        self.assertEqual(output.refunded_b, 0)
        self.assertEqual(
            self.core.sink.events,
            [
                LiquidityAdded(
                    sender=ALICE,
                    token_a=TOKEN_A,
                    token_b=TOKEN_B,
                    amount_a=950,
                    amount_b=1_000,
                    liquidity_minted=500,
                )
            ],
        )

    def test_custody_and_allowances_are_empty_afterwards(self):
        self.core.amm.liquidity_result = (950, 980, 500)

        self.use_case.execute(self._input())

        for token in (TOKEN_A, TOKEN_B):
            self.assertEqual(self.core.ledger.balance_of(asset=token, holder=CORE), 0)
            self.assertEqual(self.core.ledger.allowance(asset=token, owner=CORE, spender=ROUTER), 0)

    def test_identical_tokens_are_rejected(self):
        with self.assertRaises(InvalidParams):
            self.use_case.execute(self._input(token_b=TOKEN_A))
        self.assertEqual(self.core.ledger.calls, [])

    def test_deadline_passed(self):
        with self.assertRaises(DeadlinePassed):
            self.use_case.execute(self._input(deadline=NOW - 5))
        self.assertEqual(self.core.ledger.balance_of(asset=TOKEN_A, holder=ALICE), 1_000)

    def test_amm_failure_rolls_back_both_pulls(self):
        self.core.amm.error = ValueError("INSUFFICIENT_B_AMOUNT")

        with self.assertRaises(AddLiquidityFailed):
            self.use_case.execute(self._input())

        self.assertEqual(self.core.ledger.balance_of(asset=TOKEN_A, holder=ALICE), 1_000)
        self.assertEqual(self.core.ledger.balance_of(asset=TOKEN_B, holder=ALICE), 1_000)
        self.assertEqual(self.core.ledger.allowance(asset=TOKEN_A, owner=ALICE, spender=CORE), 1_000)
        self.assertEqual(self.core.sink.events, [])
        self.assertFalse(self.core.guard.locked)


class AddLiquidityETHUseCaseTests(unittest.TestCase):
    def setUp(self):
        self.core = Core()
        self.core.fund(TOKEN_A, ALICE, 1_000)
        self.core.approve_core(TOKEN_A, ALICE, 1_000)
        self.core.fund_native(ALICE, 1_000)
        self.use_case = AddLiquidityETHUseCase(**self.core.orchestration())

    def _input(self, **overrides) -> AddLiquidityETHInput:
        payload = {
            "caller": ALICE,
            "token": TOKEN_A,
            "amount_token_desired": 1_000,
            "amount_token_min": 800,
            "amount_eth_min": 200,
            "value": 300,
            "recipient": ALICE,
            "deadline": NOW + 60,
        }
        payload.update(overrides)
        return AddLiquidityETHInput(**payload)

    def test_refunds_unused_token_and_native(self):
        self.core.amm.liquidity_result = (900, 250, 400)

        output = self.use_case.execute(self._input())

        self.assertEqual(output.token_b, WRAPPED)
        self.assertEqual(output.refunded_a, 100)
        self.assertEqual(output.refunded_b, 50)
        self.assertEqual(self.core.ledger.balance_of(asset=TOKEN_A, holder=ALICE), 100)
        self.assertEqual(self.core.ledger.native_balance_of(holder=ALICE), 750)
        self.assertEqual(self.core.ledger.native_balance_of(holder=CORE), 0)
        self.assertEqual(self.core.sink.events[0].amount_b, 250)

    def test_zero_value_is_rejected(self):
        with self.assertRaises(InsufficientAmount):
            self.use_case.execute(self._input(value=0))
        self.assertEqual(self.core.ledger.calls, [])


class RemoveLiquidityUseCaseTests(unittest.TestCase):
    def setUp(self):
        self.core = Core()
        self.core.fund(PAIR, ALICE, 500)
        self.core.approve_core(PAIR, ALICE, 500)
        self.core.fund(TOKEN_A, ROUTER, 10_000)
        self.core.fund(TOKEN_B, ROUTER, 10_000)
        self.core.amm.removal_result = (100, 90)
        self.use_case = RemoveLiquidityUseCase(**self.core.orchestration())

    def _input(self, **overrides) -> RemoveLiquidityInput:
        payload = {
            "caller": ALICE,
            "token_a": TOKEN_A,
            "token_b": TOKEN_B,
            "liquidity": 200,
            "amount_a_min": 0,
            "amount_b_min": 0,
            "recipient": ALICE,
            "deadline": NOW + 60,
        }
        payload.update(overrides)
        return RemoveLiquidityInput(**payload)

    def test_burns_shares_and_pays_underlying(self):
        output = self.use_case.execute(self._input())

        self.assertEqual(output.pair, PAIR)
        self.assertEqual(self.core.ledger.balance_of(asset=PAIR, holder=ALICE), 300)
        self.assertEqual(self.core.ledger.balance_of(asset=PAIR, holder=CORE), 0)
        self.assertEqual(self.core.ledger.balance_of(asset=TOKEN_A, holder=ALICE), 100)
        self.assertEqual(self.core.ledger.balance_of(asset=TOKEN_B, holder=ALICE), 90)
        self.assertEqual(self.core.ledger.allowance(asset=PAIR, owner=CORE, spender=ROUTER), 0)
        self.assertEqual(
            self.core.sink.events,
            [
                LiquidityRemoved(
                    sender=ALICE,
                    token_a=TOKEN_A,
                    token_b=TOKEN_B,
                    amount_a=100,
                    amount_b=90,
                    liquidity_burned=200,
                )
            ],
        )

    def test_missing_pair_moves_no_shares(self):
        self.core.amm.pair = None

        with self.assertRaises(PairNotFound):
            self.use_case.execute(self._input())

        self.assertNotIn("transfer_from", self.core.ledger.call_names())
        self.assertEqual(self.core.ledger.balance_of(asset=PAIR, holder=ALICE), 500)

    def test_share_balance_below_request(self):
        with self.assertRaises(InsufficientLiquidity):
            self.use_case.execute(self._input(liquidity=501))
        self.assertNotIn("transfer_from", self.core.ledger.call_names())

    def test_amm_failure_restores_shares(self):
        self.core.amm.error = RuntimeError("K")

        with self.assertRaises(RemoveLiquidityFailed):
            self.use_case.execute(self._input())

        self.assertEqual(self.core.ledger.balance_of(asset=PAIR, holder=ALICE), 500)
        self.assertEqual(self.core.sink.events, [])


if __name__ == "__main__":
    unittest.main()
