from __future__ import annotations

from amm_gateway.application.dto.liquidity import (
    AddLiquidityETHInput,
    AddLiquidityInput,
    AddLiquidityOutput,
)
from amm_gateway.application.services.allowance_manager import AllowanceManager
from amm_gateway.application.services.asset_custodian import AssetCustodian
from amm_gateway.application.services.event_ledger import EventLedger
from amm_gateway.application.services.exchange_delegate import ExchangeDelegate
from amm_gateway.application.services.operation_scope import OperationScope
from amm_gateway.domain.entities.events import LiquidityAdded
from amm_gateway.domain.exceptions import AddLiquidityFailed
from amm_gateway.domain.services.request_validation import (
    require_positive,
    validate_add_liquidity,
)

from .common import Clock, unix_now


class AddLiquidityUseCase:
    def __init__(
        self,
        *,
        scope: OperationScope,
        custodian: AssetCustodian,
        allowances: AllowanceManager,
        delegate: ExchangeDelegate,
        events: EventLedger,
        clock: Clock = unix_now,
    ):
        self._scope = scope
        self._custodian = custodian
        self._allowances = allowances
        self._delegate = delegate
        self._events = events
        self._clock = clock

    def execute(self, command: AddLiquidityInput) -> AddLiquidityOutput:
        validate_add_liquidity(
            token_a=command.token_a,
            token_b=command.token_b,
            amount_a_desired=command.amount_a_desired,
            amount_b_desired=command.amount_b_desired,
            amount_a_min=command.amount_a_min,
            amount_b_min=command.amount_b_min,
            recipient=command.recipient,
            deadline=command.deadline,
            now=self._clock(),
        )

        spender = self._delegate.spender
        with self._scope.run("add_liquidity"):
            self._custodian.pull_in(asset=command.token_a, source=command.caller, amount=command.amount_a_desired)
            self._custodian.pull_in(asset=command.token_b, source=command.caller, amount=command.amount_b_desired)
            self._allowances.grant(asset=command.token_a, spender=spender, amount=command.amount_a_desired)
            self._allowances.grant(asset=command.token_b, spender=spender, amount=command.amount_b_desired)

            execution = self._delegate.add_liquidity(
                token_a=command.token_a,
                token_b=command.token_b,
                amount_a_desired=command.amount_a_desired,
                amount_b_desired=command.amount_b_desired,
                amount_a_min=command.amount_a_min,
                amount_b_min=command.amount_b_min,
                to=command.recipient,
                deadline=command.deadline,
            ).unwrap()
            if execution.amount_a > command.amount_a_desired or execution.amount_b > command.amount_b_desired:
                raise AddLiquidityFailed("Pool consumed more than the desired amounts.")

            self._allowances.revoke(asset=command.token_a, spender=spender)
            self._allowances.revoke(asset=command.token_b, spender=spender)
            refunded_a = self._custodian.refund_unused(
                asset=command.token_a,
                recipient=command.caller,
                supplied=command.amount_a_desired,
                used=execution.amount_a,
            )
            refunded_b = self._custodian.refund_unused(
                asset=command.token_b,
                recipient=command.caller,
                supplied=command.amount_b_desired,
                used=execution.amount_b,
            )

            self._events.emit(
                LiquidityAdded(
                    sender=command.caller,
                    token_a=command.token_a,
                    token_b=command.token_b,
                    amount_a=execution.amount_a,
                    amount_b=execution.amount_b,
                    liquidity_minted=execution.liquidity,
                )
            )

        return AddLiquidityOutput(
            token_a=command.token_a,
            token_b=command.token_b,
            amount_a=execution.amount_a,
            amount_b=execution.amount_b,
            liquidity=execution.liquidity,
            refunded_a=refunded_a,
            refunded_b=refunded_b,
        )


class AddLiquidityETHUseCase:
    """Token side is escrowed and allowed; native value travels with the AMM call."""

    def __init__(
        self,
        *,
        scope: OperationScope,
        custodian: AssetCustodian,
        allowances: AllowanceManager,
        delegate: ExchangeDelegate,
        events: EventLedger,
        clock: Clock = unix_now,
    ):
        self._scope = scope
        self._custodian = custodian
        self._allowances = allowances
        self._delegate = delegate
        self._events = events
        self._clock = clock

    def execute(self, command: AddLiquidityETHInput) -> AddLiquidityOutput:
        wrapped = self._delegate.wrapped_native
        validate_add_liquidity(
            token_a=command.token,
            token_b=wrapped,
            amount_a_desired=command.amount_token_desired,
            amount_b_desired=command.value,
            amount_a_min=command.amount_token_min,
            amount_b_min=command.amount_eth_min,
            recipient=command.recipient,
            deadline=command.deadline,
            now=self._clock(),
        )
        require_positive(command.value, field_name="value")

        spender = self._delegate.spender
        with self._scope.run("add_liquidity_eth"):
            native_baseline = self._custodian.native_balance()
            self._custodian.receive_native(source=command.caller, amount=command.value)
            self._custodian.pull_in(asset=command.token, source=command.caller, amount=command.amount_token_desired)
            self._allowances.grant(asset=command.token, spender=spender, amount=command.amount_token_desired)

            execution = self._delegate.add_liquidity_eth(
                token=command.token,
                value=command.value,
                amount_token_desired=command.amount_token_desired,
                amount_token_min=command.amount_token_min,
                amount_eth_min=command.amount_eth_min,
                to=command.recipient,
                deadline=command.deadline,
            ).unwrap()
            if execution.amount_a > command.amount_token_desired or execution.amount_b > command.value:
                raise AddLiquidityFailed("Pool consumed more than the desired amounts.")

            self._allowances.revoke(asset=command.token, spender=spender)
            refunded_token = self._custodian.refund_unused(
                asset=command.token,
                recipient=command.caller,
                supplied=command.amount_token_desired,
                used=execution.amount_a,
            )
            refunded_native = self._custodian.refund_excess_native(
                recipient=command.caller,
                baseline=native_baseline,
            )

            self._events.emit(
                LiquidityAdded(
                    sender=command.caller,
                    token_a=command.token,
                    token_b=wrapped,
                    amount_a=execution.amount_a,
                    amount_b=execution.amount_b,
                    liquidity_minted=execution.liquidity,
                )
            )

        return AddLiquidityOutput(
            token_a=command.token,
            token_b=wrapped,
            amount_a=execution.amount_a,
            amount_b=execution.amount_b,
            liquidity=execution.liquidity,
            refunded_a=refunded_token,
            refunded_b=refunded_native,
        )
