from __future__ import annotations

from amm_gateway.application.dto.liquidity import RemoveLiquidityInput, RemoveLiquidityOutput
from amm_gateway.application.services.allowance_manager import AllowanceManager
from amm_gateway.application.services.asset_custodian import AssetCustodian
from amm_gateway.application.services.event_ledger import EventLedger
from amm_gateway.application.services.exchange_delegate import ExchangeDelegate
from amm_gateway.application.services.operation_scope import OperationScope
from amm_gateway.domain.entities.events import LiquidityRemoved
from amm_gateway.domain.exceptions import InsufficientLiquidity, PairNotFound
from amm_gateway.domain.services.request_validation import validate_remove_liquidity

from .common import Clock, unix_now


class RemoveLiquidityUseCase:
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

    def execute(self, command: RemoveLiquidityInput) -> RemoveLiquidityOutput:
        validate_remove_liquidity(
            token_a=command.token_a,
            token_b=command.token_b,
            liquidity=command.liquidity,
            amount_a_min=command.amount_a_min,
            amount_b_min=command.amount_b_min,
            recipient=command.recipient,
            deadline=command.deadline,
            now=self._clock(),
        )

        spender = self._delegate.spender
        with self._scope.run("remove_liquidity"):
            pair = self._delegate.get_pair(token_a=command.token_a, token_b=command.token_b).unwrap()
            if not pair:
                raise PairNotFound(f"No pair for {command.token_a}/{command.token_b}.")
            held = self._custodian.balance_of(asset=pair, holder=command.caller)
            if held < command.liquidity:
                raise InsufficientLiquidity(f"Caller holds {held} shares, {command.liquidity} requested.")

            self._custodian.pull_in(asset=pair, source=command.caller, amount=command.liquidity)
            self._allowances.grant(asset=pair, spender=spender, amount=command.liquidity)

            # Shares are burned in full by the pool, so there is nothing to refund.
            execution = self._delegate.remove_liquidity(
                token_a=command.token_a,
                token_b=command.token_b,
                liquidity=command.liquidity,
                amount_a_min=command.amount_a_min,
                amount_b_min=command.amount_b_min,
                to=command.recipient,
                deadline=command.deadline,
            ).unwrap()
            self._allowances.revoke(asset=pair, spender=spender)

            self._events.emit(
                LiquidityRemoved(
                    sender=command.caller,
                    token_a=command.token_a,
                    token_b=command.token_b,
                    amount_a=execution.amount_a,
                    amount_b=execution.amount_b,
                    liquidity_burned=command.liquidity,
                )
            )

        return RemoveLiquidityOutput(
            pair=pair,
            amount_a=execution.amount_a,
            amount_b=execution.amount_b,
            liquidity=command.liquidity,
        )
