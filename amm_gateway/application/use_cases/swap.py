from __future__ import annotations

from amm_gateway.application.dto.swap import SwapInput, SwapOutput
from amm_gateway.application.services.allowance_manager import AllowanceManager
from amm_gateway.application.services.asset_custodian import AssetCustodian
from amm_gateway.application.services.event_ledger import EventLedger
from amm_gateway.application.services.exchange_delegate import ExchangeDelegate
from amm_gateway.application.services.operation_scope import OperationScope
from amm_gateway.domain.entities.events import SwapExecuted
from amm_gateway.domain.entities.swap import SwapKind
from amm_gateway.domain.exceptions import InvalidParams, InvalidPath, SwapFailed
from amm_gateway.domain.services.request_validation import require_positive, validate_swap

from .common import Clock, unix_now


class SwapUseCase:
    """Runs the six swap shapes: validate, escrow, allow, delegate, refund, record.

    ``amount`` is the exact side of the swap. For ``EXACT_ETH_FOR_TOKENS`` it must
    equal the attached ``value``; for ``ETH_FOR_EXACT_TOKENS`` the attached value
    is the input bound and is forwarded in full, the unspent part refunded.
    """

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

    def execute(self, command: SwapInput) -> SwapOutput:
        path = tuple(command.path or ())
        validate_swap(
            path=path,
            amount=command.amount,
            amount_limit=command.amount_limit,
            recipient=command.recipient,
            deadline=command.deadline,
            now=self._clock(),
        )
        self._validate_native_leg(command.kind, path)
        self._validate_value(command)

        with self._scope.run(f"swap:{command.kind.value}"):
            return self._settle(command, path)

    def _settle(self, command: SwapInput, path: tuple[str, ...]) -> SwapOutput:
        kind = command.kind
        asset_in = path[0]
        spender = self._delegate.spender
        native_baseline = self._custodian.native_balance()

        if kind.native_in:
            supplied = command.value
            self._custodian.receive_native(source=command.caller, amount=supplied)
        else:
            supplied = command.amount_limit if kind.exact_output else command.amount
            self._custodian.pull_in(asset=asset_in, source=command.caller, amount=supplied)
            self._allowances.grant(asset=asset_in, spender=spender, amount=supplied)

        execution = self._delegate.swap(
            kind=kind,
            path=path,
            amount=command.amount,
            amount_limit=command.amount_limit,
            to=command.recipient,
            deadline=command.deadline,
            value=command.value,
        ).unwrap()
        if execution.amount_in > supplied:
            raise SwapFailed("Swap consumed more than the escrowed input.")

        refunded_in = 0
        if not kind.native_in:
            self._allowances.revoke(asset=asset_in, spender=spender)
            refunded_in = self._custodian.refund_unused(
                asset=asset_in,
                recipient=command.caller,
                supplied=supplied,
                used=execution.amount_in,
            )

        native_refunded = 0
        if kind.native_in or kind.native_out:
            native_refunded = self._custodian.refund_excess_native(
                recipient=command.caller,
                baseline=native_baseline,
            )

        self._events.emit(
            SwapExecuted(
                sender=command.caller,
                asset_in=asset_in,
                asset_out=path[-1],
                amount_in=execution.amount_in,
                amount_out=execution.amount_out,
            )
        )
        return SwapOutput(
            kind=kind,
            amounts=execution.amounts,
            amount_in=execution.amount_in,
            amount_out=execution.amount_out,
            refunded_in=refunded_in,
            native_refunded=native_refunded,
        )

    def _validate_native_leg(self, kind: SwapKind, path: tuple[str, ...]) -> None:
        if not (kind.native_in or kind.native_out):
            return
        wrapped = self._delegate.wrapped_native.lower()
        if len(path) != 2:
            raise InvalidPath("native swaps take a two-hop path.")
        native_end = path[0] if kind.native_in else path[-1]
        if native_end.lower() != wrapped:
            raise InvalidPath("native leg of the path must be the wrapped native asset.")

    def _validate_value(self, command: SwapInput) -> None:
        if not command.kind.native_in:
            if command.value:
                raise InvalidParams("native value is only accepted by native-in swaps.")
            return
        require_positive(command.value, field_name="value")
        if command.kind is SwapKind.EXACT_ETH_FOR_TOKENS and command.value != command.amount:
            raise InvalidParams("attached value must equal amount for exact native input.")
