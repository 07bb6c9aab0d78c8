from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

import httpx

from amm_gateway.application.ports.amm_router_port import AmmRouterPort
from amm_gateway.application.ports.asset_ledger_port import AssetLedgerPort
from amm_gateway.domain.entities.swap import SwapKind


logger = logging.getLogger(__name__)


class AmmServiceError(RuntimeError):
    pass


@dataclass(frozen=True)
class AmmRouterClientSettings:
    api_base: str
    router_address: str
    wrapped_native: str
    timeout_seconds: float


class HttpAmmRouterClient(AmmRouterPort):
    """AMM adapter: the remote service prices the operation, settlement happens here.

    The remote side returns realized amounts; the router account then moves the
    assets on the shared ledger (pull escrowed input with the granted allowance,
    pay output, mint or burn shares, hand back unspent native value) so those
    moves commit or roll back with the caller's operation.
    """

    def __init__(
        self,
        settings: AmmRouterClientSettings,
        *,
        ledger: AssetLedgerPort,
        http_client: httpx.Client | None = None,
    ):
        self._settings = settings
        self._ledger = ledger
        self._http_client = http_client
        self.router_address = settings.router_address
        self.wrapped_native = settings.wrapped_native

    def get_pair(self, *, token_a: str, token_b: str) -> str | None:
        payload = self._request(
            "GET",
            "/v1/pairs",
            params={"token_a": token_a, "token_b": token_b},
            allow_not_found=True,
        )
        pair = payload.get("pair")
        return str(pair).lower() if pair else None

    def swap_exact_tokens_for_tokens(self, *, sender, amount_in, amount_out_min, path, to, deadline) -> list[int]:
        amounts = self._quote_swap(SwapKind.EXACT_TOKENS_FOR_TOKENS, path, amount_in, amount_out_min, 0, deadline)
        self._require(amounts[-1] >= amount_out_min, "insufficient output amount")
        self._settle_swap(sender=sender, path=path, amounts=amounts, to=to, native_in=False, native_out=False)
        return amounts

    def swap_tokens_for_exact_tokens(self, *, sender, amount_out, amount_in_max, path, to, deadline) -> list[int]:
        amounts = self._quote_swap(SwapKind.TOKENS_FOR_EXACT_TOKENS, path, amount_out, amount_in_max, 0, deadline)
        self._require(amounts[0] <= amount_in_max, "excessive input amount")
        self._settle_swap(sender=sender, path=path, amounts=amounts, to=to, native_in=False, native_out=False)
        return amounts

    def swap_exact_eth_for_tokens(self, *, sender, value, amount_out_min, path, to, deadline) -> list[int]:
        amounts = self._quote_swap(SwapKind.EXACT_ETH_FOR_TOKENS, path, value, amount_out_min, value, deadline)
        self._require(amounts[-1] >= amount_out_min, "insufficient output amount")
        self._settle_swap(sender=sender, path=path, amounts=amounts, to=to, native_in=True, native_out=False, value=value)
        return amounts

    def swap_tokens_for_exact_eth(self, *, sender, amount_out, amount_in_max, path, to, deadline) -> list[int]:
        amounts = self._quote_swap(SwapKind.TOKENS_FOR_EXACT_ETH, path, amount_out, amount_in_max, 0, deadline)
        self._require(amounts[0] <= amount_in_max, "excessive input amount")
        self._settle_swap(sender=sender, path=path, amounts=amounts, to=to, native_in=False, native_out=True)
        return amounts

    def swap_exact_tokens_for_eth(self, *, sender, amount_in, amount_out_min, path, to, deadline) -> list[int]:
        amounts = self._quote_swap(SwapKind.EXACT_TOKENS_FOR_ETH, path, amount_in, amount_out_min, 0, deadline)
        self._require(amounts[-1] >= amount_out_min, "insufficient output amount")
        self._settle_swap(sender=sender, path=path, amounts=amounts, to=to, native_in=False, native_out=True)
        return amounts

    def swap_eth_for_exact_tokens(self, *, sender, value, amount_out, path, to, deadline) -> list[int]:
        amounts = self._quote_swap(SwapKind.ETH_FOR_EXACT_TOKENS, path, amount_out, value, value, deadline)
        self._require(amounts[0] <= value, "excessive input amount")
        self._settle_swap(sender=sender, path=path, amounts=amounts, to=to, native_in=True, native_out=False, value=value)
        return amounts

    def add_liquidity(
        self,
        *,
        sender,
        token_a,
        token_b,
        amount_a_desired,
        amount_b_desired,
        amount_a_min,
        amount_b_min,
        to,
        deadline,
    ) -> tuple[int, int, int]:
        payload = self._request(
            "POST",
            "/v1/liquidity/add",
            json={
                "token_a": token_a,
                "token_b": token_b,
                "amount_a_desired": str(amount_a_desired),
                "amount_b_desired": str(amount_b_desired),
                "amount_a_min": str(amount_a_min),
                "amount_b_min": str(amount_b_min),
                "deadline": deadline,
            },
        )
        pair, amount_a, amount_b, liquidity = self._parse_liquidity(payload)
        self._require(amount_a >= amount_a_min and amount_b >= amount_b_min, "insufficient pooled amount")
        self._pull(asset=token_a, owner=sender, amount=amount_a)
        self._pull(asset=token_b, owner=sender, amount=amount_b)
        self._ledger.mint(asset=pair, recipient=to, amount=liquidity)
        return amount_a, amount_b, liquidity

    def add_liquidity_eth(
        self,
        *,
        sender,
        value,
        token,
        amount_token_desired,
        amount_token_min,
        amount_eth_min,
        to,
        deadline,
    ) -> tuple[int, int, int]:
        payload = self._request(
            "POST",
            "/v1/liquidity/add",
            json={
                "token_a": token,
                "token_b": self.wrapped_native,
                "amount_a_desired": str(amount_token_desired),
                "amount_b_desired": str(value),
                "amount_a_min": str(amount_token_min),
                "amount_b_min": str(amount_eth_min),
                "deadline": deadline,
            },
        )
        pair, amount_token, amount_eth, liquidity = self._parse_liquidity(payload)
        self._require(amount_token >= amount_token_min and amount_eth >= amount_eth_min, "insufficient pooled amount")
        self._require(amount_eth <= value, "pool consumed more native value than forwarded")
        self._pull(asset=token, owner=sender, amount=amount_token)
        self._send_native(sender=sender, recipient=self.router_address, amount=value)
        if value > amount_eth:
            self._send_native(sender=self.router_address, recipient=sender, amount=value - amount_eth)
        self._ledger.mint(asset=pair, recipient=to, amount=liquidity)
        return amount_token, amount_eth, liquidity

    def remove_liquidity(
        self,
        *,
        sender,
        token_a,
        token_b,
        liquidity,
        amount_a_min,
        amount_b_min,
        to,
        deadline,
    ) -> tuple[int, int]:
        payload = self._request(
            "POST",
            "/v1/liquidity/remove",
            json={
                "token_a": token_a,
                "token_b": token_b,
                "liquidity": str(liquidity),
                "amount_a_min": str(amount_a_min),
                "amount_b_min": str(amount_b_min),
                "deadline": deadline,
            },
        )
        try:
            pair = str(payload["pair"]).lower()
            amount_a = int(payload["amount_a"])
            amount_b = int(payload["amount_b"])
        except (KeyError, TypeError, ValueError) as exc:
            raise AmmServiceError(f"malformed remove-liquidity response: {payload}") from exc
        self._require(amount_a >= amount_a_min and amount_b >= amount_b_min, "insufficient withdrawn amount")

        self._pull(asset=pair, owner=sender, amount=liquidity)
        if not self._ledger.burn(asset=pair, holder=self.router_address, amount=liquidity):
            raise AmmServiceError("share burn failed")
        self._pay(asset=token_a, recipient=to, amount=amount_a)
        self._pay(asset=token_b, recipient=to, amount=amount_b)
        return amount_a, amount_b

    def _quote_swap(
        self,
        kind: SwapKind,
        path: Sequence[str],
        amount: int,
        amount_limit: int,
        value: int,
        deadline: int,
    ) -> list[int]:
        payload = self._request(
            "POST",
            "/v1/swaps",
            json={
                "kind": kind.value,
                "path": list(path),
                "amount": str(amount),
                "amount_limit": str(amount_limit),
                "value": str(value),
                "deadline": deadline,
            },
        )
        try:
            amounts = [int(item) for item in payload["amounts"]]
        except (KeyError, TypeError, ValueError) as exc:
            raise AmmServiceError(f"malformed swap response: {payload}") from exc
        if len(amounts) != len(path):
            raise AmmServiceError(f"swap response has {len(amounts)} amounts for a path of {len(path)}")
        return amounts

    def _settle_swap(
        self,
        *,
        sender: str,
        path: Sequence[str],
        amounts: list[int],
        to: str,
        native_in: bool,
        native_out: bool,
        value: int = 0,
    ) -> None:
        if native_in:
            self._send_native(sender=sender, recipient=self.router_address, amount=value)
            if value > amounts[0]:
                self._send_native(sender=self.router_address, recipient=sender, amount=value - amounts[0])
        else:
            self._pull(asset=path[0], owner=sender, amount=amounts[0])

        if native_out:
            self._send_native(sender=self.router_address, recipient=to, amount=amounts[-1])
        else:
            self._pay(asset=path[-1], recipient=to, amount=amounts[-1])

        logger.info(
            "amm_router_client: settled_swap path=%s amount_in=%s amount_out=%s to=%s",
            "->".join(path),
            amounts[0],
            amounts[-1],
            to,
        )

    def _pull(self, *, asset: str, owner: str, amount: int) -> None:
        ok = self._ledger.transfer_from(
            asset=asset,
            spender=self.router_address,
            owner=owner,
            recipient=self.router_address,
            amount=amount,
        )
        if not ok:
            raise AmmServiceError(f"transfer_from failed asset={asset} owner={owner} amount={amount}")

    def _pay(self, *, asset: str, recipient: str, amount: int) -> None:
        if not self._ledger.transfer(asset=asset, sender=self.router_address, recipient=recipient, amount=amount):
            raise AmmServiceError(f"transfer failed asset={asset} recipient={recipient} amount={amount}")

    def _send_native(self, *, sender: str, recipient: str, amount: int) -> None:
        if not self._ledger.send_native(sender=sender, recipient=recipient, amount=amount):
            raise AmmServiceError(f"native transfer failed sender={sender} recipient={recipient} amount={amount}")

    @staticmethod
    def _require(condition: bool, message: str) -> None:
        if not condition:
            raise AmmServiceError(message)

    @staticmethod
    def _parse_liquidity(payload: dict) -> tuple[str, int, int, int]:
        try:
            return (
                str(payload["pair"]).lower(),
                int(payload["amount_a"]),
                int(payload["amount_b"]),
                int(payload["liquidity"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise AmmServiceError(f"malformed add-liquidity response: {payload}") from exc

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: dict | None = None,
        allow_not_found: bool = False,
    ) -> dict:
        url = f"{self._settings.api_base.rstrip('/')}{path}"
        try:
            if self._http_client is not None:
                response = self._http_client.request(method, url, params=params, json=json)
            else:
                with httpx.Client(timeout=self._settings.timeout_seconds) as client:
                    response = client.request(method, url, params=params, json=json)
            if allow_not_found and response.status_code == 404:
                return {}
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise AmmServiceError(f"AMM request failed: {method} {path}: {exc}") from exc

        if not isinstance(payload, dict):
            raise AmmServiceError(f"unexpected AMM payload for {path}: {payload!r}")
        if payload.get("error"):
            raise AmmServiceError(str(payload["error"]))
        return payload
