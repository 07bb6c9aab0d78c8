from __future__ import annotations

from typing import Protocol, Sequence


class AmmRouterPort(Protocol):
    """Narrow interface to the external AMM service.

    ``sender`` is the account the router acts for (the core's custody account);
    input assets are pulled from it using the allowance it granted to
    ``router_address``. Every call either returns realized amounts or raises.
    """

    router_address: str
    wrapped_native: str

    def get_pair(self, *, token_a: str, token_b: str) -> str | None:
        ...

    def swap_exact_tokens_for_tokens(
        self,
        *,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        ...

    def swap_tokens_for_exact_tokens(
        self,
        *,
        sender: str,
        amount_out: int,
        amount_in_max: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        ...

    def swap_exact_eth_for_tokens(
        self,
        *,
        sender: str,
        value: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        ...

    def swap_tokens_for_exact_eth(
        self,
        *,
        sender: str,
        amount_out: int,
        amount_in_max: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        ...

    def swap_exact_tokens_for_eth(
        self,
        *,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        ...

    def swap_eth_for_exact_tokens(
        self,
        *,
        sender: str,
        value: int,
        amount_out: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        ...

    def add_liquidity(
        self,
        *,
        sender: str,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int, int]:
        ...

    def add_liquidity_eth(
        self,
        *,
        sender: str,
        value: int,
        token: str,
        amount_token_desired: int,
        amount_token_min: int,
        amount_eth_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int, int]:
        ...

    def remove_liquidity(
        self,
        *,
        sender: str,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int]:
        ...
