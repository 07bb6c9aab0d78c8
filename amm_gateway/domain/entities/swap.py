from __future__ import annotations

from enum import Enum


class SwapKind(str, Enum):
    EXACT_TOKENS_FOR_TOKENS = "exact-tokens-for-tokens"
    TOKENS_FOR_EXACT_TOKENS = "tokens-for-exact-tokens"
    EXACT_ETH_FOR_TOKENS = "exact-eth-for-tokens"
    TOKENS_FOR_EXACT_ETH = "tokens-for-exact-eth"
    EXACT_TOKENS_FOR_ETH = "exact-tokens-for-eth"
    ETH_FOR_EXACT_TOKENS = "eth-for-exact-tokens"

    @property
    def native_in(self) -> bool:
        return self in (SwapKind.EXACT_ETH_FOR_TOKENS, SwapKind.ETH_FOR_EXACT_TOKENS)

    @property
    def native_out(self) -> bool:
        return self in (SwapKind.TOKENS_FOR_EXACT_ETH, SwapKind.EXACT_TOKENS_FOR_ETH)

    @property
    def exact_output(self) -> bool:
        return self in (
            SwapKind.TOKENS_FOR_EXACT_TOKENS,
            SwapKind.TOKENS_FOR_EXACT_ETH,
            SwapKind.ETH_FOR_EXACT_TOKENS,
        )
