"""Wallet address format checks shared by request schemas and path parameters."""

from __future__ import annotations

import re

from agent_market.core.exceptions import InvalidWalletAddressError

WALLET_ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
WALLET_ADDRESS_LENGTH = 42

_WALLET_RE = re.compile(WALLET_ADDRESS_PATTERN)


def is_valid_wallet_address(value: str) -> bool:
    return len(value) == WALLET_ADDRESS_LENGTH and bool(_WALLET_RE.match(value))


def require_wallet_address(value: str) -> str:
    """Return ``value`` unchanged or raise ``InvalidWalletAddressError``."""
    if not is_valid_wallet_address(value):
        raise InvalidWalletAddressError()
    return value
