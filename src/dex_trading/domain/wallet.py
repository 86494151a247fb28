from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class WalletKey:
    """The user's account on one chain.

    The passphrase is only checked for presence here; signing happens outside this package.
    It is excluded from `repr` so it never ends up in logs.
    """

    address: str | None = None
    passphrase: str | None = field(default=None, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WalletKey:
        return cls(address=data.get("address"), passphrase=data.get("passphrase"))


def wallet_keys_from_dict(data: Mapping[str, Mapping[str, Any]]) -> dict[str, WalletKey]:
    """Build a `{chain_symbol: WalletKey}` mapping from the app's key store shape."""
    return {symbol.lower(): WalletKey.from_dict(entry) for symbol, entry in data.items()}
