"""
Signer registry.

The client does not hold keys or sign anything itself. A ``Wallet`` maps
addresses to ``Signer`` objects supplied by the application; when
``send_transaction`` finds a signer for ``from`` it signs locally and
submits the raw transaction, otherwise the node is asked to sign.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Protocol, runtime_checkable

from cfx_rpc.address import AddressCodec, HexAddressCodec
from cfx_rpc.errors import WalletError
from cfx_rpc.types.transaction import TransactionIntent

__all__ = ["SignedTransaction", "Signer", "Wallet"]


@runtime_checkable
class SignedTransaction(Protocol):
    def serialize(self) -> str:
        """Return the 0x-prefixed raw encoding."""
        ...


@runtime_checkable
class Signer(Protocol):
    address: str

    async def sign_transaction(self, intent: TransactionIntent) -> SignedTransaction:
        ...


class Wallet:
    """
    In-memory mapping from normalized address to ``Signer``.

    Example:
        ```python
        wallet = Wallet()
        wallet.add(my_signer)
        assert wallet.has(my_signer.address)
        ```
    """

    def __init__(self, codec: Optional[AddressCodec] = None) -> None:
        self._codec = codec or HexAddressCodec()
        self._signers: Dict[str, Signer] = {}

    def _key(self, address: str) -> str:
        return self._codec.decode(address).hex_address

    def add(self, signer: Signer) -> Signer:
        self._signers[self._key(signer.address)] = signer
        return signer

    def remove(self, address: str) -> Optional[Signer]:
        return self._signers.pop(self._key(address), None)

    def has(self, address: str) -> bool:
        if not self._codec.is_valid(address):
            return False
        return self._key(address) in self._signers

    def get(self, address: str) -> Signer:
        """
        Get the signer for an address.

        Raises:
            WalletError: If no signer is registered for ``address``.
        """
        signer = self._signers.get(self._key(address)) if self._codec.is_valid(address) else None
        if signer is None:
            raise WalletError(address)
        return signer

    def clear(self) -> None:
        self._signers.clear()

    def __len__(self) -> int:
        return len(self._signers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._signers)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self.has(address)
