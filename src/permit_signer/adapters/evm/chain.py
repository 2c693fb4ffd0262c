"""
EVM On-Chain Reads

Read-only RPC helpers used to fill in the parts of a permit that live
on-chain: the token's EIP-712 domain name, the owner's current permit nonce
and the network chain id.

Every helper awaits a single call on the supplied ``AsyncWeb3`` instance.
Errors raised by web3 (connection failures, reverts, ABI decoding errors)
are not caught here.
"""

from dataclasses import dataclass

from web3 import AsyncWeb3

from .ERC20_ABI import get_permit_reader_abi
from ...utils import logger


@dataclass(frozen=True)
class PermitContext:
    """
    On-chain values a permit depends on.

    Attributes:
        name: Token ``name()``, used as the EIP-712 domain name.
        nonce: ``nonces(owner)`` at the time of the read.
        chain_id: Chain id reported by the RPC endpoint.
    """
    name: str
    nonce: int
    chain_id: int


def _token_contract(w3: AsyncWeb3, token: str):
    return w3.eth.contract(
        address=AsyncWeb3.to_checksum_address(token),
        abi=get_permit_reader_abi(),
    )


async def fetch_token_name(w3: AsyncWeb3, token: str) -> str:
    """Call ``name()`` on the token contract."""
    name = await _token_contract(w3, token).functions.name().call()
    logger.debug(f"name() on {token}: {name!r}")
    return name


async def fetch_permit_nonce(w3: AsyncWeb3, token: str, owner: str) -> int:
    """Call ``nonces(owner)`` on the token contract."""
    owner_checksum = AsyncWeb3.to_checksum_address(owner)
    nonce = await _token_contract(w3, token).functions.nonces(owner_checksum).call()
    logger.debug(f"nonces({owner_checksum}) on {token}: {nonce}")
    return int(nonce)


async def fetch_chain_id(w3: AsyncWeb3) -> int:
    chain_id = await w3.eth.chain_id
    logger.debug(f"eth_chainId: {chain_id}")
    return int(chain_id)


async def query_domain_separator(w3: AsyncWeb3, token: str) -> bytes:
    """
    Query the token's ``DOMAIN_SEPARATOR()`` view.

    Args:
        w3:    AsyncWeb3 instance connected to the target chain.
        token: Token contract address.

    Returns:
        The domain separator as raw 32-byte value.
    """
    return bytes(await _token_contract(w3, token).functions.DOMAIN_SEPARATOR().call())


async def fetch_permit_context(w3: AsyncWeb3, token: str, owner: str) -> PermitContext:
    """
    Read the token name, the owner's nonce and the chain id, in that order.

    The calls are awaited one after another; the first failure propagates.

    Args:
        w3:    AsyncWeb3 instance connected to the target chain.
        token: Token contract address.
        owner: Address whose permit nonce is read.

    Returns:
        PermitContext with the three values.
    """
    name = await fetch_token_name(w3, token)
    nonce = await fetch_permit_nonce(w3, token, owner)
    chain_id = await fetch_chain_id(w3)
    return PermitContext(name=name, nonce=nonce, chain_id=chain_id)
