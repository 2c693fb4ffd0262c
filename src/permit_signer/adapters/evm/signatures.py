"""
EIP-2612 Off-Chain Signing Utilities

Local EIP-712 helpers for EIP-2612 ``permit`` messages.  All cryptographic
operations are performed in-process using ``eth_account``; nothing in this
module talks to an RPC endpoint.

Exported helpers
----------------
build_permit_typed_data
    Assemble the EIP-712 domain, Permit type table and message into an
    ``EIP2612TypedData`` envelope without signing.

sign_permit
    Sign an ``EIP2612TypedData`` envelope with a private key and return the
    packed signature together with its (v, r, s) components.

compute_permit_digest / compute_domain_separator
    Recompute the EIP-712 digest and domain separator independently of the
    signing call.

recover_permit_signer
    Recover the signer address from a typed-data envelope and signature.
"""

from typing import Tuple

from eth_account import Account
from eth_account.messages import encode_typed_data, SignableMessage
from eth_utils import keccak, to_hex

from .standards import EIP712Domain, PermitMessage, EIP2612TypedData
from .schemas import EVMECDSASignature
from ...config import PERMIT_DOMAIN_VERSION
from ...engine.exceptions import PermitSignatureError
from ...utils import int_to_hex32


def build_permit_typed_data(
    *,
    token_name: str,
    chain_id: int,
    token: str,
    owner: str,
    spender: str,
    value: int,
    nonce: int,
    deadline: int,
    domain_version: str = PERMIT_DOMAIN_VERSION,
) -> EIP2612TypedData:
    """
    Wrap permit fields in an EIP-712 ``EIP2612TypedData`` envelope.

    Args:
        token_name:     Token ``name()`` as returned on-chain; used as the
                        domain ``name``.
        chain_id:       EVM network ID.
        token:          Token contract address; used as ``verifyingContract``.
        owner:          Address granting the allowance (the signer).
        spender:        Address receiving the allowance.
        value:          Allowance in the token's smallest unit.
        nonce:          Current ``nonces(owner)`` value.
        deadline:       Unix timestamp after which the permit is invalid.
        domain_version: EIP-712 domain ``version``; ``"1"`` for most tokens.

    Returns:
        ``EIP2612TypedData`` whose ``to_dict()`` is compatible with
        ``eth_account`` and ``eth_signTypedData_v4``.
    """
    domain = EIP712Domain(
        name=token_name,
        version=domain_version,
        chainId=chain_id,
        verifyingContract=token,
    )
    message = PermitMessage(
        owner=owner,
        spender=spender,
        value=value,
        nonce=nonce,
        deadline=deadline,
    )
    return EIP2612TypedData(domain=domain, message=message)


def encode_permit(typed_data: EIP2612TypedData) -> SignableMessage:
    """EIP-712 encode the envelope into an EIP-191 version 0x01 message."""
    return encode_typed_data(full_message=typed_data.to_dict())


def compute_domain_separator(typed_data: EIP2612TypedData) -> bytes:
    """
    Return the 32-byte EIP-712 domain separator for the envelope's domain.
    """
    return bytes(encode_permit(typed_data).header)


def compute_permit_digest(typed_data: EIP2612TypedData) -> bytes:
    """
    Recompute the digest that a permit signature commits to.

    ``keccak256(0x19 || 0x01 || domainSeparator || hashStruct(message))``

    Returns:
        The 32-byte digest.
    """
    signable = encode_permit(typed_data)
    return keccak(b"\x19" + signable.version + signable.header + signable.body)


def sign_permit(
    private_key: str,
    typed_data: EIP2612TypedData,
) -> Tuple[str, EVMECDSASignature]:
    """
    Sign an EIP-2612 permit envelope.

    Signing is performed entirely in-process via ``eth_account``.

    Args:
        private_key: Hex-encoded secp256k1 private key (with or without
                     ``0x`` prefix).
        typed_data:  Envelope built by ``build_permit_typed_data``.

    Returns:
        Tuple of the packed 65-byte signature (0x-prefixed hex) and the
        ``EVMECDSASignature`` holding v, r and s.

    Raises:
        PermitSignatureError: If the produced components are malformed or
            disagree with the packed signature.

    Example::

        typed_data = build_permit_typed_data(
            token_name="USD Coin", chain_id=1,
            token="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
            owner="0xOwner", spender="0xSpender",
            value=1_000_000, nonce=0, deadline=2_000_000_000,
        )
        signature, components = sign_permit("0xYOUR_PRIVATE_KEY", typed_data)
    """
    signed = Account.sign_typed_data(private_key, full_message=typed_data.to_dict())

    try:
        components = EVMECDSASignature(
            v=signed.v,
            r=int_to_hex32(signed.r),
            s=int_to_hex32(signed.s),
        )
        packed = components.to_packed_hex()
    except ValueError as e:
        raise PermitSignatureError(f"Malformed signature components: {e}") from e

    signature = to_hex(signed.signature)
    if signature.lower() != packed.lower():
        raise PermitSignatureError(
            f"Packed signature {signature} does not match components {packed}"
        )

    return signature, components


def recover_permit_signer(typed_data: EIP2612TypedData, signature: str) -> str:
    """
    Recover the address that produced ``signature`` over ``typed_data``.

    Args:
        typed_data: Envelope that was signed.
        signature:  Packed 65-byte signature as 0x-prefixed hex.

    Returns:
        Checksum address of the signer.
    """
    return Account.recover_message(encode_permit(typed_data), signature=signature)
