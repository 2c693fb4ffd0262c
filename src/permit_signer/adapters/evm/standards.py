"""
EIP-2612 Permit Envelope

Immutable containers for the three parts of a permit signing request: the
token's EIP-712 domain, the ``Permit`` struct and the envelope that joins
them with the type table.  ``EIP2612TypedData.to_dict()`` is the value
passed to ``eth_account`` for both signing and digest recomputation, so the
field names follow the EIP-712 JSON keys (``chainId``,
``verifyingContract``) rather than Python naming.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List


PERMIT_TYPES: Dict[str, List[Dict[str, str]]] = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
    "Permit": [
        {"name": "owner", "type": "address"},
        {"name": "spender", "type": "address"},
        {"name": "value", "type": "uint256"},
        {"name": "nonce", "type": "uint256"},
        {"name": "deadline", "type": "uint256"},
    ],
}


@dataclass(frozen=True)
class EIP712Domain:
    """
    Signing domain of a permit-enabled token.

    ``name`` is the token's on-chain ``name()`` and ``verifyingContract`` the
    token address; ``chainId`` binds the signature to one network.
    """
    name: str
    version: str
    chainId: int
    verifyingContract: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chainId,
            "verifyingContract": self.verifyingContract,
        }


@dataclass(frozen=True)
class PermitMessage:
    """
    ``Permit`` struct: ``owner`` lets ``spender`` move up to ``value`` tokens
    until ``deadline``.  ``nonce`` is the owner's current ``nonces(owner)``.
    """
    owner: str
    spender: str
    value: int
    nonce: int
    deadline: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner,
            "spender": self.spender,
            "value": self.value,
            "nonce": self.nonce,
            "deadline": self.deadline,
        }


@dataclass(frozen=True)
class EIP2612TypedData:
    """
    Permit envelope in ``eth_signTypedData_v4`` form.

    Attributes:
        domain: Token signing domain.
        message: Permit being authorized.
        primary_type: Always ``"Permit"``.
        types: Copy of ``PERMIT_TYPES``; excluded from equality.
    """
    domain: EIP712Domain
    message: PermitMessage
    primary_type: str = "Permit"
    types: Dict[str, List[Dict[str, str]]] = field(
        default_factory=lambda: {name: list(fields) for name, fields in PERMIT_TYPES.items()},
        compare=False,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Return ``{types, primaryType, domain, message}``."""
        return {
            "types": self.types,
            "primaryType": self.primary_type,
            "domain": self.domain.to_dict(),
            "message": self.message.to_dict(),
        }
