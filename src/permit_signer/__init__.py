"""
permit_signer

Sign EIP-2612 permits for ERC-20 tokens: read the token name, permit nonce
and chain id over JSON-RPC, build the EIP-712 typed data, sign it locally
and check that the signature recovers to the owner.
"""

from .adapters.evm import (
    PermitSigner,
    PermitContext,
    PermitSignatureResult,
    EVMECDSASignature,
    build_permit_typed_data,
    compute_permit_digest,
    recover_permit_signer,
    sign_permit,
)
from .engine.exceptions import (
    PermitSignerError,
    MissingArgumentError,
    InvalidArgumentError,
    SignatureVerificationError,
)

__version__ = "0.1.0"

__all__ = [
    "PermitSigner",
    "PermitContext",
    "PermitSignatureResult",
    "EVMECDSASignature",
    "build_permit_typed_data",
    "compute_permit_digest",
    "recover_permit_signer",
    "sign_permit",
    "PermitSignerError",
    "MissingArgumentError",
    "InvalidArgumentError",
    "SignatureVerificationError",
]
