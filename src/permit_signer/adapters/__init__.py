from .evm import (
    PermitSigner,
    PermitContext,
    EVMECDSASignature,
    PermitSignatureResult,
    EIP2612TypedData,
)

__all__ = [
    "PermitSigner",
    "PermitContext",
    "EVMECDSASignature",
    "PermitSignatureResult",
    "EIP2612TypedData",
]
