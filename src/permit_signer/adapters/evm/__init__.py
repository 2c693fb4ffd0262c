from .adapter import PermitSigner
from .chain import (
    PermitContext,
    fetch_permit_context,
    fetch_token_name,
    fetch_permit_nonce,
    fetch_chain_id,
    query_domain_separator,
)
from .schemas import (
    EVMECDSASignature,
    PermitSignatureResult,
)
from .signatures import (
    build_permit_typed_data,
    compute_domain_separator,
    compute_permit_digest,
    recover_permit_signer,
    sign_permit,
)
from .standards import (
    EIP712Domain,
    PermitMessage,
    EIP2612TypedData,
)

__all__ = [
    "PermitSigner",
    "PermitContext",
    "fetch_permit_context",
    "fetch_token_name",
    "fetch_permit_nonce",
    "fetch_chain_id",
    "query_domain_separator",
    "EVMECDSASignature",
    "PermitSignatureResult",
    "build_permit_typed_data",
    "compute_domain_separator",
    "compute_permit_digest",
    "recover_permit_signer",
    "sign_permit",
    "EIP712Domain",
    "PermitMessage",
    "EIP2612TypedData",
]
