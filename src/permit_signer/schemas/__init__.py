from .bases import (
    CanonicalModel,
    BaseSignature,
    BaseSignatureResult,
)

__all__ = [
    "CanonicalModel",
    "BaseSignature",
    "BaseSignatureResult",
]
