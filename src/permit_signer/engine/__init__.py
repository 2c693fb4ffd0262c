from .exceptions import (
    PermitSignerError,
    ConfigurationError,
    MissingArgumentError,
    InvalidArgumentError,
    PermitSignatureError,
    SignatureVerificationError,
)

__all__ = [
    "PermitSignerError",
    "ConfigurationError",
    "MissingArgumentError",
    "InvalidArgumentError",
    "PermitSignatureError",
    "SignatureVerificationError",
]
