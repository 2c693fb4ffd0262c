"""
Exception and Error Definitions Module

Defines the exception hierarchy for argument resolution, permit signing and
the signer self-check.  All exceptions inherit from PermitSignerError so the
command line entry point can catch project errors in one place.

Network, contract-call and library errors (web3, eth_account) are not part
of this hierarchy; they propagate unchanged.

Exception Hierarchy:
    PermitSignerError (root)
    ├── ConfigurationError
    │   ├── MissingArgumentError
    │   └── InvalidArgumentError
    ├── PermitSignatureError
    └── SignatureVerificationError
"""


class PermitSignerError(Exception):
    """
    Root exception class for all project-specific exceptions.
    """
    pass


class ConfigurationError(PermitSignerError):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - Missing required flags or environment variables
    - Malformed addresses, integers or private keys
    """
    pass


class MissingArgumentError(ConfigurationError):
    """
    Raised when a required input has no value from flags or environment.

    The message names the flag, e.g. ``Missing --spender``.

    Attributes:
        name: Flag name without the leading dashes
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing --{name}")


class InvalidArgumentError(ConfigurationError):
    """
    Raised when a supplied input cannot be used.

    Attributes:
        name: Flag name without the leading dashes
        reason: Why the value was rejected
    """

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid --{name}: {reason}")


class PermitSignatureError(PermitSignerError):
    """
    Raised when the signing step produces unusable output.

    This includes scenarios such as:
    - Signature components outside the expected format
    - Recovery id other than 27 or 28
    """
    pass


class SignatureVerificationError(PermitSignerError):
    """
    Raised when the signature does not recover to the owner address.

    Attributes:
        expected: Owner address derived from the signing key
        recovered: Address recovered from the signature
    """

    def __init__(self, expected: str, recovered: str):
        self.expected = expected
        self.recovered = recovered
        super().__init__(
            f"Recovered signer {recovered} does not match owner {expected}"
        )
