"""
Permit Signer Configuration

Environment-backed settings and protocol constants.  Values read here are
fallbacks only: command line flags always take precedence.

Environment Variables:
    - RPC_URL: JSON-RPC endpoint used when ``--rpc`` is not given
    - PRIVATE_KEY: Signing key used when ``--pk`` is not given
    - RPC_TIMEOUT: HTTP request timeout in seconds (default 60)
    - LOG_LEVEL: Logging level name (default WARNING)

A ``.env`` file in the working directory is loaded on import; variables
already present in the process environment are not overridden.
"""

import os
from typing import Optional

import dotenv

dotenv.load_dotenv()


#: EIP-712 domain ``version`` used by EIP-2612 tokens that do not override it.
PERMIT_DOMAIN_VERSION: str = "1"

#: Upper bound for ``uint256`` fields (value, nonce, deadline).
MAX_UINT256: int = 2**256 - 1

#: HTTP request timeout (seconds) handed to the RPC provider.
DEFAULT_REQUEST_TIMEOUT: int = 60

DEFAULT_LOG_LEVEL: str = "WARNING"

RPC_URL_ENV: str = "RPC_URL"
PRIVATE_KEY_ENV: str = "PRIVATE_KEY"
RPC_TIMEOUT_ENV: str = "RPC_TIMEOUT"
LOG_LEVEL_ENV: str = "LOG_LEVEL"


def _get_env(key: str) -> Optional[str]:
    # Empty strings count as unset, matching how the CLI treats empty flags.
    value = os.getenv(key)
    return value if value else None


def get_rpc_url_from_env() -> Optional[str]:
    """
    Load the JSON-RPC endpoint from the ``RPC_URL`` environment variable.

    Returns:
        str: Endpoint URL, or None if not configured
    """
    return _get_env(RPC_URL_ENV)


def get_private_key_from_env() -> Optional[str]:
    """
    Load the signing key from the ``PRIVATE_KEY`` environment variable.

    The private key should be stored in the environment or a local ``.env``
    file and never committed to version control.

    Example:
        # export PRIVATE_KEY="0x1234567890abcdef..."
        pk = get_private_key_from_env()

    Returns:
        str: Private key, or None if not configured
    """
    return _get_env(PRIVATE_KEY_ENV)


def get_request_timeout_from_env() -> int:
    """
    Load the RPC request timeout from ``RPC_TIMEOUT``.

    Returns:
        int: Timeout in seconds; ``DEFAULT_REQUEST_TIMEOUT`` when unset.

    Raises:
        ValueError: If the variable is set but is not a positive integer.
    """
    raw = _get_env(RPC_TIMEOUT_ENV)
    if raw is None:
        return DEFAULT_REQUEST_TIMEOUT
    timeout = int(raw)
    if timeout <= 0:
        raise ValueError(f"{RPC_TIMEOUT_ENV} must be positive, got {raw!r}")
    return timeout


def get_log_level_from_env() -> str:
    return (_get_env(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
