"""
Permit Signer
permit_signer.cli module

Command-line interface that signs one EIP-2612 permit and prints the result.

Usage:
  permit-signer --token 0x... --spender 0x... --value 1000000 --deadline 2000000000
                [--rpc URL] [--pk KEY] [--domain-version 1] [--timeout 60]
                [--check-domain] [--json] [--log-level INFO]

``--rpc`` and ``--pk`` fall back to the ``RPC_URL`` and ``PRIVATE_KEY``
environment variables.  Exit status is 0 on success and 1 on any error.
"""

import argparse
import asyncio
import json
import re
import sys
from typing import Optional, Sequence

from eth_account import Account
from pydantic import Field
from web3 import Web3

from permit_signer.adapters.evm.adapter import PermitSigner
from permit_signer.adapters.evm.schemas import PermitSignatureResult
from permit_signer.config import (
    MAX_UINT256,
    PERMIT_DOMAIN_VERSION,
    get_log_level_from_env,
    get_private_key_from_env,
    get_request_timeout_from_env,
    get_rpc_url_from_env,
)
from permit_signer.engine.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    MissingArgumentError,
)
from permit_signer.schemas.bases import CanonicalModel
from permit_signer.utils import logger, setup_logger


UINT_PATTERN = re.compile(r"(?:[0-9]+|0[xX][0-9a-fA-F]+)")
FLAG_WITHOUT_VALUE = re.compile(r"argument --([\w-]+): expected one argument")


class PermitArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting on bad input."""

    def error(self, message):
        match = FLAG_WITHOUT_VALUE.match(message)
        if match:
            raise MissingArgumentError(match.group(1))
        raise ConfigurationError(message)


class PermitArguments(CanonicalModel):
    """Resolved and validated command line inputs."""

    rpc_url: str
    private_key: str = Field(..., repr=False, exclude=True)
    token: str
    spender: str
    value: int
    deadline: int
    domain_version: str = PERMIT_DOMAIN_VERSION
    timeout: int
    check_domain: bool = False


def need(name: str, value: Optional[str]) -> str:
    """Return ``value`` or raise ``MissingArgumentError`` for ``--name``."""
    if not value:
        raise MissingArgumentError(name)
    return value


def parse_uint256(name: str, raw: str) -> int:
    """
    Parse a decimal or 0x-prefixed hex string as a ``uint256``.

    Raises:
        InvalidArgumentError: If the string is not an integer or is outside
            ``[0, 2**256)``.
    """
    text = raw.strip()
    if not UINT_PATTERN.fullmatch(text):
        raise InvalidArgumentError(name, f"{raw!r} is not an unsigned integer")

    number = int(text, 16) if text[:2].lower() == "0x" else int(text, 10)
    if number > MAX_UINT256:
        raise InvalidArgumentError(name, f"{raw!r} is outside the uint256 range")
    return number


def parse_address(name: str, raw: str) -> str:
    """
    Validate an EVM address and return its checksum form.

    Mixed-case input must carry a correct EIP-55 checksum.

    Raises:
        InvalidArgumentError: If ``raw`` is not a valid address.
    """
    if not Web3.is_address(raw):
        raise InvalidArgumentError(name, f"{raw!r} is not a valid address")
    return Web3.to_checksum_address(raw)


def check_private_key(raw: str) -> str:
    try:
        Account.from_key(raw)
    except Exception:
        # Suppress the cause: library messages can echo the key material.
        raise InvalidArgumentError("pk", "not a valid secp256k1 private key") from None
    return raw


def resolve_arguments(args: argparse.Namespace) -> PermitArguments:
    """
    Merge flags with environment fallbacks and validate every input.

    Required inputs are checked in a fixed order (rpc, pk, token, spender,
    value, deadline) and the first missing one is reported.  Nothing here
    opens a network connection.

    Raises:
        MissingArgumentError: A required input has no value.
        InvalidArgumentError: An input has a value that cannot be used.
    """
    rpc_url = need("rpc", args.rpc or get_rpc_url_from_env())
    private_key = need("pk", args.pk or get_private_key_from_env())
    token = need("token", args.token)
    spender = need("spender", args.spender)
    value = need("value", args.value)
    deadline = need("deadline", args.deadline)

    if args.timeout is not None:
        timeout = args.timeout
        if timeout <= 0:
            raise InvalidArgumentError("timeout", "must be a positive number of seconds")
    else:
        try:
            timeout = get_request_timeout_from_env()
        except ValueError as e:
            raise InvalidArgumentError("timeout", str(e)) from e

    return PermitArguments(
        rpc_url=rpc_url,
        private_key=check_private_key(private_key),
        token=parse_address("token", token),
        spender=parse_address("spender", spender),
        value=parse_uint256("value", value),
        deadline=parse_uint256("deadline", deadline),
        domain_version=args.domain_version,
        timeout=timeout,
        check_domain=args.check_domain,
    )


async def sign_from_arguments(params: PermitArguments) -> PermitSignatureResult:
    signer = PermitSigner(
        private_key=params.private_key,
        rpc_url=params.rpc_url,
        request_timeout=params.timeout,
    )
    return await signer.sign(
        token=params.token,
        spender=params.spender,
        value=params.value,
        deadline=params.deadline,
        domain_version=params.domain_version,
        check_domain=params.check_domain,
    )


def format_text(result: PermitSignatureResult) -> str:
    """Render a result as aligned ``key: value`` lines."""
    data = result.to_display_dict()
    width = max(len(key) for key in data) + 1
    return "\n".join(f"{key + ':':<{width}} {value}" for key, value in data.items())


def format_json(result: PermitSignatureResult) -> str:
    return json.dumps(result.to_display_dict(), indent=2)


def build_parser() -> argparse.ArgumentParser:
    parser = PermitArgumentParser(
        prog="permit-signer",
        description="Sign an EIP-2612 permit for an ERC-20 token",
    )
    parser.add_argument("--rpc", help="JSON-RPC endpoint (default: $RPC_URL)")
    parser.add_argument("--pk", help="Owner private key (default: $PRIVATE_KEY)")
    parser.add_argument("--token", help="Token contract address")
    parser.add_argument("--spender", help="Spender address")
    parser.add_argument("--value", help="Allowance in smallest token units (decimal or 0x hex)")
    parser.add_argument("--deadline", help="Permit deadline as a unix timestamp (decimal or 0x hex)")
    parser.add_argument(
        "--domain-version",
        default=PERMIT_DOMAIN_VERSION,
        help=f"EIP-712 domain version (default: {PERMIT_DOMAIN_VERSION})",
    )
    parser.add_argument(
        "--timeout", type=int, help="RPC request timeout in seconds (default: $RPC_TIMEOUT or 60)"
    )
    parser.add_argument(
        "--check-domain",
        action="store_true",
        help="Compare the signed domain with the token's DOMAIN_SEPARATOR()",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: $LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the permit-signer CLI."""
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
        setup_logger(args.log_level or get_log_level_from_env())
        params = resolve_arguments(args)
        result = asyncio.run(sign_from_arguments(params))
    except Exception as e:
        # Printed, not logged: failures are reported at any log level.
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        logger.debug("Traceback", exc_info=True)
        return 1

    print(format_json(result) if args.json else format_text(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
