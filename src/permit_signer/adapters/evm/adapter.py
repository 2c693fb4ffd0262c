"""
EVM Permit Signer Adapter

Produces EIP-2612 permit signatures for an ERC-20 token.

Key Features:
    - Owner address derived from the configured private key
    - On-chain reads of token name, permit nonce and chain id
    - EIP-712 typed-data construction and local signing
    - Independent digest recomputation and signer recovery as a self-check
    - Optional comparison against the token's DOMAIN_SEPARATOR()

Dependencies:
    - web3.py: For blockchain RPC interaction
    - eth_account: For signing and signature recovery
"""

from typing import Optional

from web3 import AsyncWeb3
from web3.exceptions import Web3Exception
from eth_account import Account

from .chain import PermitContext, fetch_permit_context, query_domain_separator
from .schemas import PermitSignatureResult
from .signatures import (
    build_permit_typed_data,
    compute_domain_separator,
    compute_permit_digest,
    recover_permit_signer,
    sign_permit,
)
from .standards import EIP712Domain, EIP2612TypedData, PermitMessage
from ...config import (
    DEFAULT_REQUEST_TIMEOUT,
    PERMIT_DOMAIN_VERSION,
    get_private_key_from_env,
    get_rpc_url_from_env,
)
from ...engine.exceptions import MissingArgumentError, SignatureVerificationError
from ...utils import logger


class PermitSigner:
    """
    EIP-2612 permit signer bound to one private key and one RPC endpoint.

    The AsyncWeb3 instance is created lazily on first use so that a signer
    can be constructed (and its owner address inspected) without touching
    the network.

    Attributes:
        account: Signing account built from the private key
        owner: Checksum address of ``account``

    Example:
        signer = PermitSigner(private_key="0x...", rpc_url="https://...")
        result = await signer.sign(
            token="0xToken", spender="0xSpender",
            value=1_000_000, deadline=2_000_000_000,
        )
        print(result.signature)
    """

    def __init__(
        self,
        private_key: Optional[str] = None,
        rpc_url: Optional[str] = None,
        request_timeout: int = DEFAULT_REQUEST_TIMEOUT,
        w3: Optional[AsyncWeb3] = None,
    ):
        """
        Initialize the signer.

        Args:
            private_key: Hex private key; falls back to ``PRIVATE_KEY``.
            rpc_url: JSON-RPC endpoint; falls back to ``RPC_URL``.  Not
                required when ``w3`` is supplied.
            request_timeout: HTTP timeout in seconds for RPC requests.
            w3: Pre-built AsyncWeb3 instance to use instead of creating one.

        Raises:
            MissingArgumentError: If no private key is available, or neither
                an RPC URL nor a ``w3`` instance is available.
        """
        self._private_key = private_key if private_key else get_private_key_from_env()
        if not self._private_key:
            raise MissingArgumentError("pk")

        self._rpc_url = rpc_url if rpc_url else get_rpc_url_from_env()
        if not self._rpc_url and w3 is None:
            raise MissingArgumentError("rpc")

        self._request_timeout = request_timeout
        self._w3 = w3

        self.account = Account.from_key(self._private_key)
        self.owner = AsyncWeb3.to_checksum_address(self.account.address)

    def _get_web3_instance(self) -> AsyncWeb3:
        """
        Return the AsyncWeb3 instance, creating it on first call.

        Returns:
            AsyncWeb3: Instance backed by ``AsyncHTTPProvider`` for the
            configured endpoint.
        """
        if self._w3 is None:
            self._w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(
                self._rpc_url,
                request_kwargs={"timeout": self._request_timeout}
            ))
        return self._w3

    async def fetch_context(self, token: str) -> PermitContext:
        """Read name, nonce and chain id for ``token`` and this signer's owner."""
        return await fetch_permit_context(self._get_web3_instance(), token, self.owner)

    async def sign(
        self,
        *,
        token: str,
        spender: str,
        value: int,
        deadline: int,
        domain_version: str = PERMIT_DOMAIN_VERSION,
        check_domain: bool = False,
    ) -> PermitSignatureResult:
        """
        Fetch on-chain context and sign a permit for ``token``.

        Steps run strictly in sequence: name, nonce and chain id reads;
        typed-data construction; signing; digest recomputation; signer
        recovery; and, if requested, the domain separator comparison.

        Args:
            token: Token contract address (EIP-712 ``verifyingContract``).
            spender: Address that receives the allowance.
            value: Allowance in the token's smallest unit.
            deadline: Unix timestamp after which the permit is invalid.
            domain_version: EIP-712 domain ``version``.
            check_domain: Compare the local domain separator against the
                token's ``DOMAIN_SEPARATOR()``.

        Returns:
            PermitSignatureResult for the signed permit.

        Raises:
            SignatureVerificationError: If the signature does not recover to
                the owner address.
        """
        context = await self.fetch_context(token)
        logger.info(f"Owner {self.owner}, chain id {context.chain_id}, nonce {context.nonce}")

        result = self.sign_with_context(
            context,
            token=token,
            spender=spender,
            value=value,
            deadline=deadline,
            domain_version=domain_version,
        )

        if check_domain:
            result.domain_separator_match = await self._check_domain_separator(token, result)

        return result

    def sign_with_context(
        self,
        context: PermitContext,
        *,
        token: str,
        spender: str,
        value: int,
        deadline: int,
        domain_version: str = PERMIT_DOMAIN_VERSION,
    ) -> PermitSignatureResult:
        """
        Sign a permit using already-known on-chain context.

        No RPC calls are made.  The digest and recovered signer are computed
        independently of the signing call.

        Raises:
            SignatureVerificationError: If the signature does not recover to
                the owner address.
        """
        typed_data = build_permit_typed_data(
            token_name=context.name,
            chain_id=context.chain_id,
            token=AsyncWeb3.to_checksum_address(token),
            owner=self.owner,
            spender=AsyncWeb3.to_checksum_address(spender),
            value=value,
            nonce=context.nonce,
            deadline=deadline,
            domain_version=domain_version,
        )
        logger.debug(f"Typed data: {typed_data.to_dict()}")

        signature, components = sign_permit(self._private_key, typed_data)
        digest = compute_permit_digest(typed_data)
        recovered = recover_permit_signer(typed_data, signature)

        result = PermitSignatureResult(
            owner=self.owner,
            recovered=recovered,
            digest="0x" + digest.hex(),
            signature=signature,
            components=components,
            domain=typed_data.domain.to_dict(),
            message=typed_data.message.to_dict(),
        )

        if not result.is_consistent():
            logger.error(f"Signature recovers to {recovered}, expected {self.owner}")
            raise SignatureVerificationError(self.owner, recovered)

        return result

    async def _check_domain_separator(
        self,
        token: str,
        result: PermitSignatureResult,
    ) -> Optional[bool]:
        """
        Compare the signed domain with the token's ``DOMAIN_SEPARATOR()``.

        Returns:
            True/False for match/mismatch; None when the token does not
            expose the view.
        """
        typed_data = EIP2612TypedData(
            domain=EIP712Domain(**result.domain),
            message=PermitMessage(**result.message),
        )
        local = compute_domain_separator(typed_data)

        try:
            onchain = await query_domain_separator(self._get_web3_instance(), token)
        except Web3Exception as e:
            logger.info(f"DOMAIN_SEPARATOR() unavailable on {token}: {e}")
            return None

        if onchain != local:
            logger.warning(
                f"Domain separator mismatch for {token}: "
                f"local 0x{local.hex()}, on-chain 0x{onchain.hex()}"
            )
            return False
        return True
