"""
EVM Permit Schema Models

Pydantic models describing the output of a permit signing run.  All classes
inherit from the base schema hierarchy in ``schemas.bases``.

Signature classes:
    - EVMECDSASignature: v/r/s signature produced for an EIP-2612 permit.

Result classes:
    - PermitSignatureResult: Signature, digest, owner and recovered signer,
      together with the domain and message that were signed.
"""

from typing import Optional, Dict, Any, Literal

from pydantic import Field

from ...schemas.bases import (
    BaseSignature,
    BaseSignatureResult,
)


class EVMECDSASignature(BaseSignature):
    """
    EVM ECDSA signature (v, r, s).

    Attributes:
        signature_type: Always ``"EIP2612"``.
        v: ECDSA recovery ID (27 or 28).
        r: r component, 32 bytes as a 64-char hex string (0x prefix optional).
        s: s component, 32 bytes as a 64-char hex string (0x prefix optional).

    Example::

        sig = EVMECDSASignature(v=27, r="0x" + "a" * 64, s="0x" + "b" * 64)
        sig.validate_format()
    """

    signature_type: Literal["EIP2612"] = Field(
        "EIP2612", description="Signing standard"
    )
    v: int = Field(..., ge=27, le=28, description="ECDSA recovery ID (27 or 28)")
    r: str = Field(..., description="Signature r component (32 bytes, 64-char hex, 0x prefix optional)")
    s: str = Field(..., description="Signature s component (32 bytes, 64-char hex, 0x prefix optional)")

    def validate_format(self) -> bool:
        """
        Validate v/r/s components.

        Checks v is 27 or 28 and that r/s are valid 64-character hex strings
        (0x prefix stripped before length check).

        Returns:
            True when all components pass.

        Raises:
            ValueError: Descriptive message on the first failed check.
        """
        if self.v not in (27, 28):
            raise ValueError(f"Invalid recovery ID: {self.v}. Must be 27 or 28")

        for name, val in [("r", self.r), ("s", self.s)]:
            hex_str = val.replace("0x", "").replace("0X", "")
            if len(hex_str) != 64:
                raise ValueError(f"Invalid {name}: expected 64 hex chars, got {len(hex_str)}")
            try:
                int(hex_str, 16)
            except ValueError:
                raise ValueError(f"Invalid {name}: not valid hexadecimal")

        return True

    def to_packed_hex(self) -> str:
        """
        Encode v/r/s into a packed 65-byte hex string (``r || s || v``).

        This is the layout returned by ``eth_signTypedData_v4`` and accepted
        by contracts that take a raw ``bytes`` signature argument.

        Returns:
            0x-prefixed 132-character hex string.

        Raises:
            ValueError: If components do not pass ``validate_format()``.
        """
        self.validate_format()
        r = self.r.replace("0x", "").replace("0X", "").zfill(64)
        s = self.s.replace("0x", "").replace("0X", "").zfill(64)
        return "0x" + r + s + format(self.v, "02x")


class PermitSignatureResult(BaseSignatureResult):
    """
    Outcome of signing one EIP-2612 permit.

    Attributes:
        owner: Address derived from the signing key (inherited).
        recovered: Address recovered from ``signature`` (inherited).
        digest: 0x-prefixed EIP-712 digest that was signed.
        signature: 0x-prefixed packed 65-byte signature (``r || s || v``).
        components: The same signature split into v, r, s.
        domain: EIP-712 domain fields used for signing.
        message: Permit message fields used for signing.
        domain_separator_match: Result of comparing the local domain
            separator with the token's ``DOMAIN_SEPARATOR()``; ``None`` when
            the comparison was not requested or the token lacks the view.
    """

    digest: str = Field(..., description="EIP-712 digest (0x-prefixed, 32 bytes)")
    signature: str = Field(..., description="Packed signature r || s || v (0x-prefixed, 65 bytes)")
    components: EVMECDSASignature = Field(..., description="Signature split into v, r, s")
    domain: Dict[str, Any] = Field(..., description="EIP-712 domain that was signed")
    message: Dict[str, Any] = Field(..., description="Permit message that was signed")
    domain_separator_match: Optional[bool] = Field(
        None, description="Local vs on-chain DOMAIN_SEPARATOR comparison"
    )

    def to_display_dict(self) -> Dict[str, Any]:
        """
        Flatten the result into the fields printed by the command line.

        Returns:
            Dict with owner, recovered, digest, signature, v, r and s, plus
            ``domain_separator_match`` when a comparison was made.
        """
        data: Dict[str, Any] = {
            "owner": self.owner,
            "recovered": self.recovered,
            "digest": self.digest,
            "signature": self.signature,
            "v": self.components.v,
            "r": self.components.r,
            "s": self.components.s,
        }
        if self.domain_separator_match is not None:
            data["domain_separator_match"] = self.domain_separator_match
        return data
