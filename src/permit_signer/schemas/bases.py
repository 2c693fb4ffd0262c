"""
Base Schema Models for the permit signer

This module defines the base classes that the EVM-specific permit models
inherit from.  It keeps serialization deterministic so that a signed result
can be printed, hashed or compared byte-for-byte across runs.

Core Classes:
    - CanonicalModel: Pydantic base model with canonical JSON serialization
    - BaseSignature: Abstract signature component model
    - BaseSignatureResult: Abstract result of a signing run (signature + self-check)

Dependencies:
    - pydantic: For data validation and serialization
"""

import json
from typing import Dict, Any
from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field


class CanonicalModel(BaseModel):
    """
    Pydantic base model with canonical JSON serialization.

    The JSON form has sorted keys and no extra whitespace, so two models
    holding the same data always serialize to the same string.

    Example:
        class MyModel(CanonicalModel):
            name: str
            value: int

        model = MyModel(name="test", value=123)
        model.to_canonical_json()  # '{"name":"test","value":123}'
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_canonical_json(self) -> str:
        """
        Convert model to a canonical JSON string.

        ``model_dump(mode="json")`` turns nested models and enums into plain
        types first; ``json.dumps`` then sorts keys and drops whitespace.

        Returns:
            str: JSON string with sorted keys and compact separators.
        """
        data = self.model_dump(mode="json")
        return json.dumps(
            data,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model to dictionary representation.

        Returns:
            Dict[str, Any]: Dictionary with all model fields.
        """
        return self.model_dump()


class BaseSignature(CanonicalModel, ABC):
    """
    Abstract base class for signature components.

    Attributes:
        signature_type: The signing standard (e.g., "EIP2612")
    """

    signature_type: str = Field(..., description="Type of signature (e.g., EIP2612)")

    @abstractmethod
    def validate_format(self) -> bool:
        """
        Validate the signature format.

        Returns:
            bool: True if signature format is valid.

        Raises:
            ValueError: If signature format is invalid with descriptive message.
        """
        raise NotImplementedError


class BaseSignatureResult(CanonicalModel, ABC):
    """
    Abstract base class for the outcome of a signing run.

    A result carries the signer that was expected and the signer recovered
    from the produced signature; the two must agree for the run to count
    as successful.

    Attributes:
        owner: Address derived from the signing key
        recovered: Address recovered from the signature
    """

    owner: str = Field(..., description="Address derived from the signing key")
    recovered: str = Field(..., description="Address recovered from the produced signature")

    def is_consistent(self) -> bool:
        """
        Check whether the recovered signer equals the owner.

        Address comparison is case-insensitive so checksum and lower-case
        forms compare equal.

        Returns:
            bool: True if the signature recovers to the owner.
        """
        return self.owner.lower() == self.recovered.lower()
