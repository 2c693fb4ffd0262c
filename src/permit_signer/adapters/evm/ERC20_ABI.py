"""
EIP-2612 Token ABI Module

Minimal ABI fragments for the read-only calls a permit signer makes against
an ERC-20 token that implements EIP-2612.

Usage:
    from ERC20_ABI import get_permit_reader_abi, get_domain_separator_abi

    contract = web3.eth.contract(address=token, abi=get_permit_reader_abi())
    name = await contract.functions.name().call()
    nonce = await contract.functions.nonces(owner).call()
"""

from typing import Dict, Any, List


def get_name_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for ERC20 ``name()``.

    Returns:
        List[Dict[str, Any]]: ABI for the ``name`` view.
    """
    return [
        {
            "name": "name",
            "type": "function",
            "stateMutability": "view",
            "inputs": [],
            "outputs": [{"name": "", "type": "string"}],
        }
    ]


def get_nonces_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for EIP-2612 ``nonces(owner)``.

    Returns:
        List[Dict[str, Any]]: ABI for the ``nonces`` view.

    Example:
        abi = get_nonces_abi()
        contract = web3.eth.contract(address=token_address, abi=abi)
        nonce = await contract.functions.nonces(owner).call()
    """
    return [
        {
            "name": "nonces",
            "type": "function",
            "stateMutability": "view",
            "inputs": [{"name": "owner", "type": "address"}],
            "outputs": [{"name": "", "type": "uint256"}],
        }
    ]


def get_domain_separator_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for EIP-2612 ``DOMAIN_SEPARATOR()``.

    Returns:
        List[Dict[str, Any]]: ABI for the ``DOMAIN_SEPARATOR`` view.
    """
    return [
        {
            "name": "DOMAIN_SEPARATOR",
            "type": "function",
            "stateMutability": "view",
            "inputs": [],
            "outputs": [{"name": "", "type": "bytes32"}],
        }
    ]


def get_permit_reader_abi() -> List[Dict[str, Any]]:
    """
    Combined ABI for every view the signer reads.

    Returns:
        List[Dict[str, Any]]: ``name``, ``nonces`` and ``DOMAIN_SEPARATOR``.
    """
    return get_name_abi() + get_nonces_abi() + get_domain_separator_abi()
