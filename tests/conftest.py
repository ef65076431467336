"""
Test Configuration
==================

Pytest fixtures for PrivacyX SDK tests.
"""

import os
from typing import Any

import pytest

# Set test environment before the SDK reads its settings
os.environ["ENVIRONMENT"] = "testing"
os.environ["PRIVACYX_MODE"] = "mock"
os.environ["PRIVACYX_CHAIN_ID"] = "31337"

# Hardhat account #0, public test key
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

ISSUER = 777
ROOT = 555
NULLIFIER = 999


@pytest.fixture
def chain():
    """Fresh in-memory chain for each test."""
    from privacyx.blockchain import MockChainClient

    client = MockChainClient()
    client.clear_all()
    return client


@pytest.fixture
def signer():
    """Local signer for Hardhat account #0."""
    from privacyx.blockchain import LocalSigner

    return LocalSigner.from_key(TEST_PRIVATE_KEY)


@pytest.fixture
def proof_json() -> dict[str, Any]:
    """snarkjs-shaped Groth16 proof."""
    return {
        "pi_a": ["11", "12", "1"],
        "pi_b": [["21", "22"], ["23", "24"], ["1", "0"]],
        "pi_c": ["31", "32", "1"],
        "protocol": "groth16",
        "curve": "bn128",
    }


@pytest.fixture
def identity_signals() -> list[str]:
    """Identity public signals: [root, issuerHash, nullifierHash]."""
    return [str(ROOT), str(ISSUER), str(NULLIFIER)]


@pytest.fixture
def balance_signals() -> list[str]:
    """Balance public signals: [root, nullifierHash]."""
    return [str(ROOT), str(NULLIFIER)]


@pytest.fixture
def issuer_hex() -> str:
    from privacyx.blockchain import int_to_bytes32

    return int_to_bytes32(ISSUER)


@pytest.fixture
def nullifier_hex() -> str:
    from privacyx.blockchain import int_to_bytes32

    return int_to_bytes32(NULLIFIER)


@pytest.fixture
def identity_pass(chain, issuer_hex):
    """IdentityPass bound to a mock deployment with a published issuer root."""
    from privacyx.passes import IdentityPass

    address = chain.deploy_identity_pass(issuer_roots={issuer_hex: ROOT})
    return IdentityPass(chain_id=31337, provider=chain, address=address)


@pytest.fixture
def balance_pass(chain):
    """BalancePass bound to a mock deployment."""
    from privacyx.passes import BalancePass

    address = chain.deploy_balance_pass(root=ROOT, threshold=1_000)
    return BalancePass(chain_id=31337, provider=chain, address=address)
