"""
PrivacyX SDK
============

Client SDK for the PrivacyX zero-knowledge pass contracts.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - errors: SDK error taxonomy
    - zk: Groth16 proof parsing and Solidity calldata mapping
    - blockchain: Chain transport (web3.py / in-memory mock)
    - passes: BalancePass, IdentityPass, ReputationPass clients
    - status: Pass status and chain health helpers

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "PrivacyX Team"

from privacyx.config import settings
from privacyx.logging import get_logger, setup_logging
from privacyx.errors import (
    ChainCallError,
    ConfigError,
    FormatError,
    NullifierAlreadyUsedError,
    PassNotImplementedError,
    PrivacyXError,
    ProviderError,
    SignerRequiredError,
)
from privacyx.zk import parse_proof, parse_public_signals, to_solidity_calldata
from privacyx.blockchain import LocalSigner, resolve_provider
from privacyx.passes import BalancePass, IdentityPass, PassVariant, ReputationPass
from privacyx.client import PassConfig, PrivacyX, create_privacyx

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    # Facade
    "PrivacyX",
    "PassConfig",
    "create_privacyx",
    # Passes
    "BalancePass",
    "IdentityPass",
    "ReputationPass",
    "PassVariant",
    # ZK
    "parse_proof",
    "parse_public_signals",
    "to_solidity_calldata",
    # Chain
    "resolve_provider",
    "LocalSigner",
    # Errors
    "PrivacyXError",
    "ConfigError",
    "FormatError",
    "ProviderError",
    "SignerRequiredError",
    "ChainCallError",
    "NullifierAlreadyUsedError",
    "PassNotImplementedError",
    "__version__",
]
