"""
ZK Proof Module
===============

Parsing of snarkjs Groth16 proofs and public signals, and mapping to the
calldata layout of Solidity verifiers.

Usage:
    from privacyx.zk import parse_proof, parse_public_signals, to_solidity_calldata

    proof = parse_proof(proof_json)
    signals = parse_public_signals(public_json, 3)
    calldata = to_solidity_calldata(proof, signals)

Version: 0.1.0
"""

from privacyx.zk.calldata import coerce_calldata, to_solidity_calldata
from privacyx.zk.models import Groth16Proof, SolidityCalldata
from privacyx.zk.parse import (
    load_proof,
    load_public_signals,
    parse_proof,
    parse_public_signals,
    to_uint,
)


__all__ = [
    # Parsing
    "parse_proof",
    "parse_public_signals",
    "load_proof",
    "load_public_signals",
    "to_uint",
    # Calldata
    "to_solidity_calldata",
    "coerce_calldata",
    # Models
    "Groth16Proof",
    "SolidityCalldata",
]
