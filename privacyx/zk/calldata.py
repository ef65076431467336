"""
Solidity Calldata Mapping
=========================

snarkjs Groth16 convention:
    pi_a: [Ax, Ay, 1]
    pi_b: [[Bx1, Bx2], [By1, By2], [1, 0]]
    pi_c: [Cx, Cy, 1]

Solidity verifiers (snarkjs `exportSolidityVerifier`) expect:
    a: [Ax, Ay]
    b: [[Bx2, Bx1], [By2, By1]]
    c: [Cx, Cy]

The G2 coordinates of B are stored (c0, c1) by snarkjs while the
pairing precompile reads (c1, c0), so each pair is swapped.

Version: 0.1.0
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from privacyx.errors import FormatError
from privacyx.zk.models import Groth16Proof, SolidityCalldata
from privacyx.zk.parse import parse_proof, to_uint


def to_solidity_calldata(
    proof: Groth16Proof,
    public_signals: Sequence[int],
) -> SolidityCalldata:
    """
    Map a parsed Groth16 proof to verifier calldata.

    Args:
        proof: Parsed proof
        public_signals: Parsed public signals, passed through in order

    Returns:
        SolidityCalldata ready for `fn(a, b, c, inputs)`
    """
    return SolidityCalldata(
        a=[proof.pi_a[0], proof.pi_a[1]],
        b=[
            [proof.pi_b[0][1], proof.pi_b[0][0]],
            [proof.pi_b[1][1], proof.pi_b[1][0]],
        ],
        c=[proof.pi_c[0], proof.pi_c[1]],
        inputs=list(public_signals),
    )


def coerce_calldata(
    proof: Mapping[str, Any] | Groth16Proof | SolidityCalldata,
    public_signals: Sequence[int],
) -> SolidityCalldata:
    """
    Build calldata from either a snarkjs proof or an already mapped one.

    A mapping with `a`, `b`, `c` (and no `pi_a`) is taken as already in
    verifier order and only converted to integers.
    """
    if isinstance(proof, SolidityCalldata):
        return proof.model_copy(update={"inputs": list(public_signals)})

    if isinstance(proof, Mapping) and "pi_a" not in proof and "a" in proof:
        try:
            return SolidityCalldata(
                a=[to_uint(x, "a coordinate") for x in proof["a"]],
                b=[[to_uint(x, "b coordinate") for x in row] for row in proof["b"]],
                c=[to_uint(x, "c coordinate") for x in proof["c"]],
                inputs=list(public_signals),
            )
        except (KeyError, TypeError, ValidationError) as e:
            raise FormatError("Invalid calldata proof format", e) from e

    return to_solidity_calldata(parse_proof(proof), public_signals)
