"""
Groth16 Data Models
===================

Pydantic models for Groth16 proofs and the calldata handed to
Solidity verifiers.

Version: 0.1.0
"""

from pydantic import BaseModel, Field, field_validator


class Groth16Proof(BaseModel):
    """
    A parsed Groth16 proof.

    Mirrors the snarkjs proof format with every coordinate converted to
    an integer. snarkjs appends a homogeneous coordinate to each point
    (`pi_a[2]`, `pi_b[2]`, `pi_c[2]`); it is kept but never used.
    """

    # Proof points (G1 and G2 elements)
    pi_a: list[int] = Field(..., min_length=2, description="Proof point A (G1)")
    pi_b: list[list[int]] = Field(..., min_length=2, description="Proof point B (G2)")
    pi_c: list[int] = Field(..., min_length=2, description="Proof point C (G1)")

    # Protocol info
    protocol: str = Field(default="groth16")
    curve: str = Field(default="bn128")

    @field_validator("pi_b")
    @classmethod
    def g2_coordinates_present(cls, v: list[list[int]]) -> list[list[int]]:
        """Both G2 coordinates must carry two field elements."""
        if any(len(row) < 2 for row in v[:2]):
            raise ValueError("pi_b coordinates must have two elements")
        return v


class SolidityCalldata(BaseModel):
    """Proof and public inputs in the order a Solidity verifier expects."""

    a: list[int] = Field(..., min_length=2, max_length=2)
    b: list[list[int]] = Field(..., min_length=2, max_length=2)
    c: list[int] = Field(..., min_length=2, max_length=2)
    inputs: list[int] = Field(default_factory=list)

    @field_validator("b")
    @classmethod
    def g2_pairs(cls, v: list[list[int]]) -> list[list[int]]:
        if any(len(row) != 2 for row in v):
            raise ValueError("b must be a 2x2 array")
        return v

    def as_args(self) -> tuple[list[int], list[list[int]], list[int], list[int]]:
        """Positional arguments for `fn(uint256[2], uint256[2][2], uint256[2], uint256[N])`."""
        return (
            list(self.a),
            [list(row) for row in self.b],
            list(self.c),
            list(self.inputs),
        )
