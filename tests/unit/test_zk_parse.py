"""
Unit Tests for Groth16 Parsing
==============================

Tests for proof / public-signal parsing and the Solidity calldata mapping.
"""

import json

import pytest

from privacyx.errors import FormatError
from privacyx.zk import (
    Groth16Proof,
    SolidityCalldata,
    coerce_calldata,
    load_proof,
    load_public_signals,
    parse_proof,
    parse_public_signals,
    to_solidity_calldata,
    to_uint,
)


BN254_SCALAR_FIELD = 21888242871839275222246405745257275088548364400416034343698204186575808495617


class TestParseProof:
    """Tests for parse_proof."""

    def test_parse_preserves_shape(self, proof_json):
        """Test that parsing keeps dimensions and converts every leaf."""
        proof = parse_proof(proof_json)

        assert proof.pi_a == [11, 12, 1]
        assert proof.pi_b == [[21, 22], [23, 24], [1, 0]]
        assert proof.pi_c == [31, 32, 1]
        assert proof.protocol == "groth16"

    def test_parse_big_coordinates(self):
        """Test that 254-bit coordinates survive without precision loss."""
        big = str(BN254_SCALAR_FIELD - 1)
        proof = parse_proof({"pi_a": [big, big], "pi_b": [[big, "1"], ["2", big]], "pi_c": [big, "0"]})

        assert proof.pi_a[0] == BN254_SCALAR_FIELD - 1
        assert proof.pi_b[1][1] == BN254_SCALAR_FIELD - 1

    def test_parse_accepts_native_ints(self):
        """Test that native integers are accepted as leaves."""
        proof = parse_proof({"pi_a": [1, 2], "pi_b": [[3, 4], [5, 6]], "pi_c": [7, 8]})

        assert proof.pi_b == [[3, 4], [5, 6]]

    def test_parse_returns_parsed_proof_unchanged(self, proof_json):
        """Test that an already parsed proof is passed through."""
        proof = parse_proof(proof_json)

        assert parse_proof(proof) is proof

    @pytest.mark.parametrize("missing", ["pi_a", "pi_b", "pi_c"])
    def test_missing_field(self, proof_json, missing):
        """Test that each missing proof field is a format error."""
        del proof_json[missing]

        with pytest.raises(FormatError, match=missing):
            parse_proof(proof_json)

    @pytest.mark.parametrize("missing", ["pi_a", "pi_b", "pi_c"])
    def test_null_field(self, proof_json, missing):
        """Test that a null proof field is a format error."""
        proof_json[missing] = None

        with pytest.raises(FormatError):
            parse_proof(proof_json)

    def test_not_an_object(self):
        """Test that non-mapping input is rejected."""
        with pytest.raises(FormatError):
            parse_proof(["1", "2"])  # type: ignore[arg-type]

    def test_non_numeric_coordinate(self, proof_json):
        """Test that a non-numeric coordinate is a format error with a cause."""
        proof_json["pi_c"][0] = "not-a-number"

        with pytest.raises(FormatError) as exc_info:
            parse_proof(proof_json)

        assert isinstance(exc_info.value.cause, ValueError)

    def test_short_g2_coordinate(self, proof_json):
        """Test that a G2 coordinate with one element is rejected."""
        proof_json["pi_b"] = [["21"], ["23", "24"]]

        with pytest.raises(FormatError):
            parse_proof(proof_json)

    def test_no_field_range_check(self):
        """Test that values above the field modulus are left to the contract."""
        above = str(BN254_SCALAR_FIELD + 5)
        proof = parse_proof({"pi_a": [above, "1"], "pi_b": [["1", "2"], ["3", "4"]], "pi_c": ["1", "2"]})

        assert proof.pi_a[0] == BN254_SCALAR_FIELD + 5


class TestParsePublicSignals:
    """Tests for parse_public_signals."""

    def test_parse_signals(self, identity_signals):
        """Test parsing identity signals in order."""
        assert parse_public_signals(identity_signals, 3) == [555, 777, 999]

    @pytest.mark.parametrize("expected", [1, 2, 4, 5])
    def test_length_mismatch(self, identity_signals, expected):
        """Test that a length mismatch is a format error for any n > 0."""
        with pytest.raises(FormatError, match=f"Expected {expected} public signals"):
            parse_public_signals(identity_signals, expected)

    @pytest.mark.parametrize("n", [1, 2, 3, 8])
    def test_length_match(self, n):
        """Test that matching lengths return n integers."""
        result = parse_public_signals([str(i) for i in range(n)], n)

        assert result == list(range(n))

    def test_no_expected_length(self):
        """Test that any length is accepted without an expected length."""
        assert parse_public_signals(["1", 2, "0x03"]) == [1, 2, 3]

    @pytest.mark.parametrize("raw", ["123", {"0": "1"}, None, 42])
    def test_not_a_sequence(self, raw):
        """Test that non-array input is a format error."""
        with pytest.raises(FormatError, match="must be an array"):
            parse_public_signals(raw)  # type: ignore[arg-type]

    def test_non_integer_element(self):
        """Test that an element that is not an integer is a format error."""
        with pytest.raises(FormatError, match=r"public signal \[1\]"):
            parse_public_signals(["1", "1.5"], 2)


class TestToUint:
    """Tests for leaf conversion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("42", 42), (" 42 ", 42), ("0x2a", 42), (42, 42), (42.0, 42), ("007", 7)],
    )
    def test_valid(self, value, expected):
        assert to_uint(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["", "abc", "-1", -1, 1.5, True, None, [1], "1_000", "+5", "0x", "0x1_0", "\uff11\uff12"],
    )
    def test_invalid(self, value):
        with pytest.raises(FormatError):
            to_uint(value)


class TestCalldataMapping:
    """Tests for the snarkjs -> Solidity verifier mapping."""

    def test_g2_swap_fixed_vector(self):
        """Test that each G2 coordinate pair is swapped."""
        proof = parse_proof({"pi_a": ["5", "6"], "pi_b": [["1", "2"], ["3", "4"]], "pi_c": ["7", "8"]})

        calldata = to_solidity_calldata(proof, [9, 10, 11])

        assert calldata.b == [[2, 1], [4, 3]]
        assert calldata.a == [5, 6]
        assert calldata.c == [7, 8]
        assert calldata.inputs == [9, 10, 11]

    def test_homogeneous_coordinates_dropped(self, proof_json):
        """Test that only the first two coordinates of each point are used."""
        calldata = to_solidity_calldata(parse_proof(proof_json), [1, 2])

        assert calldata.a == [11, 12]
        assert calldata.b == [[22, 21], [24, 23]]
        assert calldata.c == [31, 32]

    def test_as_args(self, proof_json):
        """Test positional argument order."""
        a, b, c, inputs = to_solidity_calldata(parse_proof(proof_json), [1, 2]).as_args()

        assert (a, b, c, inputs) == ([11, 12], [[22, 21], [24, 23]], [31, 32], [1, 2])

    def test_coerce_premapped_proof(self):
        """Test that an {a, b, c} proof is taken as already mapped."""
        calldata = coerce_calldata({"a": ["1", "2"], "b": [["3", "4"], ["5", "6"]], "c": ["7", "8"]}, [1, 2])

        assert calldata.b == [[3, 4], [5, 6]]
        assert calldata.inputs == [1, 2]

    def test_coerce_snarkjs_proof(self, proof_json):
        """Test that a snarkjs proof goes through the G2 swap."""
        calldata = coerce_calldata(proof_json, [1, 2])

        assert calldata.b == [[22, 21], [24, 23]]

    def test_coerce_calldata_instance(self):
        """Test that a SolidityCalldata gets the new inputs."""
        original = SolidityCalldata(a=[1, 2], b=[[3, 4], [5, 6]], c=[7, 8])

        assert coerce_calldata(original, [9]).inputs == [9]

    def test_coerce_malformed_premapped_proof(self):
        """Test that a broken {a, b, c} proof is a format error."""
        with pytest.raises(FormatError):
            coerce_calldata({"a": ["1", "2"], "b": [["3"], ["5", "6"]], "c": ["7", "8"]}, [1])


class TestLoaders:
    """Tests for reading snarkjs JSON files."""

    def test_load_proof_and_signals(self, tmp_path, proof_json, identity_signals):
        """Test loading proof.json and public.json."""
        proof_file = tmp_path / "proof.json"
        public_file = tmp_path / "public.json"
        proof_file.write_text(json.dumps(proof_json))
        public_file.write_text(json.dumps(identity_signals))

        assert isinstance(load_proof(proof_file), Groth16Proof)
        assert load_public_signals(public_file, 3) == [555, 777, 999]

    def test_load_wrapped_proof(self, tmp_path, proof_json):
        """Test that a {"proof": {...}} wrapper is accepted."""
        proof_file = tmp_path / "proof.json"
        proof_file.write_text(json.dumps({"proof": proof_json, "publicSignals": []}))

        assert load_proof(proof_file).pi_a == [11, 12, 1]

    def test_load_invalid_json(self, tmp_path):
        """Test that invalid JSON is a format error."""
        bad = tmp_path / "proof.json"
        bad.write_text("{not json")

        with pytest.raises(FormatError, match="Invalid JSON"):
            load_proof(bad)

    def test_load_missing_file(self, tmp_path):
        """Test that a missing file is a format error."""
        with pytest.raises(FormatError, match="Cannot read"):
            load_public_signals(tmp_path / "absent.json")
