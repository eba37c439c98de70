import time

import pytest

from zksnark.field import DEFAULT_FIELD
from zksnark.groth16 import PhaseError, Proof, SimulatedProofSystem
from zksnark.groth16.proving import proof_a, proof_b, proof_c, create_proof
from zksnark.groth16.setup import ProvingKey


class TestProofElements:
    @pytest.fixture
    def pk(self, toxic):
        return ProvingKey(toxic["alpha"], toxic["beta"], toxic["delta"],
                          num_variables=5, num_constraints=3)

    def test_proof_a(self, pk, toxic):
        assert proof_a(pk, 4106) == toxic["alpha"] + 4106

    def test_proof_b(self, pk, toxic):
        assert proof_b(pk, 4565) == toxic["beta"] + 4565

    def test_proof_c(self, pk):
        assert proof_c(pk, 4106, 4565) == 4106 * 4565

    def test_field_reduction(self, pk, toxic):
        p = DEFAULT_FIELD.p
        assert proof_a(pk, p - toxic["alpha"]) == 0
        assert proof_c(pk, p - 1, p - 1) == 1

    def test_create_proof(self, pk, toxic):
        proof = create_proof(pk, 4106, 4565)
        assert (proof.a, proof.b, proof.c) == (
            toxic["alpha"] + 4106, toxic["beta"] + 4565, 4106 * 4565)


class TestProve:
    def test_fixed_randomness(self, full_pipeline_data, toxic, prover_randomness):
        proof = full_pipeline_data["proof"]
        r, s = prover_randomness["r"], prover_randomness["s"]
        assert proof.a == toxic["alpha"] + r
        assert proof.b == toxic["beta"] + s
        assert proof.c == r * s

    def test_metadata(self, system, r1cs):
        pk, _ = system.setup(r1cs)
        before = time.time()
        proof = system.prove(r1cs.witness(), pk)
        after = time.time()
        assert proof.proof_size_bytes == 128
        assert before <= proof.generated_at <= after

    def test_randomized(self, system, r1cs):
        pk, _ = system.setup(r1cs)
        p1 = system.prove(r1cs.witness(), pk)
        p2 = system.prove(r1cs.witness(), pk)
        assert p1 != p2

    def test_uses_stored_key(self, system, r1cs):
        system.setup(r1cs)
        assert isinstance(system.prove(r1cs.witness()), Proof)

    def test_witness_does_not_enter_proof(self, r1cs, sequence_rng):
        values = (1, 2, 3, 4, 5, 6, 7)
        s1 = SimulatedProofSystem(rng=sequence_rng(*values))
        s2 = SimulatedProofSystem(rng=sequence_rng(*values))
        pk1, _ = s1.setup(r1cs)
        pk2, _ = s2.setup(r1cs)
        assert s1.prove([1, 3, 9, 27, 35], pk1) == s2.prove([1, 0, 0, 0, 0], pk2)

    def test_prove_before_setup(self, system, r1cs):
        with pytest.raises(PhaseError):
            system.prove(r1cs.witness())

    def test_prove_with_wrong_key_type(self, system, r1cs):
        system.setup(r1cs)
        with pytest.raises(PhaseError):
            system.prove(r1cs.witness(), system.verification_key)

    def test_witness_length_mismatch(self, system, r1cs):
        pk, _ = system.setup(r1cs)
        with pytest.raises(ValueError):
            system.prove([1, 3, 9], pk)
