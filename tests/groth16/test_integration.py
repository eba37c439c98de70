import logging

import pytest

from zksnark.field import FiniteField
from zksnark.groth16 import PhaseError, SimulatedProofSystem
from zksnark.qap import r1cs_to_qap
from zksnark.r1cs import R1CS


class TestR1csSatisfaction:
    """R1CS 제약조건 만족성: <A,w> * <B,w> == <C,w>"""

    def test_all_constraints(self, full_pipeline_data, r1cs):
        w = full_pipeline_data["witness"]
        assert w == [1, 3, 9, 27, 35]
        for result in r1cs.constraint_results(w):
            assert result.satisfied, f"Constraint {result.index} unsatisfied"


class TestQapCancellation:
    """QAP 해 다항식이 도메인 점에서 소거됨"""

    def test_sol_vanishes_at_domain(self, r1cs):
        qap = r1cs_to_qap(r1cs)
        sol = qap.solution(r1cs.witness())
        for x in qap.domain:
            assert sol.evaluate(x) == 0, f"sol({x}) != 0"

    def test_h_times_t(self, r1cs):
        qap = r1cs_to_qap(r1cs)
        w = r1cs.witness()
        H, remainder = qap.divisor_polynomial(w)
        assert remainder.is_zero()
        assert H * qap.T == qap.solution(w)


class TestE2EPipeline:
    """R1CS → QAP → Setup → Prove → Verify"""

    def test_full_flow(self, caplog):
        r1cs = R1CS.cubic_example()
        w = r1cs.witness()
        assert r1cs.check_witness(w)

        qap = r1cs_to_qap(r1cs)
        assert qap.check_witness(w)

        system = SimulatedProofSystem()
        with caplog.at_level(logging.INFO, logger="zksnark.groth16"):
            pk, vk = system.setup(qap)
            proof = system.prove(w, pk)
            result = system.verify(proof, [w[-1]], vk)

        assert isinstance(result.valid, bool)
        assert result.duration_ms >= 0
        assert "trusted setup" in caplog.text
        assert "proof generated" in caplog.text
        assert "verification completed" in caplog.text

    def test_setup_warns_about_toxic_waste(self, system, r1cs, caplog):
        with caplog.at_level(logging.WARNING, logger="zksnark.groth16"):
            system.setup(r1cs)
        assert any(rec.levelno == logging.WARNING for rec in caplog.records)

    def test_small_field_flow(self, sequence_rng):
        F = FiniteField(97)
        r1cs = R1CS.cubic_example(field=F)
        system = SimulatedProofSystem(rng=sequence_rng(2, 3, 1, 1, 50, 0, 0))
        pk, vk = system.setup(r1cs_to_qap(r1cs))
        proof = system.prove(r1cs.witness(), pk)
        assert system.verify(proof, [35], vk).valid is True

    def test_invalid_witness_still_proves(self, system, r1cs):
        # 증명 값은 witness 에 의존하지 않는다
        pk, vk = system.setup(r1cs)
        bad = [1, 3, 9, 27, 36]
        assert r1cs.check_witness(bad) is False
        proof = system.prove(bad, pk)
        system.verify(proof, [36], vk)


class TestPhaseOrder:
    def test_prove_then_setup_order(self, r1cs):
        system = SimulatedProofSystem()
        with pytest.raises(PhaseError):
            system.prove(r1cs.witness())
        system.setup(r1cs)
        system.prove(r1cs.witness())

    def test_verify_without_proof(self, r1cs):
        system = SimulatedProofSystem()
        system.setup(r1cs)
        with pytest.raises(PhaseError):
            system.verify(None, [35], system.verification_key)

    def test_keys_from_other_system(self, r1cs):
        first = SimulatedProofSystem()
        second = SimulatedProofSystem()
        pk, vk = first.setup(r1cs)
        proof = second.prove(r1cs.witness(), pk)
        assert isinstance(second.verify(proof, [35], vk).valid, bool)
