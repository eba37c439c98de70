"""
Groth16 시뮬레이터: Setup / Prove / Verify 오케스트레이터
==========================================================

**경고: 암호학적으로 안전한 증명 시스템이 아니다.**
  타원곡선 그룹 원소와 쌍선형 페어링을 평범한 필드 원소 산술로 대체한
  교육용 시뮬레이션이다. 키는 QAP 다항식에 묶여 있지 않고, witness 는
  증명 값에 영향을 주지 않으며, 검증식은 증명 대상 명제와 무관하다.
  verify() 결과가 True 라고 해서 어떤 보안 보장도 되지 않는다.

**3단계 구조** (순서 고정, 건너뛸 수 없음):

  ┌─────────────────────────────────────────────────────┐
  │  Setup: toxic waste (α, β, γ, δ, τ) 생성            │
  │  → ProvingKey {α, β, δ}, VerificationKey {α, β, γ, δ}│
  │  toxic waste 는 키 유도 후 버린다                    │
  ├─────────────────────────────────────────────────────┤
  │  Prove: 증명용 난수 r, s 생성                        │
  │  A = α + r,  B = β + s,  C = r·s                    │
  ├─────────────────────────────────────────────────────┤
  │  Verify: A·B == (α·β)·(γ·δ) ?                       │
  │  결과와 검증 소요 시간(ms)을 반환                     │
  └─────────────────────────────────────────────────────┘

사용 예시:
    >>> from zksnark.groth16 import SimulatedProofSystem
    >>> system = SimulatedProofSystem()
    >>> pk, vk = system.setup(r1cs)
    >>> proof = system.prove(witness, pk)
    >>> result = system.verify(proof, [35], vk)
    >>> result.valid, result.duration_ms
"""

import logging

from zksnark.groth16.proving import Proof, create_proof
from zksnark.groth16.setup import (
    ProvingKey,
    VerificationKey,
    derive_keys,
    generate_toxic_waste,
)
from zksnark.groth16.verifying import VerificationResult, verify
from zksnark.qap import QAP
from zksnark.r1cs import R1CS


class PhaseError(RuntimeError):
    """Setup → Prove → Verify 순서를 어긴 호출."""


class SimulatedProofSystem:
    """Groth16 구조를 흉내 낸 Setup/Prove/Verify 상태 기계.

    속성:
        rng: rng(p) -> int 형태의 난수원. None이면 secrets.randbelow.
             테스트에서는 random.Random(seed).randrange 를 넘길 수 있다.
        proving_key, verification_key: 마지막 setup() 의 결과 (setup 전에는 None)
    """

    def __init__(self, rng=None, logger=None):
        self.rng = rng
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.proving_key = None
        self.verification_key = None

    def setup(self, circuit):
        """회로(R1CS 또는 QAP)에 대한 키 쌍을 생성한다.

        Returns:
            tuple: (ProvingKey, VerificationKey)
        """
        if isinstance(circuit, R1CS):
            circuit.validate()
        elif not isinstance(circuit, QAP):
            raise ValueError(f"R1CS 또는 QAP 가 필요합니다: {type(circuit).__name__}")

        field = circuit.field
        self.logger.info(
            "trusted setup: %d variables, %d constraints",
            circuit.num_variables, circuit.num_constraints,
        )
        waste = generate_toxic_waste(field, self.rng)
        pk, vk = derive_keys(waste, circuit.num_variables, circuit.num_constraints, field)
        del waste
        self.logger.warning("toxic waste must be destroyed in a real ceremony")

        self.proving_key = pk
        self.verification_key = vk
        return pk, vk

    def prove(self, witness, proving_key=None):
        """증명을 생성한다. 이 시뮬레이션에서 witness 는 길이만 검사된다.

        Raises:
            PhaseError: setup 전에 호출되었을 때
            ValueError: witness 길이가 회로의 변수 개수와 다를 때
        """
        if proving_key is None:
            proving_key = self.proving_key
        if proving_key is None:
            raise PhaseError("setup() 전에 prove() 를 호출할 수 없습니다")
        if not isinstance(proving_key, ProvingKey):
            raise PhaseError(f"ProvingKey 가 아닙니다: {type(proving_key).__name__}")
        if len(witness) != proving_key.num_variables:
            raise ValueError(
                f"witness 길이 {len(witness)} 가 변수 개수 "
                f"{proving_key.num_variables} 와 다릅니다"
            )

        field = proving_key.field
        r = field.random_element(self.rng)
        s = field.random_element(self.rng)
        proof = create_proof(proving_key, r, s)
        self.logger.info("proof generated (%d bytes)", proof.proof_size_bytes)
        return proof

    def verify(self, proof, public_inputs, verification_key):
        """증명을 검증한다 (시뮬레이션, 건전하지 않음).

        결과는 세 인자만으로 결정된다. 마지막 setup() 의 키를 암묵적으로 쓰지 않는다.

        Returns:
            VerificationResult: valid, duration_ms

        Raises:
            PhaseError: 증명이나 검증 키가 없을 때
        """
        if not isinstance(proof, Proof):
            raise PhaseError("prove() 로 생성한 Proof 가 필요합니다")
        if not isinstance(verification_key, VerificationKey):
            raise PhaseError("setup() 으로 생성한 VerificationKey 가 필요합니다")

        result = verify(proof, public_inputs, verification_key)
        self.logger.info(
            "verification completed in %.3fms: %s",
            result.duration_ms, "VALID" if result.valid else "INVALID",
        )
        return result


__all__ = [
    "PhaseError",
    "Proof",
    "ProvingKey",
    "SimulatedProofSystem",
    "VerificationKey",
    "VerificationResult",
]
