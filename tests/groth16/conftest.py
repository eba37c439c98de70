import random

import pytest

from zksnark.groth16 import SimulatedProofSystem
from zksnark.r1cs import R1CS


# ── 테스트 상수 ──
# setup 순서: alpha, beta, gamma, delta, tau / prove 순서: r, s
TOXIC = {
    "alpha": 3926,
    "beta": 3604,
    "gamma": 2971,
    "delta": 1357,
    "tau": 3721,
}
PROVER = {"r": 4106, "s": 4565}


def _sequence_rng(*values):
    it = iter(values)
    return lambda p: next(it)


@pytest.fixture
def sequence_rng():
    """rng(p) 자리에 넘길 수 있는, 정해진 값을 차례로 돌려주는 난수원을 만든다."""
    return _sequence_rng


@pytest.fixture
def toxic():
    return dict(TOXIC)


@pytest.fixture
def prover_randomness():
    return dict(PROVER)


@pytest.fixture
def r1cs():
    return R1CS.cubic_example()


@pytest.fixture
def system():
    return SimulatedProofSystem()


@pytest.fixture
def seeded_system():
    return SimulatedProofSystem(rng=random.Random(1234).randrange)


@pytest.fixture
def fixed_system():
    return SimulatedProofSystem(rng=_sequence_rng(
        TOXIC["alpha"], TOXIC["beta"], TOXIC["gamma"], TOXIC["delta"], TOXIC["tau"],
        PROVER["r"], PROVER["s"],
    ))


@pytest.fixture
def full_pipeline_data(fixed_system, r1cs):
    """setup → proving → verifying 결과."""
    pk, vk = fixed_system.setup(r1cs)
    witness = r1cs.witness()
    proof = fixed_system.prove(witness, pk)
    result = fixed_system.verify(proof, [witness[-1]], vk)
    return {"pk": pk, "vk": vk, "witness": witness, "proof": proof, "result": result}
