import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zksnark.field import FiniteField
from zksnark.r1cs import R1CS
from zksnark.qap import r1cs_to_qap


SMALL_PRIME = 97


@pytest.fixture
def small_field():
    return FiniteField(SMALL_PRIME)


@pytest.fixture
def cubic_r1cs():
    """out = x^3 + x + 5 회로 (QAP 변환이 freeze 하므로 함수 단위로 새로 생성)."""
    return R1CS.cubic_example()


@pytest.fixture(scope="session")
def cubic_qap():
    return r1cs_to_qap(R1CS.cubic_example())


def build_product_r1cs():
    """희소 맵 벡터로 만든 두 제약 회로: x * y = z, z * z = w (x = 2, y = 5)."""
    r1cs = R1CS()
    x = r1cs.add_variable("x", 2)
    y = r1cs.add_variable("y", 5)
    z = r1cs.add_variable("z", 10)
    w = r1cs.add_variable("w", 100)
    r1cs.add_constraint({x: 1}, {y: 1}, {z: 1})
    r1cs.add_constraint({z: 1}, {z: 1}, {w: 1})
    return r1cs


@pytest.fixture
def product_r1cs():
    return build_product_r1cs()


@pytest.fixture(scope="session")
def product_qap():
    return r1cs_to_qap(build_product_r1cs())
