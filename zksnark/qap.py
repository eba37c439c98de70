"""
QAP (Quadratic Arithmetic Program) 변환
=======================================

R1CS 의 m개 제약을 다항식 항등식 하나로 바꾼다.

**변환**:
  도메인 {1, 2, ..., m} 의 k번째 점을 k번째 제약에 대응시키고,
  각 변수 i 에 대해 제약 행렬의 열을 보간한다.

      L_i(k) = A_k[i],  R_i(k) = B_k[i],  O_i(k) = C_k[i]

  목표 다항식 T(x) = (x-1)(x-2)...(x-m) 은 도메인 위에서만 0이 된다.

**만족성**:
  witness w 에 대해

      A(x) = Σ w_i·L_i(x),  B(x) = Σ w_i·R_i(x),  C(x) = Σ w_i·O_i(x)

  A(x)·B(x) - C(x) 가 모든 도메인 점에서 0 ⇔ T(x) 로 나누어 떨어짐 ⇔
  모든 R1CS 제약 만족.
  H(x) = (A(x)·B(x) - C(x)) / T(x) 가 Groth16 에서 몫 다항식 역할을 한다.

사용 예시:
    >>> qap = r1cs_to_qap(R1CS.cubic_example())
    >>> qap.check_witness([1, 3, 9, 27, 35])   # True
    >>> H, r = qap.divisor_polynomial([1, 3, 9, 27, 35])
    >>> r.is_zero()                            # True
"""

import logging

from zksnark.interpolation import lagrange_interp
from zksnark.polynomial import Polynomial, poly_div


def target_polynomial(domain, field):
    """T(x) = Π (x - d), 상수 다항식 1 에서 시작해 차례로 곱한다."""
    T = Polynomial([1], field)
    for d in domain:
        T = T.multiply(Polynomial([field.neg(d), 1], field))
    return T


class QAP:
    """R1CS 에서 얻은 변수별 다항식과 목표 다항식.

    속성:
        field: FiniteField
        domain: (1, ..., m)
        L, R, O: 변수별 Polynomial 리스트 (길이 = 변수 개수)
        T: 목표 다항식
        logger: 도메인 점별 진단을 받을 로거. None이면 모듈 로거.
    """

    def __init__(self, L, R, O, T, domain, field, logger=None):
        self.L = L
        self.R = R
        self.O = O
        self.T = T
        self.domain = tuple(domain)
        self.field = field
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    @property
    def num_variables(self):
        return len(self.L)

    @property
    def num_constraints(self):
        return len(self.domain)

    def _check_witness_length(self, witness):
        if len(witness) != self.num_variables:
            raise ValueError(
                f"witness 길이 {len(witness)} 가 변수 개수 {self.num_variables} 와 다릅니다"
            )

    def solution_polynomials(self, witness):
        """A(x), B(x), C(x) 를 반환한다. 가중치가 0인 변수는 건너뛴다."""
        F = self.field
        witness = [F.element(w) for w in witness]
        self._check_witness_length(witness)

        A = Polynomial([0], F)
        B = Polynomial([0], F)
        C = Polynomial([0], F)
        for w, l, r, o in zip(witness, self.L, self.R, self.O):
            if w == 0:
                continue
            A = A.add(l.scale(w))
            B = B.add(r.scale(w))
            C = C.add(o.scale(w))
        return A, B, C

    def solution(self, witness):
        """A(x)·B(x) - C(x)."""
        A, B, C = self.solution_polynomials(witness)
        return A.multiply(B).sub(C)

    def check_witness(self, witness):
        """A(x)·B(x) - C(x) 가 모든 도메인 점에서 0이면 True."""
        sol = self.solution(witness)
        for point in self.domain:
            value = sol.evaluate(point)
            self.logger.debug("x=%d: A(x)*B(x)-C(x)=%d", point, value)
            if value != 0:
                return False
        return True

    def divisor_polynomial(self, witness):
        """(H, remainder) = (A·B - C) / T.

        witness 가 유효하면 나머지는 영 다항식이다.
        """
        return poly_div(self.solution(witness), self.T)

    def is_divisible(self, witness):
        _, remainder = self.divisor_polynomial(witness)
        return remainder.is_zero()


def r1cs_to_qap(r1cs, logger=None):
    """R1CS 를 QAP 로 변환한다.

    입력 R1CS 는 freeze() 되어 이후 수정할 수 없다.
    logger 는 변환 과정과 결과 QAP 의 진단 로그를 받는다 (None이면 모듈 로거).

    Raises:
        ValueError: 제약 벡터 길이가 변수 개수와 맞지 않을 때
    """
    if logger is None:
        logger = logging.getLogger(__name__)
    r1cs.validate()
    r1cs.freeze()

    F = r1cs.field
    domain = [k + 1 for k in range(r1cs.num_constraints)]

    L, R, O = [], [], []
    for i in range(r1cs.num_variables):
        L.append(lagrange_interp(
            [(x, c.a.get(i)) for x, c in zip(domain, r1cs.constraints)], F))
        R.append(lagrange_interp(
            [(x, c.b.get(i)) for x, c in zip(domain, r1cs.constraints)], F))
        O.append(lagrange_interp(
            [(x, c.c.get(i)) for x, c in zip(domain, r1cs.constraints)], F))

    T = target_polynomial(domain, F)
    logger.info(
        "QAP built: %d variables, %d constraints",
        r1cs.num_variables, r1cs.num_constraints,
    )
    logger.debug("target polynomial T(x) = %s", T)
    return QAP(L, R, O, T, domain, F, logger)
