"""
R1CS (Rank-1 Constraint System)
================================

계산을 곱셈 제약들의 리스트로 표현한다.

**제약 형식**:
  witness 벡터 w 에 대해 각 제약 (A, B, C) 는

      (A · w) × (B · w) = (C · w)

  를 만족해야 한다. (· 는 필드 내적, × 는 필드 곱셈)

**변수 레지스트리**:
  인덱스 0은 상수 1 을 위한 변수 "1" 로 예약되어 있다.
  add_variable 은 1부터 시작하는 인덱스를 돌려준다.

**희소 벡터**:
  제약 벡터는 {인덱스: 계수} 맵으로 저장된다. 맵에 없는 인덱스의 계수는 0이다.
  밀집 리스트 [0, 1, 0, ...] 로 넘기면 그 길이를 기억해 두었다가
  검사 시점에 변수 개수와 같은지 확인한다 (삽입 시점에는 검사하지 않는다).

**예제 회로**: out = x³ + x + 5 (x = 3)
  | 제약 | A            | B   | C    | 의미               |
  |------|--------------|-----|------|--------------------|
  | 1    | x            | x   | sym1 | x·x = sym1         |
  | 2    | sym1         | x   | sym2 | sym1·x = sym2      |
  | 3    | 5 + x + sym2 | 1   | out  | (sym2+x+5)·1 = out |

  witness = [1, 3, 9, 27, 35]

사용 예시:
    >>> r1cs = R1CS.cubic_example()
    >>> r1cs.check_witness([1, 3, 9, 27, 35])   # True
    >>> r1cs.check_witness([1, 3, 9, 27, 36])   # False
"""

import logging

from py_ecc.fields import bn128_FQ as FQ

from zksnark.field import DEFAULT_FIELD


ONE = "1"


class SparseVector:
    """제약 벡터의 희소 표현.

    속성:
        entries: {인덱스: 계수} (계수 0인 항목은 저장하지 않는다)
        length: 밀집 리스트로 생성된 경우 그 길이, 맵으로 생성된 경우 None
    """

    def __init__(self, values):
        if isinstance(values, SparseVector):
            self.entries = dict(values.entries)
            self.length = values.length
            return
        if isinstance(values, dict):
            items = values.items()
            self.length = None
        else:
            values = list(values)
            items = enumerate(values)
            self.length = len(values)
        self.entries = {}
        for index, coeff in items:
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise ValueError(f"제약 벡터 인덱스는 음이 아닌 정수여야 합니다: {index!r}")
            if coeff is None:
                continue
            if isinstance(coeff, FQ):
                coeff = int(coeff)
            elif not isinstance(coeff, int):
                raise TypeError(f"제약 벡터 계수는 정수여야 합니다: {coeff!r}")
            if coeff != 0:
                self.entries[index] = coeff

    def get(self, index):
        return self.entries.get(index, 0)

    def validate(self, num_variables):
        if self.length is not None and self.length != num_variables:
            raise ValueError(
                f"제약 벡터 길이 {self.length} 가 변수 개수 {num_variables} 와 다릅니다"
            )
        for index in self.entries:
            if index >= num_variables:
                raise ValueError(
                    f"제약 벡터 인덱스 {index} 가 변수 개수 {num_variables} 를 벗어납니다"
                )

    def dot(self, witness, field):
        total = 0
        for index, coeff in self.entries.items():
            total = field.add(total, field.mul(coeff, witness[index]))
        return total

    def __repr__(self):
        return f"SparseVector({self.entries})"


class Constraint:
    """하나의 R1CS 제약 (A, B, C)."""

    def __init__(self, a, b, c):
        self.a = SparseVector(a)
        self.b = SparseVector(b)
        self.c = SparseVector(c)

    def validate(self, num_variables):
        self.a.validate(num_variables)
        self.b.validate(num_variables)
        self.c.validate(num_variables)


class ConstraintResult:
    """제약 하나에 대한 검사 결과 (진단용)."""

    def __init__(self, index, left, right, output, satisfied):
        self.index = index
        self.left = left
        self.right = right
        self.output = output
        self.satisfied = satisfied

    def __repr__(self):
        return (
            f"ConstraintResult(index={self.index}, left={self.left}, right={self.right}, "
            f"output={self.output}, satisfied={self.satisfied})"
        )


class R1CS:
    """변수 레지스트리와 제약 리스트.

    회로 구성 중에는 변수와 제약이 계속 추가되고,
    freeze() 이후(QAP 변환에 넘겨진 이후)에는 읽기 전용이 된다.

    속성:
        field: FiniteField
        names: 변수 이름 리스트 (names[0] == "1")
        values: 변수에 할당된 값 리스트 (미할당은 None)
        constraints: Constraint 리스트
    """

    def __init__(self, field=None, logger=None):
        self.field = field if field is not None else DEFAULT_FIELD
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.names = [ONE]
        self.values = [1]
        self.constraints = []
        self._frozen = False

    @property
    def num_variables(self):
        """상수 1 을 포함한 변수 개수."""
        return len(self.names)

    @property
    def num_constraints(self):
        return len(self.constraints)

    @property
    def frozen(self):
        return self._frozen

    def freeze(self):
        self._frozen = True
        return self

    def _check_mutable(self):
        if self._frozen:
            raise RuntimeError("고정(freeze)된 R1CS는 수정할 수 없습니다")

    def add_variable(self, name, value=None):
        """변수를 추가하고 1부터 시작하는 인덱스를 반환한다."""
        self._check_mutable()
        if name in self.names:
            raise ValueError(f"이미 등록된 변수입니다: {name}")
        self.names.append(name)
        self.values.append(None if value is None else self.field.element(value))
        return len(self.names) - 1

    def variable_index(self, name):
        try:
            return self.names.index(name)
        except ValueError:
            raise KeyError(f"등록되지 않은 변수입니다: {name}") from None

    def add_constraint(self, a, b, c):
        """제약 (A·w) × (B·w) = (C·w) 를 추가하고 제약 인덱스를 반환한다.

        벡터 길이는 여기서 검사하지 않는다. 제약을 추가한 뒤에도 변수가
        늘어날 수 있으므로 길이 검사는 check_witness / QAP 변환 시점에 한다.
        """
        self._check_mutable()
        self.constraints.append(Constraint(a, b, c))
        return len(self.constraints) - 1

    def validate(self):
        """모든 제약 벡터가 현재 변수 개수와 맞는지 확인한다."""
        for constraint in self.constraints:
            constraint.validate(self.num_variables)

    def _check_witness_length(self, witness):
        if len(witness) != self.num_variables:
            raise ValueError(
                f"witness 길이 {len(witness)} 가 변수 개수 {self.num_variables} 와 다릅니다"
            )

    def dot(self, vector, witness):
        """필드 내적 Σ vector[i] · witness[i] (vector 에 있는 인덱스만)."""
        return SparseVector(vector).dot(witness, self.field)

    def _evaluate(self, index, constraint, witness):
        F = self.field
        left = constraint.a.dot(witness, F)
        right = constraint.b.dot(witness, F)
        output = constraint.c.dot(witness, F)
        satisfied = F.mul(left, right) == output
        self.logger.debug(
            "constraint %d: left=%d right=%d output=%d satisfied=%s",
            index + 1, left, right, output, satisfied,
        )
        return ConstraintResult(index, left, right, output, satisfied)

    def check_witness(self, witness):
        """모든 제약을 만족하면 True. 처음 실패한 제약에서 바로 False 를 반환한다.

        Raises:
            ValueError: witness 길이나 제약 벡터 길이가 변수 개수와 다를 때
        """
        witness = [self.field.element(w) for w in witness]
        self._check_witness_length(witness)
        self.validate()
        for index, constraint in enumerate(self.constraints):
            if not self._evaluate(index, constraint, witness).satisfied:
                return False
        return True

    def constraint_results(self, witness):
        """모든 제약에 대한 ConstraintResult 리스트 (단락 평가 없음)."""
        witness = [self.field.element(w) for w in witness]
        self._check_witness_length(witness)
        self.validate()
        return [
            self._evaluate(index, constraint, witness)
            for index, constraint in enumerate(self.constraints)
        ]

    def witness(self):
        """add_variable 로 할당한 값들로 witness 를 만든다."""
        missing = [name for name, value in zip(self.names, self.values) if value is None]
        if missing:
            raise ValueError(f"값이 할당되지 않은 변수: {', '.join(missing)}")
        return list(self.values)

    @classmethod
    def cubic_example(cls, x=3, field=None, logger=None):
        """out = x³ + x + 5 회로.

        변수: [1, x, sym1, sym2, out]
        """
        r1cs = cls(field=field, logger=logger)
        F = r1cs.field
        sym1 = F.mul(x, x)
        sym2 = F.mul(sym1, x)
        out = F.add(F.add(sym2, x), 5)

        r1cs.add_variable("x", x)
        r1cs.add_variable("sym1", sym1)
        r1cs.add_variable("sym2", sym2)
        r1cs.add_variable("out", out)

        # x * x = sym1
        r1cs.add_constraint([0, 1, 0, 0, 0], [0, 1, 0, 0, 0], [0, 0, 1, 0, 0])
        # sym1 * x = sym2
        r1cs.add_constraint([0, 0, 1, 0, 0], [0, 1, 0, 0, 0], [0, 0, 0, 1, 0])
        # (sym2 + x + 5) * 1 = out
        r1cs.add_constraint([5, 1, 0, 1, 0], [1, 0, 0, 0, 0], [0, 0, 0, 0, 1])
        return r1cs
