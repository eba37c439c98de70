"""
기반 모듈: 다항식(Polynomial) 클래스 및 나눗셈
=============================================

유한체 위의 밀집(dense) 계수 표현 다항식.

**표현**:
  coeffs = (c₀, c₁, c₂, ...) → c₀ + c₁·x + c₂·x² + ...
  인덱스가 곧 차수이다. 연산 결과에 최고차 0 계수가 남아 있어도 허용되며,
  없는 인덱스의 계수는 0으로 취급한다.

**불변성**:
  Polynomial 객체는 생성 후 변경되지 않는다. 모든 연산은 새 객체를 반환한다.

**다항식 나눗셈 (poly_div)**:
  QAP에서 H(x) = (A(x)·B(x) - C(x)) / T(x) 를 계산할 때 사용한다.
  나머지가 0이면 모든 제약이 만족된 것이다.

사용 예시:
    >>> p = Polynomial([1, 2, 3])  # 1 + 2x + 3x²
    >>> p.evaluate(2)              # 1 + 4 + 12 = 17
    >>> str(p * Polynomial([0, 1]))
    'x + 2x^2 + 3x^3'
"""

from zksnark.field import DEFAULT_FIELD


# ─────────────────────────────────────────────────────────────────────
# Polynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class Polynomial:
    """유한체 위의 다항식.

    QAP에서의 역할:
    - 변수별 L_i(x), R_i(x), O_i(x): 제약 행렬의 열을 보간한 다항식
    - A(x), B(x), C(x): witness 가중합
    - 목표 다항식 T(x) = (x-1)(x-2)...(x-m)

    예시:
        >>> p = Polynomial([1, 2])  # 1 + 2x
        >>> q = Polynomial([3, 4])  # 3 + 4x
        >>> p + q                   # 4 + 6x
        >>> p * q                   # 3 + 10x + 8x²
    """

    def __init__(self, coeffs=None, field=None):
        """다항식 생성.

        Args:
            coeffs: 정수 계수 시퀀스 [c₀, c₁, ...]. 각 계수는 p로 정규화된다.
                    None이면 계수가 없는 영 다항식.
            field: FiniteField. None이면 bn128 스칼라 필드.
        """
        self.field = field if field is not None else DEFAULT_FIELD
        if coeffs is None:
            coeffs = []
        self._coeffs = tuple(self.field.element(c) for c in coeffs)

    @property
    def coeffs(self):
        return self._coeffs

    def __len__(self):
        """계수 개수 (최고차 0 계수 포함)."""
        return len(self._coeffs)

    def __getitem__(self, i):
        """x^i 의 계수. 범위 밖(음수 포함)의 차수는 0이다."""
        if 0 <= i < len(self._coeffs):
            return self._coeffs[i]
        return 0

    def __iter__(self):
        return iter(self._coeffs)

    def trim(self):
        """최고차 0 계수를 제거한 새 다항식."""
        coeffs = list(self._coeffs)
        while coeffs and coeffs[-1] == 0:
            coeffs.pop()
        return Polynomial(coeffs, self.field)

    @property
    def degree(self):
        """차수. 영 다항식의 차수는 0으로 정의한다."""
        return max(len(self.trim()) - 1, 0)

    def is_zero(self):
        return all(c == 0 for c in self._coeffs)

    @classmethod
    def zero(cls, field=None):
        return cls([0], field)

    @classmethod
    def one(cls, field=None):
        return cls([1], field)

    def _coerce(self, other):
        if isinstance(other, int):
            return Polynomial([other], self.field)
        if not isinstance(other, Polynomial):
            raise TypeError(f"다항식이 아닌 값과 연산할 수 없습니다: {other!r}")
        if other.field != self.field:
            raise ValueError("서로 다른 필드 위의 다항식은 연산할 수 없습니다")
        return other

    def evaluate(self, x):
        """p(x) 를 계산한다.

        x의 거듭제곱 누적값을 한 항씩 곱해 나가며 c_i·x^i 를 더한다.
        중간값을 포함한 모든 값은 필드 원소이다.
        """
        F = self.field
        x = F.element(x)
        result = 0
        power = 1
        for coeff in self._coeffs:
            result = F.add(result, F.mul(coeff, power))
            power = F.mul(power, x)
        return result

    __call__ = evaluate

    def add(self, other):
        """p(x) + q(x). 결과 길이는 max(len(p), len(q))."""
        other = self._coerce(other)
        F = self.field
        size = max(len(self), len(other))
        return Polynomial([F.add(self[i], other[i]) for i in range(size)], F)

    def sub(self, other):
        other = self._coerce(other)
        F = self.field
        size = max(len(self), len(other))
        return Polynomial([F.sub(self[i], other[i]) for i in range(size)], F)

    def multiply(self, other):
        """p(x) · q(x) (convolution).

        결과 길이는 len(p) + len(q) - 1.
        result[i + j] += p[i] * q[j]
        """
        other = self._coerce(other)
        F = self.field
        if not self._coeffs or not other._coeffs:
            return Polynomial([], F)
        result = [0] * (len(self) + len(other) - 1)
        for i, a in enumerate(self._coeffs):
            if a == 0:
                continue
            for j, b in enumerate(other._coeffs):
                result[i + j] = F.add(result[i + j], F.mul(a, b))
        return Polynomial(result, F)

    def scale(self, scalar):
        """스칼라곱: scalar · p(x)."""
        F = self.field
        return Polynomial([F.mul(c, scalar) for c in self._coeffs], F)

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.sub(other)

    def __rsub__(self, other):
        return self._coerce(other).sub(self)

    def __neg__(self):
        F = self.field
        return Polynomial([F.neg(c) for c in self._coeffs], F)

    def __mul__(self, other):
        if isinstance(other, int):
            return self.scale(other)
        return self.multiply(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        """최고차 0 계수를 무시하고 비교한다."""
        if isinstance(other, int):
            other = Polynomial([other], self.field)
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.field == other.field and self.trim().coeffs == other.trim().coeffs

    __hash__ = None

    def __repr__(self):
        return f"Polynomial({list(self._coeffs)})"

    def __str__(self):
        terms = []
        for i, c in enumerate(self._coeffs):
            if c == 0:
                continue
            if i == 0:
                terms.append(str(c))
            elif i == 1:
                terms.append("x" if c == 1 else f"{c}x")
            else:
                terms.append(f"x^{i}" if c == 1 else f"{c}x^{i}")
        return " + ".join(terms) if terms else "0"


# ─────────────────────────────────────────────────────────────────────
# 다항식 나눗셈 (Polynomial Long Division)
# ─────────────────────────────────────────────────────────────────────

def poly_div(a, b):
    """다항식 나눗셈: a(x) = b(x) · q(x) + r(x).

    QAP에서의 사용:
    - H(x) = (A(x)·B(x) - C(x)) / T(x), 나머지 r(x)가 0이어야 witness가 유효하다.

    Args:
        a: 피제수 Polynomial
        b: 제수 Polynomial

    Returns:
        tuple: (몫 Polynomial, 나머지 Polynomial)

    Raises:
        ValueError: 제수가 영 다항식이거나 두 다항식의 필드가 다를 때

    예시:
        >>> q, r = poly_div(Polynomial([-1, 0, 1]), Polynomial([-1, 1]))
        >>> q  # x + 1
        >>> r  # 0
    """
    if a.field != b.field:
        raise ValueError("서로 다른 필드 위의 다항식은 나눌 수 없습니다")
    F = a.field
    divisor = list(b.trim().coeffs)
    if not divisor:
        raise ValueError("0으로 나눌 수 없습니다")

    remainder = list(a.trim().coeffs)
    deg_b = len(divisor) - 1
    deg_a = len(remainder) - 1
    if deg_a < deg_b:
        return Polynomial.zero(F), Polynomial(remainder or [0], F)

    quotient = [0] * (deg_a - deg_b + 1)
    lead_inv = F.inv(divisor[-1])

    # 최고차 항부터 소거
    for i in range(deg_a - deg_b, -1, -1):
        coeff = F.mul(remainder[i + deg_b], lead_inv)
        quotient[i] = coeff
        if coeff == 0:
            continue
        for j in range(deg_b + 1):
            remainder[i + j] = F.sub(remainder[i + j], F.mul(coeff, divisor[j]))

    return Polynomial(quotient, F), Polynomial(remainder[:deg_b] or [0], F)
