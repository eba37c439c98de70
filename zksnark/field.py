"""
기반 모듈: 소수체(Prime Field) 산술
====================================

R1CS, QAP, Groth16 시뮬레이터 전체에서 사용하는 모듈러 산술 엔진.

**필드 원소 표현**:
  필드 원소는 [0, p) 범위의 파이썬 정수(int)로 표현한다.
  모든 연산의 입력은 먼저 p로 나눈 나머지로 정규화되고,
  결과 역시 항상 [0, p) 범위이다 (음수나 p 이상의 값은 나오지 않는다).

**기본 소수 p**:
  bn128(BN254) 곡선의 스칼라 필드 위수. py_ecc의 bn128.curve_order 와 같은 값이다.
  p ≈ 2^254

**역원**:
  페르마 소정리 a^(p-1) = 1 (mod p) 에서 a^(-1) = a^(p-2).
  0은 역원이 없으므로 inv(0)은 ZeroDivisionError를 발생시킨다.

사용 예시:
    >>> from zksnark.field import FiniteField
    >>> F = FiniteField()
    >>> F.mul(3, 7)               # 21
    >>> F.mul(5, F.inv(5))        # 1
    >>> F.sub(0, 1) == F.p - 1    # True
"""

import secrets

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


# bn128 스칼라 필드 위수 (소수)
BN254_PRIME = bn128.curve_order

# 밀러-라빈 판정에 쓰는 밑 (n < 3.3 × 10^24 에서는 결정적)
_PRIMALITY_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def is_probable_prime(n):
    """밀러-라빈 소수 판정."""
    if n < 2:
        return False
    for q in _PRIMALITY_BASES:
        if n % q == 0:
            return n == q
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for a in _PRIMALITY_BASES:
        x = FiniteField.mod_pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


class FiniteField:
    """소수 p 위의 유한체 GF(p).

    원소는 정수로 다루며, 이 객체는 연산 규칙(모듈러스)만 보관한다.
    덧셈, 뺄셈, 곱셈은 py_ecc 의 FQ 를 상속한 위수 p 의 FR 클래스로 계산한다.
    int 나 FQ 가 아닌 값(float 등)은 TypeError 로 거부된다.

    속성:
        p: 필드 위수 (소수)
        FR: 위수 p 의 py_ecc 필드 원소 클래스

    예시:
        >>> F = FiniteField(97)
        >>> F.add(90, 10)   # 3
        >>> F.div(1, 3)     # 3의 역원 = 65
    """

    def __init__(self, prime=BN254_PRIME):
        if isinstance(prime, bool) or not isinstance(prime, int):
            raise ValueError(f"필드 위수는 정수여야 합니다: {prime!r}")
        if prime < 2:
            raise ValueError(f"필드 위수는 2 이상이어야 합니다: {prime}")
        if not is_probable_prime(prime):
            raise ValueError(f"필드 위수는 소수여야 합니다: {prime}")
        self.p = prime
        self.FR = type("FR", (FQ,), {"field_modulus": prime})

    def __eq__(self, other):
        if not isinstance(other, FiniteField):
            return NotImplemented
        return self.p == other.p

    def __hash__(self):
        return hash(("FiniteField", self.p))

    def __repr__(self):
        return f"FiniteField({self.p})"

    def _fr(self, x):
        if isinstance(x, FQ):
            x = int(x)
        return self.FR(x)

    def element(self, x):
        """정수를 필드 원소로 정규화한다: x mod p.

        Raises:
            TypeError: x 가 int 나 FQ 가 아닐 때
        """
        return int(self._fr(x))

    def add(self, a, b):
        return int(self._fr(a) + self._fr(b))

    def sub(self, a, b):
        """a - b (mod p).

        두 값을 [0, p) 로 정규화한 뒤 빼므로 결과도 항상 [0, p) 범위이다.
        """
        return int(self._fr(a) - self._fr(b))

    def neg(self, a):
        return self.sub(0, a)

    def mul(self, a, b):
        return int(self._fr(a) * self._fr(b))

    def pow(self, base, exponent):
        """base^exponent (mod p).

        지수는 p로 줄이지 않는 음이 아닌 정수이다.

        Raises:
            TypeError: 지수가 정수가 아닐 때
            ValueError: 지수가 음수일 때
        """
        if not isinstance(exponent, int):
            raise TypeError(f"지수는 정수여야 합니다: {exponent!r}")
        if exponent < 0:
            raise ValueError(f"지수는 음이 아닌 정수여야 합니다: {exponent}")
        return self.mod_pow(self.element(base), exponent, self.p)

    def inv(self, a):
        """곱셈 역원 a^(-1) = a^(p-2) (mod p).

        Raises:
            ZeroDivisionError: a ≡ 0 일 때 (0은 역원이 없다)
        """
        a = self.element(a)
        if a == 0:
            raise ZeroDivisionError("0의 역원은 존재하지 않습니다")
        return self.mod_pow(a, self.p - 2, self.p)

    def div(self, a, b):
        return self.mul(a, self.inv(b))

    @staticmethod
    def mod_pow(base, exponent, modulus):
        """반복 제곱법(square-and-multiply)으로 base^exponent mod modulus 를 계산한다.

        지수의 이진 표현을 오른쪽(최하위 비트)부터 훑으며,
        비트가 1이면 결과에 현재 base를 곱하고 base는 매 단계 제곱한다.
        곱셈 횟수는 O(log exponent).

        modulus == 1 이면 모든 값이 0과 합동이므로 바로 0을 반환한다.
        """
        if modulus == 1:
            return 0
        result = 1
        base = base % modulus
        while exponent > 0:
            if exponent & 1:
                result = (result * base) % modulus
            exponent >>= 1
            base = (base * base) % modulus
        return result

    def random_element(self, rng=None):
        """[0, p) 에서 균등하게 뽑은 필드 원소.

        Args:
            rng: rng(p) -> int 형태의 호출 가능 객체 (테스트용).
                 None이면 secrets.randbelow 를 사용한다.
        """
        if rng is None:
            return secrets.randbelow(self.p)
        return self.element(rng(self.p))


# 모듈 전역 기본 필드 (bn128 스칼라 필드)
DEFAULT_FIELD = FiniteField(BN254_PRIME)
