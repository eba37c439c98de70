"""
라그랑주 보간 (Lagrange Interpolation)
======================================

n개의 서로 다른 점 (x_i, y_i) 를 지나는 차수 < n 의 유일한 다항식을 만든다.

    P(x) = Σ_i y_i · Π_{j≠i} (x - x_j) / (x_i - x_j)

각 기저 항은 상수 y_i 에서 시작해 (x - x_j) 를 차례로 곱하고,
미리 계산한 Π (x_i - x_j) 의 역원으로 모든 계수를 스케일한다.

복잡도: O(n²)번의 다항식 곱셈. 수십~수백 개 제약 규모를 대상으로 한다.
수천 개 이상의 제약에서는 단위근 도메인 위의 FFT 보간이 필요하지만
이 모듈의 범위 밖이다.
"""

from zksnark.field import DEFAULT_FIELD
from zksnark.polynomial import Polynomial


def _check_distinct(xs):
    seen = set()
    for x in xs:
        if x in seen:
            raise ValueError(f"보간점의 x 좌표가 중복됩니다: {x}")
        seen.add(x)


def lagrange_basis(xs, i, field=None):
    """i번째 라그랑주 기저 다항식 L_i(x) = Π_{j≠i} (x - x_j) / (x_i - x_j).

    성질: L_i(x_j) = δ_ij
    """
    F = field if field is not None else DEFAULT_FIELD
    xs = [F.element(x) for x in xs]
    _check_distinct(xs)

    term = Polynomial([1], F)
    denominator = 1
    for j, xj in enumerate(xs):
        if j == i:
            continue
        term = term.multiply(Polynomial([F.neg(xj), 1], F))
        denominator = F.mul(denominator, F.sub(xs[i], xj))
    return term.scale(F.inv(denominator))


def lagrange_interp(points, field=None):
    """점 집합 [(x_0, y_0), ...] 을 지나는 다항식을 반환한다.

    Args:
        points: (x, y) 쌍의 시퀀스. x 좌표는 서로 달라야 한다.
        field: FiniteField. None이면 bn128 스칼라 필드.

    Returns:
        Polynomial: 차수 < len(points). 점이 없으면 영 다항식.

    Raises:
        ValueError: x 좌표가 (p로 정규화한 뒤) 중복될 때
    """
    F = field if field is not None else DEFAULT_FIELD
    points = [(F.element(x), F.element(y)) for x, y in points]
    xs = [x for x, _ in points]
    _check_distinct(xs)

    result = Polynomial([0], F)
    for i, (xi, yi) in enumerate(points):
        if yi == 0:
            continue
        term = Polynomial([yi], F)
        denominator = 1
        for j, xj in enumerate(xs):
            if j == i:
                continue
            term = term.multiply(Polynomial([F.neg(xj), 1], F))
            denominator = F.mul(denominator, F.sub(xi, xj))
        result = result.add(term.scale(F.inv(denominator)))
    return result


def interpolate_domain(values, field=None):
    """도메인 1, 2, ..., n 위에서 values 를 보간한다."""
    return lagrange_interp([(k + 1, v) for k, v in enumerate(values)], field)
