"""
errors.py - 모델 오류 정의

- InvalidArgument: 벡터/행렬 차원 불일치, 0 이하의 객체/픽셀 수
- NumericDivergence: 조건화/매핑 중 발생한 비유한(NaN/inf) 확률, 평균, 샘플

차원 오류는 상태를 변경하기 전에 각 공개 연산의 경계에서 발생합니다.
수치 발산은 호출자(외부 필터)가 가설을 버릴지 중단할지 결정하도록
예외로 전달됩니다.
"""

from typing import Sequence, Tuple, Union

import numpy as np


class ModelError(Exception):
    """rbtrack 모델 오류의 기본 클래스"""


class InvalidArgument(ModelError, ValueError):
    """차원 또는 인자 값이 계약에 맞지 않음"""


class NumericDivergence(ModelError, ArithmeticError):
    """비유한 값이 생성되거나 입력됨"""


def as_vector(
    value: Union[float, Sequence[float], np.ndarray],
    dimension: int,
    name: str
) -> np.ndarray:
    """
    입력을 길이 dimension의 1차원 float64 벡터로 변환

    (n,), (n, 1), (1, n) 형태를 모두 허용합니다.

    Raises:
        InvalidArgument: 원소 수가 dimension과 다를 때
    """
    arr = np.asarray(value, dtype=np.float64)

    if arr.ndim == 2 and 1 in arr.shape:
        arr = arr.reshape(-1)
    elif arr.ndim == 0:
        arr = arr.reshape(1)

    if arr.ndim != 1 or arr.shape[0] != dimension:
        raise InvalidArgument(
            f"{name}: expected vector of length {dimension}, got shape {np.shape(value)}"
        )

    return arr


def as_square_matrix(value, dimension: int, name: str) -> np.ndarray:
    """(dimension, dimension) float64 행렬로 변환"""
    arr = np.asarray(value, dtype=np.float64)
    expected: Tuple[int, int] = (dimension, dimension)
    if arr.shape != expected:
        raise InvalidArgument(f"{name}: expected {expected} matrix, got shape {arr.shape}")
    return arr


def check_delta_time(delta_time: float) -> float:
    """경과 시간 검증 (유한, 0 이상)"""
    delta_time = float(delta_time)
    if not np.isfinite(delta_time) or delta_time < 0:
        raise InvalidArgument(f"delta_time must be finite and non-negative, got {delta_time}")
    return delta_time
