"""
sigma_point_bridge.py - 재매개변수화 모델의 모멘트/샘플 전파

같은 StandardNormalMapping을 두 종류의 필터에서 사용합니다.

- 모멘트 기반 (가우시안 필터): 표준 정규 잡음 N(0, I)의 시그마 포인트를
  sample()로 전파하고 unscented transform으로 평균/공분산을 계산
- 샘플 기반 (파티클 필터): 표준 정규 잡음을 뽑아 sample()로 전파

시그마 포인트와 unscented transform은 filterpy를 사용합니다.
"""

from typing import Any, Callable, List, Optional, Tuple
import logging

import numpy as np
from filterpy.kalman import MerweScaledSigmaPoints, unscented_transform

from ..interfaces import StandardNormalMapping

logger = logging.getLogger(__name__)


def _default_to_vector(value: Any) -> np.ndarray:
    if hasattr(value, 'vector'):
        return np.asarray(value.vector, dtype=np.float64)
    return np.atleast_1d(np.asarray(value, dtype=np.float64))


def propagate_moments(
    mapping: StandardNormalMapping,
    to_vector: Optional[Callable[[Any], np.ndarray]] = None,
    alpha: float = 1.0,
    beta: float = 2.0,
    kappa: float = 0.0
) -> Tuple[np.ndarray, np.ndarray]:
    """
    조건화된 매핑 출력의 평균/공분산 근사

    Args:
        mapping: condition()이 끝난 StandardNormalMapping
        to_vector: 매핑 출력을 벡터로 변환하는 함수 (기본: .vector 또는 배열 변환)
        alpha, beta, kappa: Merwe 시그마 포인트 파라미터

    Returns:
        (mean, covariance)
    """
    to_vector = to_vector or _default_to_vector
    n = mapping.standard_variate_dimension

    points = MerweScaledSigmaPoints(n, alpha=alpha, beta=beta, kappa=kappa)
    sigmas = points.sigma_points(np.zeros(n), np.eye(n))

    propagated = np.array([to_vector(mapping.sample(s)) for s in sigmas])
    mean, covariance = unscented_transform(propagated, points.Wm, points.Wc)

    logger.debug(f"Propagated {len(sigmas)} sigma points through {type(mapping).__name__}")
    return mean, covariance


def sample_particles(
    mapping: StandardNormalMapping,
    count: int,
    rng: Optional[np.random.Generator] = None
) -> List[Any]:
    """
    조건화된 매핑에서 count개 샘플 생성

    Args:
        mapping: condition()이 끝난 StandardNormalMapping
        count: 샘플 수
        rng: 난수 생성기 (None이면 np.random.default_rng())
    """
    rng = rng if rng is not None else np.random.default_rng()
    noise = rng.standard_normal((count, mapping.standard_variate_dimension))
    return [mapping.sample(z) for z in noise]
