"""
truncated_gaussian.py - 절단 정규 분포 (1차원)

구간 [lower, upper]로 제한하고 재정규화한 정규 분포입니다.
표준 정규 샘플 z를 역 CDF 방식으로 매핑합니다:

    u  = Φ(z)
    u' = Φ(a) + (Φ(b) - Φ(a)) * u,   a = (lower - mean) / std, b = (upper - mean) / std
    x  = mean + std * Φ⁻¹(u')
"""

import numpy as np
from scipy.special import ndtr, ndtri

from ..errors import InvalidArgument


class TruncatedGaussian:
    """1차원 절단 가우시안"""

    def __init__(
        self,
        mean: float = 0.0,
        standard_deviation: float = 1.0,
        lower_bound: float = -np.inf,
        upper_bound: float = np.inf
    ):
        self.parameters(mean, standard_deviation, lower_bound, upper_bound)

    def parameters(
        self,
        mean: float,
        standard_deviation: float,
        lower_bound: float,
        upper_bound: float
    ):
        """
        분포 파라미터 설정

        Args:
            mean: 절단 전 평균
            standard_deviation: 절단 전 표준편차 (0 이상)
            lower_bound: 하한
            upper_bound: 상한 (lower_bound 이상)
        """
        if standard_deviation < 0:
            raise InvalidArgument(f"standard_deviation must be non-negative, got {standard_deviation}")
        if lower_bound > upper_bound:
            raise InvalidArgument(f"lower_bound {lower_bound} exceeds upper_bound {upper_bound}")

        self.mean = float(mean)
        self.standard_deviation = float(standard_deviation)
        self.lower_bound = float(lower_bound)
        self.upper_bound = float(upper_bound)

        if self.standard_deviation > 0:
            self._cumulative_lower = float(ndtr((self.lower_bound - self.mean) / self.standard_deviation))
            self._cumulative_upper = float(ndtr((self.upper_bound - self.mean) / self.standard_deviation))
        else:
            self._cumulative_lower = 0.0
            self._cumulative_upper = 1.0

    def map_standard_normal(self, gaussian_sample: float) -> float:
        """표준 정규 샘플을 절단 가우시안 샘플로 매핑"""
        if self.standard_deviation == 0:
            return float(np.clip(self.mean, self.lower_bound, self.upper_bound))

        uniform = ndtr(gaussian_sample)
        truncated_uniform = (
            self._cumulative_lower
            + (self._cumulative_upper - self._cumulative_lower) * uniform
        )
        sample = self.mean + self.standard_deviation * ndtri(truncated_uniform)

        # 수치 오차 대비 경계로 제한
        return float(np.clip(sample, self.lower_bound, self.upper_bound))
