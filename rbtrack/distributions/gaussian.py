"""
gaussian.py - 다변량 가우시안 분포

x ~ N(mean, covariance)

표준 정규 샘플 z에 대해 x = mean + L @ z (L @ L.T = covariance).
공분산은 양의 준정부호(PSD)이면 충분하며, 0 행렬도 허용됩니다
(이 경우 매핑은 평균으로 고정됩니다).
"""

import numpy as np

from ..errors import InvalidArgument, as_square_matrix, as_vector


def psd_square_root(covariance: np.ndarray) -> np.ndarray:
    """
    PSD 행렬의 제곱근 L (L @ L.T = covariance)

    대칭 고유분해를 사용하며, 수치 오차로 생긴 음의 고유값은 0으로 자릅니다.
    Cholesky와 달리 특이(singular) 행렬에서도 동작합니다.
    """
    sym = 0.5 * (covariance + covariance.T)
    eigvals, eigvecs = np.linalg.eigh(sym)
    eigvals = np.clip(eigvals, 0.0, None)
    return eigvecs * np.sqrt(eigvals)


class Gaussian:
    """
    다변량 가우시안

    Attributes:
        dimension: 변수 차원
        mean: 평균 (dimension,)
        covariance: 공분산 (dimension, dimension)
    """

    def __init__(self, dimension: int):
        if dimension <= 0:
            raise InvalidArgument(f"Gaussian dimension must be positive, got {dimension}")

        self.dimension = dimension
        self._mean = np.zeros(dimension)
        self._covariance = np.eye(dimension)
        self._square_root = np.eye(dimension)

    @property
    def mean(self) -> np.ndarray:
        return self._mean.copy()

    @mean.setter
    def mean(self, value):
        self._mean = as_vector(value, self.dimension, "mean").copy()

    @property
    def covariance(self) -> np.ndarray:
        return self._covariance.copy()

    @covariance.setter
    def covariance(self, value):
        cov = as_square_matrix(value, self.dimension, "covariance")
        self._covariance = cov.copy()
        self._square_root = psd_square_root(cov)

    @property
    def square_root(self) -> np.ndarray:
        return self._square_root.copy()

    def map_standard_normal(self, sample: np.ndarray) -> np.ndarray:
        """표준 정규 샘플을 이 분포의 샘플로 매핑"""
        z = as_vector(sample, self.dimension, "standard normal sample")
        return self._mean + self._square_root @ z
