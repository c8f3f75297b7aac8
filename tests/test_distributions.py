"""
분포 단위 테스트
"""

import numpy as np
import pytest

from rbtrack.distributions import Gaussian, TruncatedGaussian, psd_square_root
from rbtrack.errors import InvalidArgument


class TestGaussian:
    """다변량 가우시안 테스트"""

    def test_square_root(self):
        covariance = np.array([[4.0, 1.0], [1.0, 3.0]])
        root = psd_square_root(covariance)
        assert np.allclose(root @ root.T, covariance)

    def test_singular_covariance(self):
        """특이 행렬과 0 행렬도 허용"""
        singular = np.array([[1.0, 1.0], [1.0, 1.0]])
        root = psd_square_root(singular)
        assert np.allclose(root @ root.T, singular)

        gaussian = Gaussian(2)
        gaussian.mean = [1.0, 2.0]
        gaussian.covariance = np.zeros((2, 2))
        assert np.allclose(gaussian.map_standard_normal([5.0, -5.0]), [1.0, 2.0])

    def test_map_standard_normal(self):
        gaussian = Gaussian(2)
        gaussian.mean = [1.0, -1.0]
        gaussian.covariance = np.diag([4.0, 9.0])

        result = gaussian.map_standard_normal([1.0, 0.0])
        assert np.isclose(np.linalg.norm(result - gaussian.mean), 2.0)

    def test_invalid(self):
        with pytest.raises(InvalidArgument):
            Gaussian(0)

        gaussian = Gaussian(2)
        with pytest.raises(InvalidArgument):
            gaussian.covariance = np.eye(3)
        with pytest.raises(InvalidArgument):
            gaussian.map_standard_normal(np.zeros(3))


class TestTruncatedGaussian:
    """절단 가우시안 테스트"""

    def test_median(self):
        """대칭 구간에서 z = 0 -> 평균"""
        tg = TruncatedGaussian(0.5, 0.2, 0.0, 1.0)
        assert np.isclose(tg.map_standard_normal(0.0), 0.5)

    def test_within_bounds(self):
        tg = TruncatedGaussian(0.9, 0.5, 0.0, 1.0)
        for z in np.linspace(-10.0, 10.0, 41):
            x = tg.map_standard_normal(z)
            assert 0.0 <= x <= 1.0

    def test_monotonic(self):
        tg = TruncatedGaussian(0.2, 0.3, 0.0, 1.0)
        samples = [tg.map_standard_normal(z) for z in np.linspace(-3.0, 3.0, 13)]
        assert np.all(np.diff(samples) > 0)

    def test_zero_standard_deviation(self):
        """표준편차 0: 경계로 제한된 평균"""
        tg = TruncatedGaussian(1.3, 0.0, 0.0, 1.0)
        assert tg.map_standard_normal(-2.0) == 1.0

        tg.parameters(0.4, 0.0, 0.0, 1.0)
        assert tg.map_standard_normal(3.0) == 0.4

    def test_invalid(self):
        with pytest.raises(InvalidArgument):
            TruncatedGaussian(0.0, -1.0, 0.0, 1.0)
        with pytest.raises(InvalidArgument):
            TruncatedGaussian(0.0, 1.0, 1.0, 0.0)
