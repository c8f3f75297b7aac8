"""
continuous_occlusion_process.py - 연속 가림 프로세스 모델

스칼라 가림 믿음(belief)을 로짓 공간에서 시간에 따라 전파합니다.

condition(dt, logit):
    p    = sigmoid(logit)
    mean = OcclusionProcessModel(dt, p)
    TruncatedGaussian(mean, sigma * sqrt(dt), 0, 1)

sample(z):
    logit(clamp(TruncatedGaussian.map_standard_normal(z), eps, 1 - eps))

로짓 공간은 제약이 없으므로 가산 잡음을 가정하는 가우시안 필터가
그대로 사용할 수 있고, 절단 가우시안이 확률 범위를 보장합니다.

비유한 값(입력, 중간 평균, 출력)은 NumericDivergence로 호출자에게 전달됩니다.
"""

from typing import Optional
import logging

import numpy as np

from ..distributions.truncated_gaussian import TruncatedGaussian
from ..errors import InvalidArgument, NumericDivergence, as_vector, check_delta_time
from ..interfaces import ProcessModel, StandardNormalMapping
from ..utils.math_utils import logit, sigmoid
from .occlusion_process import OcclusionProcessModel

logger = logging.getLogger(__name__)


class ContinuousOcclusionProcessModel(StandardNormalMapping, ProcessModel):
    """
    연속 가림 프로세스 모델

    Example:
        >>> model = ContinuousOcclusionProcessModel(0.1, 0.7, sigma=0.2)
        >>> model.condition(1/30.0, 0.0)
        >>> new_logit = model.sample(0.3)
    """

    def __init__(
        self,
        p_occluded_visible: float,
        p_occluded_occluded: float,
        sigma: float,
        probability_epsilon: float = 1e-9
    ):
        """
        Args:
            p_occluded_visible: 기준 간격 전 보였을 때 가려질 확률
            p_occluded_occluded: 기준 간격 전 가려졌을 때 가려질 확률
            sigma: 확산 스케일 (표준편차 = sigma * sqrt(dt))
            probability_epsilon: 로짓 변환 전 확률 클램프 여유
        """
        if not np.isfinite(sigma) or sigma < 0:
            raise InvalidArgument(f"sigma must be finite and non-negative, got {sigma}")
        if not 0.0 < probability_epsilon < 0.5:
            raise InvalidArgument(f"probability_epsilon must be in (0, 0.5), got {probability_epsilon}")

        self.sigma = float(sigma)
        self.probability_epsilon = float(probability_epsilon)

        self._mean = OcclusionProcessModel(p_occluded_visible, p_occluded_occluded)
        self._truncated_gaussian = TruncatedGaussian(0.5, 0.0, 0.0, 1.0)
        self._conditioned = False

    @property
    def state_dimension(self) -> int:
        return 1

    @property
    def noise_dimension(self) -> int:
        return 1

    @property
    def input_dimension(self) -> int:
        return 0

    @property
    def standard_variate_dimension(self) -> int:
        return 1

    def condition(self, delta_time: float, state, control: Optional[np.ndarray] = None):
        """
        현재 가림 로짓으로 절단 가우시안 설정

        Args:
            delta_time: 경과 시간 (0 이상)
            state: 가림 로짓 (스칼라 또는 길이 1 배열)
            control: 사용하지 않음 (입력 차원 0)

        Raises:
            NumericDivergence: 로짓 또는 평균이 유한하지 않을 때
        """
        # 실패한 조건화 이후에는 이전 결과로 샘플링하지 않음
        self._conditioned = False

        delta_time = check_delta_time(delta_time)
        occlusion = float(as_vector(state, 1, "occlusion")[0])

        if not np.isfinite(occlusion):
            logger.error(f"Received non-finite occlusion in process model: {occlusion}")
            raise NumericDivergence(f"non-finite occlusion logit: {occlusion}")

        initial_probability = float(sigmoid(occlusion))

        self._mean.condition(delta_time, initial_probability)
        mean = self._mean.sample()

        if not np.isfinite(mean):
            logger.error(
                f"Produced non-finite mean in process model: "
                f"delta_time={delta_time}, initial_occlusion_probability={initial_probability}"
            )
            raise NumericDivergence(
                f"non-finite occlusion mean (delta_time={delta_time}, p={initial_probability})"
            )

        self._truncated_gaussian.parameters(mean, self.sigma * np.sqrt(delta_time), 0.0, 1.0)
        self._conditioned = True

    def sample_probability(self, noise) -> float:
        """표준 정규 잡음 -> [0, 1] 범위의 가림 확률 (클램프 전)"""
        if not self._conditioned:
            raise RuntimeError("Model not conditioned. Call condition() first.")

        z = float(as_vector(noise, 1, "noise")[0])
        return self._truncated_gaussian.map_standard_normal(z)

    def sample(self, noise) -> float:
        """
        표준 정규 잡음 -> 새 가림 로짓

        Raises:
            NumericDivergence: 결과가 유한하지 않을 때
        """
        probability = self.sample_probability(noise)

        if not np.isfinite(probability):
            logger.error(f"Produced non-finite occlusion probability: {probability}")
            raise NumericDivergence(f"non-finite occlusion probability: {probability}")

        eps = self.probability_epsilon
        result = float(logit(min(max(probability, eps), 1.0 - eps)))

        if not np.isfinite(result):
            logger.error(f"Produced non-finite occlusion in process model: {result}")
            raise NumericDivergence(f"non-finite occlusion logit: {result}")

        return result
