"""
occlusion_process.py - 2상태 가림(occlusion) 전이 모델

가림/보임 두 상태의 마르코프 연쇄를 기준 시간 간격(1) 단위의
전이 확률로 정의하고, 임의의 경과 시간으로 외삽/내삽합니다.

    p_ov: 직전에 보였을 때 가려질 확률   P(occluded | visible)
    p_oo: 직전에 가려졌을 때 가려질 확률 P(occluded | occluded)

한 스텝: p' = p_ov + c * p,  c = p_oo - p_ov
dt 스텝: p(dt) = c^dt * p0 + p_ov * (1 - c^dt) / (1 - c)
"""

import logging

import numpy as np

from ..errors import InvalidArgument, check_delta_time

logger = logging.getLogger(__name__)


class OcclusionProcessModel:
    """가림 확률 전이 모델"""

    def __init__(self, p_occluded_visible: float, p_occluded_occluded: float):
        for name, value in (
            ('p_occluded_visible', p_occluded_visible),
            ('p_occluded_occluded', p_occluded_occluded)
        ):
            if not 0.0 <= value <= 1.0:
                raise InvalidArgument(f"{name} must be in [0, 1], got {value}")

        self.p_occluded_visible = float(p_occluded_visible)
        self.p_occluded_occluded = float(p_occluded_occluded)
        self._c = self.p_occluded_occluded - self.p_occluded_visible

        self._delta_time = 0.0
        self._occlusion_probability = 0.5

        if self._c <= 0:
            logger.warning(
                f"Non-positive transition contrast c={self._c}: "
                "fractional time steps produce undefined probabilities"
            )

    def condition(self, delta_time: float, occlusion_probability: float):
        """경과 시간과 현재 가림 확률 설정"""
        self._delta_time = check_delta_time(delta_time)
        self._occlusion_probability = float(occlusion_probability)

    def sample(self) -> float:
        """
        dt 후 가림 확률

        c <= 0 이고 dt가 정수가 아니면 NaN을 반환할 수 있습니다.
        """
        p0 = self._occlusion_probability
        c = self._c

        if c == 1.0:
            return p0

        with np.errstate(invalid='ignore'):
            pow_c_time = float(np.power(c, self._delta_time))

        return pow_c_time * p0 + self.p_occluded_visible * (1.0 - pow_c_time) / (1.0 - c)
