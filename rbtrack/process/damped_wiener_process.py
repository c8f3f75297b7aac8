"""
damped_wiener_process.py - 감쇠 위너 과정 / 적분 감쇠 위너 과정

감쇠 위너 과정 (속도, Ornstein-Uhlenbeck 형태):
    dv = (-λ v + u) dt + dW,   Cov[dW] = Σ dt

적분 감쇠 위너 과정 (위치 + 속도):
    dp = v dt
    dv = (-λ v + u) dt + dW

λ: 감쇠 계수 (damping), u: 제어 입력(가속도), Σ: 가속도 공분산.
두 모델 모두 조건화 후 표준 정규 잡음의 결정적 함수로 샘플을 생성합니다.
적분 모델은 같은 잡음 벡터를 위치와 속도 가우시안에 모두 사용하므로
두 출력은 상관됩니다.

Version: 1.0
"""

from typing import Optional
import logging

import numpy as np

from ..distributions.gaussian import Gaussian
from ..errors import InvalidArgument, as_square_matrix, as_vector, check_delta_time
from ..interfaces import ProcessModel, StandardNormalMapping

logger = logging.getLogger(__name__)

# λ·dt 가 이보다 작으면 λ -> 0 극한식을 사용 (1/λ² 항의 소거 오차 방지)
SMALL_DAMPING_TIME = 1e-4


def _damped_gain(damping: float, delta_time: float) -> float:
    """(1 - e^{-λ dt}) / λ, λ -> 0 극한은 dt"""
    if damping == 0:
        return delta_time
    return -np.expm1(-damping * delta_time) / damping


class DampedWienerProcessModel(StandardNormalMapping, ProcessModel):
    """
    감쇠 위너 과정 (속도 모델)

    Example:
        >>> process = DampedWienerProcessModel(3)
        >>> process.parameters(damping=1.0, acceleration_covariance=np.eye(3))
        >>> process.condition(0.03, velocity, control)
        >>> new_velocity = process.sample(np.random.randn(3))
    """

    def __init__(self, dimension: int = 3):
        self.dimension = dimension
        self._gaussian = Gaussian(dimension)
        self._gaussian.covariance = np.zeros((dimension, dimension))

        self.damping = 0.0
        self.acceleration_covariance = np.zeros((dimension, dimension))

    def parameters(self, damping: float, acceleration_covariance: np.ndarray):
        """감쇠 계수와 가속도 공분산 설정"""
        if not np.isfinite(damping) or damping < 0:
            raise InvalidArgument(f"damping must be finite and non-negative, got {damping}")

        self.damping = float(damping)
        self.acceleration_covariance = as_square_matrix(
            acceleration_covariance, self.dimension, "acceleration_covariance"
        ).copy()

    @property
    def state_dimension(self) -> int:
        return self.dimension

    @property
    def noise_dimension(self) -> int:
        return self.dimension

    @property
    def input_dimension(self) -> int:
        return self.dimension

    @property
    def standard_variate_dimension(self) -> int:
        return self.dimension

    def condition(self, delta_time: float, state: np.ndarray, control: Optional[np.ndarray] = None):
        delta_time = check_delta_time(delta_time)
        velocity = as_vector(state, self.dimension, "velocity")
        control = np.zeros(self.dimension) if control is None else as_vector(
            control, self.dimension, "control"
        )

        self._gaussian.mean = self.mean(delta_time, velocity, control)
        self._gaussian.covariance = self.covariance(delta_time)

    def mean(self, delta_time: float, velocity: np.ndarray, control: np.ndarray) -> np.ndarray:
        """dt 후 속도의 기대값"""
        decay = np.exp(-self.damping * delta_time)
        return decay * velocity + _damped_gain(self.damping, delta_time) * control

    def covariance(self, delta_time: float) -> np.ndarray:
        """dt 후 속도의 공분산"""
        factor = _damped_gain(2.0 * self.damping, delta_time)
        return factor * self.acceleration_covariance

    def sample(self, noise: np.ndarray) -> np.ndarray:
        return self._gaussian.map_standard_normal(noise)


class IntegratedDampedWienerProcessModel(StandardNormalMapping, ProcessModel):
    """
    적분 감쇠 위너 과정

    상태: [위치 (dimension), 속도 (dimension)]
    잡음: dimension (위치/속도 공유)
    출력: [위치 샘플, 속도 샘플]
    """

    def __init__(self, dimension: int = 3):
        self.dimension = dimension
        self._position = Gaussian(dimension)
        self._position.covariance = np.zeros((dimension, dimension))
        self._velocity = DampedWienerProcessModel(dimension)

    def parameters(self, damping: float, acceleration_covariance: np.ndarray):
        self._velocity.parameters(damping, acceleration_covariance)

    @property
    def damping(self) -> float:
        return self._velocity.damping

    @property
    def acceleration_covariance(self) -> np.ndarray:
        return self._velocity.acceleration_covariance.copy()

    @property
    def state_dimension(self) -> int:
        return 2 * self.dimension

    @property
    def noise_dimension(self) -> int:
        return self.dimension

    @property
    def input_dimension(self) -> int:
        return self.dimension

    @property
    def standard_variate_dimension(self) -> int:
        return self.dimension

    def condition(self, delta_time: float, state: np.ndarray, control: Optional[np.ndarray] = None):
        delta_time = check_delta_time(delta_time)
        state = as_vector(state, self.state_dimension, "state")
        control = np.zeros(self.dimension) if control is None else as_vector(
            control, self.dimension, "control"
        )

        position = state[:self.dimension]
        velocity = state[self.dimension:]

        self._position.mean = self.position_mean(delta_time, position, velocity, control)
        self._position.covariance = self.position_covariance(delta_time)
        self._velocity.condition(delta_time, velocity, control)

    def position_mean(
        self,
        delta_time: float,
        position: np.ndarray,
        velocity: np.ndarray,
        control: np.ndarray
    ) -> np.ndarray:
        """dt 후 위치의 기대값 (속도 기대값의 적분)"""
        damping = self.damping
        gain = _damped_gain(damping, delta_time)

        if damping * delta_time < SMALL_DAMPING_TIME:
            # λ -> 0 극한
            control_gain = 0.5 * delta_time ** 2
        else:
            control_gain = (delta_time - gain) / damping

        return position + gain * velocity + control_gain * control

    def position_covariance(self, delta_time: float) -> np.ndarray:
        """
        dt 후 위치의 공분산

            ∫₀^dt ((1 - e^{-λ(dt - s)}) / λ)² ds · Σ
            = (dt - 2(1 - e^{-λdt})/λ + (1 - e^{-2λdt})/(2λ)) / λ² · Σ

        λ -> 0 극한은 dt³/3 · Σ
        """
        damping = self.damping

        if damping * delta_time < SMALL_DAMPING_TIME:
            factor = delta_time ** 3 / 3.0
        else:
            factor = (
                delta_time
                - 2.0 * _damped_gain(damping, delta_time)
                + _damped_gain(2.0 * damping, delta_time)
            ) / damping ** 2

            if not np.isfinite(factor):
                logger.debug(f"Position covariance factor not finite (damping={damping}, dt={delta_time})")
                factor = delta_time ** 3 / 3.0

        return factor * self.acceleration_covariance

    def sample(self, noise: np.ndarray) -> np.ndarray:
        noise = as_vector(noise, self.dimension, "noise")
        return np.concatenate([
            self._position.map_standard_normal(noise),
            self._velocity.sample(noise)
        ])
