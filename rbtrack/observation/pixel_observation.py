"""
pixel_observation.py - 픽셀 관측 모델 및 인수분해(factorized) 결합

픽셀 관측 모델:
    상태  [h, o]   h: 렌더링된 깊이, o: 가림 로짓
    잡음  [n]
    관측  [y, y²]  y = h + exp(o) * sigma * n

두 번째 채널 y²는 가우시안 필터의 우도가 비가우시안 깊이 잡음을
근사할 수 있도록 하는 2차 모멘트 특징입니다.

인수분해 결합 (FactorizedIIDObservationModel):
동일한 픽셀 모델 factor_count개를 독립적으로 결합합니다.
상태/잡음/관측 차원은 픽셀 차원 * factor_count이며,
벡터는 픽셀별로 이어 붙인 순서 [pixel_0, pixel_1, ...]를 따릅니다.
"""

import numpy as np

from ..errors import InvalidArgument, as_vector
from ..interfaces import ObservationModel


class PixelObservationModel(ObservationModel):
    """
    단일 픽셀 관측 모델

    (n, 2) 상태와 (n,) 잡음에 대해서도 벡터화되어 동작합니다.
    """

    OBSERVATION_DIMENSION = 2
    NOISE_DIMENSION = 1
    STATE_DIMENSION = 2

    def __init__(self, sigma: float):
        """
        Args:
            sigma: 깊이 잡음 표준편차 (0 이상)
        """
        if not np.isfinite(sigma) or sigma < 0:
            raise InvalidArgument(f"sigma must be finite and non-negative, got {sigma}")
        self.sigma = float(sigma)

    @property
    def observation_dimension(self) -> int:
        return self.OBSERVATION_DIMENSION

    @property
    def state_dimension(self) -> int:
        return self.STATE_DIMENSION

    @property
    def noise_dimension(self) -> int:
        return self.NOISE_DIMENSION

    def predict_observation(self, state: np.ndarray, noise: np.ndarray, delta_time: float = 0.0) -> np.ndarray:
        state = np.asarray(state, dtype=np.float64)
        noise = np.asarray(noise, dtype=np.float64)

        if state.shape[-1] != self.STATE_DIMENSION:
            raise InvalidArgument(f"pixel state must end with dimension 2, got shape {state.shape}")

        depth = state[..., 0]
        occlusion = state[..., 1]
        noise = noise.reshape(depth.shape)

        y = depth + np.exp(occlusion) * self.sigma * noise
        return np.stack([y, y * y], axis=-1)


class FactorizedIIDObservationModel(ObservationModel):
    """동일 픽셀 모델의 독립 결합"""

    def __init__(self, local_model: PixelObservationModel, factor_count: int):
        if int(factor_count) != factor_count or factor_count <= 0:
            raise InvalidArgument(f"factor_count must be a positive integer, got {factor_count}")

        self.local_model = local_model
        self.factor_count = int(factor_count)

    @property
    def observation_dimension(self) -> int:
        return self.local_model.observation_dimension * self.factor_count

    @property
    def state_dimension(self) -> int:
        return self.local_model.state_dimension * self.factor_count

    @property
    def noise_dimension(self) -> int:
        return self.local_model.noise_dimension * self.factor_count

    def predict_observation(self, state: np.ndarray, noise: np.ndarray, delta_time: float = 0.0) -> np.ndarray:
        state = as_vector(state, self.state_dimension, "factorized state")
        noise = as_vector(noise, self.noise_dimension, "factorized noise")

        local_states = state.reshape(self.factor_count, self.local_model.state_dimension)
        local_noise = noise.reshape(self.factor_count, self.local_model.noise_dimension)

        observations = self.local_model.predict_observation(local_states, local_noise, delta_time)
        return observations.reshape(-1)
