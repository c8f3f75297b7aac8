"""
depth_observation.py - 깊이 관측 모델

후보 자세를 깊이 맵으로 렌더링한 뒤, 가림과 결합된 픽셀별 잡음 모델로
관측을 예측합니다.

상태:  [자세 (pose_state_dimension), 픽셀별 가림 로짓 (rows * cols)]
잡음:  픽셀별 1 (rows * cols)
관측:  픽셀별 [y, y²] (2 * rows * cols)

    y = depth + exp(occlusion_logit) * sqrt(camera_sigma² + model_sigma²) * noise

렌더링 캐시:
렌더링이 이 모델의 주 비용이므로, 같은 자세에 대한 렌더링 결과(깊이와 가림을
교차 배치한 내부 상태)를 자세 키로 저장합니다. 자동 삭제는 없으며
clear_cache()로만 비웁니다. 외부 필터는 장면이 바뀌는 반복마다 캐시를
비워야 합니다.

자세 키:
- 정확 모드 (cache_resolution=None): 자세 값이 조금만 달라도 캐시 미스
- 양자화 모드 (cache_resolution > 0): round(pose / resolution)이 같으면 같은 키

Version: 1.0
Author: FurSys AI Team
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple
import logging
import threading

import numpy as np

from ..errors import InvalidArgument, as_vector
from ..interfaces import ObservationModel
from .pixel_observation import FactorizedIIDObservationModel, PixelObservationModel
from .renderer import RigidBodyRenderer

logger = logging.getLogger(__name__)

DEFAULT_INFINITY_DEPTH = 7.0


@dataclass(frozen=True)
class PoseKey:
    """
    렌더링 캐시의 자세 키

    values: 정확 모드에서는 float 튜플, 양자화 모드에서는 int 튜플
    """
    values: Tuple

    @classmethod
    def from_pose(cls, pose: np.ndarray, resolution: Optional[float] = None) -> 'PoseKey':
        pose = np.asarray(pose, dtype=np.float64).reshape(-1)
        if resolution is None:
            return cls(tuple(float(v) for v in pose))
        return cls(tuple(int(v) for v in np.round(pose / resolution)))


class RenderingCache:
    """
    자세 -> 내부 관측 상태 캐시

    여러 관측 모델 인스턴스가 공유할 수 있도록 잠금(lock)으로 보호됩니다.
    렌더링 자체는 잠금 밖에서 수행하며, 같은 키가 동시에 삽입되면
    먼저 삽입된 값을 유지합니다.
    """

    def __init__(self):
        self._entries: Dict[PoseKey, np.ndarray] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: PoseKey) -> Optional[np.ndarray]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
            else:
                self.hits += 1
            return entry

    def insert(self, key: PoseKey, value: np.ndarray) -> np.ndarray:
        """값 삽입 (이미 있으면 기존 값 반환)"""
        with self._lock:
            return self._entries.setdefault(key, value)

    def clear(self):
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.debug(f"Rendering cache cleared ({count} entries)")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: PoseKey) -> bool:
        with self._lock:
            return key in self._entries


class DepthObservationModel(ObservationModel):
    """
    깊이 카메라 관측 모델

    Example:
        >>> model = DepthObservationModel(renderer, camera_sigma=0.01, model_sigma=0.003,
        ...                               res_rows=24, res_cols=32)
        >>> y = model.predict_observation(state, noise, delta_time=1/30.0)
        >>> model.clear_cache()
    """

    def __init__(
        self,
        renderer: RigidBodyRenderer,
        camera_sigma: float,
        model_sigma: float,
        res_rows: int,
        res_cols: int,
        pose_state_dimension: int = 6,
        state_dimension: Optional[int] = None,
        infinity_depth: float = DEFAULT_INFINITY_DEPTH,
        cache: Optional[RenderingCache] = None,
        cache_resolution: Optional[float] = None
    ):
        """
        Args:
            renderer: 깊이 렌더러
            camera_sigma: 카메라 깊이 잡음 표준편차
            model_sigma: 모델(형상) 오차 표준편차
            res_rows: 이미지 높이 (픽셀)
            res_cols: 이미지 너비 (픽셀)
            pose_state_dimension: 상태 앞부분의 자세 차원
            state_dimension: 전체 상태 차원 (None이면 자세 + 픽셀 수)
            infinity_depth: 기하가 없는 광선의 대체 깊이
            cache: 공유 렌더링 캐시 (None이면 인스턴스 전용 캐시 생성)
            cache_resolution: 자세 키 양자화 간격 (None이면 정확 일치)
        """
        if res_rows <= 0 or res_cols <= 0:
            raise InvalidArgument(f"res_rows and res_cols must be positive, got {res_rows}x{res_cols}")
        if pose_state_dimension <= 0:
            raise InvalidArgument(f"pose_state_dimension must be positive, got {pose_state_dimension}")
        if cache_resolution is not None and cache_resolution <= 0:
            raise InvalidArgument(f"cache_resolution must be positive, got {cache_resolution}")

        self.res_rows = int(res_rows)
        self.res_cols = int(res_cols)
        self.pixel_count = self.res_rows * self.res_cols
        self.pose_state_dimension = int(pose_state_dimension)

        if state_dimension is None:
            state_dimension = self.pose_state_dimension + self.pixel_count
        if state_dimension != self.pose_state_dimension + self.pixel_count:
            raise InvalidArgument(
                f"state_dimension {state_dimension} must equal pose dimension "
                f"{self.pose_state_dimension} + pixel count {self.pixel_count}"
            )
        self._state_dimension = int(state_dimension)

        self.camera_sigma = float(camera_sigma)
        self.model_sigma = float(model_sigma)
        self.combined_sigma = float(np.sqrt(camera_sigma ** 2 + model_sigma ** 2))
        self.infinity_depth = float(infinity_depth)

        self.renderer = renderer
        self.cache = cache if cache is not None else RenderingCache()
        self.cache_resolution = cache_resolution

        self.camera_observation_model = FactorizedIIDObservationModel(
            PixelObservationModel(self.combined_sigma),
            self.pixel_count
        )

        logger.info(
            f"DepthObservationModel initialized: {self.res_rows}x{self.res_cols}, "
            f"sigma={self.combined_sigma:.4f}, cache_resolution={cache_resolution}"
        )

    @property
    def observation_dimension(self) -> int:
        return self.camera_observation_model.observation_dimension

    @property
    def state_dimension(self) -> int:
        return self._state_dimension

    @property
    def noise_dimension(self) -> int:
        return self.camera_observation_model.noise_dimension

    def predict_observation(self, state: np.ndarray, noise: np.ndarray, delta_time: float = 0.0) -> np.ndarray:
        """
        관측 예측

        캐시에서는 깊이만 재사용합니다. 캐시 적중 시에도 캐시에 저장된 가림 로짓은
        쓰지 않고 항상 현재 상태의 가림 로짓으로 덮어씁니다.

        Args:
            state: [자세, 픽셀별 가림 로짓]
            noise: 픽셀별 표준 정규 잡음
            delta_time: 경과 시간 (픽셀 모델에서는 사용하지 않음)

        Returns:
            (2 * pixel_count,) [y_0, y_0², y_1, y_1², ...]
        """
        state = as_vector(state, self._state_dimension, "state")
        noise = as_vector(noise, self.noise_dimension, "noise")

        pose = state[:self.pose_state_dimension]
        key = PoseKey.from_pose(pose, self.cache_resolution)

        internal_state = self.cache.get(key)
        if internal_state is None:
            internal_state = self.cache.insert(key, self.map(state))

        # 캐시된 깊이 + 현재 상태의 가림 로짓
        internal_state = internal_state.copy()
        internal_state[1::2] = state[self.pose_state_dimension:]

        return self.camera_observation_model.predict_observation(internal_state, noise, delta_time)

    def map(self, state: np.ndarray) -> np.ndarray:
        """자세를 렌더링하여 내부 관측 상태 생성"""
        pose = state[:self.pose_state_dimension]
        depth = np.asarray(self.renderer.render(pose), dtype=np.float64).reshape(-1)
        logger.debug(f"Cache miss: rendered pose {pose.tolist()}")
        return self.convert(depth, state)

    def convert(self, depth: np.ndarray, state: np.ndarray) -> np.ndarray:
        """
        깊이와 가림 로짓을 교차 배치

        비유한 깊이는 infinity_depth로 대체합니다.

        Returns:
            (2 * pixel_count,) [depth_0, occlusion_0, depth_1, occlusion_1, ...]
        """
        if depth.shape[0] != self.pixel_count:
            raise InvalidArgument(
                f"renderer returned {depth.shape[0]} depths, expected {self.pixel_count}"
            )

        internal_state = np.empty(2 * self.pixel_count)
        internal_state[0::2] = np.where(np.isfinite(depth), depth, self.infinity_depth)
        internal_state[1::2] = state[self.pose_state_dimension:]
        return internal_state

    def clear_cache(self):
        self.cache.clear()
