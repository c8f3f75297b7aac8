"""
renderer.py - 깊이 렌더러

RigidBodyRenderer: 자세 -> 픽셀별 깊이 (row-major, rows * cols)
    기하가 없는 광선은 비유한 값(inf)으로 표시합니다.

SphereDepthRenderer: 핀홀 카메라에서 강체마다 구 하나를 해석적으로 렌더링
    자세 벡터 [x, y, z, rx, ry, rz] * N 의 위치를 구 중심으로 사용하며
    (구는 회전 대칭이므로 자세의 회전 부분은 무시),
    여러 강체 중 가장 가까운 교차점을 선택합니다.

렌더러 인스턴스는 재진입(reentrant)을 가정하지 않습니다.
스레드마다 인스턴스 하나를 사용하세요.
"""

from abc import ABC, abstractmethod
from typing import Dict, Sequence, Union
import logging

import numpy as np

from ..errors import InvalidArgument

logger = logging.getLogger(__name__)


class RigidBodyRenderer(ABC):
    """깊이 렌더러 인터페이스"""

    @property
    @abstractmethod
    def pixel_count(self) -> int:
        pass

    @abstractmethod
    def render(self, pose: np.ndarray) -> np.ndarray:
        """
        자세를 깊이 배열로 렌더링

        Args:
            pose: 자세 벡터 (6 * 강체 수)

        Returns:
            (rows * cols,) 깊이 배열, 기하 없음은 inf
        """
        pass


class SphereDepthRenderer(RigidBodyRenderer):
    """
    구 모델 해석적 깊이 렌더러

    Example:
        >>> renderer = SphereDepthRenderer(
        ...     intrinsics={'fx': 40.0, 'fy': 40.0, 'cx': 15.5, 'cy': 11.5},
        ...     rows=24, cols=32, radius=0.1)
        >>> depth = renderer.render(np.array([0, 0, 1.0, 0, 0, 0]))
    """

    def __init__(
        self,
        intrinsics: Dict[str, float],
        rows: int,
        cols: int,
        radius: Union[float, Sequence[float]] = 0.1
    ):
        """
        Args:
            intrinsics: 카메라 내부 파라미터 {'fx', 'fy', 'cx', 'cy'}
            rows: 이미지 높이 (픽셀)
            cols: 이미지 너비 (픽셀)
            radius: 구 반지름 (강체별 지정 가능)
        """
        if rows <= 0 or cols <= 0:
            raise InvalidArgument(f"rows and cols must be positive, got {rows}x{cols}")

        self.rows = int(rows)
        self.cols = int(cols)
        self.radius = np.atleast_1d(np.asarray(radius, dtype=np.float64))
        if np.any(self.radius <= 0):
            raise InvalidArgument(f"radius must be positive, got {radius}")

        # 픽셀별 광선 방향 (z = 1로 정규화된 카메라 좌표)
        u, v = np.meshgrid(np.arange(self.cols), np.arange(self.rows))
        self._rays = np.stack([
            (u.reshape(-1) - intrinsics['cx']) / intrinsics['fx'],
            (v.reshape(-1) - intrinsics['cy']) / intrinsics['fy'],
            np.ones(self.rows * self.cols)
        ], axis=1)
        self._ray_norm_sq = np.sum(self._rays ** 2, axis=1)

        self.render_count = 0

        logger.info(f"SphereDepthRenderer initialized: {self.rows}x{self.cols}, radius={self.radius.tolist()}")

    @property
    def pixel_count(self) -> int:
        return self.rows * self.cols

    def render(self, pose: np.ndarray) -> np.ndarray:
        pose = np.asarray(pose, dtype=np.float64).reshape(-1)
        if pose.size == 0 or pose.size % 6 != 0:
            raise InvalidArgument(f"pose length must be a positive multiple of 6, got {pose.size}")

        body_count = pose.size // 6
        radii = np.broadcast_to(self.radius, (body_count,)) if self.radius.size == 1 else self.radius
        if radii.shape[0] != body_count:
            raise InvalidArgument(f"expected {body_count} radii, got {radii.shape[0]}")

        depth = np.full(self.pixel_count, np.inf)

        for i in range(body_count):
            center = pose[6 * i:6 * i + 3]
            depth = np.minimum(depth, self._intersect(center, radii[i]))

        self.render_count += 1
        return depth

    def _intersect(self, center: np.ndarray, radius: float) -> np.ndarray:
        """광선 p(t) = t * ray 와 구의 가장 가까운 교차점의 z 깊이 (= t)"""
        b = self._rays @ center
        c = center @ center - radius ** 2
        discriminant = b ** 2 - self._ray_norm_sq * c

        depth = np.full(self.pixel_count, np.inf)
        hit = discriminant >= 0
        t = (b[hit] - np.sqrt(discriminant[hit])) / self._ray_norm_sq[hit]

        # 카메라 뒤쪽 교차 제외
        t = np.where(t > 0, t, np.inf)
        depth[hit] = t
        return depth


def sphere_renderer_from_config(camera_config, radius: float = 0.1) -> SphereDepthRenderer:
    """CameraConfig에서 SphereDepthRenderer 생성"""
    return SphereDepthRenderer(
        intrinsics=camera_config.to_intrinsics_dict(),
        rows=camera_config.height,
        cols=camera_config.width,
        radius=radius
    )
