"""
rigid_bodies_state.py - 다중 강체 자세/속도 상태

N개 강체의 자세와 속도를 하나의 평탄화된 벡터로 보관합니다.

강체별 상태 (12):
    [x, y, z, rx, ry, rz, vx, vy, vz, wx, wy, wz]
    - 위치 (3)
    - 자세: 회전 벡터 (축 * 각도, 라디안) (3)
    - 선속도 (3)
    - 각속도 (3, 월드 좌표계)

처음 6개 원소(위치 + 회전 벡터)가 강체의 6DoF 자세입니다.
쿼터니언 접근자는 [x, y, z, w] 형식(scipy 표준)을 사용하며,
쿼터니언 설정 시 항상 정규화되므로 저장된 자세는 단위 쿼터니언에 대응합니다.

Version: 1.0
"""

from typing import Optional, Union

import numpy as np

from ..errors import InvalidArgument, as_vector
from ..utils.math_utils import (
    normalize_quaternion,
    quaternion_to_rotation_matrix,
    quaternion_to_rotation_vector,
    rotation_vector_to_quaternion
)


class RigidBodiesState:
    """
    자유 부동(free floating) 강체 집합의 상태

    Example:
        >>> state = RigidBodiesState(2)
        >>> state.set_position([0.0, 0.0, 1.0], 0)
        >>> state.quaternion(1)
        array([0., 0., 0., 1.])
    """

    BODY_SIZE = 12
    POSE_SIZE = 6

    POSITION_INDEX = 0
    EULER_VECTOR_INDEX = 3
    LINEAR_VELOCITY_INDEX = 6
    ANGULAR_VELOCITY_INDEX = 9

    def __init__(self, body_count: int = 1, vector: Optional[np.ndarray] = None):
        """
        Args:
            body_count: 강체 수 (1 이상)
            vector: 초기 상태 벡터 (길이 12 * body_count, None이면 0)
        """
        if int(body_count) != body_count or body_count <= 0:
            raise InvalidArgument(f"body_count must be a positive integer, got {body_count}")

        self._body_count = int(body_count)

        if vector is None:
            self._vector = np.zeros(self.dimension)
        else:
            self._vector = as_vector(vector, self.dimension, "state vector").copy()

    @classmethod
    def from_vector(cls, vector: np.ndarray) -> 'RigidBodiesState':
        """상태 벡터에서 생성 (길이는 12의 배수)"""
        arr = np.asarray(vector, dtype=np.float64).reshape(-1)
        if arr.size == 0 or arr.size % cls.BODY_SIZE != 0:
            raise InvalidArgument(
                f"state vector length must be a positive multiple of {cls.BODY_SIZE}, got {arr.size}"
            )
        return cls(arr.size // cls.BODY_SIZE, arr)

    @classmethod
    def from_poses(
        cls,
        positions: np.ndarray,
        quaternions: Optional[np.ndarray] = None,
        linear_velocities: Optional[np.ndarray] = None,
        angular_velocities: Optional[np.ndarray] = None
    ) -> 'RigidBodiesState':
        """
        강체별 배열에서 생성

        Args:
            positions: (N, 3)
            quaternions: (N, 4) [x, y, z, w], None이면 단위 쿼터니언
            linear_velocities: (N, 3), None이면 0
            angular_velocities: (N, 3), None이면 0
        """
        positions = np.atleast_2d(np.asarray(positions, dtype=np.float64))
        state = cls(positions.shape[0])

        for i in range(state.body_count):
            state.set_position(positions[i], i)
            if quaternions is not None:
                state.set_quaternion(np.atleast_2d(quaternions)[i], i)
            if linear_velocities is not None:
                state.set_linear_velocity(np.atleast_2d(linear_velocities)[i], i)
            if angular_velocities is not None:
                state.set_angular_velocity(np.atleast_2d(angular_velocities)[i], i)

        return state

    # ------------------------------------------------------------------
    # 차원
    # ------------------------------------------------------------------

    @property
    def body_count(self) -> int:
        return self._body_count

    @property
    def dimension(self) -> int:
        """전체 상태 차원 (12 * body_count)"""
        return self.BODY_SIZE * self._body_count

    @property
    def vector(self) -> np.ndarray:
        """상태 벡터 (복사본)"""
        return self._vector.copy()

    def copy(self) -> 'RigidBodiesState':
        return RigidBodiesState(self._body_count, self._vector)

    def _slice(self, offset: int, index: int) -> slice:
        if not 0 <= index < self._body_count:
            raise IndexError(f"Body index {index} out of range (body_count={self._body_count})")
        start = index * self.BODY_SIZE + offset
        return slice(start, start + 3)

    # ------------------------------------------------------------------
    # 접근자
    # ------------------------------------------------------------------

    def position(self, index: int = 0) -> np.ndarray:
        return self._vector[self._slice(self.POSITION_INDEX, index)].copy()

    def euler_vector(self, index: int = 0) -> np.ndarray:
        """자세 회전 벡터 (축 * 각도)"""
        return self._vector[self._slice(self.EULER_VECTOR_INDEX, index)].copy()

    def linear_velocity(self, index: int = 0) -> np.ndarray:
        return self._vector[self._slice(self.LINEAR_VELOCITY_INDEX, index)].copy()

    def angular_velocity(self, index: int = 0) -> np.ndarray:
        return self._vector[self._slice(self.ANGULAR_VELOCITY_INDEX, index)].copy()

    def quaternion(self, index: int = 0) -> np.ndarray:
        """단위 쿼터니언 [x, y, z, w]"""
        return rotation_vector_to_quaternion(self.euler_vector(index))

    def rotation_matrix(self, index: int = 0) -> np.ndarray:
        """3x3 회전 행렬"""
        return quaternion_to_rotation_matrix(self.quaternion(index))

    def pose(self, index: int = 0) -> np.ndarray:
        """6DoF 자세 [x, y, z, rx, ry, rz]"""
        start = self._slice(self.POSITION_INDEX, index).start
        return self._vector[start:start + self.POSE_SIZE].copy()

    def poses(self) -> np.ndarray:
        """모든 강체의 자세를 이어 붙인 벡터 (6 * body_count)"""
        return np.concatenate([self.pose(i) for i in range(self._body_count)])

    # ------------------------------------------------------------------
    # 설정자
    # ------------------------------------------------------------------

    def set_position(self, position, index: int = 0):
        self._vector[self._slice(self.POSITION_INDEX, index)] = as_vector(position, 3, "position")

    def set_euler_vector(self, euler_vector, index: int = 0):
        self._vector[self._slice(self.EULER_VECTOR_INDEX, index)] = as_vector(
            euler_vector, 3, "euler_vector"
        )

    def set_linear_velocity(self, velocity, index: int = 0):
        self._vector[self._slice(self.LINEAR_VELOCITY_INDEX, index)] = as_vector(
            velocity, 3, "linear_velocity"
        )

    def set_angular_velocity(self, velocity, index: int = 0):
        self._vector[self._slice(self.ANGULAR_VELOCITY_INDEX, index)] = as_vector(
            velocity, 3, "angular_velocity"
        )

    def set_quaternion(self, quaternion, index: int = 0):
        """쿼터니언 설정 (정규화 후 회전 벡터로 저장)"""
        q = normalize_quaternion(as_vector(quaternion, 4, "quaternion"))
        self.set_euler_vector(quaternion_to_rotation_vector(q), index)

    def set_pose(self, pose, index: int = 0):
        pose = as_vector(pose, self.POSE_SIZE, "pose")
        self.set_position(pose[:3], index)
        self.set_euler_vector(pose[3:], index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RigidBodiesState):
            return NotImplemented
        return self._body_count == other._body_count and np.array_equal(self._vector, other._vector)

    def __repr__(self) -> str:
        return f"RigidBodiesState(body_count={self._body_count})"


def to_rigid_bodies_state(
    state: Union[RigidBodiesState, np.ndarray],
    body_count: int
) -> RigidBodiesState:
    """
    RigidBodiesState 또는 상태 벡터를 body_count개 강체의 상태로 변환

    Raises:
        InvalidArgument: 강체 수 또는 벡터 길이가 맞지 않을 때
    """
    if isinstance(state, RigidBodiesState):
        if state.body_count != body_count:
            raise InvalidArgument(
                f"expected state with {body_count} bodies, got {state.body_count}"
            )
        return state.copy()

    return RigidBodiesState(
        body_count,
        as_vector(state, RigidBodiesState.BODY_SIZE * body_count, "state")
    )
