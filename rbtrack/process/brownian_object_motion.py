"""
brownian_object_motion.py - 강체 브라운 운동 모델

N개 강체의 자세와 속도를 시간에 따라 확률적으로 전파합니다.
강체마다 병진/회전 축 그룹별로 적분 감쇠 위너 과정을 하나씩 사용합니다.

잡음/입력 벡터 (강체별 6):
    [병진 3, 회전 3] * N

회전 중심 변환:
- 외부 표현: 원점 기준 자세/속도
- 내부 표현: 회전 중심(객체 로컬 좌표의 임의 점) 기준
  condition()에서 외부 -> 내부, sample()에서 내부 -> 외부로 변환합니다.

쿼터니언 갱신:
    q' = normalize(q + Q(q) @ Δθ)
    Q(q): 4x3 쿼터니언 미분 행렬 (condition 마다 재계산)

Version: 1.0
Author: FurSys AI Team
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union
import logging

import numpy as np

from ..errors import InvalidArgument, as_square_matrix, as_vector, check_delta_time
from ..interfaces import ProcessModel, StandardNormalMapping
from ..states.rigid_bodies_state import RigidBodiesState, to_rigid_bodies_state
from ..utils.math_utils import normalize_quaternion, quaternion_matrix
from .damped_wiener_process import IntegratedDampedWienerProcessModel

logger = logging.getLogger(__name__)


@dataclass
class ObjectMotionParameters:
    """
    강체별 운동 파라미터

    Attributes:
        rotation_center: 회전 중심 (객체 로컬 좌표) [x, y, z]
        damping: 감쇠 계수 (0 이상)
        linear_acceleration_covariance: 선가속도 공분산 3x3 (PSD)
        angular_acceleration_covariance: 각가속도 공분산 3x3 (PSD)
    """
    rotation_center: np.ndarray = field(default_factory=lambda: np.zeros(3))
    damping: float = 0.0
    linear_acceleration_covariance: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))
    angular_acceleration_covariance: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))


class BrownianObjectMotionModel(StandardNormalMapping, ProcessModel):
    """
    강체 브라운 운동 프로세스 모델

    condition()으로 현재 상태를 설정한 뒤 sample()로 새 상태를 얻습니다.
    sample()은 잡음 벡터와 직전 condition() 결과만의 순수 함수입니다.

    Example:
        >>> model = BrownianObjectMotionModel(object_count=1)
        >>> model.parameters(0, rotation_center=np.zeros(3), damping=1.0,
        ...                  linear_acceleration_covariance=np.eye(3) * 0.01,
        ...                  angular_acceleration_covariance=np.eye(3) * 0.1)
        >>> model.condition(1/30.0, state)
        >>> new_state = model.sample(np.random.randn(model.noise_dimension))
    """

    DIMENSION_PER_OBJECT = 6

    def __init__(self, object_count: int = 1):
        """
        Args:
            object_count: 강체 수 (1 이상)
        """
        if int(object_count) != object_count or object_count <= 0:
            raise InvalidArgument(f"object_count must be a positive integer, got {object_count}")

        self.object_count = int(object_count)

        # 강체별 소유: 파라미터 1개, 적분기 2개 (병진/회전)
        self._parameters: List[ObjectMotionParameters] = [
            ObjectMotionParameters() for _ in range(self.object_count)
        ]
        self._linear_process = [
            IntegratedDampedWienerProcessModel(3) for _ in range(self.object_count)
        ]
        self._angular_process = [
            IntegratedDampedWienerProcessModel(3) for _ in range(self.object_count)
        ]

        # 조건화 결과
        self._state: Optional[RigidBodiesState] = None
        self._quaternion_map: List[np.ndarray] = [np.zeros((4, 3)) for _ in range(self.object_count)]
        self._rotation_centers: List[np.ndarray] = [np.zeros(3) for _ in range(self.object_count)]

        logger.info(f"BrownianObjectMotionModel initialized: object_count={self.object_count}")

    # ------------------------------------------------------------------
    # 차원
    # ------------------------------------------------------------------

    @property
    def state_dimension(self) -> int:
        return RigidBodiesState.BODY_SIZE * self.object_count

    @property
    def noise_dimension(self) -> int:
        return self.DIMENSION_PER_OBJECT * self.object_count

    @property
    def input_dimension(self) -> int:
        return self.DIMENSION_PER_OBJECT * self.object_count

    @property
    def standard_variate_dimension(self) -> int:
        return self.DIMENSION_PER_OBJECT * self.object_count

    @property
    def is_conditioned(self) -> bool:
        return self._state is not None

    # ------------------------------------------------------------------
    # 파라미터
    # ------------------------------------------------------------------

    def parameters(
        self,
        object_index: int,
        rotation_center: np.ndarray,
        damping: float,
        linear_acceleration_covariance: np.ndarray,
        angular_acceleration_covariance: np.ndarray
    ):
        """
        강체별 운동 파라미터 설정

        이후의 condition() 호출에만 영향을 줍니다.
        """
        if not 0 <= object_index < self.object_count:
            raise InvalidArgument(
                f"object_index {object_index} out of range (object_count={self.object_count})"
            )

        params = ObjectMotionParameters(
            rotation_center=as_vector(rotation_center, 3, "rotation_center").copy(),
            damping=float(damping),
            linear_acceleration_covariance=as_square_matrix(
                linear_acceleration_covariance, 3, "linear_acceleration_covariance"
            ).copy(),
            angular_acceleration_covariance=as_square_matrix(
                angular_acceleration_covariance, 3, "angular_acceleration_covariance"
            ).copy()
        )

        self._linear_process[object_index].parameters(params.damping, params.linear_acceleration_covariance)
        self._angular_process[object_index].parameters(params.damping, params.angular_acceleration_covariance)
        self._parameters[object_index] = params

        logger.debug(f"Object {object_index} parameters set: damping={params.damping}")

    def get_parameters(self, object_index: int) -> ObjectMotionParameters:
        return self._parameters[object_index]

    # ------------------------------------------------------------------
    # 조건화 / 샘플링
    # ------------------------------------------------------------------

    def condition(
        self,
        delta_time: float,
        state: Union[RigidBodiesState, np.ndarray],
        control: Optional[np.ndarray] = None
    ):
        """
        현재 상태로 강체별 적분기를 조건화

        Args:
            delta_time: 경과 시간 (초, 0 이상)
            state: 현재 상태 (RigidBodiesState 또는 12 * N 벡터)
            control: 제어 입력 (6 * N), None이면 0
        """
        delta_time = check_delta_time(delta_time)
        internal = to_rigid_bodies_state(state, self.object_count)
        control = np.zeros(self.input_dimension) if control is None else as_vector(
            control, self.input_dimension, "control"
        )

        quaternion_maps = []

        for i in range(self.object_count):
            quaternion_maps.append(quaternion_matrix(internal.quaternion(i)))

            # 원점 기준 자세/속도 -> 회전 중심 기준 내부 표현
            center_position = internal.position(i) + internal.rotation_matrix(i) @ self._parameters[i].rotation_center
            internal.set_position(center_position, i)
            internal.set_linear_velocity(
                internal.linear_velocity(i) + np.cross(internal.angular_velocity(i), center_position),
                i
            )

            offset = i * self.DIMENSION_PER_OBJECT

            linear_state = np.concatenate([np.zeros(3), internal.linear_velocity(i)])
            self._linear_process[i].condition(delta_time, linear_state, control[offset:offset + 3])

            angular_state = np.concatenate([np.zeros(3), internal.angular_velocity(i)])
            self._angular_process[i].condition(delta_time, angular_state, control[offset + 3:offset + 6])

        self._quaternion_map = quaternion_maps
        self._rotation_centers = [p.rotation_center.copy() for p in self._parameters]
        self._state = internal

        logger.debug(f"Conditioned {self.object_count} objects: dt={delta_time}")

    def sample(self, noise: np.ndarray) -> RigidBodiesState:
        """
        표준 정규 잡음으로 새 상태 생성

        Args:
            noise: 표준 정규 벡터 (6 * N)

        Returns:
            새 RigidBodiesState (외부 표현)
        """
        if self._state is None:
            raise RuntimeError("Model not conditioned. Call condition() first.")

        noise = as_vector(noise, self.noise_dimension, "noise")
        new_state = RigidBodiesState(self.object_count)

        for i in range(self.object_count):
            offset = i * self.DIMENSION_PER_OBJECT
            linear_delta = self._linear_process[i].sample(noise[offset:offset + 3])
            angular_delta = self._angular_process[i].sample(noise[offset + 3:offset + 6])

            internal_position = self._state.position(i)

            new_state.set_position(internal_position + linear_delta[:3], i)
            new_quaternion = normalize_quaternion(
                self._state.quaternion(i) + self._quaternion_map[i] @ angular_delta[:3]
            )
            new_state.set_quaternion(new_quaternion, i)
            new_state.set_linear_velocity(linear_delta[3:], i)
            new_state.set_angular_velocity(angular_delta[3:], i)

            # 내부 표현 -> 원점 기준 외부 표현
            new_state.set_linear_velocity(
                new_state.linear_velocity(i) - np.cross(new_state.angular_velocity(i), internal_position),
                i
            )
            new_state.set_position(
                new_state.position(i) - new_state.rotation_matrix(i) @ self._rotation_centers[i],
                i
            )

        return new_state
