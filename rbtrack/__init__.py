"""
rbtrack - 깊이 영상 기반 강체 추적용 확률 모델

주요 특징:
- 재매개변수화 방식 프로세스/관측 모델 (가우시안 필터와 파티클 필터 공용)
- 강체 브라운 운동 모델 (회전 중심 지원, 쿼터니언 자세)
- 로짓 공간 연속 가림 프로세스 모델
- 렌더링 캐시를 갖는 깊이 관측 모델

Version: 1.0
Author: FurSys AI Team
"""

__version__ = "1.0.0"
__author__ = "FurSys AI Team"

from .errors import ModelError, InvalidArgument, NumericDivergence

from .interfaces import StandardNormalMapping, ProcessModel, ObservationModel

from .states.rigid_bodies_state import RigidBodiesState

from .process.brownian_object_motion import BrownianObjectMotionModel
from .process.continuous_occlusion_process import ContinuousOcclusionProcessModel

from .observation.depth_observation import DepthObservationModel, RenderingCache
from .observation.renderer import RigidBodyRenderer, SphereDepthRenderer

__all__ = [
    # Errors
    'ModelError',
    'InvalidArgument',
    'NumericDivergence',
    # Interfaces
    'StandardNormalMapping',
    'ProcessModel',
    'ObservationModel',
    # State
    'RigidBodiesState',
    # Process models
    'BrownianObjectMotionModel',
    'ContinuousOcclusionProcessModel',
    # Observation models
    'DepthObservationModel',
    'RenderingCache',
    'RigidBodyRenderer',
    'SphereDepthRenderer',
]
