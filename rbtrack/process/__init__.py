"""
process 모듈 - 프로세스(상태 전이) 모델

주요 기능:
- 강체 브라운 운동 모델 (자세 + 속도, N개 강체)
- 연속 가림 프로세스 모델 (로짓 공간)
- 감쇠 / 적분 감쇠 위너 과정
- 2상태 가림 전이 모델
"""

from .brownian_object_motion import BrownianObjectMotionModel, ObjectMotionParameters
from .continuous_occlusion_process import ContinuousOcclusionProcessModel
from .damped_wiener_process import DampedWienerProcessModel, IntegratedDampedWienerProcessModel
from .occlusion_process import OcclusionProcessModel

__all__ = [
    'BrownianObjectMotionModel',
    'ObjectMotionParameters',
    'ContinuousOcclusionProcessModel',
    'DampedWienerProcessModel',
    'IntegratedDampedWienerProcessModel',
    'OcclusionProcessModel',
]
