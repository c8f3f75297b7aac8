"""
observation 모듈 - 깊이 관측 모델

주요 기능:
- 픽셀 관측 모델 [y, y²] 및 인수분해 결합
- 렌더링 캐시를 갖는 깊이 관측 모델
- 렌더러 인터페이스 및 구 모델 렌더러
"""

from .depth_observation import DepthObservationModel, PoseKey, RenderingCache
from .pixel_observation import FactorizedIIDObservationModel, PixelObservationModel
from .renderer import RigidBodyRenderer, SphereDepthRenderer, sphere_renderer_from_config

__all__ = [
    'DepthObservationModel',
    'PoseKey',
    'RenderingCache',
    'FactorizedIIDObservationModel',
    'PixelObservationModel',
    'RigidBodyRenderer',
    'SphereDepthRenderer',
    'sphere_renderer_from_config',
]
