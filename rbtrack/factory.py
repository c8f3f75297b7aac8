"""
factory.py - 설정에서 모델 생성
"""

from typing import Optional
import logging

import numpy as np

from .config.tracker_config import TrackerConfig
from .observation.depth_observation import DepthObservationModel, RenderingCache
from .observation.renderer import RigidBodyRenderer, sphere_renderer_from_config
from .process.brownian_object_motion import BrownianObjectMotionModel
from .process.continuous_occlusion_process import ContinuousOcclusionProcessModel

logger = logging.getLogger(__name__)


def build_motion_model(config: TrackerConfig) -> BrownianObjectMotionModel:
    """MotionModelConfig에서 브라운 운동 모델 생성"""
    motion = config.motion
    model = BrownianObjectMotionModel(motion.object_count)

    for i in range(motion.object_count):
        obj = motion.object_config(i)
        model.parameters(
            i,
            rotation_center=np.asarray(obj.rotation_center, dtype=np.float64),
            damping=obj.damping,
            linear_acceleration_covariance=np.eye(3) * obj.linear_acceleration_sigma ** 2,
            angular_acceleration_covariance=np.eye(3) * obj.angular_acceleration_sigma ** 2
        )

    return model


def build_occlusion_model(config: TrackerConfig) -> ContinuousOcclusionProcessModel:
    occ = config.occlusion
    return ContinuousOcclusionProcessModel(
        occ.p_occluded_visible,
        occ.p_occluded_occluded,
        occ.sigma,
        probability_epsilon=occ.probability_epsilon
    )


def build_depth_observation_model(
    config: TrackerConfig,
    renderer: Optional[RigidBodyRenderer] = None,
    cache: Optional[RenderingCache] = None
) -> DepthObservationModel:
    """
    깊이 관측 모델 생성

    Args:
        config: 전체 설정
        renderer: 렌더러 (None이면 카메라 설정으로 SphereDepthRenderer 생성)
        cache: 공유 렌더링 캐시 (None이면 전용 캐시)
    """
    obs = config.observation

    if renderer is None:
        renderer = sphere_renderer_from_config(config.camera, radius=obs.sphere_radius)
        logger.debug("Using SphereDepthRenderer from camera config")

    return DepthObservationModel(
        renderer,
        camera_sigma=obs.camera_sigma,
        model_sigma=obs.model_sigma,
        res_rows=config.camera.height,
        res_cols=config.camera.width,
        pose_state_dimension=6 * config.motion.object_count,
        infinity_depth=obs.infinity_depth,
        cache=cache,
        cache_resolution=obs.cache_resolution
    )
