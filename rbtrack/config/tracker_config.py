"""
tracker_config.py - 모델 설정 관리

프로세스/관측 모델의 모든 설정을 통합 관리합니다.

Version: 1.0
Author: FurSys AI Team
"""

import yaml
from pathlib import Path
from dataclasses import asdict, dataclass, field
from typing import Dict, Any, List, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class CameraConfig:
    """깊이 카메라 설정"""
    # 저해상도 깊이 모델 기본 파라미터 (RealSense D455 640x480 의 1/20)
    fx: float = 19.194
    fy: float = 19.194
    cx: float = 15.5
    cy: float = 11.5

    # 이미지 크기
    width: int = 32
    height: int = 24

    # 프레임레이트
    fps: float = 30.0

    def to_intrinsics_dict(self) -> Dict[str, float]:
        """카메라 내부 파라미터 딕셔너리"""
        return {
            'fx': self.fx,
            'fy': self.fy,
            'cx': self.cx,
            'cy': self.cy
        }

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass
class ObjectMotionConfig:
    """강체별 운동 설정"""
    damping: float = 1.0

    # 가속도 표준편차 (공분산 = sigma² * I)
    linear_acceleration_sigma: float = 0.1   # m/s²
    angular_acceleration_sigma: float = 1.0  # rad/s²

    # 회전 중심 (객체 로컬 좌표)
    rotation_center: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])


@dataclass
class MotionModelConfig:
    """브라운 운동 모델 설정"""
    object_count: int = 1
    objects: List[ObjectMotionConfig] = field(default_factory=lambda: [ObjectMotionConfig()])

    def object_config(self, index: int) -> ObjectMotionConfig:
        """강체별 설정 (목록이 짧으면 마지막 설정 재사용)"""
        if not self.objects:
            return ObjectMotionConfig()
        return self.objects[min(index, len(self.objects) - 1)]


@dataclass
class OcclusionProcessConfig:
    """연속 가림 프로세스 설정"""
    # 기준 간격(1초) 전이 확률
    p_occluded_visible: float = 0.1
    p_occluded_occluded: float = 0.7

    # 확산 스케일
    sigma: float = 0.2

    # 로짓 변환 전 확률 클램프
    probability_epsilon: float = 1e-9


@dataclass
class DepthObservationConfig:
    """깊이 관측 모델 설정"""
    camera_sigma: float = 0.01   # m
    model_sigma: float = 0.003   # m

    # 기하가 없는 광선의 대체 깊이
    infinity_depth: float = 7.0

    # 자세 키 양자화 간격 (None이면 정확 일치)
    cache_resolution: Optional[float] = None

    # SphereDepthRenderer 구 반지름
    sphere_radius: float = 0.1


@dataclass
class OutputConfig:
    """출력 설정"""
    log_level: str = "INFO"


@dataclass
class TrackerConfig:
    """rbtrack 전체 설정"""
    camera: CameraConfig = field(default_factory=CameraConfig)
    motion: MotionModelConfig = field(default_factory=MotionModelConfig)
    occlusion: OcclusionProcessConfig = field(default_factory=OcclusionProcessConfig)
    observation: DepthObservationConfig = field(default_factory=DepthObservationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # 시뮬레이션 시간 간격 (None이면 1 / camera.fps)
    delta_time: Optional[float] = None

    @property
    def effective_delta_time(self) -> float:
        return self.delta_time if self.delta_time is not None else 1.0 / self.camera.fps

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, filepath: str):
        """설정을 YAML 파일로 저장"""
        with open(filepath, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False)

        logger.info(f"Config saved to {filepath}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'TrackerConfig':
        """딕셔너리에서 설정 생성"""
        motion = dict(d.get('motion', {}))
        objects = [ObjectMotionConfig(**o) for o in motion.pop('objects', [{}])]

        return cls(
            camera=CameraConfig(**d.get('camera', {})),
            motion=MotionModelConfig(objects=objects, **motion),
            occlusion=OcclusionProcessConfig(**d.get('occlusion', {})),
            observation=DepthObservationConfig(**d.get('observation', {})),
            output=OutputConfig(**d.get('output', {})),
            delta_time=d.get('delta_time')
        )


def load_config(filepath: str) -> TrackerConfig:
    """
    YAML 파일에서 설정 로드

    Args:
        filepath: 설정 파일 경로

    Returns:
        TrackerConfig: 로드된 설정
    """
    path = Path(filepath)

    if not path.exists():
        logger.warning(f"Config file not found: {filepath}, using defaults")
        return TrackerConfig()

    with open(path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        return TrackerConfig()

    logger.info(f"Config loaded from {filepath}")
    return TrackerConfig.from_dict(config_dict)


def create_default_config(save_path: Optional[str] = None) -> TrackerConfig:
    """
    기본 설정 생성

    Args:
        save_path: 저장 경로 (None이면 저장 안함)

    Returns:
        TrackerConfig: 기본 설정
    """
    config = TrackerConfig()

    if save_path:
        config.save(save_path)

    return config
