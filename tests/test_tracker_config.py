"""
설정 및 모델 생성 테스트
"""

import numpy as np

from rbtrack.config.tracker_config import (
    ObjectMotionConfig,
    TrackerConfig,
    create_default_config,
    load_config
)
from rbtrack.factory import (
    build_depth_observation_model,
    build_motion_model,
    build_occlusion_model
)
from rbtrack.observation.depth_observation import RenderingCache
from rbtrack.states.rigid_bodies_state import RigidBodiesState


class TestTrackerConfig:
    """TrackerConfig 테스트"""

    def test_defaults(self):
        config = TrackerConfig()

        assert config.camera.pixel_count == 768
        assert config.observation.infinity_depth == 7.0
        assert config.occlusion.p_occluded_visible == 0.1
        assert config.occlusion.p_occluded_occluded == 0.7
        assert np.isclose(config.effective_delta_time, 1.0 / 30.0)

    def test_explicit_delta_time(self):
        config = TrackerConfig(delta_time=0.05)
        assert config.effective_delta_time == 0.05

    def test_save_and_load(self, tmp_path):
        """YAML 저장 후 로드하면 같은 설정"""
        config = TrackerConfig()
        config.camera.width = 16
        config.camera.height = 12
        config.motion.object_count = 2
        config.motion.objects = [
            ObjectMotionConfig(damping=0.5, rotation_center=[0.0, 0.0, 0.1]),
            ObjectMotionConfig(damping=2.0)
        ]
        config.observation.cache_resolution = 0.001
        config.output.log_level = "DEBUG"

        path = tmp_path / "config.yaml"
        config.save(str(path))
        loaded = load_config(str(path))

        assert loaded == config
        assert loaded.motion.objects[1].damping == 2.0

    def test_missing_file(self, tmp_path):
        """파일이 없으면 기본 설정"""
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config == TrackerConfig()

    def test_partial_file(self, tmp_path):
        """일부 항목만 있는 파일"""
        path = tmp_path / "partial.yaml"
        path.write_text("occlusion:\n  sigma: 0.5\n")

        config = load_config(str(path))
        assert config.occlusion.sigma == 0.5
        assert config.camera == TrackerConfig().camera

    def test_create_default_config(self, tmp_path):
        path = tmp_path / "default.yaml"
        config = create_default_config(str(path))

        assert path.exists()
        assert load_config(str(path)) == config


class TestFactory:
    """설정 -> 모델 생성 테스트"""

    def test_motion_model(self):
        config = TrackerConfig()
        config.motion.object_count = 2
        model = build_motion_model(config)

        assert model.state_dimension == 24
        assert model.noise_dimension == 12

        # 목록이 짧으면 마지막 강체 설정 재사용
        params = model.get_parameters(1)
        assert params.damping == 1.0
        assert np.allclose(params.linear_acceleration_covariance, np.eye(3) * 0.01)

        state = model.predict_state(config.effective_delta_time, RigidBodiesState(2), np.zeros(12))
        assert state.body_count == 2

    def test_occlusion_model(self):
        model = build_occlusion_model(TrackerConfig())
        assert model.sigma == 0.2
        assert np.isfinite(model.predict_state(1 / 30.0, 0.0, 0.5))

    def test_depth_observation_model(self):
        config = TrackerConfig()
        config.camera.width = 8
        config.camera.height = 6
        config.motion.object_count = 2

        cache = RenderingCache()
        model = build_depth_observation_model(config, cache=cache)

        assert model.pixel_count == 48
        assert model.state_dimension == 12 + 48
        assert model.observation_dimension == 96
        assert model.cache is cache
        assert np.isclose(model.combined_sigma, np.sqrt(0.01 ** 2 + 0.003 ** 2))

        state = np.concatenate([[0.0, 0.0, 1.0, 0.0, 0.0, 0.0], [0.3, 0.0, 1.0, 0.0, 0.0, 0.0], np.zeros(48)])
        y = model.predict_observation(state, np.zeros(48))
        assert y.shape == (96,)
        assert np.all(np.isfinite(y))
