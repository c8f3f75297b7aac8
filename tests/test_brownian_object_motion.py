"""
BrownianObjectMotionModel 단위 테스트
"""

import numpy as np
import pytest

from rbtrack.errors import InvalidArgument
from rbtrack.process.brownian_object_motion import BrownianObjectMotionModel
from rbtrack.states.rigid_bodies_state import RigidBodiesState


def _make_model(object_count=1, damping=0.0, linear_sigma=0.0, angular_sigma=0.0, rotation_center=None):
    model = BrownianObjectMotionModel(object_count)
    center = np.zeros(3) if rotation_center is None else np.asarray(rotation_center, dtype=float)
    for i in range(object_count):
        model.parameters(
            i,
            rotation_center=center,
            damping=damping,
            linear_acceleration_covariance=np.eye(3) * linear_sigma ** 2,
            angular_acceleration_covariance=np.eye(3) * angular_sigma ** 2
        )
    return model


def _moving_state():
    state = RigidBodiesState(1)
    state.set_position([0.1, -0.2, 1.0])
    state.set_euler_vector([0.2, 0.1, -0.3])
    state.set_linear_velocity([0.3, 0.0, -0.1])
    state.set_angular_velocity([0.0, 0.5, 0.2])
    return state


class TestBrownianObjectMotionDimensions:
    """차원 및 인자 검증 테스트"""

    def test_dimensions(self):
        model = BrownianObjectMotionModel(object_count=2)

        assert model.state_dimension == 24
        assert model.noise_dimension == 12
        assert model.input_dimension == 12
        assert model.standard_variate_dimension == 12
        assert not model.is_conditioned

    def test_invalid_object_count(self):
        with pytest.raises(InvalidArgument):
            BrownianObjectMotionModel(0)

    def test_sample_before_condition(self):
        model = _make_model()
        with pytest.raises(RuntimeError):
            model.sample(np.zeros(6))

    def test_invalid_arguments(self):
        model = _make_model()

        with pytest.raises(InvalidArgument):
            model.condition(0.1, np.zeros(11))
        with pytest.raises(InvalidArgument):
            model.condition(-0.1, RigidBodiesState(1))
        with pytest.raises(InvalidArgument):
            model.condition(0.1, RigidBodiesState(1), control=np.zeros(5))
        with pytest.raises(InvalidArgument):
            model.parameters(1, np.zeros(3), 0.0, np.eye(3), np.eye(3))
        with pytest.raises(InvalidArgument):
            model.parameters(0, np.zeros(3), -1.0, np.eye(3), np.eye(3))

        model.condition(0.1, RigidBodiesState(1))
        with pytest.raises(InvalidArgument):
            model.sample(np.zeros(5))

    def test_invalid_condition_keeps_previous(self):
        """차원 오류는 기존 조건화 결과를 바꾸지 않음"""
        model = _make_model(damping=0.5, linear_sigma=0.1, angular_sigma=0.2, rotation_center=[0.1, 0.0, 0.0])
        noise = np.linspace(-1.0, 1.0, 6)

        model.condition(0.1, _moving_state())
        expected = model.sample(noise)

        with pytest.raises(InvalidArgument):
            model.condition(0.5, RigidBodiesState(1), control=np.ones(5))
        with pytest.raises(InvalidArgument):
            model.condition(0.5, np.zeros(13))
        with pytest.raises(InvalidArgument):
            model.condition(0.5, RigidBodiesState(2))

        assert model.sample(noise) == expected


class TestBrownianObjectMotionDynamics:
    """운동 전파 테스트"""

    def test_constant_velocity(self):
        """감쇠/잡음 없음: p + v dt"""
        model = _make_model()
        state = RigidBodiesState.from_poses(
            positions=[[1.0, 2.0, 3.0]],
            linear_velocities=[[0.5, -1.0, 2.0]]
        )

        result = model.predict_state(0.5, state, np.zeros(6))

        assert isinstance(result, RigidBodiesState)
        assert np.allclose(result.position(), [1.25, 1.5, 4.0])
        assert np.allclose(result.linear_velocity(), [0.5, -1.0, 2.0])
        assert np.allclose(result.quaternion(), [0.0, 0.0, 0.0, 1.0])

    def test_damping_decay(self):
        """속도 e^{-λdt} 감쇠"""
        damping, dt = 2.0, 0.5
        model = _make_model(damping=damping)
        state = RigidBodiesState.from_poses(
            positions=[[0.0, 0.0, 0.0]],
            linear_velocities=[[1.0, 0.0, 0.0]]
        )

        result = model.predict_state(dt, state, np.zeros(6))

        assert np.isclose(result.linear_velocity()[0], np.exp(-damping * dt))
        assert np.isclose(result.position()[0], (1.0 - np.exp(-damping * dt)) / damping)

    def test_control_input(self):
        """λ = 0 에서 제어 입력: 위치 0.5 dt² u, 속도 dt u"""
        dt = 0.4
        model = _make_model()
        control = np.array([1.0, 0.0, 0.0, 0.0, 0.0, 0.0])

        result = model.predict_state(dt, RigidBodiesState(1), np.zeros(6), control)

        assert np.allclose(result.position(), [0.5 * dt ** 2, 0.0, 0.0])
        assert np.allclose(result.linear_velocity(), [dt, 0.0, 0.0])

    def test_rotation_about_z(self):
        """z축 각속도로 회전"""
        dt = 0.1
        model = _make_model()
        state = RigidBodiesState.from_poses(
            positions=[[0.0, 0.0, 0.0]],
            angular_velocities=[[0.0, 0.0, 1.0]]
        )

        result = model.predict_state(dt, state, np.zeros(6))

        rotvec = result.euler_vector()
        assert np.allclose(rotvec[:2], 0.0, atol=1e-12)
        assert np.isclose(rotvec[2], 2.0 * np.arctan(dt / 2.0))
        assert np.allclose(result.angular_velocity(), [0.0, 0.0, 1.0])

    def test_unit_quaternion_after_sampling(self):
        model = _make_model(damping=1.0, linear_sigma=0.5, angular_sigma=3.0)
        rng = np.random.default_rng(0)
        state = _moving_state()

        for _ in range(20):
            state = model.predict_state(1 / 30.0, state, rng.standard_normal(6))
            assert np.isclose(np.linalg.norm(state.quaternion()), 1.0)

    def test_zero_covariance_is_deterministic(self):
        """공분산 0이면 잡음과 무관"""
        model = _make_model(damping=1.0, rotation_center=[0.05, 0.0, 0.02])
        state = _moving_state()

        model.condition(0.1, state)
        first = model.sample(np.zeros(6))
        second = model.sample(np.full(6, 3.0))

        assert first == second

    def test_sample_is_pure(self):
        """같은 잡음 -> 같은 결과, 입력 상태 불변"""
        model = _make_model(damping=0.5, linear_sigma=0.1, angular_sigma=0.2)
        state = _moving_state()
        original = state.copy()
        noise = np.linspace(-1.0, 1.0, 6)

        model.condition(0.05, state)
        assert model.sample(noise) == model.sample(noise)
        assert state == original

    def test_zero_time_round_trip_with_rotation_center(self):
        """dt = 0 이면 회전 중심 변환 왕복 후 원래 상태"""
        model = _make_model(
            damping=1.0, linear_sigma=0.3, angular_sigma=0.3,
            rotation_center=[0.1, -0.05, 0.2]
        )
        state = _moving_state()

        result = model.predict_state(0.0, state, np.ones(6))

        assert np.allclose(result.vector, state.vector, atol=1e-12)

    def test_rotation_center_rigid_motion(self):
        """회전 중심 자체는 선속도 0, 각속도만 있을 때 제자리"""
        center = np.array([0.0, 0.0, 0.5])
        model = _make_model(rotation_center=center)

        state = RigidBodiesState(1)
        state.set_position([0.2, 0.0, 1.0])
        omega = np.array([0.3, 0.0, 0.0])
        state.set_angular_velocity(omega)

        # 원점 기준 선속도 = -ω × (p + R c): 회전 중심이 정지
        world_center = state.position() + center
        state.set_linear_velocity(-np.cross(omega, world_center))

        result = model.predict_state(0.2, state, np.zeros(6))
        new_center = result.position() + result.rotation_matrix() @ center

        assert np.allclose(new_center, world_center, atol=1e-12)

    def test_parameters_affect_later_conditioning_only(self):
        """condition 이후 parameters 변경은 현재 sample 에 영향 없음"""
        state = _moving_state()
        noise = np.linspace(-0.5, 0.5, 6)

        reference = _make_model(damping=1.0, linear_sigma=0.1, rotation_center=[0.1, 0.0, 0.0])
        reference.condition(0.1, state)
        expected = reference.sample(noise)

        model = _make_model(damping=1.0, linear_sigma=0.1, rotation_center=[0.1, 0.0, 0.0])
        model.condition(0.1, state)
        model.parameters(0, np.array([0.0, 0.3, 0.0]), 3.0, np.eye(3), np.eye(3))

        assert model.sample(noise) == expected

    def test_multiple_objects_independent(self):
        """강체별 잡음 구간이 서로 독립"""
        model = _make_model(object_count=2, linear_sigma=1.0)
        state = RigidBodiesState(2)

        noise = np.zeros(12)
        noise[6] = 1.0
        result = model.predict_state(1.0, state, noise)

        assert np.allclose(result.position(0), 0.0)
        assert np.isclose(np.linalg.norm(result.position(1)), np.sqrt(1.0 / 3.0))
        assert np.isclose(np.linalg.norm(result.linear_velocity(1)), 1.0)

    def test_accepts_state_vector(self):
        model = _make_model()
        result = model.predict_state(0.1, _moving_state().vector, np.zeros(6))
        assert result.body_count == 1
