"""
RigidBodiesState 단위 테스트
"""

import numpy as np
import pytest

from rbtrack.errors import InvalidArgument, as_vector
from rbtrack.states.rigid_bodies_state import RigidBodiesState, to_rigid_bodies_state


class TestRigidBodiesState:
    """다중 강체 상태 테스트"""

    def test_initialization(self):
        """초기화 테스트"""
        state = RigidBodiesState(2)

        assert state.body_count == 2
        assert state.dimension == 24
        assert np.allclose(state.vector, 0.0)
        assert np.allclose(state.quaternion(1), [0.0, 0.0, 0.0, 1.0])

    def test_invalid_body_count(self):
        with pytest.raises(InvalidArgument):
            RigidBodiesState(0)

    def test_layout(self):
        """강체별 [위치, 회전 벡터, 선속도, 각속도] 배치"""
        state = RigidBodiesState(2)
        state.set_position([1.0, 2.0, 3.0], 1)
        state.set_euler_vector([0.1, 0.2, 0.3], 1)
        state.set_linear_velocity([4.0, 5.0, 6.0], 1)
        state.set_angular_velocity([7.0, 8.0, 9.0], 1)

        vector = state.vector
        assert np.allclose(vector[:12], 0.0)
        assert np.allclose(vector[12:15], [1.0, 2.0, 3.0])
        assert np.allclose(vector[15:18], [0.1, 0.2, 0.3])
        assert np.allclose(vector[18:21], [4.0, 5.0, 6.0])
        assert np.allclose(vector[21:24], [7.0, 8.0, 9.0])

        assert np.allclose(state.pose(1), [1.0, 2.0, 3.0, 0.1, 0.2, 0.3])
        assert np.allclose(state.poses(), np.concatenate([np.zeros(6), state.pose(1)]))

    def test_set_quaternion_normalizes(self):
        """정규화되지 않은 쿼터니언 설정"""
        state = RigidBodiesState(1)
        state.set_quaternion([0.0, 0.0, 2.0, 2.0])

        q = state.quaternion()
        assert np.isclose(np.linalg.norm(q), 1.0)
        assert np.allclose(state.euler_vector(), [0.0, 0.0, np.pi / 2])

        expected = np.array([
            [0.0, -1.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0]
        ])
        assert np.allclose(state.rotation_matrix(), expected, atol=1e-12)

    def test_set_pose(self):
        """자세 설정은 위치/회전 벡터만 변경"""
        state = RigidBodiesState(2)
        state.set_linear_velocity([1.0, 0.0, 0.0], 1)
        state.set_pose([0.5, 0.0, 1.0, 0.0, 0.1, 0.0], 1)

        assert np.allclose(state.pose(1), [0.5, 0.0, 1.0, 0.0, 0.1, 0.0])
        assert np.allclose(state.linear_velocity(1), [1.0, 0.0, 0.0])
        assert np.allclose(state.pose(0), 0.0)

        with pytest.raises(InvalidArgument):
            state.set_pose(np.zeros(5), 0)

    def test_from_vector(self):
        vector = np.arange(24, dtype=float)
        state = RigidBodiesState.from_vector(vector)

        assert state.body_count == 2
        assert np.allclose(state.linear_velocity(1), [18.0, 19.0, 20.0])

        with pytest.raises(InvalidArgument):
            RigidBodiesState.from_vector(np.zeros(13))

    def test_from_poses(self):
        state = RigidBodiesState.from_poses(
            positions=[[0.0, 0.0, 1.0], [0.5, 0.0, 1.0]],
            linear_velocities=[[0.1, 0.0, 0.0], [0.0, 0.2, 0.0]]
        )

        assert state.body_count == 2
        assert np.allclose(state.position(1), [0.5, 0.0, 1.0])
        assert np.allclose(state.linear_velocity(1), [0.0, 0.2, 0.0])
        assert np.allclose(state.angular_velocity(0), 0.0)

    def test_index_out_of_range(self):
        state = RigidBodiesState(1)
        with pytest.raises(IndexError):
            state.position(1)

    def test_copy_is_independent(self):
        """복사본 수정이 원본에 영향을 주지 않음"""
        state = RigidBodiesState(1)
        other = state.copy()
        other.set_position([1.0, 0.0, 0.0])

        assert np.allclose(state.position(), 0.0)
        assert state != other

        # vector 는 복사본
        vector = state.vector
        vector[0] = 5.0
        assert state.position()[0] == 0.0

    def test_to_rigid_bodies_state(self):
        state = to_rigid_bodies_state(np.zeros(12), 1)
        assert state.body_count == 1

        with pytest.raises(InvalidArgument):
            to_rigid_bodies_state(RigidBodiesState(2), 1)
        with pytest.raises(InvalidArgument):
            to_rigid_bodies_state(np.zeros(11), 1)


class TestAsVector:
    """벡터 형태 변환 테스트"""

    def test_accepts_column_and_row(self):
        assert as_vector(np.zeros((3, 1)), 3, "x").shape == (3,)
        assert as_vector(np.zeros((1, 3)), 3, "x").shape == (3,)
        assert as_vector(2.0, 1, "x").shape == (1,)

    def test_rejects_wrong_length(self):
        with pytest.raises(InvalidArgument):
            as_vector(np.zeros(4), 3, "x")
        with pytest.raises(InvalidArgument):
            as_vector(np.zeros((2, 2)), 4, "x")
