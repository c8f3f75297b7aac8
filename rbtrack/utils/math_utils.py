"""
math_utils.py - 수치/회전 유틸리티

- 로지스틱(sigmoid) / 로짓(logit) 변환
- 쿼터니언 미분 행렬 (각 증분 -> 쿼터니언 계수 증분)
- 쿼터니언 <-> 회전 행렬 <-> 회전 벡터 변환 (scipy Rotation)

쿼터니언은 [x, y, z, w] 형식 (scipy/ROS 표준)입니다.
"""

import numpy as np
from scipy.special import expit, logit as _logit
from scipy.spatial.transform import Rotation


def sigmoid(x):
    """로지스틱 함수: 실수 -> (0, 1)"""
    return expit(x)


def logit(p):
    """로짓 함수 (sigmoid의 역함수): (0, 1) -> 실수"""
    return _logit(p)


def normalize_quaternion(q: np.ndarray) -> np.ndarray:
    """
    단위 쿼터니언으로 정규화

    크기가 0에 가까우면 단위 쿼터니언 [0, 0, 0, 1]을 반환합니다.
    """
    q = np.asarray(q, dtype=np.float64)
    norm = np.linalg.norm(q)
    if norm < 1e-10:
        return np.array([0.0, 0.0, 0.0, 1.0])
    return q / norm


def quaternion_matrix(q_xyzw: np.ndarray) -> np.ndarray:
    """
    쿼터니언 미분 행렬 (4x3)

    월드 좌표계의 각 증분 dθ에 대해 dq = Q(q) @ dθ 가
    쿼터니언 계수 [x, y, z, w]의 1차 증분이 되도록 합니다.
    (dq/dt = 0.5 * [ω, 0] ⊗ q)

    Args:
        q_xyzw: 쿼터니언 계수 [x, y, z, w]

    Returns:
        4x3 행렬
    """
    x, y, z, w = q_xyzw
    return 0.5 * np.array([
        [w, z, -y],
        [-z, w, x],
        [y, -x, w],
        [-x, -y, -z]
    ])


def quaternion_to_rotation_matrix(q_xyzw: np.ndarray) -> np.ndarray:
    """쿼터니언에서 회전 행렬로 변환"""
    return Rotation.from_quat(q_xyzw).as_matrix()


def rotation_vector_to_quaternion(rotvec: np.ndarray) -> np.ndarray:
    """회전 벡터(축 * 각도, 라디안)에서 쿼터니언 [x, y, z, w]로 변환"""
    return Rotation.from_rotvec(rotvec).as_quat()


def quaternion_to_rotation_vector(q_xyzw: np.ndarray) -> np.ndarray:
    """쿼터니언에서 회전 벡터로 변환 (입력은 정규화됨)"""
    return Rotation.from_quat(normalize_quaternion(q_xyzw)).as_rotvec()
