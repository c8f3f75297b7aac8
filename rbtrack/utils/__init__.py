"""
utils 모듈 - 수치/회전 유틸리티
"""

from .math_utils import (
    sigmoid,
    logit,
    normalize_quaternion,
    quaternion_matrix,
    quaternion_to_rotation_matrix
)

__all__ = [
    'sigmoid',
    'logit',
    'normalize_quaternion',
    'quaternion_matrix',
    'quaternion_to_rotation_matrix',
]
