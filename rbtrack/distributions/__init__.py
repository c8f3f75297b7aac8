"""
distributions 모듈 - 표준 정규 매핑이 가능한 분포
"""

from .gaussian import Gaussian, psd_square_root
from .truncated_gaussian import TruncatedGaussian

__all__ = ['Gaussian', 'psd_square_root', 'TruncatedGaussian']
