"""
filtering 모듈 - 가우시안/파티클 필터 연결
"""

from .sigma_point_bridge import propagate_moments, sample_particles

__all__ = ['propagate_moments', 'sample_particles']
