"""
config 모듈 - 설정 관리
"""

from .tracker_config import TrackerConfig, load_config, create_default_config

__all__ = ['TrackerConfig', 'load_config', 'create_default_config']
