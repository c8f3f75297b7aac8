"""
states 모듈 - 강체 상태 컨테이너
"""

from .rigid_bodies_state import RigidBodiesState, to_rigid_bodies_state

__all__ = ['RigidBodiesState', 'to_rigid_bodies_state']
