#!/usr/bin/env python3
"""
run_simulation.py - rbtrack 모델 시뮬레이션 스크립트

브라운 운동 모델로 강체를 움직이고, 구 모델 렌더러와 깊이 관측 모델로
관측을 예측하며, 연속 가림 프로세스로 픽셀별 가림 믿음을 전파합니다.

사용법:
    python scripts/run_simulation.py --steps 30

    # 설정 파일 사용
    python scripts/run_simulation.py --config config.yaml --seed 1

    # 기본 설정 저장
    python scripts/run_simulation.py --save_config config.yaml --steps 0
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

# rbtrack 모듈 경로 추가
sys.path.insert(0, str(Path(__file__).parents[1]))

from rbtrack.config.tracker_config import TrackerConfig, load_config
from rbtrack.errors import NumericDivergence
from rbtrack.factory import (
    build_depth_observation_model,
    build_motion_model,
    build_occlusion_model
)
from rbtrack.states.rigid_bodies_state import RigidBodiesState
from rbtrack.utils.math_utils import sigmoid

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description='Run rbtrack model simulation')

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='설정 파일 경로'
    )
    parser.add_argument(
        '--steps',
        type=int,
        default=30,
        help='시뮬레이션 스텝 수'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=0,
        help='난수 시드'
    )
    parser.add_argument(
        '--distance',
        type=float,
        default=1.0,
        help='카메라로부터 초기 거리 (m)'
    )
    parser.add_argument(
        '--save_config',
        type=str,
        default=None,
        help='사용한 설정을 저장할 경로'
    )

    args = parser.parse_args()

    # 설정 로드
    if args.config:
        config = load_config(args.config)
    else:
        config = TrackerConfig()

    logging.basicConfig(
        level=getattr(logging, config.output.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.save_config:
        config.save(args.save_config)

    rng = np.random.default_rng(args.seed)
    dt = config.effective_delta_time

    # 모델 초기화
    motion_model = build_motion_model(config)
    occlusion_model = build_occlusion_model(config)
    observation_model = build_depth_observation_model(config)

    object_count = config.motion.object_count
    spacing = 3.0 * config.observation.sphere_radius
    positions = np.array([
        [(i - (object_count - 1) / 2.0) * spacing, 0.0, args.distance]
        for i in range(object_count)
    ])
    state = RigidBodiesState.from_poses(positions)
    occlusion = np.zeros(observation_model.pixel_count)

    logger.info(f"Simulating {args.steps} steps: dt={dt:.4f}s, objects={object_count}")

    diverged = 0

    for step in range(args.steps):
        # 장면이 바뀌므로 스텝마다 캐시 비움
        observation_model.clear_cache()

        state = motion_model.predict_state(
            dt, state, rng.standard_normal(motion_model.noise_dimension)
        )

        for k in range(occlusion.shape[0]):
            try:
                occlusion[k] = occlusion_model.predict_state(dt, occlusion[k], rng.standard_normal(1))
            except NumericDivergence as e:
                diverged += 1
                logger.warning(f"Pixel {k} occlusion diverged: {e}")
                occlusion[k] = 0.0

        observation_state = np.concatenate([state.poses(), occlusion])
        observation = observation_model.predict_observation(
            observation_state,
            rng.standard_normal(observation_model.noise_dimension),
            dt
        )

        if step % 10 == 0 or step == args.steps - 1:
            depth = observation[0::2]
            position = state.position(0)
            logger.info(
                f"Step {step}: "
                f"pos=[{position[0]:.3f}, {position[1]:.3f}, {position[2]:.3f}], "
                f"speed={np.linalg.norm(state.linear_velocity(0)):.3f} m/s, "
                f"min_depth={depth.min():.3f}, "
                f"mean_occlusion={np.mean(sigmoid(occlusion)):.3f}"
            )

    # 요약
    cache = observation_model.cache
    logger.info(
        f"Summary: cache_hits={cache.hits}, cache_misses={cache.misses}, "
        f"diverged_pixels={diverged}"
    )


if __name__ == '__main__':
    main()
