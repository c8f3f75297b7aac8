"""
interfaces.py - 모델 공통 인터페이스

재매개변수화(reparameterization) 방식:
확률적 전이를 "상태 + 표준 정규 잡음 -> 새 상태"의 결정적 함수로 표현하여
샘플링 기반 필터(파티클 필터)와 모멘트 기반 필터(가우시안 필터)가
같은 모델을 공유할 수 있도록 합니다.

- StandardNormalMapping: 표준 정규 벡터 -> 값 (condition 이후 sample)
- ProcessModel: 상태 전이 모델 (condition -> sample)
- ObservationModel: 관측 모델 (predict_observation)

구체 모델은 StandardNormalMapping과 ProcessModel/ObservationModel 중 하나를
함께 구현합니다.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import numpy as np


class StandardNormalMapping(ABC):
    """표준 정규 잡음을 결정적으로 매핑하는 인터페이스"""

    @property
    @abstractmethod
    def standard_variate_dimension(self) -> int:
        """입력 표준 정규 벡터의 차원"""
        pass

    @abstractmethod
    def sample(self, noise: np.ndarray) -> Any:
        """
        표준 정규 벡터를 새 값으로 매핑

        가장 최근 condition() 호출로 설정된 내부 상태와 noise만의 함수입니다.
        """
        pass


class ProcessModel(ABC):
    """상태 전이 모델 인터페이스"""

    @property
    @abstractmethod
    def state_dimension(self) -> int:
        pass

    @property
    @abstractmethod
    def noise_dimension(self) -> int:
        pass

    @property
    @abstractmethod
    def input_dimension(self) -> int:
        pass

    @abstractmethod
    def condition(self, delta_time: float, state: Any, control: Optional[np.ndarray] = None):
        """현재 상태와 제어 입력으로 내부 상태를 설정 (sample 이전에 호출)"""
        pass

    def predict_state(
        self,
        delta_time: float,
        state: Any,
        noise: np.ndarray,
        control: Optional[np.ndarray] = None
    ) -> Any:
        """condition + sample 한번에"""
        self.condition(delta_time, state, control)
        return self.sample(noise)


class ObservationModel(ABC):
    """관측 모델 인터페이스"""

    @property
    @abstractmethod
    def observation_dimension(self) -> int:
        pass

    @property
    @abstractmethod
    def state_dimension(self) -> int:
        pass

    @property
    @abstractmethod
    def noise_dimension(self) -> int:
        pass

    @abstractmethod
    def predict_observation(self, state: np.ndarray, noise: np.ndarray, delta_time: float) -> np.ndarray:
        """상태와 잡음으로부터 관측값 예측"""
        pass
