from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import ContentBlock


class HeightEstimator(ABC):
    """Strategy: how tall a block will render, in page units."""

    @abstractmethod
    def estimate(self, block: ContentBlock) -> float:
        raise NotImplementedError
