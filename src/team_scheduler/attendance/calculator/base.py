from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ..model import AttendanceEntry, WorkTime


class WorkTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def calculate(self, log: Sequence[AttendanceEntry]) -> WorkTime:
        raise NotImplementedError
