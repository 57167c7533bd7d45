from ._bottou import BottouConfig, BottouSchedule
from ._adagrad import AdaGradConfig, AdaGradSchedule
from ._adadelta import AdaDeltaConfig, AdaDeltaSchedule

__all__ = [
    "BottouConfig",
    "BottouSchedule",
    "AdaGradConfig",
    "AdaGradSchedule",
    "AdaDeltaConfig",
    "AdaDeltaSchedule",
]
