from ._config import SGDConfig
from ._sgd import SGD

__all__ = [SGDConfig.__name__, SGD.__name__]
