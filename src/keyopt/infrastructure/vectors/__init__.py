from ._dense import DenseVector
from ._sparse import SparseVector

__all__ = [DenseVector.__name__, SparseVector.__name__]
