from ._batch_sampler import BatchSampler

__all__ = [BatchSampler.__name__]
