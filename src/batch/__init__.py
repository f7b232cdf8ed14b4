"""
Batch entry point: recognition + notation normalization + InkML merge.

The text pipeline (recognize -> normalize) and the structural pipeline
(load -> unify -> persist) share only the ordered document id list.
"""

from .contracts import BatchConfig, BatchError, BatchResult
from .module import run_batch

__all__ = ["BatchConfig", "BatchError", "BatchResult", "run_batch"]
