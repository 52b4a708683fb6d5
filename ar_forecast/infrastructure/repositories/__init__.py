from .cached_model_repository import CachedARModelRepository
from .json_model_repository import LEGACY_VERSION, JsonARModelRepository
from .mean_diff_oc_repository import InMemoryMeanDiffOCRepository

__all__ = [
    "CachedARModelRepository",
    "InMemoryMeanDiffOCRepository",
    "JsonARModelRepository",
    "LEGACY_VERSION",
]
