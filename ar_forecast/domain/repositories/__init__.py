from .mean_diff_oc_repository import IMeanDiffOCRepository
from .model_repository import IARModelRepository

__all__ = ["IARModelRepository", "IMeanDiffOCRepository"]
