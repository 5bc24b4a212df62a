from .diagnosis import DiagnosisFailure, DiagnosisResult, DiagnosisSuccess
from .disease import DISEASE_TABLE, UNKNOWN_CONDITION, DiseaseEntry
from .image_asset import ImageAsset, ScaledImage
from .upload_request import UploadRequest, content_type_for
from .view_state import ResultView

__all__ = [
    "DiagnosisFailure",
    "DiagnosisResult",
    "DiagnosisSuccess",
    "DISEASE_TABLE",
    "UNKNOWN_CONDITION",
    "DiseaseEntry",
    "ImageAsset",
    "ScaledImage",
    "UploadRequest",
    "content_type_for",
    "ResultView",
]
