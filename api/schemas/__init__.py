"""API schema modules."""

from api.schemas.analysis import (
    AnalysisDetail,
    AnalysisSummary,
    AnalyzeResponse,
    StatusUpdateResponse,
)

__all__ = [
    "AnalysisDetail",
    "AnalysisSummary",
    "AnalyzeResponse",
    "StatusUpdateResponse",
]
