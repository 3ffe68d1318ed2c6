"""
FastAPI dependencies.

Settings and store are built once per process from the environment.
Tests replace them through ``app.dependency_overrides``.
"""

import logging
from functools import lru_cache

from fastapi import Depends

from treatment_assistant.config import Settings
from treatment_assistant.llm.client import LLMClient, UnconfiguredLLMClient
from treatment_assistant.pipeline import AnalysisPipeline
from treatment_assistant.storage.analysis_store import AnalysisStore


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache
def get_store() -> AnalysisStore:
    return AnalysisStore(storage_path=get_settings().analysis_store_path)


def build_llm_client(settings: Settings):
    """
    Real client when credentials are present.

    Without an API key the request still gets intake validation; the model
    call then fails with an authentication error in the usual envelope.
    """
    try:
        return LLMClient(settings)
    except ValueError as e:
        logger.error(str(e))
        return UnconfiguredLLMClient(settings.provider, str(e))


def get_pipeline(
    settings: Settings = Depends(get_settings),
    store: AnalysisStore = Depends(get_store),
) -> AnalysisPipeline:
    """Build a pipeline for this request."""
    return AnalysisPipeline(settings=settings, llm_client=build_llm_client(settings), store=store)
