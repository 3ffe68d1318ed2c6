"""Read-only clients for external medical reference data."""

from treatment_assistant.references.openfda_client import OpenFDAClient
from treatment_assistant.references.rxnorm_client import RxNormClient

__all__ = ["OpenFDAClient", "RxNormClient"]
