"""Base Pydantic schemas.

Two flavours:
- StrictBaseModel for our own request/response contracts (extra fields rejected)
- UpstreamModel for third-party payloads, which grow fields without notice
"""
from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Base model that forbids extra fields.

    All API request/response models should inherit from this class
    to ensure strict contract enforcement between frontend and backend.

    Usage:
        class MyRequest(StrictBaseModel):
            field: str
    """

    model_config = ConfigDict(extra="forbid")


class UpstreamModel(BaseModel):
    """Base model for payloads received from market data providers.

    Unknown fields are ignored so a provider adding a field does not break
    parsing; only the fields we read are declared and validated.
    """

    model_config = ConfigDict(extra="ignore")
