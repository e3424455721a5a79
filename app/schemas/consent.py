"""Pydantic schemas for terms-of-use consent."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ConsentStatus(BaseModel):
    accepted: bool
    timestamp: int
    terms_version: str


class CheckConsentResponse(BaseModel):
    has_consent: bool
    consent: Optional[ConsentStatus] = None


class AcceptConsentRequest(BaseModel):
    terms_version: Optional[str] = None


class AcceptConsentResponse(BaseModel):
    success: bool
    consent: ConsentStatus
