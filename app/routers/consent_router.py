"""Consent API: check and accept the terms of use."""

from fastapi import APIRouter, Depends

from app.routers.utils.dependencies import (
    CurrentUser,
    get_consent_service,
    get_current_user,
)
from app.schemas.consent import (
    AcceptConsentRequest,
    AcceptConsentResponse,
    CheckConsentResponse,
)
from app.services.consent_service import ConsentService

consent_router = APIRouter(prefix="/consent", tags=["Consent"])


@consent_router.get("/check", response_model=CheckConsentResponse)
def check_consent(
    current_user: CurrentUser = Depends(get_current_user),
    svc: ConsentService = Depends(get_consent_service),
) -> CheckConsentResponse:
    consent = svc.check_consent(current_user.user_id)
    return CheckConsentResponse(has_consent=consent is not None, consent=consent)


@consent_router.post("/accept", response_model=AcceptConsentResponse)
def accept_consent(
    data: AcceptConsentRequest,
    current_user: CurrentUser = Depends(get_current_user),
    svc: ConsentService = Depends(get_consent_service),
) -> AcceptConsentResponse:
    consent = svc.record_consent(current_user.user_id, data.terms_version)
    return AcceptConsentResponse(success=True, consent=consent)
