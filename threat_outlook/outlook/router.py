from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from threat_outlook.core.llm.client import LLMClient, LLMUpstreamError
from threat_outlook.core.llm.deps import get_llm_client
from threat_outlook.core.settings import get_settings
from threat_outlook.domain.exceptions import BusinessValidationError
from threat_outlook.outlook.schemas import CreditsOut, ErrorOut, ThreatOutlookIn, ThreatOutlookOut
from threat_outlook.outlook.service import ThreatOutlookService
from threat_outlook.outlook.templates import TEMPLATE_VERSION

router = APIRouter(prefix="/api", tags=["threat-outlook"])
logger = logging.getLogger("threat_outlook.generation")


def get_threat_outlook_service(
    llm_client: LLMClient = Depends(get_llm_client),
) -> ThreatOutlookService:
    settings = get_settings()
    return ThreatOutlookService(llm_client=llm_client, default_model=settings.default_model)


def _internal_error(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "message": str(exc)},
    )


@router.post(
    "/generate-threat-outlook",
    response_model=ThreatOutlookOut,
    summary="Generate a Daily Threat Outlook report",
    responses={
        400: {"model": ErrorOut, "description": "Missing locations/topics or bad input."},
        500: {"model": ErrorOut, "description": "Unexpected local failure."},
    },
)
async def generate_threat_outlook(
    payload: ThreatOutlookIn,
    request: Request,
    service: ThreatOutlookService = Depends(get_threat_outlook_service),
) -> ThreatOutlookOut:
    """
    Build the report prompt from the customer profile, make one provider call, and
    return the cleaned report.

    Provider errors are passed through with the provider's status code. Nothing is
    stored, and neither the profile nor the report is logged.
    """

    # Only the resolved model name is logged, never the raw client string.
    model = service.model_label(payload)
    request.state.generation_model = model
    request.state.report_type = payload.report_type
    log_extra = {
        "request_id": getattr(request.state, "request_id", None),
        "model": model,
        "report_type": payload.report_type,
        "template_version": TEMPLATE_VERSION,
    }

    try:
        result = await service.generate(payload)
    except BusinessValidationError:
        raise
    except LLMUpstreamError as exc:
        logger.info(
            "Threat outlook failed (provider error)",
            extra={**log_extra, "status_code": exc.status_code, "success": False},
        )
        raise
    except Exception as exc:  # noqa: BLE001 - mapped to a 500 body with the raw message
        logger.exception(
            "Threat outlook failed", extra={**log_extra, "status_code": 500, "success": False}
        )
        return _internal_error(exc)

    logger.info("Threat outlook generated", extra={**log_extra, "success": True})
    return result


@router.get(
    "/check-credits",
    response_model=CreditsOut,
    response_model_exclude_none=True,
    summary="Verify provider API keys",
    responses={500: {"model": ErrorOut, "description": "Unexpected local failure."}},
)
async def check_credits(
    service: ThreatOutlookService = Depends(get_threat_outlook_service),
) -> CreditsOut:
    try:
        return await service.check_credits()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Credential check failed")
        return _internal_error(exc)
