from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from backend.core.logging_config import get_logger
from backend.schemas.totp import (
    TotpGenerateResponse,
    TotpProvisioningResponse,
    TotpVerifyRequest,
    TotpVerifyResponse,
)
from backend.services.totp_service import totp_service

router = APIRouter(prefix="/api/totp", tags=["totp"])
logger = get_logger(service="totp_router")


@router.post("/generate", response_model=TotpGenerateResponse)
async def generate_totp() -> TotpGenerateResponse:
    return TotpGenerateResponse(otp=totp_service.generate())


@router.post(
    "/verify",
    response_model=TotpVerifyResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"description": "Invalid OTP format"}},
)
async def verify_totp(payload: TotpVerifyRequest) -> TotpVerifyResponse | JSONResponse:
    digits = totp_service.config.digits
    if len(payload.code) != digits:
        logger.info("totp_verify_bad_format", expected_digits=digits)
        return JSONResponse(
            {"error": f"Invalid OTP format: must be a {digits}-digit number"},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return TotpVerifyResponse(is_valid=totp_service.verify(payload.code))


@router.get("/provisioning-uri", response_model=TotpProvisioningResponse)
async def provisioning_uri() -> TotpProvisioningResponse:
    config = totp_service.config
    return TotpProvisioningResponse(
        uri=totp_service.provisioning_uri(),
        issuer=totp_service.issuer,
        account=totp_service.account,
        algorithm=totp_service.algorithm_name,
        digits=config.digits,
        period=config.period,
    )
