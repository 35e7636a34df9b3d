"""Pydantic schemas for TOTP endpoints."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TotpVerifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # "opt" es el nombre que usaba el cliente original
    code: str = Field(
        ...,
        validation_alias=AliasChoices("code", "opt"),
        description="Código de un solo uso introducido por el usuario",
    )

    @field_validator("code")
    @classmethod
    def _validate_code(cls, value: str) -> str:
        if not value or not value.isascii() or not value.isdigit():
            raise ValueError("El código debe contener solo dígitos")
        return value


class TotpVerifyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(..., alias="isValid")


class TotpGenerateResponse(BaseModel):
    otp: str


class TotpProvisioningResponse(BaseModel):
    uri: str
    issuer: str
    account: str
    algorithm: str
    digits: int
    period: int | float
