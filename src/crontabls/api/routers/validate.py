"""Stateless validation endpoint: POST /validate."""

from __future__ import annotations

from fastapi import APIRouter, Request

from crontabls.api.schemas import ValidateRequest, ValidateResponse
from crontabls.parser.tokenizer import tokenize
from crontabls.parser.validator import CrontabValidator

router = APIRouter()


@router.post("", response_model=ValidateResponse)
async def validate_crontab(body: ValidateRequest, request: Request) -> ValidateResponse:
    """Validate crontab text without opening it as a document."""
    validator = CrontabValidator(source=request.app.state.settings.diagnostic_source)
    diagnostics = validator.validate(tokenize(body.text))
    return ValidateResponse(valid=not diagnostics, diagnostics=diagnostics)
