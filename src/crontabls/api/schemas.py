"""API request/response Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from crontabls.models.errors import CronDiagnostic


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""


class ValidateRequest(BaseModel):
    """Request body for POST /validate."""

    text: str = Field(description="Crontab content to validate")


class ValidateResponse(BaseModel):
    """Response body for POST /validate."""

    valid: bool
    diagnostics: list[CronDiagnostic] = []


# ---------------------------------------------------------------------------
# Document schemas
# ---------------------------------------------------------------------------


class DocumentOpenRequest(BaseModel):
    """Request body for POST /documents."""

    text: str = Field(description="Full crontab content")
    document_id: str | None = Field(
        default=None, description="Client-chosen id; generated when omitted"
    )


class DocumentChangeRequest(BaseModel):
    """Request body for PUT /documents/{document_id}."""

    text: str = Field(description="Full crontab content after the edit")


class DocumentResponse(BaseModel):
    """Diagnostics published after an open or change."""

    document_id: str
    diagnostics: list[CronDiagnostic] = []


class DocumentSummaryResponse(BaseModel):
    """Short document summary for listing."""

    document_id: str
    lines: int
    tokens: int
    errors: int


class DocumentListResponse(BaseModel):
    """Response for GET /documents."""

    documents: list[DocumentSummaryResponse]


class TermErrorResponse(BaseModel):
    start_char: int
    end_char: int
    message: str


class TokenResponse(BaseModel):
    """One token.  Term-only fields are ``None`` for comments and commands."""

    type: str
    line: int
    start_char: int
    end_char: int
    content: str
    field: str | None = None
    value: str | None = None
    errors: list[TermErrorResponse] = []


class TokenListResponse(BaseModel):
    document_id: str
    tokens: list[TokenResponse]


class HoverResponse(BaseModel):
    """Response for GET /documents/{document_id}/hover."""

    line: int
    start_char: int
    end_char: int
    text: str


class SemanticTokensResponse(BaseModel):
    """Response for GET /documents/{document_id}/semantic-tokens."""

    legend: list[str]
    data: list[int]
