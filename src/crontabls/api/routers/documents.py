"""Document endpoints: open/change/close plus tokens, diagnostics, hover and highlighting."""

from __future__ import annotations

import uuid
from dataclasses import asdict
from typing import assert_never

from fastapi import APIRouter, Depends, HTTPException, Query

from crontabls.api.deps import get_document_store
from crontabls.api.schemas import (
    DocumentChangeRequest,
    DocumentListResponse,
    DocumentOpenRequest,
    DocumentResponse,
    DocumentSummaryResponse,
    HoverResponse,
    SemanticTokensResponse,
    TermErrorResponse,
    TokenListResponse,
    TokenResponse,
)
from crontabls.models.tokens import CommandToken, CommentToken, TermToken, Token, char_range
from crontabls.service.document_store import DocumentNotFoundError, DocumentStore
from crontabls.service.semantic_tokens import TOKEN_LEGEND

router = APIRouter()


# -- helpers -----------------------------------------------------------------


def _not_found(document_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Document '{document_id}' not found")


def _token_response(token: Token) -> TokenResponse:
    start, end = char_range(token)
    match token:
        case CommentToken():
            return TokenResponse(
                type="comment", line=token.line, start_char=start, end_char=end, content=token.content
            )
        case TermToken():
            return TokenResponse(
                type="term",
                line=token.line,
                start_char=start,
                end_char=end,
                content=token.content,
                field=str(token.kind),
                value=None if isinstance(token.result, tuple) else token.result.describe(),
                errors=[TermErrorResponse(**asdict(e)) for e in token.errors],
            )
        case CommandToken():
            return TokenResponse(
                type="command", line=token.line, start_char=start, end_char=end, content=token.content
            )
        case _:
            assert_never(token)


# -- document lifecycle ------------------------------------------------------


@router.post("", response_model=DocumentResponse, status_code=201)
async def open_document(
    body: DocumentOpenRequest,
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> DocumentResponse:
    """Open a document (replacing it if the id is already open)."""
    document_id = body.document_id or uuid.uuid4().hex[:8]
    diagnostics = store.open(document_id, body.text)
    return DocumentResponse(document_id=document_id, diagnostics=diagnostics)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> DocumentListResponse:
    """List all open documents."""
    return DocumentListResponse(
        documents=[DocumentSummaryResponse(**asdict(s)) for s in store.list_documents()]
    )


@router.put("/{document_id}", response_model=DocumentResponse)
async def change_document(
    document_id: str,
    body: DocumentChangeRequest,
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> DocumentResponse:
    """Replace the full text of an open document."""
    if document_id not in store:
        raise _not_found(document_id)
    diagnostics = store.change(document_id, body.text)
    return DocumentResponse(document_id=document_id, diagnostics=diagnostics)


@router.delete("/{document_id}", status_code=204)
async def close_document(
    document_id: str,
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> None:
    """Close a document and drop its tokens."""
    if document_id not in store:
        raise _not_found(document_id)
    store.close(document_id)


# -- analysis ----------------------------------------------------------------


@router.get("/{document_id}/tokens", response_model=TokenListResponse)
async def get_tokens(
    document_id: str,
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> TokenListResponse:
    """Return the cached token stream."""
    try:
        tokens = store.tokens(document_id)
    except DocumentNotFoundError:
        raise _not_found(document_id) from None
    return TokenListResponse(
        document_id=document_id, tokens=[_token_response(t) for t in tokens]
    )


@router.get("/{document_id}/diagnostics", response_model=DocumentResponse)
async def get_diagnostics(
    document_id: str,
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> DocumentResponse:
    """Recompute diagnostics for an open document."""
    try:
        diagnostics = store.diagnostics(document_id)
    except DocumentNotFoundError:
        raise _not_found(document_id) from None
    return DocumentResponse(document_id=document_id, diagnostics=diagnostics)


@router.get("/{document_id}/hover", response_model=HoverResponse | None)
async def get_hover(
    document_id: str,
    line: int = Query(ge=0),
    character: int = Query(ge=0),
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> HoverResponse | None:
    """Hover text for the token at ``line``/``character``, or ``null``."""
    try:
        info = store.hover(document_id, line, character)
    except DocumentNotFoundError:
        raise _not_found(document_id) from None
    if info is None:
        return None
    return HoverResponse(**asdict(info))


@router.get("/{document_id}/semantic-tokens", response_model=SemanticTokensResponse)
async def get_semantic_tokens(
    document_id: str,
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> SemanticTokensResponse:
    """Delta-encoded semantic tokens, as sent to editors."""
    try:
        data = store.semantic_tokens(document_id)
    except DocumentNotFoundError:
        raise _not_found(document_id) from None
    return SemanticTokensResponse(legend=list(TOKEN_LEGEND), data=data)
