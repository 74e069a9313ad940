"""pygls language server exposing the crontab analysis engine to editors.

Run via::

    crontab-ls                          # reads .env (default: stdio)
    LSP_TRANSPORT=tcp crontab-ls        # TCP on 127.0.0.1:2087
    LSP_TRANSPORT=ws  crontab-ls        # WebSocket on 127.0.0.1:2087

Each open document's tokens live in the server's ``DocumentStore``.  The
server advertises full document sync, so every change notification carries
the whole text and the document is reprocessed from scratch.

The store counts characters in code points; positions are converted to the
encoding negotiated with the client (UTF-16 unless agreed otherwise) at this
boundary.
"""

from __future__ import annotations

import logging

from lsprotocol import types
from pygls.lsp.server import LanguageServer
from pygls.workspace import PositionCodec

from crontabls import __version__
from crontabls.models.errors import CronDiagnostic, Severity
from crontabls.parser.validator import DEFAULT_DIAGNOSTIC_SOURCE, CrontabValidator
from crontabls.service.document_store import DocumentStore
from crontabls.service.semantic_tokens import TOKEN_LEGEND, TOKEN_MODIFIERS
from crontabls.settings import Settings

logger = logging.getLogger("crontabls.lsp")

SERVER_NAME = "crontab-ls"

SEMANTIC_TOKENS_LEGEND = types.SemanticTokensLegend(
    token_types=list(TOKEN_LEGEND),
    token_modifiers=list(TOKEN_MODIFIERS),
)

# LSP default until the client negotiates an encoding in initialize.
_DEFAULT_CODEC = PositionCodec()

_SEVERITIES = {
    Severity.ERROR: types.DiagnosticSeverity.Error,
    Severity.WARNING: types.DiagnosticSeverity.Warning,
    Severity.INFORMATION: types.DiagnosticSeverity.Information,
    Severity.HINT: types.DiagnosticSeverity.Hint,
}


class CrontabLanguageServer(LanguageServer):
    """Language server owning one ``DocumentStore`` for its lifetime."""

    def __init__(self, diagnostic_source: str = DEFAULT_DIAGNOSTIC_SOURCE) -> None:
        super().__init__(
            SERVER_NAME,
            __version__,
            text_document_sync_kind=types.TextDocumentSyncKind.Full,
        )
        self.documents = DocumentStore(CrontabValidator(source=diagnostic_source))

    @property
    def client_codec(self) -> PositionCodec:
        """Codec for the position encoding agreed with the client."""
        try:
            return self.workspace.position_codec
        except (AttributeError, RuntimeError):
            # no workspace before initialize
            return _DEFAULT_CODEC


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def to_lsp_diagnostic(diagnostic: CronDiagnostic) -> types.Diagnostic:
    return types.Diagnostic(
        range=types.Range(
            start=types.Position(line=diagnostic.line, character=diagnostic.start_char),
            end=types.Position(line=diagnostic.line, character=diagnostic.end_char),
        ),
        message=diagnostic.message,
        severity=_SEVERITIES[diagnostic.severity],
        source=diagnostic.source,
    )


def _to_client_units(
    ls: CrontabLanguageServer, uri: str, diagnostic: CronDiagnostic
) -> CronDiagnostic:
    measure = ls.client_codec.client_num_units
    return diagnostic.model_copy(
        update={
            "start_char": ls.documents.column_to_units(
                uri, diagnostic.line, diagnostic.start_char, measure
            ),
            "end_char": ls.documents.column_to_units(
                uri, diagnostic.line, diagnostic.end_char, measure
            ),
        }
    )


def _publish(ls: CrontabLanguageServer, uri: str, diagnostics: list[CronDiagnostic]) -> None:
    ls.text_document_publish_diagnostics(
        types.PublishDiagnosticsParams(
            uri=uri,
            diagnostics=[to_lsp_diagnostic(_to_client_units(ls, uri, d)) for d in diagnostics],
        )
    )


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


def initialized(ls: CrontabLanguageServer, params: types.InitializedParams) -> None:
    logger.info("Server initialized")


def shutdown(ls: CrontabLanguageServer, params: None) -> None:
    logger.info("Server shutting down")


# ---------------------------------------------------------------------------
# Document synchronisation
# ---------------------------------------------------------------------------


def did_open(ls: CrontabLanguageServer, params: types.DidOpenTextDocumentParams) -> None:
    uri = params.text_document.uri
    logger.info("Document opened: %s", uri)
    _publish(ls, uri, ls.documents.open(uri, params.text_document.text))


def did_change(ls: CrontabLanguageServer, params: types.DidChangeTextDocumentParams) -> None:
    uri = params.text_document.uri
    logger.info("Document changed: %s", uri)
    # Full sync: the changes carry whole-document text, normally exactly one.
    text = "".join(change.text for change in params.content_changes)
    _publish(ls, uri, ls.documents.change(uri, text))


def did_close(ls: CrontabLanguageServer, params: types.DidCloseTextDocumentParams) -> None:
    uri = params.text_document.uri
    logger.info("Document closed: %s", uri)
    ls.documents.close(uri)
    _publish(ls, uri, [])


def did_save(ls: CrontabLanguageServer, params: types.DidSaveTextDocumentParams) -> None:
    logger.info("Document saved: %s", params.text_document.uri)


# ---------------------------------------------------------------------------
# Language features
# ---------------------------------------------------------------------------


def hover(ls: CrontabLanguageServer, params: types.HoverParams) -> types.Hover | None:
    info = ls.documents.hover(
        params.text_document.uri,
        params.position.line,
        params.position.character,
        measure=ls.client_codec.client_num_units,
    )
    if info is None:
        return None
    return types.Hover(
        contents=types.MarkupContent(kind=types.MarkupKind.PlainText, value=info.text),
        range=types.Range(
            start=types.Position(line=info.line, character=info.start_char),
            end=types.Position(line=info.line, character=info.end_char),
        ),
    )


def semantic_tokens_full(
    ls: CrontabLanguageServer, params: types.SemanticTokensParams
) -> types.SemanticTokens:
    data = ls.documents.semantic_tokens(
        params.text_document.uri, measure=ls.client_codec.client_num_units
    )
    return types.SemanticTokens(data=data)


# ---------------------------------------------------------------------------
# Server factory + entry point
# ---------------------------------------------------------------------------


def create_server(settings: Settings | None = None) -> CrontabLanguageServer:
    """Create a server with all features registered."""
    if settings is None:
        settings = Settings()

    server = CrontabLanguageServer(diagnostic_source=settings.diagnostic_source)

    server.feature(types.INITIALIZED)(initialized)
    server.feature(types.SHUTDOWN)(shutdown)
    server.feature(types.TEXT_DOCUMENT_DID_OPEN)(did_open)
    server.feature(types.TEXT_DOCUMENT_DID_CHANGE)(did_change)
    server.feature(types.TEXT_DOCUMENT_DID_CLOSE)(did_close)
    server.feature(types.TEXT_DOCUMENT_DID_SAVE)(did_save)
    server.feature(types.TEXT_DOCUMENT_HOVER)(hover)
    server.feature(types.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, SEMANTIC_TOKENS_LEGEND)(
        semantic_tokens_full
    )
    return server


def main() -> None:
    """Run the language server using settings from environment / .env file."""
    settings = Settings()

    # basicConfig logs to stderr, keeping stdout free for the stdio transport.
    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "Crontab Language Server v%s starting (transport=%s)",
        __version__,
        settings.lsp_transport,
    )

    server = create_server(settings)
    if settings.lsp_transport == "stdio":
        server.start_io()
    elif settings.lsp_transport == "tcp":
        server.start_tcp(settings.lsp_server_host, settings.lsp_server_port)
    else:
        server.start_ws(settings.lsp_server_host, settings.lsp_server_port)
    logger.info("Server exited")


if __name__ == "__main__":
    main()
