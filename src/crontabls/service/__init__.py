"""Document store and editor-facing services shared by the LSP and REST transports."""
