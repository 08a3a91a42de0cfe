from __future__ import annotations


class PromptlintError(RuntimeError):
    pass


class ConfigurationError(PromptlintError):
    pass


class RulesError(PromptlintError):
    pass


class TransportError(PromptlintError):
    def __init__(self, message: str, *, status: int | None = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class ResponseFormatError(PromptlintError):
    def __init__(self, message: str, *, raw: str = ""):
        super().__init__(message)
        self.raw = raw
