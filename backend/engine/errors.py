class EngineError(Exception):
    """Base error for the exposure engine and its collaborators."""


class ContractViolation(EngineError):
    """A record broke a persistence contract (e.g. no profile_id)."""


class RecordNotFound(EngineError):
    pass


class ProviderError(EngineError):
    """An external collaborator failed or returned something unusable."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")
