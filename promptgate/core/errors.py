"""Error taxonomy for provider invocation, extraction and publishing."""


class PromptGateError(RuntimeError):
    pass


class ProviderInvocationError(PromptGateError):
    """Raised when the configured backend could not be called successfully."""


class ProviderParseError(ProviderInvocationError):
    """Raised when a backend answered with a body that cannot be decoded."""


class NoResponseError(ProviderInvocationError):
    """Raised when a backend returned a valid but empty result set."""


class PublishError(PromptGateError):
    """Raised when relaying the canonical response downstream failed."""


class MissingMetadataError(PublishError):
    """Raised when correlation metadata required by the sink is absent."""


class ConfigurationError(PromptGateError):
    """Raised at startup when no backend can be selected."""
