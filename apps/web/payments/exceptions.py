"""Payment provider exceptions."""

from apps.web.core.exceptions import FoodtruckError


class ProviderError(FoodtruckError):
    """A payment provider call failed. The provider's message is passed through."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.provider_status_code = status_code


class MissingSourceError(ProviderError):
    """The provider needs a tokenized payment source that was not supplied."""

    status_code = 400


class UnsupportedOperationError(ProviderError):
    """The configured provider does not offer this operation."""

    status_code = 400
