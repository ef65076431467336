"""
SDK Errors
==========

Every error raised by the SDK derives from `PrivacyXError` and may carry
the underlying exception as `cause` (also chained as `__cause__`).
"""


class PrivacyXError(Exception):
    """Base error for the PrivacyX SDK."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class ConfigError(PrivacyXError):
    """Missing chain id, provider or contract address."""


class FormatError(PrivacyXError):
    """Malformed proof, public signals or hex argument."""


class ProviderError(PrivacyXError):
    """No usable chain transport could be resolved."""


class SignerRequiredError(PrivacyXError):
    """A write method was invoked without a signer."""


class ChainCallError(PrivacyXError):
    """A contract read or transaction failed."""


class NullifierAlreadyUsedError(ChainCallError):
    """The pass nullifier was already consumed on-chain."""


class PassNotImplementedError(PrivacyXError, NotImplementedError):
    """The pass contract is not available yet."""


__all__ = [
    "PrivacyXError",
    "ConfigError",
    "FormatError",
    "ProviderError",
    "SignerRequiredError",
    "ChainCallError",
    "NullifierAlreadyUsedError",
    "PassNotImplementedError",
]
