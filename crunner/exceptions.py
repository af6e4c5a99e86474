"""Exception hierarchy for crunner."""

from __future__ import annotations

from typing import Any, Dict, Optional


class CrunnerError(Exception):
    """Base exception for every failure surfaced by the CLI."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(CrunnerError):
    """Raised for conflicting or missing options, detected before any RPC call."""


class ValidationError(CrunnerError):
    """Raised when an address is malformed or the target is not a contract."""

    def __init__(self, message: str, address: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)
        self.address = address


class EncodingError(CrunnerError):
    """Raised when a parameter cannot be converted to its inferred on-chain type."""

    def __init__(
        self,
        message: str,
        param: Optional[str] = None,
        param_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.param = param
        self.param_type = param_type


class TransportError(CrunnerError):
    """Raised when a JSON-RPC round-trip fails."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        endpoint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.operation = operation
        self.endpoint = endpoint


class ContractError(CrunnerError):
    """Raised when a contract method reverts, is unknown, or returns undecodable data."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        method: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.operation = operation
        self.method = method


class ConversionError(CrunnerError):
    """Raised when a chain integer cannot be scaled for display."""


__all__ = [
    "ConfigurationError",
    "ContractError",
    "ConversionError",
    "CrunnerError",
    "EncodingError",
    "TransportError",
    "ValidationError",
]
