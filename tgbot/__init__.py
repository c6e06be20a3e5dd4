"""Thin client for the Telegram Bot API."""

from .config import TelegramConfig, configure_logging
from .media import LocalFile, RemoteReference
from .request import ApiRequest, prepare_parameters, prepare_request
from .result import FAILURE, ApiResult
from .telegram import TelegramBot

__all__ = [
    "TelegramConfig",
    "configure_logging",
    "LocalFile",
    "RemoteReference",
    "ApiRequest",
    "prepare_parameters",
    "prepare_request",
    "FAILURE",
    "ApiResult",
    "TelegramBot",
]
