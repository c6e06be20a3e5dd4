"""Telegram Bot API client.

Each call builds an :class:`~tgbot.request.ApiRequest`, executes it with a
single ``requests`` round trip and unwraps the ``result`` field of the
JSON envelope. Failures are logged and returned as :data:`FAILURE`.
"""

import logging
from collections.abc import Mapping
from contextlib import ExitStack
from typing import Optional
from urllib.parse import urlsplit

import requests

from tgbot.config import TelegramConfig
from tgbot.media import LocalFile, form_value, resolve_photo
from tgbot.request import ApiRequest, is_numeric, prepare_parameters, prepare_request
from tgbot.result import FAILURE, ApiResult

logger = logging.getLogger(__name__)

LONG_POLL_TIMEOUT = 60


def _endpoint(url: str) -> str:
    return urlsplit(url).path.rsplit("/", 1)[-1]


class TelegramBot:
    """Lightweight Telegram Bot API client."""

    def __init__(self, config: TelegramConfig):
        self.config = config

    def _url(self, endpoint: str) -> str:
        return f"{self.config.api_url}/{endpoint}"

    def _split_body(self, body, stack: ExitStack):
        if not isinstance(body, Mapping):
            return body, None
        data, files = {}, {}
        for key, value in body.items():
            if isinstance(value, LocalFile):
                files[key] = (value.filename, stack.enter_context(open(value.path, "rb")))
            else:
                data[key] = value
        return data or None, files or None

    def perform(self, request: Optional[ApiRequest],
                timeout: Optional[float] = None) -> ApiResult:
        if request is None:
            logger.error("Failed to prepare API request")
            return FAILURE

        endpoint = _endpoint(request.url)
        headers = {"User-Agent": self.config.user_agent}
        if request.headers:
            headers.update(request.headers)

        try:
            with ExitStack() as stack:
                data, files = self._split_body(request.body, stack)
                r = requests.request(
                    request.method, request.url, data=data, files=files,
                    headers=headers, timeout=timeout or self.config.timeout,
                )
            r.raise_for_status()
        except requests.RequestException as e:
            logger.error("API %s error: %s", endpoint, e)
            return FAILURE
        except OSError as e:
            logger.error("API %s attachment error: %s", endpoint, e)
            return FAILURE

        try:
            envelope = r.json()
        except ValueError as e:
            logger.warning("API %s returned invalid JSON: %s", endpoint, e)
            return ApiResult(ok=True)
        if not isinstance(envelope, dict) or "result" not in envelope:
            logger.warning("API %s response has no result field", endpoint)
            return ApiResult(ok=True)
        return ApiResult(ok=True, payload=envelope["result"])

    def get_bot_info(self) -> ApiResult:
        request = prepare_request(self._url("getMe"), "GET")
        return self.perform(request)

    def send_message(self, chat_id, text: str,
                     parameters: Optional[Mapping] = None) -> ApiResult:
        parameters = prepare_parameters(parameters, {
            "chat_id": chat_id,
            "text": text,
        })
        request = prepare_request(self._url("sendMessage"), "POST", parameters)
        return self.perform(request)

    def send_location(self, chat_id, latitude, longitude,
                      parameters: Optional[Mapping] = None) -> ApiResult:
        if not is_numeric(latitude) or not is_numeric(longitude):
            logger.error("Latitude and longitude must be numbers")
            return FAILURE
        parameters = prepare_parameters(parameters, {
            "chat_id": chat_id,
            "latitude": latitude,
            "longitude": longitude,
        })
        request = prepare_request(self._url("sendLocation"), "POST", parameters)
        return self.perform(request)

    def send_photo(self, chat_id, photo_path: str, caption: str = "",
                   parameters: Optional[Mapping] = None) -> ApiResult:
        """Send a photo by URL (``http...``) or upload a local file."""
        photo = resolve_photo(photo_path)
        if photo is None:
            return FAILURE
        parameters = prepare_parameters(parameters, {
            "chat_id": chat_id,
            "caption": caption,
        })
        request = prepare_request(self._url("sendPhoto"), "POST", parameters,
                                  body={"photo": form_value(photo)})
        return self.perform(request)

    def send_chat_action(self, chat_id, action: str = "typing",
                         parameters: Optional[Mapping] = None) -> ApiResult:
        parameters = prepare_parameters(parameters, {
            "chat_id": chat_id,
            "action": action,
        })
        request = prepare_request(self._url("sendChatAction"), "POST", parameters)
        return self.perform(request)

    def get_updates(self, offset=None, limit=None, long_poll=False) -> ApiResult:
        """Fetch pending updates.

        ``long_poll`` may be ``True`` (wait up to 60 seconds) or a number of
        seconds; anything else performs a short poll.
        """
        params = {}
        if is_numeric(offset):
            params["offset"] = offset
        if is_numeric(limit) and float(limit) > 0:
            params["limit"] = limit
        if long_poll is True:
            long_poll = LONG_POLL_TIMEOUT
        timeout = None
        if is_numeric(long_poll) and float(long_poll) > 0:
            params["timeout"] = long_poll
            # Server holds the request open; don't let the client give up first.
            timeout = self.config.timeout + float(long_poll)

        request = prepare_request(self._url("getUpdates"), "GET", params)
        return self.perform(request, timeout=timeout)

    def edit_message(self, chat_id, message_id, text: str,
                     parameters: Optional[Mapping] = None) -> ApiResult:
        parameters = prepare_parameters(parameters, {
            "chat_id": chat_id,
            "message_id": message_id,
            "text": text,
        })
        request = prepare_request(self._url("editMessageText"), "POST", parameters)
        return self.perform(request)
