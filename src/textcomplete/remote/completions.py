"""Send one prompt to an OpenAI-compatible completions endpoint and print the top completion.

Usage:
    textcomplete "Write a haiku about tides"
"""
from __future__ import annotations
import argparse
import logging
import sys
import time
from typing import NoReturn

import httpx
from pydantic import ValidationError

from textcomplete.common.config import Settings, load_settings
from textcomplete.common.errors import (
    CompletionError,
    EmptyCompletionError,
    MalformedResponseError,
    TransportError,
    UpstreamError,
)
from textcomplete.common.logging_setup import setup_logging
from textcomplete.common.schema import CompletionRequest, CompletionResponse, CompletionResult

LOGGER = logging.getLogger("textcomplete.remote.completions")

NO_QUERY_MESSAGE = "No query was provided."


def build_request(query: str, settings: Settings) -> CompletionRequest:
    return CompletionRequest(model=settings.model, prompt=query, max_tokens=settings.max_tokens)


def encode_request(request: CompletionRequest) -> bytes:
    try:
        return request.model_dump_json().encode("utf-8")
    except (ValueError, UnicodeError) as e:
        raise CompletionError(f"Failed to serialize request: {e}") from e


def decode_response(body: bytes) -> CompletionResponse:
    try:
        return CompletionResponse.model_validate_json(body)
    except ValidationError as e:
        raise MalformedResponseError(f"Malformed completion response: {e}") from e


def first_completion(response: CompletionResponse) -> str:
    if not response.choices:
        raise EmptyCompletionError()
    return response.choices[0].text


def _error_detail(response: httpx.Response) -> str:
    """Pull ``error.message`` out of an OpenAI error body, else the raw text."""
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return response.text.strip() or response.reason_phrase


def request_completion(query: str, settings: Settings) -> CompletionResult:
    """
    Request a completion for ``query``.

    Args:
        query: Prompt text, sent as-is.
        settings: Endpoint, credential, model and limits.

    Returns:
        The first candidate's text with latency and token usage.

    Raises:
        CompletionError: Any configuration, transport, HTTP or payload failure.
    """
    api_key = settings.require_api_key()
    body = encode_request(build_request(query, settings))
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }

    start = time.time()
    try:
        with httpx.Client(timeout=settings.timeout) as client:
            r = client.post(settings.completions_url, headers=headers, content=body)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise TransportError(f"Request to {settings.completions_url} failed: {e}") from e
    latency_ms = int((time.time() - start) * 1000)
    LOGGER.debug("POST %s -> HTTP %s in %sms", settings.completions_url, r.status_code, latency_ms)

    if not r.is_success:
        detail = _error_detail(r)
        raise UpstreamError(f"API error (HTTP {r.status_code}): {detail}", status_code=r.status_code)

    data = decode_response(r.content)
    text = first_completion(data)
    usage = data.usage
    return CompletionResult(
        text=text,
        latency_ms=latency_ms,
        prompt_tokens=usage.prompt_tokens if usage else None,
        completion_tokens=usage.completion_tokens if usage else None,
    )


class _ArgumentParser(argparse.ArgumentParser):
    """Usage errors exit 1 like every other failure."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _take_query(rest: list[str]) -> str | None:
    """First argument not consumed as an option is the query; the rest are ignored."""
    if rest and rest[0] == "--":
        rest = rest[1:]
    return rest[0] if rest else None


def main(argv: list[str] | None = None) -> int:
    ap = _ArgumentParser(
        description="Send a prompt to the completions API and print the result",
        usage="%(prog)s [-h] [--cfg CFG] [-v] query",
        epilog="Only the first query word is sent; quote prompts that contain spaces.",
        allow_abbrev=False,
    )
    ap.add_argument("--cfg", default=None, help="YAML config path")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log request details, latency and token usage")
    try:
        args, rest = ap.parse_known_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    query = _take_query(rest)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if query is None:
        print(NO_QUERY_MESSAGE, file=sys.stderr)
        return 1

    try:
        settings = load_settings(args.cfg)
        resp = request_completion(query, settings)
    except CompletionError as e:
        LOGGER.debug("Completion failed", exc_info=True)
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    LOGGER.info("Latency: %sms | in=%s out=%s", resp.latency_ms, resp.prompt_tokens, resp.completion_tokens)
    print(resp.text)
    return 0

if __name__ == "__main__":
    sys.exit(main())
