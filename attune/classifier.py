"""HTTP client for the external focus-classification service."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Optional, Sequence

from attune.models import AppConfig, Verdict
from attune.ports import ClassifierError


class HttpFocusClassifier:
    """POST a signal window to ``url`` and read back a focused/unfocused verdict.

    The service answers with ``{"success": true, "result": "focused"}``.
    A false ``success``, an unknown result, or any transport error raises
    :class:`ClassifierError`. Without a URL every call raises, which lets
    the timer fall back to its random verdict.
    """

    def __init__(self, url: Optional[str] = None, timeout: float = 10.0) -> None:
        self.url = url
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: AppConfig) -> HttpFocusClassifier:
        return cls(url=config.classifier_url, timeout=config.classifier_timeout)

    def classify_focus(self, sample: Sequence[Sequence[float]]) -> Verdict:
        if not self.url:
            raise ClassifierError("No focus classifier configured.")

        body = json.dumps({"eeg": [list(channel) for channel in sample]}).encode("utf-8")
        req = urllib.request.Request(
            self.url,
            data=body,
            headers={"Content-Type": "application/json", "User-Agent": "Attune/0.1"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                payload = json.loads(resp.read().decode("utf-8"))
        except (urllib.error.URLError, TimeoutError, OSError, ValueError) as exc:
            raise ClassifierError(f"Focus classifier request failed: {exc}") from exc

        if not isinstance(payload, dict) or not payload.get("success"):
            raise ClassifierError("Focus classifier rejected the sample.")
        try:
            return Verdict(payload.get("result"))
        except ValueError as exc:
            raise ClassifierError(f"Unexpected classifier result: {payload.get('result')!r}") from exc
