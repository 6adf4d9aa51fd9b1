#!/usr/bin/env python3
"""Transactional email delivery through the EmailJS REST API."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional

import requests

logger = logging.getLogger("studio.mailer")

EMAILJS_SEND_URL = os.getenv("EMAILJS_SEND_URL", "https://api.emailjs.com/api/v1.0/email/send")
EMAILJS_SERVICE_ID = os.getenv("EMAILJS_SERVICE_ID", "service_mi088d6")
EMAILJS_TEMPLATE_ID = os.getenv("EMAILJS_TEMPLATE_ID", "template_gxgyu7c")
EMAILJS_PUBLIC_KEY = os.getenv("EMAILJS_PUBLIC_KEY", "")
EMAILJS_PRIVATE_KEY = os.getenv("EMAILJS_PRIVATE_KEY", "")
EMAILJS_TIMEOUT = float(os.getenv("EMAILJS_TIMEOUT", "10"))


class MailerError(RuntimeError):
    """Delivery failed; the message carries operator-facing detail."""


class EmailJSSender:
    def __init__(
        self,
        service_id: str = EMAILJS_SERVICE_ID,
        template_id: str = EMAILJS_TEMPLATE_ID,
        public_key: str = EMAILJS_PUBLIC_KEY,
        *,
        private_key: str = EMAILJS_PRIVATE_KEY,
        url: str = EMAILJS_SEND_URL,
        timeout: float = EMAILJS_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.service_id = service_id
        self.template_id = template_id
        self.public_key = public_key
        self.private_key = private_key
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def build_payload(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "service_id": self.service_id,
            "template_id": self.template_id,
            "user_id": self.public_key,
            "template_params": dict(params),
        }
        if self.private_key:
            payload["accessToken"] = self.private_key
        return payload

    def send(self, params: Mapping[str, Any]) -> None:
        if not self.public_key:
            raise MailerError("EmailJS public key is not configured")
        try:
            resp = self._session.post(self.url, json=self.build_payload(params), timeout=self.timeout)
        except requests.RequestException as exc:
            raise MailerError(f"EmailJS request failed: {exc}") from exc
        if resp.status_code != 200:
            raise MailerError(f"EmailJS returned {resp.status_code}: {resp.text.strip()}")
        logger.info({"evt": "mail_sent", "service": self.service_id, "template": self.template_id})


__all__ = ["EmailJSSender", "MailerError", "EMAILJS_SEND_URL"]
