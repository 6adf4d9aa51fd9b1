#!/usr/bin/env python3
"""Contact form validation and delivery.

State flow for one submit::

    IDLE -> VALIDATING -> INVALID
                       -> SENDING -> SENT | SEND_FAILED

Every submit starts a fresh validation; failed sends are never retried.
"""

from __future__ import annotations

import enum
import logging
import re
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional, Protocol

from core.core import CommandHandler
from modules.base import BaseModule
from modules.dom import Element

logger = logging.getLogger("studio.contact")

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]{2,}")

MSG_MISSING_FIELDS = "Please fill all fields."
MSG_INVALID_EMAIL = "Invalid email address."
MSG_SENT = "Message sent successfully!"
MSG_SEND_FAILED = "Failed to send. Please try again later."

FIELDS = ("name", "email", "message")

_SEND_EXECUTOR = ThreadPoolExecutor(max_workers=2, thread_name_prefix="contact_send")


class Sender(Protocol):
    def send(self, params: Mapping[str, Any]) -> None: ...


class FormState(enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    INVALID = "invalid"
    SENDING = "sending"
    SENT = "sent"
    SEND_FAILED = "send_failed"


@dataclass(frozen=True)
class ContactSubmission:
    name: str
    email: str
    message: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ContactSubmission":
        return cls(*(str(data.get(key) or "").strip() for key in FIELDS))

    def as_params(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class FormStatus:
    text: str
    kind: str


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email or "") is not None


def validate_submission(submission: ContactSubmission) -> Optional[str]:
    """Return the user-facing error, or None when the submission can be sent."""
    if not (submission.name and submission.email and submission.message):
        return MSG_MISSING_FIELDS
    if not is_valid_email(submission.email):
        return MSG_INVALID_EMAIL
    return None


class ContactForm(BaseModule):
    name = "contact"

    def __init__(
        self,
        sender: Sender,
        status_element: Optional[Element] = None,
        *,
        executor: Optional[Executor] = None,
    ) -> None:
        super().__init__()
        self.sender = sender
        self.status_element = status_element or Element(tag="p", id="formStatus")
        self._executor = executor or _SEND_EXECUTOR
        self._lock = threading.Lock()
        self.fields: Dict[str, str] = {key: "" for key in FIELDS}
        self.state = FormState.IDLE
        self.status: Optional[FormStatus] = None

    def build_command_map(self) -> Dict[str, CommandHandler]:
        return {"contact_submit": self.submit}

    def fill(self, **values: str) -> None:
        unknown = [key for key in values if key not in FIELDS]
        if unknown:
            raise KeyError(f"Unknown contact field '{unknown[0]}'")
        with self._lock:
            self.fields.update(values)

    def reset(self) -> None:
        # Runs on the send thread while the page may still be filling fields.
        with self._lock:
            self.fields = {key: "" for key in FIELDS}

    def set_status(self, text: str, kind: str) -> None:
        self.status = FormStatus(text, kind)
        self.status_element.text = text
        self.status_element.classes = {"form-status", kind}
        self.publish("form_status", {"text": text, "kind": kind, "state": self.state.value})

    def _transition(self, state: FormState) -> None:
        with self._lock:
            self.state = state

    def submit(self, payload: Optional[dict] = None) -> Optional[Future]:
        """Validate and hand off to the sender; returns the send future, if any."""
        if payload:
            self.fill(**{key: payload[key] for key in FIELDS if key in payload})
        self._transition(FormState.VALIDATING)
        with self._lock:
            submission = ContactSubmission.from_mapping(self.fields)
        error = validate_submission(submission)
        if error is not None:
            self._transition(FormState.INVALID)
            self.set_status(error, "error")
            return None
        self._transition(FormState.SENDING)
        return self._executor.submit(self._deliver, submission)

    def _deliver(self, submission: ContactSubmission) -> FormState:
        try:
            self.sender.send(submission.as_params())
        except Exception as exc:
            self._transition(FormState.SEND_FAILED)
            self.set_status(MSG_SEND_FAILED, "error")
            logger.error({"evt": "contact_send_failed", "error": str(exc)})
            return self.state
        self._transition(FormState.SENT)
        self.set_status(MSG_SENT, "success")
        self.reset()
        return self.state


__all__ = [
    "ContactForm",
    "ContactSubmission",
    "FormState",
    "FormStatus",
    "is_valid_email",
    "validate_submission",
    "MSG_MISSING_FIELDS",
    "MSG_INVALID_EMAIL",
    "MSG_SENT",
    "MSG_SEND_FAILED",
]
