# braketime/core/notifications.py
"""
Toast and confirmation notifications.

The admin services receive a sink at construction time and call it as a
fire-and-forget side effect. Destructive actions are only ever run from a
confirmation's `on_confirm` callback, which the owner of the sink decides
whether to invoke.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, Protocol

from pydantic import BaseModel

from braketime.config.settings import settings

logger = logging.getLogger(__name__)


class ToastSeverity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class Toast(BaseModel):
    message: str
    severity: ToastSeverity = ToastSeverity.INFO
    duration_ms: int = 3000


class ConfirmationPrompt(BaseModel):
    """Serializable part of a confirmation request"""
    title: str
    message: str
    confirm_text: str = "Confirm"
    cancel_text: str = "Cancel"
    is_dangerous: bool = False


@dataclass
class ConfirmOptions:
    title: str
    message: str
    on_confirm: Callable[[], Awaitable[Any]]
    confirm_text: str = "Confirm"
    cancel_text: str = "Cancel"
    is_dangerous: bool = False

    def prompt(self) -> ConfirmationPrompt:
        return ConfirmationPrompt(
            title=self.title,
            message=self.message,
            confirm_text=self.confirm_text,
            cancel_text=self.cancel_text,
            is_dangerous=self.is_dangerous
        )


class NotificationSink(Protocol):
    def show_toast(
        self,
        message: str,
        severity: ToastSeverity = ToastSeverity.INFO,
        duration_ms: Optional[int] = None
    ) -> None:
        ...

    def show_confirm(self, options: ConfirmOptions) -> None:
        ...


class RequestNotificationSink:
    """
    Sink bound to one HTTP request.

    Toasts are collected for the response body. A confirmation is accepted
    only when the request was sent with `confirmed=True`; otherwise the
    prompt is kept so the client can ask the user and retry.
    """

    def __init__(self, confirmed: bool = False):
        self.confirmed = confirmed
        self.toasts: List[Toast] = []
        self.pending_confirmation: Optional[ConfirmationPrompt] = None
        self._on_confirm: Optional[Callable[[], Awaitable[Any]]] = None

    def show_toast(
        self,
        message: str,
        severity: ToastSeverity = ToastSeverity.INFO,
        duration_ms: Optional[int] = None
    ) -> None:
        toast = Toast(
            message=message,
            severity=severity,
            duration_ms=duration_ms or settings.toast_duration_ms
        )
        self.toasts.append(toast)
        logger.debug(f"Toast [{toast.severity.value}] {toast.message}")

    def show_confirm(self, options: ConfirmOptions) -> None:
        if self.confirmed:
            self._on_confirm = options.on_confirm
        else:
            self.pending_confirmation = options.prompt()

    async def settle(self) -> Optional[Any]:
        """
        Run the accepted confirmation, if any. Returns its result, or None
        when nothing was confirmed.
        """
        if self._on_confirm is None:
            return None
        on_confirm, self._on_confirm = self._on_confirm, None
        return await on_confirm()

    @property
    def last_message(self) -> str:
        return self.toasts[-1].message if self.toasts else ""

    def last_message_for(self, severity: ToastSeverity) -> str:
        """Latest toast of `severity`, falling back to the latest toast overall"""
        for toast in reversed(self.toasts):
            if toast.severity == severity:
                return toast.message
        return self.last_message
