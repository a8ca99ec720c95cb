"""
D.E.F.E.N.D Contact Submission Controller
Drives an inquiry through validate -> submit -> report.

Lifecycle:
    IDLE -> PENDING -> SUCCEEDED -> IDLE   (form reset)
                    -> FAILED    -> IDLE   (on the next submit, values kept)

At most one submission is pending per controller; submit() calls made while
one is pending are ignored.
"""
import asyncio
from typing import Any, Callable, Optional

import structlog

from backend.core.config import settings
from frontend.contact.form import InquiryForm
from frontend.contact.models import (
    Inquiry,
    Notification,
    NotificationKind,
    SubmissionState,
    SubmitResult,
    SubmitStatus,
)
from frontend.contact.notifications import BaseNotifier
from frontend.contact.transport import BaseTransport, TransportError
from frontend.contact.validation import validate_inquiry

SUCCESS_TITLE = "Message Sent"
SUCCESS_DESCRIPTION = "Thank you for your inquiry. Our team will respond within 24-48 hours."
ERROR_TITLE = "Error"
ERROR_DESCRIPTION = "Failed to send message. Please try again."

# Allowed transitions of the submission state machine
TRANSITIONS: dict[SubmissionState, frozenset[SubmissionState]] = {
    SubmissionState.IDLE: frozenset({SubmissionState.PENDING}),
    SubmissionState.PENDING: frozenset({SubmissionState.SUCCEEDED, SubmissionState.FAILED}),
    SubmissionState.SUCCEEDED: frozenset({SubmissionState.IDLE}),
    SubmissionState.FAILED: frozenset({SubmissionState.IDLE}),
}

StateListener = Callable[[SubmissionState, SubmissionState], None]


class InvalidTransitionError(RuntimeError):
    """Raised when the controller is asked to make a transition the lifecycle forbids."""

    def __init__(self, current: SubmissionState, target: SubmissionState):
        super().__init__(f"Cannot transition from {current.value} to {target.value}")
        self.current = current
        self.target = target


class SubmissionController:
    """
    Owns the submission lifecycle of one contact form.

    The controller validates, issues exactly one transport call per valid
    attempt, emits exactly one notification per completed call and resets
    the form only after success.
    """

    def __init__(
        self,
        transport: BaseTransport,
        notifier: BaseNotifier,
        form: Optional[InquiryForm] = None,
        resource: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.transport = transport
        self.notifier = notifier
        self.form = form or InquiryForm()
        self.resource = resource or settings.contact_resource
        self.timeout = timeout if timeout is not None else settings.contact_submit_timeout
        self._state = SubmissionState.IDLE
        self._listeners: list[StateListener] = []
        self.logger = structlog.get_logger().bind(component="submission_controller", resource=self.resource)

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def is_pending(self) -> bool:
        """True while a request is in flight; views disable the submit button."""
        return self._state == SubmissionState.PENDING

    def add_listener(self, listener: StateListener) -> None:
        """Register a callback invoked as listener(previous, current) on every transition."""
        self._listeners.append(listener)

    def _transition(self, target: SubmissionState) -> None:
        if target not in TRANSITIONS[self._state]:
            raise InvalidTransitionError(self._state, target)
        previous, self._state = self._state, target
        self.logger.debug("submission_state_changed", previous=previous.value, current=target.value)
        for listener in self._listeners:
            try:
                listener(previous, target)
            except Exception as e:
                # View callbacks never block a transition
                self.logger.exception("state_listener_failed", current=target.value, error=str(e))

    def _notify(self, kind: NotificationKind, title: str, description: str) -> Optional[Notification]:
        try:
            return self.notifier.notify(kind, title, description)
        except Exception as e:
            self.logger.exception("notification_failed", kind=kind.value, error=str(e))
            return None

    async def submit(self, inquiry: Optional[Inquiry] = None) -> SubmitResult:
        """
        Submit an inquiry, or the form's current values when none is given.

        Never raises for validation, transport or view-callback problems: the
        outcome is reported through the returned SubmitResult, the form errors
        and the notifier. Cancelling the awaiting task leaves the controller
        FAILED, ready for the next submit.
        """
        if self.is_pending:
            self.logger.info("submission_ignored_while_pending")
            return SubmitResult(status=SubmitStatus.IGNORED)

        if self._state in (SubmissionState.SUCCEEDED, SubmissionState.FAILED):
            self._transition(SubmissionState.IDLE)

        if inquiry is None:
            inquiry = self.form.snapshot()

        result = validate_inquiry(inquiry)
        self.form.set_errors(result.field_errors)
        if not result.is_valid:
            self.logger.info("submission_invalid", fields=sorted(result.field_errors))
            return SubmitResult(status=SubmitStatus.INVALID, field_errors=result.field_errors)

        self._transition(SubmissionState.PENDING)
        try:
            try:
                response = await self._send(inquiry)
            except TransportError as e:
                return self._fail(e.message)
            except asyncio.TimeoutError:
                return self._fail(f"No response within {self.timeout} seconds")
            except Exception as e:
                # Keep the form usable whatever the transport does
                self.logger.exception("submission_transport_crashed", error=str(e))
                return self._fail(str(e))

            return self._succeed(response)
        finally:
            if self._state == SubmissionState.PENDING:
                self.logger.warning("submission_abandoned")
                self._transition(SubmissionState.FAILED)

    async def _send(self, inquiry: Inquiry) -> Any:
        self.logger.info("submission_started")
        call = self.transport.create(self.resource, inquiry.to_payload())
        if self.timeout:
            return await asyncio.wait_for(call, timeout=self.timeout)
        return await call

    def _succeed(self, response: Any) -> SubmitResult:
        self._transition(SubmissionState.SUCCEEDED)
        try:
            notification = self._notify(NotificationKind.SUCCESS, SUCCESS_TITLE, SUCCESS_DESCRIPTION)
        finally:
            self.form.reset()
            self._transition(SubmissionState.IDLE)
        self.logger.info("submission_succeeded")
        return SubmitResult(status=SubmitStatus.SUCCEEDED, notification=notification, response=response)

    def _fail(self, error_message: str) -> SubmitResult:
        self._transition(SubmissionState.FAILED)
        notification = self._notify(NotificationKind.ERROR, ERROR_TITLE, ERROR_DESCRIPTION)
        self.logger.warning("submission_failed", error=error_message)
        return SubmitResult(
            status=SubmitStatus.FAILED,
            notification=notification,
            error_message=error_message,
        )
