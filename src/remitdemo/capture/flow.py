"""Face-capture and verification flow.

A linear wizard:

    welcome -> select -> consent -> capture -> snapshot_confirm
            -> align_confirm -> processing -> result

`next_step` moves forward and `back_step` moves backward. The login status
(idle/opening/capturing/verifying/success/failed) is tracked separately
from the step. Network failures never stop the flow: they land on the
result step with a failed status and a message. There is no retry.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from remitdemo.capture.camera import CameraSession, CameraUnavailableError
from remitdemo.capture.images import strip_data_url, to_data_url
from remitdemo.capture.login import LoginSession
from remitdemo.identity.base import IdentityRequestError
from remitdemo.identity.client import IdentityClient

logger = logging.getLogger(__name__)


class CaptureStep(str, Enum):
    WELCOME = "welcome"
    SELECT = "select"
    CONSENT = "consent"
    CAPTURE = "capture"
    SNAPSHOT_CONFIRM = "snapshot_confirm"
    ALIGN_CONFIRM = "align_confirm"
    PROCESSING = "processing"
    RESULT = "result"


class LoginStatus(str, Enum):
    IDLE = "idle"
    OPENING = "opening"
    CAPTURING = "capturing"
    VERIFYING = "verifying"
    SUCCESS = "success"
    FAILED = "failed"


class CaptureMode(str, Enum):
    VERIFY = "verify"
    REGISTER = "register"


BACKWARD: dict[CaptureStep, CaptureStep] = {
    CaptureStep.SELECT: CaptureStep.WELCOME,
    CaptureStep.CONSENT: CaptureStep.SELECT,
    CaptureStep.CAPTURE: CaptureStep.CONSENT,
    CaptureStep.SNAPSHOT_CONFIRM: CaptureStep.CAPTURE,
    CaptureStep.ALIGN_CONFIRM: CaptureStep.SNAPSHOT_CONFIRM,
    CaptureStep.RESULT: CaptureStep.SELECT,
}

CAMERA_ERROR = "Could not access the camera. Please grant permission or try another device."
NO_IMAGE_ERROR = "No image captured. Please start the camera or upload a photo."
ALREADY_REGISTERED_ERROR = "You are already registered to the service. You can switch to verification."


@dataclass
class FlowResult:
    """Outcome shown on the result step."""

    success: bool
    identity_id: Optional[str] = None
    face: Optional[str] = None
    score: Optional[float] = None
    already_registered: bool = False


class FaceCaptureFlow:
    """Drives face registration or verification against the identity endpoints."""

    def __init__(
        self,
        client: IdentityClient,
        camera: CameraSession,
        login: Optional[LoginSession] = None,
        mode: CaptureMode = CaptureMode.VERIFY,
    ):
        self.client = client
        self.camera = camera
        self.login = login
        self.mode = mode

        self.step = CaptureStep.WELCOME
        self.status = LoginStatus.IDLE
        self.consent_given = False
        self.snapshot: Optional[str] = None
        self.aligned: Optional[str] = None
        self.identity_id: Optional[str] = None
        self.result: Optional[FlowResult] = None
        self.error: Optional[str] = None
        self.exited = False

    def _go(self, step: CaptureStep) -> None:
        if step is not self.step:
            logger.info(f"Capture flow {self.step.value} -> {step.value} ({self.mode.value})")
        self.step = step

    def _fail(self, error: IdentityRequestError) -> None:
        already_registered = error.status_code == 409 and self.mode is CaptureMode.REGISTER
        self.error = ALREADY_REGISTERED_ERROR if already_registered else str(error)
        self.status = LoginStatus.FAILED
        self.result = FlowResult(success=False, already_registered=already_registered)
        logger.warning(f"Capture flow failed at {self.step.value}: {error} (status={error.status_code})")
        self._go(CaptureStep.RESULT)

    def clear_error(self) -> None:
        self.error = None

    def select_mode(self, mode: CaptureMode) -> None:
        """Choose verify or register; allowed before the snapshot is submitted."""
        if self.step in (CaptureStep.ALIGN_CONFIRM, CaptureStep.PROCESSING):
            return
        self.mode = mode
        self.clear_error()

    def start_camera(self) -> bool:
        """Acquire the camera; on failure record a user-visible error."""
        self.status = LoginStatus.OPENING
        try:
            self.camera.acquire()
        except CameraUnavailableError as e:
            logger.warning(f"Camera unavailable: {e}")
            self.status = LoginStatus.FAILED
            self.error = CAMERA_ERROR
            return False
        self.status = LoginStatus.CAPTURING
        return True

    def upload(self, data_url: str) -> None:
        """Use an uploaded image instead of a camera frame."""
        self.snapshot = data_url

    async def next_step(self) -> None:
        """Advance the flow by one step."""
        self.clear_error()

        if self.step is CaptureStep.WELCOME:
            self._go(CaptureStep.SELECT)
        elif self.step is CaptureStep.SELECT:
            self._go(CaptureStep.CONSENT)
        elif self.step is CaptureStep.CONSENT:
            self.consent_given = True
            self._go(CaptureStep.CAPTURE)
            self.start_camera()
        elif self.step is CaptureStep.CAPTURE:
            self._take_snapshot()
        elif self.step is CaptureStep.SNAPSHOT_CONFIRM:
            await self._align()
        elif self.step is CaptureStep.ALIGN_CONFIRM:
            await self._submit()
        elif self.step is CaptureStep.RESULT:
            self.exited = True
            self.close()

    def back_step(self) -> None:
        """Go back one step. Processing and welcome have no previous step."""
        self.clear_error()

        previous = BACKWARD.get(self.step)
        if previous is None:
            return

        if self.step is CaptureStep.SNAPSHOT_CONFIRM:
            self.snapshot = None
            self.aligned = None
        elif self.step is CaptureStep.RESULT:
            self._reset()

        self._go(previous)

    def restart(self) -> None:
        """Clear all captured data and return to mode selection."""
        self._reset()
        self._go(CaptureStep.SELECT)

    async def verify_now(self) -> None:
        """Retry an already-registered face as a verification."""
        if not self.snapshot:
            return
        self.mode = CaptureMode.VERIFY
        self.result = None
        self.status = LoginStatus.IDLE
        self._go(CaptureStep.SNAPSHOT_CONFIRM)
        await self.next_step()
        await self.next_step()

    def close(self) -> None:
        """Release the camera."""
        self.camera.release()

    def _reset(self) -> None:
        self.error = None
        self.snapshot = None
        self.aligned = None
        self.identity_id = None
        self.result = None
        self.status = LoginStatus.IDLE

    def _take_snapshot(self) -> None:
        image = self.camera.capture() or self.snapshot
        if not image:
            self.error = NO_IMAGE_ERROR
            return
        self.snapshot = image
        self._go(CaptureStep.SNAPSHOT_CONFIRM)

    async def _align(self) -> None:
        if self.mode is CaptureMode.VERIFY:
            self.aligned = self.snapshot
            self._go(CaptureStep.ALIGN_CONFIRM)
            return

        self.status = LoginStatus.VERIFYING
        raw = strip_data_url(self.snapshot)
        try:
            if not raw:
                raise IdentityRequestError("Registration failed")
            created = await self.client.create(raw)
        except IdentityRequestError as e:
            self._fail(e)
            return

        self.identity_id = created.id
        self.aligned = to_data_url(created.image) if created.image else self.snapshot
        self.status = LoginStatus.IDLE
        self._go(CaptureStep.ALIGN_CONFIRM)

    async def _submit(self) -> None:
        self._go(CaptureStep.PROCESSING)
        self.status = LoginStatus.VERIFYING
        raw = strip_data_url(self.aligned)

        try:
            if self.mode is CaptureMode.REGISTER:
                if not self.identity_id or not raw:
                    raise IdentityRequestError("Registration confirmation failed")
                outcome = await self.client.confirm(self.identity_id, raw)
            else:
                if not raw:
                    raise IdentityRequestError("Verification failed")
                outcome = await self.client.check(raw)
        except IdentityRequestError as e:
            self._fail(e)
            return

        self.identity_id = outcome.id or self.identity_id
        if self.identity_id and self.login is not None:
            self.login.mark_verified(self.identity_id)

        self.result = FlowResult(
            success=True,
            identity_id=self.identity_id,
            face=self.aligned if self.mode is CaptureMode.REGISTER else None,
            score=outcome.score,
        )
        self.status = LoginStatus.SUCCESS
        self._go(CaptureStep.RESULT)
