"""Tests for the face-capture flow state machine."""

import json

import httpx
import pytest

from conftest import SNAPSHOT, StaticImageCamera
from remitdemo.capture.camera import CameraSession, CameraUnavailableError
from remitdemo.capture.flow import (
    ALREADY_REGISTERED_ERROR,
    CAMERA_ERROR,
    NO_IMAGE_ERROR,
    CaptureMode,
    CaptureStep,
    LoginStatus,
)
from remitdemo.capture.images import encode_image, strip_data_url, to_data_url
from remitdemo.capture.login import LoginSession


def identity_api(calls: list, create_status: int = 200, check_status: int = 200, confirm_status: int = 200):
    """Fake /api/moldova/identity endpoints recording each call."""

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        calls.append((request.method, request.url.path, body))

        if request.method == "POST" and request.url.path.endswith("/identity"):
            if create_status != 200:
                return httpx.Response(create_status, json={})
            return httpx.Response(200, json={"id": body["id"], "image": "YWxpZ25lZA=="})
        if request.method == "POST" and request.url.path.endswith("/identity/check"):
            if check_status != 200:
                return httpx.Response(check_status, json={"error": "no match"})
            return httpx.Response(200, json={"matches": [{"id": "user-7", "score": 0.98}]})
        if request.method == "PUT":
            if confirm_status != 200:
                return httpx.Response(confirm_status, json={})
            return httpx.Response(200, json={"status": "registered"})
        if request.method == "DELETE":
            return httpx.Response(200, json={"deleted": True})
        return httpx.Response(404, json={})

    return handler


async def advance_to_capture(flow):
    await flow.next_step()  # welcome -> select
    await flow.next_step()  # select -> consent
    await flow.next_step()  # consent -> capture


class TestForwardNavigation:
    """Tests for the happy paths."""

    @pytest.mark.asyncio
    async def test_verify_flow(self, make_flow, session_store):
        calls = []
        flow = make_flow(identity_api(calls))

        await advance_to_capture(flow)
        assert flow.step is CaptureStep.CAPTURE
        assert flow.consent_given is True
        assert flow.status is LoginStatus.CAPTURING
        assert flow.camera.active is True

        await flow.next_step()
        assert flow.step is CaptureStep.SNAPSHOT_CONFIRM
        assert flow.snapshot == SNAPSHOT

        await flow.next_step()
        assert flow.step is CaptureStep.ALIGN_CONFIRM
        assert flow.aligned == SNAPSHOT
        assert calls == []

        await flow.next_step()
        assert flow.step is CaptureStep.RESULT
        assert flow.status is LoginStatus.SUCCESS
        assert flow.result.success is True
        assert flow.result.identity_id == "user-7"
        assert flow.result.score == pytest.approx(0.98)
        assert calls == [("POST", "/api/moldova/identity/check", {"image": "c25hcHNob3Q="})]

        login = LoginSession(session_store)
        assert login.is_logged_in is True
        assert login.user_id == "user-7"

    @pytest.mark.asyncio
    async def test_register_flow(self, make_flow, session_store):
        calls = []
        flow = make_flow(identity_api(calls))
        flow.select_mode(CaptureMode.REGISTER)

        await advance_to_capture(flow)
        await flow.next_step()
        await flow.next_step()

        assert flow.step is CaptureStep.ALIGN_CONFIRM
        assert flow.aligned == to_data_url("YWxpZ25lZA==")
        created_id = str(calls[0][2]["id"])
        assert flow.identity_id == created_id

        await flow.next_step()

        assert flow.step is CaptureStep.RESULT
        assert flow.status is LoginStatus.SUCCESS
        assert flow.result.identity_id == created_id
        assert flow.result.face == flow.aligned
        assert calls[1] == ("PUT", f"/api/moldova/identity/{created_id}", {"image": "YWxpZ25lZA=="})
        assert LoginSession(session_store).user_id == created_id

    @pytest.mark.asyncio
    async def test_continue_on_result_exits_and_releases_camera(self, make_flow):
        flow = make_flow(identity_api([]))
        await advance_to_capture(flow)
        await flow.next_step()
        await flow.next_step()
        await flow.next_step()

        await flow.next_step()

        assert flow.exited is True
        assert flow.camera.active is False

    @pytest.mark.asyncio
    async def test_uploaded_image_used_without_camera_frame(self, make_flow):
        flow = make_flow(identity_api([]), frame=None)
        await advance_to_capture(flow)

        uploaded = encode_image(b"face-bytes")
        flow.upload(uploaded)
        await flow.next_step()

        assert flow.step is CaptureStep.SNAPSHOT_CONFIRM
        assert flow.snapshot == uploaded

    @pytest.mark.asyncio
    async def test_no_image_keeps_capture_step(self, make_flow):
        flow = make_flow(identity_api([]), frame=None)
        await advance_to_capture(flow)

        await flow.next_step()

        assert flow.step is CaptureStep.CAPTURE
        assert flow.error == NO_IMAGE_ERROR


class TestFailures:
    """Network failures land on the result step."""

    @pytest.mark.asyncio
    async def test_verification_failure(self, make_flow, session_store):
        flow = make_flow(identity_api([], check_status=401))
        await advance_to_capture(flow)
        await flow.next_step()
        await flow.next_step()

        await flow.next_step()

        assert flow.step is CaptureStep.RESULT
        assert flow.status is LoginStatus.FAILED
        assert flow.result.success is False
        assert flow.error == "no match"
        assert LoginSession(session_store).is_logged_in is False

    @pytest.mark.asyncio
    async def test_already_registered(self, make_flow):
        calls = []
        flow = make_flow(identity_api(calls, create_status=409))
        flow.select_mode(CaptureMode.REGISTER)
        await advance_to_capture(flow)
        await flow.next_step()

        await flow.next_step()

        assert flow.step is CaptureStep.RESULT
        assert flow.status is LoginStatus.FAILED
        assert flow.result.already_registered is True
        assert flow.error == ALREADY_REGISTERED_ERROR

        await flow.verify_now()

        assert flow.mode is CaptureMode.VERIFY
        assert flow.step is CaptureStep.RESULT
        assert flow.status is LoginStatus.SUCCESS
        assert calls[-1][1] == "/api/moldova/identity/check"

    @pytest.mark.asyncio
    async def test_confirm_failure(self, make_flow):
        flow = make_flow(identity_api([], confirm_status=500))
        flow.select_mode(CaptureMode.REGISTER)
        await advance_to_capture(flow)
        await flow.next_step()
        await flow.next_step()

        await flow.next_step()

        assert flow.step is CaptureStep.RESULT
        assert flow.status is LoginStatus.FAILED
        assert flow.error == "Registration confirmation failed"

    @pytest.mark.asyncio
    async def test_unreachable_service(self, make_flow):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        flow = make_flow(handler)
        await advance_to_capture(flow)
        await flow.next_step()
        await flow.next_step()

        await flow.next_step()

        assert flow.step is CaptureStep.RESULT
        assert flow.status is LoginStatus.FAILED
        assert flow.error == "Verification failed"

    @pytest.mark.asyncio
    async def test_camera_denied(self, make_flow):
        flow = make_flow(identity_api([]), camera_available=False)

        await advance_to_capture(flow)

        assert flow.step is CaptureStep.CAPTURE
        assert flow.status is LoginStatus.FAILED
        assert flow.error == CAMERA_ERROR


class TestBackNavigation:
    """Tests for the back action."""

    @pytest.mark.asyncio
    async def test_back_from_snapshot_clears_it(self, make_flow):
        flow = make_flow(identity_api([]))
        await advance_to_capture(flow)
        await flow.next_step()

        flow.back_step()

        assert flow.step is CaptureStep.CAPTURE
        assert flow.snapshot is None

    @pytest.mark.asyncio
    async def test_back_walks_to_welcome(self, make_flow):
        flow = make_flow(identity_api([]))
        await advance_to_capture(flow)

        flow.back_step()
        assert flow.step is CaptureStep.CONSENT
        flow.back_step()
        assert flow.step is CaptureStep.SELECT
        flow.back_step()
        assert flow.step is CaptureStep.WELCOME
        flow.back_step()
        assert flow.step is CaptureStep.WELCOME

    @pytest.mark.asyncio
    async def test_back_from_result_returns_to_select(self, make_flow):
        flow = make_flow(identity_api([], check_status=500))
        await advance_to_capture(flow)
        await flow.next_step()
        await flow.next_step()
        await flow.next_step()

        flow.back_step()

        assert flow.step is CaptureStep.SELECT
        assert flow.status is LoginStatus.IDLE
        assert flow.result is None

    @pytest.mark.asyncio
    async def test_restart(self, make_flow):
        flow = make_flow(identity_api([]))
        await advance_to_capture(flow)
        await flow.next_step()

        flow.restart()

        assert flow.step is CaptureStep.SELECT
        assert flow.snapshot is None


class TestCameraSession:
    """Tests for exclusive camera handling."""

    def test_acquire_once(self):
        device = StaticImageCamera(SNAPSHOT)
        session = CameraSession(device)

        session.acquire()
        session.acquire()

        assert device.start_count == 1
        assert session.capture() == SNAPSHOT

    def test_release_stops_device(self):
        device = StaticImageCamera(SNAPSHOT)
        session = CameraSession(device)
        session.acquire()

        session.release()

        assert device.running is False
        assert session.capture() is None

    def test_missing_device(self):
        with pytest.raises(CameraUnavailableError):
            CameraSession(None).acquire()

    def test_denied_device_leaves_session_inactive(self):
        session = CameraSession(StaticImageCamera(SNAPSHOT, available=False))

        with pytest.raises(CameraUnavailableError):
            session.acquire()

        assert session.active is False
        assert session.capture() is None


class TestLoginSession:
    """Tests for logout and identity deletion."""

    @pytest.mark.asyncio
    async def test_delete_identity_logs_out(self, session_store):
        calls = []
        login = LoginSession(session_store)
        login.mark_verified("user-7")

        from conftest import make_identity_client

        await login.delete_identity(make_identity_client(identity_api(calls)))

        assert calls == [("DELETE", "/api/moldova/identity/user-7", None)]
        assert login.is_logged_in is False
        assert login.user_id is None

    @pytest.mark.asyncio
    async def test_failed_delete_still_logs_out(self, session_store):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={})

        login = LoginSession(session_store)
        login.mark_verified("user-7")

        from conftest import make_identity_client

        await login.delete_identity(make_identity_client(handler))

        assert login.is_logged_in is False


def test_strip_data_url():
    assert strip_data_url("data:image/png;base64,QUJD") == "QUJD"
    assert strip_data_url("QUJD") == "QUJD"
    assert strip_data_url(None) is None
