"""Headless face-capture and verification flow."""

from remitdemo.capture.camera import CameraDevice, CameraSession, CameraUnavailableError
from remitdemo.capture.flow import CaptureMode, CaptureStep, FaceCaptureFlow, FlowResult, LoginStatus
from remitdemo.capture.login import LoginSession

__all__ = [
    "CameraDevice",
    "CameraSession",
    "CameraUnavailableError",
    "CaptureMode",
    "CaptureStep",
    "FaceCaptureFlow",
    "FlowResult",
    "LoginSession",
    "LoginStatus",
]
