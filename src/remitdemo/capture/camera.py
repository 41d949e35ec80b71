"""Camera access for the face-capture flow.

The camera is an exclusively held device: CameraSession opens it once on
acquire and stops it on release.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class CameraUnavailableError(Exception):
    """Raised when the camera cannot be opened (no device, permission denied)."""


class CameraDevice(ABC):
    """A source of still frames encoded as data URLs."""

    @abstractmethod
    def start(self) -> None:
        """Open the device. Raises CameraUnavailableError on failure."""
        raise NotImplementedError()

    @abstractmethod
    def read_frame(self) -> Optional[str]:
        """Grab the current frame as a data URL, or None when not ready."""
        raise NotImplementedError()

    @abstractmethod
    def stop(self) -> None:
        """Stop all tracks and release the device."""
        raise NotImplementedError()


class CameraSession:
    """Holds at most one running camera device."""

    def __init__(self, device: Optional[CameraDevice]):
        self.device = device
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def acquire(self) -> None:
        """Start the camera unless it is already running."""
        if self._active:
            return
        if self.device is None:
            raise CameraUnavailableError("no camera device")
        self.device.start()
        self._active = True
        logger.debug("Camera acquired")

    def capture(self) -> Optional[str]:
        """Read a frame from the running camera."""
        if not self._active or self.device is None:
            return None
        return self.device.read_frame()

    def release(self) -> None:
        """Stop the camera if it is running."""
        if self._active and self.device is not None:
            self.device.stop()
            logger.debug("Camera released")
        self._active = False
