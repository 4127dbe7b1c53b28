"""
Device management for touchscreen discovery and initialization.
"""

import logging
from typing import Dict, Any, Optional

import evdev
from evdev import InputDevice, ecodes

logger = logging.getLogger(__name__)


class DeviceManager:
    """Finds a multitouch device and reports its coordinate range."""

    def __init__(self):
        self.device: Optional[InputDevice] = None
        self.screen_width = 1920  # Default
        self.screen_height = 1080   # Default
        self.has_wheel = False

    def find_device(self, path: Optional[str] = None) -> Optional[InputDevice]:
        """Open ``path`` if given, else the first device with multitouch slots."""
        if path is not None:
            try:
                candidates = [InputDevice(path)]
            except OSError as e:
                logger.error(f"Cannot open input device {path}: {e}")
                return None
        else:
            candidates = [InputDevice(p) for p in evdev.list_devices()]

        for device in candidates:
            caps = device.capabilities()
            abs_info = dict(caps.get(ecodes.EV_ABS, []))

            if ecodes.ABS_MT_SLOT not in abs_info:
                continue

            if ecodes.ABS_MT_POSITION_X in abs_info:
                self.screen_width = abs_info[ecodes.ABS_MT_POSITION_X].max + 1
            if ecodes.ABS_MT_POSITION_Y in abs_info:
                self.screen_height = abs_info[ecodes.ABS_MT_POSITION_Y].max + 1

            rel_codes = caps.get(ecodes.EV_REL, [])
            self.has_wheel = ecodes.REL_WHEEL in rel_codes or ecodes.REL_HWHEEL in rel_codes

            self.device = device
            logger.info(f"Found touchscreen: {device.name}")
            logger.info(f"Screen resolution: {self.screen_width}x{self.screen_height}")
            return device

        logger.error("No multitouch device found")
        return None

    def get_device_info(self) -> Dict[str, Any]:
        """Get device and screen information."""
        return {
            'device': self.device,
            'name': self.device.name if self.device else None,
            'screen_width': self.screen_width,
            'screen_height': self.screen_height,
            'has_wheel': self.has_wheel,
        }
