import asyncio
import sys
import select
import termios
import tty
from typing import Dict

from hardware.device.virtual_device import VirtualControlDevice
from models.errors import DeviceNotConnectedError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.DEVICE)

ARROW_KEYS: Dict[str, str] = {
    '\x1b[A': 'UP',
    '\x1b[B': 'DOWN',
    '\x1b[C': 'RIGHT',
    '\x1b[D': 'LEFT',
}


class KeyboardDeviceInput:
    """
    Terminal driver for the virtual dial

    Key map:
        SPACE / ENTER  select (display button press)
        T              touch
        RIGHT / UP     rotate one notch clockwise
        LEFT / DOWN    rotate one notch counter-clockwise
        Q              disconnect

    Intended for SSH sessions and local terminals. The terminal is switched
    to cbreak mode while running and restored on exit.
    """

    def __init__(self, device: VirtualControlDevice):
        self.device = device
        self._old_settings = None
        self._buffer = ""

    async def run(self) -> None:
        """
        Read stdin until cancelled or the device disconnects.

        Raises:
            RuntimeError: STDIN is not a TTY
        """
        if not sys.stdin.isatty():
            raise RuntimeError("STDIN is not a TTY")

        self._old_settings = termios.tcgetattr(sys.stdin)
        tty.setcbreak(sys.stdin.fileno())

        log.info("Keyboard input active", keys="SPACE=select T=touch ←/→=rotate Q=disconnect")

        try:
            while self.device.is_connected:
                ready, _, _ = select.select([sys.stdin], [], [], 0)
                if not ready:
                    await asyncio.sleep(0.01)
                    continue

                try:
                    char = sys.stdin.read(1)
                except (IOError, OSError) as e:
                    raise RuntimeError("STDIN read failed") from e

                if not char:
                    continue

                self._buffer += char
                await self._process_buffer()

        except asyncio.CancelledError:
            log.debug("Keyboard input cancelled")
            raise

        finally:
            # Restore terminal settings (always runs, even on cancellation)
            if self._old_settings:
                termios.tcsetattr(sys.stdin, termios.TCSADRAIN, self._old_settings)
                log.debug("Terminal settings restored")

    async def _process_buffer(self) -> None:
        while self._buffer:
            if self._buffer.startswith('\x1b'):
                if self._buffer == '\x1b':
                    return  # wait for '[' or the next key
                if not self._buffer.startswith('\x1b['):
                    log.debug("Bare ESC ignored")
                    self._buffer = self._buffer[1:]
                    continue
                if len(self._buffer) < 3:
                    return  # wait for full escape sequence
                seq = self._buffer[:3]
                self._buffer = self._buffer[3:]
                key = ARROW_KEYS.get(seq)
                if key:
                    await self.handle_key(key)
                else:
                    log.debug("Unknown escape sequence", sequence=repr(seq))
                continue

            char = self._buffer[0]
            self._buffer = self._buffer[1:]

            if char in (' ', '\r', '\n'):
                await self.handle_key('SPACE')
            elif char.isprintable():
                await self.handle_key(char.upper())

    async def handle_key(self, key: str) -> None:
        """Translate one key into a device gesture."""
        try:
            if key == 'SPACE':
                await self.device.select()
            elif key == 'T':
                await self.device.touch()
            elif key in ('RIGHT', 'UP'):
                await self.device.rotate_notches(1)
            elif key in ('LEFT', 'DOWN'):
                await self.device.rotate_notches(-1)
            elif key == 'Q':
                await self.device.disconnect()
            else:
                log.debug("Unmapped key", key=key)
        except DeviceNotConnectedError:
            log.warn("Key ignored, device not connected", key=key)
