"""Square-wave buzzer driven by the CHIP-8 sound timer."""

from __future__ import annotations

from array import array
from typing import Optional

from pychip8.utils import debug_enabled, debug_log

BUZZER_FREQUENCY = 440.0


class Buzzer:
    """Loop a square-wave tone on a pygame mixer channel while the sound timer runs."""

    def __init__(
        self,
        *,
        sample_rate: int = 44_100,
        frequency: float = BUZZER_FREQUENCY,
        volume: float = 0.25,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating Buzzer")
        if frequency <= 0.0:
            raise ValueError("frequency must be positive")

        self._pygame = pygame
        self._sample_rate = max(1, sample_rate)
        self._volume = max(0.0, min(1.0, volume))
        self._sound = self._build_sound(frequency)
        self._channel: Optional[pygame.mixer.Channel] = None

    @property
    def playing(self) -> bool:
        return self._channel is not None and self._channel.get_busy()

    def update(self, tone_active: bool, tone_stopped: bool) -> None:
        """Apply one frame's tone signals."""

        if tone_stopped or not tone_active:
            self.stop()
        else:
            self.start()

    def start(self) -> None:
        if self.playing:
            return
        channel = self._pygame.mixer.find_channel(True)
        if channel is None:
            return
        channel.play(self._sound, loops=-1)
        channel.set_volume(self._volume)
        self._channel = channel
        if debug_enabled("audio"):
            debug_log("audio", "buzzer_start")

    def stop(self) -> None:
        if self._channel is None:
            return
        self._channel.stop()
        self._channel = None
        if debug_enabled("audio"):
            debug_log("audio", "buzzer_stop")

    def shutdown(self) -> None:
        self.stop()

    def _build_sound(self, frequency: float):
        period = max(2, int(round(self._sample_rate / frequency)))
        half = period // 2
        amplitude = 12_000
        buffer = array("h", [amplitude] * half + [-amplitude] * (period - half))
        return self._pygame.mixer.Sound(buffer=buffer.tobytes())


__all__ = ["Buzzer", "BUZZER_FREQUENCY"]
