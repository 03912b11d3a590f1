"""Audio output for the CHIP-8 interpreter."""

from .beeper import BUZZER_FREQUENCY, Buzzer

__all__ = ["Buzzer", "BUZZER_FREQUENCY"]
