"""Pygame front end for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pychip8.audio import Buzzer
from pychip8.bus import MemoryAccessError
from pychip8.cpu import CPUError, CPUSnapshot
from pychip8.io import key_for_name
from pychip8.loader import RomLoadError, read_rom_file
from pychip8.system import FrameResult, Machine, MachineConfig, create_machine, display_rate
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import SCREEN_HEIGHT, SCREEN_WIDTH, Renderer, rgb_from_int
from pychip8.video.palette import DEFAULT_BACKGROUND, DEFAULT_FOREGROUND

_OVERLAY_COLUMNS = 16
_HISTORY_ROWS = 8


@dataclass
class AppConfig:
    """Options accepted by the CHIP-8 front end."""

    rom_path: Optional[Path] = None
    scale: int = 16
    speed: int = 840
    explanations: bool = False
    foreground: int = DEFAULT_FOREGROUND
    background: int = DEFAULT_BACKGROUND

    def machine_config(self) -> MachineConfig:
        return MachineConfig(instructions_per_second=self.speed, enable_history=self.explanations)


class Chip8App:
    """Owns the window and runs the frame loop until the user closes it.

    Space pauses and resumes; Enter executes one instruction while paused;
    M prints a hex dump of memory to stdout.
    """

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._machine: Machine | None = None
        self._renderer = Renderer((rgb_from_int(config.background), rgb_from_int(config.foreground)))
        self._buzzer: Buzzer | None = None
        self._overlay_font = None
        self._running = False

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def initialise_machine(self) -> Machine:
        if self._machine is not None:
            return self._machine
        if self._config.rom_path is None:
            raise RuntimeError("ROM image is required; pass --rom <path>")
        try:
            rom = read_rom_file(self._config.rom_path)
            machine = create_machine(self._config.machine_config(), rom)
        except RomLoadError as exc:
            raise RuntimeError(str(exc)) from exc
        self._machine = machine
        return machine

    def run(self) -> None:
        machine = self.initialise_machine()

        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption("CHIP-8 Emulator")
        self._buzzer = self._create_buzzer(pygame)

        scale = max(1, self._config.scale)
        width, height = self._window_size(scale)
        screen = pygame.display.set_mode((width, height))
        clock = pygame.time.Clock()
        fps = display_rate(self._config.speed)

        self._running = True
        try:
            while self._running:
                step_requested = self._handle_events(pygame, machine)
                try:
                    if step_requested and machine.paused:
                        frame = machine.step()
                    else:
                        frame = machine.run_frame()
                except (CPUError, MemoryAccessError) as exc:
                    if debug_enabled("cpu") and machine.history is not None:
                        machine.history.dump("cpu")
                    debug_log("cpu", "fatal pc=%03X error=%s", machine.cpu.state.pc, exc)
                    raise RuntimeError(f"Exception occurred: {exc}") from exc

                self._update_buzzer(frame)

                self._present(pygame, screen, frame, scale)
                clock.tick(fps)
        finally:
            if self._buzzer is not None:
                self._buzzer.shutdown()
            pygame.quit()

    def _window_size(self, scale: int) -> tuple[int, int]:
        width = SCREEN_WIDTH * scale
        height = SCREEN_HEIGHT * scale
        if self._config.explanations:
            width += _OVERLAY_COLUMNS * scale
            height += _HISTORY_ROWS * scale
        return width, height

    def _create_buzzer(self, pygame) -> Buzzer | None:
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(44_100, -16, 1)
            except pygame.error as exc:  # pragma: no cover - hardware dependent
                debug_log("audio", "mixer_init_failed=%s", exc)
                return None
        sample_rate = pygame.mixer.get_init()[0]
        try:
            return Buzzer(sample_rate=sample_rate)
        except RuntimeError as exc:
            debug_log("audio", "buzzer_init_failed=%s", exc)
            return None

    def _handle_events(self, pygame, machine: Machine) -> bool:
        step_requested = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                if machine.toggle_pause() and self._buzzer is not None:
                    self._buzzer.stop()
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_RETURN:
                step_requested = True
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_m:
                self._dump_memory(machine)
            elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                self._handle_key_event(pygame, machine, event.key, pressed=event.type == pygame.KEYDOWN)
        return step_requested

    def _update_buzzer(self, frame: FrameResult) -> None:
        # Idle paused frames run no cycles and carry no tone signals.
        if self._buzzer is None or frame.cycles == 0:
            return
        self._buzzer.update(frame.tone_active, frame.tone_stopped)

    def _dump_memory(self, machine: Machine) -> None:
        for line in machine.memory.dump_lines():
            print(line)

    def _handle_key_event(self, pygame, machine: Machine, key_code: int, *, pressed: bool) -> None:
        name = pygame.key.name(key_code)
        key = key_for_name(name)
        if debug_enabled("input"):
            debug_log("input", "event=%s key=%s pressed=%s", name, key, pressed)
        if key is None:
            return
        if pressed:
            machine.keypad.press(key)
        else:
            machine.keypad.release(key)

    def _present(self, pygame, screen, frame: FrameResult, scale: int) -> None:
        screen.fill((0, 0, 0))
        image = self._renderer.render(frame.framebuffer, scale=scale)
        screen.blit(image.to_surface(), (0, 0))
        if self._config.explanations and frame.snapshot is not None:
            self._draw_overlay(pygame, screen, frame, scale)
        pygame.display.flip()

    def _draw_overlay(self, pygame, screen, frame: FrameResult, scale: int) -> None:
        font_size = max(8, int(scale * 1.2))
        if self._overlay_font is None or self._overlay_font[0] != font_size:
            pygame.font.init()
            font_name = pygame.font.match_font("menlo,dejavusansmono,couriernew,consolas,monospace")
            if not font_name:
                font_name = pygame.font.get_default_font()
            self._overlay_font = (font_size, pygame.font.Font(font_name, font_size))
        font_obj = self._overlay_font[1]

        x_left = SCREEN_WIDTH * scale + scale
        x_right = x_left + 7 * scale
        y = scale
        line_height = int(scale * 1.5)
        for left, right in overlay_lines(frame.snapshot):
            screen.blit(font_obj.render(left, False, (135, 206, 235)), (x_left, y))
            screen.blit(font_obj.render(right, False, (255, 255, 0)), (x_right, y))
            y += line_height

        y = (SCREEN_HEIGHT + 1) * scale
        count = len(frame.history)
        for index, text in enumerate(frame.history):
            color = (255, 255, 255) if index == count - 1 else (130, 130, 130)
            screen.blit(font_obj.render(text, False, color), (scale * 2, y))
            y += 2 * scale


def overlay_lines(snapshot: CPUSnapshot) -> list[tuple[str, str]]:
    """Pair up left/right overlay columns: header registers, then stack and V registers."""

    lines = [
        (f"PC: {snapshot.pc:03X}", f"DT: {snapshot.dt}"),
        (f"I: {snapshot.i:03X}", f"ST: {snapshot.st}"),
        (f"SP: {snapshot.sp}", "WAIT" if snapshot.awaiting_key else ""),
    ]
    for index in range(16):
        lines.append((f"S{index:X}: {snapshot.stack[index]:03X}", f"V{index:X}: {snapshot.v[index]}"))
    return lines
