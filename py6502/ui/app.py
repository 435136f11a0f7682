"""Pygame monitor for stepping through 6502 programs."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from py6502.loader import DEFAULT_LOAD_ADDRESS, BinaryFormatError
from py6502.system import Machine, MachineConfig, create_machine
from py6502.utils import TraceRecorder, debug_enabled, debug_log

from .views import flag_states, help_line, instruction_listing, memory_page, status_lines


@dataclass
class AppConfig:
    """Configuration for the monitor front end and the headless runner."""

    binary_path: Optional[Path] = None
    load_address: int = DEFAULT_LOAD_ADDRESS
    scale: int = 2
    run_delay_ms: int = 0
    headless: bool = False
    max_cycles: int = 1_000_000
    stop_pc: Optional[int] = None
    trace: bool = False


KEY_BINDINGS: Sequence[Tuple[str, str]] = (
    ("space/enter", "Step"),
    ("e", "Run/Stop"),
    ("r", "Reset"),
    ("i", "IRQ"),
    ("n", "NMI"),
    ("q", "Quit"),
)


class MonitorApp:
    """Interactive memory, register and disassembly viewer."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._machine: Machine | None = None
        self._previous_memory = bytes(0x10000)
        self._running = False
        self._quit = False
        self._last_step_time = 0.0
        self._font = None
        self._trace_recorder: TraceRecorder | None = None
        if config.trace or debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)

    @property
    def machine(self) -> Machine:
        if self._machine is None:
            self._machine = self.create_machine()
        return self._machine

    @property
    def running(self) -> bool:
        return self._running

    @property
    def previous_memory(self) -> bytes:
        return self._previous_memory

    def create_machine(self) -> Machine:
        machine = create_machine(MachineConfig(load_address=self._config.load_address))
        path = self._config.binary_path
        if path is not None:
            try:
                machine.load_program(path)
            except FileNotFoundError as exc:
                raise RuntimeError(f"Binary file not found: {path}") from exc
            except BinaryFormatError as exc:
                raise RuntimeError(f"Failed to load binary {path}: {exc}") from exc
        self._previous_memory = machine.bus.snapshot()
        return machine

    # ------------------------------------------------------------------
    # Commands

    def handle_key(self, name: str) -> bool:
        """Apply the command bound to the key ``name``; False means quit."""

        key = name.lower()
        machine = self.machine
        if key in ("space", "return", "enter"):
            self.step()
        elif key == "e":
            self._running = not self._running
        elif key == "r":
            machine.reset()
            self._previous_memory = machine.bus.snapshot()
        elif key == "i":
            machine.cpu.irq()
        elif key == "n":
            machine.cpu.nmi()
        elif key in ("q", "escape"):
            self._quit = True
        if debug_enabled("ui"):
            debug_log("ui", "key=%s running=%s pc=%04x", key, self._running, machine.cpu.state.pc)
        return not self._quit

    def step(self) -> int:
        machine = self.machine
        self._previous_memory = machine.bus.snapshot()
        return machine.step(self._trace_recorder)

    def run_headless(self) -> List[str]:
        """Run without a window and return a printable report."""

        machine = self.machine
        result = machine.run(
            self._config.max_cycles,
            stop_pc=self._config.stop_pc,
            trace=self._trace_recorder,
        )
        lines = list(status_lines(machine.cpu))
        lines.append("")
        lines.append(
            f"Stopped: reason={result.reason} pc=${result.pc:04X} "
            f"cycles={result.cycles} instructions={result.instructions}"
        )
        if self._trace_recorder is not None:
            lines.append("")
            lines.extend(self._trace_recorder.format_entries(_TRACE_REPORT_LINES))
        return lines

    # ------------------------------------------------------------------
    # Pygame front end

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the monitor") from exc

        machine = self.machine
        pygame.init()
        pygame.display.set_caption("6502 Monitor")
        font_size = max(8, 6 * self._config.scale)
        font_name = pygame.font.match_font("menlo,dejavusansmono,couriernew,consolas,monospace")
        if not font_name:
            font_name = pygame.font.get_default_font()
        self._font = pygame.font.Font(font_name, font_size)
        char_width, line_height = self._font.size("0")
        line_height += 2

        width = char_width * _WINDOW_COLUMNS
        height = line_height * _WINDOW_ROWS
        screen = pygame.display.set_mode((width, height))
        clock = pygame.time.Clock()

        while not self._quit:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._quit = True
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(pygame.key.name(event.key))

            if self._running:
                self._run_slice(machine)

            screen.fill(_BACKGROUND)
            self._draw(screen, machine, char_width, line_height)
            pygame.display.flip()
            clock.tick(_FRAME_RATE)

        pygame.quit()

    def _run_slice(self, machine: Machine) -> None:
        delay = self._config.run_delay_ms / 1000.0
        now = time.perf_counter()
        if delay > 0:
            if now - self._last_step_time >= delay:
                self.step()
                self._last_step_time = now
            return
        for _ in range(_INSTRUCTIONS_PER_FRAME):
            self.step()

    def _draw(self, screen, machine: Machine, char_width: int, line_height: int) -> None:
        cpu = machine.cpu
        y = _MARGIN
        for start in (0x0000, cpu.reset_vector()):
            for row_address, cells in memory_page(cpu, start, self._previous_memory):
                x = _MARGIN
                x = self._blit(screen, f"${row_address:04X}: ", x, y, _TEXT)
                for cell in cells:
                    color = _TEXT
                    if cell.changed:
                        color = _CHANGED
                    elif cell.current:
                        color = _CURRENT
                    x = self._blit(screen, f"{cell.value:02X} ", x, y, color)
                y += line_height
            y += line_height

        column = _MARGIN + char_width * _MEMORY_COLUMNS
        y = _MARGIN
        x = self._blit(screen, "Status:  ", column, y, _TEXT)
        for name, enabled in flag_states(cpu):
            color = _TEXT if name == "-" else (_FLAG_SET if enabled else _FLAG_CLEAR)
            x = self._blit(screen, f"{name} ", x, y, color)
        y += line_height
        for text in status_lines(cpu)[1:]:
            self._blit(screen, text, column, y, _TEXT)
            y += line_height
        if self._running:
            self._blit(screen, "RUNNING", column, y, _RUNNING)
        y += line_height * 2

        for line in instruction_listing(cpu, _LISTING_ROWS):
            prefix = "> " if line.current else "  "
            color = _CURRENT if line.current else _TEXT
            self._blit(screen, prefix + line.text, column, y, color)
            y += line_height

        footer_y = line_height * (_WINDOW_ROWS - 1)
        self._blit(screen, help_line(KEY_BINDINGS), _MARGIN, footer_y, _HELP)

    def _blit(self, screen, text: str, x: int, y: int, color) -> int:
        rendered = self._font.render(text, True, color)
        screen.blit(rendered, (x, y))
        return x + rendered.get_width()


_FRAME_RATE = 60
_INSTRUCTIONS_PER_FRAME = 500
_TRACE_REPORT_LINES = 32
_MARGIN = 4
_MEMORY_COLUMNS = 56
_WINDOW_COLUMNS = 110
_WINDOW_ROWS = 36
_LISTING_ROWS = 18
_BACKGROUND = (16, 16, 24)
_TEXT = (220, 220, 220)
_CHANGED = (255, 255, 85)
_CURRENT = (135, 175, 255)
_FLAG_SET = (0, 205, 0)
_FLAG_CLEAR = (215, 0, 95)
_RUNNING = (255, 85, 85)
_HELP = (140, 140, 140)
