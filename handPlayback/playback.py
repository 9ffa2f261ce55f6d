"""
Playback state for recorded hand poses.

PlaybackClock holds the timeline position and is advanced explicitly by the
host (one ``advance(delta)`` per rendered frame). PlaybackController owns the
active Recording together with its clock so both are always swapped together.
"""

import logging
import math
from pathlib import Path
from typing import List, Optional, Union

from .config import PlaybackConfig
from .interpolation import clamp, sample
from .loader import load_recording_file, load_recording_text
from .protocol import Frame, Recording

logger = logging.getLogger(__name__)


class PlaybackClock:
    """
    Timeline position, speed, loop and running flags.

    There are no internal timers; time only moves in ``advance``. When looping
    is off the clock freezes at the end but keeps ``running`` set until a
    caller changes it.
    """

    def __init__(self, duration: float = 0.0, speed: float = 1.0, loop: bool = True, running: bool = True):
        self._duration = max(0.0, duration)
        self._t = 0.0
        self._speed = speed
        self._loop = loop
        self._running = running

    @property
    def t(self) -> float:
        return self._t

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def loop(self) -> bool:
        return self._loop

    @property
    def running(self) -> bool:
        return self._running

    @property
    def duration(self) -> float:
        return self._duration

    def reset(self, duration: float, running: bool = True):
        """Rewind to 0 for a newly loaded recording of the given duration"""
        self._duration = max(0.0, duration)
        self._t = 0.0
        self._running = running

    def advance(self, wall_delta: float):
        """Move time forward by wall_delta seconds scaled by speed (no-op when paused or empty)"""
        if not self._running or self._duration <= 0:
            return
        t = self._t + wall_delta * self._speed
        # A single modulo handles deltas spanning several loops
        if t >= self._duration:
            t = (t % self._duration) if self._loop else self._duration
        self._t = t

    def seek(self, new_t: float):
        self._t = clamp(new_t, 0.0, self._duration)

    def step(self, signed_delta: float):
        self.seek(self._t + signed_delta)

    def toggle_running(self) -> bool:
        self._running = not self._running
        return self._running

    def set_running(self, running: bool):
        self._running = bool(running)

    def set_speed(self, speed: float):
        self._speed = speed

    def set_loop(self, loop: bool):
        self._loop = bool(loop)


def format_time(t: float) -> str:
    if not math.isfinite(t):
        return "0.00s"
    return f"{t:.2f}s"


class PlaybackController:
    """Single owner of the active recording and its playback clock.

    Usage:
        controller = PlaybackController()
        controller.load_file("hands.json")
        frame = controller.tick(1 / 60)   # once per rendered frame
    """

    def __init__(self, config: Optional[PlaybackConfig] = None):
        self.config = config or PlaybackConfig()
        self._recording: Optional[Recording] = None
        self.clock = PlaybackClock(
            duration=0.0,
            speed=self.config.speed,
            loop=self.config.loop,
            running=self.config.autoplay,
        )

    @property
    def recording(self) -> Optional[Recording]:
        return self._recording

    @property
    def duration(self) -> float:
        return self._recording.duration if self._recording is not None else 0.0

    @property
    def has_recording(self) -> bool:
        return self._recording is not None and len(self._recording) > 0

    # =========================================================================
    # Recording management
    # =========================================================================

    def load(self, recording: Recording):
        """Replace the active recording and rewind the clock in one step"""
        self._recording = recording
        self.clock.reset(recording.duration, running=self.config.autoplay)
        logger.info("Loaded recording: %d frames, %s", len(recording), format_time(recording.duration))

    def load_text(self, text: Union[str, bytes]) -> Recording:
        """Parse and load a JSON document. On error the current recording stays active."""
        recording = load_recording_text(text)
        self.load(recording)
        return recording

    def load_file(self, path: Union[str, Path]) -> Recording:
        """Load a recording file. On error the current recording stays active."""
        recording = load_recording_file(path)
        self.load(recording)
        return recording

    def clear(self):
        self._recording = None
        self.clock.reset(0.0, running=self.config.autoplay)

    # =========================================================================
    # Per-tick driving
    # =========================================================================

    def current_frame(self) -> Optional[Frame]:
        if not self.has_recording:
            return None
        return sample(self._recording, self.clock.t)

    def tick(self, wall_delta: float) -> Optional[Frame]:
        """Advance the clock by one host tick and return the pose to render"""
        self.clock.advance(wall_delta)
        return self.current_frame()

    # =========================================================================
    # Transport commands (keyboard / buttons)
    # =========================================================================

    def toggle_play(self) -> bool:
        return self.clock.toggle_running()

    def step_forward(self):
        self.clock.step(self.config.frame_step)

    def step_backward(self):
        self.clock.step(-self.config.frame_step)

    def seek_timeline(self, value: int, resolution: int) -> Optional[Frame]:
        """Seek from an integer timeline position (``value / resolution`` seconds)"""
        self.clock.seek(value / resolution)
        return self.current_frame()

    def jump_to_start(self):
        self.clock.seek(0.0)

    def jump_to_end(self):
        self.clock.seek(self.clock.duration)

    def toggle_loop(self) -> bool:
        self.clock.set_loop(not self.clock.loop)
        return self.clock.loop

    def handle_key(self, key: str) -> bool:
        """Run the transport command bound to a key name. Returns False for unbound keys."""
        commands = {
            "Space": self.toggle_play,
            "ArrowRight": self.step_forward,
            "ArrowLeft": self.step_backward,
            "Home": self.jump_to_start,
            "End": self.jump_to_end,
            "l": self.toggle_loop,
        }
        command = commands.get(key if len(key) > 1 else key.lower())
        if command is None:
            return False
        command()
        return True

    # =========================================================================
    # HUD text
    # =========================================================================

    def time_label(self) -> str:
        if not self.clock.duration:
            return "No file loaded"
        return f"{format_time(self.clock.t)} / {format_time(self.clock.duration)}"

    def status_label(self) -> str:
        state = "Playing" if self.clock.running else "Paused"
        loop = "Loop" if self.clock.loop else "No loop"
        return f"{state} · {self.clock.speed:.1f}× · {loop}"

    def timeline_ticks(self) -> List[str]:
        d = self.clock.duration
        return [format_time(d * q) for q in (0.0, 0.25, 0.5, 0.75, 1.0)]
