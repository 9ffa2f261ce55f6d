from dataclasses import dataclass


@dataclass(frozen=True)
class PlaybackConfig:
    # Initial clock state applied whenever a recording is loaded.
    speed: float = 1.0
    loop: bool = True
    autoplay: bool = True
    # Seconds moved by a single step (arrow keys); roughly one frame at 30 fps.
    frame_step: float = 0.033
    # Range offered by the speed slider. The clock itself does not enforce it.
    min_speed: float = 0.1
    max_speed: float = 3.0
    # Viewer tick interval (~60 fps).
    tick_interval_ms: int = 16

    @staticmethod
    def from_args(args) -> "PlaybackConfig":
        """Build a config from an argparse namespace; missing attributes keep their defaults."""
        defaults = PlaybackConfig()
        return PlaybackConfig(
            speed=_as_float(getattr(args, "speed", None), defaults.speed),
            loop=not getattr(args, "no_loop", False),
            autoplay=not getattr(args, "paused", False),
            frame_step=_as_float(getattr(args, "frame_step", None), defaults.frame_step),
            min_speed=defaults.min_speed,
            max_speed=defaults.max_speed,
            tick_interval_ms=defaults.tick_interval_ms,
        )


def _as_float(v, default: float) -> float:
    if v is None:
        return float(default)
    return float(v)
