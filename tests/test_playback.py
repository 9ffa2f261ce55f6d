"""Tests for the playback clock and controller."""

import argparse
import json

import pytest

from handPlayback.config import PlaybackConfig
from handPlayback.loader import RecordingFormatError
from handPlayback.playback import PlaybackClock, PlaybackController, format_time
from handPlayback.protocol import Frame, Joint, Recording


def make_recording(times, px_scale=1.0):
    return Recording(frames=tuple(
        Frame(t, (Joint("leftWrist", t * px_scale, 0.0, 0.0),)) for t in times
    ))


class TestPlaybackClock:

    def test_defaults(self):
        clock = PlaybackClock()
        assert clock.t == 0.0
        assert clock.speed == 1.0
        assert clock.loop is True
        assert clock.running is True
        assert clock.duration == 0.0

    def test_advance_scales_by_speed(self):
        clock = PlaybackClock(duration=10.0, speed=2.0)
        clock.advance(1.5)
        assert clock.t == pytest.approx(3.0)

    def test_advance_noop_when_paused(self):
        clock = PlaybackClock(duration=10.0, running=False)
        clock.advance(1.0)
        assert clock.t == 0.0

    def test_advance_noop_for_zero_duration(self):
        clock = PlaybackClock(duration=0.0)
        clock.advance(1.0)
        assert clock.t == 0.0

    def test_loop_wraps_to_start(self):
        clock = PlaybackClock(duration=2.0, speed=1.0, loop=True)
        clock.advance(clock.duration / clock.speed)
        assert clock.t == pytest.approx(0.0)

    def test_loop_wrap_with_speed(self):
        clock = PlaybackClock(duration=2.0, speed=4.0, loop=True)
        clock.advance(2.0 / 4.0)
        assert clock.t == pytest.approx(0.0, abs=1e-12)

    def test_large_delta_wraps_once(self):
        clock = PlaybackClock(duration=2.0, loop=True)
        clock.advance(7.5)
        assert clock.t == pytest.approx(1.5)
        clock.advance(1e6 + 0.25)
        assert 0.0 <= clock.t < 2.0
        assert clock.t == pytest.approx(1.75)

    def test_no_loop_clamps_and_keeps_running(self):
        clock = PlaybackClock(duration=2.0, speed=1.0, loop=False)
        clock.advance(2 * clock.duration / clock.speed)
        assert clock.t == 2.0
        assert clock.running is True
        clock.advance(0.5)
        assert clock.t == 2.0

    def test_seek_clamps(self):
        clock = PlaybackClock(duration=3.0)
        clock.seek(-1.0)
        assert clock.t == 0.0
        clock.seek(10.0)
        assert clock.t == 3.0
        clock.seek(1.25)
        assert clock.t == 1.25

    def test_seek_is_idempotent(self):
        clock = PlaybackClock(duration=3.0)
        clock.seek(1.7)
        once = clock.t
        clock.seek(1.7)
        assert clock.t == once

    def test_seek_ignores_running_flag(self):
        clock = PlaybackClock(duration=3.0, running=False)
        clock.seek(2.0)
        assert clock.t == 2.0

    def test_step_clamps_both_ends(self):
        clock = PlaybackClock(duration=1.0)
        clock.step(-0.5)
        assert clock.t == 0.0
        clock.step(0.4)
        assert clock.t == pytest.approx(0.4)
        clock.step(5.0)
        assert clock.t == 1.0

    def test_setters_do_not_move_time(self):
        clock = PlaybackClock(duration=3.0)
        clock.seek(1.0)
        assert clock.toggle_running() is False
        clock.set_speed(2.5)
        clock.set_loop(False)
        assert clock.t == 1.0
        assert clock.speed == 2.5
        assert clock.loop is False
        assert clock.running is False

    def test_reset(self):
        clock = PlaybackClock(duration=3.0, running=False)
        clock.seek(2.0)
        clock.reset(5.0)
        assert clock.t == 0.0
        assert clock.duration == 5.0
        assert clock.running is True


class TestPlaybackController:

    def test_empty_controller(self):
        controller = PlaybackController()
        assert controller.recording is None
        assert controller.has_recording is False
        assert controller.current_frame() is None
        assert controller.tick(0.5) is None
        assert controller.time_label() == "No file loaded"

    def test_load_resets_clock(self):
        controller = PlaybackController()
        controller.load(make_recording([0.0, 1.0, 2.0]))
        controller.clock.seek(1.5)
        controller.clock.set_running(False)

        controller.load(make_recording([0.0, 4.0]))
        assert controller.clock.t == 0.0
        assert controller.clock.duration == 4.0
        assert controller.clock.running is True
        assert controller.duration == 4.0

    def test_load_respects_autoplay(self):
        controller = PlaybackController(PlaybackConfig(autoplay=False))
        controller.load(make_recording([0.0, 1.0]))
        assert controller.clock.running is False

    def test_tick_returns_interpolated_frame(self):
        controller = PlaybackController()
        controller.load(make_recording([0.0, 1.0, 2.0], px_scale=10.0))
        frame = controller.tick(0.25)
        assert frame.time == pytest.approx(0.25)
        assert frame.joints[0].px == pytest.approx(2.5)

    def test_clear(self):
        controller = PlaybackController()
        controller.load(make_recording([0.0, 1.0]))
        controller.clear()
        assert controller.recording is None
        assert controller.clock.duration == 0.0
        assert controller.current_frame() is None

    def test_load_text(self):
        controller = PlaybackController()
        text = json.dumps({"frames": [
            {"time": 10.0, "joints": [{"name": "leftWrist", "px": 0, "py": 0, "pz": 0}]},
            {"time": 11.5, "joints": [{"name": "leftWrist", "px": 1, "py": 0, "pz": 0}]},
        ]})
        rec = controller.load_text(text)
        assert controller.recording is rec
        assert controller.clock.duration == pytest.approx(1.5)

    def test_failed_load_keeps_previous_recording(self):
        controller = PlaybackController()
        previous = make_recording([0.0, 1.0])
        controller.load(previous)
        controller.clock.seek(0.5)
        with pytest.raises(RecordingFormatError):
            controller.load_text('{"nothing": []}')
        assert controller.recording is previous
        assert controller.clock.t == 0.5

    def test_load_file(self, tmp_path):
        path = tmp_path / "hands.json"
        path.write_text(json.dumps([
            {"time": 0, "joints": []},
            {"time": 2, "joints": []},
        ]))
        controller = PlaybackController()
        controller.load_file(path)
        assert controller.duration == 2.0


class TestTransportCommands:

    @pytest.fixture
    def controller(self):
        controller = PlaybackController(PlaybackConfig(frame_step=0.1))
        controller.load(make_recording([0.0, 1.0, 2.0]))
        return controller

    def test_space_toggles_play(self, controller):
        assert controller.handle_key("Space") is True
        assert controller.clock.running is False
        controller.handle_key("Space")
        assert controller.clock.running is True

    def test_arrows_step(self, controller):
        controller.handle_key("ArrowRight")
        controller.handle_key("ArrowRight")
        assert controller.clock.t == pytest.approx(0.2)
        controller.handle_key("ArrowLeft")
        assert controller.clock.t == pytest.approx(0.1)
        for _ in range(5):
            controller.handle_key("ArrowLeft")
        assert controller.clock.t == 0.0

    def test_home_end(self, controller):
        controller.handle_key("End")
        assert controller.clock.t == 2.0
        controller.handle_key("Home")
        assert controller.clock.t == 0.0

    def test_seek_timeline(self, controller):
        frame = controller.seek_timeline(1500, 1000)
        assert controller.clock.t == pytest.approx(1.5)
        assert frame.joints[0].px == pytest.approx(1.5)
        controller.clock.set_running(False)
        controller.seek_timeline(5000, 1000)
        assert controller.clock.t == 2.0
        controller.seek_timeline(0, 1000)
        assert controller.clock.t == 0.0

    def test_loop_key_case_insensitive(self, controller):
        controller.handle_key("l")
        assert controller.clock.loop is False
        controller.handle_key("L")
        assert controller.clock.loop is True

    def test_unbound_key(self, controller):
        assert controller.handle_key("q") is False
        assert controller.handle_key("Escape") is False


class TestHudText:

    def test_format_time(self):
        assert format_time(0.0) == "0.00s"
        assert format_time(1.234) == "1.23s"
        assert format_time(float("nan")) == "0.00s"
        assert format_time(float("inf")) == "0.00s"

    def test_labels(self):
        controller = PlaybackController()
        controller.load(make_recording([0.0, 4.0]))
        controller.clock.seek(1.0)
        assert controller.time_label() == "1.00s / 4.00s"
        assert controller.status_label() == "Playing · 1.0× · Loop"
        controller.toggle_play()
        controller.toggle_loop()
        controller.clock.set_speed(0.5)
        assert controller.status_label() == "Paused · 0.5× · No loop"

    def test_timeline_ticks(self):
        controller = PlaybackController()
        controller.load(make_recording([0.0, 4.0]))
        assert controller.timeline_ticks() == ["0.00s", "1.00s", "2.00s", "3.00s", "4.00s"]


class TestPlaybackConfig:

    def test_defaults(self):
        cfg = PlaybackConfig()
        assert cfg.speed == 1.0
        assert cfg.loop is True
        assert cfg.autoplay is True
        assert cfg.frame_step == 0.033

    def test_from_args(self):
        args = argparse.Namespace(speed=0.5, no_loop=True, paused=True, frame_step=None)
        cfg = PlaybackConfig.from_args(args)
        assert cfg.speed == 0.5
        assert cfg.loop is False
        assert cfg.autoplay is False
        assert cfg.frame_step == 0.033

    def test_controller_uses_config(self):
        controller = PlaybackController(PlaybackConfig(speed=2.0, loop=False))
        assert controller.clock.speed == 2.0
        assert controller.clock.loop is False
