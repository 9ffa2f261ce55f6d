#!/usr/bin/env python3
"""
Hand Playback viewer - main window with transport controls around the GL widget

Usage:
    handplayback                              # empty viewer, drop or upload a recording
    handplayback hands.json                   # open a recording
    handplayback hands.json --speed 0.5 --no-loop
"""

import argparse
import logging
import sys
from typing import Optional

from PyQt5 import QtWidgets
from PyQt5.QtCore import Qt

from .config import PlaybackConfig
from .loader import RecordingFormatError
from .playback import PlaybackController
from .vizWidget import HandPlaybackGLWidget

logger = logging.getLogger(__name__)

# Timeline slider resolution (ticks per second)
TIMELINE_RESOLUTION = 1000
# Speed slider resolution (ticks per 1.0x)
SPEED_RESOLUTION = 10


class PlaybackWindow(QtWidgets.QMainWindow):
    """Main window: GL viewer, control bar, timeline and error line"""

    def __init__(self, controller: PlaybackController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.setWindowTitle("Vision Pro Hand Playback")

        self.viewer = HandPlaybackGLWidget(controller)
        self.viewer.frame_advanced.connect(self.sync_controls)
        self.viewer.file_dropped.connect(self.open_file)

        # Header row
        self.upload_button = QtWidgets.QPushButton("Upload JSON")
        self.upload_button.clicked.connect(self._choose_file)
        self.axes_button = QtWidgets.QPushButton("Show Axes")
        self.axes_button.setToolTip("Toggle axes (A)")
        self.axes_button.clicked.connect(self._toggle_axes)
        self.fit_button = QtWidgets.QPushButton("Fit")
        self.fit_button.setToolTip("Fit view (F)")
        self.fit_button.clicked.connect(self.viewer.fit_view)

        header = QtWidgets.QHBoxLayout()
        header.addStretch(1)
        header.addWidget(self.upload_button)
        header.addWidget(self.axes_button)
        header.addWidget(self.fit_button)

        # Transport row
        self.play_button = QtWidgets.QPushButton("Pause")
        self.play_button.setToolTip("Play/Pause (Space)")
        self.play_button.clicked.connect(self._toggle_play)
        hint = QtWidgets.QLabel("Space · ←/→ step · Home/End · L loop · A axes")

        cfg = controller.config
        self.speed_slider = QtWidgets.QSlider(Qt.Horizontal)
        self.speed_slider.setRange(int(round(cfg.min_speed * SPEED_RESOLUTION)),
                                   int(round(cfg.max_speed * SPEED_RESOLUTION)))
        self.speed_slider.setValue(int(round(controller.clock.speed * SPEED_RESOLUTION)))
        self.speed_slider.valueChanged.connect(self._on_speed_changed)
        self.speed_label = QtWidgets.QLabel()

        self.loop_checkbox = QtWidgets.QCheckBox("Loop")
        self.loop_checkbox.setChecked(controller.clock.loop)
        self.loop_checkbox.toggled.connect(controller.clock.set_loop)

        transport = QtWidgets.QHBoxLayout()
        transport.addWidget(self.play_button)
        transport.addWidget(hint)
        transport.addStretch(1)
        transport.addWidget(QtWidgets.QLabel("Speed"))
        transport.addWidget(self.speed_slider)
        transport.addWidget(self.speed_label)
        transport.addWidget(self.loop_checkbox)

        # Timeline
        self.timeline = QtWidgets.QSlider(Qt.Horizontal)
        # valueChanged covers dragging, track clicks and slider keys
        self.timeline.valueChanged.connect(self._on_timeline_changed)
        self.tick_labels = [QtWidgets.QLabel() for _ in range(5)]
        ticks = QtWidgets.QHBoxLayout()
        for i, label in enumerate(self.tick_labels):
            if i:
                ticks.addStretch(1)
            ticks.addWidget(label)

        self.error_label = QtWidgets.QLabel()
        self.error_label.setStyleSheet("color: #fca5a5;")
        self.error_label.hide()

        layout = QtWidgets.QVBoxLayout()
        layout.addLayout(header)
        layout.addWidget(self.viewer, 1)
        layout.addLayout(transport)
        layout.addWidget(self.timeline)
        layout.addLayout(ticks)
        layout.addWidget(self.error_label)

        central = QtWidgets.QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)

        self.sync_controls()

    # =========================================================================
    # Loading
    # =========================================================================

    def open_file(self, path: str) -> bool:
        """Load a recording; on failure show the message and keep the current one"""
        try:
            self.controller.load_file(path)
        except (RecordingFormatError, OSError) as e:
            logger.error("Failed to load %s: %s", path, e)
            self.error_label.setText(str(e) or "Failed to parse JSON")
            self.error_label.show()
            return False
        self.error_label.hide()
        self.setWindowTitle(f"Vision Pro Hand Playback - {path}")
        self.viewer.refresh_frame()
        self.sync_controls()
        return True

    def _choose_file(self):
        path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self, "Open recording", "", "Recordings (*.json *.zst);;All files (*)")
        if path:
            self.open_file(path)

    # =========================================================================
    # Controls
    # =========================================================================

    def _toggle_play(self):
        self.controller.toggle_play()
        self.sync_controls()
        self.viewer.setFocus()

    def _toggle_axes(self):
        enabled = self.viewer.toggle_axes()
        self.axes_button.setText("Hide Axes" if enabled else "Show Axes")

    def _on_speed_changed(self, value: int):
        self.controller.clock.set_speed(value / SPEED_RESOLUTION)
        self.sync_controls()

    def _on_timeline_changed(self, value: int):
        self.controller.seek_timeline(value, TIMELINE_RESOLUTION)
        self.viewer.refresh_frame()

    def sync_controls(self):
        """Mirror controller state into the widgets without feeding changes back"""
        clock = self.controller.clock
        self.play_button.setText("Pause" if clock.running else "Play")
        self.play_button.setEnabled(self.controller.has_recording)
        self.speed_label.setText(f"{clock.speed:.1f}×")

        self.loop_checkbox.blockSignals(True)
        self.loop_checkbox.setChecked(clock.loop)
        self.loop_checkbox.blockSignals(False)

        self.timeline.blockSignals(True)
        self.timeline.setRange(0, max(1, int(clock.duration * TIMELINE_RESOLUTION)))
        if not self.timeline.isSliderDown():
            self.timeline.setValue(int(min(clock.duration, clock.t) * TIMELINE_RESOLUTION))
        self.timeline.blockSignals(False)

        for label, text in zip(self.tick_labels, self.controller.timeline_ticks()):
            label.setText(text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hand Playback - scrub and play recorded hand-tracking JSON")
    parser.add_argument("recording", nargs="?", default=None, help="Recording to open (.json or .zst)")
    parser.add_argument("--speed", type=float, default=None, help="Initial playback speed multiplier (default: 1.0)")
    parser.add_argument("--no-loop", action="store_true", help="Stop at the end instead of looping")
    parser.add_argument("--paused", action="store_true", help="Do not start playing after loading")
    parser.add_argument("--frame-step", type=float, default=None, help="Seconds per arrow-key step (default: 0.033)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: Optional[list] = None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='[%(asctime)s] [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S',
    )

    controller = PlaybackController(PlaybackConfig.from_args(args))
    if args.recording:
        try:
            controller.load_file(args.recording)
        except (RecordingFormatError, OSError) as e:
            print(f"[ERROR] Failed to load {args.recording}: {e}")
            sys.exit(1)

    app = QtWidgets.QApplication(sys.argv)
    window = PlaybackWindow(controller)
    window.resize(1100, 850)
    window.show()

    print("[INFO] Running viewer. Close window to exit...")
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
