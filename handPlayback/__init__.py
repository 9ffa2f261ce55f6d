"""
handPlayback

Playback and interpolation engine for recorded Vision Pro hand-tracking poses,
with a Qt OpenGL viewer.

This file intentionally avoids importing the viewer (PyQt5, OpenGL) so the
engine can be used in environments without a display. Import
``handPlayback.vizApp`` / ``handPlayback.vizWidget`` explicitly for the GUI.
"""

from .protocol import Joint, Frame, Recording
from .interpolation import sample, duration, blend_joints
from .playback import PlaybackClock, PlaybackController
from .loader import RecordingFormatError, load_recording_file, load_recording_text, parse_recording
from .config import PlaybackConfig

__all__ = [
    'Joint', 'Frame', 'Recording',
    'sample', 'duration', 'blend_joints',
    'PlaybackClock', 'PlaybackController', 'PlaybackConfig',
    'RecordingFormatError', 'load_recording_file', 'load_recording_text', 'parse_recording',
]
