#!/usr/bin/env python3
"""
Qt OpenGL viewer widget for hand recording playback
"""

import math
import time
from typing import Optional

from PyQt5 import QtCore
from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtOpenGL import QGLWidget
from OpenGL.GL import *
from OpenGL.GLU import *

from .geometry import clamp_distance, fit_view, orbit_from_eye, view_center
from .playback import PlaybackController
from .protocol import Frame
from .visualization import draw_coordinate_axes, draw_floor_grid, draw_hand_bones, draw_hand_joints

# Initial eye position relative to the orbit target (metres)
DEFAULT_EYE = (0.2, 1.2, 0.6)

_KEY_NAMES = {
    Qt.Key_Space: "Space",
    Qt.Key_Right: "ArrowRight",
    Qt.Key_Left: "ArrowLeft",
    Qt.Key_Home: "Home",
    Qt.Key_End: "End",
    Qt.Key_L: "l",
}


class HandPlaybackGLWidget(QGLWidget):
    """OpenGL widget that drives a PlaybackController and draws the sampled hand pose

    The update timer is the host tick: every timeout measures the wall-clock
    delta since the previous one and advances the controller by it.
    """

    frame_advanced = QtCore.pyqtSignal()
    file_dropped = QtCore.pyqtSignal(str)

    def __init__(self, controller: PlaybackController, parent=None):
        super(HandPlaybackGLWidget, self).__init__(parent)

        self.controller = controller

        # Camera parameters (spherical coordinates around the hands)
        self.camera_distance, self.camera_azimuth, self.camera_elevation = orbit_from_eye(DEFAULT_EYE, (0.0, 0.0, 0.0))
        self.camera_target = [0.0, 0.0, 0.0]
        self.pan_offset = [0.0, 0.0, 0.0]

        # Mouse interaction
        self._dragging = False
        self._last_pos = None

        self.axes_enabled = False
        self.current_frame: Optional[Frame] = None

        # Host tick
        self._last_tick = time.perf_counter()
        self.update_timer = QTimer()
        self.update_timer.timeout.connect(self._on_tick)
        self.update_timer.start(controller.config.tick_interval_ms)

        self.setAcceptDrops(True)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setFocus()

    def close(self):
        if hasattr(self, 'update_timer'):
            self.update_timer.stop()
        super().close()

    def _on_tick(self):
        now = time.perf_counter()
        delta = now - self._last_tick
        self._last_tick = now
        self.current_frame = self.controller.tick(delta)
        self.frame_advanced.emit()
        self.update()

    def refresh_frame(self):
        """Resample after a seek or a recording swap without advancing time"""
        self.current_frame = self.controller.current_frame()
        self.update()

    def toggle_axes(self) -> bool:
        self.axes_enabled = not self.axes_enabled
        self.update()
        return self.axes_enabled

    def fit_view(self):
        """Frame all joints of the current pose"""
        fitted = fit_view(self.current_frame)
        if fitted is None:
            return
        eye, center = fitted
        distance, azimuth, elevation = orbit_from_eye(eye, center)
        if distance <= 0.0:
            return
        self.camera_distance = distance
        self.camera_azimuth = azimuth
        self.camera_elevation = elevation
        orbit_center = view_center(self.current_frame)
        self.pan_offset = [float(center[i] - orbit_center[i]) for i in range(3)]
        self.update()

    # =========================================================================
    # OpenGL
    # =========================================================================

    def initializeGL(self):
        glEnable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glEnable(GL_POINT_SMOOTH)
        glClearColor(0.04, 0.04, 0.05, 1.0)

    def resizeGL(self, width, height):
        glViewport(0, 0, width, height)
        self.update_projection()

    def update_projection(self):
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()

        aspect = self.width() / max(1, self.height())
        gluPerspective(45.0, aspect, 0.01, 100.0)

        glMatrixMode(GL_MODELVIEW)

    def setup_camera_view(self):
        center = view_center(self.current_frame)
        self.camera_target = [float(center[i]) + self.pan_offset[i] for i in range(3)]

        yaw_rad = math.radians(self.camera_azimuth)
        pitch_rad = math.radians(self.camera_elevation)
        cam_x = self.camera_target[0] + self.camera_distance * math.cos(pitch_rad) * math.sin(yaw_rad)
        cam_y = self.camera_target[1] + self.camera_distance * math.sin(pitch_rad)
        cam_z = self.camera_target[2] + self.camera_distance * math.cos(pitch_rad) * math.cos(yaw_rad)
        gluLookAt(cam_x, cam_y, cam_z,
                  self.camera_target[0], self.camera_target[1], self.camera_target[2],
                  0, 1, 0)

    def paintGL(self):
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        glLoadIdentity()

        self.setup_camera_view()
        draw_floor_grid()

        if self.axes_enabled:
            draw_coordinate_axes()

        frame = self.current_frame
        if frame is not None:
            draw_hand_bones(frame)
            draw_hand_joints(frame)

        self.draw_overlay()

    def draw_overlay(self):
        """HUD: time / duration top-left, transport state top-right"""
        glDisable(GL_DEPTH_TEST)
        glColor4f(1.0, 1.0, 1.0, 1.0)
        try:
            self.renderText(12, 22, self.controller.time_label())
            status = self.controller.status_label()
            self.renderText(max(12, self.width() - 8 * len(status) - 12), 22, status)
            if not self.controller.has_recording:
                self.renderText(self.width() // 2 - 70, self.height() // 2, "Drop a recording")
        finally:
            glEnable(GL_DEPTH_TEST)

    # =========================================================================
    # Mouse / keyboard / drag-and-drop
    # =========================================================================

    def mousePressEvent(self, event):
        if event.button() in (Qt.LeftButton, Qt.RightButton, Qt.MiddleButton):
            self._dragging = True
            self._last_pos = event.pos()
            self.setFocus()

    def mouseReleaseEvent(self, event):
        self._dragging = False
        self._last_pos = None

    def mouseMoveEvent(self, event):
        if not self._dragging or self._last_pos is None:
            return

        dx = event.x() - self._last_pos.x()
        dy = event.y() - self._last_pos.y()
        buttons = event.buttons()

        # Left: rotate
        if buttons & Qt.LeftButton:
            self.camera_azimuth += dx * 0.5
            self.camera_elevation += -dy * 0.5
            self.camera_elevation = max(-89.9, min(89.9, self.camera_elevation))

        # Right: pan
        elif buttons & Qt.RightButton:
            pan_scale = max(0.0001, self.camera_distance * 0.002)
            yaw_rad = math.radians(self.camera_azimuth)
            right_x = math.cos(yaw_rad)
            right_z = -math.sin(yaw_rad)
            self.pan_offset[0] += -dx * right_x * pan_scale
            self.pan_offset[1] += dy * pan_scale
            self.pan_offset[2] += -dx * right_z * pan_scale

        # Middle: zoom
        elif buttons & Qt.MiddleButton:
            self.camera_distance = clamp_distance(self.camera_distance * (1.0 + dy * 0.01))

        self._last_pos = event.pos()
        self.update()

    def wheelEvent(self, event):
        delta = event.angleDelta().y()
        if delta == 0:
            return
        factor = 0.9 if delta > 0 else 1.1
        self.camera_distance = clamp_distance(self.camera_distance * factor)
        self.update()

    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key_A:
            self.toggle_axes()
        elif key == Qt.Key_F:
            self.fit_view()
        elif key in _KEY_NAMES and self.controller.handle_key(_KEY_NAMES[key]):
            self.refresh_frame()
            self.frame_advanced.emit()
        else:
            super().keyPressEvent(event)

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        urls = event.mimeData().urls()
        if urls:
            event.acceptProposedAction()
            self.file_dropped.emit(urls[0].toLocalFile())
