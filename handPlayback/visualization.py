from OpenGL.GL import *

from .enums import Hand
from .geometry import bone_segments
from .protocol import Frame

# Joint colours per hand, bone colour (RGB 0..1)
LEFT_JOINT_COLOR = (1.0, 0.435, 0.38)
RIGHT_JOINT_COLOR = (0.38, 0.659, 1.0)
BONE_COLOR = (0.545, 0.545, 0.545)


def draw_hand_joints(frame: Frame, point_size=8.0):
    """
    Draw every joint of a frame as a point, coloured by hand.
    :param frame: Frame to draw
    :param point_size: GL point size in pixels
    """
    glPointSize(point_size)
    glBegin(GL_POINTS)
    for joint in frame.joints:
        if Hand.of(joint.name) is Hand.LEFT:
            glColor3f(*LEFT_JOINT_COLOR)
        else:
            glColor3f(*RIGHT_JOINT_COLOR)
        glVertex3f(joint.px, joint.py, joint.pz)
    glEnd()


def draw_hand_bones(frame: Frame, color=BONE_COLOR, line_width=1.0):
    """Draw the bone lines of the hand skeleton for joints present in the frame"""
    glColor3f(*color)
    glLineWidth(line_width)
    glBegin(GL_LINES)
    for a, b in bone_segments(frame):
        glVertex3f(a[0], a[1], a[2])
        glVertex3f(b[0], b[1], b[2])
    glEnd()


def draw_floor_grid(size=2.0, spacing=0.1, height=0.0, color=(0.2, 0.2, 0.2)):
    """
    Draw a floor grid for spatial reference.
    :param size: Total size of the grid in metres
    :param spacing: Spacing between grid lines in metres
    :param height: Y-coordinate of the floor
    :param color: RGB tuple for grid line color
    """
    glColor3f(*color)
    glLineWidth(1.0)
    glBegin(GL_LINES)

    half_size = size / 2.0
    steps = int(round(size / spacing))

    for i in range(steps + 1):
        offset = -half_size + i * spacing
        # Lines parallel to X-axis (running along Z)
        glVertex3f(-half_size, height, offset)
        glVertex3f(half_size, height, offset)
        # Lines parallel to Z-axis (running along X)
        glVertex3f(offset, height, -half_size)
        glVertex3f(offset, height, half_size)

    glEnd()


def draw_coordinate_axes(origin=(0.0, 0.0, 0.0), length=0.3, line_width=3.0):
    """
    Draw RGB coordinate axes at a given origin point.
    :param origin: Origin point as tuple (x,y,z)
    :param length: Length of each axis in metres
    :param line_width: Width of the axis lines
    """
    ox, oy, oz = origin

    glLineWidth(line_width)
    glBegin(GL_LINES)

    # X-axis (red)
    glColor3f(1.0, 0.0, 0.0)
    glVertex3f(ox, oy, oz)
    glVertex3f(ox + length, oy, oz)

    # Y-axis (green)
    glColor3f(0.0, 1.0, 0.0)
    glVertex3f(ox, oy, oz)
    glVertex3f(ox, oy + length, oz)

    # Z-axis (blue)
    glColor3f(0.0, 0.0, 1.0)
    glVertex3f(ox, oy, oz)
    glVertex3f(ox, oy, oz + length)

    glEnd()
