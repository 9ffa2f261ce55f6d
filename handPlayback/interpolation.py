"""
Frame sampling and joint blending for recorded hand poses.

Given a time-ordered recording and a query time, ``sample`` returns a pose for
that instant: the first/last frame outside the recorded range, otherwise a
blend of the two bracketing frames. Positions are interpolated linearly,
orientations are held from the earlier frame.
"""

from typing import Dict, Sequence, Tuple, Union

from .protocol import Frame, Joint, Recording

# Floor for the bracket width so coincident timestamps never divide by zero
EPSILON = 1e-9

FrameSource = Union[Recording, Sequence[Frame]]


def clamp(v: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, v))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _frames_of(source: FrameSource) -> Sequence[Frame]:
    if isinstance(source, Recording):
        return source.frames
    return source


def duration(source: FrameSource) -> float:
    """Span between the first and last frame timestamps (0 for empty or single-frame input)"""
    frames = _frames_of(source)
    if not frames:
        return 0.0
    return frames[-1].time - frames[0].time


def index_joints(joints: Sequence[Joint]) -> Dict[str, Joint]:
    joint_map = {}
    for joint in joints:
        joint_map[joint.name] = joint
    return joint_map


def interp_joint(a: Joint, b: Joint, t: float) -> Joint:
    """Blend position from a to b; name and orientation come from a unchanged."""
    return Joint(
        name=a.name,
        px=lerp(a.px, b.px, t),
        py=lerp(a.py, b.py, t),
        pz=lerp(a.pz, b.pz, t),
        ox=a.ox, oy=a.oy, oz=a.oz, ow=a.ow,
    )


def blend_joints(f0: Frame, f1: Frame, dt: float) -> Tuple[Joint, ...]:
    """
    Build the joint set between two bracket frames.

    - joint in both frames: position lerped, orientation taken from f0
    - joint only in f0: held at its f0 value
    - joint only in f1: dropped until the query time reaches f1
    """
    map0 = index_joints(f0.joints)
    map1 = index_joints(f1.joints)

    names = list(map0)
    names.extend(n for n in map1 if n not in map0)

    joints = []
    for name in names:
        a = map0.get(name)
        if a is None:
            continue
        b = map1.get(name, a)
        joints.append(interp_joint(a, b, dt))
    return tuple(joints)


def find_bracket(frames: Sequence[Frame], t: float) -> Tuple[int, int]:
    """
    Binary search for adjacent indices (lo, lo + 1) with frames[lo].time <= t.

    Callers must ensure frames[0].time < t < frames[-1].time.
    """
    lo, hi = 0, len(frames) - 1
    while lo + 1 < hi:
        mid = (lo + hi) // 2
        if frames[mid].time <= t:
            lo = mid
        else:
            hi = mid
    return lo, hi


def sample(source: FrameSource, t: float) -> Frame:
    """
    Return the pose at time t.

    Args:
        source: Recording (or plain sequence of frames) sorted by time
        t: query time in seconds

    Returns:
        frames[0] / frames[-1] themselves when t is outside the recorded range,
        otherwise a new Frame stamped with t. An empty source yields an empty
        Frame at time 0.
    """
    frames = _frames_of(source)
    if not frames:
        return Frame(time=0.0, joints=())
    if t <= frames[0].time:
        return frames[0]
    if t >= frames[-1].time:
        return frames[-1]

    lo, hi = find_bracket(frames, t)
    f0, f1 = frames[lo], frames[hi]
    dt = (t - f0.time) / max(EPSILON, f1.time - f0.time)
    return Frame(time=t, joints=blend_joints(f0, f1, dt))
