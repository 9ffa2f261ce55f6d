from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple


ORIENTATION_KEYS = ("ox", "oy", "oz", "ow")


@dataclass(frozen=True)
class Joint:
    """A single tracked hand joint.

    Position is always present. Each orientation component is independently
    optional (Vision Pro exports sometimes omit the quaternion).
    """
    name: str
    px: float
    py: float
    pz: float
    ox: Optional[float] = None
    oy: Optional[float] = None
    oz: Optional[float] = None
    ow: Optional[float] = None

    @property
    def pos(self) -> Tuple[float, float, float]:
        return (self.px, self.py, self.pz)

    @property
    def ori(self) -> Tuple[Optional[float], Optional[float], Optional[float], Optional[float]]:
        return (self.ox, self.oy, self.oz, self.ow)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dict for JSON serialization (absent orientation keys are omitted)"""
        d = {"name": self.name, "px": self.px, "py": self.py, "pz": self.pz}
        for key in ORIENTATION_KEYS:
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        return d

    @staticmethod
    def from_dict(d) -> "Joint":
        return Joint(
            name=d["name"],
            px=float(d["px"]),
            py=float(d["py"]),
            pz=float(d["pz"]),
            ox=_optional_float(d.get("ox")),
            oy=_optional_float(d.get("oy")),
            oz=_optional_float(d.get("oz")),
            ow=_optional_float(d.get("ow")),
        )


@dataclass(frozen=True)
class Frame:
    time: float                   # seconds, relative to the first frame
    joints: Tuple[Joint, ...] = ()

    def joint_names(self) -> Tuple[str, ...]:
        return tuple(j.name for j in self.joints)

    def get_joint(self, name: str) -> Optional[Joint]:
        """Return the joint with the given name, or None if it is not tracked in this frame"""
        for joint in self.joints:
            if joint.name == name:
                return joint
        return None

    def to_dict(self):
        return {
            "time": self.time,
            "joints": [j.to_dict() for j in self.joints],
        }

    @staticmethod
    def from_dict(d) -> "Frame":
        return Frame(
            time=float(d["time"]),
            joints=tuple(Joint.from_dict(j) for j in d["joints"]),
        )


@dataclass(frozen=True)
class Recording:
    """An ordered, time-normalized sequence of frames for one loaded session."""
    frames: Tuple[Frame, ...] = field(default_factory=tuple)
    started_at: Optional[float] = None   # capture wall-clock epoch, if the export carried one

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    @property
    def duration(self) -> float:
        if not self.frames:
            return 0.0
        return self.frames[-1].time - self.frames[0].time

    def to_dict(self):
        data = {"frames": [f.to_dict() for f in self.frames]}
        # Only include startedAt when present
        if self.started_at is not None:
            data["startedAt"] = self.started_at
        return data

    @staticmethod
    def from_dict(d) -> "Recording":
        return Recording(
            frames=tuple(Frame.from_dict(f) for f in d["frames"]),
            started_at=_optional_float(d.get("startedAt")),
        )


def _optional_float(value) -> Optional[float]:
    return None if value is None else float(value)
