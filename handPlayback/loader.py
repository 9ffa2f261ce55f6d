"""
Recording ingestion

Turns a hand-tracking JSON export into a validated, time-normalized Recording.
Three top-level shapes are accepted, checked in this order:

    [ {frame}, ... ]                        bare array of frames
    { "frames": [ {frame}, ... ] }          object with a frames array
    { "data": { "frames": [ ... ] } }       frames nested under data

Each frame is ``{"time": number, "joints": [{"name", "px", "py", "pz",
"ox"?, "oy"?, "oz"?, "ow"?}, ...]}``. Files ending in ``.zst`` are
decompressed with zstandard first.
"""

import json
import logging
import math
import numbers
from pathlib import Path
from typing import Dict, List, Optional, Union

import zstandard as zstd

from .protocol import Frame, Joint, Recording, ORIENTATION_KEYS

logger = logging.getLogger(__name__)

POSITION_KEYS = ("px", "py", "pz")


class RecordingFormatError(ValueError):
    """Raised when an input file does not describe a usable recording"""


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _reject_constant(name: str):
    # json accepts NaN/Infinity/-Infinity, which are not valid JSON
    raise RecordingFormatError(f"Failed to parse JSON: invalid constant {name!r}")


def _find_frames(raw) -> Optional[list]:
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        if isinstance(raw.get("frames"), list):
            return raw["frames"]
        data = raw.get("data")
        if isinstance(data, dict) and isinstance(data.get("frames"), list):
            return data["frames"]
    return None


def _find_started_at(raw) -> Optional[float]:
    if not isinstance(raw, dict):
        return None
    value = raw.get("startedAt")
    if value is None and isinstance(raw.get("data"), dict):
        value = raw["data"].get("startedAt")
    return float(value) if _is_number(value) else None


def _parse_joint(obj, frame_idx: int, joint_idx: int) -> Joint:
    where = f"frame {frame_idx}, joint {joint_idx}"
    if not isinstance(obj, dict):
        raise RecordingFormatError(f"{where}: joint must be an object")
    name = obj.get("name")
    if not isinstance(name, str):
        raise RecordingFormatError(f"{where}: missing or non-string 'name'")
    for key in POSITION_KEYS:
        if not _is_number(obj.get(key)):
            raise RecordingFormatError(f"{where} ({name}): '{key}' must be a number")
    orientation = {}
    for key in ORIENTATION_KEYS:
        value = obj.get(key)
        if value is None:
            continue
        if not _is_number(value):
            raise RecordingFormatError(f"{where} ({name}): '{key}' must be a number")
        orientation[key] = float(value)
    return Joint(
        name=name,
        px=float(obj["px"]),
        py=float(obj["py"]),
        pz=float(obj["pz"]),
        **orientation,
    )


def _parse_frame(obj, frame_idx: int) -> Frame:
    if not isinstance(obj, dict):
        raise RecordingFormatError(f"frame {frame_idx}: frame must be an object")
    if not _is_number(obj.get("time")):
        raise RecordingFormatError(f"frame {frame_idx}: 'time' must be a number")
    joints = obj.get("joints")
    if not isinstance(joints, list):
        raise RecordingFormatError(f"frame {frame_idx}: missing 'joints' array")
    return Frame(
        time=float(obj["time"]),
        joints=tuple(_parse_joint(j, frame_idx, i) for i, j in enumerate(joints)),
    )


def normalize_frames(frames: List[Frame]) -> List[Frame]:
    """Sort frames by time (stable, ties keep input order) and shift so the first frame is at 0."""
    ordered = sorted(frames, key=lambda f: f.time)
    if ordered != frames:
        logger.warning("Frames were not in time order; sorted %d frames by timestamp", len(frames))
    if not ordered:
        return ordered
    t0 = ordered[0].time
    return [Frame(time=f.time - t0, joints=f.joints) for f in ordered]


def parse_recording(raw) -> Recording:
    """
    Build a Recording from already-decoded JSON data.

    Raises:
        RecordingFormatError: if no frames array is found or a frame/joint is malformed
    """
    raw_frames = _find_frames(raw)
    if not raw_frames:
        raise RecordingFormatError("No frames array found.")

    frames = [_parse_frame(f, i) for i, f in enumerate(raw_frames)]
    frames = normalize_frames(frames)
    recording = Recording(frames=tuple(frames), started_at=_find_started_at(raw))
    logger.debug("Parsed recording: %d frames, %.2fs", len(recording), recording.duration)
    return recording


def load_recording_text(text: Union[str, bytes]) -> Recording:
    """Parse a JSON document (str or UTF-8 bytes) into a Recording"""
    try:
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        raw = json.loads(text, parse_constant=_reject_constant)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RecordingFormatError(f"Failed to parse JSON: {e}") from e
    return parse_recording(raw)


def load_recording_file(path: Union[str, Path]) -> Recording:
    """
    Load a recording from disk.

    Args:
        path: .json file, or .zst for a zstandard-compressed JSON export

    Raises:
        RecordingFormatError: on invalid content
        OSError: if the file cannot be read
    """
    path = Path(path)
    logger.info("Loading recording: %s", path)
    with open(path, "rb") as f:
        if path.suffix == ".zst":
            decompressor = zstd.ZstdDecompressor()
            try:
                with decompressor.stream_reader(f) as reader:
                    data = reader.read()
            except zstd.ZstdError as e:
                raise RecordingFormatError(f"Failed to decompress {path.name}: {e}") from e
        else:
            data = f.read()
    return load_recording_text(data)


def summarize_recording(recording: Recording) -> Dict:
    """Metadata summary of a loaded recording (frame count, duration, joints, orientation coverage)"""
    names = {}
    joints_per_frame = [len(f.joints) for f in recording.frames]
    with_orientation = 0
    total_joints = 0
    for frame in recording.frames:
        for joint in frame.joints:
            names.setdefault(joint.name, None)
            total_joints += 1
            if any(v is not None for v in joint.ori):
                with_orientation += 1

    duration = recording.duration
    info = {
        'total_frames': len(recording),
        'duration': duration,
        'framerate': (len(recording) - 1) / duration if duration > 0 else 0.0,
        'joint_names': list(names),
        'min_joints': min(joints_per_frame) if joints_per_frame else 0,
        'max_joints': max(joints_per_frame) if joints_per_frame else 0,
        'orientation_ratio': with_orientation / total_joints if total_joints else 0.0,
    }
    if recording.started_at is not None:
        info['started_at'] = recording.started_at
    return info


def get_recording_info(path: Union[str, Path]) -> Optional[Dict]:
    """Load a file and summarize it; returns None (and logs why) if it cannot be read"""
    try:
        recording = load_recording_file(path)
    except (RecordingFormatError, OSError) as e:
        logger.error("Failed to get recording info for %s: %s", path, e)
        return None
    info = summarize_recording(recording)
    info['file_size_mb'] = round(Path(path).stat().st_size / (1024 * 1024), 2)
    return info
