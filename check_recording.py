#!/usr/bin/env python3
"""
Recording Info Utility

Quickly check hand recording files before opening them in the viewer.

Usage:
    python check_recording.py hands.json
    python check_recording.py recordings/*.json
"""

import sys
from glob import glob
from pathlib import Path

from handPlayback.loader import get_recording_info


def format_duration(seconds):
    """Format duration in human-readable format"""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes}m"


def check_recording(filepath):
    """Display recording information"""
    print(f"\n{'='*70}")
    print(f"File: {filepath}")
    print(f"{'='*70}")

    info = get_recording_info(filepath)

    if not info:
        print("❌ Failed to read recording file")
        return False

    print(f"File size:       {info['file_size_mb']} MB")
    if 'started_at' in info:
        print(f"Started at:      {info['started_at']}")

    print(f"\n📊 Recording Statistics:")
    print(f"  Duration:      {format_duration(info['duration'])} ({info['duration']:.3f}s)")
    print(f"  Total frames:  {info['total_frames']:,}")
    print(f"  Framerate:     {info['framerate']:.1f} fps")

    print(f"\n✋ Joints:")
    print(f"  Distinct:      {len(info['joint_names'])}")
    print(f"  Per frame:     {info['min_joints']} - {info['max_joints']}")
    print(f"  Orientation:   {info['orientation_ratio'] * 100:.0f}% of joints")

    print(f"{'='*70}\n")
    return True


def main():
    if len(sys.argv) < 2:
        print("Usage: python check_recording.py <recording.json> [more files...]")
        print("\nExample:")
        print("  python check_recording.py hands.json")
        print("  python check_recording.py recordings/*.json")
        sys.exit(1)

    # Expand wildcards if needed
    all_files = []
    for pattern in sys.argv[1:]:
        if '*' in pattern or '?' in pattern:
            all_files.extend(glob(pattern))
        else:
            all_files.append(pattern)

    if not all_files:
        print("❌ No files found")
        sys.exit(1)

    ok = True
    for filepath in all_files:
        if not Path(filepath).exists():
            print(f"❌ File not found: {filepath}")
            ok = False
            continue

        ok = check_recording(filepath) and ok

    if len(all_files) > 1:
        print(f"\n✅ Checked {len(all_files)} recording(s)")

    sys.exit(0 if ok else 1)


if __name__ == '__main__':
    main()
