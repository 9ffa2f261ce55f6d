from enum import Enum


class Hand(Enum):
    """Which hand a joint belongs to (used for joint colouring)"""
    LEFT = "left"
    RIGHT = "right"

    @staticmethod
    def of(joint_name: str) -> "Hand":
        return Hand.LEFT if joint_name.startswith("left") else Hand.RIGHT


# Joints averaged to find the orbit target of the viewer
CENTER_JOINTS = ("leftWrist", "rightWrist", "leftforearmWrist", "rightforearmWrist")


def _hand_bones(side: str):
    """Bone pairs for one hand, using the Vision Pro joint naming (note the mixed casing)."""
    pairs = [
        (f"{side}forearmArm", f"{side}forearmWrist"),
        (f"{side}forearmWrist", f"{side}Wrist"),
        (f"{side}Wrist", f"{side}ThumbKnuckle"),
        (f"{side}ThumbKnuckle", f"{side}ThumbIntermediateBase"),
        (f"{side}ThumbIntermediateBase", f"{side}ThumbIntermediateTip"),
        (f"{side}ThumbIntermediateTip", f"{side}ThumbTip"),
    ]
    for finger in ("index", "middle", "ring", "little"):
        cap = finger.capitalize()
        pairs.extend([
            (f"{side}Wrist", f"{side}{finger}FingerMetacarpal"),
            (f"{side}{finger}FingerMetacarpal", f"{side}{cap}FingerKnuckle"),
            (f"{side}{cap}FingerKnuckle", f"{side}{cap}FingerIntermediateBase"),
            (f"{side}{cap}FingerIntermediateBase", f"{side}{cap}FingerIntermediateTip"),
            (f"{side}{cap}FingerIntermediateTip", f"{side}{cap}FingerTip"),
        ])
    return pairs


BONE_PAIRS = tuple(_hand_bones("left") + _hand_bones("right"))
