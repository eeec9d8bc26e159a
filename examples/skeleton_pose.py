#!/usr/bin/env python3
"""Forward kinematics for a 2-D skeleton with AccuTree.

Every bone is a node. Its accumulator is the transform from the skeleton's
root to the bone's tip, so the walk folds joint rotations and bone lengths
down each limb. The joint angles are the per-step parameters, given in the
order the bones are visited.

Usage:
    python examples/skeleton_pose.py [angle_in_degrees ...]
"""

import math
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from accutree import Affine2D, Visitable

Point = Tuple[float, float]


class Bone(Visitable):
    """A bone of fixed length hanging off its parent's tip."""

    accumulator_type = Affine2D

    def __init__(self, name: str, length: float, children: Optional[List['Bone']] = None):
        self.name = name
        self.length = length
        self._children = children or []

    def children(self) -> List['Bone']:
        return self._children

    def accumulate(self, acc: Affine2D, angle: Optional[float] = None) -> Affine2D:
        # Rotate at the joint, then extend along the bone
        local = Affine2D.rotation(angle or 0.0).accumulate(Affine2D.translation(self.length, 0.0))
        return acc.accumulate(local)

    def on_visit(self, path, payload: Dict[str, Point]) -> None:
        payload[self.name] = path.accumulator.apply(0.0, 0.0)


def build_arm() -> Bone:
    """Shoulder -> upper arm -> forearm -> two fingers."""
    return Bone("upper_arm", 3.0, [
        Bone("forearm", 2.0, [
            Bone("index", 1.0),
            Bone("thumb", 0.5),
        ]),
    ])


def pose(skeleton: Bone, angles_degrees: List[float]) -> Dict[str, Point]:
    """Compute the tip position of every bone for the given joint angles."""
    tips: Dict[str, Point] = {}
    skeleton.visit(parameters=[math.radians(a) for a in angles_degrees], payload=tips)
    return tips


def main():
    """Pose the arm and print every tip."""
    angles = [float(a) for a in sys.argv[1:]] or [90.0, -90.0, 0.0, 45.0]

    print("AccuTree Skeleton Pose")
    print(f"{'=' * 40}")
    print(f"Joint angles: {angles}\n")

    for name, (x, y) in pose(build_arm(), angles).items():
        print(f"  {name:<10} tip at ({x:6.2f}, {y:6.2f})")


if __name__ == "__main__":
    main()
