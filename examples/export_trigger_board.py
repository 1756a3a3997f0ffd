"""
Build the controller skeleton and export the trigger board blank as STEP.

Prints the main chain positions along the way so the numbers can be checked
against the printed part.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from build123d import export_step

from shcontroller.device import ControllerSkeleton
from shcontroller.io import load_skeleton_params

print("="*70)
print("TRIGGER BOARD FROM DEFAULT SKELETON")
print("="*70)
print()

# Pass overrides here, e.g. {"trigger": {"button_face": {"rotate_deg": -30}}}
params = load_skeleton_params({})
skeleton = ControllerSkeleton(params)

switch = skeleton.tactile_switch
print("Tactile switch:")
print(f"  Total height: {switch.total:.2f}mm")
print(f"  Below housing surface: {switch.subterranean_height:.2f}mm")
print()

board = skeleton.trigger.button_face.board
print("Trigger board (x, top to bottom):")
for name, value in zip(board.x_top_to_bottom.names, board.x_top_to_bottom.values):
    print(f"  {name:<14} {value:6.2f}mm")
print()

face = skeleton.trigger.button_face
print("Button face bottom outline:")
for name, (x, y) in zip(face.bottom_outer_seq.names, face.bottom_outer_seq.vecs):
    print(f"  {name:<14} ({x:6.2f}, {y:6.2f})")
print()

solid = board.board_solid
export_step(solid, "trigger_board.step")
print(f"✓ Board volume: {solid.volume:.2f} mm³")
print("✓ Saved trigger_board.step")
