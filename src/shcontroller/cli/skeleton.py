"""
Command-line interface for inspecting the controller skeleton.

Prints the resolved skeleton points as JSON on stdout.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..core.errors import ChainError, TransformError
from ..core.skeleton import skeleton_points_to_dict, skeleton_to_view_node, visible_points
from ..device.skeleton import build_skeleton
from ..io.params import load_skeleton_params

logger = logging.getLogger(__name__)


def parse_overrides(assignments: List[str]) -> Dict[str, Any]:
    """
    Turn ["grip.x_total_mm=80", ...] into a nested parameter dict.

    Values are parsed as JSON where possible (numbers, lists), otherwise
    kept as strings; pydantic coerces them afterwards.
    """
    data: Dict[str, Any] = {}
    for assignment in assignments:
        key, sep, raw = assignment.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got '{assignment}'")
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            value = raw
        *parents, leaf = key.split(".")
        target = data
        for parent in parents:
            target = target.setdefault(parent, {})
        target[leaf] = value
    return data


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Print the resolved controller skeleton as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Whole skeleton, each part in its own local frame
  shcontroller-skeleton

  # Only the trigger switch board, mapped into global coordinates
  shcontroller-skeleton --part Trigger.ButtonFace.Board --global

  # Points the viewer shows by default, as a flat list
  shcontroller-skeleton --visible

  # Override dimensions
  shcontroller-skeleton --set grip.x_total_mm=80 --set button_pad.rotate_deg=70
        """
    )

    parser.add_argument(
        '--part',
        type=str,
        default=None,
        help='Dotted path of the part to print (default: whole controller)'
    )

    parser.add_argument(
        '--global',
        dest='global_frame',
        action='store_true',
        help='Map all points into the frame of the selected part\'s parent'
    )

    parser.add_argument(
        '--visible',
        action='store_true',
        help='Print the flat list of default-visible points instead of the tree'
    )

    parser.add_argument(
        '--set',
        dest='overrides',
        action='append',
        default=[],
        metavar='KEY=VALUE',
        help='Override a skeleton parameter, e.g. grip.x_total_mm=80 (repeatable)'
    )

    parser.add_argument(
        '--indent',
        type=int,
        default=2,
        help='JSON indentation (default: 2)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log chain resolution and cache activity'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        params = load_skeleton_params(parse_overrides(args.overrides))
    except (ValueError, ValidationError) as e:
        print(f"Error in parameters: {e}", file=sys.stderr)
        return 1

    try:
        root = build_skeleton(params)
        node = root.child(args.part) if args.part else root
    except (ChainError, TransformError) as e:
        print(f"Error resolving skeleton: {e}", file=sys.stderr)
        return 1
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1

    logger.info(f"Resolved skeleton part {node.name}")

    if args.visible:
        points = visible_points(skeleton_to_view_node(node), force_visible=True)
        output: Any = [
            {"point": list(p.point), "color": list(p.color) if p.color else None, "radius": p.radius}
            for p in points
        ]
    else:
        output = skeleton_points_to_dict(node, global_frame=args.global_frame)

    print(json.dumps(output, indent=args.indent))
    return 0


if __name__ == '__main__':
    sys.exit(main())
