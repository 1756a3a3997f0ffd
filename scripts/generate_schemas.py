#!/usr/bin/env python3
"""
Generate JSON Schemas from the skeleton parameter models.

The Pydantic models are the source of truth for controller dimensions; the
schema lets editors and the web viewer validate parameter files.

Usage:
    python scripts/generate_schemas.py
"""

import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pydantic import __version__ as PYDANTIC_VERSION

from shcontroller.enums import Axis, TotalPolicy
from shcontroller.io.params import (
    ButtonPadParams,
    GripParams,
    PointViewMeta,
    SkeletonParams,
    TactileSwitchParams,
    TriggerParams,
)

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def get_model_schema(model_class) -> dict:
    """Get JSON schema from a Pydantic model, keyed by field name."""
    schema = model_class.model_json_schema(by_alias=False)
    schema["$schema"] = SCHEMA_DIALECT
    return schema


def main():
    output_dir = Path(__file__).parent.parent / "schemas"
    output_dir.mkdir(exist_ok=True)

    print("Generating JSON schemas from Pydantic models...")
    print(f"  Pydantic version: {PYDANTIC_VERSION}")

    # Full parameter set
    skeleton_schema = get_model_schema(SkeletonParams)
    skeleton_schema["title"] = "SkeletonParams"
    skeleton_schema["description"] = "All dimensions of the v1.1 controller skeleton (mm, degrees)"

    skeleton_file = output_dir / "skeleton-params-v1.1.json"
    with open(skeleton_file, "w") as f:
        json.dump(skeleton_schema, f, indent=2)
    print(f"  Generated: {skeleton_file}")

    # Per-part schemas for reference
    components = {
        "button-pad-params": ButtonPadParams,
        "trigger-params": TriggerParams,
        "grip-params": GripParams,
        "tactile-switch-params": TactileSwitchParams,
        "point-view-meta": PointViewMeta,
    }

    for name, model in components.items():
        schema_file = output_dir / f"{name}-v1.1.json"
        with open(schema_file, "w") as f:
            json.dump(get_model_schema(model), f, indent=2)
        print(f"  Generated: {schema_file}")

    enums_schema = {
        "$schema": SCHEMA_DIALECT,
        "title": "ShcontrollerEnums",
        "description": "Enum definitions used in transform items and chain options",
        "definitions": {
            "Axis": {
                "type": "string",
                "enum": [e.value for e in Axis],
                "description": "Rotation/mirror axis of a transform op"
            },
            "TotalPolicy": {
                "type": "string",
                "enum": [e.value for e in TotalPolicy],
                "description": "Whether an all-fixed chain must add up to its total"
            },
        }
    }

    enums_file = output_dir / "enums-v1.1.json"
    with open(enums_file, "w") as f:
        json.dump(enums_schema, f, indent=2)
    print(f"  Generated: {enums_file}")

    print(f"\nAll schemas written to: {output_dir}/")


if __name__ == "__main__":
    main()
