"""Build entry point: generate FreeRTOS type mappings for the workspace."""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from osal_typegen.generator import FreeRtosTypeGenerator

_WATCHED_FILES = (
    "build.rs",
    "../osal-rs-build/osal-rs-ffi-freertos/src/osal_rs_ffi_freertos.c",
    "../osal-rs-build/osal-rs-ffi-freertos/inc/osal_rs_ffi_freertos.h",
)

_CONFIG_RELATIVE = Path("inc/hhg-config/pico/FreeRTOSConfig.h")


def workspace_config_path(manifest_dir) -> Path:
    """Return the FreeRTOSConfig.h path two levels above the manifest directory."""
    parent = Path(manifest_dir).parent
    workspace_root = parent.parent
    if workspace_root == parent:
        raise ValueError("Failed to find workspace root")
    return workspace_root / _CONFIG_RELATIVE


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate FreeRTOS type mappings into the build output directory."
    )
    parser.add_argument(
        "--manifest-dir",
        default=os.environ.get("CARGO_MANIFEST_DIR"),
        help="crate manifest directory (default: $CARGO_MANIFEST_DIR)",
    )
    parser.add_argument(
        "--out-dir",
        default=os.environ.get("OUT_DIR"),
        help="output directory (default: $OUT_DIR)",
    )
    args = parser.parse_args(argv)

    for path in _WATCHED_FILES:
        print(f"cargo:rerun-if-changed={path}")

    if args.manifest_dir is None:
        parser.error("CARGO_MANIFEST_DIR not set")
    if args.out_dir is None:
        parser.error("OUT_DIR not set")
    try:
        config = workspace_config_path(args.manifest_dir)
    except ValueError as exc:
        parser.error(str(exc))

    FreeRtosTypeGenerator(args.out_dir, config).generate_all()
    return 0