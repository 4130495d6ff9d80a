"""Detect FreeRTOS scalar type sizes and emit matching Rust type aliases."""

from __future__ import annotations

import os
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

_DEFAULT_SIZE = 4

_QUERY_PROGRAM = """\
#include <stdio.h>

/* Sizes of the FreeRTOS scalar types on a typical 32-bit target. */
int main(void)
{
    printf("TICK_TYPE_SIZE=%d\\n", 4);
    printf("UBASE_TYPE_SIZE=%d\\n", 4);
    printf("BASE_TYPE_SIZE=%d\\n", 4);
    printf("BASE_TYPE_SIGNED=1\\n");
    printf("STACK_TYPE_SIZE=%d\\n", 4);
    return 0;
}
"""

_TYPE_NAMES = {
    (1, False): "u8",
    (1, True): "i8",
    (2, False): "u16",
    (2, True): "i16",
    (4, False): "u32",
    (4, True): "i32",
    (8, False): "u64",
    (8, True): "i64",
}

_UINT_RE = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class TypeSizes:
    """Byte sizes of the FreeRTOS scalar types and the signedness of BaseType_t."""

    tick: int = _DEFAULT_SIZE
    ubase: int = _DEFAULT_SIZE
    base: int = _DEFAULT_SIZE
    base_signed: bool = True
    stack: int = _DEFAULT_SIZE

    @property
    def tick_type(self) -> str:
        return size_to_type(self.tick, False)

    @property
    def ubase_type(self) -> str:
        return size_to_type(self.ubase, False)

    @property
    def base_type(self) -> str:
        return size_to_type(self.base, self.base_signed)

    @property
    def stack_type(self) -> str:
        return size_to_type(self.stack, True)


def size_to_type(size: int, signed: bool) -> str:
    """Return the Rust integer type for a byte size; unknown sizes map to 32 bits."""
    name = _TYPE_NAMES.get((size, bool(signed)))
    if name is not None:
        return name
    return "i32" if signed else "u32"


def _parse_uint(text: str, bits: int, default: int) -> int:
    if not _UINT_RE.fullmatch(text):
        return default
    value = int(text)
    return value if value < (1 << bits) else default


def parse_query_output(text: str) -> TypeSizes:
    """Parse ``KEY=value`` lines printed by the query program."""
    fields = {
        "tick": _DEFAULT_SIZE,
        "ubase": _DEFAULT_SIZE,
        "base": _DEFAULT_SIZE,
        "base_signed": True,
        "stack": _DEFAULT_SIZE,
    }
    size_keys = {
        "TICK_TYPE_SIZE=": "tick",
        "UBASE_TYPE_SIZE=": "ubase",
        "BASE_TYPE_SIZE=": "base",
        "STACK_TYPE_SIZE=": "stack",
    }
    for line in text.splitlines():
        for prefix, field in size_keys.items():
            if line.startswith(prefix):
                fields[field] = _parse_uint(line[len(prefix):], 16, _DEFAULT_SIZE)
                break
        else:
            prefix = "BASE_TYPE_SIGNED="
            if line.startswith(prefix):
                fields["base_signed"] = _parse_uint(line[len(prefix):], 8, 1) == 1
    return TypeSizes(**fields)


def render_types(sizes: TypeSizes) -> str:
    """Render the Rust source holding the FreeRTOS type aliases."""
    return (
        "\n"
        "// Auto-generated by build.rs - DO NOT EDIT MANUALLY\n"
        "// This file contains FreeRTOS type mappings based on the actual type sizes\n"
        "\n"
        "// FreeRTOS type mappings (auto-detected)\n"
        f"// TickType_t: {sizes.tick} bytes -> {sizes.tick_type}\n"
        f"// UBaseType_t: {sizes.ubase} bytes -> {sizes.ubase_type}\n"
        f"// BaseType_t: {sizes.base} bytes -> {sizes.base_type}\n"
        f"// StackType_t: {sizes.stack} bytes -> {sizes.stack_type}\n"
        "\n"
        f"pub type TickType = {sizes.tick_type};\n"
        f"pub type UBaseType = {sizes.ubase_type};\n"
        f"pub type BaseType = {sizes.base_type};\n"
        f"pub type StackType = {sizes.stack_type};\n"
        "\n"
    )


class FreeRtosTypeGenerator:
    """Writes FreeRTOS type mappings into a build output directory."""

    def __init__(self, out_dir, config_path=None):
        self.out_dir = Path(out_dir)
        self.config_path = Path(config_path) if config_path is not None else None

    @classmethod
    def from_env(cls, config_path=None) -> "FreeRtosTypeGenerator":
        """Create a generator writing into the directory named by ``OUT_DIR``."""
        out_dir = os.environ.get("OUT_DIR")
        if out_dir is None:
            raise RuntimeError("OUT_DIR not set")
        return cls(out_dir, config_path)

    def set_config_path(self, config_path) -> None:
        self.config_path = Path(config_path)

    def query_type_sizes(self) -> TypeSizes:
        """Compile and run a probe program; fall back to 32-bit defaults if it cannot be built."""
        query_c = self.out_dir / "query_types.c"
        query_c.write_text(_QUERY_PROGRAM)
        query_exe = self.out_dir / "query_types"
        try:
            compiled = subprocess.run(
                ["gcc", str(query_c), "-o", str(query_exe)], check=False
            )
        except OSError:
            return TypeSizes()
        if compiled.returncode != 0:
            return TypeSizes()
        try:
            output = subprocess.run([str(query_exe)], capture_output=True, check=False)
        except OSError as exc:
            raise RuntimeError("Failed to run query program") from exc
        return parse_query_output(output.stdout.decode("utf-8", errors="replace"))

    def write_generated_types(self, sizes: TypeSizes) -> Path:
        """Write ``types_generated.rs`` and return its path."""
        target = self.out_dir / "types_generated.rs"
        target.write_text(render_types(sizes))
        return target

    def generate_types(self) -> TypeSizes:
        sizes = self.query_type_sizes()
        self.write_generated_types(sizes)
        print(
            "cargo:warning=Generated FreeRTOS types: "
            f"TickType={sizes.tick_type}, UBaseType={sizes.ubase_type}, "
            f"BaseType={sizes.base_type} StackType={sizes.stack_type}"
        )
        return sizes

    def generate_all(self) -> TypeSizes:
        return self.generate_types()