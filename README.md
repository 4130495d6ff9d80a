# osal-typegen

`osal-typegen` is a build step. It writes `types_generated.rs`, a file of
Rust type aliases for four FreeRTOS integer types:

| FreeRTOS type | Alias       | Signed         |
|---------------|-------------|----------------|
| `TickType_t`  | `TickType`  | no             |
| `UBaseType_t` | `UBaseType` | no             |
| `BaseType_t`  | `BaseType`  | as reported    |
| `StackType_t` | `StackType` | yes            |

## How it works

`FreeRtosTypeGenerator.query_type_sizes()` writes a small C probe program,
`query_types.c`, into the output directory. It compiles the program with
`gcc` and runs it. The program prints lines such as `TICK_TYPE_SIZE=4`, and
`parse_query_output()` reads them into a `TypeSizes` value. A missing or
malformed value falls back to 4 bytes, or to signed for `BASE_TYPE_SIGNED`.

The probe program reports the common 32-bit layout. Every type is 4 bytes
and `BaseType_t` is signed. If `gcc` cannot be started, or compiling fails,
the generator uses the same layout directly. If the program compiles but
cannot be run, a `RuntimeError` is raised.

`size_to_type(size, signed)` maps a byte size of 1, 2, 4 or 8 to `u8` …
`i64`. Any other size maps to `u32`, or to `i32` when signed.

## Installation

```
pip install .
```

Add the `test` extra to get the test dependencies:

```
pip install .[test]
```

## Command line

```
osal-typegen [--manifest-dir DIR] [--out-dir DIR]
```

- `--out-dir` is where the files go. It defaults to `$OUT_DIR`.
- `--manifest-dir` is the crate directory. It defaults to
  `$CARGO_MANIFEST_DIR`. The workspace root is two levels above it.
  The configuration path is `inc/hhg-config/pico/FreeRTOSConfig.h` under
  that root.

The command first prints `cargo:rerun-if-changed=` lines for the files the
build depends on. It then generates the types. Last, it prints a
`cargo:warning=` line that sums up the chosen types. If either directory is
unknown, or no workspace root can be found, the command exits with a usage
error.

## Library use

```python
from osal_typegen.generator import (
    FreeRtosTypeGenerator, TypeSizes, parse_query_output, render_types, size_to_type,
)

generator = FreeRtosTypeGenerator("build/out", config_path="inc/FreeRTOSConfig.h")
sizes = generator.generate_all()        # returns the TypeSizes used
print(sizes.tick_type)                  # "u32"

size_to_type(2, signed=True)            # "i16"
parse_query_output("BASE_TYPE_SIZE=2\nBASE_TYPE_SIGNED=0\n").base_type  # "u16"
print(render_types(TypeSizes()))        # source text for the 32-bit layout
```

`FreeRtosTypeGenerator.from_env(config_path=None)` builds a generator from
`OUT_DIR`. It raises `RuntimeError` if `OUT_DIR` is not set.
`write_generated_types(sizes)` writes the file and returns its path.

`osal_typegen.build.workspace_config_path(manifest_dir)` returns the
configuration path. It raises `ValueError` when the directory has no
grandparent.

## What it does not do

The configuration path is stored on the generator, in `config_path`, but it
is never read. Values from `FreeRTOSConfig.h` are not parsed, such as the
tick rate or the priority count. No configuration constants are generated.
The sizes are not measured against real FreeRTOS headers either. The probe
program only reports the fixed 32-bit layout.

## Running the tests

```
pytest
```