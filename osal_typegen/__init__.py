"""Generate Rust type aliases for FreeRTOS integer types during a build."""

__version__ = "0.1.2"
__all__ = ["generator", "build"]