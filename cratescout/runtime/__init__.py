"""Runtime package: terminal control, config, clipboard, and the main loop."""

from .app import AppOptions, copy_dependency, run_app
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .terminal import TerminalController

__all__ = [
    "AppOptions",
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "TerminalController",
    "copy_dependency",
    "run_app",
    "run_main_loop",
]
