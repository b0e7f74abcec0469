"""Globe viewer application: render loop and input routers."""

from globe_cli.cli.studio.router import Action, InputRouter, InteractiveRouter, ScreensaverRouter
from globe_cli.cli.studio.viewer import GlobeViewer, LoopState, run_viewer

__all__ = [
    "Action",
    "InputRouter",
    "InteractiveRouter",
    "ScreensaverRouter",
    "GlobeViewer",
    "LoopState",
    "run_viewer",
]
