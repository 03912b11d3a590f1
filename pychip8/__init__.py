"""Python CHIP-8 interpreter.

The execution core lives in :mod:`pychip8.cpu`, :mod:`pychip8.bus` and
:mod:`pychip8.video`; :mod:`pychip8.system` assembles them into a machine
driven one frame at a time, and :mod:`pychip8.ui` hosts the pygame front end
used by ``run.py``.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
