#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.

create_machine() builds a fresh machine (state, display and CPU) without any
host plugins attached beyond the ones given, which is also how the machine is
reset.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from importlib import import_module

from .constants import APP_INTRO, APP_COPYRIGHT
from .cpu import CPU
from .debugger import Debugger
from .display import Display
from .driver import Driver
from .hostio import Loader
from .state import MachineState


class StartupError(Exception):
    pass


def create_machine(inputs, program=None, shl_flag_quirks=False, rng=None):
    state = MachineState()

    if program is not None:
        state.load_program(program)

    display = Display()
    cpu = CPU(state, display, inputs, Debugger(), rng=rng, shl_flag_quirks=shl_flag_quirks)
    return state, display, cpu


# Host libraries needed by each backend, and the names used when one is missing
HOST_LIBRARIES = {
    "pygame": "PyGame",
    "curses": "Curses (or Windows-Curses)"
}


def _host_library_installed(name):
    try:
        import_module(name)
    except ImportError:
        return False

    return True


def load_plugins(opt_renderer, mute_audio):
    """
    Returns the Inputs, Renderer and Audio classes for a backend.  If no backend is given, PyGame is tried first, then
    Curses.
    """
    candidates = list(HOST_LIBRARIES) if opt_renderer is None else [opt_renderer]
    backend = next(
        (name for name in candidates if name not in HOST_LIBRARIES or _host_library_installed(name)), None
    )

    if backend is None:
        if opt_renderer is None:
            raise StartupError("Neither PyGame nor Curses (or Windows-Curses) appear to be installed.")

        raise StartupError("{} does not appear to be installed.".format(HOST_LIBRARIES[opt_renderer]))

    inputs_module = import_module(".inputs.i_" + backend, __name__)
    renderer_module = import_module(".renderers.r_" + backend, __name__)

    # PyGame can synthesise a proper tone.  Terminals can handle fixed-length beeps, so only beep when asked to.
    if backend == "null" or mute_audio or (backend == "curses" and mute_audio is None):
        audio_module = import_module(".audio.a_null", __name__)
    else:
        audio_module = import_module(".audio.a_" + backend, __name__)

    return inputs_module.Inputs, renderer_module.Renderer, audio_module.Audio


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    Inputs, Renderer, Audio = load_plugins(args["renderer"], args["mute"])  # pylint: disable=invalid-name

    # Read ROM binary before any windows are opened, so a missing file doesn't leave the terminal in a mess
    program = Loader().load_binary(args["filename"])

    # Set up a new rendering system
    renderer = Renderer(
        scale=args["scale"],
        pygame_palette=args["pygame_palette"],
        curses_cursor_mode=args["curses_cursor_mode"]
    )

    try:
        # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
        inputs = Inputs(args["keymap"], renderer)
    except Exception:
        renderer.shutdown()
        raise

    # Start up the audio system
    audio = Audio()

    try:
        # Build the machine with the ROM already in RAM, and plug it into the host
        _, display, cpu = create_machine(
            inputs, program=program, shl_flag_quirks=bool(args["shl_flag_quirks"])
        )

        driver = Driver(
            cpu, display, renderer, inputs, audio, tick_rate=args["tick_rate"],
            steps_per_tick=args["steps_per_tick"], tone_frequency=args["tone"]
        )

        driver.run()
    finally:
        # The machine has stopped, so shut down the host systems.  __del__ cannot be relied upon when using PyPy
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()
