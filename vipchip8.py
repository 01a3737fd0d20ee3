#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

from argparse import ArgumentParser
from vchip import main
from vchip.constants import DEFAULT_KEYMAP, DEFAULT_TICK_RATE, DEFAULT_STEPS_PER_TICK, DEFAULT_TONE_FREQUENCY


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "curses", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise curses)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the pixel size in PyGame mode (default 10), and horizontal stretch in Curses mode (default 2)"
    )
    parser.add_argument(
        "-t", "--tick_rate", type=int, default=DEFAULT_TICK_RATE,
        help="set the number of timer, input and display ticks per second (default {})".format(DEFAULT_TICK_RATE)
    )
    parser.add_argument(
        "-n", "--steps_per_tick", type=int, default=DEFAULT_STEPS_PER_TICK,
        help="set the number of instructions executed every tick (default {})".format(DEFAULT_STEPS_PER_TICK)
    )
    parser.add_argument(
        "--tone", type=float, default=DEFAULT_TONE_FREQUENCY,
        help="set the buzzer frequency in Hz (default {:g})".format(DEFAULT_TONE_FREQUENCY)
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1],
        help="mute the emulated audio.  0 = unmuted (default for PyGame), 1 = muted (default for Curses)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes (PyGame) or character numbers (Curses).  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--curses_cursor_mode", type=int, choices=[0, 1, 2], default=0,
        help="control cursor visibility in the Curses renderer"
    )
    parser.add_argument(
        "--pygame_palette",
        help="redefine the background and foreground colours for the PyGame renderer in comma-separated hex"
    )
    parser.add_argument(
        "--shl_flag_quirks", type=int, choices=[0, 1], default=0,
        help="store the raw high bit (0x80) in Vf after SHL instead of 1, as some interpreters do"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def run():
    args = vars(parse_args())
    # It is possible to start the emulator from a GUI by calling main with a dictionary
    main(args)


if __name__ == "__main__":
    run()
