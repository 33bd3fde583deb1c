#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/cli.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import argparse
import curses
import logging
import sys
import traceback


def build_parser():
    epilog = """\
examples:
  %(prog)s                                   3-D maze, default layout
  %(prog)s --dimension 4                     4-D maze with a tesseract
  %(prog)s --dimension 5 --respawn 0.5       Captured targets may respawn
  %(prog)s --scene maze.json --fov 75        Custom layout, wider view
  %(prog)s --snapshot view.png --width 640   Render one frame to PNG and exit
  %(prog)s --log-file nd-maze.log --verbose  Log captures and frame timings

keys:
  arrows / p o / i u / y t / r e    move along forward, right, up, extra axes
  RIGHT LEFT, m n, k j, ...         rotate in each pair of axes
  space  capture    l  face nearest target    C B G  colour/braille/fog    q  quit
"""
    parser = argparse.ArgumentParser(
        description="N-dimensional maze raytracer",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--dimension", type=int, default=3,
                        help="Number of spatial dimensions, 2-5 (default: 3)")
    parser.add_argument("--scene", help="JSON file with a list of primitive descriptors")
    parser.add_argument("--fov", type=float, default=60.0,
                        help="Vertical field of view in degrees (default: 60)")
    parser.add_argument("--move-step", type=float, default=5.0,
                        help="Distance moved per key press (default: 5.0)")
    parser.add_argument("--rotate-step", type=float, default=0.1,
                        help="Rotation per key press in radians (default: 0.1)")
    parser.add_argument("--respawn", type=float, default=0.0,
                        help="Probability that a capture spawns a new sphere (default: 0)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for respawned spheres")
    parser.add_argument("--no-color", action="store_true",
                        help="Disable color output")
    parser.add_argument("--ascii", action="store_true",
                        help="Use ASCII characters instead of Braille on the map")
    parser.add_argument("--no-fog", action="store_true",
                        help="Disable distance fog")
    parser.add_argument("--obj-color", default="#FF00FF",
                        help="Near object color in hex #RRGGBB (default: #FF00FF)")
    parser.add_argument("--bg-color", default="#000000",
                        help="Background color in hex #RRGGBB (default: #000000)")
    parser.add_argument("--fog-color", default="#5A0A5A",
                        help="Fog color in hex #RRGGBB (default: #5A0A5A)")
    parser.add_argument("--fog-start", type=float, default=20.0,
                        help="Distance where fog begins (default: 20.0)")
    parser.add_argument("--fog-end", type=float, default=250.0,
                        help="Distance where fog is fully opaque (default: 250.0)")
    parser.add_argument("--fog-exp", type=float, default=0.6,
                        help="Fog curve exponent (default: 0.6)")
    parser.add_argument("--far-plane", type=float, default=510.0,
                        help="Distance beyond which hits fade into the background (default: 510.0)")
    parser.add_argument("--gradient-steps", type=int, default=12,
                        help="Number of fog gradient color steps, 6-30 (default: 12)")
    parser.add_argument("--map-scale", type=float, default=2.0,
                        help="World units per map dot (default: 2.0)")
    parser.add_argument("--snapshot", metavar="PNG",
                        help="Render one frame to this PNG file instead of running interactively")
    parser.add_argument("--width", type=int, default=400,
                        help="Snapshot width in pixels (default: 400)")
    parser.add_argument("--height", type=int, default=300,
                        help="Snapshot height in pixels (default: 300)")
    parser.add_argument("--block-size", type=int, default=10,
                        help="Snapshot pixels per traced block (default: 10)")
    parser.add_argument("--log-file", help="Write log records to this file")
    parser.add_argument("--verbose", action="store_true",
                        help="Log at DEBUG level")
    return parser


def configure_logging(args, interactive: bool):
    level = logging.DEBUG if args.verbose else logging.INFO
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    if args.log_file:
        logging.basicConfig(filename=args.log_file, level=level, format=fmt)
    elif interactive:
        # curses owns the terminal; without a log file records are dropped
        logging.basicConfig(handlers=[logging.NullHandler()], level=level)
    else:
        logging.basicConfig(level=level, format=fmt)


def run(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.dimension < 2:
        parser.error(f"--dimension must be at least 2, got {args.dimension}")
    interactive = not args.snapshot
    configure_logging(args, interactive)

    from .demo import main, snapshot

    if not interactive:
        path = snapshot(args)
        print(f"Saved {path}")
        return 0

    try:
        curses.wrapper(lambda s: main(s, args))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        curses.endwin()
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    return 0
