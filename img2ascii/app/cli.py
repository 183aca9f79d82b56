from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn, Optional, Sequence

from ..errors import Img2AsciiError
from ..job import ArtJobBuilder, ArtSettings
from ..render import EDGE_THRESHOLD, RenderMode
from .diagnostics import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR, configure_logging, emit_startup_warnings
from .output import DEFAULT_OUTPUT, write_output

logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = ArgumentParser(
        prog="img2ascii",
        description="Render a JPEG or PNG image as Braille or shaded text art.",
    )
    parser.add_argument("input", help="Image to convert (.jpg/.jpeg/.png)")
    parser.add_argument(
        "output",
        nargs="?",
        default=DEFAULT_OUTPUT,
        help=f"Text file to write (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in RenderMode],
        default=RenderMode.BRAILLE.value,
        help="braille: Otsu threshold packed into Braille cells; shade: Sobel edges over shading blocks",
    )
    parser.add_argument(
        "--edge-threshold",
        type=float,
        default=EDGE_THRESHOLD,
        metavar="FLOAT",
        help=f"Sobel gradient magnitude above which a pixel is an edge (default: {EDGE_THRESHOLD})",
    )
    parser.add_argument("--dump", action="store_true", help="Print the decoded grayscale samples and exit")
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help=f"debug, info, warning or error (default: ${LOG_LEVEL_ENV_VAR} or {DEFAULT_LOG_LEVEL})",
    )
    return parser.parse_args(argv)


def dump_raster(builder: ArtJobBuilder, path: str) -> int:
    raster = builder.load(path)
    sys.stdout.write(raster.dump())
    return 0


def convert(builder: ArtJobBuilder, input_path: str, output_path: str) -> int:
    logger.info("Converting %s -> %s (%s)", input_path, output_path, builder.settings.mode.value)
    data = builder.build_from_file(input_path)
    write_output(output_path, data)
    print("Done.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    emit_startup_warnings()
    settings = ArtSettings(mode=RenderMode(args.mode), edge_threshold=args.edge_threshold)
    builder = ArtJobBuilder(settings)
    try:
        if args.dump:
            return dump_raster(builder, args.input)
        return convert(builder, args.input, args.output)
    except Img2AsciiError as exc:
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
