import argparse
import logging
import sys
import time
from pathlib import Path

import yaml

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from lightsoff.algebra import TooManyFreeVariablesError  # noqa: E402
from lightsoff.board import BoardState  # noqa: E402
from lightsoff.config import SolverConfig, load_config  # noqa: E402
from lightsoff.progress import ProgressBar  # noqa: E402
from lightsoff.solver import LightsSolver  # noqa: E402

DEFAULT_CONFIG = ROOT / "configs" / "solver.yaml"

EXAMPLE_INPUT = "010\n111\n010\n"


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s  %(name)-20s  %(levelname)-7s  %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Solve the Lights Off puzzle with the fewest presses.",
        epilog="Without --rows/--cols the field is read from stdin, e.g.\n"
        + EXAMPLE_INPUT,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument(
        "-r", "--rows", type=int, default=0, help="Rows in a field of ones"
    )
    ap.add_argument(
        "-c", "--cols", type=int, default=0, help="Columns in a field of ones"
    )
    ap.add_argument(
        "-a",
        "--apply",
        action="store_true",
        help="Apply the input press pattern to a field of ones",
    )
    ap.add_argument(
        "-i",
        "--info",
        action="store_true",
        help="Print field size, number of solutions, weight and time",
    )
    ap.add_argument(
        "-p",
        "--plot",
        action="store_true",
        help='Save the solution to "lightsoff_RxC.png" and an annotated figure',
    )
    ap.add_argument(
        "--progress", action="store_true", help="Show elimination progress"
    )
    ap.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG),
        help="YAML file with a 'solver' section",
    )
    ap.add_argument("--out-dir", default=".", help="Directory for --plot")
    return ap


def read_config(path: str) -> SolverConfig:
    # Only the bundled default may be absent.
    if Path(path) == DEFAULT_CONFIG and not DEFAULT_CONFIG.exists():
        return SolverConfig()
    return load_config(path)


def read_field(args, stdin) -> BoardState | None:
    rows, cols = args.rows, args.cols
    # Setup square field if one of size is present
    if rows == 0 and cols > 0:
        rows = cols
    if cols == 0 and rows > 0:
        cols = rows

    if rows > 0 and cols > 0:
        return BoardState.all_on(rows, cols)

    field = BoardState.from_string(stdin.read())
    if field.rows == 0 or field.cols == 0:
        return None
    return field


def main(argv=None, stdin=None) -> int:
    args = build_parser().parse_args(argv)
    stdin = stdin or sys.stdin

    try:
        cfg = read_config(args.config)
    except OSError as e:
        print(f"Cannot read config: {e}", file=sys.stderr)
        return 1
    except (ValueError, TypeError, yaml.YAMLError) as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        return 1
    _setup_logging(cfg.log_level)

    try:
        field = read_field(args, stdin)
    except ValueError as e:
        print(f"Invalid field: {e}", file=sys.stderr)
        return 1
    if field is None:
        build_parser().print_usage(sys.stderr)
        return 1

    if args.apply:
        solution = field
        result = BoardState.all_on(field.rows, field.cols).apply(solution)
        print(result)
    else:
        solver = LightsSolver.from_board(
            field,
            max_free_vars=cfg.max_free_variables,
            word_bits=cfg.word_bits,
        )
        progress = ProgressBar() if args.progress else None

        start_time = time.perf_counter()
        try:
            solution = solver.solve_board(progress)
        except TooManyFreeVariablesError as e:
            print(f"Cannot solve {field.rows} x {field.cols}: {e}", file=sys.stderr)
            return 1
        elapsed = time.perf_counter() - start_time

        if solution is not None:
            print(solution)
        else:
            print("No solution")

        if args.info:
            print(f"Size      : {field.rows} x {field.cols}")
            print(f"Solutions : {solver.n_solutions}")
            print(f"Weight    : {solver.min_weight}")
            print(f"Time      : {elapsed:.3f}s")

    if args.plot and solution is not None:
        from lightsoff.viz import save_solution_figure, save_solution_image

        initial = BoardState.all_on(field.rows, field.cols) if args.apply else field
        stem = Path(args.out_dir) / f"lightsoff_{field.rows}x{field.cols}"
        out = save_solution_image(solution, stem.with_suffix(".png"))
        annotated = save_solution_figure(
            initial, solution, stem.with_name(stem.name + "_annotated.png")
        )
        print(f"Output: {out}")
        print(f"Output: {annotated}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
