from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
from matplotlib.patches import Rectangle

from .board import BoardState

# off / on
BOARD_CMAP = ListedColormap(["#e2e0e9", "#3263b7"])


def show_solution(
    field: BoardState,
    solution: BoardState,
    ax=None,
    pressed_color="red",
    title="Solution",
):
    """
    Draw the field and outline every cell of the press pattern.

    Parameters
    ----------
    field : BoardState
        Initial lights.
    solution : BoardState
        Press pattern of the same shape.
    """
    if field.shape != solution.shape:
        raise ValueError(
            f"Solution of shape {solution.shape} does not fit field {field.shape}"
        )
    if ax is None:
        _, ax = plt.subplots(figsize=(3.5, 3.5))
    ax.imshow(field.state.astype(int), cmap=BOARD_CMAP, vmin=0, vmax=1)
    for r, c in zip(*solution.state.nonzero()):
        ax.add_patch(
            Rectangle(
                (c - 0.5, r - 0.5),
                1,
                1,
                edgecolor=pressed_color,
                facecolor="none",
                linewidth=2,
            )
        )
    ax.set_xticks(range(field.cols))
    ax.set_yticks(range(field.rows))
    ax.set_xlabel("col")
    ax.set_ylabel("row")
    ax.set_title(f"{title} ({int(solution.count_on())} presses)")
    return ax


def save_solution_image(solution: BoardState, path: str | Path) -> Path:
    """Write the press pattern as a PNG, one pixel per cell."""
    path = Path(path)
    pixels = BOARD_CMAP(solution.state.astype(int))
    plt.imsave(path, pixels)
    return path


def save_solution_figure(
    field: BoardState, solution: BoardState, path: str | Path
) -> Path:
    """Write the field with the presses outlined, as drawn by show_solution."""
    path = Path(path)
    fig, ax = plt.subplots(figsize=(3.5, 3.5))
    try:
        show_solution(field, solution, ax=ax)
        fig.savefig(path, bbox_inches="tight")
    finally:
        plt.close(fig)
    return path
