"""Widget grid placement checks."""

from typing import Iterable, Protocol

from ..errors import ApiError

MAX_ROW = 63
MAX_COL = 11


class Placement(Protocol):
    row: int
    col: int
    height: int
    width: int


def is_out_of_bounds(widget: Placement) -> bool:
    return (widget.row + widget.height - 1 > MAX_ROW
            or widget.col + widget.width - 1 > MAX_COL)


def occupied_cells(widget: Placement) -> Iterable[tuple[int, int]]:
    for row in range(widget.row, widget.row + widget.height):
        for col in range(widget.col, widget.col + widget.width):
            yield row, col


def check_widget_grid(dashboard_name: str, widgets: Iterable[Placement]) -> ApiError | None:
    """Reject widgets leaving the grid or claiming an already taken cell.

    Errors name the dashboard and the top-left cell of the offending widget.
    """
    filled: set[tuple[int, int]] = set()

    for widget in widgets:
        if is_out_of_bounds(widget):
            return ApiError.parameters(
                f'Dashboard "{dashboard_name}" widget in cell X - {widget.col} Y - {widget.row} '
                f'is out of bounds.'
            )

        for cell in occupied_cells(widget):
            if cell in filled:
                return ApiError.parameters(
                    f'Dashboard "{dashboard_name}" cell X - {widget.col} Y - {widget.row} '
                    f'is already taken.'
                )
            filled.add(cell)

    return None
