import numpy as np
from render.errors import AliasedRegions, DimensionMismatch
from render.view import View, overlaps, row_begin


def fill(view: View, color) -> None:
    """Sets every pixel of the view to color"""
    if view.is_whole:
        # вид покрывает весь буфер - один проход по непрерывной памяти
        view.memory[: view.width * view.height] = color
        return

    # построчно, чтобы не задеть пиксели между строками
    for y in range(view.height):
        begin = row_begin(view, y)
        view.memory[begin:begin + view.width] = color


def copy(src: View, dst: View, allow_overlap: bool = False) -> None:
    """
    Copies src into dst row by row, top to bottom.

    Views over the same memory with intersecting rectangles raise
    AliasedRegions unless allow_overlap is set, in which case src is first
    copied into a temporary array.
    """
    if src.width != dst.width or src.height != dst.height:
        raise DimensionMismatch(
            f"cannot copy {src.width}x{src.height} into {dst.width}x{dst.height}"
        )

    if overlaps(src, dst):
        if not allow_overlap:
            raise AliasedRegions(
                f"source ({src.x_begin}, {src.y_begin}) {src.width}x{src.height} and destination "
                f"({dst.x_begin}, {dst.y_begin}) overlap in the same buffer"
            )
        dst.pixels[:] = np.array(src.pixels, copy=True)
        return

    for y in range(src.height):
        s = row_begin(src, y)
        d = row_begin(dst, y)
        dst.memory[d:d + dst.width] = src.memory[s:s + src.width]
