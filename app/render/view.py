"""
Rectangular windows over pixel buffer memory.

A View never owns memory: it keeps a reference to the flat pixel array of the
buffer it came from, the stride of that buffer (its width in pixels), an
(x_begin, y_begin) offset and a (width, height) extent. Sub-views compose
offsets against the same stride, so addressing stays correct after any
amount of nesting.

Addresses returned by row_begin / pixel_at are pixel indices into the flat
memory array (memory[index] is the RGBA pixel).

sub_view does not clip. The rect must lie inside the parent view, otherwise
InvalidGeometry is raised.
"""

from dataclasses import dataclass
import numpy as np
from render.errors import InvalidGeometry
from render.pixel_buffer import PixelBuffer, CHANNELS


@dataclass(frozen=True)
class Rect:
    """Half-open rectangle [x_begin, x_end) x [y_begin, y_end)"""
    x_begin: int
    x_end: int
    y_begin: int
    y_end: int

    def __post_init__(self):
        if self.x_begin < 0 or self.y_begin < 0:
            raise InvalidGeometry(f"negative rect origin: {self}")
        if self.x_begin >= self.x_end or self.y_begin >= self.y_end:
            raise InvalidGeometry(f"empty rect: {self}")

    @property
    def width(self) -> int:
        return self.x_end - self.x_begin

    @property
    def height(self) -> int:
        return self.y_end - self.y_begin


def make_rect(*args: int) -> Rect:
    """make_rect(width, height) or make_rect(x_begin, y_begin, width, height)"""
    if len(args) == 2:
        width, height = args
        return Rect(0, width, 0, height)
    if len(args) == 4:
        x, y, width, height = args
        return Rect(x, x + width, y, y + height)
    raise TypeError(f"make_rect takes 2 or 4 arguments, got {len(args)}")


@dataclass(frozen=True, eq=False)
class View:
    memory: np.ndarray   # плоский массив (stride * matrix_height, 4) исходного буфера
    stride: int          # ширина исходного буфера
    matrix_height: int   # высота исходного буфера
    x_begin: int
    y_begin: int
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidGeometry(f"view extent must be positive, got {self.width}x{self.height}")
        if self.x_begin < 0 or self.y_begin < 0:
            raise InvalidGeometry(f"negative view offset ({self.x_begin}, {self.y_begin})")
        if self.x_begin + self.width > self.stride:
            raise InvalidGeometry(
                f"view columns {self.x_begin}..{self.x_begin + self.width} exceed stride {self.stride}"
            )
        if self.y_begin + self.height > self.matrix_height:
            raise InvalidGeometry(
                f"view rows {self.y_begin}..{self.y_begin + self.height} exceed buffer height {self.matrix_height}"
            )
        if self.memory.shape[0] < self.stride * self.matrix_height:
            raise InvalidGeometry("memory is smaller than stride * height")

    @property
    def is_whole(self) -> bool:
        """True when the view covers its entire buffer"""
        return (
            self.x_begin == 0
            and self.y_begin == 0
            and self.width == self.stride
            and self.height == self.matrix_height
        )

    @property
    def pixels(self) -> np.ndarray:
        """(height, width, 4) numpy window sharing the view memory"""
        rows = self.memory[: self.stride * self.matrix_height].reshape(self.matrix_height, self.stride, CHANNELS)
        return rows[self.y_begin:self.y_begin + self.height, self.x_begin:self.x_begin + self.width]

    def row(self, y: int) -> np.ndarray:
        begin = row_begin(self, y)
        return self.memory[begin:begin + self.width]

    def get(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = self.memory[pixel_at(self, x, y)]
        return (int(r), int(g), int(b), int(a))

    def set(self, x: int, y: int, color) -> None:
        self.memory[pixel_at(self, x, y)] = color


def make_view(buffer: PixelBuffer) -> View:
    if buffer.data is None or buffer.width == 0 or buffer.height == 0:
        raise InvalidGeometry("cannot view an empty buffer")

    return View(
        memory=buffer.data,
        stride=buffer.width,
        matrix_height=buffer.height,
        x_begin=0,
        y_begin=0,
        width=buffer.width,
        height=buffer.height,
    )


def sub_view(view: View, rect: Rect | None = None) -> View:
    if rect is None:
        rect = make_rect(view.width, view.height)

    if rect.x_end > view.width or rect.y_end > view.height:
        raise InvalidGeometry(
            f"rect ({rect.x_begin}, {rect.y_begin})-({rect.x_end}, {rect.y_end}) "
            f"is outside the {view.width}x{view.height} view"
        )

    return View(
        memory=view.memory,
        stride=view.stride,
        matrix_height=view.matrix_height,
        x_begin=view.x_begin + rect.x_begin,
        y_begin=view.y_begin + rect.y_begin,
        width=rect.width,
        height=rect.height,
    )


def row_begin(view: View, y: int) -> int:
    return (view.y_begin + y) * view.stride + view.x_begin


def pixel_at(view: View, x: int, y: int) -> int:
    return row_begin(view, y) + x


def overlaps(a: View, b: View) -> bool:
    """True when both views address at least one common pixel"""
    if a.memory is not b.memory and not np.shares_memory(a.memory, b.memory):
        return False
    if a.stride != b.stride:
        # разные раскладки одной памяти - считаем пересечением
        return True
    return (
        a.x_begin < b.x_begin + b.width
        and b.x_begin < a.x_begin + a.width
        and a.y_begin < b.y_begin + b.height
        and b.y_begin < a.y_begin + a.height
    )
