import numpy as np
from render.errors import AllocationError, InvalidGeometry

# пиксель RGBA8 - 4 байта без выравнивания
Pixel = tuple[int, int, int, int]

CHANNELS = 4


def to_pixel(red: int, green: int | None = None, blue: int | None = None, alpha: int = 255) -> Pixel:
    """to_pixel(gray) or to_pixel(r, g, b[, a])"""
    if green is None and blue is None:
        return (red, red, red, alpha)
    if green is None or blue is None:
        raise ValueError("to_pixel takes a gray value or all three color channels")
    return (red, green, blue, alpha)


class PixelBuffer:
    """
    Owner of a contiguous RGBA8 raster.

    Memory is a flat numpy array of shape (width * height, 4). Views share it
    without copying. destroy() drops the memory and resets the size to zero,
    the buffer is also a context manager that destroys itself on exit.
    """

    def __init__(self):
        self.data: np.ndarray | None = None
        self.width = 0
        self.height = 0

    @classmethod
    def create(cls, width: int, height: int) -> "PixelBuffer":
        buffer = cls()
        buffer.allocate(width, height)
        return buffer

    def allocate(self, width: int, height: int) -> None:
        if self.data is not None:
            raise InvalidGeometry("buffer already holds memory")
        if width <= 0 or height <= 0:
            raise InvalidGeometry(f"cannot create a {width}x{height} buffer")

        try:
            # содержимое не инициализируется
            data = np.empty((width * height, CHANNELS), dtype=np.uint8)
        except (MemoryError, ValueError) as e:
            raise AllocationError(f"OutOfMemory: {width}x{height} pixels") from e

        self.data = data
        self.width = width
        self.height = height

    def destroy(self) -> None:
        # повторный вызов ничего не делает
        self.data = None
        self.width = 0
        self.height = 0

    @property
    def is_empty(self) -> bool:
        return self.data is None

    @property
    def pixels(self) -> np.ndarray:
        """(height, width, 4) array sharing the buffer memory"""
        if self.data is None:
            raise InvalidGeometry("buffer is empty")
        return self.data.reshape(self.height, self.width, CHANNELS)

    def __enter__(self) -> "PixelBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
