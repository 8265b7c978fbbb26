"""Error types raised by buffers, views, compositing and the mosaic tracker"""


class MosaicError(Exception):
    """Base class for every error raised by the mapper"""


# ------ resource / io errors ------

class AllocationError(MosaicError, MemoryError):
    pass


class DecodeError(MosaicError):
    pass


class EncodeError(MosaicError):
    pass


class UnsupportedFormat(EncodeError):
    pass


class ResizeError(MosaicError):
    pass


# ------ contract violations on views / compositor / resampler ------

class InvalidGeometry(MosaicError, ValueError):
    pass


class DimensionMismatch(MosaicError, ValueError):
    pass


class NonIntegerRatio(MosaicError, ValueError):
    pass


class AliasedRegions(MosaicError, ValueError):
    pass


# ------ persisted mosaic ------

class MosaicSizeMismatch(MosaicError):
    def __init__(self, expected: tuple[int, int], actual: tuple[int, int]):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"mosaic is {actual[0]}x{actual[1]}, expected {expected[0]}x{expected[1]}"
        )
