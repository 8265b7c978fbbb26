import numpy as np
import pytest
from render.errors import InvalidGeometry
from render.pixel_buffer import PixelBuffer
from render.view import Rect, View, make_rect, make_view, overlaps, pixel_at, row_begin, sub_view


def test_make_rect_forms():
    assert make_rect(4, 3) == Rect(0, 4, 0, 3)
    r = make_rect(2, 5, 4, 3)
    assert (r.x_begin, r.x_end, r.y_begin, r.y_end) == (2, 6, 5, 8)
    assert (r.width, r.height) == (4, 3)


def test_rect_must_not_be_empty():
    with pytest.raises(InvalidGeometry):
        Rect(3, 3, 0, 1)
    with pytest.raises(InvalidGeometry):
        make_rect(0, 0, 1, 0)


def test_whole_view_addressing(gradient):
    view = make_view(gradient)
    assert view.is_whole
    assert view.stride == view.width == 16
    assert row_begin(view, 3) == 3 * 16
    assert pixel_at(view, 5, 3) == 3 * 16 + 5
    assert view.get(5, 3) == (5, 3, 5 ^ 3, 255)


def test_sub_view_addresses_same_memory_as_parent(gradient):
    whole = make_view(gradient)
    rect = make_rect(3, 2, 8, 6)
    sub = sub_view(whole, rect)

    assert sub.stride == whole.stride
    assert sub.memory is whole.memory
    assert not sub.is_whole
    for y in range(sub.height):
        for x in range(sub.width):
            assert pixel_at(sub, x, y) == pixel_at(whole, x + rect.x_begin, y + rect.y_begin)


def test_nested_sub_views_keep_original_stride(gradient):
    whole = make_view(gradient)
    outer = sub_view(whole, make_rect(4, 2, 10, 8))
    inner = sub_view(outer, make_rect(1, 3, 5, 4))

    assert inner.stride == 16
    assert (inner.x_begin, inner.y_begin) == (5, 5)
    assert pixel_at(inner, 2, 1) == pixel_at(whole, 7, 6)
    assert inner.get(2, 1) == (7, 6, 7 ^ 6, 255)


def test_sub_view_pixels_is_a_window_not_a_copy(gradient):
    sub = sub_view(make_view(gradient), make_rect(1, 1, 2, 2))
    sub.pixels[:] = (9, 9, 9, 9)
    assert tuple(gradient.pixels[1, 1]) == (9, 9, 9, 9)
    assert tuple(gradient.pixels[2, 2]) == (9, 9, 9, 9)
    assert tuple(gradient.pixels[3, 3]) == (3, 3, 0, 255)


def test_row_is_width_pixels_long(gradient):
    sub = sub_view(make_view(gradient), make_rect(2, 4, 5, 3))
    row = sub.row(1)
    assert row.shape == (5, 4)
    assert tuple(row[0]) == (2, 5, 2 ^ 5, 255)


def test_sub_view_defaults_to_whole_extent(gradient):
    whole = make_view(gradient)
    same = sub_view(whole)
    assert (same.x_begin, same.y_begin, same.width, same.height) == (0, 0, 16, 12)


@pytest.mark.parametrize("rect", [
    make_rect(10, 0, 7, 1),   # past the right edge
    make_rect(0, 10, 1, 3),   # past the bottom
])
def test_sub_view_rejects_rect_outside_parent(gradient, rect):
    with pytest.raises(InvalidGeometry):
        sub_view(make_view(gradient), rect)


def test_sub_view_is_checked_against_parent_not_buffer(gradient):
    parent = sub_view(make_view(gradient), make_rect(0, 0, 4, 4))
    with pytest.raises(InvalidGeometry):
        sub_view(parent, make_rect(2, 2, 4, 1))


def test_view_bounds_checked_at_construction():
    memory = np.zeros((8 * 4, 4), dtype=np.uint8)
    with pytest.raises(InvalidGeometry):
        View(memory, stride=8, matrix_height=4, x_begin=6, y_begin=0, width=3, height=1)
    with pytest.raises(InvalidGeometry):
        View(memory, stride=8, matrix_height=4, x_begin=0, y_begin=2, width=1, height=3)


def test_make_view_of_destroyed_buffer_raises():
    buffer = PixelBuffer.create(2, 2)
    buffer.destroy()
    with pytest.raises(InvalidGeometry):
        make_view(buffer)


def test_overlaps(gradient):
    whole = make_view(gradient)
    a = sub_view(whole, make_rect(0, 0, 4, 4))
    b = sub_view(whole, make_rect(3, 3, 4, 4))
    c = sub_view(whole, make_rect(4, 0, 4, 4))
    other = make_view(PixelBuffer.create(16, 12))

    assert overlaps(a, b)
    assert not overlaps(a, c)
    assert not overlaps(a, sub_view(other, make_rect(0, 0, 4, 4)))
