from ambilight.models.bitmap_model import Color
from ambilight.models.layout_model import StripLayout
from ambilight.services.ambilight_service import AmbilightFrame, AmbilightService
from ambilight.services.zone_service import ZoneSampler
from conftest import gradient_rows, make_image, uniform_rows


def test_frame_matches_sampler_queries():
    image = make_image(gradient_rows(100, 6))
    layout = StripLayout(top=4, right=3, bottom=5, left=2)
    frame = AmbilightService().compute_frame(image, layout)
    sampler = ZoneSampler(image)

    assert frame.top == sampler.top_line(4)
    assert frame.bottom == sampler.bottom_line(5)
    assert frame.right == sampler.vertical_subsections(90, 94, 3)
    assert frame.left == sampler.vertical_subsections(28, 10, 2)
    assert frame.skipped == []


def test_strip_order_reverses_bottom_and_left():
    a, b, c, d, e, f = (Color(i, i, i) for i in range(6))
    frame = AmbilightFrame(top=[a], right=[b, c], bottom=[d, e], left=[f, a])
    assert frame.strip_order() == [a, b, c, e, d, a, f]


def test_invalid_zone_is_skipped_others_computed():
    # 8 px wide cannot hold 15 top/bottom sections
    image = make_image(uniform_rows(8, 4, (10, 20, 30)))
    frame = AmbilightService().compute_frame(image, StripLayout.from_monitor_size(21.0))
    assert frame.top == []
    assert frame.bottom == []
    assert frame.skipped == ["top", "bottom"]
    assert frame.right == [Color(10, 20, 30)] * 9
    assert frame.left == [Color(10, 20, 30)] * 9
    assert len(frame.strip_order()) == 18


def test_flipped_rows_swaps_top_and_bottom_only():
    a, b, c, d = (Color(i, 0, 0) for i in range(4))
    frame = AmbilightFrame(top=[a, b], right=[c], bottom=[d], left=[a], skipped=["left"])
    flipped = frame.flipped_rows()

    assert flipped.top == [d]
    assert flipped.bottom == [a, b]
    assert flipped.right == [c]
    assert flipped.left == [a]
    assert flipped.skipped == ["left"]
    assert frame.top == [a, b]


def test_flipped_frame_matches_upside_down_image():
    rows = gradient_rows(100, 6)
    layout = StripLayout(top=4, right=3, bottom=4, left=2)
    service = AmbilightService()
    frame = service.compute_frame(make_image(rows), layout)
    upside_down = service.compute_frame(make_image(rows[::-1]), layout)

    assert frame.flipped_rows() == upside_down
