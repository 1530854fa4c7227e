import pytest

from invoice_engine.core.calculations.logo_layout import fit, layout_logo, place
from invoice_engine.core.models.document import LogoConfig


def test_fit_clamps_width_then_height():
    assert fit(800, 200, 300, 60) == (240.0, 60.0)


def test_fit_keeps_small_logos_and_ratio():
    assert fit(100, 40, 300, 60) == (100.0, 40.0)
    w, h = fit(1000, 1000, 300, 60)
    assert (w, h) == (60.0, 60.0)
    w, h = fit(3000, 100, 300, 60)
    assert w <= 300 and h <= 60
    assert w / h == pytest.approx(30.0)


def test_fit_rejects_non_positive_sizes():
    with pytest.raises(ValueError):
        fit(0, 10, 300, 60)
    with pytest.raises(ValueError):
        fit(10, 10, 300, -1)


def test_place_alignments():
    config = LogoConfig(container_width=320, container_height=70, alignment="center", vertical_alignment="top")
    assert place(240, 60, config) == (40.0, 10.0)

    config = LogoConfig(container_width=320, container_height=70, alignment="right", vertical_alignment="middle")
    assert place(240, 60, config) == (80.0, 5.0)

    config = LogoConfig(container_width=320, container_height=70, alignment="left", vertical_alignment="bottom")
    assert place(240, 60, config) == (0.0, 0.0)


def test_template_defaults_and_overrides():
    standard = LogoConfig.for_template("businessstandard")
    assert (standard.max_width, standard.max_height, standard.container_width, standard.container_height) == (240, 50, 260, 60)

    allrauer = LogoConfig.for_template("allrauer2", vertical_alignment="top")
    assert allrauer.alignment == "center"
    assert allrauer.vertical_alignment == "top"
    assert allrauer.max_width == 300

    box = layout_logo(800, 200, LogoConfig.for_template("classic"))
    assert (box.width, box.height) == (240.0, 60.0)
    assert box.x_offset == 80.0


def test_logo_config_problems():
    assert LogoConfig().problems() == []
    problems = LogoConfig(max_width=0, alignment="middle").problems()
    assert len(problems) == 2
