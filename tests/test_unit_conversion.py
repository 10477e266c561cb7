import math

import pytest

import photo_sheet_layout.config as layout_config


#============================================
def test_cm_to_px_rounds_to_nearest() -> None:
	"""
	One centimeter at the default density is 118 pixels.
	"""
	assert layout_config.cm_to_px(1.0, 118.11) == 118
	assert layout_config.cm_to_px(0.3, 118.11) == 35
	assert layout_config.cm_to_px(0.8, 118.11) == 94


#============================================
def test_ppi_converts_to_ppc() -> None:
	"""
	300 pixels per inch is about 118.11 pixels per cm.
	"""
	assert math.isclose(layout_config.ppi_to_ppc(300.0), 300.0 / 2.54)
	assert abs(layout_config.ppi_to_ppc(300.0) - 118.11) < 0.01


#============================================
def test_ppi_wins_over_ppc() -> None:
	"""
	Density per inch takes precedence when both are given.
	"""
	assert layout_config.resolve_ppc(50.0, 254.0) == pytest.approx(100.0)
	assert layout_config.resolve_ppc(50.0, None) == 50.0
	assert layout_config.resolve_ppc(None, None) == layout_config.DEFAULT_PPC


#============================================
def test_default_layout_pixels() -> None:
	"""
	Check the default A4 landscape 4x3 layout at 118.11 px/cm.
	"""
	config = layout_config.build_layout_config(verbose=False)
	assert config.page_border_px == 94
	assert config.margin_v_px == 35
	assert config.margin_h_px == 35
	assert config.target_height_px == 591
	assert config.max_cell_height_px == 740
	assert config.max_cell_width_px == 803
	assert config.page_width_px == 3508
	assert config.page_height_px == 2481
	assert config.cells_per_page == 12
	assert not config.target_clamped


#============================================
def test_max_cell_rounds_after_arithmetic() -> None:
	"""
	Cell size is computed in cm and rounded once at the end.
	"""
	value = layout_config.compute_max_cell_px(21.0, 0.8, 0.3, 3, 118.11)
	expected = int(round((21.0 - 1.6 - 0.6) / 3 * 118.11))
	assert value == expected
	# rounding the border and margin first would give a different answer
	early = int(round((round(21.0 * 118.11) - 2 * 94 - 2 * 35) / 3))
	assert early != value


#============================================
def test_target_height_clamped_to_cell(capsys) -> None:
	"""
	An oversized target collapses to the max cell height with a warning.
	"""
	config = layout_config.build_layout_config(target_height_cm=10.0)
	assert config.target_height_px == config.max_cell_height_px
	assert config.target_clamped
	captured = capsys.readouterr()
	assert "Warning" in captured.err
	assert "Warning" not in captured.out


#============================================
def test_target_never_exceeds_cell_height() -> None:
	"""
	The target height invariant holds across a range of inputs.
	"""
	for height_cm in (1.0, 4.5, 5.0, 6.26, 6.27, 8.0, 20.0):
		for rows in (1, 2, 3, 5):
			config = layout_config.build_layout_config(
				target_height_cm=height_cm,
				grid_rows=rows,
				verbose=False,
			)
			assert config.target_height_px <= config.max_cell_height_px


#============================================
def test_zero_grid_rejected() -> None:
	"""
	A grid without rows or columns is an input error.
	"""
	with pytest.raises(layout_config.InputError):
		layout_config.build_layout_config(grid_cols=0, verbose=False)
	with pytest.raises(layout_config.InputError):
		layout_config.build_layout_config(grid_rows=0, verbose=False)


#============================================
def test_page_size_uses_ceiling() -> None:
	"""
	Page pixel size rounds up.
	"""
	assert layout_config.compute_page_size_px(100.0) == (2970, 2100)
	assert layout_config.compute_page_size_px(118.11) == (3508, 2481)
