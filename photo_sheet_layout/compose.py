"""
Page canvas allocation and grid placement.
"""

# PIP3 modules
import PIL.Image

# local repo modules
import photo_sheet_layout as psl
import photo_sheet_layout.config
import photo_sheet_layout.progress


LayoutConfig = psl.config.LayoutConfig
ProgressChannel = psl.progress.ProgressChannel

TRANSPARENT = (0, 0, 0, 0)


#============================================
def row_and_col_from_index(grid_cols: int, index: int) -> tuple[int, int]:
	"""
	Map a batch index to its grid cell, filling rows first.

	Args:
		grid_cols: Cells per row.
		index: Position within the batch.

	Returns:
		Tuple of (row, col).
	"""
	row = index // grid_cols
	col = index % grid_cols
	return (row, col)


#============================================
def compute_cell_origin(layout: LayoutConfig, index: int) -> tuple[int, int]:
	"""
	Compute the top-left pixel of the cell for a batch index.

	Args:
		layout: Layout configuration.
		index: Position within the batch.

	Returns:
		Tuple of (x, y).
	"""
	row, col = row_and_col_from_index(layout.grid_cols, index)
	x = layout.page_border_px + col * (layout.max_cell_width_px + layout.margin_h_px)
	y = layout.page_border_px + row * (layout.max_cell_height_px + layout.margin_v_px)
	return (x, y)


#============================================
def create_page_canvas(layout: LayoutConfig) -> PIL.Image.Image:
	"""
	Allocate a blank, fully transparent page.

	Args:
		layout: Layout configuration.

	Returns:
		RGBA page image.
	"""
	size = (layout.page_width_px, layout.page_height_px)
	return PIL.Image.new("RGBA", size, TRANSPARENT)


#============================================
def overlay_image(canvas: PIL.Image.Image, image: PIL.Image.Image, x: int, y: int) -> None:
	"""
	Alpha-composite an image onto the canvas, clipping to the canvas bounds.

	Args:
		canvas: RGBA canvas, modified in place.
		image: RGBA image to place.
		x: Left edge on the canvas, may be negative.
		y: Top edge on the canvas, may be negative.
	"""
	left = max(x, 0)
	top = max(y, 0)
	right = min(x + image.width, canvas.width)
	bottom = min(y + image.height, canvas.height)
	if right <= left or bottom <= top:
		return
	if image.mode != "RGBA":
		image = image.convert("RGBA")
	source_box = (left - x, top - y, right - x, bottom - y)
	canvas.alpha_composite(image, dest=(left, top), source=source_box)


#============================================
def compose_page(
	images: list[PIL.Image.Image],
	layout: LayoutConfig,
	channel: ProgressChannel | None = None,
) -> PIL.Image.Image:
	"""
	Place normalized images onto a new page, top-left aligned in their cells.

	Args:
		images: Normalized images, at most one page worth.
		layout: Layout configuration.
		channel: Optional progress channel.

	Returns:
		Composed RGBA page.
	"""
	canvas = create_page_canvas(layout)
	for index, image in enumerate(images):
		if channel is not None:
			channel.send(psl.progress.advance(psl.progress.COMPOSITE))
		x, y = compute_cell_origin(layout, index)
		overlay_image(canvas, image, x, y)
	return canvas
