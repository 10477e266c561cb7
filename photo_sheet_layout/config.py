"""
Shared configuration, constants, and the physical-to-pixel unit conversion.
"""

# Standard Library
import dataclasses
import math
import sys


VERSION = "0.1.0"

CM_PER_INCH = 2.54

# A4 landscape page template
PAGE_WIDTH_CM = 29.7
PAGE_HEIGHT_CM = 21.0

DEFAULT_PPC = 118.11
DEFAULT_GRID_COLS = 4
DEFAULT_GRID_ROWS = 3
DEFAULT_TARGET_HEIGHT_CM = 5.0
DEFAULT_PAGE_BORDER_CM = 0.8
DEFAULT_CELL_MARGIN_CM = 0.3

DEFAULT_OUTPUT_DIR = "output"
DEFAULT_OUTPUT_FORMAT = "png"
OUTPUT_FORMATS = ("png", "jpg", "tif", "webp")
OUTPUT_PREFIX = "output"
PDF_NAME = "sheets.pdf"
MANIFEST_NAME = "manifest.json"

PROGRESS_BAR_WIDTH = 20

PRESETS = {
	"standard": {
		"target_height_cm": 5.0,
		"page_border_cm": 0.8,
	},
	"compact": {
		"target_height_cm": 4.5,
		"page_border_cm": 1.0,
	},
}
DEFAULT_PRESET = "standard"


class InputError(ValueError):
	"""
	Raised for unusable input directories or layout parameters.
	"""


@dataclasses.dataclass(frozen=True)
class LayoutConfig:
	ppc: float
	page_border_px: int
	margin_v_px: int
	margin_h_px: int
	target_height_px: int
	max_cell_height_px: int
	max_cell_width_px: int
	grid_rows: int
	grid_cols: int
	page_width_px: int
	page_height_px: int
	target_clamped: bool = False

	@property
	def cells_per_page(self) -> int:
		return self.grid_rows * self.grid_cols


#============================================
def ppi_to_ppc(ppi: float) -> float:
	"""
	Convert a pixels-per-inch density to pixels per centimeter.

	Args:
		ppi: Pixels per inch.

	Returns:
		Pixels per centimeter.
	"""
	return ppi / CM_PER_INCH


#============================================
def resolve_ppc(ppc: float | None, ppi: float | None) -> float:
	"""
	Pick the effective density. PPI wins over PPC when both are set.

	Args:
		ppc: Optional pixels per centimeter.
		ppi: Optional pixels per inch.

	Returns:
		Pixels per centimeter.
	"""
	if ppi is not None:
		return ppi_to_ppc(ppi)
	if ppc is not None:
		return ppc
	return DEFAULT_PPC


#============================================
def cm_to_px(value_cm: float, ppc: float) -> int:
	"""
	Convert centimeters to whole pixels, rounding to nearest.

	Args:
		value_cm: Length in centimeters.
		ppc: Pixels per centimeter.

	Returns:
		Length in pixels.
	"""
	return int(round(value_cm * ppc))


#============================================
def compute_max_cell_px(
	page_cm: float,
	border_cm: float,
	margin_cm: float,
	count: int,
	ppc: float,
) -> int:
	"""
	Compute the largest cell extent that fits `count` cells along one page axis.

	The subtraction and division are done in centimeters and only the
	final pixel value is rounded.

	Args:
		page_cm: Page extent along the axis.
		border_cm: Outer border on each side.
		margin_cm: Gap between neighbouring cells.
		count: Number of cells along the axis.
		ppc: Pixels per centimeter.

	Returns:
		Cell extent in pixels.
	"""
	available_cm = page_cm - 2.0 * border_cm - (count - 1) * margin_cm
	return int(round(available_cm / count * ppc))


#============================================
def compute_page_size_px(ppc: float) -> tuple[int, int]:
	"""
	Compute the page canvas size in pixels.

	Args:
		ppc: Pixels per centimeter.

	Returns:
		Tuple of (width, height).
	"""
	width = int(math.ceil(ppc * PAGE_WIDTH_CM))
	height = int(math.ceil(ppc * PAGE_HEIGHT_CM))
	return (width, height)


#============================================
def build_layout_config(
	target_height_cm: float = DEFAULT_TARGET_HEIGHT_CM,
	page_border_cm: float = DEFAULT_PAGE_BORDER_CM,
	margin_v_cm: float = DEFAULT_CELL_MARGIN_CM,
	margin_h_cm: float = DEFAULT_CELL_MARGIN_CM,
	ppc: float | None = None,
	ppi: float | None = None,
	grid_cols: int = DEFAULT_GRID_COLS,
	grid_rows: int = DEFAULT_GRID_ROWS,
	verbose: bool = True,
) -> LayoutConfig:
	"""
	Translate physical print parameters into a pixel layout.

	A target height larger than the computed cell height is clamped to
	the cell height and a warning is printed to stderr.

	Args:
		target_height_cm: Requested photo height.
		page_border_cm: Outer page border on each side.
		margin_v_cm: Vertical gap between rows.
		margin_h_cm: Horizontal gap between columns.
		ppc: Optional pixels per centimeter.
		ppi: Optional pixels per inch, overrides ppc.
		grid_cols: Photos per row.
		grid_rows: Photos per column.
		verbose: Print the clamp warning.

	Returns:
		LayoutConfig.
	"""
	if grid_cols < 1 or grid_rows < 1:
		raise InputError(f"grid must have at least one row and column, got {grid_cols}x{grid_rows}")

	density = resolve_ppc(ppc, ppi)
	page_width_px, page_height_px = compute_page_size_px(density)
	max_cell_height_px = compute_max_cell_px(
		PAGE_HEIGHT_CM, page_border_cm, margin_v_cm, grid_rows, density,
	)
	max_cell_width_px = compute_max_cell_px(
		PAGE_WIDTH_CM, page_border_cm, margin_h_cm, grid_cols, density,
	)

	target_height_px = cm_to_px(target_height_cm, density)
	target_clamped = False
	if target_height_px > max_cell_height_px:
		if verbose:
			print(
				f"Warning: target height {target_height_px}px exceeds the max cell height "
				f"{max_cell_height_px}px, using the max cell height",
				file=sys.stderr,
			)
		target_height_px = max_cell_height_px
		target_clamped = True

	config = LayoutConfig(
		ppc=density,
		page_border_px=cm_to_px(page_border_cm, density),
		margin_v_px=cm_to_px(margin_v_cm, density),
		margin_h_px=cm_to_px(margin_h_cm, density),
		target_height_px=target_height_px,
		max_cell_height_px=max_cell_height_px,
		max_cell_width_px=max_cell_width_px,
		grid_rows=grid_rows,
		grid_cols=grid_cols,
		page_width_px=page_width_px,
		page_height_px=page_height_px,
		target_clamped=target_clamped,
	)
	return config
