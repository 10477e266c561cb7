"""
Print exports: a sheet PDF at physical page size and a run manifest.
"""

# Standard Library
import json
import pathlib

# PIP3 modules
import reportlab.lib.pagesizes
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import photo_sheet_layout as psl
import photo_sheet_layout.config


LayoutConfig = psl.config.LayoutConfig

PDF_PAGE_SIZE = reportlab.lib.pagesizes.landscape(reportlab.lib.pagesizes.A4)


#============================================
def export_pdf(page_paths: list[pathlib.Path], pdf_path: pathlib.Path) -> int:
	"""
	Write sheet images into a PDF, one A4 landscape page per sheet.

	Each sheet fills its page so the printed scale matches the layout.

	Args:
		page_paths: Sheet image paths in page order.
		pdf_path: Output PDF path.

	Returns:
		Number of PDF pages written.
	"""
	page_width, page_height = PDF_PAGE_SIZE
	pdf = reportlab.pdfgen.canvas.Canvas(str(pdf_path), pagesize=PDF_PAGE_SIZE)
	for page_path in page_paths:
		reader = reportlab.lib.utils.ImageReader(str(page_path))
		pdf.drawImage(reader, 0, 0, width=page_width, height=page_height, mask="auto")
		pdf.showPage()
	pdf.save()
	return len(page_paths)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	inputs: list[pathlib.Path],
	page_paths: list[pathlib.Path],
	layout: LayoutConfig,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		inputs: Input photo paths in placement order.
		page_paths: Written sheet paths.
		layout: Layout configuration.
	"""
	data = {
		"inputs": [str(path) for path in inputs],
		"pages": [str(path) for path in page_paths],
		"page_count": len(page_paths),
		"photos_per_page": layout.cells_per_page,
		"layout": {
			"ppc": layout.ppc,
			"page_width_px": layout.page_width_px,
			"page_height_px": layout.page_height_px,
			"page_border_px": layout.page_border_px,
			"margin_v_px": layout.margin_v_px,
			"margin_h_px": layout.margin_h_px,
			"target_height_px": layout.target_height_px,
			"max_cell_height_px": layout.max_cell_height_px,
			"max_cell_width_px": layout.max_cell_width_px,
			"grid_rows": layout.grid_rows,
			"grid_cols": layout.grid_cols,
			"target_clamped": layout.target_clamped,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
