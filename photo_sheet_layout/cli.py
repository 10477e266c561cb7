"""
CLI entry points for photo print sheet layout.
"""

# Standard Library
import argparse
import pathlib
import sys
import time

# local repo modules
import photo_sheet_layout as psl
import photo_sheet_layout.config
import photo_sheet_layout.export
import photo_sheet_layout.pipeline
import photo_sheet_layout.progress


LayoutConfig = psl.config.LayoutConfig
InputError = psl.config.InputError

PRESETS = psl.config.PRESETS
DEFAULT_PRESET = psl.config.DEFAULT_PRESET
DEFAULT_CELL_MARGIN_CM = psl.config.DEFAULT_CELL_MARGIN_CM
DEFAULT_GRID_COLS = psl.config.DEFAULT_GRID_COLS
DEFAULT_GRID_ROWS = psl.config.DEFAULT_GRID_ROWS
DEFAULT_OUTPUT_DIR = psl.config.DEFAULT_OUTPUT_DIR
DEFAULT_OUTPUT_FORMAT = psl.config.DEFAULT_OUTPUT_FORMAT
OUTPUT_FORMATS = psl.config.OUTPUT_FORMATS
PDF_NAME = psl.config.PDF_NAME
MANIFEST_NAME = psl.config.MANIFEST_NAME
VERSION = psl.config.VERSION


#============================================
def build_layout_config_from_args(args: argparse.Namespace) -> LayoutConfig:
	"""
	Build the layout config from CLI args, filling gaps from the preset.

	Args:
		args: Parsed argparse namespace.

	Returns:
		LayoutConfig.
	"""
	preset = PRESETS[args.preset]
	target_height_cm = args.height
	if target_height_cm is None:
		target_height_cm = preset["target_height_cm"]
	page_border_cm = args.border
	if page_border_cm is None:
		page_border_cm = preset["page_border_cm"]
	margin_cm = args.margin
	if margin_cm is None:
		margin_cm = DEFAULT_CELL_MARGIN_CM

	config = psl.config.build_layout_config(
		target_height_cm=target_height_cm,
		page_border_cm=page_border_cm,
		margin_v_cm=margin_cm,
		margin_h_cm=margin_cm,
		ppc=args.ppc,
		ppi=args.ppi,
		grid_cols=args.nh,
		grid_rows=args.nv,
	)
	return config


#============================================
def build_parser() -> argparse.ArgumentParser:
	"""
	Build the argument parser.

	Returns:
		ArgumentParser.
	"""
	parser = argparse.ArgumentParser(description="Lay out a directory of photos onto A4 print sheets.")
	parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

	io_group = parser.add_argument_group("Input and output")
	io_group.add_argument("-i", "--input", dest="input_dir", required=True, help="Directory of photos.")
	io_group.add_argument("-o", "--output", dest="output_dir", default=DEFAULT_OUTPUT_DIR, help="Output directory, recreated on every run.")
	io_group.add_argument("-f", "--format", dest="output_format", choices=OUTPUT_FORMATS, default=DEFAULT_OUTPUT_FORMAT, help="Sheet image format.")
	io_group.add_argument("--pdf", dest="pdf", action="store_true", help=f"Also write {PDF_NAME} at A4 landscape size.")
	io_group.add_argument("--no-pdf", dest="pdf", action="store_false", help="Skip the PDF export.")
	io_group.add_argument("--manifest", dest="manifest", action="store_true", help=f"Also write {MANIFEST_NAME}.")
	io_group.add_argument("--no-manifest", dest="manifest", action="store_false", help="Skip the manifest.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("--preset", dest="preset", choices=sorted(PRESETS), default=DEFAULT_PRESET, help="Default height and border set.")
	layout_group.add_argument("--height", dest="height", type=float, default=None, metavar="CM", help="Photo height in cm.")
	layout_group.add_argument("--border", dest="border", type=float, default=None, metavar="CM", help="Page border in cm.")
	layout_group.add_argument("--margin", dest="margin", type=float, default=None, metavar="CM", help="Gap between photos in cm.")
	layout_group.add_argument("--nh", dest="nh", type=int, default=DEFAULT_GRID_COLS, metavar="COUNT", help="Photos per row.")
	layout_group.add_argument("--nv", dest="nv", type=int, default=DEFAULT_GRID_ROWS, metavar="COUNT", help="Photos per column.")

	density_group = parser.add_argument_group("Density")
	density_group.add_argument("--ppc", dest="ppc", type=float, default=None, help="Pixels per cm, 118.11 by default (300 PPI).")
	density_group.add_argument("--ppi", dest="ppi", type=float, default=None, help="Pixels per inch, wins over --ppc.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-q", "--quiet", dest="quiet", action="store_true", help="Disable the progress display.")

	parser.set_defaults(
		pdf=False,
		manifest=False,
		quiet=False,
	)
	return parser


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, sys.argv by default.

	Returns:
		Parsed argparse namespace.
	"""
	parser = build_parser()
	args = parser.parse_args(argv)
	return args


#============================================
def run(args: argparse.Namespace) -> psl.pipeline.PipelineResult:
	"""
	Run the full pipeline from a photo directory to print sheets.

	Args:
		args: Parsed argparse namespace.

	Returns:
		PipelineResult.
	"""
	verbose = not args.quiet
	if verbose:
		print("Photo print sheet layout")
		print(f"Input: {args.input_dir}")
		print(f"Output: {args.output_dir}")

	# the clamp warning goes to stderr even with --quiet
	layout = build_layout_config_from_args(args)
	if verbose:
		print(f"Grid: {layout.grid_cols}x{layout.grid_rows} at {layout.ppc:.2f} px/cm")
		print(f"Photo height: {layout.target_height_px}px, cell: {layout.max_cell_width_px}x{layout.max_cell_height_px}px")

	start_time = time.perf_counter()
	if verbose:
		display, channel = psl.progress.start_progress_display()
	else:
		display = None
		channel = psl.progress.NullChannel()
	try:
		result = psl.pipeline.run_pipeline(
			args.input_dir,
			args.output_dir,
			layout,
			channel,
			args.output_format,
		)
	finally:
		channel.close()
		if display is not None:
			display.join()
	layout_time = time.perf_counter() - start_time

	output_dir = pathlib.Path(args.output_dir)
	if args.pdf:
		pdf_path = output_dir / PDF_NAME
		psl.export.export_pdf(result.page_paths, pdf_path)
		if verbose:
			print(f"PDF written: {pdf_path}")
	if args.manifest:
		manifest_path = output_dir / MANIFEST_NAME
		psl.export.write_manifest(manifest_path, result.inputs, result.page_paths, layout)
		if verbose:
			print(f"Manifest written: {manifest_path}")

	if verbose:
		print(f"Photos found: {result.total_images}")
		print(f"Pages written: {result.pages}")
		print(f"Timing: total={layout_time:.2f}s")
	return result


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.

	Args:
		argv: Optional argument list.

	Returns:
		Process exit status.
	"""
	args = parse_args(argv)
	try:
		run(args)
	except (InputError, OSError, ValueError) as error:
		print(f"Error: {error}", file=sys.stderr)
		return 1
	return 0
