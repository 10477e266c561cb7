"""
Page pipeline: scan, batch, load, normalize, compose, and save sheets.
"""

# Standard Library
import dataclasses
import pathlib
import shutil

# PIP3 modules
import PIL.Image

# local repo modules
import photo_sheet_layout as psl
import photo_sheet_layout.batching
import photo_sheet_layout.compose
import photo_sheet_layout.config
import photo_sheet_layout.normalize
import photo_sheet_layout.progress


LayoutConfig = psl.config.LayoutConfig
InputError = psl.config.InputError
ProgressChannel = psl.progress.ProgressChannel

DEFAULT_OUTPUT_FORMAT = psl.config.DEFAULT_OUTPUT_FORMAT
OUTPUT_PREFIX = psl.config.OUTPUT_PREFIX

# formats without an alpha channel get flattened onto this color
FLATTEN_BACKGROUND = (255, 255, 255)
ALPHA_FORMATS = ("png", "tif", "tiff", "webp")


@dataclasses.dataclass
class PipelineResult:
	total_images: int
	pages: int
	cells_per_page: int
	inputs: list[pathlib.Path]
	page_paths: list[pathlib.Path]


#============================================
def scan_inputs(input_dir: str | pathlib.Path) -> list[pathlib.Path]:
	"""
	List the files directly inside the input directory.

	Subdirectories and other non-file entries are skipped.

	Args:
		input_dir: Input directory.

	Returns:
		File paths sorted by name.
	"""
	path = pathlib.Path(input_dir)
	try:
		entries = list(path.iterdir())
	except OSError as error:
		raise InputError(f"input directory `{path}` does not exist or cannot be read") from error
	inputs = [entry for entry in entries if entry.is_file()]
	return sorted(inputs, key=lambda entry: entry.name)


#============================================
def prepare_output_dir(output_dir: str | pathlib.Path) -> pathlib.Path:
	"""
	Delete and recreate the output directory.

	Args:
		output_dir: Output directory.

	Returns:
		Output directory path.
	"""
	path = pathlib.Path(output_dir)
	if path.is_dir():
		shutil.rmtree(path)
	elif path.exists():
		path.unlink()
	path.mkdir(parents=True)
	return path


#============================================
def load_image(path: pathlib.Path) -> PIL.Image.Image:
	"""
	Open and fully decode an image file.

	Oversized images are reported as an InputError.

	Args:
		path: Image path.

	Returns:
		Decoded PIL image.
	"""
	try:
		with PIL.Image.open(path) as image:
			image.load()
			return image.copy()
	except PIL.Image.DecompressionBombError as error:
		raise InputError(f"{path.name}: {error}") from error


#============================================
def load_images(
	paths: list[pathlib.Path],
	channel: ProgressChannel,
) -> list[PIL.Image.Image]:
	"""
	Load a batch of images. The first failure aborts the batch.

	Args:
		paths: Image paths.
		channel: Progress channel.

	Returns:
		Decoded images in input order.
	"""
	images = []
	for path in paths:
		channel.send(psl.progress.advance(psl.progress.READ, f"Read: {path.name}"))
		images.append(load_image(path))
	return images


#============================================
def build_output_path(
	output_dir: pathlib.Path,
	index: int,
	output_format: str = DEFAULT_OUTPUT_FORMAT,
) -> pathlib.Path:
	return output_dir / f"{OUTPUT_PREFIX}_{index}.{output_format}"


#============================================
def save_page(canvas: PIL.Image.Image, output_path: pathlib.Path) -> None:
	"""
	Encode a page canvas, flattening it for formats without alpha.

	Args:
		canvas: RGBA page canvas.
		output_path: Output image path, format taken from the suffix.
	"""
	output_format = output_path.suffix.lstrip(".").lower()
	if output_format in ALPHA_FORMATS:
		canvas.save(output_path)
		return
	flat = PIL.Image.new("RGB", canvas.size, FLATTEN_BACKGROUND)
	flat.paste(canvas, mask=canvas.getchannel("A"))
	flat.save(output_path)


#============================================
def render_page(
	paths: list[pathlib.Path],
	layout: LayoutConfig,
	channel: ProgressChannel,
) -> PIL.Image.Image:
	"""
	Load, normalize, and compose one batch into a page canvas.

	Args:
		paths: Image paths for the page.
		layout: Layout configuration.
		channel: Progress channel.

	Returns:
		Composed RGBA page.
	"""
	images = load_images(paths, channel)
	normalized = []
	for image in images:
		channel.send(psl.progress.advance(psl.progress.NORMALIZE))
		normalized.append(
			psl.normalize.normalize_image(
				image,
				layout.max_cell_width_px,
				layout.target_height_px,
			)
		)
	images.clear()
	return psl.compose.compose_page(normalized, layout, channel)


#============================================
def run_pipeline(
	input_dir: str | pathlib.Path,
	output_dir: str | pathlib.Path,
	layout: LayoutConfig,
	channel: ProgressChannel | None = None,
	output_format: str = DEFAULT_OUTPUT_FORMAT,
) -> PipelineResult:
	"""
	Turn a directory of photos into print sheets, one file per page.

	Args:
		input_dir: Directory holding the photos.
		output_dir: Directory for sheets, recreated on every run.
		layout: Layout configuration.
		channel: Optional progress channel.
		output_format: Sheet file extension.

	Returns:
		PipelineResult.
	"""
	if channel is None:
		channel = psl.progress.NullChannel()
	inputs = scan_inputs(input_dir)
	output_path = prepare_output_dir(output_dir)

	batch_size = layout.cells_per_page
	splitter = psl.batching.BatchSplitter(inputs, batch_size)
	channel.send(psl.progress.new_stage(psl.progress.PAGES, len(splitter)))

	page_paths: list[pathlib.Path] = []
	for index, batch in enumerate(splitter):
		count = len(batch)
		for stage in (psl.progress.READ, psl.progress.NORMALIZE, psl.progress.COMPOSITE):
			channel.send(psl.progress.new_stage(stage, count))
		for stage in (psl.progress.READ, psl.progress.NORMALIZE, psl.progress.COMPOSITE):
			channel.send(psl.progress.set_position(stage, 0))

		canvas = render_page(batch, layout, channel)
		page_path = build_output_path(output_path, index, output_format)
		save_page(canvas, page_path)
		page_paths.append(page_path)
		channel.send(psl.progress.advance(psl.progress.PAGES))

	channel.send(psl.progress.message("Done!"))
	result = PipelineResult(
		total_images=len(inputs),
		pages=len(page_paths),
		cells_per_page=batch_size,
		inputs=inputs,
		page_paths=page_paths,
	)
	return result
