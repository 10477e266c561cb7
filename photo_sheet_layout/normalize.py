"""
Per-photo orientation and size normalization.
"""

# PIP3 modules
import PIL.Image


RESAMPLE_FILTER = PIL.Image.Resampling.LANCZOS


#============================================
def is_portrait(image: PIL.Image.Image) -> bool:
	"""
	Check whether an image is taller than it is wide.

	Args:
		image: PIL image.

	Returns:
		True for portrait images.
	"""
	width, height = image.size
	return height > width


#============================================
def rotate_to_landscape(image: PIL.Image.Image) -> PIL.Image.Image:
	"""
	Rotate portrait images 90 degrees counter-clockwise.

	Orientation is taken from the pixel dimensions only, EXIF tags are
	not consulted.

	Args:
		image: PIL image.

	Returns:
		Landscape or square image.
	"""
	if is_portrait(image):
		return image.transpose(PIL.Image.Transpose.ROTATE_90)
	return image


#============================================
def compute_fit_size(
	width: int,
	height: int,
	max_width: int,
	max_height: int,
) -> tuple[int, int]:
	"""
	Compute the largest size with the same aspect ratio that fits the box.

	Images smaller than the box are scaled up.

	Args:
		width: Source width.
		height: Source height.
		max_width: Box width.
		max_height: Box height.

	Returns:
		Tuple of (width, height), each at least 1.
	"""
	ratio = min(max_width / width, max_height / height)
	fit_width = max(1, int(round(width * ratio)))
	fit_height = max(1, int(round(height * ratio)))
	return (fit_width, fit_height)


#============================================
def normalize_image(
	image: PIL.Image.Image,
	max_width: int,
	target_height: int,
) -> PIL.Image.Image:
	"""
	Rotate an image into landscape and scale it to the cell height.

	Args:
		image: Decoded source image.
		max_width: Maximum cell width in pixels.
		target_height: Target photo height in pixels.

	Returns:
		RGBA image no wider than max_width and no taller than target_height.
	"""
	if image.mode != "RGBA":
		image = image.convert("RGBA")
	image = rotate_to_landscape(image)
	fit_size = compute_fit_size(image.width, image.height, max_width, target_height)
	if fit_size == image.size:
		return image.copy()
	return image.resize(fit_size, RESAMPLE_FILTER)
