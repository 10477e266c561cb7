import PIL.Image

import photo_sheet_layout.normalize as normalize


RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


#============================================
def _make_marked_image(width: int, height: int) -> PIL.Image.Image:
	"""
	Build a blue image with a red top-left pixel.

	Args:
		width: Image width.
		height: Image height.

	Returns:
		RGBA image.
	"""
	image = PIL.Image.new("RGBA", (width, height), BLUE)
	image.putpixel((0, 0), RED)
	return image


#============================================
def test_portrait_rotated_counter_clockwise() -> None:
	"""
	Portrait images turn landscape, top-left pixel ends bottom-left.
	"""
	image = _make_marked_image(30, 40)
	assert normalize.is_portrait(image)
	rotated = normalize.rotate_to_landscape(image)
	assert rotated.size == (40, 30)
	assert rotated.width > rotated.height
	assert rotated.getpixel((0, 29)) == RED


#============================================
def test_landscape_and_square_not_rotated() -> None:
	"""
	Only strictly portrait images are rotated.
	"""
	landscape = _make_marked_image(40, 30)
	square = _make_marked_image(30, 30)
	assert normalize.rotate_to_landscape(landscape) is landscape
	assert normalize.rotate_to_landscape(square) is square


#============================================
def test_fit_size_matches_binding_dimension() -> None:
	"""
	The tighter of the two ratios decides the output size.
	"""
	assert normalize.compute_fit_size(400, 300, 803, 591) == (788, 591)
	# very wide photos are limited by the cell width
	assert normalize.compute_fit_size(2000, 500, 803, 591) == (803, 201)
	# small images scale up
	assert normalize.compute_fit_size(40, 30, 80, 60) == (80, 60)


#============================================
def test_normalize_portrait_photo() -> None:
	"""
	A portrait photo comes out landscape at the target height.
	"""
	image = PIL.Image.new("RGB", (300, 400), (10, 20, 30))
	result = normalize.normalize_image(image, 803, 591)
	assert result.mode == "RGBA"
	assert result.size == (788, 591)


#============================================
def test_normalize_is_idempotent_for_sized_images() -> None:
	"""
	An image already at the target size keeps its dimensions and pixels.
	"""
	image = _make_marked_image(788, 591)
	result = normalize.normalize_image(image, 803, 591)
	assert result.size == image.size
	assert result.getpixel((0, 0)) == RED
	again = normalize.normalize_image(result, 803, 591)
	assert again.size == result.size


#============================================
def test_normalize_output_bounded() -> None:
	"""
	Output never exceeds the cell width or target height.
	"""
	for size in ((100, 100), (5000, 100), (100, 5000), (1200, 900), (900, 1200)):
		image = PIL.Image.new("RGB", size, (0, 0, 0))
		result = normalize.normalize_image(image, 803, 591)
		assert result.width <= 803
		assert result.height <= 591
		assert result.width >= result.height
