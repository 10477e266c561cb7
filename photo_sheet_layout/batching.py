"""
Split an ordered sequence into page-sized batches.
"""

# Standard Library
import collections.abc
import math


#============================================
def iter_batches(items: collections.abc.Iterable, batch_size: int) -> collections.abc.Iterator[list]:
	"""
	Lazily yield consecutive batches of `batch_size` items.

	Every batch is full except possibly the last one. Only the batch
	being built is held in memory.

	Args:
		items: Ordered items.
		batch_size: Items per batch, must be positive.

	Returns:
		Iterator of lists.
	"""
	if batch_size <= 0:
		raise ValueError(f"batch size must be positive, got {batch_size}")
	iterator = iter(items)
	while True:
		batch = []
		for item in iterator:
			batch.append(item)
			if len(batch) == batch_size:
				break
		if not batch:
			return
		yield batch


#============================================
def count_batches(item_count: int, batch_size: int) -> int:
	"""
	Number of batches `iter_batches` yields for `item_count` items.

	Args:
		item_count: Number of items.
		batch_size: Items per batch.

	Returns:
		Batch count.
	"""
	if batch_size <= 0:
		raise ValueError(f"batch size must be positive, got {batch_size}")
	return int(math.ceil(item_count / batch_size))


class BatchSplitter:
	"""
	Restartable batch view over a sequence.

	Each call to iter() starts a new pass over the underlying items.
	"""

	def __init__(self, items: collections.abc.Iterable, batch_size: int) -> None:
		if batch_size <= 0:
			raise ValueError(f"batch size must be positive, got {batch_size}")
		self.items = items
		self.batch_size = batch_size

	def __iter__(self) -> collections.abc.Iterator[list]:
		return iter_batches(self.items, self.batch_size)

	def __len__(self) -> int:
		return count_batches(len(self.items), self.batch_size)
