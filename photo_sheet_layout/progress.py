"""
Progress events and the display worker that renders them.

The pipeline only ever sends events. All display state lives in the
worker thread, which drains an unbounded queue until it sees STOP.
"""

# Standard Library
import dataclasses
import queue
import sys
import threading
import typing

# local repo modules
import photo_sheet_layout as psl
import photo_sheet_layout.config


PROGRESS_BAR_WIDTH = psl.config.PROGRESS_BAR_WIDTH
RECEIVE_TIMEOUT = 0.5

# event kinds
NEW_STAGE = "new_stage"
ADVANCE = "advance"
SET_POSITION = "set_position"
MESSAGE = "message"
STOP = "stop"

# stages
PAGES = "pages"
READ = "read"
NORMALIZE = "normalize"
COMPOSITE = "composite"

STAGES = (PAGES, READ, NORMALIZE, COMPOSITE)
STAGE_LABELS = {
	PAGES: "Pages",
	READ: "Read",
	NORMALIZE: "Normalize",
	COMPOSITE: "Compose",
}


@dataclasses.dataclass(frozen=True)
class ProgressEvent:
	kind: str
	stage: str | None = None
	value: int = 0
	text: str | None = None


#============================================
def new_stage(stage: str, total: int) -> ProgressEvent:
	return ProgressEvent(NEW_STAGE, stage=stage, value=total)


#============================================
def advance(stage: str, label: str | None = None) -> ProgressEvent:
	return ProgressEvent(ADVANCE, stage=stage, text=label)


#============================================
def set_position(stage: str, position: int) -> ProgressEvent:
	return ProgressEvent(SET_POSITION, stage=stage, value=position)


#============================================
def message(text: str) -> ProgressEvent:
	return ProgressEvent(MESSAGE, text=text)


#============================================
def stop() -> ProgressEvent:
	return ProgressEvent(STOP)


class ProgressChannel:
	"""
	Best-effort, non-blocking sink for progress events.

	send() never blocks and never raises. Once the channel is closed,
	further events are dropped.
	"""

	def __init__(self) -> None:
		self._queue: queue.SimpleQueue = queue.SimpleQueue()
		self._closed = False

	@property
	def closed(self) -> bool:
		return self._closed

	def send(self, event: ProgressEvent) -> None:
		if self._closed:
			return
		self._queue.put(event)

	def close(self) -> None:
		"""
		Send the STOP sentinel once and drop everything after it.
		"""
		if self._closed:
			return
		self._queue.put(stop())
		self._closed = True

	def receive(self, timeout: float | None = None) -> ProgressEvent:
		return self._queue.get(timeout=timeout)


class NullChannel(ProgressChannel):
	"""
	Channel that discards every event, used when progress is disabled.
	"""

	def send(self, event: ProgressEvent) -> None:
		return

	def close(self) -> None:
		self._closed = True


@dataclasses.dataclass
class StageState:
	total: int = 0
	position: int = 0
	label: str = ""


#============================================
def format_bar(prefix: str, current: int, total: int) -> str:
	"""
	Format a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.

	Returns:
		Bar text, empty when total is not positive.
	"""
	if total <= 0:
		return ""
	current = min(current, total)
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	return f"{prefix} [{bar}] {current}/{total} ({percent}%)"


class ProgressDisplay(threading.Thread):
	"""
	Worker thread owning all progress display state.
	"""

	def __init__(self, channel: ProgressChannel, stream: typing.TextIO | None = None) -> None:
		super().__init__(name="progress-display")
		self.channel = channel
		self.stream = stream if stream is not None else sys.stdout
		self.stages = {stage: StageState() for stage in STAGES}
		self._line_width = 0

	def run(self) -> None:
		while True:
			try:
				event = self.channel.receive(timeout=RECEIVE_TIMEOUT)
			except queue.Empty:
				# sender is gone without sending STOP
				if not threading.main_thread().is_alive():
					self._finish_line()
					return
				continue
			if event.kind == STOP:
				self._finish_line()
				return
			self.handle(event)

	def handle(self, event: ProgressEvent) -> None:
		if event.kind == MESSAGE:
			self._finish_line()
			self.stream.write(f"{event.text}\n")
			self.stream.flush()
			return

		state = self.stages.get(event.stage)
		if state is None:
			return
		if event.kind == NEW_STAGE:
			state.total = event.value
			state.position = 0
			state.label = ""
		elif event.kind == ADVANCE:
			state.position += 1
			if event.stage == READ and state.total > 0 and state.position >= state.total:
				state.label = "Read complete"
			elif event.text:
				state.label = event.text
		elif event.kind == SET_POSITION:
			state.position = event.value
		self.render()

	def render_line(self) -> str:
		parts = []
		for stage in STAGES:
			state = self.stages[stage]
			bar = format_bar(STAGE_LABELS[stage], state.position, state.total)
			if not bar:
				continue
			if state.label:
				bar = f"{bar} {state.label}"
			parts.append(bar)
		return " | ".join(parts)

	def render(self) -> None:
		line = self.render_line()
		padding = " " * max(0, self._line_width - len(line))
		self.stream.write(f"\r{line}{padding}")
		self.stream.flush()
		self._line_width = len(line)

	def _finish_line(self) -> None:
		if self._line_width > 0:
			self.stream.write("\n")
			self.stream.flush()
			self._line_width = 0


#============================================
def start_progress_display(stream: typing.TextIO | None = None) -> tuple[ProgressDisplay, ProgressChannel]:
	"""
	Start the display worker.

	Args:
		stream: Output stream, stdout by default.

	Returns:
		Tuple of (display thread, channel feeding it).
	"""
	channel = ProgressChannel()
	display = ProgressDisplay(channel, stream)
	display.start()
	return (display, channel)
