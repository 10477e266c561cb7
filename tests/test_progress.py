import io

import photo_sheet_layout.progress as progress


#============================================
def test_format_bar() -> None:
	"""
	Bars follow the `[####----] n/total (pct%)` format.
	"""
	text = progress.format_bar("Pages", 1, 2)
	assert text == "Pages [##########----------] 1/2 (50%)"
	assert progress.format_bar("Pages", 0, 0) == ""


#============================================
def test_send_after_close_is_dropped() -> None:
	"""
	Sending on a closed channel neither blocks nor raises.
	"""
	channel = progress.ProgressChannel()
	channel.send(progress.message("before"))
	channel.close()
	channel.close()
	channel.send(progress.message("after"))
	assert channel.receive(timeout=1.0).text == "before"
	assert channel.receive(timeout=1.0).kind == progress.STOP


#============================================
def test_display_renders_and_stops() -> None:
	"""
	The worker renders stage bars, prints messages, and exits on STOP.
	"""
	stream = io.StringIO()
	display, channel = progress.start_progress_display(stream)
	channel.send(progress.new_stage(progress.PAGES, 2))
	channel.send(progress.new_stage(progress.READ, 1))
	channel.send(progress.set_position(progress.READ, 0))
	channel.send(progress.advance(progress.READ, "Read: a.jpg"))
	channel.send(progress.advance(progress.PAGES))
	channel.send(progress.message("Done!"))
	channel.close()
	display.join(timeout=5.0)
	assert not display.is_alive()

	output = stream.getvalue()
	assert "Pages [" in output
	assert "1/2" in output
	assert "Read complete" in output
	assert "Done!\n" in output


#============================================
def test_display_state_tracks_events() -> None:
	"""
	Display state follows new-stage, advance, and set-position events.
	"""
	display = progress.ProgressDisplay(progress.ProgressChannel(), io.StringIO())
	display.handle(progress.new_stage(progress.COMPOSITE, 3))
	display.handle(progress.advance(progress.COMPOSITE))
	display.handle(progress.advance(progress.COMPOSITE))
	assert display.stages[progress.COMPOSITE].position == 2
	display.handle(progress.set_position(progress.COMPOSITE, 0))
	assert display.stages[progress.COMPOSITE].position == 0
	display.handle(progress.new_stage(progress.COMPOSITE, 5))
	assert display.stages[progress.COMPOSITE].total == 5


#============================================
def test_null_channel_discards() -> None:
	"""
	The null channel accepts events and closes quietly.
	"""
	channel = progress.NullChannel()
	channel.send(progress.message("ignored"))
	channel.close()
	assert channel.closed
