import logging
import threading
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from md2pdf.config import ConverterConfig

logger = logging.getLogger(__name__)


def watched_files(options, working_directory=None):
	"""The input document plus the local style include and filter, existing or not"""
	directory = Path(working_directory) if working_directory else Path('.')
	return [
		Path(options.input_file),
		directory / ConverterConfig.STYLE_INCLUDE,
		directory / ConverterConfig.LUA_FILTER,
	]


class SourceWatcher(FileSystemEventHandler):
	def __init__(self, filenames, changed_event):
		self.resolved_filenames = {Path(f).resolve() for f in filenames}
		# parent directories of the resolved paths, so symlinked sources are seen
		self.directories_to_watch = {f.parent for f in self.resolved_filenames}
		self.changed_event = changed_event
		logger.debug(f'SourceWatcher: watching {len(self.resolved_filenames)} files in {len(self.directories_to_watch)} directories')

	def on_any_event(self, event):
		logger.debug(f'SourceWatcher.on_any_event: {event.src_path} (type: {event.event_type})')

		# Skip directory events and .swp files from editors like vim
		if event.is_directory or str(event.src_path).endswith('.swp'):
			return

		# editors often save by renaming a temp file over the original
		paths = [event.src_path, getattr(event, 'dest_path', '')]
		for path in paths:
			if path and self._resolve(path) in self.resolved_filenames:
				logger.debug(f'Watched file modified: {path}')
				self.changed_event.set()
				return

	def _resolve(self, path):
		event_path = Path(str(path))
		try:
			return event_path.resolve()
		except OSError:
			# File might have been deleted, try to handle it anyway
			return event_path


def run_observers(event_handler, stop_event, poll_interval=1):
	"""Run one observer per directory until stop_event is set"""
	observers = []
	for directory in event_handler.directories_to_watch:
		if not directory.is_dir():
			continue
		observer = Observer()
		observer.schedule(event_handler, path=str(directory), recursive=False)
		observer.start()
		observers.append(observer)

	try:
		while not stop_event.is_set():
			stop_event.wait(poll_interval)
	finally:
		# Stop all observers on exit
		for observer in observers:
			observer.stop()

		for observer in observers:
			observer.join()


def watch_and_convert(converter, working_directory=None, poll_interval=1):
	"""
	Convert once, then convert again whenever a source file changes.

	Conversions run on the calling thread one at a time; the observer thread
	only flags changes. Ends on KeyboardInterrupt and returns the result of
	the last conversion.
	"""
	succeeded = converter.convert()

	changed_event = threading.Event()
	stop_event = threading.Event()
	event_handler = SourceWatcher(watched_files(converter.options, working_directory), changed_event)

	observer_thread = threading.Thread(
		target=run_observers,
		args=(event_handler, stop_event, poll_interval)
	)
	observer_thread.start()
	print("Watching for changes. Press Ctrl-C to stop.")

	try:
		while True:
			if changed_event.wait(poll_interval):
				changed_event.clear()
				succeeded = converter.convert()
	except KeyboardInterrupt:
		print()
		print("Stopped watching.")
	finally:
		stop_event.set()
		observer_thread.join()

	return succeeded
