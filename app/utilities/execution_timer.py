from contextlib import ContextDecorator
import time


class ExecutionTimer(ContextDecorator):
    """Wall-clock timer for request handlers; elapsed time is in milliseconds."""

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.elapsed_ms = None
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.elapsed_ms = int((time.perf_counter() - self.start_time) * 1000)
