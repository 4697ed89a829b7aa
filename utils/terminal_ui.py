import sys
import time
import threading
from contextlib import contextmanager

# --------- ANSI COLORS ----------
class Color:
    RESET = "\033[0m"
    DIM = "\033[2m"
    BOLD = "\033[1m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


def colorize(text, color, enabled=True):
    if not enabled or not text:
        return text
    return f"{color}{text}{Color.RESET}"


# --------- SPINNER ----------
_SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"

class Spinner:
    def __init__(self, text="", interval=0.1, color=Color.CYAN, stream=None):
        self.text = text
        self.interval = interval
        self.color = color
        self.stream = stream or sys.stdout
        self._started_at = None
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._spin, daemon=True)

    @property
    def elapsed_s(self):
        if self._started_at is None:
            return 0
        return int(time.monotonic() - self._started_at)

    def _spin(self):
        i = 0
        while not self._stop.is_set():
            frame = _SPINNER_FRAMES[i % len(_SPINNER_FRAMES)]
            self.stream.write(
                f"\r{self.color}{frame} {self.text} {self.elapsed_s}s{Color.RESET}"
            )
            self.stream.flush()
            time.sleep(self.interval)
            i += 1

    def start(self):
        self._started_at = time.monotonic()
        self._thread.start()

    def stop(self, final_text=None, success=True):
        self._stop.set()
        self._thread.join()
        symbol = "✓" if success else "✗"
        color = Color.GREEN if success else Color.RED
        msg = final_text or self.text
        self.stream.write(
            f"\r{color}{symbol} {msg} ({self.elapsed_s}s){Color.RESET}\n"
        )
        self.stream.flush()


# --------- CONTEXT MANAGER ----------
@contextmanager
def stage(text, *, color=Color.CYAN, stream=None):
    spinner = Spinner(text=text, color=color, stream=stream)
    spinner.start()
    try:
        yield spinner
        spinner.stop(text, success=True)
    except Exception:
        spinner.stop(text, success=False)
        raise
