from enum import Enum
from typing import IO, List, Optional
import logging, signal, subprocess, threading
from ..config import AppConfig
from ..parsing.classifier import DocTest, TestResult, classify, doctest_filter
from ..reporters.console import ConsoleReporter

log = logging.getLogger("cargo_testdox")

LAUNCH_FAILURE_EXIT_CODE = 127
TERMINATE_GRACE_S = 5.0

class LaunchError(RuntimeError):
    """The test runner could not be started at all."""

class Interrupted(Exception):
    def __init__(self, signum: int):
        super().__init__(signum)
        self.signum = signum

class RunState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"

def exit_status(returncode: int) -> int:
    # Popen reports death by signal N as -N; shells report 128 + N
    return 128 - returncode if returncode < 0 else returncode

class TestRunner:
    __test__ = False

    def __init__(self, cfg: AppConfig, reporter: Optional[ConsoleReporter] = None):
        self.cfg = cfg
        self.reporter = reporter or ConsoleReporter(cfg.output.color, cfg.output.show_module)
        self.is_doctest = doctest_filter(cfg.output.doctest_pattern)
        self.state = RunState.NOT_STARTED
        self.proc: Optional[subprocess.Popen] = None

    def command(self, extra_args: List[str]) -> List[str]:
        return [*self.cfg.runner.command, *extra_args]

    def run(self, extra_args: Optional[List[str]] = None) -> int:
        """Stream the runner's output through the reporter; returns its exit status or 128 + signal."""
        cmd = self.command(list(extra_args or []))
        log.debug("running %s", cmd)
        try:
            self.proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
        except OSError as e:
            self.state = RunState.DONE
            raise LaunchError(f"could not run {cmd[0]!r}: {e.strerror or e}") from e
        self.state = RunState.RUNNING

        previous = self._trap_sigterm()
        try:
            self._pump(self.proc.stdout)
            returncode = self.proc.wait()
        except (KeyboardInterrupt, Interrupted) as e:
            self.state = RunState.DRAINING
            signum = e.signum if isinstance(e, Interrupted) else signal.SIGINT
            log.warning("interrupted, stopping test runner")
            self._stop(signum)
            # whatever the runner printed on its way out; a second interrupt aborts this
            if not self.proc.stdout.closed:
                self._pump(self.proc.stdout)
            try:
                self.proc.wait(timeout=TERMINATE_GRACE_S)
            except subprocess.TimeoutExpired:
                pass  # _reap escalates
            return 128 + int(signum)
        finally:
            self._restore_sigterm(previous)
            self._reap()
            self.state = RunState.DONE

        r = self.reporter
        log.debug("%d passed, %d failed, %d ignored", r.passed, r.failed, r.ignored)
        return exit_status(returncode)

    def _pump(self, stream: IO[bytes]) -> None:
        while True:
            try:
                raw = stream.readline()
            except OSError as e:
                log.warning("error reading test output: %s", e)
                self.state = RunState.DRAINING
                stream.close()
                return
            if not raw:
                self.state = RunState.DRAINING
                return
            if self.state is RunState.RUNNING and self.proc.poll() is not None:
                # exited; what is left in the pipe still gets rendered
                self.state = RunState.DRAINING
            self.handle_line(raw.decode("utf-8", errors="replace").rstrip("\r\n"))

    def handle_line(self, line: str) -> None:
        c = classify(line, self.is_doctest)
        if isinstance(c, TestResult):
            self.reporter.emit_result(c, c.sentence)
        elif isinstance(c, DocTest):
            log.debug("skipping doc-test %s", c.identifier)
        else:
            self.reporter.emit_passthrough(c.text)

    def _stop(self, signum: int) -> None:
        # the pipe is drained before waiting, so a child printing on its way out cannot block
        if self.proc is not None and self.proc.poll() is None:
            self.proc.send_signal(signal.SIGINT if signum == signal.SIGINT else signal.SIGTERM)

    def _reap(self) -> None:
        if self.proc is None:
            return
        if self.proc.poll() is None:
            self.proc.terminate()
            try:
                self.proc.wait(timeout=TERMINATE_GRACE_S)
            except subprocess.TimeoutExpired:
                self.proc.kill()
                self.proc.wait()
        if self.proc.stdout is not None:
            self.proc.stdout.close()

    @staticmethod
    def _trap_sigterm():
        if threading.current_thread() is not threading.main_thread():
            return None
        def handler(signum, frame):
            raise Interrupted(signum)
        return signal.signal(signal.SIGTERM, handler)

    @staticmethod
    def _restore_sigterm(previous) -> None:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)
