import logging
from rich.console import Console
from rich.logging import RichHandler
def setup_logging(level: str = "WARNING"):
    # stdout carries the test report, so diagnostics go to stderr
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
    logging.basicConfig(level=level.upper(), format="%(message)s", datefmt="[%X]", handlers=[handler], force=True)
    return logging.getLogger("cargo_testdox")
