import sys
from typing import List, Optional
import typer
from .config import load_config, AppConfig, ConfigError
from .logging import setup_logging
from .runners.runner import TestRunner, LaunchError, LAUNCH_FAILURE_EXIT_CODE

CONFIG_ERROR_EXIT_CODE = 2

# No options of our own: everything, --help and -- included, belongs to the runner.
app = typer.Typer(add_completion=False, help="Print your test names as sentences")

@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True, "help_option_names": []})
def run(ctx: typer.Context):
    args = list(ctx.args)
    # `cargo testdox ...` invokes us as `cargo-testdox testdox ...`
    if args[:1] == ["testdox"]:
        args = args[1:]

    try:
        cfg: AppConfig = load_config()
    except ConfigError as e:
        setup_logging().error("invalid config: %s", e)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE)

    log = setup_logging(cfg.log_level)
    try:
        code = TestRunner(cfg).run(args)
    except LaunchError as e:
        log.error("%s", e)
        raise typer.Exit(code=LAUNCH_FAILURE_EXIT_CODE)
    raise typer.Exit(code=code)

def main(argv: Optional[List[str]] = None):
    if argv is None:
        argv = sys.argv[1:]
    # click swallows the first `--`; prepend one so any `--` from the caller survives
    app(args=["--", *argv], prog_name="cargo-testdox")
