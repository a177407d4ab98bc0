"""
satcounter - command-line front end for a persistent saturating counter.

Global options:
  --state PATH             JSON state file (env SATCOUNTER_STATE); in-memory if unset
  --bits INTEGER           Counter width: 8, 16, 32, 64 or 128 (env SATCOUNTER_INT_BITS)
  --json                   Output the JSON result envelope
  --verbose / -v           Debug logging on stderr

Examples:
  satcounter --state counter.json deploy --init 42
  satcounter --state counter.json increment
  satcounter --state counter.json modify-by -10
  satcounter --state counter.json get
  satcounter abi
"""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from ..config import CounterConfig, load_config
from ..math import SUPPORTED_BITS
from ..runtime import abi
from ..runtime.host import run_call

app = typer.Typer(
    name="satcounter",
    help="Deploy, query and mutate a saturating signed counter.",
    no_args_is_help=True,
    add_completion=False,
)


class GlobalContext:
    def __init__(self) -> None:
        self.config: CounterConfig = load_config()
        self.json_output: bool = False


_ctx = GlobalContext()


@app.callback()
def main_callback(
    state: Optional[Path] = typer.Option(
        None,
        "--state",
        help="Path to the JSON state file (in-memory store when omitted)",
        envvar="SATCOUNTER_STATE",
    ),
    bits: Optional[int] = typer.Option(
        None,
        "--bits",
        help="Counter width in bits (8, 16, 32, 64, 128)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output JSON instead of text"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    Every command runs exactly one contract call against the store given by
    --state, loading the counter before the call and saving it afterwards.
    """
    cfg = load_config()
    overrides: Dict[str, Any] = {}
    if state is not None:
        overrides["state_path"] = state.expanduser().resolve()
    if bits is not None:
        if bits not in SUPPORTED_BITS:
            raise typer.BadParameter(
                f"expected one of {sorted(SUPPORTED_BITS)}", param_hint="--bits"
            )
        overrides["int_bits"] = bits
    _ctx.config = dataclasses.replace(cfg, **overrides) if overrides else cfg
    _ctx.json_output = json_output

    logging.getLogger("satcounter").setLevel(
        logging.DEBUG if verbose else _ctx.config.log_level
    )


def _emit(out: Dict[str, Any]) -> None:
    if _ctx.json_output:
        typer.echo(json.dumps(out, indent=2, sort_keys=True))
    elif out.get("ok"):
        if out.get("result") is not None:
            typer.echo(str(out["result"]))
        if out.get("saturated"):
            typer.echo("saturated: value clamped at bound", err=True)
    else:
        err = out["error"]
        typer.echo(f"error [{err['code']}]: {err['message']}", err=True)
    if not out.get("ok"):
        raise typer.Exit(code=1)


def _run(call: str, args: List[Any]) -> None:
    _emit(run_call(call, args, config=_ctx.config))


@app.command()
def deploy(
    init: Optional[str] = typer.Option(
        None, "--init", help="Initial value (decimal or 0x-hex); default constructor when omitted"
    ),
) -> None:
    """Instantiate the counter in the store."""
    if init is None:
        _run("default", [])
    else:
        _run("new", [init])


@app.command()
def get() -> None:
    """Print the current value."""
    _run("get", [])


@app.command()
def increment() -> None:
    """Add one (stays at the maximum)."""
    _run("increment", [])


@app.command()
def decrement() -> None:
    """Subtract one (stays at the minimum)."""
    _run("decrement", [])


# negative deltas like -10 must reach DELTA instead of being parsed as options
@app.command("modify-by", context_settings={"ignore_unknown_options": True})
def modify_by(
    delta: str = typer.Argument(..., help="Signed delta (decimal or 0x-hex), e.g. 10 or -10"),
) -> None:
    """Add DELTA, clamping to the representable range."""
    _run("modify_by", [delta])


@app.command("abi")
def show_abi() -> None:
    """Print the contract manifest."""
    typer.echo(json.dumps(abi.manifest(_ctx.config.bounds), indent=2))


@app.command("config")
def show_config() -> None:
    """Print the effective configuration."""
    typer.echo(json.dumps(_ctx.config.as_dict(), indent=2, sort_keys=True))


def main() -> None:
    """Entry point for the satcounter CLI."""
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app()


if __name__ == "__main__":
    main()
