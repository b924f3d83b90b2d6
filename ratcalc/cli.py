"""
Command line front end for ratcalc.

Three modes:
    ratcalc -e "1/2 + 0.#3"     evaluate one expression
    ratcalc session.txt         evaluate each line of a file
    ratcalc                     interactive session

Author: xwest
"""

import sys
from dataclasses import dataclass, replace
from typing import Iterable, Optional, TextIO

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from . import __version__
from .formatting import (
    format_value, describe_type, OUTPUT_MODES, INTERVAL_STYLES, DEFAULT_DECIMAL_LIMIT,
)
from .logging_config import get_logger, setup_logging
from .numbers import BaseSystem, PRESETS, RatcalcError
from .parser import ParseOptions, parse

logger = get_logger(__name__)

REPL_COMMANDS = {
    ":base N|name": "read bare numerals in radix N or a preset (binary, hex, roman, ...)",
    ":obase N|name": "print results in radix N or a preset",
    ":legacy": "every result is an interval, decimals carry uncertainty",
    ":typed": "integers, rationals and intervals are kept apart (default)",
    ":fraction": "print results as fractions (default)",
    ":decimal": "print results as repeating decimals with their period",
    ":both": "print the decimal followed by the fraction",
    ":scientific": "print results in E notation",
    ":limit N": "decimal places shown before cutting with ...",
    ":intervals STYLE": "interval display: range, compact, symmetric or relative",
    ":mixed": "toggle mixed-number display (2..1/4)",
    ":repeating": "toggle repeating-decimal display (0.#3)",
    ":help": "show this help",
    ":quit": "leave the session",
}


@dataclass
class SessionState:
    """Mutable settings of an interactive session."""
    options: ParseOptions
    mixed: bool = False
    repeating: bool = False
    mode: str = "fraction"
    interval_style: str = "range"
    decimal_limit: int = DEFAULT_DECIMAL_LIMIT
    output_base: Optional[BaseSystem] = None

    def render(self, value) -> str:
        return format_value(
            value,
            mixed=self.mixed,
            repeating=self.repeating,
            base=self.output_base,
            mode=self.mode,
            interval_style=self.interval_style,
            decimal_limit=self.decimal_limit,
        )


def resolve_base(spec: str) -> BaseSystem:
    """
    Look up a base by preset name or radix.

    Raises:
        RangeError: For a radix outside 2..62
        click.BadParameter: For an unknown name
    """
    key = spec.strip().lower()
    if key in PRESETS:
        return PRESETS[key]
    if key.isdigit():
        return BaseSystem.from_base(int(key))
    raise click.BadParameter(
        f"unknown base '{spec}', use 2-62 or one of: {', '.join(sorted(PRESETS))}"
    )


def evaluate_lines(lines: Iterable[str], state: SessionState) -> int:
    """
    Evaluate each non-blank, non-comment line, stopping at the first error.

    Returns:
        Process exit code
    """
    for number, line in enumerate(lines, start=1):
        expression = line.strip()
        if not expression or expression.startswith("#"):
            continue
        try:
            shown = state.render(parse(expression, state.options))
        except RatcalcError as error:
            click.echo(f"line {number}: {error.diagnostic}", err=True)
            return 1
        click.echo(f"{expression} = {shown}")
    return 0


def handle_command(command: str, state: SessionState, console: Console) -> bool:
    """Apply a ``:command``; returns False when the session should end."""
    name, _, argument = command.partition(" ")
    name = name.lower()
    argument = argument.strip()

    if name in (":quit", ":exit", ":q"):
        return False
    if name == ":help":
        table = Table(show_header=False, box=None)
        for usage, text in REPL_COMMANDS.items():
            table.add_row(Text(usage, style="bold cyan"), text)
        console.print(table)
    elif name == ":legacy":
        state.options = replace(state.options, type_aware=False)
        console.print("[yellow]Legacy mode:[/yellow] results are intervals")
    elif name == ":typed":
        state.options = replace(state.options, type_aware=True)
        console.print("[green]Type-aware mode[/green]")
    elif name[1:] in OUTPUT_MODES:
        state.mode = name[1:]
        console.print(f"Output mode: {state.mode}")
    elif name == ":limit":
        if not argument:
            console.print(f"Decimal limit: {state.decimal_limit} places")
        elif argument.isdigit() and int(argument) > 0:
            state.decimal_limit = int(argument)
            console.print(f"Decimal limit: {state.decimal_limit} places")
        else:
            console.print("[red]:limit takes a positive integer[/red]")
    elif name == ":intervals":
        style = argument.lower()
        if style in INTERVAL_STYLES:
            state.interval_style = style
            console.print(f"Interval display: {style}")
        elif not style:
            console.print(f"Interval display: {state.interval_style}")
        else:
            console.print(f"[red]Unknown interval style '{argument}'[/red], use one of: "
                          f"{', '.join(INTERVAL_STYLES)}")
    elif name == ":mixed":
        state.mixed = not state.mixed
        console.print(f"Mixed numbers {'on' if state.mixed else 'off'}")
    elif name == ":repeating":
        state.repeating = not state.repeating
        console.print(f"Repeating decimals {'on' if state.repeating else 'off'}")
    elif name in (":base", ":obase"):
        current = state.options.input_base if name == ":base" else state.output_base
        label = "Input base" if name == ":base" else "Output base"
        if not argument:
            console.print(f"{label}: {current or 'decimal'}")
        else:
            try:
                base = resolve_base(argument)
            except (RatcalcError, click.BadParameter) as error:
                console.print(f"[red]{error}[/red]")
            else:
                if name == ":base":
                    state.options = replace(state.options, input_base=base)
                else:
                    state.output_base = base
                console.print(f"{label}: {base}")
    else:
        console.print(f"[red]Unknown command {name}[/red], try :help")
    return True


def run_repl(state: SessionState, console: Console) -> int:
    """Interactive loop; errors are reported and the session continues."""
    console.print(Panel(
        f"ratcalc {__version__} - exact rational and interval arithmetic\n"
        "Type an expression, :help for commands, :quit to leave",
        border_style="cyan",
    ))

    while True:
        try:
            line = Prompt.ask("[bold cyan]>[/bold cyan]", console=console)
        except (EOFError, KeyboardInterrupt):
            console.print()
            return 0

        line = line.strip()
        if not line:
            continue
        if line.startswith(":"):
            if not handle_command(line, state, console):
                return 0
            continue

        try:
            value = parse(line, state.options)
            shown = state.render(value)
        except RatcalcError as error:
            logger.debug("Evaluation failed for %r", line, exc_info=True)
            console.print(Text(str(error.diagnostic), style="red"))
            continue
        console.print(
            Text(shown, style="bold"),
            Text(f"  ({describe_type(value)})", style="dim"),
        )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("file", required=False, type=click.File("r"))
@click.option("-e", "--expression", help="Evaluate a single expression and exit.")
@click.option("--base", "base_spec", default="decimal", show_default=True,
              help="Input base for bare numerals: 2-62 or a preset name.")
@click.option("--output-base", "output_base_spec", default=None,
              help="Print results in this base: 2-62 or a preset name.")
@click.option("--legacy", is_flag=True, help="Interval-only results with decimal uncertainty.")
@click.option("--mode", type=click.Choice(OUTPUT_MODES), default="fraction", show_default=True,
              help="How results are printed.")
@click.option("--decimal", is_flag=True, help="Shorthand for --mode decimal.")
@click.option("--intervals", "interval_style", type=click.Choice(INTERVAL_STYLES),
              default="range", show_default=True, help="How intervals are printed.")
@click.option("--limit", "decimal_limit", type=click.IntRange(min=1),
              default=DEFAULT_DECIMAL_LIMIT, show_default=True,
              help="Decimal places shown before cutting with '...'.")
@click.option("--mixed", is_flag=True, help="Show rationals as mixed numbers.")
@click.option("--repeating", is_flag=True, help="Show rationals as repeating decimals.")
@click.option("--log-level", default=None, help="Log level (default: $RATCALC_LOG_LEVEL or WARNING).")
@click.version_option(__version__, prog_name="ratcalc")
def cli(file: Optional[TextIO], expression: Optional[str], base_spec: str,
        output_base_spec: Optional[str], legacy: bool, mode: str, decimal: bool,
        interval_style: str, decimal_limit: int, mixed: bool, repeating: bool,
        log_level: Optional[str]):
    """Evaluate exact rational and interval expressions."""
    interactive = file is None and expression is None
    try:
        setup_logging(log_level, use_rich=interactive)
    except ValueError as error:
        raise click.BadParameter(str(error), param_hint="--log-level")

    try:
        base = resolve_base(base_spec)
    except RatcalcError as error:
        raise click.BadParameter(error.message, param_hint="--base")

    output_base = None
    if output_base_spec is not None:
        try:
            output_base = resolve_base(output_base_spec)
        except RatcalcError as error:
            raise click.BadParameter(error.message, param_hint="--output-base")

    state = SessionState(
        options=ParseOptions(type_aware=not legacy, input_base=base),
        mixed=mixed,
        repeating=repeating,
        mode="decimal" if decimal else mode,
        interval_style=interval_style,
        decimal_limit=decimal_limit,
        output_base=output_base,
    )

    if expression is not None:
        try:
            shown = state.render(parse(expression, state.options))
        except RatcalcError as error:
            click.echo(str(error.diagnostic), err=True)
            sys.exit(1)
        click.echo(shown)
        return

    if file is not None:
        sys.exit(evaluate_lines(file, state))

    sys.exit(run_repl(state, Console()))


def main():
    """Console script entry point."""
    cli(prog_name="ratcalc")


if __name__ == "__main__":
    main()
