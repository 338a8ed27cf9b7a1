"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack assembler.

Usage Examples
--------------
Basic assembly (writes Max.hack next to Max.asm):
    $ hackasm Max.asm

With output file:
    $ hackasm Max.asm -o build/Max.hack

Generate all output files:
    $ hackasm Max.asm -o Max.hack -l Max.lst -s Max.sym

Stop at the first error:
    $ hackasm --max-errors 1 Max.asm

Verbose mode:
    $ hackasm -v Max.asm
"""

from pathlib import Path
from typing import Optional

import click

from hack_sdk import __version__
from hack_sdk.assembler import Assembler
from hack_sdk.cli.errors import handle_cli_exception, setup_logging
from hack_sdk.errors import ArgumentError


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .hack file (default: input.hack)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=1),
    default=100,
    show_default=True,
    help="Stop after this many errors (1 stops at the first bad line)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    max_errors: int,
    verbose: bool,
) -> None:
    """
    Assemble Hack source code into Hack machine code.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    The output has one 16-character binary word per instruction. No output
    file is written if any line fails to assemble.

    \b
    Examples:
        hackasm Max.asm              # Outputs Max.hack
        hackasm Max.asm -o out.hack  # Specify output file
        hackasm -l Max.lst Max.asm   # Also write a listing
    """
    setup_logging(verbose)

    output_file = output if output is not None else input_file.with_suffix(".hack")

    try:
        for target in (output_file, listing, symbols):
            if target is not None and target.resolve() == input_file.resolve():
                raise ArgumentError(f"output file '{target}' would overwrite the input")

        asm = Assembler(verbose=verbose, max_errors=max_errors)

        if verbose:
            click.echo(f"Assembling {input_file}...")

        words = asm.assemble_file(input_file)

        for warning in asm.get_warnings():
            click.echo(f"Warning: {warning}", err=True)

        asm.write_hack(output_file)
        if verbose:
            click.echo(f"Wrote {len(words)} instructions to {output_file}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if verbose:
            click.echo(
                f"Assembly complete: {len(asm.get_labels())} labels, "
                f"{len(asm.get_variables())} variables"
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
