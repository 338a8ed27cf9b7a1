"""
hackdisasm - Hack Disassembler Command-Line Interface
=====================================================

This module implements the command-line interface for the Hack
disassembler. It turns a .hack file back into assembly text.

Usage Examples
--------------
Disassemble to stdout:
    $ hackdisasm Max.hack

Output to file (re-assemblable source):
    $ hackdisasm Max.hack -o Max.dis.asm

Annotate addresses with names from a symbol file written by hackasm -s:
    $ hackdisasm Max.hack -s Max.sym

Listing with ROM addresses and words:
    $ hackdisasm Max.hack --listing
"""

from pathlib import Path
from typing import Optional

import click

from hack_sdk import __version__
from hack_sdk.assembler.assembler import write_text_atomic
from hack_sdk.cli.errors import handle_cli_exception, setup_logging
from hack_sdk.disassembler import HackDisassembler
from hack_sdk.errors import ArgumentError, AssemblyIOError


def read_symbol_file(path: Path) -> dict[str, int]:
    """
    Read a symbol file in the ``name address`` format hackasm writes.

    Blank lines and lines starting with ``#`` are skipped.

    Raises:
        ArgumentError: If a line is not ``name address``
    """
    symbols: dict[str, int] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise AssemblyIOError(str(path), e.strerror or str(e)) from e

    for number, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split()
        if len(parts) != 2 or not parts[1].isdigit():
            raise ArgumentError(f"{path}:{number}: expected 'name address', got '{line}'")
        symbols[parts[0]] = int(parts[1])
    return symbols


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
    help="Output file (default: stdout)",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Symbol file used to annotate address instructions",
)
@click.option(
    "--listing",
    is_flag=True,
    help="Show ROM addresses and machine words next to each instruction",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackdisasm")
def main(
    input_file: Path,
    output: Optional[Path],
    symbols: Optional[Path],
    listing: bool,
    verbose: bool,
) -> None:
    """
    Disassemble Hack machine code into Hack assembly.

    INPUT_FILE is a .hack file with one 16-character binary word per line.
    """
    setup_logging(verbose)

    try:
        if symbols is not None:
            disasm = HackDisassembler.from_symbols(read_symbol_file(symbols))
        else:
            disasm = HackDisassembler()

        try:
            words = input_file.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise AssemblyIOError(str(input_file), e.strerror or str(e)) from e

        instructions = disasm.disassemble(words)

        if listing:
            text = "\n".join(str(instr) for instr in instructions)
            text = text + "\n" if text else text
        else:
            text = disasm.format(instructions)

        if output is not None:
            write_text_atomic(output, text)
            if verbose:
                click.echo(f"Wrote {len(instructions)} instructions to {output}")
        else:
            click.echo(text, nl=False)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Disassembly")


if __name__ == "__main__":
    main()
