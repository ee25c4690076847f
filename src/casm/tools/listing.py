import json
import logging as lg
from pathlib import Path

import click

import casm.program as prog
import casm.factories as f


def load_program(input: Path) -> prog.CasmProgram:
    lg.debug(f'Loading program from {input}')

    try:
        data = json.loads(input.read_text(encoding='utf-8'))
    except UnicodeDecodeError as e:
        raise UserWarning(f'{input.name} is not UTF-8 text: {e}') from e
    except json.JSONDecodeError as e:
        raise UserWarning(f'{input.name} is not valid JSON: {e}') from e

    return f.create_program(data)


def listing(settings: prog.ListingSettings, program: prog.CasmProgram) -> str:
    return '\n'.join(program.emit(settings))


@click.command()
@click.pass_context
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--offsets', 'show_offsets', is_flag=True, help='Prefix instructions with their offsets')
@click.option('--sizes', 'show_sizes', is_flag=True, help='Annotate instructions with their sizes')
@click.argument('input', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def main(ctx: click.Context, input: Path, **params):
    ctx.ensure_object(prog.ListingSettings)
    ctx.obj.update(**params)

    lg.basicConfig(level=lg.DEBUG if ctx.obj.verbose else lg.INFO)

    try:
        program = load_program(input)
    except UserWarning as e:
        lg.error(f'Cannot load {input.name}')
        raise click.ClickException(str(e)) from e

    click.echo(listing(ctx.obj, program))
    lg.info(f'{input.name}: {len(program)} instructions, {program.op_size()} words')


if __name__ == '__main__':
    main()
