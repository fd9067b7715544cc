import json
import logging
from pathlib import Path

import click

from .pipeline import CompilerConfig, GroupVersionKind, KindSchemaError, PipelineGenerator, SchemaDocument


@click.command()
@click.option("--group", "-g", required=True, type=str, help="API group of the kind, e.g. foo.example.com")
@click.option("--version", "-v", "version", required=True, type=str, help="Version of the kind, e.g. v1")
@click.option("--kind", "-k", required=True, type=str, help="Kind name, e.g. Foo")
@click.option("--prefix", "-p", default=None, type=str, help="Qualifier for definition names (default: <group>/<version>)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--indent", default=2, type=int, show_default=True)
@click.option("--verbose", is_flag=True, default=False, help="Log each pipeline phase")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def kind_schema_to_openapi(group, version, kind, prefix, config, indent, verbose, path, output):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    if config is not None:
        with open(config) as f:
            config = CompilerConfig.from_dict(json.load(f))
    else:
        config = CompilerConfig()

    gvk = GroupVersionKind(group=group, version=version, kind=kind)
    try:
        document = SchemaDocument.from_bytes(Path(path).read_bytes())
        out = PipelineGenerator(document, gvk, prefix, config).generate_dict()
    except KindSchemaError as e:
        raise click.ClickException(str(e)) from e

    with open(output, "w") as f:
        json.dump(out, f, indent=indent, sort_keys=True)
        f.write("\n")
