import json
import logging

import click

from .pipeline import CodeGeneratorConfig, OpenApiCompileError, OutputMode, PipelineGenerator


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--use-enums",
    is_flag=True,
    default=False,
    help="Emit inline enums as named enum declarations instead of literal unions",
)
@click.option("--namespace", "-n", default=None, type=str, help="Namespace the API module imports the types under")
@click.option("--no-api", is_flag=True, default=False, help="Only generate the types module")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite existing output files")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", default=None, type=click.Path(file_okay=False, resolve_path=True))
def openapi_to_ts(config, use_enums, namespace, no_api, force, verbose, path, output):
    """Compile the OpenAPI document PATH into TypeScript modules in OUTPUT."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file when set
    if use_enums:
        config.use_enums = True
    if namespace is not None:
        config.namespace = namespace
    if no_api:
        config.generate_api = False
    if force:
        config.output.mode = OutputMode.FORCE

    codegen = PipelineGenerator.from_path(path, config)

    try:
        modules = codegen.write(output)
    except (OpenApiCompileError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e

    for file_name in modules.files:
        click.echo(f"Generated {file_name}")
