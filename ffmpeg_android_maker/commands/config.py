import click
import os
import json
from .. import config as config_module
from ..cli_logger import logger

@click.group()
@click.pass_context
def config(ctx):
    """View or edit the ffmpeg-android-maker.toml configuration file."""
    pass

@config.command()
@click.pass_context
def view(ctx):
    """View the contents of the ffmpeg-android-maker.toml file."""
    config_file_path = os.path.join(ctx.obj["path"], config_module.CONFIG_FILE)
    if not os.path.exists(config_file_path):
        logger.error("Error: No ffmpeg-android-maker.toml found. Built-in defaults are in use.")
        return
    try:
        with open(config_file_path, 'r') as f:
            click.echo(f.read())
    except IOError as e:
        logger.error(f"Error reading ffmpeg-android-maker.toml at {config_file_path}: {e}")
        logger.info("Please check file permissions.")

@config.command(name="list")
@click.option("--effective", is_flag=True, help="Show the configuration merged with the defaults.")
@click.pass_context
def list_config(ctx, effective):
    """List all configuration keys and values."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if effective:
        conf = config_module.get_settings(conf)
    click.echo(json.dumps(conf, indent=4))

@config.command()
@click.argument('key')
@click.pass_context
def get(ctx, key):
    """Get a value, falling back to the built-in default."""
    value = config_module.get_settings(config_module.load_config(path=ctx.obj["path"]))
    try:
        for k in key.split('.'):
            value = value[k]
        click.echo(value)
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in ffmpeg-android-maker.toml")

@config.command(name="set")
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_value(ctx, key, value):
    """Set a value in the ffmpeg-android-maker.toml file."""
    conf = config_module.load_config(path=ctx.obj["path"])

    keys = key.split('.')
    d = conf
    for k in keys[:-1]:
        d = d.setdefault(k, {})
    d[keys[-1]] = int(value) if value.isdigit() else value

    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.info(f"Set '{key}' to '{value}'")
