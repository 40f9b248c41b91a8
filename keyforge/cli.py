"""KeyForge komut satırı: create, analyze, config, version."""

import logging
import sys
from dataclasses import dataclass
from typing import Optional

import click

from keyforge.analyzer import PasswordAnalyzer, format_report
from keyforge.config import ConfigError, ConfigManager, redact
from keyforge.constants import APP_NAME, APP_TAGLINE, SET_DEFAULT_COUNT, VERSION
from keyforge.generator import (
    GenerationError,
    GenerationKind,
    GenerationRequest,
    KeyGenerator,
)
from keyforge.output import format_set, format_values

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass
class CliContext:
    """Komutlar arası paylaşılan tek durum; click context nesnesinde taşınır."""

    config_path: Optional[str] = None

    def load_config(self) -> ConfigManager:
        try:
            return ConfigManager(self.config_path).load()
        except ConfigError as exc:
            raise click.ClickException(str(exc)) from exc


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("keyforge").setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group(help=(
    f"{APP_NAME} is a CLI tool for generating and analyzing keys and passwords.\n\n"
    "Commands follow a verb-noun pattern: create, create set, analyze, config."
))
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              default=None, help="config file (default is $HOME/.keyforge.yaml)")
@click.option("-v", "--verbose", is_flag=True, help="enable debug logging on stderr")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], verbose: bool) -> None:
    _setup_logging(verbose)
    ctx.obj = CliContext(config_path=config_path)


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------
def _count_option(default: int, help_text: str):
    return click.option("-c", "--count", type=click.IntRange(min=1),
                        default=default, show_default=True, help=help_text)


_json_option = click.option("--json", "as_json", is_flag=True,
                            help="output as JSON")
_fallback_option = click.option(
    "--insecure-fallback", is_flag=True,
    help="if the secure random source fails, fall back to a NON-SECURE generator",
)


def _emit_values(request: GenerationRequest, as_json: bool,
                 insecure_fallback: bool) -> None:
    try:
        values = KeyGenerator.generate_count(
            request, allow_insecure_fallback=insecure_fallback)
    except GenerationError as exc:
        raise click.ClickException(
            f"failed to generate {request.kind.value} value: {exc}") from exc
    click.echo(format_values(values, as_json))


def _password_command(kind: GenerationKind, help_text: str) -> click.Command:
    @click.command(name=kind.value, help=help_text)
    @click.option("-l", "--length", type=int,
                  default=kind.default_length, show_default=True,
                  help=f"length of the password (minimum {kind.min_length})")
    @_count_option(1, "number of passwords to generate")
    @_json_option
    @_fallback_option
    def command(length: int, count: int, as_json: bool,
                insecure_fallback: bool) -> None:
        _emit_values(GenerationRequest(kind, length=length, count=count),
                     as_json, insecure_fallback)

    return command


def _wep_command(kind: GenerationKind, help_text: str) -> click.Command:
    @click.command(name=kind.value, help=help_text)
    @_count_option(1, "number of keys to generate")
    @_json_option
    @_fallback_option
    def command(count: int, as_json: bool, insecure_fallback: bool) -> None:
        _emit_values(GenerationRequest(kind, count=count),
                     as_json, insecure_fallback)

    return command


@cli.group(help="Generate keys/passwords in various styles (easy, strong, WEP keys).")
def create() -> None:
    pass


create.add_command(_password_command(
    GenerationKind.EASY,
    "Create memorable passwords from alternating consonants, vowels and digits."))
create.add_command(_password_command(
    GenerationKind.STRONG,
    "Create strong passwords from mixed letters, digits and symbols."))
create.add_command(_wep_command(
    GenerationKind.WEP40, "Create a 64-bit WEP key (40-bit key, 10 hex chars)."))
create.add_command(_wep_command(
    GenerationKind.WEP104, "Create a 128-bit WEP key (104-bit key, 26 hex chars)."))
create.add_command(_wep_command(
    GenerationKind.WEP232, "Create a 256-bit WEP key (232-bit key, 58 hex chars)."))


@create.command(name="set", help=(
    "Create a set of every password/key type: easy, strong, 64wep, 128wep, 256wep."
))
@_count_option(SET_DEFAULT_COUNT, "number of passwords/keys to generate for each type")
@_json_option
@_fallback_option
def create_set(count: int, as_json: bool, insecure_fallback: bool) -> None:
    try:
        value_set = KeyGenerator.generate_set(
            count, allow_insecure_fallback=insecure_fallback)
    except GenerationError as exc:
        raise click.ClickException(f"failed to generate password set: {exc}") from exc
    click.echo(format_set(value_set, as_json))


# ---------------------------------------------------------------------------
# analyze
# ---------------------------------------------------------------------------
@cli.command(help="Analyze a password offline (entropy and pattern heuristics).")
@click.argument("password", required=False)
@click.option("--stdin", "from_stdin", is_flag=True, help="read password from STDIN")
def analyze(password: Optional[str], from_stdin: bool) -> None:
    if from_stdin:
        stream = click.get_text_stream("stdin")
        if stream.isatty():
            raise click.ClickException("--stdin provided but no piped input")
        password = stream.readline().strip()
    elif password is None:
        raise click.ClickException("provide a password or use --stdin")

    click.echo(format_report(PasswordAnalyzer.analyze(password)))


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------
@cli.group(help="Manage configuration (API key, model).")
def config() -> None:
    pass


@config.command(name="list", help="List current configuration (redacts secrets).")
@click.pass_obj
def config_list(obj: CliContext) -> None:
    cfg = obj.load_config()
    path = cfg.path if cfg.file_exists else f"{cfg.path} (not created yet)"
    click.echo(f"config file: {path}")
    click.echo(f"model:       {cfg.get('model')}")
    click.echo(f"openai key:  {redact(cfg.get('openai_api_key'))}")


@config.command(name="set", help="Set a configuration value (model|openai_api_key).")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def config_set(obj: CliContext, key: str, value: str) -> None:
    cfg = obj.load_config()
    try:
        cfg.set(key, value)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    # Değer loglanmaz, API anahtarı olabilir
    logger.debug("updated %s in %s", key, cfg.path)


@config.command(name="test", help="Sanity-check config presence (no external calls).")
@click.pass_obj
def config_test(obj: CliContext) -> None:
    cfg = obj.load_config()
    model = cfg.get("model")
    click.echo(f"model: {model}" if model else "model: (not set)")
    if cfg.get("openai_api_key"):
        click.echo("openai_api_key: present")
    else:
        click.echo("openai_api_key: (not set)")
    click.echo("OK")


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------
@cli.command(help=f"Print the version number of {APP_NAME}.")
def version() -> None:
    click.echo(f"{APP_NAME} v{VERSION} -- {APP_TAGLINE}")


def main() -> None:
    cli(prog_name="keyforge")
