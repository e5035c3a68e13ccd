"""motext CLI – inspect, dump and query gettext ``.mo`` catalogs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from motext import __version__
from motext.errors import GettextError
from motext.settings import ENV_PREFIX, Settings


@click.group()
@click.version_option(__version__, prog_name="motext")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """motext – gettext .mo catalog decoder and translator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


# ── info ──────────────────────────────────────────────────────────────

@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
def info(input_file: str):
    """Show catalog header and metadata."""
    from motext.decoder.mofile import load_catalog

    path = Path(input_file)
    catalog = _run(load_catalog, path)

    click.echo(f"File: {path.name}")
    click.echo(f"Byte order: {catalog.byte_order.name.lower()}-endian")
    click.echo(f"Revision: {catalog.revision}")
    click.echo(f"Messages: {catalog.message_count}")
    click.echo(f"Encoding: {catalog.encoding}")

    if catalog.metadata:
        click.echo("\nMetadata:")
        for key, val in catalog.metadata.items():
            click.echo(f"  {key}: {val}")


# ── dump ──────────────────────────────────────────────────────────────

@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--context", "-c", default=None, help="Only messages with this context")
@click.option("--output", "-o", default=None, type=click.Path(), help="Write messages to a CSV file")
def dump(input_file: str, context: str | None, output: str | None):
    """List the messages of a catalog."""
    from motext.decoder.mofile import load_catalog

    path = Path(input_file)
    catalog = _run(load_catalog, path, context)
    messages = {k: v for k, v in catalog.messages.items() if k}

    if output:
        import pandas as pd

        df = pd.DataFrame(
            {"msgid": list(messages), "msgstr": [v or "" for v in messages.values()]}
        )
        df.insert(0, "msgctxt", context or "")
        out_path = Path(output)
        df.to_csv(out_path, index=False)
        click.echo(f"{len(df)} message(s) → {out_path}")
        return

    for msgid, msgstr in messages.items():
        click.echo(f"{msgid}\t{msgstr or ''}")


# ── translate ─────────────────────────────────────────────────────────

@main.command()
@click.argument("text")
@click.option("--base-path", "-b", envvar=f"{ENV_PREFIX}BASE_PATH", type=click.Path(file_okay=False),
              help="Directory holding <locale>/<domain>.mo")
@click.option("--locale", "-l", envvar=f"{ENV_PREFIX}LOCALE", help="Locale, e.g. de_DE")
@click.option("--domain", "-d", envvar=f"{ENV_PREFIX}DOMAIN", help="Catalog domain")
@click.option("--context", "-c", default=None, help="Message context")
@click.option("--set", "-s", "placeholders", multiple=True, metavar="KEY=VALUE",
              help="Placeholder replacement (repeatable)")
@click.option("--debug", is_flag=True, envvar=f"{ENV_PREFIX}DEBUG", help="Fail on catalog errors")
def translate(text: str, base_path: str | None, locale: str | None, domain: str | None,
              context: str | None, placeholders: tuple[str, ...], debug: bool):
    """Translate TEXT using the catalog for a locale."""
    settings = Settings.from_env()
    if base_path:
        settings.base_path = Path(base_path)
    if locale:
        settings.locale = locale
    if domain:
        settings.domain = domain
    settings.debug = settings.debug or debug

    replacements = {}
    for item in placeholders:
        key, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--set")
        replacements[key] = value

    translator = settings.translator()
    request = [text, replacements] if replacements else text
    click.echo(_run(translator.translate, request, settings.domain, context))


def _run(func, *args):
    try:
        return func(*args)
    except GettextError as exc:
        raise click.ClickException(str(exc)) from exc


if __name__ == "__main__":
    main()
