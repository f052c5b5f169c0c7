import logging
import os
import sys
from typing import Any

import yaml

import click
from l10nverify import analysis, parser, verifier
from l10nverify.errors import ResolutionError, TranslationFileError
from l10nverify.resolvers import ModuleSymbolResolver, StaticSymbolResolver, SymbolResolver

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "verify": {
        "messages_file": "src/main/resources/messages.properties",
        "translations_pattern": "src/main/resources/messages*.properties",
        "encoding": parser.DEFAULT_ENCODING,
        "symbols": None,
        "source_paths": [],
        "fail_on_issues": False,
    },
}


def load_config(config_folder: str) -> dict[str, Any]:
    config_file_path = os.path.join(os.path.abspath(config_folder), "config.yml")

    loaded: dict[str, Any] = {}
    try:
        with open(config_file_path, "r") as file:
            loaded = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.warning(f"Config file {config_file_path} not found, using defaults.")
    except yaml.YAMLError as exc:
        logger.error(f"{sys._getframe().f_code.co_name} {exc}")
        sys.exit(1)

    config = {}
    for section, defaults in DEFAULT_CONFIG.items():
        config[section] = {**defaults, **(loaded.get(section) or {})}
    return config


def setup_logging(config: dict[str, Any]) -> None:
    logging.basicConfig(
        level=logging.getLevelName(config["logging"]["level"]),
        format=config["logging"]["format"],
        datefmt=config["logging"]["datefmt"],
    )


def build_resolver(symbols: str | None, source_paths: list[str]) -> SymbolResolver:
    if symbols:
        return StaticSymbolResolver.from_yaml(symbols)
    return ModuleSymbolResolver(source_paths)


def verify_options(func):
    options = [
        click.option("--config-folder", default="config", help="Configuration folder path."),
        click.option("--base-dir", default=".", help="Project base directory."),
        click.option("--messages-file", help="Authoritative messages file path."),
        click.option(
            "--translations-pattern",
            help="Glob, relative to the base directory, matching translations.",
        ),
        click.option("--symbols", help="YAML catalog of known classes and members."),
        click.option(
            "--source-path",
            "source_paths",
            multiple=True,
            help="Import root for resolving translation classes.",
        ),
        click.option("--encoding", help="Text encoding of the messages files."),
        click.option(
            "--fail-on-issues/--no-fail-on-issues",
            default=None,
            help="Exit with a non-zero status when issues are found.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def resolve_settings(config_folder: str, base_dir: str, **overrides: Any) -> dict[str, Any]:
    config = load_config(config_folder)
    setup_logging(config)

    settings = dict(config["verify"])
    for name, value in overrides.items():
        if value is not None and value != ():
            settings[name] = list(value) if isinstance(value, tuple) else value

    base_dir_path = os.path.abspath(base_dir)
    settings["base_dir"] = base_dir_path
    settings["messages_file"] = os.path.join(base_dir_path, settings["messages_file"])
    settings["source_paths"] = [
        os.path.join(base_dir_path, p) for p in settings["source_paths"] or []
    ]
    if settings["symbols"]:
        settings["symbols"] = os.path.join(base_dir_path, settings["symbols"])
    return settings


@click.group()
@click.version_option(package_name="l10n-verify")
def cli() -> None:
    pass


@cli.command("check")
@verify_options
@click.option("--output", help="Write the Markdown report to this file.")
def check(config_folder: str, base_dir: str, output: str | None, **overrides: Any) -> None:
    settings = resolve_settings(config_folder, base_dir, **overrides)

    try:
        resolver = build_resolver(settings["symbols"], settings["source_paths"])
        result = verifier.run_report(
            messages_file=settings["messages_file"],
            base_dir=settings["base_dir"],
            translations_pattern=settings["translations_pattern"],
            resolver=resolver,
            encoding=settings["encoding"],
        )
    except (TranslationFileError, ResolutionError) as ex:
        logger.error(str(ex))
        sys.exit(1)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as file:
                file.write(result.markdown)
        except OSError as ex:
            logger.error(f"Failed to write report to {output}: {ex}")
            sys.exit(1)
        logger.info(f"Report written to {output}")
    else:
        click.echo(result.markdown)

    if settings["fail_on_issues"] and result.has_issues():
        sys.exit(1)


@cli.command("verify")
@verify_options
def verify(config_folder: str, base_dir: str, **overrides: Any) -> None:
    settings = resolve_settings(config_folder, base_dir, **overrides)
    fail_on_issues = settings["fail_on_issues"]
    messages_file = settings["messages_file"]

    try:
        authoritative = parser.parse_authoritative(messages_file, settings["encoding"])
    except TranslationFileError as ex:
        logger.error(f"Failed to parse messages file: {ex}")
        sys.exit(1)

    try:
        resolver = build_resolver(settings["symbols"], settings["source_paths"])
        classiness = analysis.analyze_classiness(authoritative.translation_classes, resolver)
    except ResolutionError as ex:
        logger.error(f"Failed to analyze translation keys for file {messages_file}: {ex}")
        sys.exit(1)

    messages = verifier.verify_messages(authoritative, classiness)
    emit = logger.error if fail_on_issues else logger.warning
    for message in messages:
        emit(message)

    if fail_on_issues and messages:
        logger.error(
            f"The file {os.path.basename(messages_file)} has one or more verification "
            "errors. Refer to messages above for more information."
        )
        sys.exit(1)
