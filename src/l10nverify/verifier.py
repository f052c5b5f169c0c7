import logging
import os

from l10nverify import analysis, parser, report
from l10nverify.classes import (
    AuthoritativeTranslationFile,
    ClassinessResults,
    VerificationReport,
)
from l10nverify.resolvers import SymbolResolver

logger = logging.getLogger(__name__)


def run_report(
    *,
    messages_file: str,
    base_dir: str,
    translations_pattern: str,
    resolver: SymbolResolver,
    encoding: str = parser.DEFAULT_ENCODING,
) -> VerificationReport:
    logger.info(f"Parsing authoritative messages file {messages_file}...")
    authoritative = parser.parse_authoritative(messages_file, encoding)

    translation_paths = parser.discover_translations(
        base_dir, translations_pattern, messages_file
    )
    logger.info(f"Found {len(translation_paths)} translations")
    translations = parser.parse_translations(authoritative, translation_paths, encoding)

    classiness = analysis.analyze_classiness(authoritative.translation_classes, resolver)

    for translation in translations:
        name = os.path.basename(translation.path)
        issues = (
            len(translation.missing_keys)
            + len(translation.extra_keys)
            + len(translation.duplicate_keys)
        )
        if issues:
            logger.error(f"Found {issues} issues for {name} ({translation.locale})")
        else:
            logger.info(f"No issues found for {name} ({translation.locale})")

    return VerificationReport(
        authoritative=authoritative,
        translations=translations,
        classiness=classiness,
        markdown=report.render_markdown(authoritative, classiness, translations),
    )


def verify_messages(
    authoritative: AuthoritativeTranslationFile, classiness: ClassinessResults
) -> list[str]:
    """Describe the problems of the authoritative file, one message per kind."""
    name = os.path.basename(authoritative.path)
    messages = []
    if authoritative.duplicate_keys:
        messages.append(
            f"File {name} contains {len(authoritative.duplicate_keys)} duplicate keys."
        )
    if classiness.missing_classes:
        messages.append(
            f"File {name} contains {len(classiness.missing_classes)} references "
            "to non-existent translation key classes."
        )
    if classiness.missing_keys:
        messages.append(
            f"File {name} contains {len(classiness.missing_keys)} references "
            "to non-existent translation class keys."
        )
    return messages
