import os

from l10nverify.classes import (
    AuthoritativeTranslationFile,
    ClassinessResults,
    Locale,
    TranslatedFile,
)

TITLE = "Translation Key Verification"


def _table(headers: list[str], rows: list[list[str]]) -> str:
    markdown = "| " + " | ".join(headers) + " |\n"
    markdown += "|" + "|".join(" --- " for _ in headers) + "|\n"
    for row in rows:
        markdown += "| " + " | ".join(row) + " |\n"
    return markdown


def _locale_rows(locale: Locale | None) -> list[list[str]]:
    if locale is None:
        return []
    rows = [["Supported Language", locale.language]]
    if locale.region:
        rows.append(["Supported Country", locale.region])
    return rows


def _duplicates(duplicate_keys: frozenset[str], where: str) -> str:
    if not duplicate_keys:
        return "No duplicate translation keys were found.\n\n"
    markdown = f"The following duplicate translation keys were found in {where}.\n\n"
    markdown += _table(["Translation Key"], [[f"`{k}`"] for k in sorted(duplicate_keys)])
    return markdown + "\n"


def render_markdown(
    authoritative: AuthoritativeTranslationFile,
    classiness: ClassinessResults,
    translations: list[TranslatedFile],
) -> str:
    markdown = f"# {TITLE}\n\n"
    markdown += (
        "This report describes translation keys listed in your messages properties "
        "file that are in an invalid state.\n\n"
    )

    markdown += "## Duplicate Translation Keys\n\n"
    markdown += _duplicates(authoritative.duplicate_keys, "your messages properties file")

    markdown += "## Missing Translation Classes\n\n"
    if not classiness.missing_classes:
        markdown += "No missing translation key classes were found.\n\n"
    else:
        markdown += (
            "The following is a list of classes that are listed in your messages "
            "properties file, but are not found to actually exist.\n\n"
        )
        markdown += _table(
            ["Class Name"],
            [[f"`{c.class_name}`"] for c in sorted(classiness.missing_classes)],
        )
        markdown += "\n"

    markdown += "## Missing Translation Keys\n\n"
    if not classiness.missing_keys:
        markdown += "No missing translation keys were found.\n\n"
    else:
        markdown += (
            "The following is a list of translation keys that are found in the "
            "messages properties file, but were not found to actually exist.\n\n"
        )
        markdown += _table(
            ["Class Name", "Key Name"],
            [
                [f"`{k.class_name}`", f"`{k.key_name}`"]
                for k in sorted(classiness.missing_keys)
            ],
        )
        markdown += "\n"

    markdown += "## Authoritative Messages Statistics\n\n"
    rows = [["Filename", os.path.basename(authoritative.path)]]
    rows += _locale_rows(authoritative.locale)
    rows.append(["Translation Key Count", str(len(authoritative.keys))])
    markdown += _table(["Property", "Value"], rows) + "\n"

    markdown += "## Translated Messages Statistics\n\n"
    if not translations:
        markdown += (
            "No translations of the configured authoritative messages file were found.\n\n"
        )
        return markdown

    markdown += (
        "'Extra translation keys' are keys that are discovered in the translated "
        "messages properties, but do not exist in the authoritative message properties.\n\n"
        "'Missing translation keys' are keys that are found in the authoritative "
        "messages properties, but are not found in the translation.\n\n"
    )
    authoritative_count = len(authoritative.keys)
    for translation in sorted(translations, key=lambda t: os.path.basename(t.path)):
        markdown += f"### {os.path.basename(translation.path)}\n\n"
        rows = _locale_rows(translation.locale)
        rows += [
            ["Translation Key Count", str(len(translation.keys))],
            ["Missing Translation Keys", str(len(translation.missing_keys))],
            ["Extra Translation Keys", str(len(translation.extra_keys))],
            [
                "Translation Completion Percentage",
                f"{translation.completion(authoritative_count):.2f}%",
            ],
        ]
        markdown += _table(["Property", "Value"], rows) + "\n"
        markdown += "#### Duplicate Translation Keys\n\n"
        markdown += _duplicates(translation.duplicate_keys, "this messages properties file")

    return markdown
