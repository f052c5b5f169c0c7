from l10nverify import report, verifier
from l10nverify.classes import (
    AuthoritativeTranslationFile,
    ClassinessResults,
    Locale,
    MissingClass,
    MissingKey,
    TranslatedFile,
)
from l10nverify.resolvers import StaticSymbolResolver


def _authoritative(**kwargs) -> AuthoritativeTranslationFile:
    defaults = dict(
        path="/res/messages_en_US.properties",
        locale=Locale("en", "US"),
        keys=frozenset({"a", "b", "c", "d"}),
        duplicate_keys=frozenset(),
    )
    defaults.update(kwargs)
    return AuthoritativeTranslationFile(**defaults)


def test_clean_report() -> None:
    markdown = report.render_markdown(_authoritative(), ClassinessResults(), [])

    assert markdown.startswith("# Translation Key Verification")
    assert "No duplicate translation keys were found." in markdown
    assert "No missing translation key classes were found." in markdown
    assert "No missing translation keys were found." in markdown
    assert "| Filename | messages_en_US.properties |" in markdown
    assert "| Supported Country | US |" in markdown
    assert "| Translation Key Count | 4 |" in markdown
    assert "No translations of the configured authoritative messages file were found." in markdown


def test_report_lists_sorted_issues() -> None:
    classiness = ClassinessResults(
        missing_classes=[MissingClass("z.Zed"), MissingClass("a.Aye")],
        missing_keys=[MissingKey("b.Bee", "Y"), MissingKey("b.Bee", "X")],
    )
    translation = TranslatedFile(
        path="/res/messages_fr.properties",
        locale=Locale("fr"),
        keys=frozenset({"a", "b", "extra"}),
        duplicate_keys=frozenset({"a"}),
        missing_keys=frozenset({"c", "d"}),
        extra_keys=frozenset({"extra"}),
    )
    markdown = report.render_markdown(
        _authoritative(duplicate_keys=frozenset({"b"})), classiness, [translation]
    )

    assert "| `b` |" in markdown
    assert markdown.index("`a.Aye`") < markdown.index("`z.Zed`")
    assert markdown.index("| `b.Bee` | `X` |") < markdown.index("| `b.Bee` | `Y` |")
    assert "### messages_fr.properties" in markdown
    assert "| Supported Language | fr |" in markdown
    assert "| Missing Translation Keys | 2 |" in markdown
    assert "| Extra Translation Keys | 1 |" in markdown
    assert "| Translation Completion Percentage | 50.00% |" in markdown
    assert "found in this messages properties file" in markdown


def test_completion_with_empty_authority() -> None:
    translation = TranslatedFile(
        path="messages_fr.properties",
        locale=Locale("fr"),
        keys=frozenset(),
        duplicate_keys=frozenset(),
    )
    assert translation.completion(0) == 100.0


def test_verify_messages() -> None:
    authoritative = _authoritative(duplicate_keys=frozenset({"a", "b"}))
    classiness = ClassinessResults(
        missing_classes=[MissingClass("x.Y")],
        missing_keys=[MissingKey("x.Z", "A"), MissingKey("x.Z", "B")],
    )
    assert verifier.verify_messages(authoritative, classiness) == [
        "File messages_en_US.properties contains 2 duplicate keys.",
        "File messages_en_US.properties contains 1 references to non-existent translation key classes.",
        "File messages_en_US.properties contains 2 references to non-existent translation class keys.",
    ]
    assert verifier.verify_messages(_authoritative(), ClassinessResults()) == []


def test_run_report_end_to_end(tmp_path) -> None:
    resources = tmp_path / "res"
    resources.mkdir()
    (resources / "messages.properties").write_text(
        "sharedKey=a\nmissingKey=b\ncom.example.Foo.BAR=c\ncom.example.Gone.X=d\n"
    )
    (resources / "messages_es.properties").write_text("sharedKey=a\nextraKey=e\n")

    result = verifier.run_report(
        messages_file=str(resources / "messages.properties"),
        base_dir=str(tmp_path),
        translations_pattern="res/messages*.properties",
        resolver=StaticSymbolResolver({"com.example.Foo": []}),
    )

    [translation] = result.translations
    assert translation.missing_keys == {"missingKey", "com.example.Foo.BAR", "com.example.Gone.X"}
    assert translation.extra_keys == {"extraKey"}
    assert result.classiness.missing_classes == [MissingClass("com.example.Gone")]
    assert result.classiness.missing_keys == [MissingKey("com.example.Foo", "BAR")]
    assert result.has_issues()
    assert "### messages_es.properties" in result.markdown
