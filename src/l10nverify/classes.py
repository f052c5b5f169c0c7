from dataclasses import dataclass, field


@dataclass(frozen=True)
class Locale:
    language: str
    region: str | None = None

    def __str__(self) -> str:
        if self.region:
            return f"{self.language}_{self.region}"
        return self.language


@dataclass(frozen=True)
class TranslationFile:
    path: str
    locale: Locale | None
    keys: frozenset[str]
    duplicate_keys: frozenset[str]


@dataclass(frozen=True)
class TranslationClass:
    class_name: str
    key_names: frozenset[str]


@dataclass(frozen=True)
class AuthoritativeTranslationFile(TranslationFile):
    translation_classes: tuple[TranslationClass, ...] = ()


@dataclass(frozen=True)
class TranslatedFile(TranslationFile):
    missing_keys: frozenset[str] = frozenset()
    extra_keys: frozenset[str] = frozenset()

    def completion(self, authoritative_key_count: int) -> float:
        """Percentage of the authoritative keys this translation covers."""
        if authoritative_key_count == 0:
            return 100.0
        comparative = len(self.keys) - len(self.extra_keys)
        return comparative / authoritative_key_count * 100


@dataclass(frozen=True, order=True)
class MissingClass:
    class_name: str


@dataclass(frozen=True, order=True)
class MissingKey:
    class_name: str
    key_name: str


@dataclass
class ClassinessResults:
    missing_classes: list[MissingClass] = field(default_factory=list)
    missing_keys: list[MissingKey] = field(default_factory=list)

    def has_issues(self) -> bool:
        return bool(self.missing_classes or self.missing_keys)


@dataclass
class VerificationReport:
    authoritative: AuthoritativeTranslationFile
    translations: list[TranslatedFile]
    classiness: ClassinessResults
    markdown: str = ""

    def has_issues(self) -> bool:
        if self.authoritative.duplicate_keys or self.classiness.has_issues():
            return True
        return any(
            t.missing_keys or t.extra_keys or t.duplicate_keys
            for t in self.translations
        )
