"""Extension to content-kind mapping for extracted files."""

from __future__ import annotations

from collections.abc import Mapping

DEFAULT_CONTENT_KIND = "application/octet-stream"

# Matched in order; multi-part suffixes come before their tails so that
# `.tar.gz` is checked before `.gz`.
_BUILTIN_KINDS: tuple[tuple[str, str], ...] = (
    (".tar.gz", "application/gzip"),
    (".tar.bz2", "application/x-bzip2"),
    (".tar.xz", "application/x-xz"),
    (".d.ts", "text/typescript"),
    (".json", "application/json"),
    (".md", "text/markdown"),
    (".markdown", "text/markdown"),
    (".txt", "text/plain"),
    (".ts", "text/typescript"),
    (".tsx", "text/typescript"),
    (".js", "text/javascript"),
    (".jsx", "text/javascript"),
    (".mjs", "text/javascript"),
    (".py", "text/x-python"),
    (".java", "text/x-java"),
    (".c", "text/x-c"),
    (".h", "text/x-c"),
    (".cpp", "text/x-c++"),
    (".hpp", "text/x-c++"),
    (".cs", "text/x-csharp"),
    (".go", "text/x-go"),
    (".rs", "text/x-rust"),
    (".rb", "text/x-ruby"),
    (".php", "text/x-php"),
    (".sh", "text/x-shellscript"),
    (".html", "text/html"),
    (".htm", "text/html"),
    (".css", "text/css"),
    (".xml", "application/xml"),
    (".yaml", "application/yaml"),
    (".yml", "application/yaml"),
    (".toml", "application/toml"),
    (".csv", "text/csv"),
    (".svg", "image/svg+xml"),
    (".png", "image/png"),
    (".jpg", "image/jpeg"),
    (".jpeg", "image/jpeg"),
    (".gif", "image/gif"),
    (".webp", "image/webp"),
    (".ico", "image/x-icon"),
    (".pdf", "application/pdf"),
    (".zip", "application/zip"),
    (".tgz", "application/gzip"),
    (".gz", "application/gzip"),
    (".tar", "application/x-tar"),
    (".7z", "application/x-7z-compressed"),
    (".rar", "application/vnd.rar"),
)


def _normalize_extension(ext: str) -> str:
    ext = ext.lower()
    return ext if ext.startswith(".") else f".{ext}"


class ContentKindTable:
    """Ordered extension table with caller-supplied overrides.

    Overrides are consulted before the built-in entries, longest
    extension first.
    """

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        normalized = {_normalize_extension(ext): kind for ext, kind in (overrides or {}).items()}
        self._overrides = tuple(sorted(normalized.items(), key=lambda item: len(item[0]), reverse=True))

    @property
    def entries(self) -> tuple[tuple[str, str], ...]:
        """Every (extension, kind) pair in match order."""
        return self._overrides + _BUILTIN_KINDS

    def kind_for(self, name: str) -> str:
        """Return the content kind for a file name or path."""
        lower = name.rsplit("/", 1)[-1].lower()
        for ext, kind in self.entries:
            if lower.endswith(ext):
                return kind
        return DEFAULT_CONTENT_KIND


def content_kind_for(name: str) -> str:
    """Content kind from the built-in table alone."""
    return ContentKindTable().kind_for(name)
