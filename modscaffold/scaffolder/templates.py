"""Stub loading, placeholder substitution and guarded file writes.

Provides the ``StubRenderer`` class.  Stubs are located through Jinja2
loaders (a user override directory first, then the stubs shipped under
``modscaffold/scaffolder/stubs/``) but are *not* rendered as Jinja2: stub
files are target-language source where ``{%`` or ``{#`` may legitimately
appear, so placeholders are replaced literally.

Each replacement key is accepted in two spellings, ``{{ key }}`` and
``{{key}}``, and in its upper/lower/Studly/camel/snake variants.  All tokens
are replaced in a single pass over the original stub, so the order of keys
never matters and a substituted value is never scanned again.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, TemplateNotFound
from pydantic import BaseModel, Field

from modscaffold.config import ScaffoldConfig

from .errors import ScaffoldError, StubNotFound, WriteFailure
from .naming import key_variants

if TYPE_CHECKING:
    from .ledger import GenerationLedger


# ---------------------------------------------------------------------------
# Stub directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_STUB_DIR = Path(__file__).parent / "stubs"

STUB_EXTENSION = "stub"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class WriteResult(BaseModel):
    """Outcome of a single guarded write."""

    path: Path
    skipped: bool = Field(default=False, description="Target existed and overwrite was off")


# ---------------------------------------------------------------------------
# Token handling
# ---------------------------------------------------------------------------


def token_spellings(key: str) -> list[str]:
    """Return the literal placeholder spellings for *key* (spaced, then unspaced)."""
    return [f"{{{{ {key} }}}}", f"{{{{{key}}}}}"]


def build_tokens(replacements: dict[str, Any]) -> dict[str, str]:
    """Expand a replacement map into ``{literal token: value}``.

    Keys given explicitly always win over a case variant derived from
    another key.  Derived variants are assigned in sorted key order so the
    result does not depend on the insertion order of *replacements*.
    """
    tokens: dict[str, str] = {}
    for key in sorted(replacements):
        value = "" if replacements[key] is None else str(replacements[key])
        for variant in key_variants(key)[1:]:
            for token in token_spellings(variant):
                tokens.setdefault(token, value)
    for key, value in replacements.items():
        for token in token_spellings(key):
            tokens[token] = "" if value is None else str(value)
    return tokens


# ---------------------------------------------------------------------------
# StubRenderer
# ---------------------------------------------------------------------------


class StubRenderer:
    """Loads stubs by id, substitutes placeholders and writes the result.

    The override directory is read from ``config.stubs_dir`` on every call,
    so changing the configuration between calls takes effect immediately.
    """

    def __init__(
        self,
        config: Optional[ScaffoldConfig] = None,
        stub_dir: str | Path | None = None,
    ) -> None:
        self.config = config
        self.stub_dir = Path(stub_dir) if stub_dir is not None else _DEFAULT_STUB_DIR

    # -- Stub location -----------------------------------------------------

    @property
    def env(self) -> Environment:
        """Jinja2 environment whose loader searches the override dir first."""
        loaders = []
        if self.config is not None and self.config.stubs_dir is not None:
            loaders.append(FileSystemLoader(str(self.config.stubs_dir)))
        loaders.append(FileSystemLoader(str(self.stub_dir)))
        return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)

    def load(self, stub_id: str) -> str:
        """Return the raw text of the stub registered under *stub_id*.

        Raises:
            StubNotFound: If no loader has the stub or it cannot be read.
        """
        env = self.env
        try:
            source, _filename, _uptodate = env.loader.get_source(env, stub_id.strip("/"))
        except TemplateNotFound as exc:
            raise StubNotFound(stub_id) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise StubNotFound(stub_id, str(exc)) from exc
        return source

    def stub_path(self, stub_id: str) -> Path:
        """Return the file that backs *stub_id* (override dir wins)."""
        env = self.env
        try:
            _source, filename, _uptodate = env.loader.get_source(env, stub_id.strip("/"))
        except TemplateNotFound as exc:
            raise StubNotFound(stub_id) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise StubNotFound(stub_id, str(exc)) from exc
        return Path(filename)

    def list_stubs(self) -> list[str]:
        """Return every stub id available from any search location."""
        return self.env.list_templates(extensions=[STUB_EXTENSION])

    # -- Rendering ---------------------------------------------------------

    def render(self, stub_id: str, replacements: dict[str, Any]) -> str:
        """Load *stub_id* and substitute *replacements* into it."""
        return self.render_string(self.load(stub_id), replacements)

    def render_string(self, template: str, replacements: dict[str, Any]) -> str:
        """Substitute *replacements* into an inline template string.

        Tokens whose key is not in *replacements*, and any other content,
        are passed through unchanged.
        """
        tokens = build_tokens(replacements)
        if not tokens:
            return template
        pattern = re.compile(
            "|".join(re.escape(token) for token in sorted(tokens, key=len, reverse=True))
        )
        return pattern.sub(lambda match: tokens[match.group(0)], template)

    # -- File output -------------------------------------------------------

    def write(self, path: str | Path, content: str, overwrite: bool = False) -> WriteResult:
        """Write *content* to *path*, creating parent directories.

        An existing file is left untouched unless *overwrite* is set; that
        case is reported as a skip, not an error.

        Raises:
            WriteFailure: If something other than a regular file occupies
                *path*, or on any ``OSError`` while creating directories or writing.
        """
        out = Path(path)
        if out.exists() and not out.is_file():
            raise WriteFailure(out, IsADirectoryError("target exists and is not a regular file"))
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            if out.is_file() and not overwrite:
                return WriteResult(path=out, skipped=True)
            out.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise WriteFailure(out, exc) from exc
        return WriteResult(path=out)

    def render_to_file(
        self,
        stub_id: str,
        output_path: str | Path,
        replacements: dict[str, Any],
        overwrite: bool = False,
    ) -> WriteResult:
        """Render *stub_id* and write it to *output_path*.

        An existing target file is skipped before the stub is even loaded.
        """
        out = Path(output_path)
        if out.is_file() and not overwrite:
            return WriteResult(path=out, skipped=True)
        content = self.render(stub_id, replacements)
        return self.write(out, content, overwrite=overwrite)

    # -- Publishing --------------------------------------------------------

    def publish(
        self,
        target_dir: str | Path,
        force: bool = False,
        ledger: Optional["GenerationLedger"] = None,
    ) -> list[WriteResult]:
        """Copy the packaged stubs into *target_dir* so they can be customised.

        Existing files are kept unless *force* is set.  When a *ledger* is
        given every stub is recorded as an artifact of kind ``"stub"``;
        failures are recorded and the remaining stubs are still copied.
        """
        out_base = Path(target_dir)
        results: list[WriteResult] = []
        for stub_file in sorted(self.stub_dir.rglob(f"*.{STUB_EXTENSION}")):
            destination = out_base / stub_file.relative_to(self.stub_dir)
            try:
                content = stub_file.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                error: ScaffoldError = StubNotFound(str(stub_file), str(exc))
                if ledger is None:
                    raise error from exc
                ledger.log_failure("stub", error.message, error=error.code)
                continue
            try:
                result = self.write(destination, content, overwrite=force)
            except WriteFailure as exc:
                if ledger is None:
                    raise
                ledger.log_failure("stub", exc.message, error=exc.code)
                continue
            results.append(result)
            if ledger is not None:
                ledger.log_success("stub", result.path, skipped=result.skipped)
        return results
