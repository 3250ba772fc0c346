"""A changelog file on disk and the operations the CLI runs on it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from changelog_md.config import CHANGELOG_MD_FILENAME, CHANGELOG_MD_INFER_BUMP
from changelog_md.document import Document
from changelog_md.exceptions import StructuralPreconditionError
from changelog_md.file_utils import exists_async, read_text_async, write_text_async
from changelog_md.queries import list_releases, notes
from changelog_md.release import release
from changelog_md.schemas import Amount, Node, ReleaseInfo, Version, VersionSelector

logger = logging.getLogger(__name__)


@dataclass
class Changelog:
    """Binds a changelog path to its parsed document.

    Attributes:
        pwd: Directory the changelog lives in.
        filename: Changelog file name relative to ``pwd``.
        infer_bump: Bump used by ``release infer`` when the package version
            is not ahead of the changelog.
    """

    pwd: Path = field(default_factory=Path)
    filename: str = CHANGELOG_MD_FILENAME
    infer_bump: str = CHANGELOG_MD_INFER_BUMP
    _document: Document | None = field(default=None, init=False, repr=False)

    @property
    def path(self) -> Path:
        return Path(self.pwd) / self.filename

    @property
    def document(self) -> Document:
        if self._document is None:
            raise StructuralPreconditionError(f"{self.path} has not been loaded")
        return self._document

    async def load(self) -> Document:
        """Read and parse the changelog file.

        Raises:
            StructuralPreconditionError: If the file does not exist.
        """
        if not await exists_async(self.path):
            raise StructuralPreconditionError(
                f"{self.path} does not exist, run `changelog init` first"
            )
        text = await read_text_async(self.path)
        self._document = Document.parse(text)
        logger.debug("Loaded %s (%d nodes)", self.path, len(self._document.nodes))
        return self._document

    async def init(self) -> bool:
        """Create the changelog, or complete its skeleton if it exists.

        Returns:
            True if the file was written.
        """
        if await exists_async(self.path):
            document = Document.parse(await read_text_async(self.path))
            changed = document.ensure_skeleton()
        else:
            document = Document.skeleton()
            changed = True
        self._document = document
        if changed:
            await self.persist()
        return changed

    async def persist(self) -> None:
        await write_text_async(self.path, self.document.render())
        logger.debug("Wrote %s", self.path)

    def add_entry(self, section: str, message: str) -> None:
        self.document.add_list_item_to_section(section, message)

    def get_contents_of_section(self, name: str) -> list[Node] | None:
        return self.document.get_contents_of_section(name)

    def release(
        self,
        selector: VersionSelector,
        *,
        current_version: Version | None = None,
        today: date | None = None,
    ) -> Version:
        return release(
            self.document,
            selector,
            current_version=current_version,
            today=today,
            infer_bump=self.infer_bump,
        )

    def notes(self, version: str | None = None) -> str:
        return notes(self.document, version)

    def releases(self, amount: Amount | None = None) -> list[ReleaseInfo]:
        return list_releases(self.document, amount)
