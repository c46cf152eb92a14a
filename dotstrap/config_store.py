"""Persisted wizard answers.

The answers live in one comma separated line at a well-known temporary path,
so a run that fails after the wizard can be restarted without prompting
again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import MalformedRecord

logger = logging.getLogger(__name__)

DELIMITER = ","
FIELD_COUNT = 5
DEFAULT_REF = "main"


@dataclass(frozen=True)
class ConfigurationRecord:
    git_user_name: str
    git_user_email: str
    dotfiles_repo_url: str
    dotfiles_ref: str
    dotfiles_dest_path: str

    @classmethod
    def from_answers(
        cls, answers: Sequence[str], *, default_ref: str = DEFAULT_REF
    ) -> "ConfigurationRecord":
        """Build a record from raw answers in prompt order.

        Extra trailing fields are ignored; missing ones are an error.
        """

        fields = [a.strip() for a in answers[:FIELD_COUNT]]
        if len(fields) < FIELD_COUNT:
            raise MalformedRecord(
                f"Expected {FIELD_COUNT} configuration fields, found {len(fields)}"
            )
        name, email, url, ref, dest = fields
        if not name:
            raise MalformedRecord("Git user name is empty")
        if not url:
            raise MalformedRecord("Dotfiles repository is empty")
        if not dest:
            raise MalformedRecord("Dotfiles destination is empty")
        return cls(
            git_user_name=name,
            git_user_email=email,
            dotfiles_repo_url=url,
            dotfiles_ref=ref or default_ref,
            dotfiles_dest_path=dest,
        )

    def recap(self) -> str:
        return (
            f"Git name: {self.git_user_name}\n"
            f"Git email: {self.git_user_email}\n"
            f"Dotfiles repository: {self.dotfiles_repo_url}\n"
            f"Dotfiles repository ref: {self.dotfiles_ref}\n"
            f"Dotfiles repository destination: {self.dotfiles_dest_path}\n"
        )


class ConfigStore:
    def __init__(self, path: str) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def read_answers(self) -> Optional[List[str]]:
        """Raw stored fields (at most FIELD_COUNT), or None if nothing is stored."""

        if not self.path.exists():
            return None
        lines = self.path.read_text(encoding="utf-8").splitlines()
        first = lines[0] if lines else ""
        fields = first.split(DELIMITER)
        if len(fields) > FIELD_COUNT:
            logger.debug("Discarding %d extra field(s) in %s", len(fields) - FIELD_COUNT, self.path)
        return fields[:FIELD_COUNT]

    def is_partial(self) -> bool:
        answers = self.read_answers()
        return answers is not None and len(answers) < FIELD_COUNT

    def load(self, *, default_ref: str = DEFAULT_REF) -> Optional[ConfigurationRecord]:
        answers = self.read_answers()
        if answers is None:
            return None
        try:
            return ConfigurationRecord.from_answers(answers, default_ref=default_ref)
        except MalformedRecord as e:
            raise MalformedRecord(
                f"{e}. Delete {self.path} and run again to be prompted afresh."
            ) from e

    def save(self, answers: Sequence[str]) -> None:
        """Write the answers; refuses to replace an existing file."""

        line = DELIMITER.join(answers)
        with self.path.open("x", encoding="utf-8") as fh:
            fh.write(line + "\n")
        logger.info("Saved configuration answers to %s", self.path)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info("Removed %s", self.path)
