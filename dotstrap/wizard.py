"""Configuration wizard.

States::

    NO_CONFIG -> PROMPTED -> PERSISTED -> CONFIRMED | REFUSED | ABORTED

A run starts in PERSISTED when a complete answer file is already present,
so answers are only ever asked for once per machine until refused.
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .config_store import ConfigStore, ConfigurationRecord
from .errors import ConfigurationAborted, ConfigurationRefused, PromptCancelled
from .lib.dialogs import Confirmation, DialogPrompter, TextPrompt

logger = logging.getLogger(__name__)

LABELS = (
    "Insert the git name you want to use",
    "Insert the git email you want to use",
    "Insert your dotfiles repository",
    "Insert the dotfiles repository ref to clone",
    "Insert the path where to clone the dotfile repository",
)

CONFIRM_TITLE = "Confirm configuration?"


class WizardState(enum.Enum):
    NO_CONFIG = "no_config"
    PROMPTED = "prompted"
    PERSISTED = "persisted"
    CONFIRMED = "confirmed"
    REFUSED = "refused"
    ABORTED = "aborted"


TERMINAL_STATES = {WizardState.CONFIRMED, WizardState.REFUSED, WizardState.ABORTED}


class ConfigurationWizard:
    def __init__(
        self,
        store: ConfigStore,
        prompter: DialogPrompter,
        *,
        recap_path: str,
        default_name: str = "",
        default_repo_url: str = "https://github.com/",
        default_ref: str = "main",
        resume_partial: bool = True,
    ) -> None:
        self.store = store
        self.prompter = prompter
        self.recap_path = Path(recap_path)
        self.defaults = [default_name, "", default_repo_url, default_ref, ""]
        self.default_ref = default_ref
        self.resume_partial = resume_partial

        self.state = WizardState.NO_CONFIG
        self.record: Optional[ConfigurationRecord] = None
        self._answers: List[str] = []
        self._transitions: Dict[WizardState, Callable[[], WizardState]] = {
            WizardState.NO_CONFIG: self._prompt,
            WizardState.PROMPTED: self._persist,
            WizardState.PERSISTED: self._confirm,
        }

    def run(self) -> ConfigurationRecord:
        """Return the confirmed record, or raise why there is none."""

        logger.info("Starting configuration phase...")
        self.state = self._initial_state()
        while self.state not in TERMINAL_STATES:
            self.state = self._transitions[self.state]()

        if self.state is WizardState.REFUSED:
            raise ConfigurationRefused(
                "Refused configuration, removed temp config file and aborted installation."
            )
        if self.state is WizardState.ABORTED:
            raise ConfigurationAborted(
                "Exited from dialog, kept temp config file and aborted installation."
            )
        assert self.record is not None
        logger.info("Configuration confirmed.")
        return self.record

    def _initial_state(self) -> WizardState:
        stored = self.store.read_answers()
        if stored is None:
            logger.info("Previous configuration not found. Opening configuration form...")
            return WizardState.NO_CONFIG
        if self.store.is_partial() and self.resume_partial:
            logger.info("Incomplete previous configuration found. Resuming configuration form...")
            return WizardState.NO_CONFIG
        logger.info("Previous configuration found. Configuration form skipped.")
        return WizardState.PERSISTED

    def _prompts(self) -> List[TextPrompt]:
        defaults = list(self.defaults)
        for i, answer in enumerate(self.store.read_answers() or []):
            if answer:
                defaults[i] = answer
        return [TextPrompt(label, default) for label, default in zip(LABELS, defaults)]

    def _prompt(self) -> WizardState:
        try:
            self._answers = self.prompter.text_prompts(self._prompts())
        except PromptCancelled as e:
            # The next run resumes from the longest set of answers given.
            stored = self.store.read_answers()
            if stored is None or len(e.answers) > len(stored):
                self.store.clear()
                self.store.save(e.answers)
            raise
        return WizardState.PROMPTED

    def _persist(self) -> WizardState:
        # Nothing is written for answers that can never form a record.
        ConfigurationRecord.from_answers(self._answers, default_ref=self.default_ref)
        if self.store.exists():
            # Only a partial record gets here.
            self.store.clear()
        self.store.save(self._answers)
        return WizardState.PERSISTED

    def _confirm(self) -> WizardState:
        logger.info("Parsing configuration...")
        record = self.store.load(default_ref=self.default_ref)
        assert record is not None

        recap = record.recap()
        self.recap_path.write_text(recap, encoding="utf-8")
        try:
            choice = self.prompter.confirm(CONFIRM_TITLE, self.recap_path.read_text(encoding="utf-8"))
        finally:
            self.recap_path.unlink()

        if choice is Confirmation.YES:
            self.record = record
            return WizardState.CONFIRMED
        if choice is Confirmation.NO:
            self.store.clear()
            return WizardState.REFUSED
        return WizardState.ABORTED
