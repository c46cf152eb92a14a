"""Text-mode prompts on top of the ``dialog`` utility (pythondialog)."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from ..errors import PromptCancelled

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextPrompt:
    label: str
    default: str = ""


class Confirmation(enum.Enum):
    YES = "yes"
    NO = "no"
    ABORTED = "aborted"


class DialogPrompter:
    """Prompt utility backed by a pythondialog ``Dialog`` instance.

    The ``dialog`` binary is looked up when the first prompt is shown, so the
    prompter can be built before the bootstrap packages are installed.
    """

    def __init__(
        self,
        dialog: Any = None,
        *,
        height: int = 30,
        width: int = 100,
        confirm_height: int = 100,
        confirm_width: int = 100,
        list_height: int = 20,
    ) -> None:
        self._dialog = dialog
        self.height = height
        self.width = width
        self.confirm_height = confirm_height
        self.confirm_width = confirm_width
        self.list_height = list_height

    @property
    def dialog(self) -> Any:
        if self._dialog is None:
            from dialog import Dialog

            self._dialog = Dialog(dialog="dialog")
        return self._dialog

    def text_prompts(self, prompts: Sequence[TextPrompt], *, ok_label: str = "Next") -> list[str]:
        """Ask each prompt in order; PromptCancelled carries the answers given so far."""

        d = self.dialog
        answers: list[str] = []
        for prompt in prompts:
            code, text = d.inputbox(
                prompt.label,
                height=self.height,
                width=self.width,
                init=prompt.default,
                ok_label=ok_label,
            )
            if code != d.OK:
                logger.info("Prompt %r cancelled (code=%s)", prompt.label, code)
                raise PromptCancelled("Dialog cancelled. Exiting script", answers=answers)
            answers.append(text.strip())
        return answers

    def confirm(self, title: str, body: str) -> Confirmation:
        d = self.dialog
        code = d.yesno(body, height=self.confirm_height, width=self.confirm_width, title=title)
        if code == d.OK:
            return Confirmation.YES
        if code == d.CANCEL:
            return Confirmation.NO
        return Confirmation.ABORTED

    def multi_select(
        self,
        title: str,
        label: str,
        options: Iterable[str],
        *,
        selected: Optional[Iterable[str]] = None,
    ) -> set[str]:
        d = self.dialog
        on = set(selected or ())
        choices = [(name, name, name in on) for name in options]
        if not choices:
            logger.info("Nothing to choose from for %r", title)
            return set()
        code, tags = d.checklist(
            label,
            height=self.height,
            width=self.width,
            list_height=self.list_height,
            choices=choices,
            title=title,
        )
        if code != d.OK:
            raise PromptCancelled("Dialog cancelled. Exiting script")
        return set(tags)
