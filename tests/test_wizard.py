from pathlib import Path

import pytest

from conftest import FakeDialog, make_prompter
from dotstrap.config_store import ConfigStore
from dotstrap.errors import ConfigurationAborted, ConfigurationRefused, MalformedRecord, PromptCancelled
from dotstrap.wizard import ConfigurationWizard, WizardState

ANSWERS = ["Jane", "jane@example.com", "https://github.com/jane/dotfiles", "main", "/home/jane/dotfiles"]


def _ok(*texts):
    return [("ok", t) for t in texts]


def _wizard(tmp_path, dialog, **kwargs):
    store = ConfigStore(str(tmp_path / "configuration_output"))
    wizard = ConfigurationWizard(
        store,
        make_prompter(dialog),
        recap_path=str(tmp_path / "config_recap"),
        default_name="jane",
        **kwargs,
    )
    return wizard, store


def test_fresh_run_prompts_persists_and_confirms(tmp_path):
    dialog = FakeDialog(inputs=_ok(*ANSWERS), yesno="ok")
    wizard, store = _wizard(tmp_path, dialog)

    record = wizard.run()

    assert wizard.state is WizardState.CONFIRMED
    assert record.git_user_name == "Jane"
    assert record.dotfiles_dest_path == "/home/jane/dotfiles"
    assert len(dialog.called("inputbox")) == 5
    assert store.exists()
    assert not (tmp_path / "config_recap").exists()


def test_prompt_defaults(tmp_path):
    dialog = FakeDialog(inputs=_ok(*ANSWERS))
    wizard, _ = _wizard(tmp_path, dialog)

    wizard.run()

    inits = [init for _, _, init in dialog.called("inputbox")]
    assert inits == ["jane", "", "https://github.com/", "main", ""]


def test_existing_record_skips_prompts(tmp_path):
    dialog = FakeDialog(yesno="ok")
    wizard, store = _wizard(tmp_path, dialog)
    store.save(ANSWERS)

    record = wizard.run()

    assert dialog.called("inputbox") == []
    assert record.dotfiles_repo_url == "https://github.com/jane/dotfiles"
    # The recap shown is the stored record.
    _, body, title = dialog.called("yesno")[0]
    assert title == "Confirm configuration?"
    assert "Git email: jane@example.com" in body


def test_refusal_removes_persisted_record(tmp_path):
    dialog = FakeDialog(inputs=_ok(*ANSWERS), yesno="cancel")
    wizard, store = _wizard(tmp_path, dialog)

    with pytest.raises(ConfigurationRefused):
        wizard.run()

    assert wizard.state is WizardState.REFUSED
    assert not store.exists()
    assert not (tmp_path / "config_recap").exists()


def test_abort_keeps_persisted_record(tmp_path):
    dialog = FakeDialog(inputs=_ok(*ANSWERS), yesno="esc")
    wizard, store = _wizard(tmp_path, dialog)

    with pytest.raises(ConfigurationAborted):
        wizard.run()

    assert wizard.state is WizardState.ABORTED
    assert store.exists()
    assert not (tmp_path / "config_recap").exists()


def test_cancel_keeps_partial_answers(tmp_path):
    dialog = FakeDialog(inputs=[("ok", "Jane"), ("ok", "jane@example.com"), ("cancel", "")])
    wizard, store = _wizard(tmp_path, dialog)

    with pytest.raises(PromptCancelled) as excinfo:
        wizard.run()

    assert excinfo.value.answers == ["Jane", "jane@example.com"]
    assert Path(store.path).read_text(encoding="utf-8") == "Jane,jane@example.com\n"
    assert dialog.called("yesno") == []


def test_partial_record_is_resumed_with_stored_answers(tmp_path):
    dialog = FakeDialog(inputs=_ok(*ANSWERS))
    wizard, store = _wizard(tmp_path, dialog)
    Path(store.path).write_text("Jane,jane@example.com\n", encoding="utf-8")

    record = wizard.run()

    inits = [init for _, _, init in dialog.called("inputbox")]
    assert inits[:2] == ["Jane", "jane@example.com"]
    assert record.dotfiles_ref == "main"
    assert store.read_answers() == ANSWERS


def test_partial_record_without_resume_is_malformed(tmp_path):
    dialog = FakeDialog()
    wizard, store = _wizard(tmp_path, dialog, resume_partial=False)
    Path(store.path).write_text("Jane,jane@example.com\n", encoding="utf-8")

    with pytest.raises(MalformedRecord):
        wizard.run()

    assert dialog.calls == []
    assert store.exists()


def test_answers_without_git_name_are_not_saved(tmp_path):
    dialog = FakeDialog(inputs=_ok("", *ANSWERS[1:]))
    wizard, store = _wizard(tmp_path, dialog)

    with pytest.raises(MalformedRecord):
        wizard.run()

    assert not store.exists()


def test_cancel_during_resume_keeps_the_longer_answers(tmp_path):
    dialog = FakeDialog(inputs=[*_ok(*ANSWERS[:3]), ("cancel", "")])
    wizard, store = _wizard(tmp_path, dialog)
    Path(store.path).write_text("Jane,jane@example.com\n", encoding="utf-8")

    with pytest.raises(PromptCancelled):
        wizard.run()

    assert store.read_answers() == ANSWERS[:3]


def test_cancel_during_resume_never_shortens_stored_answers(tmp_path):
    dialog = FakeDialog(inputs=[("esc", "")])
    wizard, store = _wizard(tmp_path, dialog)
    Path(store.path).write_text("Jane,jane@example.com\n", encoding="utf-8")

    with pytest.raises(PromptCancelled):
        wizard.run()

    assert store.read_answers() == ["Jane", "jane@example.com"]
