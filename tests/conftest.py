import dataclasses
import logging
import os
import subprocess
from pathlib import Path

import pytest

from dotstrap.lib.dialogs import DialogPrompter
from dotstrap.lib.env import InvokingUser
from dotstrap.logging_utils import CONSOLE_HANDLER, FILE_HANDLER
from dotstrap.provision_config import build_provisioning_config, load_raw_config


class FakeDialog:
    """Stands in for pythondialog's Dialog with scripted answers."""

    OK = "ok"
    CANCEL = "cancel"
    ESC = "esc"

    def __init__(self, inputs=(), yesno="ok", checklist=("ok", [])):
        self.inputs = list(inputs)
        self.yesno_code = yesno
        self.checklist_result = checklist
        self.calls = []

    def inputbox(self, text, height=None, width=None, init="", **kwargs):
        self.calls.append(("inputbox", text, init))
        return self.inputs.pop(0)

    def yesno(self, text, height=None, width=None, **kwargs):
        self.calls.append(("yesno", text, kwargs.get("title")))
        return self.yesno_code

    def checklist(self, text, height=None, width=None, list_height=None, choices=(), **kwargs):
        self.calls.append(("checklist", text, list(choices)))
        return self.checklist_result

    def called(self, kind):
        return [c for c in self.calls if c[0] == kind]


class CommandRecorder:
    """Replacement for subprocess.run that records argv instead of executing."""

    def __init__(self):
        self.calls = []
        self.hooks = []
        self.failures = []
        self.outputs = []

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append((argv, kwargs))
        for prefix, hook in self.hooks:
            if argv[: len(prefix)] == list(prefix):
                hook(argv)
        for prefix in self.failures:
            if argv[: len(prefix)] == list(prefix):
                return subprocess.CompletedProcess(argv, 1, stdout="", stderr="boom")
        for prefix, stdout in self.outputs:
            if argv[: len(prefix)] == list(prefix):
                return subprocess.CompletedProcess(argv, 0, stdout=stdout, stderr="")
        return subprocess.CompletedProcess(argv, 0, stdout="", stderr="")

    @property
    def argvs(self):
        return [argv for argv, _ in self.calls]

    def matching(self, *prefix):
        return [argv for argv in self.argvs if argv[: len(prefix)] == list(prefix)]

    def on(self, prefix, hook):
        self.hooks.append((tuple(prefix), hook))

    def fail(self, *prefix):
        self.failures.append(tuple(prefix))

    def output(self, prefix, stdout):
        self.outputs.append((tuple(prefix), stdout))


@pytest.fixture
def commands(monkeypatch):
    recorder = CommandRecorder()
    monkeypatch.setattr("dotstrap.lib.command.subprocess.run", recorder)
    return recorder


@pytest.fixture
def reset_logging():
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if h.get_name() in {FILE_HANDLER, CONSOLE_HANDLER}:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


@pytest.fixture
def user(tmp_path):
    home = tmp_path / "home" / "jane"
    home.mkdir(parents=True)
    return InvokingUser(
        name="jane",
        uid=os.getuid(),
        gid=os.getgid(),
        group="users",
        home=str(home),
    )


@pytest.fixture
def cfg(tmp_path, user):
    base = build_provisioning_config(load_raw_config(), user=user)
    return dataclasses.replace(
        base,
        answers_path=str(tmp_path / "configuration_output"),
        recap_path=str(tmp_path / "config_recap"),
    )


def make_prompter(dialog):
    return DialogPrompter(dialog)


def make_dotfiles_tree(root: Path, names=("zsh", "nvim", "sway")):
    root.mkdir(parents=True, exist_ok=True)
    for name in names:
        (root / name).mkdir()
        (root / name / "dot-config").write_text("x", encoding="utf-8")
    (root / ".git").mkdir()
    (root / "README.md").write_text("dotfiles", encoding="utf-8")
