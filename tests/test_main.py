# tests/test_main.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from tasktrack.cli import main as cli_main
from tasktrack.core.state import AppState
from tasktrack.tasks.task_manager import TaskManager

@pytest.fixture()
def quiet_main(monkeypatch, settings: SimpleNamespace) -> SimpleNamespace:
    """Run main() against tmp settings, without touching root logging or stdin."""
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "setup_logging", lambda **kwargs: None)
    return settings

def test_exit_without_changes_keeps_file_that_failed_to_decode(
    monkeypatch, quiet_main: SimpleNamespace
) -> None:
    quiet_main.data_dir.mkdir(parents=True)
    original = b"1|good one|home|2|1700000000|0\n2|caf\xe9|food|1|1700000000|0\n"
    quiet_main.tasks_path.write_bytes(original)
    monkeypatch.setattr(cli_main, "run_console_loop", lambda state: None)

    cli_main.main()

    assert quiet_main.tasks_path.read_bytes() == original

def test_main_saves_commands_entered_on_the_console(monkeypatch, quiet_main: SimpleNamespace) -> None:
    def fake_loop(state: AppState) -> None:
        state.manager.add_task("from main", "misc", 2, 1)

    monkeypatch.setattr(cli_main, "run_console_loop", fake_loop)

    cli_main.main()

    assert TaskManager(quiet_main.tasks_path).list_all()[0].description == "from main"

def test_shutdown_retries_a_failed_save(tmp_path, settings: SimpleNamespace) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", "utf-8")
    manager = TaskManager(blocker / "tasks.txt")

    manager.add_task("pending", "c", 1, 1)
    assert manager.has_unsaved_changes is True

    blocker.unlink()
    cli_main._shutdown(AppState(settings=settings, manager=manager))

    assert manager.has_unsaved_changes is False
    assert TaskManager(blocker / "tasks.txt").list_all()[0].description == "pending"
