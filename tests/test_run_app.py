"""Tests for the launcher."""

import pytest

from resume_screener.frontend import run_app


@pytest.fixture
def backend_live(mocker):
    return mocker.patch.object(run_app, "check_backend_status", return_value=True)


def test_running_backend_is_reused(mocker, backend_live):
    popen = mocker.patch.object(run_app.subprocess, "Popen")
    start_frontend = mocker.patch.object(run_app, "start_frontend")

    run_app.main()

    popen.assert_not_called()
    start_frontend.assert_called_once_with()


def test_interrupt_stops_started_backend_once(mocker, capsys):
    mocker.patch.object(run_app, "check_backend_status", side_effect=[False, True])
    process = mocker.patch.object(run_app.subprocess, "Popen").return_value
    mocker.patch.object(run_app.subprocess, "run", side_effect=KeyboardInterrupt)

    run_app.main()

    process.terminate.assert_called_once_with()
    process.wait.assert_called_once_with()
    out = capsys.readouterr().out
    assert out.count("Shutting down") == 1
    assert out.count("Backend API is running") == 1


def test_backend_that_never_starts_aborts(mocker):
    mocker.patch.object(run_app, "check_backend_status", return_value=False)
    mocker.patch.object(run_app.time, "sleep")
    process = mocker.patch.object(run_app.subprocess, "Popen").return_value
    start_frontend = mocker.patch.object(run_app, "start_frontend")

    run_app.main()

    process.terminate.assert_called_once_with()
    start_frontend.assert_not_called()
