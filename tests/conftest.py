import pytest

from sentry_options.consts import ENV_FALLBACKS

from tests import _warning_recorder, _warning_recorder_mgr


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """
    Removes the environment variables the options fall back to, so the
    defaults seen by a test do not depend on the shell running it.
    """
    for env_name in ENV_FALLBACKS.values():
        monkeypatch.delenv(env_name, raising=False)


@pytest.fixture(autouse=True, scope="session")
def _capture_internal_warnings():
    yield

    _warning_recorder_mgr.__exit__(None, None, None)
    recorder = _warning_recorder

    for warning in recorder:
        if isinstance(warning.message, ResourceWarning):
            continue

        filename = str(warning.filename)
        if "sentry_options" not in filename and "sentry-options" not in filename:
            continue

        raise AssertionError(warning)


@pytest.fixture
def excluded_dir(tmpdir):
    """A real directory, to exercise excluded path normalization."""
    return str(tmpdir.mkdir("vendor"))
