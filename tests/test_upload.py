from concurrent.futures import Future
from unittest import mock

from wrytr.errors import UploadFailed
from wrytr.file_intake import AudioFile
from wrytr.upload import UploadOrchestrator

AUDIO = AudioFile("/music/talk.mp3", "talk.mp3", 1024, "audio/mpeg")


class ImmediateExecutor:
    def submit(self, fn, *args, **kwargs):
        future = Future()
        future.set_result(fn(*args, **kwargs))
        return future


class HeldExecutor:
    def __init__(self):
        self.jobs = []

    def submit(self, fn, *args, **kwargs):
        self.jobs.append((fn, args, kwargs))
        return Future()

    def run_all(self):
        jobs, self.jobs = self.jobs, []
        for fn, args, kwargs in jobs:
            fn(*args, **kwargs)


def _record(orchestrator):
    events = []
    orchestrator.uploadingChanged.connect(lambda value: events.append(("uploading", value)))
    orchestrator.transcriptionReady.connect(lambda text: events.append(("ready", text)))
    orchestrator.transcriptionFailed.connect(lambda message: events.append(("failed", message)))
    return events


def test_success_flow():
    client = mock.Mock()
    client.transcribe.return_value = "hello"
    orchestrator = UploadOrchestrator(client, executor=ImmediateExecutor())
    events = _record(orchestrator)

    assert orchestrator.submit(AUDIO, "00:00:00", "00:10:00") is True

    client.transcribe.assert_called_once_with(AUDIO, "00:00:00", "00:10:00")
    assert events == [("uploading", True), ("uploading", False), ("ready", "hello")]
    assert orchestrator.is_uploading is False


def test_failure_flow_resets_uploading():
    client = mock.Mock()
    client.transcribe.side_effect = UploadFailed("HTTP 502", status_code=502)
    orchestrator = UploadOrchestrator(client, executor=ImmediateExecutor())
    events = _record(orchestrator)

    orchestrator.submit(AUDIO, "00:00:00", "00:10:00")

    assert events == [("uploading", True), ("uploading", False), ("failed", "HTTP 502")]


def test_unexpected_error_is_reported_as_failure():
    client = mock.Mock()
    client.transcribe.side_effect = RuntimeError("kaput")
    orchestrator = UploadOrchestrator(client, executor=ImmediateExecutor())
    events = _record(orchestrator)

    orchestrator.submit(AUDIO, "00:00:00", "00:10:00")

    assert events[-1] == ("failed", "kaput")
    assert orchestrator.is_uploading is False


def test_second_submit_is_ignored_while_uploading():
    client = mock.Mock()
    client.transcribe.return_value = "done"
    executor = HeldExecutor()
    orchestrator = UploadOrchestrator(client, executor=executor)

    assert orchestrator.submit(AUDIO, "00:00:00", "00:10:00") is True
    assert orchestrator.is_uploading is True
    assert orchestrator.can_submit(AUDIO) is False
    assert orchestrator.submit(AUDIO, "00:00:00", "00:10:00") is False
    assert len(executor.jobs) == 1

    executor.run_all()
    assert orchestrator.is_uploading is False
    assert orchestrator.can_submit(AUDIO) is True


def test_cannot_submit_without_file():
    orchestrator = UploadOrchestrator(mock.Mock(), executor=ImmediateExecutor())
    assert orchestrator.can_submit(None) is False


def test_rejected_submit_resets_uploading():
    class ClosedExecutor:
        def submit(self, fn, *args, **kwargs):
            raise RuntimeError("cannot schedule new futures after shutdown")

    client = mock.Mock()
    orchestrator = UploadOrchestrator(client, executor=ClosedExecutor())
    events = _record(orchestrator)

    assert orchestrator.submit(AUDIO, "00:00:00", "00:10:00") is False

    assert orchestrator.is_uploading is False
    assert orchestrator.can_submit(AUDIO) is True
    assert events == [
        ("uploading", True),
        ("uploading", False),
        ("failed", "cannot schedule new futures after shutdown"),
    ]
    client.transcribe.assert_not_called()
