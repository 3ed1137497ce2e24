import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from section_notes.store.scheduler import SaveScheduler
from fakes import RecordingRunner


def test_idle_submit_starts_immediately():
    runner = RecordingRunner()
    saver = SaveScheduler(runner)

    saver.submit(["a"])

    assert runner.sent == [["a"]]
    assert saver.busy and not saver.has_pending


def test_submits_during_flight_collapse_to_newest():
    runner = RecordingRunner()
    saver = SaveScheduler(runner)

    saver.submit(["v1"])
    saver.submit(["v2"])
    saver.submit(["v3"])
    assert runner.sent == [["v1"]]
    assert saver.has_pending

    runner.finish()
    assert runner.sent == [["v1"], ["v3"]]
    assert runner.in_flight == 1

    runner.finish()
    assert not saver.busy and not saver.has_pending
    assert saver.completed == 2


def test_failure_is_counted_and_pending_still_goes_out():
    runner = RecordingRunner()
    saver = SaveScheduler(runner)
    saver.submit(["v1"])
    saver.submit(["v2"])

    runner.finish(ok=False)
    runner.finish(ok=True)

    assert saver.failed == 1
    assert saver.completed == 1
    assert runner.sent[-1] == ["v2"]


def test_runner_exception_is_a_failed_save():
    def boom(doc, done):
        raise RuntimeError("no pool")

    saver = SaveScheduler(boom)
    saver.submit(["v1"])

    assert saver.failed == 1
    assert not saver.busy


def test_synchronous_runner_never_queues():
    seen = []
    saver = SaveScheduler(lambda doc, done: (seen.append(doc), done(True)))
    saver.submit(["a"])
    saver.submit(["b"])
    assert seen == [["a"], ["b"]]
    assert saver.completed == 2
