from datetime import timedelta

from housealmanac.runtime import EventLoop


class FakeTimer:
  def __init__(self):
    self.now = 0.0

  def __call__(self):
    return self.now


def test_interval_task_repeats():
  timer = FakeTimer()
  loop = EventLoop(timer=timer)
  calls = []
  loop.schedule_interval(timedelta(seconds=10), lambda: calls.append(timer.now), task_id="tick")
  assert loop.run_pending() == 0
  timer.now = 10
  assert loop.run_pending() == 1
  timer.now = 15
  assert loop.run_pending() == 0
  timer.now = 20
  loop.run_pending()
  assert calls == [10, 20]
  assert loop.get_pending_tasks() == 1


def test_failing_task_is_rescheduled():
  timer = FakeTimer()
  loop = EventLoop(timer=timer)
  calls = []
  def fail():
    calls.append(timer.now)
    raise ValueError("bad config")
  loop.schedule_interval(timedelta(seconds=5), fail, run_immediately=True)
  assert loop.run_pending() == 0
  timer.now = 5
  loop.run_pending()
  assert calls == [0, 5]


def test_cancel_task():
  timer = FakeTimer()
  loop = EventLoop(timer=timer)
  calls = []
  task_id = loop.schedule_task(timedelta(seconds=1), calls.append, args=("x",))
  assert loop.cancel_task(task_id)
  timer.now = 2
  loop.run_pending()
  assert calls == []
  assert not loop.cancel_task("unknown")


def test_start_and_stop():
  loop = EventLoop()
  loop.start()
  assert loop.is_running()
  loop.stop()
  assert not loop.is_running()
