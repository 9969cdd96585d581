import time

from vocab_trainer.schemas.records import UserRecord
from vocab_trainer.services.reward_service import (
    CORRECT_ANSWER_COINS,
    StudyTimer,
    add_study_time,
    apply_correct_answer,
)


def make_user(**kwargs):
    fields = dict(id="u1", name="Ana", email="ana@example.com", password_hash="x", coins=5, correct=2, time_ms=700)
    fields.update(kwargs)
    return UserRecord(**fields)


class FakeClock:
    def __init__(self, start=0):
        self.now = start

    def __call__(self):
        return self.now


def test_correct_answer_adds_coins_and_count_only():
    user = make_user()
    rewarded = apply_correct_answer(user)

    assert rewarded.coins == 5 + CORRECT_ANSWER_COINS == 15
    assert rewarded.correct == 3
    assert rewarded.model_dump(exclude={"coins", "correct"}) == user.model_dump(exclude={"coins", "correct"})
    # The input record is untouched
    assert user.coins == 5


def test_add_study_time_ignores_negative_durations():
    user = make_user()
    assert add_study_time(user, 300).time_ms == 1000
    assert add_study_time(user, -50).time_ms == 700


def test_timer_reports_each_tick():
    clock = FakeClock(1000)
    reported = []
    timer = StudyTimer(reported.append, interval_ms=1000, clock=clock)

    timer.start(background=False)
    assert timer.running

    clock.now += 1000
    assert timer.tick() == 1000
    clock.now += 1000
    timer.tick()

    assert reported == [1000, 1000]
    assert timer.total_ms == 2000


def test_timer_stop_flushes_partial_tick():
    clock = FakeClock(0)
    reported = []
    timer = StudyTimer(reported.append, clock=clock)

    timer.start(background=False)
    clock.now += 1000
    timer.tick()
    clock.now += 400

    assert timer.stop() == 400
    assert reported == [1000, 400]
    assert not timer.running
    # Stopped timers neither tick nor flush again
    clock.now += 5000
    assert timer.tick() == 0
    assert timer.stop() == 0
    assert reported == [1000, 400]


def test_timer_without_elapsed_time_reports_nothing():
    clock = FakeClock(0)
    reported = []
    timer = StudyTimer(reported.append, clock=clock)
    timer.start(background=False)
    assert timer.stop() == 0
    assert reported == []


def test_timer_keeps_running_when_callback_fails():
    clock = FakeClock(0)
    calls = []

    def flaky(elapsed):
        calls.append(elapsed)
        if len(calls) == 1:
            raise RuntimeError("store unavailable")

    timer = StudyTimer(flaky, clock=clock)
    timer.start(background=False)
    clock.now += 1000
    timer.tick()
    clock.now += 1000
    timer.tick()

    assert calls == [1000, 2000]
    assert timer.total_ms == 2000
    assert timer.running


def test_background_timer_flushes_on_stop():
    reported = []
    timer = StudyTimer(reported.append, interval_ms=10)
    timer.start()
    time.sleep(0.05)
    timer.stop()

    assert not timer.running
    assert sum(reported) == timer.total_ms
    assert timer.total_ms >= 40
