import logging
import re

from wordsprint.metrics import StageTimer


def test_stages_accumulate():
    timer = StageTimer()
    for _ in range(3):
        with timer.stage("search"):
            pass
    with timer.stage("score"):
        pass
    assert timer.counts["search"] == 3
    assert timer.counts["score"] == 1
    assert set(timer.summary()) == {"search", "score", "total"}
    assert timer.summary()["total"] >= 0


def test_stage_recorded_when_body_raises():
    timer = StageTimer()
    try:
        with timer.stage("boom"):
            raise RuntimeError("fail")
    except RuntimeError:
        pass
    assert timer.counts["boom"] == 1


def test_log_uses_level(caplog):
    timer = StageTimer(logging.DEBUG)
    with timer.stage("fast_pass"):
        pass
    with caplog.at_level(logging.DEBUG, logger="wordsprint"):
        timer.log(attempts=4)
    assert any("fast_pass=" in r.getMessage() and "attempts=4" in r.getMessage() for r in caplog.records)
    assert all(r.levelno == logging.DEBUG for r in caplog.records)


def test_log_line_format(caplog):
    timer = StageTimer()
    with timer.stage("grid"):
        pass
    with caplog.at_level(logging.INFO, logger="wordsprint"):
        timer.log(seed="CATSAREXTENDSXXX")
    (record,) = caplog.records
    assert re.fullmatch(r"timings grid=\d+\.\dms total=\d+\.\dms seed=CATSAREXTENDSXXX", record.getMessage())
