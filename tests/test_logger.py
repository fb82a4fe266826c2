from stratification.logger import EventLogger
from stratification.manager import StratificationManager
from stratification.stratifier import StateStratifier


def test_build_is_logged(tmp_path):
    logger = EventLogger(tmp_path / "logs")
    StratificationManager([StateStratifier("sample", ["A", "B"]), StateStratifier("filter", ["PASS"])], logger=logger)
    records = logger.read()
    assert len(records) == 1
    rec = records[0]
    assert rec["event"] == "stratification_built"
    assert rec["payload"] == {"stratifiers": ["sample", "filter"], "sizes": [2, 1], "n_keys": 2}
    assert "ts_utc" in rec


def test_log_appends(tmp_path):
    logger = EventLogger(tmp_path)
    assert logger.read() == []
    logger.log("a", {"x": 1})
    logger.log("b", {"x": 2})
    assert [r["event"] for r in logger.read()] == ["a", "b"]
