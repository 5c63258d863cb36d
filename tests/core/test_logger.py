from loguru import logger

from training_engine.core.logger import setup_logger, setup_logger_from_settings


def test_setup_logger_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "engine.log"

    setup_logger(level="DEBUG", log_file=str(log_file))
    logger.debug("plan generated")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "Logger initialized with level=DEBUG" in content
    assert "plan generated" in content

    setup_logger(level="INFO")


def test_setup_logger_from_settings(monkeypatch, tmp_path):
    from training_engine.config.settings import settings

    log_file = tmp_path / "from_settings.log"
    monkeypatch.setattr(settings, "log_level", "WARNING")
    monkeypatch.setattr(settings, "log_file", str(log_file))

    setup_logger_from_settings()
    logger.info("hidden")
    logger.warning("shown")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "shown" in content
    assert "hidden" not in content

    setup_logger(level="INFO")


def test_json_file_logs(tmp_path):
    import json

    log_file = tmp_path / "engine.jsonl"

    setup_logger(level="INFO", log_file=str(log_file), json_logs=True)
    logger.warning("dropped field")
    logger.remove()

    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert records[-1]["record"]["message"] == "dropped field"
    assert records[-1]["record"]["level"]["name"] == "WARNING"

    setup_logger(level="INFO")
