from unittest.mock import patch

from pymongo.errors import ConfigurationError, InvalidURI

from common.config import ScraperConfig
from sms_panel_run import build_sink


def test_sink_without_mongo(tmp_path):
    sink = build_sink(ScraperConfig(output_dir=str(tmp_path)))

    assert sink.db is None
    assert sink.output_dir == str(tmp_path)


def test_malformed_mongo_uri_disables_mirror(tmp_path, capsys):
    config = ScraperConfig(output_dir=str(tmp_path), mongo_uri="not-a-mongo-uri")

    sink = build_sink(config)

    assert sink.db is None
    assert "MongoDB mirror disabled" in capsys.readouterr().out


def test_mongo_mirror_enabled(tmp_path):
    config = ScraperConfig(output_dir=str(tmp_path), mongo_uri="mongodb://localhost:27017", mongo_db="panel")
    with patch("sms_panel_run.get_db", return_value="db") as get_db:
        sink = build_sink(config)

    get_db.assert_called_once_with("mongodb://localhost:27017", "panel")
    assert sink.db == "db"


def test_invalid_uri_is_a_configuration_error():
    assert issubclass(InvalidURI, ConfigurationError)
