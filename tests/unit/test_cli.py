"""End-to-end tests for the summarize_samples CLI."""

import json

import pytest
import redis

import src.reporter.cli as cli


@pytest.fixture(autouse=True)
def _keep_captured_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_structlog", lambda level: None)


@pytest.fixture
def samples_file(tmp_path):
    path = tmp_path / "latency.txt"
    path.write_text("\n".join(str(v) for v in [123, 234, 345, 456, 567, 678, 789, 890, 910, 1011]))
    return path


class TestFileMode:
    def test_console_report(self, samples_file, capsys) -> None:
        cli.main([str(samples_file)])
        out = capsys.readouterr().out
        assert "TIMER — latency" in out
        assert "Upper 90%" in out

    def test_json_with_custom_quantiles(self, samples_file, capsys) -> None:
        cli.main([str(samples_file), "--json", "-q", "0.75", "-n", "api"])
        doc = json.loads(capsys.readouterr().out)
        assert doc["metric"] == "api"
        assert doc["fields"]["api.upper_75"] == 864.75
        assert doc["fields"]["api.sum"] == 6003.0
        assert "api.upper_90" not in doc["fields"]

    def test_set_mode(self, tmp_path, capsys) -> None:
        path = tmp_path / "users.txt"
        path.write_text("4\n5\n2\n3\n2\n4\n4\n5\n6\n7\n8\n9\n0\n4\n")
        cli.main([str(path), "--set", "--json"])
        doc = json.loads(capsys.readouterr().out)
        assert doc["fields"] == {"users.count": 14, "users.count_unique": 9}

    def test_rejected_lines_warned(self, tmp_path, capsys) -> None:
        path = tmp_path / "mixed.txt"
        path.write_text("1\nfoo\n2\n")
        cli.main([str(path), "--json"])
        captured = capsys.readouterr()
        assert json.loads(captured.out)["rejected"] == 1
        assert "could not be parsed" in captured.err

    def test_plot_and_log_file(self, samples_file, tmp_path, capsys) -> None:
        chart = tmp_path / "out" / "latency.png"
        log_file = tmp_path / "out" / "summary.jsonl"
        cli.main([str(samples_file), "--plot", str(chart), "--log-file", str(log_file)])
        assert chart.exists()
        record = json.loads(log_file.read_text().splitlines()[0])
        assert record["metric"] == "latency"
        assert record["latency.count"] == 10


class TestArgumentErrors:
    def test_no_source(self) -> None:
        with pytest.raises(SystemExit):
            cli.main([])

    def test_bad_quantile(self, samples_file) -> None:
        with pytest.raises(SystemExit):
            cli.main([str(samples_file), "-q", "1.5"])

    def test_flush_needs_redis(self, samples_file) -> None:
        with pytest.raises(SystemExit):
            cli.main([str(samples_file), "--flush"])

    def test_missing_file_fails(self, tmp_path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(tmp_path / "nope.txt")])
        assert exc_info.value.code == 1
        assert "cannot read" in capsys.readouterr().err

    def test_colliding_quantiles_are_a_usage_error(self, samples_file, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(samples_file), "-q", "0.9999999", "-q", "1.0"])
        assert exc_info.value.code == 2
        assert "100" in capsys.readouterr().err


class TestRedisMode:
    def test_store_then_summarize_and_flush(self, samples_file, fake_redis, capsys) -> None:
        cli.main([str(samples_file), "--store", "api", "--json"])
        capsys.readouterr()
        assert len(fake_redis.lists["samples:api"]) == 10

        cli.main(["--redis-key", "api", "--json", "--flush"])
        doc = json.loads(capsys.readouterr().out)
        assert doc["fields"]["api.count"] == 10
        assert "samples:api" not in fake_redis.lists

    def test_list_timers(self, fake_redis, capsys) -> None:
        fake_redis.rpush("samples:db", "1")
        fake_redis.rpush("samples:api", "1")
        cli.main(["--list-timers"])
        assert capsys.readouterr().out.split() == ["api", "db"]

    def test_unreachable_redis_stops_before_summary(self, fake_redis, monkeypatch, capsys) -> None:
        def refuse(*_args):
            raise redis.ConnectionError("connection refused")

        monkeypatch.setattr(fake_redis, "lrange", refuse)
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--redis-key", "api", "--json"])
        assert exc_info.value.code == 1
        out, err = capsys.readouterr()
        assert out == ""
        assert "cannot read samples for api" in err
