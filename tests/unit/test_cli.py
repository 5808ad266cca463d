"""
Unit tests for the token_lineage console commands.
"""

import json

import pytest

from token_lineage import cache as cache_module
from token_lineage.cli.commands import run_cache, run_detect, run_match

RUNNERS = [
    {"id": "r-pepe", "name": "Pepe", "symbol": "PEPE"},
    {"id": "r-bonk", "name": "Bonk", "symbol": "BONK"},
]
CANDIDATES = [
    {"id": "c-babypepe", "name": "Baby Pepe", "symbol": "BABYPEPE"},
    {"id": "c-newt", "name": "Totally New", "symbol": "NEWT"},
]


@pytest.fixture
def token_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runners = tmp_path / "runners.json"
    candidates = tmp_path / "candidates.json"
    runners.write_text(json.dumps(RUNNERS), encoding="utf-8")
    candidates.write_text(json.dumps({"tokens": CANDIDATES}), encoding="utf-8")
    return runners, candidates


class TestRunDetect:
    """Tests for lineage-detect."""

    def test_json_output(self, capsys):
        assert run_detect(["Pepe", "PEPE", "Baby Pepe", "BABYPEPE", "--json"]) == 0

        result = json.loads(capsys.readouterr().out)
        assert result["is_derivative"] is True
        assert result["confidence"] == 99
        assert result["best_method"] == "direct"

    def test_text_output(self, capsys):
        assert run_detect(["Pepe", "PEPE", "Baby Pepe", "BABYPEPE"]) == 0
        assert "BABYPEPE -> PEPE: 99%" in capsys.readouterr().out

    def test_no_match(self, capsys):
        assert run_detect(["Solana", "SOL", "Xyz", "XYZ"]) == 0
        assert "XYZ is not a derivative of SOL" in capsys.readouterr().out


class TestRunMatch:
    """Tests for lineage-match."""

    def test_dry_run_writes_nothing(self, token_files, tmp_path):
        runners, candidates = token_files
        output = tmp_path / "out.json"

        code = run_match(
            ["--runners", str(runners), "--candidates", str(candidates), "--output", str(output)]
        )

        assert code == 0
        assert not output.exists()
        assert not (tmp_path / "logs").exists()

    def test_execute_writes_matches(self, token_files, tmp_path):
        runners, candidates = token_files
        output = tmp_path / "out" / "matches.json"

        code = run_match(
            [
                "--runners",
                str(runners),
                "--candidates",
                str(candidates),
                "--output",
                str(output),
                "--execute",
            ]
        )

        assert code == 0
        rows = json.loads(output.read_text(encoding="utf-8"))
        assert [(r["candidate_symbol"], r["runner_symbol"]) for r in rows] == [("BABYPEPE", "PEPE")]
        assert rows[0]["confidence"] == 99
        assert any((tmp_path / "logs").glob("lineage_match_*.log"))

    def test_invalid_file_returns_error(self, token_files, tmp_path):
        runners, _ = token_files
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps([{"name": "No symbol"}]), encoding="utf-8")

        assert run_match(["--runners", str(runners), "--candidates", str(bad)]) == 1

    def test_missing_file_returns_error(self, token_files, tmp_path):
        runners, _ = token_files
        code = run_match(["--runners", str(runners), "--candidates", str(tmp_path / "absent.json")])
        assert code == 1

    def test_secondary_without_key_still_succeeds(self, token_files, tmp_path, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "")
        runners, candidates = token_files
        output = tmp_path / "matches.json"

        code = run_match(
            [
                "--runners",
                str(runners),
                "--candidates",
                str(candidates),
                "--secondary",
                "--output",
                str(output),
                "--execute",
            ]
        )

        assert code == 0
        assert len(json.loads(output.read_text(encoding="utf-8"))) == 1

    def test_out_of_range_confidence_rejected(self, token_files):
        runners, candidates = token_files
        with pytest.raises(SystemExit):
            run_match(
                [
                    "--runners",
                    str(runners),
                    "--candidates",
                    str(candidates),
                    "--min-confidence",
                    "150",
                ]
            )


class TestRunCache:
    """Tests for lineage-cache."""

    @pytest.fixture(autouse=True)
    def isolated_cache(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CACHE_DIR", str(tmp_path / "cache"))
        monkeypatch.setattr(cache_module, "_cache", None)
        yield
        if cache_module._cache is not None:
            cache_module._cache.close()

    def test_stats(self, capsys):
        assert run_cache(["stats"]) == 0
        out = capsys.readouterr().out
        assert "Total entries: 0" in out

    def test_list_and_clear(self, capsys):
        assert run_cache(["stats"]) == 0
        cache_module._cache.set("embeddings", "abc", [0.1])

        assert run_cache(["list", "--namespace", "embeddings"]) == 0
        assert "abc" in capsys.readouterr().out

        assert run_cache(["clear", "--namespace", "embeddings", "--yes"]) == 0
        assert "Cleared 1 entries from embeddings" in capsys.readouterr().out
        assert cache_module._cache.count(namespace="embeddings") == 0

    def test_clear_requires_namespace(self):
        assert run_cache(["clear"]) == 1

    def test_clear_aborted(self, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda _prompt: "n")
        assert run_cache(["clear", "--namespace", "embeddings"]) == 1
