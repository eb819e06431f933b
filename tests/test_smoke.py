import json

from fuzzy_site_search.demo import main
from fuzzy_site_search.general.utils import clear_config_cache, reload_topics

SITE_YAML = """
defaultContentLanguage: pt
params:
  fuseOpts:
    threshold: 0.4
    limit: 10
    keys: ["title", "summary"]
languages:
  pt: {weight: 1, languageName: Português}
  en: {weight: 2, languageName: English}
"""

RECORDS = [
    {"title": "Creating a REST API with Golang and AWS Lambda", "permalink": "/en/golang-lambda/"},
    {"title": "Organizing Go Projects with Package Oriented Design", "permalink": "/en/pod/"},
]


def _write_site(tmp_path):
    cfg = tmp_path / "hugo.yaml"
    cfg.write_text(SITE_YAML, encoding="utf-8")
    corpus = tmp_path / "index.json"
    corpus.write_text(json.dumps(RECORDS), encoding="utf-8")
    clear_config_cache()
    return cfg, corpus


def test_smoke(tmp_path, capsys):
    cfg, corpus = _write_site(tmp_path)
    code = main(["golang", "lambda", "--config", str(cfg), "--corpus", str(corpus), "--lang", "en", "--matches"])
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert isinstance(out, list) and out
    assert out[0]["item"]["ref"] == "/en/golang-lambda/"
    assert "score" in out[0] and "matches" in out[0]


def test_smoke_reports_configuration_errors(tmp_path, capsys):
    cfg, corpus = _write_site(tmp_path)
    cfg.write_text(SITE_YAML.replace("threshold: 0.4", "threshold: 4"), encoding="utf-8")
    clear_config_cache()
    assert main(["go", "--config", str(cfg), "--corpus", str(corpus)]) == 1
    assert "threshold" in capsys.readouterr().err


def test_smoke_reports_malformed_language_params(tmp_path, capsys):
    cfg, corpus = _write_site(tmp_path)
    cfg.write_text(SITE_YAML.replace("en: {weight: 2, languageName: English}", "en: {weight: 2, params: [1, 2]}"), encoding="utf-8")
    clear_config_cache()
    assert main(["go", "--config", str(cfg), "--corpus", str(corpus)]) == 1
    assert "params must be a mapping" in capsys.readouterr().err


def test_smoke_unknown_locale_and_missing_file(tmp_path, capsys):
    cfg, corpus = _write_site(tmp_path)
    assert main(["go", "--config", str(cfg), "--corpus", str(corpus), "--lang", "fr"]) == 1
    assert main(["go", "--config", str(cfg), "--corpus", str(tmp_path / "nope.json")]) == 1
    err = capsys.readouterr().err
    assert "fr" in err and "nope.json" in err


def test_smoke_debug_flag(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("SITE_SEARCH_DEBUG_TOPICS", raising=False)
    cfg, corpus = _write_site(tmp_path)
    try:
        assert main(["golang", "--config", str(cfg), "--corpus", str(corpus), "--debug"]) == 0
        assert "[search][DEBUG]" in capsys.readouterr().err
    finally:
        reload_topics()
