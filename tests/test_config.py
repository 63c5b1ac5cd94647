"""Tests de la configuration (.env) et du logging."""

import logging

import pytest

from core import config, logging_config


class TestConfig:
    def test_resolve_log_level_default(self) -> None:
        """Absent -> INFO."""
        assert config.resolve_log_level(None) == "INFO"
        assert config.resolve_log_level("") == "INFO"

    def test_resolve_log_level_by_name(self) -> None:
        """Nom connu, casse libre."""
        assert config.resolve_log_level(" debug ") == "DEBUG"

    def test_resolve_log_level_unknown(self, caplog) -> None:
        """Niveau inconnu -> warning et INFO."""
        with caplog.at_level(logging.WARNING, logger="core.config"):
            assert config.resolve_log_level("verbose") == "INFO"
        assert any("LOG_LEVEL" in rec.getMessage() for rec in caplog.records)

    def test_no_fallback_role_setting(self) -> None:
        """Le rôle de repli n'est pas configurable."""
        assert not hasattr(config, "BASELINE_ROLE")

    @pytest.mark.parametrize("raw, expected", [("1", True), ("YES", True), ("on", True), ("0", False), ("nope", False)])
    def test_env_flag(self, monkeypatch, raw: str, expected: bool) -> None:
        """Valeurs booléennes acceptées."""
        monkeypatch.setenv("SOME_FLAG", raw)
        assert config.env_flag("SOME_FLAG") is expected

    def test_env_flag_default(self, monkeypatch) -> None:
        """Variable absente -> valeur par défaut."""
        monkeypatch.delenv("SOME_FLAG", raising=False)
        assert config.env_flag("SOME_FLAG", default=True) is True
        assert config.env_flag("SOME_FLAG") is False


class TestDeduplicateFilter:
    def _record(self, msg: str, level: int = logging.INFO) -> logging.LogRecord:
        return logging.LogRecord("core.member", level, __file__, 1, msg, None, None)

    def test_drops_repeated_messages(self) -> None:
        """Un message identique n'est émis qu'une fois."""
        f = logging_config.DeduplicateFilter()
        assert f.filter(self._record("Mode +o alice")) is True
        assert f.filter(self._record("Mode +o alice")) is False
        assert f.filter(self._record("Mode +o alice", logging.WARNING)) is True

    def test_limit_resets_memory(self) -> None:
        """Au-delà de la limite, la mémoire est remise à zéro."""
        f = logging_config.DeduplicateFilter(limit=2)
        f.filter(self._record("a"))
        f.filter(self._record("b"))
        f.filter(self._record("c"))
        assert f.filter(self._record("a")) is True


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in handlers:
            root.addHandler(h)
        root.setLevel(level)
        logging_config._INITIALIZED = False

    def test_idempotent(self, monkeypatch) -> None:
        """Deux appels n'empilent pas les handlers ni les filtres."""
        monkeypatch.setattr(config, "LOG_DEDUPLICATE", True)
        logging_config.setup_logging(force=True, level="debug")
        root = logging.getLogger()
        count = len(root.handlers)
        logging_config.setup_logging()
        logging_config.setup_logging(force=False)
        assert len(root.handlers) == count
        assert root.level == logging.DEBUG
        for h in root.handlers:
            assert sum(isinstance(f, logging_config.DeduplicateFilter) for f in h.filters) == 1

    def test_without_deduplication(self, monkeypatch) -> None:
        """LOG_DEDUPLICATE=false : aucun filtre ajouté."""
        monkeypatch.setattr(config, "LOG_DEDUPLICATE", False)
        logging_config.setup_logging(force=True)
        for h in logging.getLogger().handlers:
            assert not any(isinstance(f, logging_config.DeduplicateFilter) for f in h.filters)
