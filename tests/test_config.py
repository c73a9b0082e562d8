"""Tests für Konfiguration, Datenmodelle, Beispielkatalog und CLI."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import default_planner_config, default_scheduler, default_smart
from config.manager import ConfigManager
from config.schema import PlannerConfig, SchedulerConfig, SmartGenerateConfig
from data.sample_catalog import MOCK_COURSES, FakeCatalogGenerator
from models.catalog import Catalog, CatalogError
from models.course import CourseSection
from models.preferences import SmartPreferences
from models.timeslot import DayOfWeek, TimeSlot, parse_day


def _raw_section(sid="1", code="CS101", cls="A", **extra) -> dict:
    entry = {
        "id": sid,
        "code": code,
        "name": "Intro to Programming",
        "sks": 3,
        "class": cls,
        "lecturer": "Dr. Smith",
        "room": "Lab 1",
        "schedule": [{"day": "Mon", "start": "08:00", "end": "10:00"}],
    }
    entry.update(extra)
    return entry


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_scheduler_defaults(self):
        """Grenzen der Aufzählung."""
        sc = default_scheduler()
        assert sc.max_combinations == 5000
        assert sc.max_plans_per_call == 6
        assert (sc.default_plan_limit, sc.expansion_step, sc.expansion_cap) == (12, 12, 36)

    def test_smart_defaults(self):
        """KI: 30 s Cooldown, 3 Varianten, Primär vor Fallback."""
        sm = default_smart()
        assert sm.cooldown_seconds == 30
        assert sm.max_variants == 3
        assert sm.primary.model == "llama-3.3-70b-versatile"
        assert sm.fallback.model == "llama-3.1-8b-instant"

    def test_schema_defaults_match_factory(self):
        """PlannerConfig() ohne Argumente entspricht der Default-Factory."""
        assert PlannerConfig() == default_planner_config()


class TestPydanticValidation:
    def test_plan_limit_above_cap_rejected(self):
        """default_plan_limit > expansion_cap → ValidationError."""
        with pytest.raises(ValidationError):
            SchedulerConfig(default_plan_limit=40, expansion_cap=36)

    def test_max_plans_must_be_positive(self):
        """max_plans_per_call = 0 ist ungültig."""
        with pytest.raises(ValidationError):
            SchedulerConfig(max_plans_per_call=0)

    def test_negative_cooldown_rejected(self):
        """Negativer Cooldown ist ungültig."""
        with pytest.raises(ValidationError):
            SmartGenerateConfig(cooldown_seconds=-1)


class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern und wieder laden."""
        config = default_planner_config().model_copy(update={"university_name": "Test-Uni"})
        mgr = ConfigManager(tmp_path / "planner_config.yaml")
        path = mgr.save(config)
        assert path.exists()
        assert "Kursplaner" in path.read_text(encoding="utf-8")

        loaded = mgr.load()
        assert loaded == config

    def test_first_run_check(self, tmp_path: Path):
        """True ohne Datei, False nach dem Speichern."""
        mgr = ConfigManager(tmp_path / "planner_config.yaml")
        assert mgr.first_run_check() is True
        mgr.save(default_planner_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        """Laden einer nicht-existenten Datei → FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "not_there.yaml").load()

    def test_load_or_default_without_file(self, tmp_path: Path):
        """Ohne Datei → Defaults."""
        mgr = ConfigManager(tmp_path / "not_there.yaml")
        assert mgr.load_or_default() == default_planner_config()

    def test_invalid_file_raises_value_error(self, tmp_path: Path):
        """Ungültige Werte → ValueError mit Pydantic-Details."""
        path = tmp_path / "bad.yaml"
        path.write_text("scheduler:\n  max_plans_per_call: 0\n", encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager(path).load()


# ─── MODELLE ──────────────────────────────────────────────────────────────────

class TestModels:
    def test_day_aliases(self):
        """Englische und indonesische Tagesnamen."""
        assert parse_day("Monday") == DayOfWeek.MON
        assert parse_day("SENIN") == DayOfWeek.MON
        assert parse_day("Jum'at") == DayOfWeek.FRI
        assert parse_day("Kamis") == DayOfWeek.THU
        with pytest.raises(ValueError):
            parse_day("Funday")

    def test_timeslot_normalizes_time(self):
        """H:MM wird zu HH:MM aufgefüllt."""
        slot = TimeSlot(day="Selasa", start="7:30", end="9:10")
        assert slot.day == DayOfWeek.TUE
        assert (slot.start, slot.end) == ("07:30", "09:10")
        assert slot.compact() == "Tue 07:30-09:10"

    def test_timeslot_rejects_bad_input(self):
        """Ende vor Beginn und unmögliche Uhrzeiten."""
        with pytest.raises(ValidationError):
            TimeSlot(day="Mon", start="10:00", end="10:00")
        with pytest.raises(ValidationError):
            TimeSlot(day="Mon", start="24:00", end="25:00")
        with pytest.raises(ValidationError):
            TimeSlot(day="Mon", start="8am", end="10:00")

    def test_section_class_alias(self):
        """Feld "class" im Rohformat → section_class."""
        section = CourseSection.model_validate(_raw_section(cls="B", lecturer="A, B ,"))
        assert section.section_class == "B"
        assert section.lecturers == ["A", "B"]
        assert section.label == "Intro to Programming (B)"

    def test_section_requires_positive_sks(self):
        """SKS muss positiv sein."""
        with pytest.raises(ValidationError):
            CourseSection.model_validate(_raw_section(sks=0))

    def test_preferences_coerce_days(self):
        """Freie Tage werden normalisiert, leere Dozentennamen entfernt."""
        prefs = SmartPreferences(preferred_days_off=["friday", "Sabtu"],
                                 preferred_lecturers=[" Dr. Smith ", ""])
        assert prefs.preferred_days_off == [DayOfWeek.FRI, DayOfWeek.SAT]
        assert prefs.preferred_lecturers == ["Dr. Smith"]

    def test_preferences_single_day_and_none(self):
        """Einzelner Tag wird zur Liste, None zu keiner Angabe."""
        assert SmartPreferences(preferred_days_off="Fri").preferred_days_off == [DayOfWeek.FRI]
        assert SmartPreferences(preferred_days_off=None).preferred_days_off == []


class TestCatalog:
    def test_from_raw_reports_problems(self):
        """Ungültige Einträge verworfen, Duplikate und leere Termine gewarnt."""
        entries = [
            _raw_section("1"),
            "kein Objekt",
            _raw_section("2", sks=0),
            _raw_section("1", cls="B"),
            _raw_section("3", code="ENG102", schedule=[]),
        ]
        catalog, report = Catalog.from_raw(entries)
        assert [s.id for s in catalog.sections] == ["1", "3"]
        assert report.accepted == 2
        assert len(report.errors) == 2
        assert len(report.warnings) == 2
        assert report.is_clean is False

    def test_queries(self):
        """codes, sections_for und by_id."""
        catalog = Catalog(sections=MOCK_COURSES)
        assert catalog.codes() == ["CS101", "MATH201", "ENG102"]
        assert [s.section_class for s in catalog.sections_for("CS101")] == ["A", "B"]
        assert catalog.by_id()["3"].code == "MATH201"
        assert len(catalog) == 4

    def test_filter_by_prodi(self):
        """Studiengangfilter ignoriert Groß-/Kleinschreibung."""
        catalog, _ = Catalog.from_raw([
            _raw_section("1", prodi="Informatika"),
            _raw_section("2", prodi="Matematika"),
            _raw_section("3"),
        ])
        assert [s.id for s in catalog.filter("informatika").sections] == ["1"]
        assert catalog.filter(None) is catalog

    def test_json_roundtrip(self, tmp_path: Path):
        """save_json schreibt "class", load_json liest es wieder ein."""
        path = tmp_path / "catalog.json"
        Catalog(sections=MOCK_COURSES).save_json(path)
        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw[0]["class"] == "A"

        loaded, report = Catalog.load_json(path)
        assert loaded.sections == MOCK_COURSES
        assert report.is_clean

    def test_load_json_wrapped_object(self, tmp_path: Path):
        """{"sections": [...]} wird ebenfalls akzeptiert."""
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"sections": [_raw_section()]}), encoding="utf-8")
        catalog, _ = Catalog.load_json(path)
        assert len(catalog) == 1

    def test_load_json_errors(self, tmp_path: Path):
        """Fehlende Datei, kaputtes JSON, falsche Struktur → CatalogError."""
        with pytest.raises(CatalogError):
            Catalog.load_json(tmp_path / "missing.json")
        broken = tmp_path / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError):
            Catalog.load_json(broken)
        wrong = tmp_path / "wrong.json"
        wrong.write_text('{"courses": 1}', encoding="utf-8")
        with pytest.raises(CatalogError):
            Catalog.load_json(wrong)


# ─── BEISPIELKATALOG ──────────────────────────────────────────────────────────

class TestFakeCatalog:
    def test_reproducible(self):
        """Gleicher Seed → gleicher Katalog."""
        a = FakeCatalogGenerator(seed=7).generate()
        b = FakeCatalogGenerator(seed=7).generate()
        assert a == b

    def test_structure(self):
        """Anzahl Kurse, Gruppen-Labels und Prodi."""
        catalog = FakeCatalogGenerator(seed=1).generate(num_courses=5, max_sections=2)
        assert len(catalog.codes()) == 5
        for section in catalog.sections:
            assert section.id == f"{section.code}-{section.section_class}"
            assert section.section_class in ("A", "B")
            assert section.prodi == "Informatika"
            assert section.schedule

    def test_four_sks_meets_twice(self):
        """4-SKS-Kurse haben zwei Termine an verschiedenen Tagen."""
        catalog = FakeCatalogGenerator(seed=3).generate(num_courses=1)
        for section in catalog.sections_for("IF101"):
            assert len(section.schedule) == 2
            assert section.schedule[0].day != section.schedule[1].day


# ─── CLI ──────────────────────────────────────────────────────────────────────

class TestCli:
    def test_help(self):
        """main.py --help gibt Usage aus."""
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_config_init_and_show(self):
        """config init legt die YAML an, config show liest sie."""
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["config", "init"])
            assert result.exit_code == 0
            assert Path("config/planner_config.yaml").exists()
            result = runner.invoke(cli, ["config", "show"])
            assert result.exit_code == 0
            assert "Universitas Contoh" in result.output

    def test_sample_then_check(self):
        """catalog sample schreibt eine Datei, catalog check akzeptiert sie."""
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["catalog", "sample", "--seed", "5", "-o", "cat.json"])
            assert result.exit_code == 0
            assert Path("cat.json").exists()
            result = runner.invoke(cli, ["catalog", "check", "cat.json"])
            assert result.exit_code == 0

    def test_plan_generate_and_archive(self):
        """plan generate --save legt Pläne im Archiv ab."""
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            Catalog(sections=MOCK_COURSES).save_json(Path("cat.json"))
            result = runner.invoke(
                cli, ["plan", "generate", "cat.json", "CS101", "MATH201", "--save", "u1"]
            )
            assert result.exit_code == 0
            archive = json.loads(Path("output/plans.json").read_text(encoding="utf-8"))
            assert len(archive) == 2
            assert all(entry["owner"] == "u1" for entry in archive.values())

    def test_plan_generate_no_result(self):
        """Kein gültiger Plan → Exit-Code 1."""
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            Catalog(sections=MOCK_COURSES).save_json(Path("cat.json"))
            result = runner.invoke(cli, ["plan", "generate", "cat.json", "NOPE"])
            assert result.exit_code == 1

    def test_smart_without_api_key(self, monkeypatch):
        """plan smart ohne API-Schlüssel bricht mit Exit-Code 2 ab."""
        from click.testing import CliRunner
        from main import cli
        monkeypatch.delenv("GROQ_API_KEY", raising=False)
        runner = CliRunner()
        with runner.isolated_filesystem():
            Catalog(sections=MOCK_COURSES).save_json(Path("cat.json"))
            result = runner.invoke(cli, ["plan", "smart", "cat.json", "CS101", "--caller", "u1"])
            assert result.exit_code == 2

    def test_smart_unreadable_ledger(self, monkeypatch):
        """Kaputte Ledger-Datei → Fehlermeldung und Exit-Code 1 statt Traceback."""
        from types import SimpleNamespace
        from click.testing import CliRunner
        import smart.llm
        from main import cli
        monkeypatch.setattr(
            smart.llm, "build_model_clients",
            lambda config, api_key=None: (SimpleNamespace(name="p"), SimpleNamespace(name="f")),
        )
        runner = CliRunner()
        with runner.isolated_filesystem():
            Catalog(sections=MOCK_COURSES).save_json(Path("cat.json"))
            Path("output").mkdir()
            Path("output/ledger.json").write_text("{abgeschnitten", encoding="utf-8")
            result = runner.invoke(cli, ["plan", "smart", "cat.json", "CS101", "--caller", "u1"])
            assert result.exit_code == 1
            assert not isinstance(result.exception, ValueError)

    def test_archive_delete_unknown(self):
        """Unbekannte Plan-ID → Exit-Code 1."""
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["archive", "delete", "nope", "--caller", "u1"])
            assert result.exit_code == 1
