"""
Tests for one-time module initialization — support files, patches, hook.
"""

import json
from pathlib import Path

import pytest

from postgis_point.core.models.app import AppConfig
from postgis_point.core.services.generators.module_files import (
    POSTGIS_CHANGELOG_PATH,
    POSTGIS_SQL_PATH,
    dialect_class,
    generate_dialect,
    generate_module_files,
)
from postgis_point.core.services.module_init import (
    HOOK_CALLBACK,
    HOOK_NOTE,
    REGENERATE_COMMAND,
    ModuleInitError,
    initialize_module,
    is_initialized,
    plan_initialization,
    register_hook,
)
from postgis_point.core.services.splicer import MarkerNotFoundError

DIALECT_PATH = "src/main/java/com/example/app/config/PostgresDialect.java"
MASTER_PATH = "src/main/resources/config/liquibase/master.xml"
DEV_PROFILE = "src/main/resources/config/application-dev.yml"
PROD_PROFILE = "src/main/resources/config/application-prod.yml"


class TestModuleFiles:
    def test_dialect_uses_app_package(self, app_config: AppConfig):
        gf = generate_dialect(app_config)
        assert gf.path == DIALECT_PATH
        assert gf.content.startswith("package com.example.app.config;\n")
        assert "extends PostgisDialect" in gf.content
        assert gf.overwrite is False

    def test_dialect_class(self, app_config: AppConfig):
        assert dialect_class(app_config) == "com.example.app.config.PostgresDialect"

    def test_support_files(self, app_config: AppConfig):
        files = {gf.path: gf.content for gf in generate_module_files(app_config)}
        assert list(files) == [DIALECT_PATH, POSTGIS_SQL_PATH, POSTGIS_CHANGELOG_PATH]
        assert "CREATE EXTENSION IF NOT EXISTS postgis" in files[POSTGIS_SQL_PATH]
        assert "postgis.sql" in files[POSTGIS_CHANGELOG_PATH]


class TestInitializeModule:
    def test_fresh_app(self, app_root: Path, app_config: AppConfig):
        assert not is_initialized(app_root, app_config)

        result = initialize_module(app_root, app_config)

        assert result.already_initialized is False
        assert result.created == [DIALECT_PATH, POSTGIS_SQL_PATH, POSTGIS_CHANGELOG_PATH]
        assert sorted(result.patched) == sorted([DEV_PROFILE, PROD_PROFILE, "pom.xml", MASTER_PATH])
        assert result.warnings == []
        assert result.hook_registered is True
        assert is_initialized(app_root, app_config)

    def test_profiles_use_new_dialect(self, app_root: Path, app_config: AppConfig):
        initialize_module(app_root, app_config)
        for rel in (DEV_PROFILE, PROD_PROFILE):
            text = (app_root / rel).read_text()
            assert "database-platform: com.example.app.config.PostgresDialect" in text
            assert "FixedPostgreSQL82Dialect" not in text

    def test_pom_patches(self, app_root: Path, app_config: AppConfig):
        initialize_module(app_root, app_config)
        pom = (app_root / "pom.xml").read_text()
        assert (
            "        <dependency>\n"
            "            <groupId>org.hibernate</groupId>\n"
            "            <artifactId>hibernate-spatial</artifactId>\n"
        ) in pom
        assert pom.index("hibernate-spatial") < pom.index("jhipster-needle-maven-add-dependency")
        assert (
            "<changeLogFile>src/main/resources/config/liquibase/master.xml</changeLogFile>\n"
            "                    <diffExcludeObjects>geography_columns, geometry_columns"
        ) in pom

    def test_master_includes_postgis_after_initial_schema(self, app_root: Path, app_config: AppConfig):
        initialize_module(app_root, app_config)
        master = (app_root / MASTER_PATH).read_text()
        initial = master.index("00000000000000_initial_schema.xml")
        postgis = master.index('<include file="config/liquibase/changelog/postgis.xml"')
        delivery = master.index("_added_entity_Delivery.xml")
        assert initial < postgis < delivery

    def test_second_run_changes_nothing(self, app_root: Path, app_config: AppConfig):
        initialize_module(app_root, app_config)
        snapshot = {
            p: p.read_bytes() for p in app_root.rglob("*") if p.is_file()
        }

        result = initialize_module(app_root, app_config)

        assert result.already_initialized is True
        assert result.created == []
        assert result.patched == []
        assert result.hook_registered is False
        assert {p: p.read_bytes() for p in app_root.rglob("*") if p.is_file()} == snapshot

    def test_existing_dialect_is_kept(self, app_root: Path, app_config: AppConfig):
        dialect = app_root / DIALECT_PATH
        dialect.parent.mkdir(parents=True)
        dialect.write_text("// customized\n")
        result = initialize_module(app_root, app_config)
        assert DIALECT_PATH not in result.created
        assert dialect.read_text() == "// customized\n"

    def test_missing_profile_is_a_warning(self, app_root: Path, app_config: AppConfig):
        (app_root / PROD_PROFILE).unlink()
        result = initialize_module(app_root, app_config)
        assert any("application-prod.yml not found" in w for w in result.warnings)
        assert DEV_PROFILE in result.patched

    def test_profile_without_default_dialect_warns(self, app_root: Path, app_config: AppConfig):
        (app_root / DEV_PROFILE).write_text("spring:\n    jpa:\n        database-platform: other.Dialect\n")
        result = initialize_module(app_root, app_config)
        assert any("no io.github.jhipster.domain.util.FixedPostgreSQL82Dialect" in w
                   for w in result.warnings)
        assert DEV_PROFILE not in result.patched

    def test_pom_without_changelog_file_warns(self, app_root: Path, app_config: AppConfig):
        pom = app_root / "pom.xml"
        pom.write_text(pom.read_text().replace("<changeLogFile>", "<changeLog>"))
        result = initialize_module(app_root, app_config)
        assert any("liquibase:diff" in w for w in result.warnings)
        assert "hibernate-spatial" in pom.read_text()

    def test_missing_pom(self, app_root: Path, app_config: AppConfig):
        (app_root / "pom.xml").unlink()
        with pytest.raises(ModuleInitError, match="File not found: pom.xml"):
            initialize_module(app_root, app_config)
        assert not is_initialized(app_root, app_config)

    def test_missing_needle_writes_nothing(self, app_root: Path, app_config: AppConfig):
        pom = app_root / "pom.xml"
        pom.write_text(pom.read_text().replace("jhipster-needle-maven-add-dependency", "x"))
        dev = (app_root / DEV_PROFILE).read_text()

        with pytest.raises(MarkerNotFoundError) as exc:
            plan_initialization(app_root, app_config)
        assert exc.value.target == "pom.xml"

        with pytest.raises(MarkerNotFoundError):
            initialize_module(app_root, app_config)
        assert not is_initialized(app_root, app_config)
        assert (app_root / DEV_PROFILE).read_text() == dev


class TestRegisterHook:
    def test_creates_hooks_file(self, app_root: Path):
        assert register_hook(app_root) is True
        hooks = json.loads((app_root / ".jhipster/modules/jhi-hooks.json").read_text())
        assert len(hooks) == 1
        assert hooks[0]["hookFor"] == "entity"
        assert hooks[0]["hookType"] == "post"
        assert hooks[0]["generatorCallback"] == HOOK_CALLBACK

    def test_keeps_other_hooks(self, app_root: Path):
        path = app_root / ".jhipster/modules/jhi-hooks.json"
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps([{"npmPackageName": "other", "hookFor": "entity"}]))
        register_hook(app_root)
        hooks = json.loads(path.read_text())
        assert [h["npmPackageName"] for h in hooks] == ["other", "generator-jhipster-entity-postgis-point"]

    def test_registers_once(self, app_root: Path):
        register_hook(app_root)
        assert register_hook(app_root) is False

    def test_broken_hooks_file_is_a_warning(self, app_root: Path, app_config: AppConfig):
        path = app_root / ".jhipster/modules/jhi-hooks.json"
        path.parent.mkdir(parents=True)
        path.write_text("{}")
        result = initialize_module(app_root, app_config)
        assert result.hook_registered is False
        assert any("post entity creation hook" in w for w in result.warnings)
        assert is_initialized(app_root, app_config)

    def test_hook_points_at_npm_generator(self, app_root: Path, app_config: AppConfig):
        result = initialize_module(app_root, app_config)
        hooks = json.loads((app_root / ".jhipster/modules/jhi-hooks.json").read_text())
        assert hooks[0]["generatorCallback"] == "generator-jhipster-entity-postgis-point:entity"
        assert result.hook_note == HOOK_NOTE
        assert "postgis-point entity <Entity> --regenerate" in result.hook_note
        assert REGENERATE_COMMAND.format(entity="Delivery") == "postgis-point entity Delivery --regenerate"
