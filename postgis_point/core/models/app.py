"""
App model — the JHipster application this plugin patches.

Loaded from the ``generator-jhipster`` section of ``.yo-rc.json``.  The
descriptor is owned by JHipster; we only read the handful of keys that
decide where generated files live and which database the app targets.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AppConfig(BaseModel):
    """The ``generator-jhipster`` section of ``.yo-rc.json``.

    Unknown keys are ignored; JHipster stores dozens of them.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base_name: str = Field(default="", alias="baseName")
    package_name: str = Field(alias="packageName")
    package_folder: str = Field(default="", alias="packageFolder")
    database_type: str = Field(default="", alias="databaseType")
    dev_database_type: str = Field(default="", alias="devDatabaseType")
    prod_database_type: str = Field(default="", alias="prodDatabaseType")
    jhipster_version: str = Field(default="", alias="jhipsterVersion")

    @property
    def java_package_folder(self) -> str:
        """Package folder, derived from the package name when absent."""
        return self.package_folder or self.package_name.replace(".", "/")

    def uses_postgresql(self) -> bool:
        """True when both dev and prod profiles run on PostgreSQL."""
        return (
            self.database_type == "sql"
            and self.dev_database_type == "postgresql"
            and self.prod_database_type == "postgresql"
        )
