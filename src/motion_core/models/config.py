"""Local project configuration stored in motion-core.json."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CONFIG_FILENAME = "motion-core.json"
CONFIG_SCHEMA_URL = "https://motion-core.dev/registry/schema/config-schema.json"

_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

AliasName = Literal["components", "helpers", "utils", "assets"]


class AliasEntry(BaseModel):
    """Where one kind of file lives on disk and how it is imported."""

    model_config = _CONFIG

    filesystem: str
    import_path: str = Field(alias="import")


class AliasTable(BaseModel):
    model_config = _CONFIG

    components: AliasEntry
    helpers: AliasEntry
    utils: AliasEntry
    assets: AliasEntry

    def get(self, name: AliasName) -> AliasEntry:
        return getattr(self, name)


class TailwindConfig(BaseModel):
    model_config = _CONFIG

    css: str = "src/app.css"


class AliasPrefixes(BaseModel):
    model_config = _CONFIG

    components: str = "$lib/motion-core"


class BarrelConfig(BaseModel):
    model_config = _CONFIG

    barrel: str = "src/lib/motion-core/index.ts"
    strategy: Literal["named"] = "named"


class ExportsConfig(BaseModel):
    model_config = _CONFIG

    components: BarrelConfig = Field(default_factory=BarrelConfig)


class LocalConfig(BaseModel):
    """Consumer-side configuration.

    The alias table is required; every other section has a default so a
    hand-written config only needs ``aliases``.
    """

    model_config = _CONFIG

    schema_url: str = Field(default=CONFIG_SCHEMA_URL, alias="$schema")
    tailwind: TailwindConfig = Field(default_factory=TailwindConfig)
    aliases: AliasTable
    alias_prefixes: AliasPrefixes = Field(default_factory=AliasPrefixes)
    exports: ExportsConfig = Field(default_factory=ExportsConfig)

    @staticmethod
    def default() -> "LocalConfig":
        """Configuration written by ``motion-core init``."""
        return LocalConfig(
            aliases=AliasTable(
                components=AliasEntry(
                    filesystem="src/lib/motion-core", import_path="$lib/motion-core"
                ),
                helpers=AliasEntry(
                    filesystem="src/lib/motion-core/helpers",
                    import_path="$lib/motion-core/helpers",
                ),
                utils=AliasEntry(
                    filesystem="src/lib/motion-core/utils",
                    import_path="$lib/motion-core/utils",
                ),
                assets=AliasEntry(
                    filesystem="src/lib/motion-core/assets",
                    import_path="$lib/motion-core/assets",
                ),
            )
        )

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
