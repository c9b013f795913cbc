"""Registry wire models.

The registry publishes two JSON documents: the index (``registry.json``) and
the asset bundle (``components.json``). Both are validated on parse; payloads
that do not match these shapes are rejected rather than read speculatively.
"""

import base64
import binascii
import json
import re
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from motion_core.core.errors import AssetNotFound, MalformedRegistry

_WIRE_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class FileEntry(BaseModel):
    """One file shipped by a component.

    Attributes:
        path: Registry-relative path, also the key into the asset bundle
        kind: Optional tag such as "entry", "helper" or "asset"
        target: Optional destination override ("helpers", "utils", "assets", "root")
        type_exports: Type names re-exported from the barrel
    """

    model_config = _WIRE_CONFIG

    path: str = Field(min_length=1)
    kind: str | None = None
    target: str | None = None
    type_exports: list[str] = Field(default_factory=list)

    @property
    def is_entry(self) -> bool:
        return self.kind == "entry"

    @property
    def is_svelte(self) -> bool:
        return self.path.rsplit("/", 1)[-1].endswith(".svelte")


class ComponentPreview(BaseModel):
    model_config = _WIRE_CONFIG

    video: str | None = None
    poster: str | None = None


class RegistryComponent(BaseModel):
    """A single installable component.

    ``slug`` is not part of the component record on the wire; it is taken from
    the key under which the record appears in the index.
    """

    model_config = _WIRE_CONFIG

    slug: str
    name: str
    description: str | None = None
    category: str | None = None
    preview: ComponentPreview | None = None
    files: list[FileEntry] = Field(default_factory=list)
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    internal_dependencies: list[str] = Field(default_factory=list)

    @property
    def export_name(self) -> str:
        """PascalCase identifier used for the default export in the barrel."""
        return pascal_case(self.slug)

    def entry_file(self) -> FileEntry | None:
        """File exported from the barrel: kind "entry", else the first .svelte file."""
        for entry in self.files:
            if entry.is_entry:
                return entry
        for entry in self.files:
            if entry.is_svelte:
                return entry
        return None


class RegistryIndex(BaseModel):
    """Top-level registry catalog."""

    model_config = _WIRE_CONFIG

    name: str
    version: str
    description: str | None = None
    min_cli_version: str | None = None
    base_dependencies: dict[str, str] = Field(default_factory=dict)
    base_dev_dependencies: dict[str, str] = Field(default_factory=dict)
    components: dict[str, RegistryComponent] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _inject_slugs(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        components = data.get("components")
        if not isinstance(components, dict):
            return data
        injected = {
            slug: {**record, "slug": slug} if isinstance(record, dict) else record
            for slug, record in components.items()
        }
        return {**data, "components": injected}

    def requires_newer_cli(self, installed_version: str) -> bool:
        """True if the registry declares a minimum CLI version above ``installed_version``."""
        if self.min_cli_version is None:
            return False
        return _version_key(self.min_cli_version) > _version_key(installed_version)


@dataclass(frozen=True)
class AssetBundle:
    """Decoded component file contents keyed by registry-relative path."""

    files: dict[str, bytes]

    def get(self, path: str) -> bytes | None:
        return self.files.get(path)

    def require(self, path: str) -> bytes:
        """Return bytes for path.

        Raises:
            AssetNotFound: If the bundle has no entry for path
        """
        if path not in self.files:
            raise AssetNotFound(path)
        return self.files[path]


_ENCODED_BUNDLE = TypeAdapter(dict[str, str])


def parse_registry_index(payload: bytes, url: str) -> RegistryIndex:
    """Parse and validate a registry index document.

    Raises:
        MalformedRegistry: If the payload is not JSON or does not match the schema
    """
    data = _load_json(payload, url)
    try:
        return RegistryIndex.model_validate(data)
    except ValidationError as e:
        raise MalformedRegistry(url, describe_validation_error(e)) from None


def parse_asset_bundle(payload: bytes, url: str) -> AssetBundle:
    """Parse an asset bundle document, decoding every base64 entry.

    Raises:
        MalformedRegistry: If the payload is not a JSON object of strings or an
            entry is not valid base64
    """
    data = _load_json(payload, url)
    try:
        encoded = _ENCODED_BUNDLE.validate_python(data)
    except ValidationError as e:
        raise MalformedRegistry(url, describe_validation_error(e)) from None

    files: dict[str, bytes] = {}
    for path, value in encoded.items():
        try:
            files[path] = base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise MalformedRegistry(url, f"asset '{path}' is not valid base64 ({e})") from None
    return AssetBundle(files=files)


def describe_validation_error(error: ValidationError) -> str:
    """One-line summary naming the first offending field."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    extra = error.error_count() - 1
    suffix = f" (+{extra} more)" if extra > 0 else ""
    return f"{location}: {first['msg']}{suffix}"


def pascal_case(identifier: str) -> str:
    """Convert "glass-pane" or "glass_pane" to "GlassPane"."""
    segments = [s for s in re.split(r"[^0-9A-Za-z]+", identifier) if s]
    return "".join(s[0].upper() + s[1:] for s in segments)


def _load_json(payload: bytes, url: str) -> Any:
    try:
        return json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedRegistry(url, f"invalid JSON ({e})") from None


def _version_key(version: str) -> tuple[int, ...]:
    core = version.strip().lstrip("v").split("-", 1)[0].split("+", 1)[0]
    parts: list[int] = []
    for piece in core.split("."):
        digits = "".join(ch for ch in piece if ch.isdigit())
        parts.append(int(digits) if digits else 0)
    return tuple(parts)
