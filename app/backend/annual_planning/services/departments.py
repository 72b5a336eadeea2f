"""Department identity resolution and main-department classification."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from annual_planning.core.config import DEFAULT_EXCLUDED_DEPARTMENTS, DEFAULT_EXCLUDED_KEYWORDS, Settings

PRIMARY_NAME_FIELD = "department_name"
ALTERNATE_NAME_FIELDS = ("department", "responsible_department")
DEPARTMENT_ID_FIELD = "department_id"


@dataclass(frozen=True, slots=True)
class DepartmentTaxonomy:
    """Exact-match exclusions plus substring denylist for non-reportable units."""

    excluded_names: tuple[str, ...] = tuple(DEFAULT_EXCLUDED_DEPARTMENTS)
    excluded_keywords: tuple[str, ...] = tuple(DEFAULT_EXCLUDED_KEYWORDS)

    @classmethod
    def from_settings(cls, settings: Settings) -> DepartmentTaxonomy:
        return cls(
            excluded_names=tuple(name.strip() for name in settings.department_excluded_names if name.strip()),
            excluded_keywords=tuple(
                keyword.strip() for keyword in settings.department_excluded_keywords if keyword.strip()
            ),
        )

    def is_main(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        trimmed = name.strip()
        if not trimmed:
            return False
        if trimmed in self.excluded_names:
            return False
        return not any(keyword in trimmed for keyword in self.excluded_keywords)


DEFAULT_TAXONOMY = DepartmentTaxonomy()


def is_main_department(name: object, taxonomy: DepartmentTaxonomy = DEFAULT_TAXONOMY) -> bool:
    """Return True when ``name`` is a reportable business unit."""

    return taxonomy.is_main(name)


def _clean_name(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _id_key(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    key = str(value).strip()
    return key or None


def build_department_map(departments: Iterable[Mapping[str, Any]]) -> dict[str, str]:
    """Map department id (as string) to trimmed display name."""

    department_map: dict[str, str] = {}
    for row in departments:
        if not isinstance(row, Mapping):
            continue
        key = _id_key(row.get("id"))
        name = _clean_name(row.get("name"))
        if key is not None and name is not None:
            department_map[key] = name
    return department_map


def resolve_department_name(record: Mapping[str, Any], department_map: Mapping[str, str]) -> str | None:
    """Resolve the display name of a record's department.

    Priority: explicit ``department_name``, then the alternate name fields,
    then ``department_id`` looked up in ``department_map``.
    """

    if not isinstance(record, Mapping):
        return None

    name = _clean_name(record.get(PRIMARY_NAME_FIELD))
    if name is not None:
        return name

    for field in ALTERNATE_NAME_FIELDS:
        name = _clean_name(record.get(field))
        if name is not None:
            return name

    key = _id_key(record.get(DEPARTMENT_ID_FIELD))
    if key is None:
        return None
    return _clean_name(department_map.get(key))


def collect_main_departments(
    collections: Iterable[Iterable[Mapping[str, Any]]],
    departments: Iterable[Mapping[str, Any]],
    department_map: Mapping[str, str],
    taxonomy: DepartmentTaxonomy = DEFAULT_TAXONOMY,
) -> list[str]:
    """Union of main departments seen in the records and in the taxonomy, sorted."""

    names: set[str] = set()
    for records in collections:
        for record in records:
            name = resolve_department_name(record, department_map)
            if name is not None and taxonomy.is_main(name):
                names.add(name)

    for row in departments:
        if not isinstance(row, Mapping):
            continue
        name = _clean_name(row.get("name"))
        if name is not None and taxonomy.is_main(name):
            names.add(name)

    return sorted(names)
