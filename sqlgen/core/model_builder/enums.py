"""Enum Builder for sqlgen."""

import logging

from sqlgen.core.catalog.models import Catalog, Settings
from sqlgen.core.model_builder.models import Constant, Enum
from sqlgen.core.naming.identifiers import (
    data_class_name,
    enum_value_name,
    qualified_name,
)

logger = logging.getLogger(__name__)


class EnumBuilder:
    """
    Builds one enum description per catalog enum type.

    Constants keep the raw database value; the identifier is only a
    reference name. Colliding identifiers are kept as-is.
    """

    def __init__(self, catalog: Catalog, settings: Settings):
        self._catalog = catalog
        self._settings = settings

    def build(self) -> list[Enum]:
        """Enums sorted by name."""
        enums: list[Enum] = []
        for schema in self._catalog.user_schemas():
            for enum_type in schema.enums:
                name = data_class_name(
                    qualified_name(
                        schema.name, enum_type.name, self._catalog.default_schema
                    ),
                    self._settings.rename,
                )
                constants = tuple(
                    Constant(name=enum_value_name(value), value=value, type=name)
                    for value in enum_type.vals
                )
                self._warn_collisions(name, constants)
                enums.append(
                    Enum(name=name, constants=constants, comment=enum_type.comment)
                )

        return sorted(enums, key=lambda e: e.name)

    def _warn_collisions(self, enum_name: str, constants: tuple[Constant, ...]) -> None:
        seen: set[str] = set()
        for constant in constants:
            if constant.name in seen:
                logger.warning(
                    "Enum %s has more than one constant named %s",
                    enum_name,
                    constant.name,
                )
            seen.add(constant.name)
