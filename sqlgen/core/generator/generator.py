"""
Code Generator for sqlgen.

Runs one generation pass over a CodeGenRequest and returns the
descriptors an emitter needs: enums, table structs and queries.
"""

import logging
from dataclasses import dataclass

from sqlgen.config.settings import GeneratorSettings, get_generator_settings
from sqlgen.core.catalog.models import CodeGenRequest, Settings
from sqlgen.core.model_builder.dedup import StructDeduplicator
from sqlgen.core.model_builder.enums import EnumBuilder
from sqlgen.core.model_builder.models import Enum, Struct
from sqlgen.core.model_builder.structs import StructBuilder
from sqlgen.core.query_compiler.compiler import CodegenError, QueryCompiler
from sqlgen.core.query_compiler.models import Query
from sqlgen.core.types.resolver import get_type_resolver

logger = logging.getLogger(__name__)

GENERATED_BY = "Code generated by sqlgen. DO NOT EDIT."


def generated_header(version: str) -> tuple[str, ...]:
    """Header lines every generated file starts with (comment markers excluded)."""
    return (GENERATED_BY, "versions:", f"  sqlgen {version}")


@dataclass(frozen=True)
class GenerationResult:
    """Everything an emitter renders for one request."""

    enums: tuple[Enum, ...]
    structs: tuple[Struct, ...]
    queries: tuple[Query, ...]
    header: tuple[str, ...]
    settings: Settings

    def newly_emitted_structs(self) -> list[Struct]:
        """Query-specific result structs, in query order."""
        return [q.ret.struct for q in self.queries if q.ret.emit_struct]


class CodeGenerator:
    """
    Builds descriptors for a CodeGenRequest.

    The type resolver is chosen once per run; enums, table structs and
    queries are then built in that order. The same request always yields
    an equal GenerationResult.
    """

    def __init__(self, settings: GeneratorSettings | None = None):
        """
        Initialize the generator.

        Args:
            settings: Process-level defaults.
                     Uses get_generator_settings() if not provided.
        """
        self._settings = settings or get_generator_settings()

    def generate(self, request: CodeGenRequest) -> GenerationResult:
        """
        Generate descriptors for the request.

        Args:
            request: Catalog, queries and settings to generate from.

        Returns:
            The GenerationResult.

        Raises:
            CodegenError: If any query cannot be generated.
        """
        settings = self._effective_settings(request.settings)
        catalog = request.catalog
        resolver = get_type_resolver(catalog, settings)

        enums = EnumBuilder(catalog, settings).build()

        struct_builder = StructBuilder(catalog, settings, resolver)
        declared = struct_builder.build_declared()
        structs = sorted(declared, key=lambda s: s.name)

        deduplicator = StructDeduplicator(
            declared, resolver, catalog.default_schema, settings.rename
        )
        compiler = QueryCompiler(settings, resolver, deduplicator)
        try:
            queries = compiler.compile(request.queries)
        except CodegenError as e:
            logger.error("Generation failed: %s", e)
            raise

        logger.info(
            "Generated %d enums, %d structs, %d queries for %s",
            len(enums),
            len(structs),
            len(queries),
            settings.engine,
        )

        return GenerationResult(
            enums=tuple(enums),
            structs=tuple(structs),
            queries=tuple(queries),
            header=generated_header(request.version or self._settings.version),
            settings=settings,
        )

    def _effective_settings(self, settings: Settings) -> Settings:
        if settings.engine:
            return settings
        return settings.model_copy(update={"engine": self._settings.default_engine})
