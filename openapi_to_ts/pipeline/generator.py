"""
Pipeline generator: OpenAPI documents to TypeScript modules.

Runs the resolution driver, the enum naming pass and the backends, and
hands the generated modules to the writer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .analyzer.ir_nodes import ApiMethod, TypeDeclaration
from .analyzer.name_resolver import EnumNameResolver
from .analyzer.resolution import ResolutionDriver
from .backends.api_backend import ApiBackend
from .backends.typescript_backend import TypeScriptBackend
from .config import CodeGeneratorConfig
from .loader import DocumentLoader, FileLoader
from .writer.atomic_writer import AtomicWriter

logger = logging.getLogger(__name__)


@dataclass
class CompiledSchema:
    """The closed, named type graph of a document set."""

    declarations: dict[str, TypeDeclaration] = field(default_factory=dict)
    api_methods: list[ApiMethod] = field(default_factory=list)
    enums: dict[str, list[str]] = field(default_factory=dict)  # Named inline enums


@dataclass
class GeneratedModules:
    """Source of every generated module, keyed by output file name."""

    files: dict[str, str] = field(default_factory=dict)
    used_names: list[str] = field(default_factory=list)  # Names the API module references


class PipelineGenerator:
    """Compiles an entry document and renders the TypeScript modules."""

    def __init__(self, entry_file: str, loader: DocumentLoader, config: CodeGeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            entry_file: Entry document name, as understood by the loader
            loader: Collaborator returning document text by file name
            config: Code generation configuration
        """
        self.entry_file = entry_file
        self.loader = loader
        self.config = config or CodeGeneratorConfig()

    @classmethod
    def from_path(cls, path: str | Path, config: CodeGeneratorConfig | None = None) -> PipelineGenerator:
        """Create a generator reading documents next to `path`."""
        path = Path(path)
        return cls(path.name, FileLoader(path.parent), config)

    def compile(self) -> CompiledSchema:
        """Resolve every document and name every inline enum."""
        declarations, api_methods = ResolutionDriver(self.loader).resolve(self.entry_file)
        enums = EnumNameResolver(declarations).resolve()

        logger.info("Compiled %d types, %d named enums, %d operations", len(declarations), len(enums), len(api_methods))
        return CompiledSchema(declarations=declarations, api_methods=api_methods, enums=enums)

    def generate(self) -> GeneratedModules:
        """
        Compile and render all modules.

        Returns:
            GeneratedModules with the types module and, when enabled, the API module
        """
        compiled = self.compile()
        generation_comment = self._generate_command_comment()
        modules = GeneratedModules()

        type_backend = TypeScriptBackend(self.config, compiled.declarations, compiled.enums)
        modules.files[self.config.types_file_name] = type_backend.generate(generation_comment)

        if self.config.generate_api:
            api_type_backend = TypeScriptBackend(
                self.config,
                compiled.declarations,
                compiled.enums,
                namespace=self.config.namespace,
            )
            api_backend = ApiBackend(self.config, api_type_backend, compiled.api_methods)
            modules.files[self.config.api_file_name] = api_backend.generate(generation_comment)
            modules.used_names = api_type_backend.used_names()

        return modules

    def write(self, output_dir: str | Path, writer: AtomicWriter | None = None) -> GeneratedModules:
        """Generate every module and write it into `output_dir`."""
        # Nothing is written unless compilation succeeds and every target may be written
        modules = self.generate()
        writer = writer or AtomicWriter(self.config.output)

        targets = {Path(output_dir) / file_name: content for file_name, content in modules.files.items()}
        writer.check(list(targets))

        for path, content in targets.items():
            writer.write(path, content)

        return modules

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated file"""
        if not self.config.add_generation_comment:
            return ""

        from .. import __version__
        from ..cli_utils import reconstruct_command_line

        # Reconstruct command line using CLI utilities
        try:
            from ..openapi_to_ts import openapi_to_ts as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            # Fallback if Click command not available
            command_line = "openapi_to_ts"

        return f"// Generated by openapi_to_ts v{__version__} : {command_line}"
