"""Pipeline orchestration: contract -> code model -> source -> file."""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple

from .codegen import ApiModel, ApiModelBuilder, CodeEmitter, DeclaredTypeRegistry
from .config import GeneratorConfig
from .introspect import load_contract, parse_yaml_contract
from .logging import get_logger
from .models import ContractMetadata, TypeDescriptor
from .source_scanner import scan_declared_types, scan_declared_types_file
from .writer import write_output


@dataclass
class GenerationOutcome:
    """Result of a generation run."""

    path: Path
    text: str
    diff: str
    declared_types: Tuple[TypeDescriptor, ...]
    written: bool


def generate_source(
    metadata: ContractMetadata,
    namespace: str,
    class_name: str,
    *,
    existing: Iterable[str] = (),
    builder: ApiModelBuilder | None = None,
    emitter: CodeEmitter | None = None,
) -> Tuple[ApiModel, str]:
    """Build the model for ``metadata`` and return it with its emitted text."""
    registry = DeclaredTypeRegistry(existing)
    model = (builder or ApiModelBuilder()).build(metadata, namespace, class_name, registry)
    return model, (emitter or CodeEmitter()).emit(model)


def generate_from_text(
    contract_text: str,
    namespace: str,
    class_name: str,
    *,
    prior_source: str | None = None,
) -> Tuple[ApiModel, str]:
    """Generate from an in-memory YAML contract and optional prior output."""
    metadata = parse_yaml_contract(contract_text)
    existing = scan_declared_types(prior_source, namespace) if prior_source else set()
    return generate_source(metadata, namespace, class_name, existing=existing)


class Generator:
    """Coordinates the collaborators around the code-generation core."""

    def __init__(
        self,
        contract_loader: Callable[[str], ContractMetadata] = load_contract,
        emitter: CodeEmitter | None = None,
        writer: Callable[[Path, str], Path] = write_output,
    ) -> None:
        self.contract_loader = contract_loader
        self.emitter = emitter or CodeEmitter()
        self.writer = writer
        self.logger = get_logger("generator")

    def run(self, config: GeneratorConfig, *, dry_run: bool = False) -> GenerationOutcome:
        target = config.target_file_path
        self.logger.info(
            "Generating %s.%s from %s",
            config.target_namespace,
            config.target_class_name,
            config.contract_source,
        )
        metadata = self.contract_loader(config.contract_source)
        self.logger.debug("Contract exposes %d types", len(metadata.types))

        existing: set[str] = set()
        if config.type_source_path is not None:
            if config.type_source_path.resolve() == target.resolve():
                self.logger.warning(
                    "type_source_path is the output file; types found there will not be redeclared"
                )
            existing = scan_declared_types_file(config.type_source_path, config.target_namespace)
            self.logger.debug("Found %d prior declarations", len(existing))

        builder = ApiModelBuilder(
            connection_property=config.connection_property,
            visibility=config.member_visibility,
            client_suffix=config.client_method_suffix,
        )
        model, text = generate_source(
            metadata,
            config.target_namespace,
            config.target_class_name,
            existing=existing,
            builder=builder,
            emitter=self.emitter,
        )
        self.logger.info(
            "Model has %d methods and %d new declarations",
            len(model.methods),
            len(model.declarations),
        )

        previous = _read_existing(target)
        diff = _unified_diff(previous or "", text, target)
        if previous == text:
            self.logger.info("%s already up to date", target)
            return GenerationOutcome(target, text, "", model.declared_types, written=False)
        if dry_run:
            return GenerationOutcome(target, text, diff, model.declared_types, written=False)

        self.writer(target, text)
        self.logger.info("Wrote %s", target)
        return GenerationOutcome(target, text, diff, model.declared_types, written=True)


def _read_existing(path: Path) -> Optional[str]:
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def _unified_diff(before: str, after: str, path: Path) -> str:
    lines = difflib.unified_diff(
        before.splitlines(keepends=True),
        after.splitlines(keepends=True),
        fromfile=f"a/{path.name}",
        tofile=f"b/{path.name}",
    )
    return "".join(lines)


__all__ = ["GenerationOutcome", "Generator", "generate_from_text", "generate_source"]
